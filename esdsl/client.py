"""Client handle and HTTP transport.

The :class:`Client` turns operations into ``(method, path, body)`` calls on
a :class:`Transport` and checks the response status. The default transport
sends them with a ``requests`` session; tests substitute a fake.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol
from urllib.parse import unquote, urlsplit

import requests

from esdsl import __version__
from esdsl.exceptions import DecodeError, InvalidUrlError, ServerError, TransportError
from esdsl.operations.analyze import AnalyzeOperation
from esdsl.operations.bulk import Action, BulkOperation
from esdsl.operations.common import (
    GenericResult,
    format_indexes_and_types,
    format_multi,
    format_query_string,
)
from esdsl.operations.delete import DeleteByQueryOperation, DeleteOperation
from esdsl.operations.get import GetOperation
from esdsl.operations.index import IndexOperation
from esdsl.operations.mapping import MappingOperation
from esdsl.operations.refresh import RefreshOperation
from esdsl.operations.version import VersionOperation, VersionResult
from esdsl.search.count import CountQueryOperation, CountURIOperation
from esdsl.search.request import SearchQueryOperation, SearchURIOperation
from esdsl.wire import dumps

if TYPE_CHECKING:
    from esdsl.config import Config

logger = logging.getLogger(__name__)

_USER_AGENT = f"esdsl/{__version__}"
_SUCCESS = frozenset({200, 201})

__all__ = [
    "Client",
    "RequestsTransport",
    "Transport",
    "format_indexes_and_types",
    "format_multi",
    "format_query_string",
]


class Transport(Protocol):
    """Sends one request and returns the status and decoded JSON body.

    ``path`` is relative to the server root and includes any query string.
    ``body`` is JSON-compatible data, raw text (bulk NDJSON or analyzer input), or ``None``.
    Implementations raise :class:`TransportError` when no response was
    received and :class:`DecodeError` when the body is not JSON.
    """

    def do_op(self, method: str, path: str, body: Any | None = None) -> tuple[int, Any | None]: ...


class RequestsTransport:
    """Transport backed by a ``requests.Session``.

    Args:
        base_url: Scheme, host and port, e.g. ``http://localhost:9200``.
        auth: Optional ``(user, password)`` sent as HTTP basic auth.
        timeout: Per-request timeout in seconds.
        verify_tls: Verify server certificates for https.
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth: tuple[str, str] | None = None,
        timeout: float | None = None,
        verify_tls: bool = True,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT})
        self._session.verify = verify_tls
        if auth is not None:
            self._session.auth = auth

    def do_op(self, method: str, path: str, body: Any | None = None) -> tuple[int, Any | None]:
        url = f"{self.base_url}{path}"
        kwargs: dict[str, Any] = {"timeout": self.timeout}
        if isinstance(body, str):
            # Bulk bodies are newline-terminated NDJSON; other text goes as-is.
            content_type = "application/x-ndjson" if body.endswith("\n") else "text/plain; charset=utf-8"
            kwargs["data"] = body.encode("utf-8")
            kwargs["headers"] = {"Content-Type": content_type}
        elif body is not None:
            kwargs["data"] = dumps(body).encode("utf-8")
            kwargs["headers"] = {"Content-Type": "application/json"}

        try:
            resp = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(method, path, str(e)) from e

        if not resp.content:
            return resp.status_code, None
        try:
            return resp.status_code, resp.json()
        except ValueError as e:
            raise DecodeError("<body>", "JSON", str(e)) from e

    def close(self) -> None:
        self._session.close()


def _parse_url(url: str) -> tuple[str, str, tuple[str, str] | None]:
    """Split a base URL into origin, path prefix and credentials."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise InvalidUrlError(url, str(e)) from e
    if parts.scheme not in ("http", "https"):
        raise InvalidUrlError(url, "scheme must be http or https")
    if not parts.hostname:
        raise InvalidUrlError(url, "missing host")

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    origin = f"{parts.scheme}://{host}" + (f":{port}" if port else "")
    auth = None
    if parts.username is not None:
        auth = (unquote(parts.username), unquote(parts.password or ""))
    return origin, parts.path.rstrip("/"), auth


class Client:
    """Handle on one search server.

    Operations are created with the factory methods below and run with
    their ``send()``. Each request blocks until the transport answers.

    Args:
        url: Base URL; may carry ``user:password@`` and a path prefix.
        timeout: Per-request timeout in seconds for the default transport.
        transport: Transport to use instead of :class:`RequestsTransport`.
        verify_tls: Verify server certificates for the default transport.

    Raises:
        InvalidUrlError: If the URL is not an http(s) URL with a host.

    Example::

        client = Client("http://localhost:9200")
        result = client.search_query().with_indexes(["books"]).with_query(query).send()
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = None,
        transport: Transport | None = None,
        verify_tls: bool = True,
    ) -> None:
        origin, self.path_prefix, auth = _parse_url(url)
        self.url = url
        if transport is None:
            transport = RequestsTransport(origin, auth=auth, timeout=timeout, verify_tls=verify_tls)
        self.transport = transport

    @classmethod
    def from_config(cls, config: Config, transport: Transport | None = None) -> Client:
        return cls(config.url, timeout=config.timeout, transport=transport, verify_tls=config.verify_tls)

    def request(
        self,
        method: str,
        path: str,
        body: Any | None = None,
        *,
        ok: Iterable[int] = _SUCCESS,
    ) -> tuple[int, Any | None]:
        """Send a request and check its status.

        Args:
            method: HTTP method.
            path: Path below the base URL, starting with ``/``.
            body: JSON-compatible body, raw text, or None.
            ok: Statuses accepted as success.

        Returns:
            Tuple of (status, decoded body).

        Raises:
            ServerError: If the status is not in ``ok``.
        """
        full_path = f"{self.path_prefix}{path}"
        logger.debug("%s %s", method, full_path)
        status, payload = self.transport.do_op(method, full_path, body)
        logger.debug("%s %s -> %d", method, full_path, status)
        if status not in ok:
            raise ServerError(status, payload)
        return status, payload

    # Operations

    def version(self) -> str:
        """Return the server's version number."""
        return self.version_info().version.number

    def version_info(self) -> VersionResult:
        return VersionOperation(self).send()

    def index(self, index: str, doc_type: str) -> IndexOperation:
        return IndexOperation(self, index, doc_type)

    def get(self, index: str, id: str) -> GetOperation:
        return GetOperation(self, index, id)

    def delete(self, index: str, doc_type: str, id: str) -> DeleteOperation:
        return DeleteOperation(self, index, doc_type, id)

    def delete_by_query(self) -> DeleteByQueryOperation:
        return DeleteByQueryOperation(self)

    def bulk(self, actions: list[Action]) -> BulkOperation:
        return BulkOperation(self, actions)

    def refresh(self) -> RefreshOperation:
        return RefreshOperation(self)

    def analyze(self, text: str) -> AnalyzeOperation:
        return AnalyzeOperation(self, text)

    def mapping(self, index: str) -> MappingOperation:
        return MappingOperation(self, index)

    def search_uri(self) -> SearchURIOperation:
        return SearchURIOperation(self)

    def search_query(self) -> SearchQueryOperation:
        return SearchQueryOperation(self)

    def count_uri(self) -> CountURIOperation:
        return CountURIOperation(self)

    def count_query(self) -> CountQueryOperation:
        return CountQueryOperation(self)

    # Index management

    def delete_index(self, index: str) -> GenericResult:
        _, payload = self.request("DELETE", f"/{index}/")
        return GenericResult.from_json(payload)

    def open_index(self, index: str) -> GenericResult:
        _, payload = self.request("POST", f"/{index}/_open", ok=(200,))
        return GenericResult.from_json(payload)

    def close_index(self, index: str) -> GenericResult:
        _, payload = self.request("POST", f"/{index}/_close", ok=(200,))
        return GenericResult.from_json(payload)

    def wait_for_status(self, status: str, timeout: str = "5s") -> None:
        """Block until cluster health reaches ``status`` or ``timeout`` passes on the server."""
        query = format_query_string([("wait_for_status", status), ("timeout", timeout)])
        self.request("GET", f"/_cluster/health{query}", ok=(200,))

