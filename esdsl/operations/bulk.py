"""Bulk document mutations sent as newline-delimited JSON.

Each action is one metadata line; index, create and update actions are
followed by a payload line. Every line ends with ``\\n``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from esdsl.exceptions import DecodeError, UsageError
from esdsl.operations.common import Options, VersionType, url_option
from esdsl.units import Duration
from esdsl.wire import JsonVal, check, dumps, internal, opt, option, optional, require, serialize_fields, to_json

if TYPE_CHECKING:
    from esdsl.client import Client

logger = logging.getLogger(__name__)


class ActionType(str, Enum):
    INDEX = "index"
    CREATE = "create"
    DELETE = "delete"
    UPDATE = "update"


@dataclass
class ActionSource:
    """Payload of an update action: a partial document or a script."""

    doc: dict[str, Any] | None = opt()
    upsert: dict[str, Any] | None = opt()
    doc_as_upsert: bool | None = opt()
    script: str | None = opt()
    params: dict[str, JsonVal] | None = opt()
    lang: str | None = opt()

    with_doc = option("doc")
    with_upsert = option("upsert")
    with_doc_as_upsert = option("doc_as_upsert")
    with_script = option("script")
    with_params = option("params")
    with_lang = option("lang")

    def to_json(self) -> dict[str, Any]:
        return serialize_fields(self)


@dataclass
class Action:
    """One bulk action; create with :meth:`index`, :meth:`create`, :meth:`delete` or :meth:`update`."""

    action: ActionType = internal(ActionType.INDEX)
    index: str | None = opt("_index")
    doc_type: str | None = opt("_type")
    id: str | None = opt("_id")
    version: int | None = opt("_version")
    version_type: VersionType | None = opt("_version_type")
    routing: str | None = opt("_routing")
    parent: str | None = opt("_parent")
    timestamp: str | None = opt("_timestamp")
    ttl: Duration | None = opt("_ttl")
    retry_on_conflict: int | None = opt("_retry_on_conflict")
    source: Any = internal()

    with_index = option("index")
    with_doc_type = option("doc_type")
    with_id = option("id")
    with_version = option("version")
    with_version_type = option("version_type")
    with_routing = option("routing")
    with_parent = option("parent")
    with_timestamp = option("timestamp")
    with_ttl = option("ttl")
    with_retry_on_conflict = option("retry_on_conflict")

    @classmethod
    def index_doc(cls, document: Any) -> Action:
        return cls(ActionType.INDEX, source=to_json(document))

    @classmethod
    def create(cls, document: Any) -> Action:
        return cls(ActionType.CREATE, source=to_json(document))

    @classmethod
    def delete(cls, id: str) -> Action:
        return cls(ActionType.DELETE, id=id)

    @classmethod
    def update(cls, id: str, update: ActionSource) -> Action:
        return cls(ActionType.UPDATE, id=id, source=update.to_json())

    def to_json(self) -> dict[str, Any]:
        return {ActionType(self.action).value: serialize_fields(self)}

    def to_ndjson(self) -> str:
        """Render the metadata line and, for non-delete actions, the payload line."""
        lines = dumps(self.to_json()) + "\n"
        if self.action != ActionType.DELETE:
            if self.source is None:
                raise UsageError(f"Bulk {ActionType(self.action).value} action needs a document")
            lines += dumps(self.source) + "\n"
        return lines


@dataclass
class ActionResult:
    action: ActionType
    index: str
    doc_type: str
    id: str
    status: int
    version: int | None = None
    error: Any = None

    @classmethod
    def from_json(cls, data: Any, path: str) -> ActionResult:
        check(data, dict, path)
        if len(data) != 1:
            raise DecodeError(path, "object with one action key", f"got {len(data)} keys")
        key, inner = next(iter(data.items()))
        try:
            action = ActionType(key)
        except ValueError:
            raise DecodeError(path, "bulk action", f"unknown action '{key}'") from None
        where = f"{path}.{key}"
        return cls(
            action=action,
            index=require(inner, "_index", str, where),
            doc_type=require(inner, "_type", str, where),
            id=require(inner, "_id", str, where),
            status=require(inner, "status", int, where),
            version=optional(inner, "_version", int, where),
            error=inner.get("error"),
        )


@dataclass
class BulkResult:
    errors: bool
    took: int
    items: list[ActionResult]

    @classmethod
    def from_json(cls, data: Any) -> BulkResult:
        items = require(data, "items", list)
        return cls(
            errors=require(data, "errors", bool),
            took=require(data, "took", int),
            items=[ActionResult.from_json(item, f"items[{i}]") for i, item in enumerate(items)],
        )


def format_actions(actions: list[Action]) -> str:
    return "".join(action.to_ndjson() for action in actions)


class BulkOperation:
    """Send many actions in one request.

    ``with_index``/``with_doc_type`` set defaults for actions that do not
    name their own.
    """

    def __init__(self, client: Client, actions: list[Action]) -> None:
        self.client = client
        self.actions = actions
        self.index: str | None = None
        self.doc_type: str | None = None
        self.options = Options()

    def with_index(self, index: str) -> BulkOperation:
        self.index = index
        return self

    def with_doc_type(self, doc_type: str) -> BulkOperation:
        self.doc_type = doc_type
        return self

    with_consistency = url_option("consistency")
    with_refresh = url_option("refresh")

    def _path(self) -> str:
        parts = [p for p in (self.index, self.doc_type) if p]
        prefix = "".join(f"/{p}" for p in parts)
        return f"{prefix}/_bulk{self.options.to_query_string()}"

    def send(self) -> BulkResult:
        if not self.actions:
            raise UsageError("Bulk operation needs at least one action")
        _, payload = self.client.request("POST", self._path(), format_actions(self.actions), ok=(200,))
        result = BulkResult.from_json(payload)
        if result.errors:
            logger.warning("Bulk request reported errors for some of its %d actions", len(result.items))
        return result
