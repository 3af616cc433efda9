"""Index a single document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from esdsl.operations.common import Options, url_option
from esdsl.wire import optional, require, to_json

if TYPE_CHECKING:
    from esdsl.client import Client

logger = logging.getLogger(__name__)


@dataclass
class IndexResult:
    index: str
    doc_type: str
    id: str
    version: int
    created: bool

    @classmethod
    def from_json(cls, data: Any) -> IndexResult:
        return cls(
            index=require(data, "_index", str),
            doc_type=require(data, "_type", str),
            id=require(data, "_id", str),
            version=require(data, "_version", int),
            created=optional(data, "created", bool) or False,
        )


class IndexOperation:
    """Store a document, under a given id or one the server assigns.

    Example::

        result = client.index("books", "book").with_id("1").with_doc({"title": "Dune"}).send()
    """

    def __init__(self, client: Client, index: str, doc_type: str) -> None:
        self.client = client
        self.index = index
        self.doc_type = doc_type
        self.id: str | None = None
        self.document: Any = None
        self.options = Options()

    def with_doc(self, document: Any) -> IndexOperation:
        self.document = to_json(document)
        return self

    def with_id(self, id: str) -> IndexOperation:
        self.id = id
        return self

    with_ttl = url_option("ttl")
    with_version = url_option("version")
    with_version_type = url_option("version_type")
    with_op_type = url_option("op_type")
    with_routing = url_option("routing")
    with_parent = url_option("parent")
    with_timestamp = url_option("timestamp")
    with_refresh = url_option("refresh")
    with_timeout = url_option("timeout")

    def send(self) -> IndexResult:
        query = self.options.to_query_string()
        if self.id is not None:
            _, payload = self.client.request("PUT", f"/{self.index}/{self.doc_type}/{self.id}{query}", self.document)
        else:
            _, payload = self.client.request("POST", f"/{self.index}/{self.doc_type}{query}", self.document)
        result = IndexResult.from_json(payload)
        logger.debug("Indexed %s/%s/%s version %d", result.index, result.doc_type, result.id, result.version)
        return result
