"""Delete a document by id, or every document matching a query."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from esdsl.exceptions import UsageError
from esdsl.operations.common import Options, ShardCountResult, format_indexes_and_types, url_option
from esdsl.query.common import Query, QueryBuilder
from esdsl.wire import require

if TYPE_CHECKING:
    from esdsl.client import Client

logger = logging.getLogger(__name__)


@dataclass
class DeleteResult:
    found: bool
    index: str
    doc_type: str
    id: str
    version: int

    @classmethod
    def from_json(cls, data: Any) -> DeleteResult:
        return cls(
            found=require(data, "found", bool),
            index=require(data, "_index", str),
            doc_type=require(data, "_type", str),
            id=require(data, "_id", str),
            version=require(data, "_version", int),
        )


class DeleteOperation:
    """Delete one document.

    A missing document answers 404, which is raised as a ``ServerError``.
    """

    def __init__(self, client: Client, index: str, doc_type: str, id: str) -> None:
        self.client = client
        self.index = index
        self.doc_type = doc_type
        self.id = id
        self.options = Options()

    with_version = url_option("version")
    with_version_type = url_option("version_type")
    with_routing = url_option("routing")
    with_parent = url_option("parent")
    with_consistency = url_option("consistency")
    with_refresh = url_option("refresh")
    with_timeout = url_option("timeout")

    def send(self) -> DeleteResult:
        path = f"/{self.index}/{self.doc_type}/{self.id}{self.options.to_query_string()}"
        _, payload = self.client.request("DELETE", path, ok=(200,))
        return DeleteResult.from_json(payload)


@dataclass
class DeleteByQueryIndexResult:
    shards: ShardCountResult

    @classmethod
    def from_json(cls, data: Any, path: str) -> DeleteByQueryIndexResult:
        return cls(ShardCountResult.from_json(require(data, "_shards", dict, path), f"{path}._shards"))


@dataclass
class DeleteByQueryResult:
    indices: dict[str, DeleteByQueryIndexResult] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> DeleteByQueryResult:
        indices = require(data, "_indices", dict)
        return cls(
            {
                name: DeleteByQueryIndexResult.from_json(entry, f"_indices.{name}")
                for name, entry in indices.items()
            }
        )

    def successful(self) -> bool:
        """True when no shard of any index failed."""
        return all(result.shards.failed == 0 for result in self.indices.values())


class DeleteByQueryOperation:
    """Delete every document matching a query or a query string."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.indexes: list[str] = []
        self.doc_types: list[str] = []
        self.query: Query | None = None
        self.options = Options()

    def with_indexes(self, indexes: list[str]) -> DeleteByQueryOperation:
        self.indexes = list(indexes)
        return self

    def with_types(self, doc_types: list[str]) -> DeleteByQueryOperation:
        self.doc_types = list(doc_types)
        return self

    def with_query(self, query: Query | QueryBuilder) -> DeleteByQueryOperation:
        self.query = query.build() if isinstance(query, QueryBuilder) else query
        return self

    def with_query_string(self, q: str) -> DeleteByQueryOperation:
        self.options.set("q", q)
        return self

    with_df = url_option("df")
    with_analyzer = url_option("analyzer")
    with_default_operator = url_option("default_operator")
    with_routing = url_option("routing")
    with_consistency = url_option("consistency")

    def send(self) -> DeleteByQueryResult:
        """Run the delete.

        Raises:
            UsageError: If neither a query nor a query string was given.
        """
        if self.query is None and "q" not in self.options:
            raise UsageError("Delete by query needs a query or a query string")
        body = {"query": self.query.to_json()} if self.query is not None else None
        path = f"/{format_indexes_and_types(self.indexes, self.doc_types)}/_query{self.options.to_query_string()}"
        _, payload = self.client.request("DELETE", path, body, ok=(200,))
        result = DeleteByQueryResult.from_json(payload)
        logger.debug("Delete by query touched %d indices", len(result.indices))
        return result
