"""Count the documents matching a query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from esdsl.operations.common import Options, ShardCountResult, format_indexes_and_types, url_option
from esdsl.query.common import Query, QueryBuilder
from esdsl.wire import require

if TYPE_CHECKING:
    from esdsl.client import Client


@dataclass
class CountResult:
    count: int
    shards: ShardCountResult

    @classmethod
    def from_json(cls, data: Any) -> CountResult:
        return cls(
            count=require(data, "count", int),
            shards=ShardCountResult.from_json(require(data, "_shards", dict)),
        )


class _CountBase:
    def __init__(self, client: Client) -> None:
        self.client = client
        self.indexes: list[str] = []
        self.doc_types: list[str] = []
        self.options = Options()

    def with_indexes(self, indexes: list[str]) -> Any:
        self.indexes = list(indexes)
        return self

    def with_types(self, doc_types: list[str]) -> Any:
        self.doc_types = list(doc_types)
        return self

    def _path(self) -> str:
        return f"/{format_indexes_and_types(self.indexes, self.doc_types)}/_count{self.options.to_query_string()}"


class CountURIOperation(_CountBase):
    """Count with a query string (``GET .../_count?q=...``)."""

    def with_query(self, q: str) -> CountURIOperation:
        self.options.set("q", q)
        return self

    with_df = url_option("df")
    with_analyzer = url_option("analyzer")
    with_default_operator = url_option("default_operator")
    with_lenient = url_option("lenient")
    with_analyze_wildcard = url_option("analyze_wildcard")
    with_lowercase_expanded_terms = url_option("lowercase_expanded_terms")

    def send(self) -> CountResult:
        _, payload = self.client.request("GET", self._path())
        return CountResult.from_json(payload)


class CountQueryOperation(_CountBase):
    """Count with a query DSL body; without a query every document counts."""

    def __init__(self, client: Client) -> None:
        super().__init__(client)
        self.query: Query | None = None

    def with_query(self, query: Query | QueryBuilder) -> CountQueryOperation:
        self.query = query.build() if isinstance(query, QueryBuilder) else query
        return self

    def send(self) -> CountResult:
        body = {"query": self.query.to_json()} if self.query is not None else None
        _, payload = self.client.request("POST", self._path(), body)
        return CountResult.from_json(payload)
