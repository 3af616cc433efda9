"""Search requests: by URI query string, or by JSON body.

Example::

    query = build_bool().with_must([build_term("tag", "python").build()]).build()
    result = (
        client.search_query()
        .with_indexes(["books"])
        .with_query(query)
        .with_size(20)
        .send()
    )
    for hit in result.hits.hits:
        print(hit.id, hit.source)
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from esdsl.aggregations.common import Aggregations
from esdsl.operations.common import Options, format_indexes_and_types, url_option
from esdsl.query.common import Query, QueryBuilder
from esdsl.search.highlight import Highlight, Source
from esdsl.search.response import SearchResult, SourceType
from esdsl.search.scroll import ScanResult
from esdsl.search.sort import Sort
from esdsl.units import Duration
from esdsl.wire import opt, option, serialize_fields

if TYPE_CHECKING:
    from esdsl.client import Client


class SearchType(str, Enum):
    DFS_QUERY_THEN_FETCH = "dfs_query_then_fetch"
    DFS_QUERY_AND_FETCH = "dfs_query_and_fetch"
    QUERY_THEN_FETCH = "query_then_fetch"
    QUERY_AND_FETCH = "query_and_fetch"
    SCAN = "scan"


def body_option(name: str) -> Callable[..., Any]:
    """Create a fluent setter for a field of the operation's ``SearchBody``."""
    setter = option(name)

    def body_setter(self: Any, value: Any) -> Any:
        setter(self.body, value)
        return self

    body_setter.__name__ = f"with_{name.rstrip('_')}"
    return body_setter


def _duration(value: Duration | str) -> Duration:
    return Duration.parse(value) if isinstance(value, str) else value


@dataclass
class SearchBody:
    """JSON body of a search; unset fields are left out."""

    query: Query | None = opt()
    timeout: Duration | str | None = opt()
    from_: int | None = opt()
    size: int | None = opt()
    terminate_after: int | None = opt()
    stats: list[str] | None = opt()
    min_score: float | None = opt()
    sort: Sort | None = opt()
    track_scores: bool | None = opt()
    source: Source | None = opt("_source")
    aggs: Aggregations | None = opt()
    highlight: Highlight | None = opt()
    version: bool | None = opt()

    def to_json(self) -> dict[str, Any]:
        body = serialize_fields(self)
        # Empty containers mean "not set".
        if self.aggs is not None and not self.aggs:
            del body["aggs"]
        if self.sort is not None and not self.sort:
            del body["sort"]
        if body.get("_source") == {}:
            del body["_source"]
        return body


class SearchURIOperation:
    """Search with a query string in the URL (``GET .../_search?q=...``)."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.indexes: list[str] = []
        self.doc_types: list[str] = []
        self.options = Options()

    def with_indexes(self, indexes: list[str]) -> SearchURIOperation:
        self.indexes = list(indexes)
        return self

    def with_types(self, doc_types: list[str]) -> SearchURIOperation:
        self.doc_types = list(doc_types)
        return self

    def with_query(self, q: str) -> SearchURIOperation:
        self.options.set("q", q)
        return self

    with_df = url_option("df")
    with_analyzer = url_option("analyzer")
    with_lowercase_expanded_terms = url_option("lowercase_expanded_terms")
    with_analyze_wildcard = url_option("analyze_wildcard")
    with_default_operator = url_option("default_operator")
    with_lenient = url_option("lenient")
    with_explain = url_option("explain")
    with_source = url_option("_source")
    with_sort = url_option("sort")
    with_routing = url_option("routing")
    with_track_scores = url_option("track_scores")
    with_timeout = url_option("timeout")
    with_terminate_after = url_option("terminate_after")
    with_from = url_option("from")
    with_size = url_option("size")
    with_search_type = url_option("search_type")
    with_fields = url_option("fields")

    def send(self, source_type: SourceType | None = None) -> SearchResult[Any]:
        path = f"/{format_indexes_and_types(self.indexes, self.doc_types)}/_search{self.options.to_query_string()}"
        _, payload = self.client.request("GET", path)
        return SearchResult.from_json(payload, None, source_type)


class SearchQueryOperation:
    """Search with a JSON body (``POST .../_search``).

    Body fields are set with the ``with_<field>`` setters below; URL
    parameters such as ``routing`` or ``search_type`` have their own.
    """

    def __init__(self, client: Client) -> None:
        self.client = client
        self.indexes: list[str] = []
        self.doc_types: list[str] = []
        self.body = SearchBody()
        self.options = Options()

    def with_indexes(self, indexes: list[str]) -> SearchQueryOperation:
        self.indexes = list(indexes)
        return self

    def with_types(self, doc_types: list[str]) -> SearchQueryOperation:
        self.doc_types = list(doc_types)
        return self

    def with_query(self, query: Query | QueryBuilder) -> SearchQueryOperation:
        self.body.query = query.build() if isinstance(query, QueryBuilder) else query
        return self

    def with_aggs(self, aggs: Aggregations | Mapping[str, Any]) -> SearchQueryOperation:
        self.body.aggs = aggs if isinstance(aggs, Aggregations) else Aggregations(aggs)
        return self

    with_timeout = body_option("timeout")
    with_from = body_option("from_")
    with_size = body_option("size")
    with_terminate_after = body_option("terminate_after")
    with_stats = body_option("stats")
    with_min_score = body_option("min_score")
    with_sort = body_option("sort")
    with_track_scores = body_option("track_scores")
    with_source = body_option("source")
    with_highlight = body_option("highlight")
    with_version = body_option("version")

    with_routing = url_option("routing")
    with_search_type = url_option("search_type")
    with_query_cache = url_option("query_cache")
    with_ignore_unavailable = url_option("ignore_unavailable")
    with_allow_no_indices = url_option("allow_no_indices")
    with_expand_wildcards = url_option("expand_wildcards")
    with_explain = url_option("explain")

    def _path(self, options: Options) -> str:
        return f"/{format_indexes_and_types(self.indexes, self.doc_types)}/_search{options.to_query_string()}"

    def send(self, source_type: SourceType | None = None) -> SearchResult[Any]:
        _, payload = self.client.request("POST", self._path(self.options), self.body.to_json())
        return SearchResult.from_json(payload, self.body.aggs, source_type)

    def scan(self, duration: Duration | str, source_type: SourceType | None = None) -> ScanResult[Any]:
        """Open a legacy scan: the first page is empty and hits arrive on scroll.

        The returned cursor must be closed; see :class:`ScanResult`.
        """
        duration = _duration(duration)
        options = self.options.copy()
        options.set("search_type", SearchType.SCAN)
        options.set("scroll", duration)
        return self._open(options, self.body, duration, source_type)

    def scroll(self, duration: Duration | str, source_type: SourceType | None = None) -> ScanResult[Any]:
        """Open a scroll sorted by ``_doc`` unless a sort is set; the first page carries hits.

        The returned cursor must be closed; see :class:`ScanResult`.
        """
        duration = _duration(duration)
        options = self.options.copy()
        options.set("scroll", duration)
        body = copy.copy(self.body)
        if not body.sort:
            body.sort = Sort.field("_doc")
        return self._open(options, body, duration, source_type)

    def _open(
        self, options: Options, body: SearchBody, duration: Duration, source_type: SourceType | None
    ) -> ScanResult[Any]:
        _, payload = self.client.request("POST", self._path(options), body.to_json())
        return ScanResult.open(self.client, payload, duration, source_type, body.aggs)
