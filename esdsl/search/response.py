"""Search response model.

Hits are generic over the document type: pass ``source_type``, a callable
taking the ``_source`` object, to get typed documents instead of dicts.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Generic, TypeVar

from esdsl.aggregations.common import Aggregations
from esdsl.aggregations.results import AggregationsResult
from esdsl.exceptions import DecodeError
from esdsl.operations.common import ShardCountResult
from esdsl.wire import check, decode_source, optional, require

T = TypeVar("T")

SourceType = Callable[[dict[str, Any]], Any]


@dataclass
class Hit(Generic[T]):
    """One matching document."""

    index: str
    doc_type: str
    id: str
    score: float | None = None
    version: int | None = None
    source: T | None = None
    explanation: dict[str, Any] | None = None
    fields: dict[str, Any] | None = None
    highlight: dict[str, list[str]] | None = None

    @classmethod
    def from_json(cls, data: Any, path: str, source_type: SourceType | None = None) -> Hit[Any]:
        source = optional(data, "_source", dict, path)
        return cls(
            index=require(data, "_index", str, path),
            doc_type=require(data, "_type", str, path),
            id=require(data, "_id", str, path),
            score=optional(data, "_score", float, path),
            version=optional(data, "_version", int, path),
            source=decode_source(source, source_type, f"{path}._source") if source is not None else None,
            explanation=optional(data, "_explanation", dict, path),
            fields=optional(data, "fields", dict, path),
            highlight=optional(data, "highlight", dict, path),
        )


@dataclass
class SearchHitsResult(Generic[T]):
    total: int
    hits: list[Hit[T]] = field(default_factory=list)
    max_score: float | None = None

    @classmethod
    def from_json(cls, data: Any, path: str = "hits", source_type: SourceType | None = None) -> SearchHitsResult[Any]:
        hits = require(data, "hits", list, path)
        return cls(
            total=require(data, "total", int, path),
            hits=[
                Hit.from_json(check(hit, dict, f"{path}.hits[{i}]"), f"{path}.hits[{i}]", source_type)
                for i, hit in enumerate(hits)
            ],
            max_score=optional(data, "max_score", float, path),
        )

    def documents(self) -> list[T]:
        """The sources of all hits that carry one."""
        return [hit.source for hit in self.hits if hit.source is not None]

    def __len__(self) -> int:
        return len(self.hits)


@dataclass
class SearchResult(Generic[T]):
    """A search response.

    Aggregation results are decoded on first access of :attr:`aggs`,
    against the aggregations of the request.
    """

    took: int
    timed_out: bool
    shards: ShardCountResult
    hits: SearchHitsResult[T]
    scroll_id: str | None = None
    raw_aggs: dict[str, Any] | None = None
    requested_aggs: Aggregations | None = None

    @classmethod
    def from_json(
        cls,
        data: Any,
        aggs: Aggregations | None = None,
        source_type: SourceType | None = None,
    ) -> SearchResult[Any]:
        return cls(
            took=require(data, "took", int),
            timed_out=require(data, "timed_out", bool),
            shards=ShardCountResult.from_json(require(data, "_shards", dict)),
            hits=SearchHitsResult.from_json(require(data, "hits", dict), "hits", source_type),
            scroll_id=optional(data, "_scroll_id", str),
            raw_aggs=optional(data, "aggregations", dict),
            requested_aggs=aggs,
        )

    @cached_property
    def aggs(self) -> AggregationsResult:
        """Decoded aggregations.

        Raises:
            DecodeError: If aggregations were requested but the response has none
                or they do not match the request.
        """
        if not self.requested_aggs:
            return AggregationsResult()
        if self.raw_aggs is None:
            raise DecodeError("aggregations", "object", "missing")
        return AggregationsResult.decode(self.requested_aggs, self.raw_aggs)
