"""Bucket aggregations.

Every bucket aggregation may carry child aggregations, set with
``with_aggs`` and decoded per bucket.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from esdsl.aggregations.common import (
    Aggregations,
    BucketAggregation,
    Order,
    Script,
    field_or_script,
)
from esdsl.aggregations.results import (
    ChildrenResult,
    DateHistogramResult,
    DateRangeResult,
    FilterResult,
    FiltersResult,
    GeoDistanceResult,
    GeohashGridResult,
    GlobalResult,
    HistogramResult,
    MissingResult,
    NestedResult,
    RangeResult,
    ReverseNestedResult,
    TermsResult,
)
from esdsl.query.common import Query, QueryBuilder
from esdsl.units import DistanceType, DistanceUnit, Duration, Location, as_location
from esdsl.wire import JsonVal, OneOrMany, internal, opt, option, required, serialize_fields


def _query(value: Query | QueryBuilder) -> Query:
    return value.build() if isinstance(value, QueryBuilder) else value


@dataclass
class GlobalAggregation(BucketAggregation):
    """A single bucket holding every document of the search context."""

    KIND: ClassVar[str] = "global"
    RESULT: ClassVar[type] = GlobalResult

    aggs: Aggregations | None = internal()


@dataclass
class FilterAggregation(BucketAggregation):
    """A single bucket of the documents matching a query."""

    KIND: ClassVar[str] = "filter"
    RESULT: ClassVar[type] = FilterResult

    filter: Query = required(skip=True)
    aggs: Aggregations | None = internal()

    def _body(self) -> Any:
        return self.filter.to_json()


@dataclass
class FiltersAggregation(BucketAggregation):
    """One bucket per named query."""

    KIND: ClassVar[str] = "filters"
    RESULT: ClassVar[type] = FiltersResult

    filters: dict[str, Query] = required()
    aggs: Aggregations | None = internal()

    def add_filter(self, name: str, query: Query | QueryBuilder) -> FiltersAggregation:
        self.filters[name] = _query(query)
        return self


@dataclass
class MissingAggregation(BucketAggregation):
    """A single bucket of the documents lacking a field."""

    KIND: ClassVar[str] = "missing"
    RESULT: ClassVar[type] = MissingResult

    field: str = required()
    aggs: Aggregations | None = internal()


@dataclass
class NestedAggregation(BucketAggregation):
    KIND: ClassVar[str] = "nested"
    RESULT: ClassVar[type] = NestedResult

    path: str = required()
    aggs: Aggregations | None = internal()


@dataclass
class ReverseNestedAggregation(BucketAggregation):
    """Joins nested documents back to their parent, or to ``path``."""

    KIND: ClassVar[str] = "reverse_nested"
    RESULT: ClassVar[type] = ReverseNestedResult

    path: str | None = opt()
    aggs: Aggregations | None = internal()

    with_path = option("path")


@dataclass
class ChildrenAggregation(BucketAggregation):
    KIND: ClassVar[str] = "children"
    RESULT: ClassVar[type] = ChildrenResult

    doc_type: str = required("type")
    aggs: Aggregations | None = internal()


class ExecutionHint(str, Enum):
    """How a terms aggregation collects its buckets."""

    MAP = "map"
    GLOBAL_ORDINALS_LOW_CARDINALITY = "global_ordinals_low_cardinality"
    GLOBAL_ORDINALS = "global_ordinals"
    GLOBAL_ORDINALS_HASH = "global_ordinals_hash"


@dataclass
class TermsAggregation(BucketAggregation):
    """One bucket per distinct value of a field or script."""

    KIND: ClassVar[str] = "terms"
    RESULT: ClassVar[type] = TermsResult

    field: str | None = opt()
    script: Script | str | None = opt()
    size: int | None = opt()
    shard_size: int | None = opt()
    order: OneOrMany[Order] | None = opt()
    min_doc_count: int | None = opt()
    shard_min_doc_count: int | None = opt()
    include: OneOrMany[str] | None = opt()
    exclude: OneOrMany[str] | None = opt()
    execution_hint: ExecutionHint | None = opt()
    missing: JsonVal | None = opt()
    aggs: Aggregations | None = internal()

    with_size = option("size")
    with_shard_size = option("shard_size")
    with_order = option("order")
    with_min_doc_count = option("min_doc_count")
    with_shard_min_doc_count = option("shard_min_doc_count")
    with_include = option("include")
    with_exclude = option("exclude")
    with_execution_hint = option("execution_hint")
    with_missing = option("missing")


@dataclass
class RangeEntry:
    """One range of a range aggregation; bounds are ``from`` inclusive, ``to`` exclusive."""

    from_: JsonVal | None = opt()
    to: JsonVal | None = opt()
    key: str | None = opt()

    def to_json(self) -> dict[str, Any]:
        return serialize_fields(self)


def _ranges(entries: list[Any]) -> list[RangeEntry]:
    """Accept ``RangeEntry`` values or ``(from, to)``/``(from, to, key)`` tuples."""
    ranges = []
    for entry in entries:
        if isinstance(entry, RangeEntry):
            ranges.append(entry)
        else:
            ranges.append(RangeEntry(*entry))
    return ranges


class _RangeBase(BucketAggregation):
    ranges: list[RangeEntry]

    def add_range(self, from_: JsonVal | None = None, to: JsonVal | None = None, key: str | None = None) -> Any:
        self.ranges.append(RangeEntry(from_, to, key))
        return self


@dataclass
class RangeAggregation(_RangeBase):
    """One bucket per numeric range."""

    KIND: ClassVar[str] = "range"
    RESULT: ClassVar[type] = RangeResult

    ranges: list[RangeEntry] = required()
    field: str | None = opt()
    script: Script | str | None = opt()
    keyed: bool | None = opt()
    aggs: Aggregations | None = internal()

    with_keyed = option("keyed")


@dataclass
class DateRangeAggregation(_RangeBase):
    """One bucket per date range; bounds may be date math expressions."""

    KIND: ClassVar[str] = "date_range"
    RESULT: ClassVar[type] = DateRangeResult

    ranges: list[RangeEntry] = required()
    field: str | None = opt()
    script: Script | str | None = opt()
    format: str | None = opt()
    keyed: bool | None = opt()
    aggs: Aggregations | None = internal()

    with_format = option("format")
    with_keyed = option("keyed")


@dataclass
class ExtendedBounds:
    min: int
    max: int

    def to_json(self) -> dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass
class HistogramAggregation(BucketAggregation):
    """Fixed-width numeric buckets."""

    KIND: ClassVar[str] = "histogram"
    RESULT: ClassVar[type] = HistogramResult

    field: str = required()
    interval: int | float = required()
    min_doc_count: int | None = opt()
    extended_bounds: ExtendedBounds | None = opt()
    order: Order | None = opt()
    offset: int | float | None = opt()
    keyed: bool | None = opt()
    missing: JsonVal | None = opt()
    aggs: Aggregations | None = internal()

    with_min_doc_count = option("min_doc_count")
    with_order = option("order")
    with_offset = option("offset")
    with_keyed = option("keyed")
    with_missing = option("missing")

    def with_extended_bounds(self, min: int, max: int) -> HistogramAggregation:
        self.extended_bounds = ExtendedBounds(min, max)
        return self


class Interval(str, Enum):
    """Calendar-aware date histogram intervals."""

    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


@dataclass
class DateHistogramAggregation(BucketAggregation):
    """Date buckets of a calendar interval or a fixed duration.

    ``time_zone`` takes an hour offset or a zone id such as ``"+01:00"``.
    """

    KIND: ClassVar[str] = "date_histogram"
    RESULT: ClassVar[type] = DateHistogramResult

    field: str = required()
    interval: Interval | Duration | str = required()
    time_zone: int | str | None = opt()
    offset: Duration | None = opt()
    format: str | None = opt()
    min_doc_count: int | None = opt()
    extended_bounds: ExtendedBounds | None = opt()
    order: Order | None = opt()
    aggs: Aggregations | None = internal()

    with_time_zone = option("time_zone")
    with_offset = option("offset")
    with_format = option("format")
    with_min_doc_count = option("min_doc_count")
    with_order = option("order")

    def with_extended_bounds(self, min: int, max: int) -> DateHistogramAggregation:
        self.extended_bounds = ExtendedBounds(min, max)
        return self


@dataclass
class GeoDistanceAggregation(_RangeBase):
    """Rings of distance around an origin."""

    KIND: ClassVar[str] = "geo_distance"
    RESULT: ClassVar[type] = GeoDistanceResult

    field: str = required()
    origin: Location = required()
    ranges: list[RangeEntry] = required()
    unit: DistanceUnit | None = opt()
    distance_type: DistanceType | None = opt()
    aggs: Aggregations | None = internal()

    with_unit = option("unit")
    with_distance_type = option("distance_type")


@dataclass
class GeohashGridAggregation(BucketAggregation):
    """Buckets of geohash cells; ``precision`` is the geohash length (1-12)."""

    KIND: ClassVar[str] = "geohash_grid"
    RESULT: ClassVar[type] = GeohashGridResult

    field: str = required()
    precision: int | None = opt()
    size: int | None = opt()
    shard_size: int | None = opt()
    aggs: Aggregations | None = internal()

    with_precision = option("precision")
    with_size = option("size")
    with_shard_size = option("shard_size")


def build_global() -> GlobalAggregation:
    return GlobalAggregation()


def build_filter(query: Query | QueryBuilder) -> FilterAggregation:
    return FilterAggregation(_query(query))


def build_filters(filters: dict[str, Query | QueryBuilder] | None = None) -> FiltersAggregation:
    return FiltersAggregation({name: _query(q) for name, q in (filters or {}).items()})


def build_missing(field: str) -> MissingAggregation:
    return MissingAggregation(field)


def build_nested(path: str) -> NestedAggregation:
    return NestedAggregation(path)


def build_reverse_nested() -> ReverseNestedAggregation:
    return ReverseNestedAggregation()


def build_children(doc_type: str) -> ChildrenAggregation:
    return ChildrenAggregation(doc_type)


def build_terms(field: str | None = None, *, script: Script | str | None = None) -> TermsAggregation:
    field_or_script(field, script)
    return TermsAggregation(field=field, script=script)


def build_range(
    field: str | None = None, ranges: list[Any] | None = None, *, script: Script | str | None = None
) -> RangeAggregation:
    field_or_script(field, script)
    return RangeAggregation(field=field, script=script, ranges=_ranges(ranges or []))


def build_date_range(
    field: str | None = None, ranges: list[Any] | None = None, *, script: Script | str | None = None
) -> DateRangeAggregation:
    field_or_script(field, script)
    return DateRangeAggregation(field=field, script=script, ranges=_ranges(ranges or []))


def build_histogram(field: str, interval: int | float) -> HistogramAggregation:
    return HistogramAggregation(field, interval)


def build_date_histogram(field: str, interval: Interval | Duration | str) -> DateHistogramAggregation:
    return DateHistogramAggregation(field, interval)


def build_geo_distance(field: str, origin: Any, ranges: list[Any] | None = None) -> GeoDistanceAggregation:
    return GeoDistanceAggregation(field, as_location(origin), ranges=_ranges(ranges or []))


def build_geohash_grid(field: str) -> GeohashGridAggregation:
    return GeohashGridAggregation(field)

