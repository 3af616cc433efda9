"""Typed aggregation results, decoded against the request tree.

Decoding walks the requested :class:`~esdsl.aggregations.common.Aggregations`
rather than the response, so every result is decoded by the kind that was
asked for and bucket results recurse with the child requests.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from esdsl.exceptions import AggregationKindError, AggregationNotFoundError, DecodeError
from esdsl.units import GeoBoxCorners, GeoPoint
from esdsl.wire import JsonVal, check, optional, require

if TYPE_CHECKING:
    from esdsl.aggregations.common import Aggregations


class AggregationResult:
    """Base class of decoded aggregation results.

    The ``as_<kind>()`` accessors return the result itself when it is of
    that kind and raise :class:`AggregationKindError` otherwise.
    """

    KIND = ""
    name: str

    def _as(self, cls: type) -> Any:
        if not isinstance(self, cls):
            raise AggregationKindError(self.name, cls.KIND, self.KIND)
        return self

    def as_min(self) -> MinResult:
        return self._as(MinResult)

    def as_max(self) -> MaxResult:
        return self._as(MaxResult)

    def as_sum(self) -> SumResult:
        return self._as(SumResult)

    def as_avg(self) -> AvgResult:
        return self._as(AvgResult)

    def as_stats(self) -> StatsResult:
        return self._as(StatsResult)

    def as_extended_stats(self) -> ExtendedStatsResult:
        return self._as(ExtendedStatsResult)

    def as_value_count(self) -> ValueCountResult:
        return self._as(ValueCountResult)

    def as_percentiles(self) -> PercentilesResult:
        return self._as(PercentilesResult)

    def as_percentile_ranks(self) -> PercentileRanksResult:
        return self._as(PercentileRanksResult)

    def as_cardinality(self) -> CardinalityResult:
        return self._as(CardinalityResult)

    def as_geo_bounds(self) -> GeoBoundsResult:
        return self._as(GeoBoundsResult)

    def as_scripted_metric(self) -> ScriptedMetricResult:
        return self._as(ScriptedMetricResult)

    def as_global(self) -> GlobalResult:
        return self._as(GlobalResult)

    def as_filter(self) -> FilterResult:
        return self._as(FilterResult)

    def as_filters(self) -> FiltersResult:
        return self._as(FiltersResult)

    def as_missing(self) -> MissingResult:
        return self._as(MissingResult)

    def as_nested(self) -> NestedResult:
        return self._as(NestedResult)

    def as_reverse_nested(self) -> ReverseNestedResult:
        return self._as(ReverseNestedResult)

    def as_children(self) -> ChildrenResult:
        return self._as(ChildrenResult)

    def as_terms(self) -> TermsResult:
        return self._as(TermsResult)

    def as_range(self) -> RangeResult:
        return self._as(RangeResult)

    def as_date_range(self) -> DateRangeResult:
        return self._as(DateRangeResult)

    def as_histogram(self) -> HistogramResult:
        return self._as(HistogramResult)

    def as_date_histogram(self) -> DateHistogramResult:
        return self._as(DateHistogramResult)

    def as_geo_distance(self) -> GeoDistanceResult:
        return self._as(GeoDistanceResult)

    def as_geohash_grid(self) -> GeohashGridResult:
        return self._as(GeohashGridResult)


@dataclass
class AggregationsResult:
    """Decoded aggregations, keyed by the names used in the request."""

    results: dict[str, AggregationResult] = field(default_factory=dict)

    @classmethod
    def decode(cls, request: Aggregations, payload: Any, path: str = "aggregations") -> AggregationsResult:
        """Decode every requested aggregation from a response object.

        Raises:
            DecodeError: If a requested aggregation is absent or malformed.
        """
        results: dict[str, AggregationResult] = {}
        for name, aggregation in request.items():
            entry = require(payload, name, dict, path)
            results[name] = aggregation.decode(name, entry, f"{path}.{name}")
        return cls(results)

    def get(self, name: str) -> AggregationResult:
        """Look up a result by name.

        Raises:
            AggregationNotFoundError: If no aggregation of that name was requested.
        """
        try:
            return self.results[name]
        except KeyError:
            raise AggregationNotFoundError(name) from None

    def __getitem__(self, name: str) -> AggregationResult:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.results

    def __iter__(self) -> Iterator[str]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


def _number(data: Any, key: str, path: str) -> int | float | None:
    return optional(data, key, (int, float), path)


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


@dataclass
class MinResult(AggregationResult):
    KIND = "min"

    name: str
    value: JsonVal | None

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> MinResult:
        return cls(name, optional(data, "value", (int, float, str), path))


@dataclass
class MaxResult(AggregationResult):
    KIND = "max"

    name: str
    value: JsonVal | None

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> MaxResult:
        return cls(name, optional(data, "value", (int, float, str), path))


@dataclass
class SumResult(AggregationResult):
    KIND = "sum"

    name: str
    value: float

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> SumResult:
        return cls(name, float(require(data, "value", float, path)))


@dataclass
class AvgResult(AggregationResult):
    """Average; ``None`` when no document had a value."""

    KIND = "avg"

    name: str
    value: float | None

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> AvgResult:
        value = _number(data, "value", path)
        return cls(name, None if value is None else float(value))


@dataclass
class StatsResult(AggregationResult):
    KIND = "stats"

    name: str
    count: int
    min: float | None
    max: float | None
    avg: float | None
    sum: float

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> StatsResult:
        return cls(
            name,
            count=require(data, "count", int, path),
            min=_number(data, "min", path),
            max=_number(data, "max", path),
            avg=_number(data, "avg", path),
            sum=_number(data, "sum", path) or 0.0,
        )


@dataclass
class StdDeviationBounds:
    upper: float | None
    lower: float | None


@dataclass
class ExtendedStatsResult(AggregationResult):
    KIND = "extended_stats"

    name: str
    count: int
    min: float | None
    max: float | None
    avg: float | None
    sum: float
    sum_of_squares: float | None
    variance: float | None
    std_deviation: float | None
    std_deviation_bounds: StdDeviationBounds | None

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> ExtendedStatsResult:
        bounds = optional(data, "std_deviation_bounds", dict, path)
        bounds_path = f"{path}.std_deviation_bounds"
        return cls(
            name,
            count=require(data, "count", int, path),
            min=_number(data, "min", path),
            max=_number(data, "max", path),
            avg=_number(data, "avg", path),
            sum=_number(data, "sum", path) or 0.0,
            sum_of_squares=_number(data, "sum_of_squares", path),
            variance=_number(data, "variance", path),
            std_deviation=_number(data, "std_deviation", path),
            std_deviation_bounds=(
                StdDeviationBounds(
                    upper=_number(bounds, "upper", bounds_path),
                    lower=_number(bounds, "lower", bounds_path),
                )
                if bounds is not None
                else None
            ),
        )


@dataclass
class ValueCountResult(AggregationResult):
    KIND = "value_count"

    name: str
    value: int

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> ValueCountResult:
        return cls(name, require(data, "value", int, path))


def _percent_values(data: Any, path: str) -> dict[str, float | None]:
    values = require(data, "values", (dict, list), path)
    if isinstance(values, dict):
        return {key: _number(values, key, f"{path}.values") for key in values}
    # keyed=false responses list {key, value} pairs
    result: dict[str, float | None] = {}
    for i, item in enumerate(values):
        item_path = f"{path}.values[{i}]"
        key = require(item, "key", (int, float), item_path)
        result[str(float(key))] = _number(item, "value", item_path)
    return result


@dataclass
class PercentilesResult(AggregationResult):
    KIND = "percentiles"

    name: str
    values: dict[str, float | None]

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> PercentilesResult:
        return cls(name, _percent_values(data, path))


@dataclass
class PercentileRanksResult(AggregationResult):
    KIND = "percentile_ranks"

    name: str
    values: dict[str, float | None]

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> PercentileRanksResult:
        return cls(name, _percent_values(data, path))


@dataclass
class CardinalityResult(AggregationResult):
    KIND = "cardinality"

    name: str
    value: int

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> CardinalityResult:
        return cls(name, require(data, "value", int, path))


def _geo_point(data: Any, path: str) -> GeoPoint:
    return GeoPoint(
        lat=float(require(data, "lat", float, path)),
        lon=float(require(data, "lon", float, path)),
    )


@dataclass
class GeoBoundsResult(AggregationResult):
    """Bounding box of all points; ``None`` when no document had a point."""

    KIND = "geo_bounds"

    name: str
    bounds: GeoBoxCorners | None

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> GeoBoundsResult:
        bounds = optional(data, "bounds", dict, path)
        if bounds is None:
            return cls(name, None)
        bounds_path = f"{path}.bounds"
        return cls(
            name,
            GeoBoxCorners(
                top_left=_geo_point(require(bounds, "top_left", dict, bounds_path), f"{bounds_path}.top_left"),
                bottom_right=_geo_point(
                    require(bounds, "bottom_right", dict, bounds_path), f"{bounds_path}.bottom_right"
                ),
            ),
        )


@dataclass
class ScriptedMetricResult(AggregationResult):
    KIND = "scripted_metric"

    name: str
    value: Any

    @classmethod
    def from_json(cls, name: str, data: Any, path: str) -> ScriptedMetricResult:
        if not isinstance(data, dict) or "value" not in data:
            raise DecodeError(f"{path}.value", "any JSON value", "missing")
        return cls(name, data["value"])


# ---------------------------------------------------------------------------
# Buckets
# ---------------------------------------------------------------------------


def decode_children(children: Aggregations | None, data: Any, path: str) -> AggregationsResult:
    """Decode the sub-aggregations nested in a bucket object."""
    if not children:
        return AggregationsResult()
    return AggregationsResult.decode(children, data, path)


def _bucket_list(data: Any, path: str) -> list[tuple[str, dict[str, Any]]]:
    """Normalize keyed (object) and anonymous (array) bucket collections."""
    buckets = require(data, "buckets", (list, dict), path)
    if isinstance(buckets, dict):
        return [
            (f"{path}.buckets.{key}", {"key": key, **check(value, dict, f"{path}.buckets.{key}")})
            for key, value in buckets.items()
        ]
    return [(f"{path}.buckets[{i}]", check(b, dict, f"{path}.buckets[{i}]")) for i, b in enumerate(buckets)]


@dataclass
class _SingleBucketResult(AggregationResult):
    name: str
    doc_count: int
    aggs: AggregationsResult

    @classmethod
    def from_json(cls, name: str, data: Any, path: str, children: Aggregations | None = None) -> Any:
        return cls(name, require(data, "doc_count", int, path), decode_children(children, data, path))


class GlobalResult(_SingleBucketResult):
    KIND = "global"


class FilterResult(_SingleBucketResult):
    KIND = "filter"


class MissingResult(_SingleBucketResult):
    KIND = "missing"


class NestedResult(_SingleBucketResult):
    KIND = "nested"


class ReverseNestedResult(_SingleBucketResult):
    KIND = "reverse_nested"


class ChildrenResult(_SingleBucketResult):
    KIND = "children"


@dataclass
class FiltersBucketResult:
    doc_count: int
    aggs: AggregationsResult


@dataclass
class FiltersResult(AggregationResult):
    KIND = "filters"

    name: str
    buckets: dict[str, FiltersBucketResult]

    @classmethod
    def from_json(cls, name: str, data: Any, path: str, children: Aggregations | None = None) -> FiltersResult:
        buckets: dict[str, FiltersBucketResult] = {}
        for bucket_path, bucket in _bucket_list(data, path):
            buckets[str(bucket["key"])] = FiltersBucketResult(
                doc_count=require(bucket, "doc_count", int, bucket_path),
                aggs=decode_children(children, bucket, bucket_path),
            )
        return cls(name, buckets)


@dataclass
class TermsBucketResult:
    key: JsonVal
    doc_count: int
    aggs: AggregationsResult
    key_as_string: str | None = None
    doc_count_error_upper_bound: int | None = None


@dataclass
class TermsResult(AggregationResult):
    KIND = "terms"

    name: str
    doc_count_error_upper_bound: int
    sum_other_doc_count: int
    buckets: list[TermsBucketResult]

    @classmethod
    def from_json(cls, name: str, data: Any, path: str, children: Aggregations | None = None) -> TermsResult:
        buckets = [
            TermsBucketResult(
                key=require(bucket, "key", (int, float, str, bool), bucket_path),
                doc_count=require(bucket, "doc_count", int, bucket_path),
                aggs=decode_children(children, bucket, bucket_path),
                key_as_string=optional(bucket, "key_as_string", str, bucket_path),
                doc_count_error_upper_bound=optional(bucket, "doc_count_error_upper_bound", int, bucket_path),
            )
            for bucket_path, bucket in _bucket_list(data, path)
        ]
        return cls(
            name,
            doc_count_error_upper_bound=optional(data, "doc_count_error_upper_bound", int, path) or 0,
            sum_other_doc_count=optional(data, "sum_other_doc_count", int, path) or 0,
            buckets=buckets,
        )


@dataclass
class RangeBucketResult:
    key: str | None
    doc_count: int
    aggs: AggregationsResult
    from_: float | None = None
    to: float | None = None
    from_as_string: str | None = None
    to_as_string: str | None = None


def _range_buckets(data: Any, path: str, children: Aggregations | None) -> list[RangeBucketResult]:
    return [
        RangeBucketResult(
            key=optional(bucket, "key", str, bucket_path),
            doc_count=require(bucket, "doc_count", int, bucket_path),
            aggs=decode_children(children, bucket, bucket_path),
            from_=_number(bucket, "from", bucket_path),
            to=_number(bucket, "to", bucket_path),
            from_as_string=optional(bucket, "from_as_string", str, bucket_path),
            to_as_string=optional(bucket, "to_as_string", str, bucket_path),
        )
        for bucket_path, bucket in _bucket_list(data, path)
    ]


@dataclass
class RangeResult(AggregationResult):
    KIND = "range"

    name: str
    buckets: list[RangeBucketResult]

    @classmethod
    def from_json(cls, name: str, data: Any, path: str, children: Aggregations | None = None) -> RangeResult:
        return cls(name, _range_buckets(data, path, children))


@dataclass
class DateRangeResult(AggregationResult):
    KIND = "date_range"

    name: str
    buckets: list[RangeBucketResult]

    @classmethod
    def from_json(cls, name: str, data: Any, path: str, children: Aggregations | None = None) -> DateRangeResult:
        return cls(name, _range_buckets(data, path, children))


@dataclass
class GeoDistanceResult(AggregationResult):
    KIND = "geo_distance"

    name: str
    buckets: list[RangeBucketResult]

    @classmethod
    def from_json(cls, name: str, data: Any, path: str, children: Aggregations | None = None) -> GeoDistanceResult:
        return cls(name, _range_buckets(data, path, children))


@dataclass
class HistogramBucketResult:
    key: int | float
    doc_count: int
    aggs: AggregationsResult
    key_as_string: str | None = None


def _histogram_buckets(data: Any, path: str, children: Aggregations | None) -> list[HistogramBucketResult]:
    return [
        HistogramBucketResult(
            key=require(bucket, "key", (int, float), bucket_path),
            doc_count=require(bucket, "doc_count", int, bucket_path),
            aggs=decode_children(children, bucket, bucket_path),
            key_as_string=optional(bucket, "key_as_string", str, bucket_path),
        )
        for bucket_path, bucket in _bucket_list(data, path)
    ]


@dataclass
class HistogramResult(AggregationResult):
    KIND = "histogram"

    name: str
    buckets: list[HistogramBucketResult]

    @classmethod
    def from_json(cls, name: str, data: Any, path: str, children: Aggregations | None = None) -> HistogramResult:
        return cls(name, _histogram_buckets(data, path, children))


@dataclass
class DateHistogramResult(AggregationResult):
    """Date histogram; bucket keys are epoch milliseconds."""

    KIND = "date_histogram"

    name: str
    buckets: list[HistogramBucketResult]

    @classmethod
    def from_json(
        cls, name: str, data: Any, path: str, children: Aggregations | None = None
    ) -> DateHistogramResult:
        return cls(name, _histogram_buckets(data, path, children))


@dataclass
class GeohashGridBucketResult:
    key: str
    doc_count: int
    aggs: AggregationsResult


@dataclass
class GeohashGridResult(AggregationResult):
    KIND = "geohash_grid"

    name: str
    buckets: list[GeohashGridBucketResult]

    @classmethod
    def from_json(
        cls, name: str, data: Any, path: str, children: Aggregations | None = None
    ) -> GeohashGridResult:
        return cls(
            name,
            [
                GeohashGridBucketResult(
                    key=require(bucket, "key", str, bucket_path),
                    doc_count=require(bucket, "doc_count", int, bucket_path),
                    aggs=decode_children(children, bucket, bucket_path),
                )
                for bucket_path, bucket in _bucket_list(data, path)
            ],
        )
