"""Metric aggregations.

Most metrics read a ``field`` or run a ``script``; ``missing`` supplies a
value for documents without one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from esdsl.aggregations.common import MetricAggregation, Script, field_or_script
from esdsl.aggregations.results import (
    AvgResult,
    CardinalityResult,
    ExtendedStatsResult,
    GeoBoundsResult,
    MaxResult,
    MinResult,
    PercentileRanksResult,
    PercentilesResult,
    ScriptedMetricResult,
    StatsResult,
    SumResult,
    ValueCountResult,
)
from esdsl.wire import JsonVal, opt, option, required


@dataclass
class FieldMetric(MetricAggregation):
    """Metric over a field or a script."""

    field: str | None = opt()
    script: Script | str | None = opt()
    missing: JsonVal | None = opt()

    with_field = option("field")
    with_script = option("script")
    with_missing = option("missing")


@dataclass
class MinAggregation(FieldMetric):
    KIND: ClassVar[str] = "min"
    RESULT: ClassVar[type] = MinResult


@dataclass
class MaxAggregation(FieldMetric):
    KIND: ClassVar[str] = "max"
    RESULT: ClassVar[type] = MaxResult


@dataclass
class SumAggregation(FieldMetric):
    KIND: ClassVar[str] = "sum"
    RESULT: ClassVar[type] = SumResult


@dataclass
class AvgAggregation(FieldMetric):
    KIND: ClassVar[str] = "avg"
    RESULT: ClassVar[type] = AvgResult


@dataclass
class StatsAggregation(FieldMetric):
    KIND: ClassVar[str] = "stats"
    RESULT: ClassVar[type] = StatsResult


@dataclass
class ExtendedStatsAggregation(FieldMetric):
    """Stats plus variance, standard deviation and its bounds."""

    KIND: ClassVar[str] = "extended_stats"
    RESULT: ClassVar[type] = ExtendedStatsResult

    sigma: float | None = opt()

    with_sigma = option("sigma")


@dataclass
class ValueCountAggregation(FieldMetric):
    KIND: ClassVar[str] = "value_count"
    RESULT: ClassVar[type] = ValueCountResult


@dataclass
class PercentilesAggregation(FieldMetric):
    """Estimated percentiles; results are keyed by the formatted percent."""

    KIND: ClassVar[str] = "percentiles"
    RESULT: ClassVar[type] = PercentilesResult

    percents: list[float] | None = opt()
    compression: float | None = opt()

    with_percents = option("percents")
    with_compression = option("compression")


@dataclass
class PercentileRanksAggregation(FieldMetric):
    KIND: ClassVar[str] = "percentile_ranks"
    RESULT: ClassVar[type] = PercentileRanksResult

    values: list[float] | None = opt()
    compression: float | None = opt()

    with_values = option("values")
    with_compression = option("compression")


@dataclass
class CardinalityAggregation(FieldMetric):
    """Approximate count of distinct values."""

    KIND: ClassVar[str] = "cardinality"
    RESULT: ClassVar[type] = CardinalityResult

    precision_threshold: int | None = opt()
    rehash: bool | None = opt()

    with_precision_threshold = option("precision_threshold")
    with_rehash = option("rehash")


@dataclass
class GeoBoundsAggregation(MetricAggregation):
    """Bounding box enclosing every geo point of a field."""

    KIND: ClassVar[str] = "geo_bounds"
    RESULT: ClassVar[type] = GeoBoundsResult

    field: str = required()
    wrap_longitude: bool | None = opt()

    with_wrap_longitude = option("wrap_longitude")


@dataclass
class ScriptedMetricAggregation(MetricAggregation):
    """Metric computed by user scripts in four phases.

    Each phase script may be given inline, as a file name (``*_file``) or as
    a stored script id (``*_id``). Only ``map_script`` is mandatory.
    """

    KIND: ClassVar[str] = "scripted_metric"
    RESULT: ClassVar[type] = ScriptedMetricResult

    init_script: str | None = opt()
    init_script_file: str | None = opt()
    init_script_id: str | None = opt()
    map_script: str | None = opt()
    map_script_file: str | None = opt()
    map_script_id: str | None = opt()
    combine_script: str | None = opt()
    combine_script_file: str | None = opt()
    combine_script_id: str | None = opt()
    reduce_script: str | None = opt()
    reduce_script_file: str | None = opt()
    reduce_script_id: str | None = opt()
    params: dict[str, JsonVal] | None = opt()
    reduce_params: dict[str, JsonVal] | None = opt()
    lang: str | None = opt()

    with_init_script = option("init_script")
    with_init_script_file = option("init_script_file")
    with_init_script_id = option("init_script_id")
    with_map_script = option("map_script")
    with_map_script_file = option("map_script_file")
    with_map_script_id = option("map_script_id")
    with_combine_script = option("combine_script")
    with_combine_script_file = option("combine_script_file")
    with_combine_script_id = option("combine_script_id")
    with_reduce_script = option("reduce_script")
    with_reduce_script_file = option("reduce_script_file")
    with_reduce_script_id = option("reduce_script_id")
    with_params = option("params")
    with_reduce_params = option("reduce_params")
    with_lang = option("lang")


def _metric(cls: type, field: str | None, script: Script | str | None):
    field_or_script(field, script)
    return cls(field=field, script=script)


def build_min(field: str | None = None, *, script: Script | str | None = None) -> MinAggregation:
    return _metric(MinAggregation, field, script)


def build_max(field: str | None = None, *, script: Script | str | None = None) -> MaxAggregation:
    return _metric(MaxAggregation, field, script)


def build_sum(field: str | None = None, *, script: Script | str | None = None) -> SumAggregation:
    return _metric(SumAggregation, field, script)


def build_avg(field: str | None = None, *, script: Script | str | None = None) -> AvgAggregation:
    return _metric(AvgAggregation, field, script)


def build_stats(field: str | None = None, *, script: Script | str | None = None) -> StatsAggregation:
    return _metric(StatsAggregation, field, script)


def build_extended_stats(
    field: str | None = None, *, script: Script | str | None = None
) -> ExtendedStatsAggregation:
    return _metric(ExtendedStatsAggregation, field, script)


def build_value_count(field: str | None = None, *, script: Script | str | None = None) -> ValueCountAggregation:
    return _metric(ValueCountAggregation, field, script)


def build_percentiles(
    field: str | None = None, *, script: Script | str | None = None
) -> PercentilesAggregation:
    return _metric(PercentilesAggregation, field, script)


def build_percentile_ranks(
    field: str | None = None, values: list[float] | None = None, *, script: Script | str | None = None
) -> PercentileRanksAggregation:
    aggregation = _metric(PercentileRanksAggregation, field, script)
    aggregation.values = values
    return aggregation


def build_cardinality(
    field: str | None = None, *, script: Script | str | None = None
) -> CardinalityAggregation:
    return _metric(CardinalityAggregation, field, script)


def build_geo_bounds(field: str) -> GeoBoundsAggregation:
    return GeoBoundsAggregation(field)


def build_scripted_metric(map_script: str) -> ScriptedMetricAggregation:
    return ScriptedMetricAggregation(map_script=map_script)
