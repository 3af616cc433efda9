"""Aggregation DSL and typed aggregation results."""

from esdsl.aggregations.bucket import (
    ChildrenAggregation,
    DateHistogramAggregation,
    DateRangeAggregation,
    ExecutionHint,
    ExtendedBounds,
    FilterAggregation,
    FiltersAggregation,
    GeoDistanceAggregation,
    GeohashGridAggregation,
    GlobalAggregation,
    HistogramAggregation,
    Interval,
    MissingAggregation,
    NestedAggregation,
    RangeAggregation,
    RangeEntry,
    ReverseNestedAggregation,
    TermsAggregation,
    build_children,
    build_date_histogram,
    build_date_range,
    build_filter,
    build_filters,
    build_geo_distance,
    build_geohash_grid,
    build_global,
    build_histogram,
    build_missing,
    build_nested,
    build_range,
    build_reverse_nested,
    build_terms,
)
from esdsl.aggregations.common import (
    Aggregation,
    AggregationBuilder,
    Aggregations,
    BucketAggregation,
    Direction,
    MetricAggregation,
    Order,
    OrderKey,
    Script,
)
from esdsl.aggregations.metrics import (
    AvgAggregation,
    CardinalityAggregation,
    ExtendedStatsAggregation,
    FieldMetric,
    GeoBoundsAggregation,
    MaxAggregation,
    MinAggregation,
    PercentileRanksAggregation,
    PercentilesAggregation,
    ScriptedMetricAggregation,
    StatsAggregation,
    SumAggregation,
    ValueCountAggregation,
    build_avg,
    build_cardinality,
    build_extended_stats,
    build_geo_bounds,
    build_max,
    build_min,
    build_percentile_ranks,
    build_percentiles,
    build_scripted_metric,
    build_stats,
    build_sum,
    build_value_count,
)
from esdsl.aggregations.results import (
    AggregationResult,
    AggregationsResult,
    AvgResult,
    CardinalityResult,
    ChildrenResult,
    DateHistogramResult,
    DateRangeResult,
    ExtendedStatsResult,
    FilterResult,
    FiltersBucketResult,
    FiltersResult,
    GeoBoundsResult,
    GeoDistanceResult,
    GeohashGridBucketResult,
    GeohashGridResult,
    GlobalResult,
    HistogramBucketResult,
    HistogramResult,
    MaxResult,
    MinResult,
    MissingResult,
    NestedResult,
    PercentileRanksResult,
    PercentilesResult,
    RangeBucketResult,
    RangeResult,
    ReverseNestedResult,
    ScriptedMetricResult,
    StatsResult,
    StdDeviationBounds,
    SumResult,
    TermsBucketResult,
    TermsResult,
    ValueCountResult,
)

__all__ = [
    "AggregationResult",
    "AggregationsResult",
    "Aggregation",
    "AggregationBuilder",
    "Aggregations",
    "AvgAggregation",
    "AvgResult",
    "BucketAggregation",
    "CardinalityAggregation",
    "CardinalityResult",
    "ChildrenAggregation",
    "ChildrenResult",
    "DateHistogramAggregation",
    "DateHistogramResult",
    "DateRangeAggregation",
    "DateRangeResult",
    "Direction",
    "ExecutionHint",
    "ExtendedBounds",
    "ExtendedStatsAggregation",
    "ExtendedStatsResult",
    "FieldMetric",
    "FilterAggregation",
    "FilterResult",
    "FiltersAggregation",
    "FiltersBucketResult",
    "FiltersResult",
    "GeoBoundsAggregation",
    "GeoBoundsResult",
    "GeoDistanceAggregation",
    "GeoDistanceResult",
    "GeohashGridAggregation",
    "GeohashGridBucketResult",
    "GeohashGridResult",
    "GlobalAggregation",
    "GlobalResult",
    "HistogramAggregation",
    "HistogramBucketResult",
    "HistogramResult",
    "Interval",
    "MaxAggregation",
    "MaxResult",
    "MetricAggregation",
    "MinAggregation",
    "MinResult",
    "MissingAggregation",
    "MissingResult",
    "NestedAggregation",
    "NestedResult",
    "Order",
    "OrderKey",
    "PercentileRanksAggregation",
    "PercentileRanksResult",
    "PercentilesAggregation",
    "PercentilesResult",
    "RangeAggregation",
    "RangeBucketResult",
    "RangeEntry",
    "RangeResult",
    "ReverseNestedAggregation",
    "ReverseNestedResult",
    "Script",
    "ScriptedMetricAggregation",
    "ScriptedMetricResult",
    "StatsAggregation",
    "StatsResult",
    "StdDeviationBounds",
    "SumAggregation",
    "SumResult",
    "TermsAggregation",
    "TermsBucketResult",
    "TermsResult",
    "ValueCountAggregation",
    "ValueCountResult",
    "build_avg",
    "build_cardinality",
    "build_children",
    "build_date_histogram",
    "build_date_range",
    "build_extended_stats",
    "build_filter",
    "build_filters",
    "build_geo_bounds",
    "build_geo_distance",
    "build_geohash_grid",
    "build_global",
    "build_histogram",
    "build_max",
    "build_min",
    "build_missing",
    "build_nested",
    "build_percentile_ranks",
    "build_percentiles",
    "build_range",
    "build_reverse_nested",
    "build_scripted_metric",
    "build_stats",
    "build_sum",
    "build_terms",
    "build_value_count",
]
