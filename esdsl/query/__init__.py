"""Query DSL.

Every query kind has a ``build_<kind>`` constructor returning a builder
with fluent ``with_<option>`` setters; ``build()`` turns the builder into
a :class:`Query`.
"""

from esdsl.query.common import (
    FieldBasedQuery,
    MatchAllQuery,
    Operator,
    Query,
    QueryBuilder,
    Rewrite,
    ZeroTermsQuery,
    build_match_all,
)
from esdsl.query.compound import (
    BoolQuery,
    BoostingQuery,
    BoostMode,
    ConstantScoreQuery,
    DisMaxQuery,
    FunctionScoreQuery,
    IndicesQuery,
    NoMatch,
    build_bool,
    build_boosting,
    build_constant_score,
    build_dis_max,
    build_function_score,
    build_indices,
)
from esdsl.query.full_text import (
    CommonQuery,
    MatchQuery,
    MatchType,
    MultiMatchQuery,
    MultiMatchType,
    QueryStringQuery,
    SimpleQueryStringFlag,
    SimpleQueryStringQuery,
    build_common,
    build_match,
    build_multi_match,
    build_query_string,
    build_simple_query_string,
)
from esdsl.query.functions import (
    DecayKind,
    Function,
    Modifier,
    MultiValueMode,
    ScoreMode,
    build_decay,
    build_exp,
    build_field_value_factor,
    build_gauss,
    build_linear,
    build_random_score,
    build_script_score,
    build_weight,
)
from esdsl.query.geo import (
    BoundingBoxType,
    GeoBoundingBoxQuery,
    GeoDistanceQuery,
    GeohashCellQuery,
    GeoPolygonQuery,
    GeoShapeQuery,
    IndexedShape,
    OptimizeBbox,
    Shape,
    build_geo_bounding_box,
    build_geo_distance,
    build_geo_polygon,
    build_geo_shape,
    build_geohash_cell,
)
from esdsl.query.joining import (
    HasChildQuery,
    HasParentQuery,
    JoinScoreMode,
    NestedQuery,
    build_has_child,
    build_has_parent,
    build_nested,
)
from esdsl.query.specialized import Doc, MoreLikeThisQuery, build_more_like_this
from esdsl.query.term import (
    ExistsQuery,
    FuzzyQuery,
    IdsQuery,
    PrefixQuery,
    RangeQuery,
    RegexpFlag,
    RegexpQuery,
    TermQuery,
    TermsLookup,
    TermsQuery,
    TypeQuery,
    WildcardQuery,
    build_exists,
    build_fuzzy,
    build_ids,
    build_prefix,
    build_range,
    build_regexp,
    build_term,
    build_terms,
    build_type,
    build_wildcard,
)

__all__ = [
    "BoolQuery",
    "BoostMode",
    "BoostingQuery",
    "BoundingBoxType",
    "CommonQuery",
    "ConstantScoreQuery",
    "DecayKind",
    "DisMaxQuery",
    "Doc",
    "ExistsQuery",
    "FieldBasedQuery",
    "Function",
    "FunctionScoreQuery",
    "FuzzyQuery",
    "GeoBoundingBoxQuery",
    "GeoDistanceQuery",
    "GeoPolygonQuery",
    "GeoShapeQuery",
    "GeohashCellQuery",
    "HasChildQuery",
    "HasParentQuery",
    "IdsQuery",
    "IndexedShape",
    "IndicesQuery",
    "JoinScoreMode",
    "MatchAllQuery",
    "MatchQuery",
    "MatchType",
    "Modifier",
    "MoreLikeThisQuery",
    "MultiMatchQuery",
    "MultiMatchType",
    "MultiValueMode",
    "NestedQuery",
    "NoMatch",
    "Operator",
    "OptimizeBbox",
    "PrefixQuery",
    "Query",
    "QueryBuilder",
    "QueryStringQuery",
    "RangeQuery",
    "RegexpFlag",
    "RegexpQuery",
    "Rewrite",
    "ScoreMode",
    "Shape",
    "SimpleQueryStringFlag",
    "SimpleQueryStringQuery",
    "TermQuery",
    "TermsLookup",
    "TermsQuery",
    "TypeQuery",
    "WildcardQuery",
    "ZeroTermsQuery",
    "build_bool",
    "build_boosting",
    "build_common",
    "build_constant_score",
    "build_decay",
    "build_dis_max",
    "build_exists",
    "build_exp",
    "build_field_value_factor",
    "build_function_score",
    "build_fuzzy",
    "build_gauss",
    "build_geo_bounding_box",
    "build_geo_distance",
    "build_geo_polygon",
    "build_geo_shape",
    "build_geohash_cell",
    "build_has_child",
    "build_has_parent",
    "build_ids",
    "build_indices",
    "build_linear",
    "build_match",
    "build_match_all",
    "build_more_like_this",
    "build_multi_match",
    "build_nested",
    "build_prefix",
    "build_query_string",
    "build_random_score",
    "build_range",
    "build_regexp",
    "build_script_score",
    "build_simple_query_string",
    "build_term",
    "build_terms",
    "build_type",
    "build_weight",
    "build_wildcard",
]
