"""Full-text queries: match, multi_match, common, query_string, simple_query_string."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from esdsl.query.common import FieldBasedQuery, Operator, QueryBuilder, Rewrite, ZeroTermsQuery
from esdsl.units import Flags, Fuzziness, MinimumShouldMatch
from esdsl.wire import opt, option, required


class MatchType(str, Enum):
    """Kind of ``match`` query."""

    BOOLEAN = "boolean"
    PHRASE = "phrase"
    PHRASE_PREFIX = "phrase_prefix"


class MultiMatchType(str, Enum):
    """How a ``multi_match`` query combines its fields."""

    BEST_FIELDS = "best_fields"
    MOST_FIELDS = "most_fields"
    CROSS_FIELDS = "cross_fields"
    PHRASE = "phrase"
    PHRASE_PREFIX = "phrase_prefix"


class SimpleQueryStringFlag(str, Enum):
    """Syntax features enabled in a ``simple_query_string`` query."""

    ALL = "ALL"
    NONE = "NONE"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    PREFIX = "PREFIX"
    PHRASE = "PHRASE"
    PRECEDENCE = "PRECEDENCE"
    ESCAPE = "ESCAPE"
    WHITESPACE = "WHITESPACE"
    FUZZY = "FUZZY"
    NEAR = "NEAR"
    SLOP = "SLOP"


@dataclass
class MatchQuery(FieldBasedQuery):
    """Analyzed match against a single field."""

    KIND: ClassVar[str] = "match"

    field: str = required(skip=True)
    query: Any = required()
    match_type: MatchType | None = opt("type")
    cutoff_frequency: float | None = opt()
    lenient: bool | None = opt()
    analyzer: str | None = opt()
    boost: float | None = opt()
    operator: Operator | None = opt()
    minimum_should_match: MinimumShouldMatch | int | None = opt()
    fuzziness: Fuzziness | int | float | None = opt()
    prefix_length: int | None = opt()
    max_expansions: int | None = opt()
    rewrite: Rewrite | None = opt()
    zero_terms_query: ZeroTermsQuery | None = opt()
    slop: int | None = opt()

    with_type = option("match_type")
    with_cutoff_frequency = option("cutoff_frequency")
    with_lenient = option("lenient")
    with_analyzer = option("analyzer")
    with_boost = option("boost")
    with_operator = option("operator")
    with_minimum_should_match = option("minimum_should_match")
    with_fuzziness = option("fuzziness")
    with_prefix_length = option("prefix_length")
    with_max_expansions = option("max_expansions")
    with_rewrite = option("rewrite")
    with_zero_terms_query = option("zero_terms_query")
    with_slop = option("slop")


def build_match(field: str, query: Any) -> MatchQuery:
    return MatchQuery(field, query)


@dataclass
class MultiMatchQuery(QueryBuilder):
    """Match the same text against several fields."""

    KIND: ClassVar[str] = "multi_match"

    fields: list[str] = required()
    query: Any = required()
    match_type: MultiMatchType | None = opt("type")
    tie_breaker: float | None = opt()
    analyzer: str | None = opt()
    boost: float | None = opt()
    operator: Operator | None = opt()
    minimum_should_match: MinimumShouldMatch | int | None = opt()
    fuzziness: Fuzziness | int | float | None = opt()
    prefix_length: int | None = opt()
    max_expansions: int | None = opt()
    rewrite: Rewrite | None = opt()
    zero_terms_query: ZeroTermsQuery | None = opt()
    cutoff_frequency: float | None = opt()
    slop: int | None = opt()

    with_type = option("match_type")
    with_tie_breaker = option("tie_breaker")
    with_analyzer = option("analyzer")
    with_boost = option("boost")
    with_operator = option("operator")
    with_minimum_should_match = option("minimum_should_match")
    with_fuzziness = option("fuzziness")
    with_prefix_length = option("prefix_length")
    with_max_expansions = option("max_expansions")
    with_rewrite = option("rewrite")
    with_zero_terms_query = option("zero_terms_query")
    with_cutoff_frequency = option("cutoff_frequency")
    with_slop = option("slop")


def build_multi_match(fields: list[str], query: Any) -> MultiMatchQuery:
    return MultiMatchQuery(list(fields), query)


@dataclass
class CommonQuery(FieldBasedQuery):
    """Common-terms query: rare terms are required, frequent ones only score."""

    KIND: ClassVar[str] = "common"

    field: str = required(skip=True)
    query: Any = required()
    cutoff_frequency: float | None = opt()
    low_freq_operator: Operator | None = opt()
    high_freq_operator: Operator | None = opt()
    minimum_should_match: MinimumShouldMatch | int | None = opt()
    boost: float | None = opt()
    analyzer: str | None = opt()
    disable_coord: bool | None = opt()

    with_cutoff_frequency = option("cutoff_frequency")
    with_low_freq_operator = option("low_freq_operator")
    with_high_freq_operator = option("high_freq_operator")
    with_minimum_should_match = option("minimum_should_match")
    with_boost = option("boost")
    with_analyzer = option("analyzer")
    with_disable_coord = option("disable_coord")


def build_common(field: str, query: Any) -> CommonQuery:
    return CommonQuery(field, query)


@dataclass
class QueryStringQuery(QueryBuilder):
    """Query parsed with the full Lucene query syntax."""

    KIND: ClassVar[str] = "query_string"

    query: str = required()
    default_field: str | None = opt()
    fields: list[str] | None = opt()
    default_operator: Operator | None = opt()
    analyzer: str | None = opt()
    allow_leading_wildcard: bool | None = opt()
    lowercase_expanded_terms: bool | None = opt()
    enable_position_increments: bool | None = opt()
    fuzzy_max_expansions: int | None = opt()
    fuzziness: Fuzziness | int | float | None = opt()
    fuzzy_prefix_length: int | None = opt()
    phrase_slop: int | None = opt()
    boost: float | None = opt()
    analyze_wildcard: bool | None = opt()
    auto_generate_phrase_queries: bool | None = opt()
    max_determined_states: int | None = opt()
    minimum_should_match: MinimumShouldMatch | int | None = opt()
    lenient: bool | None = opt()
    locale: str | None = opt()
    time_zone: str | None = opt()
    use_dis_max: bool | None = opt()

    with_default_field = option("default_field")
    with_fields = option("fields")
    with_default_operator = option("default_operator")
    with_analyzer = option("analyzer")
    with_allow_leading_wildcard = option("allow_leading_wildcard")
    with_lowercase_expanded_terms = option("lowercase_expanded_terms")
    with_enable_position_increments = option("enable_position_increments")
    with_fuzzy_max_expansions = option("fuzzy_max_expansions")
    with_fuzziness = option("fuzziness")
    with_fuzzy_prefix_length = option("fuzzy_prefix_length")
    with_phrase_slop = option("phrase_slop")
    with_boost = option("boost")
    with_analyze_wildcard = option("analyze_wildcard")
    with_auto_generate_phrase_queries = option("auto_generate_phrase_queries")
    with_max_determined_states = option("max_determined_states")
    with_minimum_should_match = option("minimum_should_match")
    with_lenient = option("lenient")
    with_locale = option("locale")
    with_time_zone = option("time_zone")
    with_use_dis_max = option("use_dis_max")


def build_query_string(query: str) -> QueryStringQuery:
    return QueryStringQuery(query)


@dataclass
class SimpleQueryStringQuery(QueryBuilder):
    """Forgiving query syntax that never raises parse errors."""

    KIND: ClassVar[str] = "simple_query_string"

    query: str = required()
    fields: list[str] | None = opt()
    default_operator: Operator | None = opt()
    analyzer: str | None = opt()
    flags: Flags | None = opt()
    lowercase_expanded_terms: bool | None = opt()
    analyze_wildcard: bool | None = opt()
    locale: str | None = opt()
    lenient: bool | None = opt()
    minimum_should_match: MinimumShouldMatch | int | None = opt()

    with_fields = option("fields")
    with_default_operator = option("default_operator")
    with_analyzer = option("analyzer")
    with_lowercase_expanded_terms = option("lowercase_expanded_terms")
    with_analyze_wildcard = option("analyze_wildcard")
    with_locale = option("locale")
    with_lenient = option("lenient")
    with_minimum_should_match = option("minimum_should_match")

    def with_flags(self, *flags: SimpleQueryStringFlag) -> SimpleQueryStringQuery:
        """Enable syntax features, e.g. ``with_flags(AND, NOT)`` gives ``"AND|NOT"``."""
        self.flags = Flags(*flags)
        return self


def build_simple_query_string(query: str) -> SimpleQueryStringQuery:
    return SimpleQueryStringQuery(query)
