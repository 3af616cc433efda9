"""Compound queries: wrap, combine and rescore other queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from esdsl.query.common import Query, QueryBuilder
from esdsl.query.functions import Function, ScoreMode
from esdsl.units import MinimumShouldMatch
from esdsl.wire import OneOrMany, internal, opt, option, required, serialize_fields, to_json


class BoostMode(str, Enum):
    """How the function score is combined with the query score."""

    MULTIPLY = "multiply"
    REPLACE = "replace"
    SUM = "sum"
    AVG = "avg"
    MAX = "max"
    MIN = "min"


class NoMatch(str, Enum):
    """Built-in choices for the ``no_match_query`` of an ``indices`` query."""

    NONE = "none"
    ALL = "all"


NoMatchQuery = Union[NoMatch, Query]


@dataclass
class ConstantScoreQuery(QueryBuilder):
    """Every document matching the filter gets the same score."""

    KIND: ClassVar[str] = "constant_score"

    filter: Query = required()
    boost: float | None = opt()

    with_boost = option("boost")


def build_constant_score(query: Query) -> ConstantScoreQuery:
    return ConstantScoreQuery(query)


@dataclass
class BoolQuery(QueryBuilder):
    """Boolean combination of clauses; every clause is optional."""

    KIND: ClassVar[str] = "bool"

    must: OneOrMany[Query] | None = opt()
    filter: OneOrMany[Query] | None = opt()
    should: OneOrMany[Query] | None = opt()
    must_not: OneOrMany[Query] | None = opt()
    minimum_should_match: MinimumShouldMatch | int | None = opt()
    boost: float | None = opt()
    disable_coord: bool | None = opt()

    with_must = option("must")
    with_filter = option("filter")
    with_should = option("should")
    with_must_not = option("must_not")
    with_minimum_should_match = option("minimum_should_match")
    with_boost = option("boost")
    with_disable_coord = option("disable_coord")


def build_bool() -> BoolQuery:
    return BoolQuery()


@dataclass
class DisMaxQuery(QueryBuilder):
    """Score by the best matching sub-query, plus a tie breaker for the rest."""

    KIND: ClassVar[str] = "dis_max"

    queries: list[Query] = required()
    tie_breaker: float | None = opt()
    boost: float | None = opt()

    with_tie_breaker = option("tie_breaker")
    with_boost = option("boost")


def build_dis_max(queries: list[Query]) -> DisMaxQuery:
    return DisMaxQuery(list(queries))


@dataclass
class FunctionScoreQuery(QueryBuilder):
    """Rescore the documents of a query with score functions."""

    KIND: ClassVar[str] = "function_score"

    functions: list[Function] = internal()
    query: Query | None = opt()
    boost: float | None = opt()
    max_boost: float | None = opt()
    score_mode: ScoreMode | None = opt()
    boost_mode: BoostMode | None = opt()
    min_score: float | None = opt()

    with_query = option("query")
    with_boost = option("boost")
    with_max_boost = option("max_boost")
    with_score_mode = option("score_mode")
    with_boost_mode = option("boost_mode")
    with_min_score = option("min_score")

    def with_functions(self, functions: list[Function]) -> FunctionScoreQuery:
        self.functions = list(functions)
        return self

    def with_function(self, function: Function) -> FunctionScoreQuery:
        self.functions = [function]
        return self

    def add_function(self, function: Function) -> FunctionScoreQuery:
        self.functions = [*(self.functions or []), function]
        return self

    def _body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"functions": to_json(self.functions or [])}
        body.update(serialize_fields(self))
        return body


def build_function_score() -> FunctionScoreQuery:
    return FunctionScoreQuery()


@dataclass
class BoostingQuery(QueryBuilder):
    """Demote documents matching a negative query instead of excluding them."""

    KIND: ClassVar[str] = "boosting"

    positive: Query | None = opt()
    negative: Query | None = opt()
    negative_boost: float | None = opt()

    with_positive = option("positive")
    with_negative = option("negative")
    with_negative_boost = option("negative_boost")


def build_boosting() -> BoostingQuery:
    return BoostingQuery()


@dataclass
class IndicesQuery(QueryBuilder):
    """Run one query on some indices and another on the rest."""

    KIND: ClassVar[str] = "indices"

    indices: OneOrMany[str] = required()
    query: Query = required()
    no_match_query: NoMatchQuery | None = opt()

    with_no_match_query = option("no_match_query")


def build_indices(indices: OneOrMany[str], query: Query) -> IndicesQuery:
    return IndicesQuery(indices, query)
