"""Joining queries across nested objects and parent/child documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from esdsl.query.common import Query, QueryBuilder
from esdsl.wire import opt, option, required


class JoinScoreMode(str, Enum):
    """How the scores of matching children affect the parent."""

    AVG = "avg"
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    NONE = "none"


@dataclass
class NestedQuery(QueryBuilder):
    """Query nested objects as if they were separate documents."""

    KIND: ClassVar[str] = "nested"

    path: str = required()
    query: Query = required()
    score_mode: JoinScoreMode | None = opt()

    with_score_mode = option("score_mode")


def build_nested(path: str, query: Query) -> NestedQuery:
    return NestedQuery(path, query)


@dataclass
class HasChildQuery(QueryBuilder):
    """Parents whose children match a query."""

    KIND: ClassVar[str] = "has_child"

    doc_type: str = required("type")
    query: Query = required()
    score_mode: JoinScoreMode | None = opt()
    min_children: int | None = opt()
    max_children: int | None = opt()
    inner_hits: dict[str, Any] | None = opt()

    with_score_mode = option("score_mode")
    with_min_children = option("min_children")
    with_max_children = option("max_children")
    with_inner_hits = option("inner_hits")


def build_has_child(doc_type: str, query: Query) -> HasChildQuery:
    return HasChildQuery(doc_type, query)


@dataclass
class HasParentQuery(QueryBuilder):
    """Children whose parent matches a query."""

    KIND: ClassVar[str] = "has_parent"

    parent_type: str = required()
    query: Query = required()
    score_mode: JoinScoreMode | None = opt()

    with_score_mode = option("score_mode")


def build_has_parent(parent_type: str, query: Query) -> HasParentQuery:
    return HasParentQuery(parent_type, query)
