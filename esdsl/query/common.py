"""Query sum type, builder base classes and shared query options."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from esdsl.wire import field_based, option, serialize_fields


class QueryBuilder:
    """Base class of every query builder.

    Subclasses are dataclasses naming their wire kind in ``KIND``.
    ``build()`` snapshots the builder into an immutable :class:`Query`,
    so later setter calls do not alter queries already built.
    """

    KIND: ClassVar[str] = ""

    def _body(self) -> Any:
        return serialize_fields(self)

    def to_json(self) -> dict[str, Any]:
        return {self.KIND: self._body()}

    def build(self) -> Query:
        return Query(copy.deepcopy(self))


class FieldBasedQuery(QueryBuilder):
    """Builder for queries shaped ``{"<kind>": {"<field>": {...}, <outer>}}``.

    Subclasses declare ``field`` as a skipped attribute; their remaining
    attributes are inner options unless marked ``outer``.
    """

    field: str

    def _inner(self) -> Any:
        return serialize_fields(self, outer=False)

    def _body(self) -> Any:
        return field_based(self.field, self._inner(), serialize_fields(self, outer=True))


@dataclass(frozen=True)
class Query:
    """A built query holding exactly one query kind."""

    inner: QueryBuilder

    @property
    def kind(self) -> str:
        return self.inner.KIND

    def to_json(self) -> dict[str, Any]:
        return self.inner.to_json()


@dataclass
class MatchAllQuery(QueryBuilder):
    """Matches every document."""

    KIND: ClassVar[str] = "match_all"

    boost: float | None = None

    with_boost = option("boost")


def build_match_all() -> MatchAllQuery:
    return MatchAllQuery()


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------


class Operator(str, Enum):
    """Boolean operator joining analyzed terms."""

    AND = "and"
    OR = "or"


class Rewrite:
    """How multi-term queries are rewritten on the server."""

    def __init__(self, value: str) -> None:
        self.value = value

    CONSTANT_SCORE_AUTO: ClassVar[Rewrite]
    SCORING_BOOLEAN: ClassVar[Rewrite]
    CONSTANT_SCORE_BOOLEAN: ClassVar[Rewrite]
    CONSTANT_SCORE_FILTER: ClassVar[Rewrite]

    @classmethod
    def top_terms(cls, n: int) -> Rewrite:
        return cls(f"top_terms_{n}")

    @classmethod
    def top_terms_boost(cls, n: int) -> Rewrite:
        return cls(f"top_terms_boost_{n}")

    @classmethod
    def top_terms_blended_freqs(cls, n: int) -> Rewrite:
        return cls(f"top_terms_blended_freqs_{n}")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Rewrite) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Rewrite({self.value!r})"

    def to_json(self) -> str:
        return self.value


Rewrite.CONSTANT_SCORE_AUTO = Rewrite("constant_score_auto")
Rewrite.SCORING_BOOLEAN = Rewrite("scoring_boolean")
Rewrite.CONSTANT_SCORE_BOOLEAN = Rewrite("constant_score_boolean")
Rewrite.CONSTANT_SCORE_FILTER = Rewrite("constant_score_filter")


class ZeroTermsQuery(str, Enum):
    """What to match when the analyzer removes every term."""

    NONE = "none"
    ALL = "all"
