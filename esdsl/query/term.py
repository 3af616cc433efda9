"""Term-level queries: exact values, ranges and patterns on unanalyzed terms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from esdsl.exceptions import UsageError
from esdsl.query.common import FieldBasedQuery, Query, QueryBuilder, Rewrite
from esdsl.units import Flags, Fuzziness
from esdsl.wire import JsonVal, OneOrMany, opt, option, required, serialize_fields, to_json


class RegexpFlag(str, Enum):
    """Optional operators enabled in a ``regexp`` query."""

    ALL = "ALL"
    ANYSTRING = "ANYSTRING"
    COMPLEMENT = "COMPLEMENT"
    EMPTY = "EMPTY"
    INTERSECTION = "INTERSECTION"
    INTERVAL = "INTERVAL"
    NONE = "NONE"


@dataclass
class TermQuery(FieldBasedQuery):
    """Exact term match."""

    KIND: ClassVar[str] = "term"

    field: str = required(skip=True)
    value: JsonVal = required()
    boost: float | None = opt()

    with_boost = option("boost")


def build_term(field: str, value: JsonVal) -> TermQuery:
    return TermQuery(field, value)


@dataclass
class TermsLookup:
    """Fetch the terms of a ``terms`` query from a field of another document."""

    id: JsonVal = required()
    path: str = required()
    index: str | None = opt()
    doc_type: str | None = opt("type")
    routing: str | None = opt()

    def to_json(self) -> dict[str, Any]:
        return serialize_fields(self)


@dataclass
class TermsQuery(FieldBasedQuery):
    """Match any of several exact terms, listed or looked up."""

    KIND: ClassVar[str] = "terms"

    field: str = required(skip=True)
    values: list[JsonVal] | None = opt()
    lookup: TermsLookup | None = opt()

    def with_values(self, values: OneOrMany[JsonVal]) -> TermsQuery:
        self.values = list(values) if isinstance(values, (list, tuple)) else [values]
        self.lookup = None
        return self

    def with_lookup(self, lookup: TermsLookup) -> TermsQuery:
        self.lookup = lookup
        self.values = None
        return self

    def _inner(self) -> Any:
        if self.lookup is not None:
            return self.lookup.to_json()
        return to_json(self.values or [])


def build_terms(field: str) -> TermsQuery:
    return TermsQuery(field)


@dataclass
class RangeQuery(FieldBasedQuery):
    """Terms within bounds.

    ``gte``/``gt``/``lte``/``lt`` are the documented bounds. The legacy
    ``from``/``to`` with ``include_lower``/``include_upper`` are accepted
    too, but mixing both styles on the same side is rejected by
    :meth:`build`.
    """

    KIND: ClassVar[str] = "range"

    field: str = required(skip=True)
    gte: JsonVal | None = opt()
    gt: JsonVal | None = opt()
    lte: JsonVal | None = opt()
    lt: JsonVal | None = opt()
    from_: JsonVal | None = opt("from")
    to: JsonVal | None = opt()
    include_lower: bool | None = opt()
    include_upper: bool | None = opt()
    boost: float | None = opt()
    time_zone: str | None = opt()
    format: str | None = opt()

    with_gte = option("gte")
    with_gt = option("gt")
    with_lte = option("lte")
    with_lt = option("lt")
    with_from = option("from_")
    with_to = option("to")
    with_include_lower = option("include_lower")
    with_include_upper = option("include_upper")
    with_boost = option("boost")
    with_time_zone = option("time_zone")
    with_format = option("format")

    def build(self) -> Query:
        """Build the query.

        Raises:
            UsageError: If a legacy bound is combined with a modern bound
                on the same side of the range.
        """
        legacy_lower = self.from_ is not None or self.include_lower is not None
        legacy_upper = self.to is not None or self.include_upper is not None
        if legacy_lower and (self.gte is not None or self.gt is not None):
            raise UsageError(f"Range on '{self.field}' mixes 'from' with 'gte'/'gt'")
        if legacy_upper and (self.lte is not None or self.lt is not None):
            raise UsageError(f"Range on '{self.field}' mixes 'to' with 'lte'/'lt'")
        return super().build()


def build_range(field: str) -> RangeQuery:
    return RangeQuery(field)


@dataclass
class ExistsQuery(QueryBuilder):
    """Documents with any non-null value in a field."""

    KIND: ClassVar[str] = "exists"

    field: str = required()


def build_exists(field: str) -> ExistsQuery:
    return ExistsQuery(field)


@dataclass
class PrefixQuery(FieldBasedQuery):
    """Terms starting with a prefix."""

    KIND: ClassVar[str] = "prefix"

    field: str = required(skip=True)
    value: str = required()
    boost: float | None = opt()
    rewrite: Rewrite | None = opt()

    with_boost = option("boost")
    with_rewrite = option("rewrite")


def build_prefix(field: str, value: str) -> PrefixQuery:
    return PrefixQuery(field, value)


@dataclass
class WildcardQuery(FieldBasedQuery):
    """Terms matching a ``*``/``?`` pattern."""

    KIND: ClassVar[str] = "wildcard"

    field: str = required(skip=True)
    value: str = required()
    boost: float | None = opt()
    rewrite: Rewrite | None = opt()

    with_boost = option("boost")
    with_rewrite = option("rewrite")


def build_wildcard(field: str, value: str) -> WildcardQuery:
    return WildcardQuery(field, value)


@dataclass
class RegexpQuery(FieldBasedQuery):
    """Terms matching a regular expression."""

    KIND: ClassVar[str] = "regexp"

    field: str = required(skip=True)
    value: str = required()
    boost: float | None = opt()
    flags: Flags | None = opt()
    max_determined_states: int | None = opt()

    with_boost = option("boost")
    with_max_determined_states = option("max_determined_states")

    def with_flags(self, *flags: RegexpFlag) -> RegexpQuery:
        self.flags = Flags(*flags)
        return self


def build_regexp(field: str, value: str) -> RegexpQuery:
    return RegexpQuery(field, value)


@dataclass
class FuzzyQuery(FieldBasedQuery):
    """Terms within an edit distance of a value."""

    KIND: ClassVar[str] = "fuzzy"

    field: str = required(skip=True)
    value: str = required()
    boost: float | None = opt()
    fuzziness: Fuzziness | int | float | None = opt()
    prefix_length: int | None = opt()
    max_expansions: int | None = opt()

    with_boost = option("boost")
    with_fuzziness = option("fuzziness")
    with_prefix_length = option("prefix_length")
    with_max_expansions = option("max_expansions")


def build_fuzzy(field: str, value: str) -> FuzzyQuery:
    return FuzzyQuery(field, value)


@dataclass
class TypeQuery(QueryBuilder):
    """Documents of a mapping type."""

    KIND: ClassVar[str] = "type"

    value: str = required()


def build_type(value: str) -> TypeQuery:
    return TypeQuery(value)


@dataclass
class IdsQuery(QueryBuilder):
    """Documents with the given ids."""

    KIND: ClassVar[str] = "ids"

    values: list[str] = required()
    doc_type: OneOrMany[str] | None = opt("type")

    with_type = option("doc_type")


def build_ids(values: list[str]) -> IdsQuery:
    return IdsQuery(list(values))
