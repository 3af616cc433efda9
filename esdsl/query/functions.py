"""Score functions embedded in ``function_score`` queries."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from esdsl.query.common import Query
from esdsl.units import Distance, Duration, Location, as_location
from esdsl.wire import JsonVal, field_based, internal, opt, option, required, serialize_fields, to_json

Origin = Union[int, float, str, Location]
"""Decay origin: a number, a date string or a location."""

Scale = Union[int, float, Distance, Duration]
"""Decay scale: a number, a distance or a duration."""


class ScoreMode(str, Enum):
    """How the scores of several functions are combined."""

    MULTIPLY = "multiply"
    SUM = "sum"
    AVG = "avg"
    FIRST = "first"
    MAX = "max"
    MIN = "min"


class Modifier(str, Enum):
    """Transformation applied to a field value before scoring."""

    NONE = "none"
    LOG = "log"
    LOG1P = "log1p"
    LOG2P = "log2p"
    LN = "ln"
    LN1P = "ln1p"
    LN2P = "ln2p"
    SQUARE = "square"
    SQRT = "sqrt"
    RECIPROCAL = "reciprocal"


class MultiValueMode(str, Enum):
    """Which value of a multi-valued field a decay function uses."""

    MIN = "min"
    MAX = "max"
    AVG = "avg"
    SUM = "sum"


class DecayKind(str, Enum):
    """Shape of a decay curve."""

    GAUSS = "gauss"
    EXP = "exp"
    LINEAR = "linear"


class FunctionBuilder:
    """Base class of score function builders.

    Every function may be restricted by a ``filter`` query and scaled by
    a ``weight``; both sit beside the function body.
    """

    KIND: ClassVar[str] = ""

    filter: Query | None
    weight: float | None

    def with_filter(self, query: Query) -> Any:
        self.filter = query
        return self

    def with_weight(self, weight: float) -> Any:
        self.weight = weight
        return self

    def _body(self) -> Any:
        return serialize_fields(self)

    def to_json(self) -> dict[str, Any]:
        entry: dict[str, Any] = {self.KIND: self._body()}
        if self.filter is not None:
            entry["filter"] = self.filter.to_json()
        if self.weight is not None:
            entry["weight"] = self.weight
        return entry

    def build(self) -> Function:
        return Function(copy.deepcopy(self))


@dataclass(frozen=True)
class Function:
    """A built score function."""

    inner: FunctionBuilder

    @property
    def kind(self) -> str:
        return self.inner.KIND

    def to_json(self) -> dict[str, Any]:
        return self.inner.to_json()


@dataclass
class ScriptScoreFunction(FunctionBuilder):
    """Score computed by an inline script."""

    KIND: ClassVar[str] = "script_score"

    inline: str = required()
    lang: str | None = opt()
    params: dict[str, JsonVal] = internal()
    filter: Query | None = internal()
    weight: float | None = internal()

    with_lang = option("lang")

    def with_params(self, params: dict[str, JsonVal]) -> ScriptScoreFunction:
        if self.params is None:
            self.params = {}
        self.params.update(params)
        return self

    def add_param(self, key: str, value: JsonVal) -> ScriptScoreFunction:
        return self.with_params({key: value})

    def _body(self) -> dict[str, Any]:
        body = serialize_fields(self)
        body["params"] = to_json(self.params or {})
        return body


def build_script_score(script: str) -> ScriptScoreFunction:
    return ScriptScoreFunction(script)


@dataclass
class WeightFunction(FunctionBuilder):
    """Constant multiplier, optionally limited to a filter."""

    KIND: ClassVar[str] = "weight"

    weight: float = required()
    filter: Query | None = internal()

    def to_json(self) -> dict[str, Any]:
        entry: dict[str, Any] = {"weight": self.weight}
        if self.filter is not None:
            entry["filter"] = self.filter.to_json()
        return entry


def build_weight(weight: float) -> WeightFunction:
    return WeightFunction(weight)


@dataclass
class RandomScoreFunction(FunctionBuilder):
    """Reproducible random score for a seed."""

    KIND: ClassVar[str] = "random_score"

    seed: int = required()
    filter: Query | None = internal()
    weight: float | None = internal()


def build_random_score(seed: int) -> RandomScoreFunction:
    return RandomScoreFunction(seed)


@dataclass
class FieldValueFactorFunction(FunctionBuilder):
    """Score derived from a numeric document field."""

    KIND: ClassVar[str] = "field_value_factor"

    field: str = required()
    factor: float | None = opt()
    modifier: Modifier | None = opt()
    missing: JsonVal | None = opt()
    filter: Query | None = internal()
    weight: float | None = internal()

    with_factor = option("factor")
    with_modifier = option("modifier")
    with_missing = option("missing")


def build_field_value_factor(field: str) -> FieldValueFactorFunction:
    return FieldValueFactorFunction(field)


@dataclass
class DecayFunction(FunctionBuilder):
    """Score decaying with the distance of a field value from an origin."""

    decay_kind: DecayKind = required(skip=True)
    field: str = required(skip=True)
    origin: Origin = required()
    scale: Scale | None = opt()
    offset: Scale | None = opt()
    decay: float | None = opt()
    multi_value_mode: MultiValueMode | None = opt(outer=True)
    filter: Query | None = internal()
    weight: float | None = internal()

    with_scale = option("scale")
    with_offset = option("offset")
    with_decay = option("decay")
    with_multi_value_mode = option("multi_value_mode")

    @property
    def KIND(self) -> str:  # type: ignore[override]
        return DecayKind(self.decay_kind).value

    def _body(self) -> dict[str, Any]:
        return field_based(
            self.field,
            serialize_fields(self, outer=False),
            serialize_fields(self, outer=True),
        )


def _origin(origin: Any) -> Origin:
    # (lat, lon) pairs become geo points; numbers and date strings stay as they are
    if isinstance(origin, (tuple, list)):
        return as_location(origin)
    return origin


def build_decay(kind: DecayKind, field: str, origin: Origin | tuple[float, float]) -> DecayFunction:
    return DecayFunction(kind, field, _origin(origin))


def build_gauss(field: str, origin: Origin | tuple[float, float]) -> DecayFunction:
    return build_decay(DecayKind.GAUSS, field, origin)


def build_exp(field: str, origin: Origin | tuple[float, float]) -> DecayFunction:
    return build_decay(DecayKind.EXP, field, origin)


def build_linear(field: str, origin: Origin | tuple[float, float]) -> DecayFunction:
    return build_decay(DecayKind.LINEAR, field, origin)
