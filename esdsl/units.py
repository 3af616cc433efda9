"""Domain units and their canonical wire forms."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from esdsl.exceptions import UsageError

_AMOUNT_RE = re.compile(r"^(-?\d+(?:\.\d+)?)([A-Za-z]+)$")


def format_number(value: int | float) -> str:
    """Format a number without a trailing ``.0`` for integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------


class DurationUnit(str, Enum):
    """Time units understood by the server."""

    MONTH = "M"
    WEEK = "w"
    DAY = "d"
    HOUR = "h"
    MINUTE = "m"
    SECOND = "s"
    MILLISECOND = "ms"


@dataclass(frozen=True)
class Duration:
    """A whole amount of a time unit, e.g. ``1m`` or ``500ms``."""

    amount: int
    unit: DurationUnit

    @classmethod
    def months(cls, amount: int) -> Duration:
        return cls(amount, DurationUnit.MONTH)

    @classmethod
    def weeks(cls, amount: int) -> Duration:
        return cls(amount, DurationUnit.WEEK)

    @classmethod
    def days(cls, amount: int) -> Duration:
        return cls(amount, DurationUnit.DAY)

    @classmethod
    def hours(cls, amount: int) -> Duration:
        return cls(amount, DurationUnit.HOUR)

    @classmethod
    def minutes(cls, amount: int) -> Duration:
        return cls(amount, DurationUnit.MINUTE)

    @classmethod
    def seconds(cls, amount: int) -> Duration:
        return cls(amount, DurationUnit.SECOND)

    @classmethod
    def milliseconds(cls, amount: int) -> Duration:
        return cls(amount, DurationUnit.MILLISECOND)

    @classmethod
    def parse(cls, text: str) -> Duration:
        """Parse the ``<integer><unit>`` form.

        Raises:
            UsageError: If the text is not a valid duration.
        """
        match = _AMOUNT_RE.match(text.strip())
        if match is None or "." in match.group(1):
            raise UsageError(f"Invalid duration: {text!r}")
        try:
            unit = DurationUnit(match.group(2))
        except ValueError:
            raise UsageError(f"Invalid duration unit in {text!r}") from None
        return cls(int(match.group(1)), unit)

    def __str__(self) -> str:
        return f"{self.amount}{self.unit.value}"

    def to_json(self) -> str:
        return str(self)


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------


class DistanceUnit(str, Enum):
    """Distance units understood by the server."""

    MILE = "mi"
    YARD = "yd"
    FEET = "ft"
    INCH = "in"
    KILOMETER = "km"
    METER = "m"
    CENTIMETER = "cm"
    MILLIMETER = "mm"
    NAUTICAL_MILE = "NM"


@dataclass(frozen=True)
class Distance:
    """An amount of a distance unit, e.g. ``3km``."""

    amount: float
    unit: DistanceUnit

    @classmethod
    def parse(cls, text: str) -> Distance:
        """Parse the ``<number><unit>`` form.

        Raises:
            UsageError: If the text is not a valid distance.
        """
        match = _AMOUNT_RE.match(text.strip())
        if match is None:
            raise UsageError(f"Invalid distance: {text!r}")
        try:
            unit = DistanceUnit(match.group(2))
        except ValueError:
            raise UsageError(f"Invalid distance unit in {text!r}") from None
        return cls(float(match.group(1)), unit)

    def __str__(self) -> str:
        return f"{format_number(self.amount)}{self.unit.value}"

    def to_json(self) -> str:
        return str(self)


class DistanceType(str, Enum):
    """How distances between geo points are computed."""

    SLOPPY_ARC = "sloppy_arc"
    ARC = "arc"
    PLANE = "plane"


# ---------------------------------------------------------------------------
# Geo
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair."""

    lat: float
    lon: float

    def to_json(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class Geohash:
    """A location encoded as a geohash string."""

    value: str

    def to_json(self) -> str:
        return self.value


Location = Union[GeoPoint, Geohash]


def as_location(value: Any) -> Location:
    """Coerce ``(lat, lon)`` tuples and geohash strings into a Location."""
    if isinstance(value, (GeoPoint, Geohash)):
        return value
    if isinstance(value, str):
        return Geohash(value)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return GeoPoint(float(value[0]), float(value[1]))
    raise UsageError(f"Cannot use {value!r} as a location")


@dataclass(frozen=True)
class GeoBoxCorners:
    """A bounding box given by its top-left and bottom-right corners."""

    top_left: Location
    bottom_right: Location

    def to_json(self) -> dict[str, Any]:
        return {
            "top_left": self.top_left.to_json(),
            "bottom_right": self.bottom_right.to_json(),
        }


@dataclass(frozen=True)
class GeoBoxVertices:
    """A bounding box given by its four edges."""

    top: float
    left: float
    bottom: float
    right: float

    def to_json(self) -> dict[str, float]:
        return {"top": self.top, "left": self.left, "bottom": self.bottom, "right": self.right}


GeoBox = Union[GeoBoxCorners, GeoBoxVertices]


# ---------------------------------------------------------------------------
# Matching policies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Fuzziness:
    """Allowed edit distance: ``auto`` or an explicit number."""

    value: int | float | None = None

    @classmethod
    def auto(cls) -> Fuzziness:
        return cls(None)

    def to_json(self) -> int | float | str:
        if self.value is None:
            return "auto"
        return self.value


@dataclass(frozen=True)
class MinimumShouldMatch:
    """How many optional clauses must match.

    Use the constructors rather than the initializer; ``value`` holds
    the wire form.
    """

    value: Any

    @classmethod
    def integer(cls, count: int) -> MinimumShouldMatch:
        return cls(count)

    @classmethod
    def percentage(cls, percent: float) -> MinimumShouldMatch:
        return cls(f"{format_number(percent)}%")

    @classmethod
    def combination(cls, threshold: int, then: int | float | str) -> MinimumShouldMatch:
        """Above ``threshold`` clauses, require ``then`` (count or ``"n%"``)."""
        return cls(f"{threshold}<{_combination_part(then)}")

    @classmethod
    def multiple(cls, combinations: list[tuple[int, int | float | str]]) -> MinimumShouldMatch:
        return cls(" ".join(f"{t}<{_combination_part(v)}" for t, v in combinations))

    @classmethod
    def low_high(
        cls,
        low: MinimumShouldMatch | int,
        high: MinimumShouldMatch | int,
    ) -> MinimumShouldMatch:
        """Separate policies for low- and high-frequency terms."""
        return cls({"low_freq": _msm_json(low), "high_freq": _msm_json(high)})

    def to_json(self) -> Any:
        return self.value


def _combination_part(value: int | float | str) -> str:
    if isinstance(value, float):
        return f"{format_number(value)}%"
    return str(value)


def _msm_json(value: MinimumShouldMatch | int) -> Any:
    if isinstance(value, MinimumShouldMatch):
        return value.value
    return value


@dataclass(frozen=True, init=False)
class Flags:
    """A set of flags serialized as ``|``-separated tokens."""

    flags: tuple[Enum, ...]

    def __init__(self, *flags: Enum) -> None:
        if len(flags) == 1 and isinstance(flags[0], (list, tuple)):
            flags = tuple(flags[0])
        object.__setattr__(self, "flags", tuple(flags))

    def __str__(self) -> str:
        return "|".join(str(flag.value) for flag in self.flags)

    def to_json(self) -> str:
        return str(self)
