"""Sort clauses for search requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from esdsl.exceptions import UsageError
from esdsl.query.common import Query, QueryBuilder
from esdsl.units import DistanceType, DistanceUnit, Location, as_location
from esdsl.wire import JsonVal, opt, option, required, serialize_fields, to_json


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortMode(str, Enum):
    """How a multi-valued field is reduced to one sort value."""

    MIN = "min"
    MAX = "max"
    SUM = "sum"
    AVG = "avg"


class Missing:
    """Where documents without the sort field go, or a substitute value."""

    FIRST: Missing
    LAST: Missing

    def __init__(self, value: str) -> None:
        self.value = value

    def to_json(self) -> str:
        return self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Missing) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Missing({self.value!r})"


Missing.FIRST = Missing("_first")
Missing.LAST = Missing("_last")


@dataclass
class SortField:
    """Sort on a document field."""

    field: str = required(skip=True)
    order: SortOrder | None = opt()
    mode: SortMode | None = opt()
    nested_path: str | None = opt()
    nested_filter: Query | None = opt()
    missing: Missing | str | None = opt()
    unmapped_type: str | None = opt()

    with_order = option("order")
    with_mode = option("mode")
    with_nested_path = option("nested_path")
    with_missing = option("missing")
    with_unmapped_type = option("unmapped_type")

    def with_nested_filter(self, query: Query | QueryBuilder) -> SortField:
        self.nested_filter = query.build() if isinstance(query, QueryBuilder) else query
        return self

    def to_json(self) -> str | dict[str, Any]:
        options = serialize_fields(self)
        if not options:
            return self.field
        return {self.field: options}

    def to_uri_string(self) -> str:
        """Render as ``field`` or ``field:order`` for URI searches."""
        if self.order is None:
            return self.field
        return f"{self.field}:{SortOrder(self.order).value}"


@dataclass
class GeoDistanceSort:
    """Sort by distance from one or more locations."""

    field: str = required(skip=True)
    locations: list[Location] = required(skip=True)
    order: SortOrder | None = opt()
    unit: DistanceUnit | None = opt()
    mode: SortMode | None = opt()
    distance_type: DistanceType | None = opt()

    with_order = option("order")
    with_unit = option("unit")
    with_mode = option("mode")
    with_distance_type = option("distance_type")

    def to_json(self) -> dict[str, Any]:
        locations = to_json(self.locations)
        body = {self.field: locations[0] if len(locations) == 1 else locations}
        body.update(serialize_fields(self))
        return {"_geo_distance": body}


@dataclass
class ScriptSort:
    """Sort by the value a script computes; ``script_type`` is ``number`` or ``string``."""

    script: str = required()
    script_type: str = required("type")
    params: dict[str, JsonVal] | None = opt()
    lang: str | None = opt()
    order: SortOrder | None = opt()

    with_order = option("order")
    with_lang = option("lang")

    def add_param(self, key: str, value: JsonVal) -> ScriptSort:
        if self.params is None:
            self.params = {}
        self.params[key] = value
        return self

    def to_json(self) -> dict[str, Any]:
        return {"_script": serialize_fields(self)}


SortBy = SortField | GeoDistanceSort | ScriptSort


class Sort:
    """An ordered list of sort clauses."""

    def __init__(self, fields: list[SortBy] | None = None) -> None:
        self.fields: list[SortBy] = list(fields or [])

    @classmethod
    def field(cls, name: str, order: SortOrder | None = None) -> Sort:
        return cls([SortField(name, order)])

    @classmethod
    def field_orders(cls, fields: list[tuple[str, SortOrder | None]]) -> Sort:
        return cls([SortField(name, order) for name, order in fields])

    @classmethod
    def parse(cls, text: str) -> Sort:
        """Parse the URI form ``a:asc,b`` back into field sorts."""
        fields = []
        for part in filter(None, (p.strip() for p in text.split(","))):
            name, _, order = part.partition(":")
            try:
                fields.append(SortField(name, SortOrder(order) if order else None))
            except ValueError:
                raise UsageError(f"Invalid sort order '{order}' for field '{name}'") from None
        return cls(fields)

    def add(self, sort: SortBy) -> Sort:
        self.fields.append(sort)
        return self

    def to_uri_string(self) -> str:
        """Render as a comma-separated URI parameter.

        Raises:
            UsageError: If a clause other than a field sort is present.
        """
        parts = []
        for sort in self.fields:
            if not isinstance(sort, SortField):
                raise UsageError("Only field sorts can be used in a URI search")
            parts.append(sort.to_uri_string())
        return ",".join(parts)

    def to_json(self) -> list[Any]:
        return [sort.to_json() for sort in self.fields]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Sort) and other.fields == self.fields

    def __len__(self) -> int:
        return len(self.fields)


def build_geo_distance_sort(field: str, locations: Any) -> GeoDistanceSort:
    if not isinstance(locations, list):
        locations = [locations]
    if not locations:
        raise UsageError("Geo distance sort needs at least one location")
    return GeoDistanceSort(field, [as_location(location) for location in locations])
