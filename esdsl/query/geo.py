"""Geo queries: shapes, boxes, distances, polygons and geohash cells.

All geo queries are field-based: the location or shape sits under the
field name and ``coerce``/``ignore_malformed`` sit beside it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from esdsl.query.common import FieldBasedQuery
from esdsl.units import Distance, DistanceType, GeoBox, Location, as_location
from esdsl.wire import opt, option, required, serialize_fields, to_json


class BoundingBoxType(str, Enum):
    """Execution strategy of a bounding box query."""

    INDEXED = "indexed"
    MEMORY = "memory"


class OptimizeBbox(str, Enum):
    """Bounding box pre-filter used by a distance query."""

    MEMORY = "memory"
    INDEXED = "indexed"
    NONE = "none"


@dataclass
class Shape:
    """An inline shape such as an envelope or a polygon."""

    shape_type: str = required("type")
    coordinates: Any = required()

    def to_json(self) -> dict[str, Any]:
        return serialize_fields(self)


@dataclass
class IndexedShape:
    """A reference to a shape stored in another document."""

    id: str = required()
    doc_type: str = required("type")
    index: str = required()
    path: str = required()

    def to_json(self) -> dict[str, Any]:
        return serialize_fields(self)


class _GeoOptions:
    coerce: bool | None
    ignore_malformed: bool | None

    with_coerce = option("coerce")
    with_ignore_malformed = option("ignore_malformed")


@dataclass
class GeoShapeQuery(_GeoOptions, FieldBasedQuery):
    """Documents whose shapes relate to a given shape."""

    KIND: ClassVar[str] = "geo_shape"

    field: str = required(skip=True)
    shape: Shape | None = opt()
    indexed_shape: IndexedShape | None = opt()
    geojson: dict[str, Any] | None = opt("shape")
    coerce: bool | None = opt(outer=True)
    ignore_malformed: bool | None = opt(outer=True)

    def with_shape(self, shape: Shape) -> GeoShapeQuery:
        self.shape, self.indexed_shape, self.geojson = shape, None, None
        return self

    def with_indexed_shape(self, indexed_shape: IndexedShape) -> GeoShapeQuery:
        self.shape, self.indexed_shape, self.geojson = None, indexed_shape, None
        return self

    def with_geojson(self, geometry: dict[str, Any]) -> GeoShapeQuery:
        self.shape, self.indexed_shape, self.geojson = None, None, dict(geometry)
        return self


def build_geo_shape(field: str) -> GeoShapeQuery:
    return GeoShapeQuery(field)


@dataclass
class GeoBoundingBoxQuery(_GeoOptions, FieldBasedQuery):
    """Points inside a bounding box."""

    KIND: ClassVar[str] = "geo_bounding_box"

    field: str = required(skip=True)
    geo_box: GeoBox = required()
    coerce: bool | None = opt(outer=True)
    ignore_malformed: bool | None = opt(outer=True)
    box_type: BoundingBoxType | None = opt("type", outer=True)

    with_type = option("box_type")

    def _inner(self) -> Any:
        return to_json(self.geo_box)


def build_geo_bounding_box(field: str, geo_box: GeoBox) -> GeoBoundingBoxQuery:
    return GeoBoundingBoxQuery(field, geo_box)


@dataclass
class GeoDistanceQuery(_GeoOptions, FieldBasedQuery):
    """Points within a distance of a location."""

    KIND: ClassVar[str] = "geo_distance"

    field: str = required(skip=True)
    location: Location = required()
    distance: Distance = required(outer=True)
    distance_type: DistanceType | None = opt(outer=True)
    optimize_bbox: OptimizeBbox | None = opt(outer=True)
    coerce: bool | None = opt(outer=True)
    ignore_malformed: bool | None = opt(outer=True)

    with_distance_type = option("distance_type")
    with_optimize_bbox = option("optimize_bbox")

    def _inner(self) -> Any:
        return to_json(self.location)


def build_geo_distance(field: str, location: Any, distance: Distance | str) -> GeoDistanceQuery:
    if isinstance(distance, str):
        distance = Distance.parse(distance)
    return GeoDistanceQuery(field, as_location(location), distance)


@dataclass
class GeoPolygonQuery(_GeoOptions, FieldBasedQuery):
    """Points inside a polygon."""

    KIND: ClassVar[str] = "geo_polygon"

    field: str = required(skip=True)
    points: list[Location] = required()
    coerce: bool | None = opt(outer=True)
    ignore_malformed: bool | None = opt(outer=True)


def build_geo_polygon(field: str, points: list[Any]) -> GeoPolygonQuery:
    return GeoPolygonQuery(field, [as_location(p) for p in points])


@dataclass
class GeohashCellQuery(_GeoOptions, FieldBasedQuery):
    """Points inside the geohash cell of a location."""

    KIND: ClassVar[str] = "geohash_cell"

    field: str = required(skip=True)
    location: Location = required()
    precision: int | Distance | None = opt(outer=True)
    neighbors: bool | None = opt(outer=True)
    coerce: bool | None = opt(outer=True)
    ignore_malformed: bool | None = opt(outer=True)

    with_precision = option("precision")
    with_neighbors = option("neighbors")

    def _inner(self) -> Any:
        return to_json(self.location)


def build_geohash_cell(field: str, location: Any) -> GeohashCellQuery:
    return GeohashCellQuery(field, as_location(location))
