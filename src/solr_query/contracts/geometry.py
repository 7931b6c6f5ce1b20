"""GeoJSON geometry contracts and their Well-Known Text rendering."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from solr_query.contracts.errors import GeometryError
from solr_query.contracts.values import NumberValue, format_number


class SpatialOperator(str, Enum):
    """Spatial predicates understood by the search engine."""

    INTERSECTS = "Intersects"
    IS_WITHIN = "IsWithin"
    CONTAINS = "Contains"
    IS_DISJOINT_TO = "IsDisjointTo"


Position = Annotated[tuple[NumberValue, ...], Field(min_length=2, max_length=3)]
LineCoordinates = Annotated[tuple[Position, ...], Field(min_length=2)]
RingCoordinates = Annotated[tuple[Position, ...], Field(min_length=1)]
PolygonCoordinates = Annotated[tuple[RingCoordinates, ...], Field(min_length=1)]


class _Geometry(BaseModel):
    model_config = ConfigDict(frozen=True, revalidate_instances="always")


class Point(_Geometry):
    type: Literal["Point"] = "Point"
    coordinates: Position


class MultiPoint(_Geometry):
    type: Literal["MultiPoint"] = "MultiPoint"
    coordinates: Annotated[tuple[Position, ...], Field(min_length=1)]


class LineString(_Geometry):
    type: Literal["LineString"] = "LineString"
    coordinates: LineCoordinates


class MultiLineString(_Geometry):
    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: Annotated[tuple[LineCoordinates, ...], Field(min_length=1)]


class Polygon(_Geometry):
    type: Literal["Polygon"] = "Polygon"
    coordinates: PolygonCoordinates


class MultiPolygon(_Geometry):
    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: Annotated[tuple[PolygonCoordinates, ...], Field(min_length=1)]


class GeometryCollection(_Geometry):
    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: Annotated[tuple[Geometry, ...], Field(min_length=1)]


Geometry = Annotated[
    Union[
        Point,
        MultiPoint,
        LineString,
        MultiLineString,
        Polygon,
        MultiPolygon,
        GeometryCollection,
    ],
    Field(discriminator="type"),
]


GeometryCollection.model_rebuild()

_geometry_adapter: TypeAdapter[Geometry] = TypeAdapter(Geometry)


class SpatialPredicate(BaseModel):
    """A spatial operator applied to a geometry."""

    model_config = ConfigDict(frozen=True, revalidate_instances="always")

    op: SpatialOperator
    geom: Geometry


def decode_geometry(value: Any) -> Geometry:
    """Decode a GeoJSON mapping (or pass through a geometry model)."""
    try:
        return _geometry_adapter.validate_python(value)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise GeometryError(details) from e


def _position(p: tuple[int | float, ...]) -> str:
    return " ".join(format_number(c) for c in p)


def _positions(ps: tuple[tuple[int | float, ...], ...]) -> str:
    return "(" + ",".join(_position(p) for p in ps) + ")"


def _rings(rings: tuple[tuple[tuple[int | float, ...], ...], ...]) -> str:
    return "(" + ",".join(_positions(r) for r in rings) + ")"


def _body(geom: Geometry) -> str:
    if isinstance(geom, Point):
        return "POINT(" + _position(geom.coordinates) + ")"
    if isinstance(geom, MultiPoint):
        return "MULTIPOINT(" + ",".join(f"({_position(p)})" for p in geom.coordinates) + ")"
    if isinstance(geom, LineString):
        return "LINESTRING" + _positions(geom.coordinates)
    if isinstance(geom, MultiLineString):
        return "MULTILINESTRING" + _rings(geom.coordinates)
    if isinstance(geom, Polygon):
        return "POLYGON" + _rings(geom.coordinates)
    if isinstance(geom, MultiPolygon):
        return "MULTIPOLYGON(" + ",".join(_rings(p) for p in geom.coordinates) + ")"
    if isinstance(geom, GeometryCollection):
        return "GEOMETRYCOLLECTION(" + ",".join(_body(g) for g in geom.geometries) + ")"
    raise GeometryError(f"unsupported geometry {type(geom).__name__}")


def to_wkt(geometry: Any) -> str:
    """Convert a GeoJSON geometry to compact WKT.

    Args:
        geometry: A geometry model or a GeoJSON-shaped mapping.

    Returns:
        WKT text such as ``POINT(-122.17381 37.426002)``.

    Raises:
        GeometryError: If the geometry is malformed.
    """
    return _body(decode_geometry(geometry))
