"""Conversion between geography values and shapely geometries.

For callers that want to run shapely operations (WKT output, measurements,
overlays) on decoded values. The EWKB codecs do not go through here: GEOS
validates shapes on construction (e.g. it rejects one-point line strings),
while the codecs carry shapes through unchanged.
"""

import shapely
from shapely.geometry import LineString as ShapelyLineString
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

from geography_types.config import CONSTANTS
from geography_types.models.geometry import (
    Geography,
    GeometryKind,
    LineString,
    LineStringZ,
    Point,
    PointZ,
    Polygon,
)
from geography_types.spatial.srid import GEOMETRY_TYPES, canonical_srid, from_wkb_geometry
from geography_types.spatial.wkb import GEOMETRY_TYPE_NAMES, WkbGeometry


def to_shape(value: Geography) -> BaseGeometry:
    """Build a shapely geometry for a value.

    The value's root SRID is set on the geometry (0 when absent, GEOS' "no
    SRID"); nested SRIDs are discarded.

    Raises:
        TypeError: If value is not a geography value
        shapely.errors.GEOSException: If GEOS cannot build the geometry
            (e.g. a one-point line string)
    """
    if isinstance(value, Point):
        geom = ShapelyPoint(value.x, value.y)
    elif isinstance(value, PointZ):
        geom = ShapelyPoint(value.x, value.y, value.z)
    elif isinstance(value, LineString):
        geom = ShapelyLineString([(p.x, p.y) for p in value.points])
    elif isinstance(value, LineStringZ):
        geom = ShapelyLineString([(p.x, p.y, p.z) for p in value.points])
    elif isinstance(value, Polygon):
        if not value.rings:
            geom = ShapelyPolygon()
        else:
            shell, *holes = [[(p.x, p.y) for p in ring.points] for ring in value.rings]
            geom = ShapelyPolygon(shell, holes)
    else:
        msg = f"Not a geography value: {type(value).__name__}"
        raise TypeError(msg)

    srid = canonical_srid(value)
    return shapely.set_srid(geom, CONSTANTS.SRID_UNKNOWN if srid is None else srid)


def from_shape(geom: BaseGeometry, kind: GeometryKind, srid: int | None = None) -> Geography:
    """Build a geography value from a shapely geometry.

    Args:
        geom: Shapely Point, LineString or Polygon
        kind: Shape kind to build
        srid: SRID for the value. If None, the geometry's own SRID is used
            (GEOS' 0 reads as absent).

    Raises:
        ValueError: If the geometry does not match ``kind`` or is an empty point
    """
    expected = GEOMETRY_TYPE_NAMES[GEOMETRY_TYPES[kind]]
    if geom.geom_type != expected:
        msg = f"Expected {expected} for {kind}, got {geom.geom_type}"
        raise ValueError(msg)

    if kind in (GeometryKind.POINT, GeometryKind.POINT_Z) and geom.is_empty:
        msg = f"Empty point cannot be read as {kind}"
        raise ValueError(msg)

    # GEOS drops the Z flag on empty geometries
    has_z = kind.has_z if geom.is_empty else geom.has_z

    if srid is None:
        geos_srid = int(shapely.get_srid(geom))
        srid = None if geos_srid == CONSTANTS.SRID_UNKNOWN else geos_srid

    if geom.geom_type == "Point":
        coordinates = tuple(geom.coords[0])
    elif geom.geom_type == "LineString":
        coordinates = tuple(tuple(c) for c in geom.coords)
    else:
        rings = [] if geom.is_empty else [geom.exterior, *geom.interiors]
        coordinates = tuple(tuple(tuple(c) for c in ring.coords) for ring in rings)

    return from_wkb_geometry(
        WkbGeometry(GEOMETRY_TYPES[kind], has_z, srid, coordinates), kind
    )
