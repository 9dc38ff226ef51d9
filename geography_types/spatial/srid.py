"""SRID propagation between geography values and wire geometries.

The value model keeps one SRID per feature at the composite root, while nested
points still carry their own ``srid`` slot. This module reconciles the two when
converting to and from the geometries the EWKB packer/parser works on:

- Points pass their SRID through unchanged.
- Decoding a composite stamps the geometry's SRID onto the composite and copies
  it into every nested ring and point.
- Encoding a composite writes only the root SRID. Whatever nested rings and
  points held is overwritten (last write wins, no error).

Polygon policy: the polygon's own SRID is authoritative. Ring-level SRIDs are
overwritten exactly like point-level ones, so an encoded polygon always reads
back self-consistent.
"""

import logging
from collections.abc import Iterable

from geography_types.models.geometry import (
    Geography,
    GeometryKind,
    LineString,
    LineStringZ,
    Point,
    PointZ,
    Polygon,
)
from geography_types.spatial.wkb import (
    GEOMETRY_TYPE_NAMES,
    WKB_LINESTRING,
    WKB_POINT,
    WKB_POLYGON,
    WkbGeometry,
)

logger = logging.getLogger(__name__)

GEOMETRY_TYPES: dict[GeometryKind, int] = {
    GeometryKind.POINT: WKB_POINT,
    GeometryKind.POINT_Z: WKB_POINT,
    GeometryKind.LINESTRING: WKB_LINESTRING,
    GeometryKind.LINESTRING_Z: WKB_LINESTRING,
    GeometryKind.POLYGON: WKB_POLYGON,
}


def canonical_srid(value: Geography) -> int | None:
    """Return the SRID the encoder writes for a value (its root SRID)."""
    return value.srid


def stamp_srid(value: Geography, srid: int | None) -> Geography:
    """Return a copy of a value with ``srid`` set at the root and on every nested part.

    Args:
        value: Any geography value
        srid: SRID to apply (None clears it everywhere)

    Returns:
        New value of the same type; the input is not modified
    """
    if isinstance(value, Point | PointZ):
        return value.model_copy(update={"srid": srid})

    if isinstance(value, LineString | LineStringZ):
        return type(value)(
            points=tuple(p.model_copy(update={"srid": srid}) for p in value.points),
            srid=srid,
        )

    if isinstance(value, Polygon):
        return Polygon(rings=tuple(stamp_srid(ring, srid) for ring in value.rings), srid=srid)

    msg = f"Not a geography value: {type(value).__name__}"
    raise TypeError(msg)


def normalize(value: Geography) -> Geography:
    """Return a value as it will read back from storage.

    The root SRID is pushed down into every nested ring and point, the same
    way the decoder builds values.
    """
    return stamp_srid(value, canonical_srid(value))


def _count_overwrites(srids: Iterable[int | None], srid: int | None) -> int:
    return sum(1 for s in srids if s is not None and s != srid)


def _log_overwrites(value: Geography) -> None:
    srid = canonical_srid(value)
    if isinstance(value, LineString | LineStringZ):
        overwritten = _count_overwrites((p.srid for p in value.points), srid)
    elif isinstance(value, Polygon):
        overwritten = _count_overwrites((r.srid for r in value.rings), srid)
        overwritten += _count_overwrites((p.srid for r in value.rings for p in r.points), srid)
    else:
        return

    if overwritten:
        logger.debug(
            f"Overwriting {overwritten} nested SRID(s) with {value.kind} SRID {srid}"
        )


def to_wkb_geometry(value: Geography) -> WkbGeometry:
    """Build the wire geometry written for a value.

    Only the value's root SRID is written; nested SRIDs are discarded. Points,
    point order and ring order are carried over exactly as given.

    Args:
        value: Geography value to convert

    Returns:
        Wire geometry carrying the canonical SRID (None when absent)

    Raises:
        TypeError: If value is not a geography value
    """
    if not isinstance(value, Point | PointZ | LineString | LineStringZ | Polygon):
        msg = f"Not a geography value: {type(value).__name__}"
        raise TypeError(msg)

    _log_overwrites(value)
    srid = canonical_srid(value)

    if isinstance(value, Point):
        return WkbGeometry(WKB_POINT, False, srid, (value.x, value.y))
    if isinstance(value, PointZ):
        return WkbGeometry(WKB_POINT, True, srid, (value.x, value.y, value.z))
    if isinstance(value, LineString):
        return WkbGeometry(WKB_LINESTRING, False, srid, _coords_2d(value))
    if isinstance(value, LineStringZ):
        coords = tuple((p.x, p.y, p.z) for p in value.points)
        return WkbGeometry(WKB_LINESTRING, True, srid, coords)

    rings = tuple(_coords_2d(ring) for ring in value.rings)
    return WkbGeometry(WKB_POLYGON, False, srid, rings)


def _coords_2d(line: LineString) -> tuple[tuple[float, float], ...]:
    return tuple((p.x, p.y) for p in line.points)


def _points_2d(coords, srid: int | None) -> tuple[Point, ...]:
    return tuple(Point(x=c[0], y=c[1], srid=srid) for c in coords)


def from_wkb_geometry(geom: WkbGeometry, kind: GeometryKind) -> Geography:
    """Build a geography value from a wire geometry.

    The geometry's SRID becomes the value's root SRID and is copied into every
    nested ring and point. Coordinates are taken as they are; nothing about
    the shape itself is validated.

    Args:
        geom: Geometry parsed from EWKB
        kind: Shape kind the caller expects

    Returns:
        Geography value of the model class for ``kind``

    Raises:
        ValueError: If the geometry is of a different type or dimensionality
            than ``kind``
    """
    expected = GEOMETRY_TYPES[kind]
    if geom.geometry_type != expected:
        msg = (
            f"Expected {GEOMETRY_TYPE_NAMES[expected]} for {kind}, "
            f"got {GEOMETRY_TYPE_NAMES.get(geom.geometry_type, geom.geometry_type)}"
        )
        raise ValueError(msg)

    if geom.has_z != kind.has_z:
        msg = f"Expected {kind.dimension}D coordinates for {kind}, got {3 if geom.has_z else 2}D"
        raise ValueError(msg)

    srid = geom.srid
    coords = geom.coordinates

    if kind == GeometryKind.POINT:
        return Point(x=coords[0], y=coords[1], srid=srid)

    if kind == GeometryKind.POINT_Z:
        return PointZ(x=coords[0], y=coords[1], z=coords[2], srid=srid)

    if kind == GeometryKind.LINESTRING:
        return LineString(points=_points_2d(coords, srid), srid=srid)

    if kind == GeometryKind.LINESTRING_Z:
        points = tuple(PointZ(x=c[0], y=c[1], z=c[2], srid=srid) for c in coords)
        return LineStringZ(points=points, srid=srid)

    return Polygon(
        rings=tuple(LineString(points=_points_2d(ring, srid), srid=srid) for ring in coords),
        srid=srid,
    )
