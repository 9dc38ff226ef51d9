"""EWKB packing and parsing.

Byte layout only: a geometry is carried as a ``WkbGeometry`` (type code, Z
flag, optional SRID and nested coordinate tuples). Shapes are written and read
exactly as given; ring closure, minimum point counts and winding are never
checked.

Layout written by EWKBPacker (PostGIS extended WKB, NDR):

    byte     byte order (1 = little-endian)
    uint32   geometry type | Z flag | SRID flag
    int32    SRID (only when the SRID flag is set)
    ...      Point: x y [z]
             LineString: uint32 count, count * (x y [z])
             Polygon: uint32 ring count, per ring: uint32 count, count * (x y [z])

EWKBParser also reads big-endian input and ISO WKB type codes (1001 for
POINT Z etc.), which is what ``ST_AsBinary`` returns for 3D geometries.
"""

import struct
from typing import NamedTuple

from geography_types.config import CONSTANTS

WKB_POINT = 1
WKB_LINESTRING = 2
WKB_POLYGON = 3

GEOMETRY_TYPE_NAMES: dict[int, str] = {
    WKB_POINT: "Point",
    WKB_LINESTRING: "LineString",
    WKB_POLYGON: "Polygon",
}

_TYPE_MASK = 0x0FFFFFFF
_COORD_SIZE = 8
_COUNT_SIZE = 4

Coordinate = tuple[float, ...]


class WkbGeometry(NamedTuple):
    """A geometry as it sits on the wire.

    Attributes:
        geometry_type: Base WKB type code (WKB_POINT, WKB_LINESTRING, WKB_POLYGON)
        has_z: Whether coordinates carry a third (Z) ordinate
        srid: SRID written after the type code, or None when the flag is unset
        coordinates: Point: one coordinate tuple. LineString: tuple of
            coordinates. Polygon: tuple of rings, each a tuple of coordinates.
    """

    geometry_type: int
    has_z: bool
    srid: int | None
    coordinates: tuple


class EWKBPacker:
    """Writes WkbGeometry values as little-endian EWKB."""

    byte_order = "<"

    def pack(self, geom: WkbGeometry) -> bytes:
        """Pack a geometry.

        Raises:
            ValueError: If the type code is unknown, a coordinate has the wrong
                number of ordinates, or the SRID does not fit in 32 bits
        """
        if geom.geometry_type not in GEOMETRY_TYPE_NAMES:
            msg = f"Unknown WKB geometry type {geom.geometry_type}"
            raise ValueError(msg)

        type_code = geom.geometry_type
        if geom.has_z:
            type_code |= CONSTANTS.WKB_Z_FLAG
        if geom.srid is not None:
            type_code |= CONSTANTS.WKB_SRID_FLAG

        parts = [bytes([CONSTANTS.WKB_BYTE_ORDER_NDR]), self._pack("I", type_code)]
        if geom.srid is not None:
            parts.append(self._pack("i", geom.srid))

        dimension = 3 if geom.has_z else 2
        if geom.geometry_type == WKB_POINT:
            parts.append(self._pack_coordinate(geom.coordinates, dimension))
        elif geom.geometry_type == WKB_LINESTRING:
            parts.append(self._pack_sequence(geom.coordinates, dimension))
        else:
            parts.append(self._pack("I", len(geom.coordinates)))
            parts.extend(self._pack_sequence(ring, dimension) for ring in geom.coordinates)

        return b"".join(parts)

    def _pack(self, fmt: str, *values) -> bytes:
        try:
            return struct.pack(self.byte_order + fmt, *values)
        except struct.error as e:
            raise ValueError(str(e)) from e

    def _pack_coordinate(self, coordinate: Coordinate, dimension: int) -> bytes:
        if len(coordinate) != dimension:
            msg = f"Expected {dimension} ordinates, got {len(coordinate)}"
            raise ValueError(msg)
        return self._pack("d" * dimension, *coordinate)

    def _pack_sequence(self, coordinates: tuple[Coordinate, ...], dimension: int) -> bytes:
        return self._pack("I", len(coordinates)) + b"".join(
            self._pack_coordinate(c, dimension) for c in coordinates
        )


class EWKBParser:
    """Reads one geometry from (E)WKB bytes.

    A parser instance is single use: it keeps a read offset into ``data``.
    """

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0
        self.byte_order = "<"

    def parse(self) -> WkbGeometry:
        """Parse the whole buffer as one geometry.

        Raises:
            ValueError: If the buffer is empty or truncated, the byte order
                marker or type code is invalid, the geometry is measured (M),
                or bytes are left over after the geometry
        """
        if not self.data:
            msg = "empty buffer has no WKB header"
            raise ValueError(msg)

        marker = self.data[0]
        if marker == CONSTANTS.WKB_BYTE_ORDER_NDR:
            self.byte_order = "<"
        elif marker == CONSTANTS.WKB_BYTE_ORDER_XDR:
            self.byte_order = ">"
        else:
            msg = f"Invalid byte order marker {marker:#04x}"
            raise ValueError(msg)
        self.offset = 1

        raw_type = self._read("I")[0]
        geometry_type, has_z = self._geometry_type(raw_type)
        srid = self._read("i")[0] if raw_type & CONSTANTS.WKB_SRID_FLAG else None

        dimension = 3 if has_z else 2
        if geometry_type == WKB_POINT:
            coordinates = self._read("d" * dimension)
        elif geometry_type == WKB_LINESTRING:
            coordinates = self._read_sequence(dimension)
        else:
            ring_count = self._read_count(_COUNT_SIZE)
            coordinates = tuple(self._read_sequence(dimension) for _ in range(ring_count))

        if self.offset != len(self.data):
            msg = f"{len(self.data) - self.offset} trailing bytes after geometry"
            raise ValueError(msg)

        return WkbGeometry(geometry_type, has_z, srid, coordinates)

    def _geometry_type(self, raw_type: int) -> tuple[int, bool]:
        if raw_type & CONSTANTS.WKB_M_FLAG:
            msg = "Measured (M) geometries are not supported"
            raise ValueError(msg)

        code = raw_type & _TYPE_MASK
        has_z = bool(raw_type & CONSTANTS.WKB_Z_FLAG)
        # ISO WKB: 1000s are Z, 2000s are M, 3000s are ZM
        if code >= 2000:
            msg = "Measured (M) geometries are not supported"
            raise ValueError(msg)
        if code >= 1000:
            code -= 1000
            has_z = True

        if code not in GEOMETRY_TYPE_NAMES:
            msg = f"Unknown WKB geometry type tag {raw_type:#010x}"
            raise ValueError(msg)
        return code, has_z

    def _read(self, fmt: str) -> tuple:
        fmt = self.byte_order + fmt
        size = struct.calcsize(fmt)
        if self.offset + size > len(self.data):
            remaining = len(self.data) - self.offset
            msg = f"Truncated buffer: need {size} bytes at offset {self.offset}, have {remaining}"
            raise ValueError(msg)
        values = struct.unpack_from(fmt, self.data, self.offset)
        self.offset += size
        return values

    def _read_count(self, item_size: int) -> int:
        count = self._read("I")[0]
        if count * item_size > len(self.data) - self.offset:
            msg = f"Truncated buffer: {count} items declared at offset {self.offset}"
            raise ValueError(msg)
        return count

    def _read_sequence(self, dimension: int) -> tuple[Coordinate, ...]:
        count = self._read_count(dimension * _COORD_SIZE)
        return tuple(self._read("d" * dimension) for _ in range(count))


def pack(geom: WkbGeometry) -> bytes:
    """Pack a geometry as little-endian EWKB."""
    return EWKBPacker().pack(geom)


def parse(data: bytes) -> WkbGeometry:
    """Parse (E)WKB bytes into a geometry."""
    return EWKBParser(data).parse()
