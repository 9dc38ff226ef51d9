"""EWKB codec for geography values.

One generic codec parameterised by the value model class. Byte packing lives in
``spatial.wkb``; this module pins the wire variant and maps parser failures onto
DecodeError and sink failures onto EncodeError. Shapes pass through unchanged:
unclosed rings and one-point line strings are written and read as they are.

Wire variant (fixed, not caller-selectable):
- little-endian (NDR) byte order
- extended WKB, SRID flag set whenever the value has an SRID (0 included)
- 2D coordinates for planar kinds, 3D plus the Z flag for the Z kinds
"""

import logging
from typing import BinaryIO, Generic, TypeVar

from geography_types.errors import DecodeError, EncodeError
from geography_types.models.geometry import (
    Geography,
    LineString,
    LineStringZ,
    Point,
    PointZ,
    Polygon,
)
from geography_types.spatial.srid import from_wkb_geometry, to_wkb_geometry
from geography_types.spatial.wkb import EWKBPacker, EWKBParser

logger = logging.getLogger(__name__)

T = TypeVar("T", Point, PointZ, LineString, LineStringZ, Polygon)


class EwkbCodec(Generic[T]):
    """Converts one geography model class to and from EWKB bytes.

    Attributes:
        model: Value model class handled by this codec
        kind: Shape kind of the model
    """

    def __init__(self, model: type[T]):
        """Initialize codec for a value model class.

        Args:
            model: One of Point, PointZ, LineString, LineStringZ, Polygon
        """
        self.model = model
        self.kind = model.kind

    def __repr__(self) -> str:
        return f"EwkbCodec({self.model.__name__})"

    def decode(self, data: bytes | bytearray | memoryview | None) -> T:
        """Read a value from EWKB bytes.

        Args:
            data: EWKB bytes, or None for SQL NULL

        Returns:
            Decoded value with its SRID propagated to nested points

        Raises:
            DecodeError: If data is None or empty, if the parser rejects it
                (bad type tag, truncated buffer, trailing bytes), or if it
                holds a different kind of geometry
        """
        if data is None:
            msg = f"Cannot decode {self.kind}: got NULL where a geography value is required"
            raise DecodeError(msg, kind=self.kind)

        if not isinstance(data, bytes | bytearray | memoryview):
            msg = f"Cannot decode {self.kind}: expected bytes, got {type(data).__name__}"
            raise DecodeError(msg, kind=self.kind)

        data = bytes(data)
        try:
            geom = EWKBParser(data).parse()
            value = from_wkb_geometry(geom, self.kind)
        except ValueError as e:
            logger.error(f"Failed to decode {self.kind} from {len(data)} bytes: {e}")
            msg = f"Cannot decode {self.kind}: {e}"
            raise DecodeError(msg, kind=self.kind) from e

        logger.debug(f"Decoded {self.kind} (srid={value.srid}) from {len(data)} bytes")
        return value

    def decode_optional(self, data: bytes | bytearray | memoryview | None) -> T | None:
        """Read a value, returning None for SQL NULL.

        Raises:
            DecodeError: If non-NULL data cannot be read as this kind
        """
        if data is None:
            return None
        return self.decode(data)

    def encode(self, value: T) -> bytes:
        """Write a value as EWKB bytes.

        The value's root SRID is written once; nested point and ring SRIDs are
        overwritten by it.

        Args:
            value: Value of this codec's model class

        Returns:
            EWKB bytes in the pinned wire variant

        Raises:
            EncodeError: If value is not of this codec's model class
        """
        if not isinstance(value, self.model):
            msg = f"Cannot encode {type(value).__name__} as {self.kind}"
            raise EncodeError(msg, kind=self.kind)

        data = EWKBPacker().pack(to_wkb_geometry(value))
        logger.debug(f"Encoded {self.kind} (srid={value.srid}) to {len(data)} bytes")
        return data

    def decode_hex(self, data: str) -> T:
        """Read a value from hex-encoded EWKB, as PostGIS prints it.

        Raises:
            DecodeError: If data is not valid hex or cannot be decoded
        """
        try:
            raw = bytes.fromhex(data)
        except ValueError as e:
            msg = f"Cannot decode {self.kind}: invalid hex EWKB"
            raise DecodeError(msg, kind=self.kind) from e
        return self.decode(raw)

    def encode_hex(self, value: T) -> str:
        """Write a value as upper-case hex EWKB."""
        return self.encode(value).hex().upper()

    def encode_to(self, value: T, sink: BinaryIO) -> None:
        """Write a value's EWKB bytes to an output sink.

        Args:
            value: Value of this codec's model class
            sink: Writable binary stream

        Raises:
            EncodeError: If value is of another kind, or the sink raises OSError
                (the sink's error is chained as the cause)
        """
        data = self.encode(value)
        try:
            sink.write(data)
        except OSError as e:
            logger.error(f"Output sink failed while writing {self.kind}: {e}")
            msg = f"Cannot write {self.kind} to output sink: {e}"
            raise EncodeError(msg, kind=self.kind) from e


POINT_CODEC: EwkbCodec[Point] = EwkbCodec(Point)
POINT_Z_CODEC: EwkbCodec[PointZ] = EwkbCodec(PointZ)
LINESTRING_CODEC: EwkbCodec[LineString] = EwkbCodec(LineString)
LINESTRING_Z_CODEC: EwkbCodec[LineStringZ] = EwkbCodec(LineStringZ)
POLYGON_CODEC: EwkbCodec[Polygon] = EwkbCodec(Polygon)

ALL_CODECS: tuple[EwkbCodec[Geography], ...] = (
    POINT_CODEC,
    POINT_Z_CODEC,
    LINESTRING_CODEC,
    LINESTRING_Z_CODEC,
    POLYGON_CODEC,
)
