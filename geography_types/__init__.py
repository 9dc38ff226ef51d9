"""Geography value types and their EWKB codecs for PostGIS geography columns."""

from geography_types.codecs import DEFAULT_REGISTRY, CodecBinding, CodecRegistry, EwkbCodec
from geography_types.errors import DecodeError, EncodeError, GeographyCodecError
from geography_types.models import (
    GeometryKind,
    LineString,
    LineStringZ,
    Point,
    PointZ,
    Polygon,
)
from geography_types.repositories.types import GeographyType

__all__ = [
    "CodecBinding",
    "CodecRegistry",
    "DEFAULT_REGISTRY",
    "DecodeError",
    "EncodeError",
    "EwkbCodec",
    "GeographyCodecError",
    "GeographyType",
    "GeometryKind",
    "LineString",
    "LineStringZ",
    "Point",
    "PointZ",
    "Polygon",
]
