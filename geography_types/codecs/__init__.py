"""Codecs between geography values and EWKB wire bytes.

This module provides:
1. EwkbCodec - one generic codec, instantiated once per shape kind
2. CodecRegistry - immutable {shape kind -> codec} bindings
3. GeographyCodec - the protocol every codec conforms to
"""

from geography_types.codecs.ewkb import (
    ALL_CODECS,
    LINESTRING_CODEC,
    LINESTRING_Z_CODEC,
    POINT_CODEC,
    POINT_Z_CODEC,
    POLYGON_CODEC,
    EwkbCodec,
)
from geography_types.codecs.protocols import GeographyCodec
from geography_types.codecs.registry import DEFAULT_REGISTRY, CodecBinding, CodecRegistry

__all__ = [
    "ALL_CODECS",
    "CodecBinding",
    "CodecRegistry",
    "DEFAULT_REGISTRY",
    "EwkbCodec",
    "GeographyCodec",
    "LINESTRING_CODEC",
    "LINESTRING_Z_CODEC",
    "POINT_CODEC",
    "POINT_Z_CODEC",
    "POLYGON_CODEC",
]
