"""Spatial helpers shared by the codecs.

This module provides:
- EWKB packing and parsing (wkb)
- SRID propagation between geography values and wire geometries (srid)
- Conversion to and from shapely geometries (shapes)
"""

from geography_types.spatial.shapes import from_shape, to_shape
from geography_types.spatial.srid import (
    canonical_srid,
    from_wkb_geometry,
    normalize,
    stamp_srid,
    to_wkb_geometry,
)
from geography_types.spatial.wkb import EWKBPacker, EWKBParser, WkbGeometry

__all__ = [
    "EWKBPacker",
    "EWKBParser",
    "WkbGeometry",
    "canonical_srid",
    "from_shape",
    "from_wkb_geometry",
    "normalize",
    "stamp_srid",
    "to_shape",
    "to_wkb_geometry",
]
