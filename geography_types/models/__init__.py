"""Geography value models."""

from geography_types.models.geometry import (
    MODELS,
    Geography,
    GeometryKind,
    LineString,
    LineStringZ,
    Point,
    PointZ,
    Polygon,
)

__all__ = [
    "Geography",
    "GeometryKind",
    "MODELS",
    "Point",
    "PointZ",
    "LineString",
    "LineStringZ",
    "Polygon",
]
