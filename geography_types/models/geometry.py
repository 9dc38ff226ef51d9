"""Geography value models.

Immutable values for the five shapes a geography column can hold. Models are
compared field by field with exact float equality. Nothing geometric is
validated here: empty line strings, unclosed rings and zero-ring polygons are
all accepted.

A composite's ``srid`` is the canonical reference system for the whole feature.
The ``srid`` slot on nested points is derived from it when reading from storage
and ignored when writing (see ``geography_types.spatial.srid``).
"""

from enum import StrEnum
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from geography_types.config import CONSTANTS

Srid = Annotated[int, Field(ge=CONSTANTS.SRID_MIN, le=CONSTANTS.SRID_MAX)]


class GeometryKind(StrEnum):
    """Shape kinds a geography column can be bound to."""

    POINT = "point"
    POINT_Z = "point_z"
    LINESTRING = "linestring"
    LINESTRING_Z = "linestring_z"
    POLYGON = "polygon"

    @property
    def geometry_type(self) -> str:
        """PostGIS typmod name, e.g. ``POINTZ``."""
        return {
            GeometryKind.POINT: "POINT",
            GeometryKind.POINT_Z: "POINTZ",
            GeometryKind.LINESTRING: "LINESTRING",
            GeometryKind.LINESTRING_Z: "LINESTRINGZ",
            GeometryKind.POLYGON: "POLYGON",
        }[self]

    @property
    def has_z(self) -> bool:
        return self in (GeometryKind.POINT_Z, GeometryKind.LINESTRING_Z)

    @property
    def dimension(self) -> int:
        return 3 if self.has_z else 2


class Point(BaseModel):
    """A longitude/latitude position.

    Attributes:
        x: Longitude
        y: Latitude
        srid: Spatial reference identifier (None if unspecified)
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[GeometryKind] = GeometryKind.POINT

    x: float = Field(description="Longitude")
    y: float = Field(description="Latitude")
    srid: Srid | None = Field(default=None, description="Spatial reference identifier")


class PointZ(BaseModel):
    """A position with elevation.

    Attributes:
        x: Longitude
        y: Latitude
        z: Elevation
        srid: Spatial reference identifier (None if unspecified)
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[GeometryKind] = GeometryKind.POINT_Z

    x: float = Field(description="Longitude")
    y: float = Field(description="Latitude")
    z: float = Field(description="Elevation")
    srid: Srid | None = Field(default=None, description="Spatial reference identifier")


class LineString(BaseModel):
    """An ordered sequence of points.

    Attributes:
        points: Vertices in order (may be empty)
        srid: Canonical SRID for the whole line
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[GeometryKind] = GeometryKind.LINESTRING

    points: tuple[Point, ...] = Field(default=(), description="Ordered vertices")
    srid: Srid | None = Field(default=None, description="Canonical SRID of the line")


class LineStringZ(BaseModel):
    """An ordered sequence of points with elevation.

    Attributes:
        points: Vertices in order (may be empty)
        srid: Canonical SRID for the whole line
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[GeometryKind] = GeometryKind.LINESTRING_Z

    points: tuple[PointZ, ...] = Field(default=(), description="Ordered vertices")
    srid: Srid | None = Field(default=None, description="Canonical SRID of the line")


class Polygon(BaseModel):
    """A polygon given as its rings.

    The first ring is the exterior, any further rings are holes. Ring order and
    point order within each ring are preserved exactly; closure and winding are
    not checked.

    Attributes:
        rings: Exterior ring followed by interior rings (may be empty)
        srid: Canonical SRID for the whole polygon
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON

    rings: tuple[LineString, ...] = Field(default=(), description="Exterior then interior rings")
    srid: Srid | None = Field(default=None, description="Canonical SRID of the polygon")


Geography = Point | PointZ | LineString | LineStringZ | Polygon

MODELS: dict[GeometryKind, type[BaseModel]] = {
    GeometryKind.POINT: Point,
    GeometryKind.POINT_Z: PointZ,
    GeometryKind.LINESTRING: LineString,
    GeometryKind.LINESTRING_Z: LineStringZ,
    GeometryKind.POLYGON: Polygon,
}
