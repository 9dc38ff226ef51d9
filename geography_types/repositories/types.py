"""SQLAlchemy column type binding geography values to PostGIS geography columns.

GeographyType wraps the GeoAlchemy2 ``Geography`` type: GeoAlchemy2 handles
DDL, bind expressions and spatial functions, while the bind/result hooks here
run the EWKB codec for the column's shape kind.

Example:
    class Site(Base):
        __tablename__ = "site"

        id: Mapped[int] = mapped_column(primary_key=True)
        location: Mapped[Point] = mapped_column(GeographyType("point"))
"""

import logging
from typing import Any

from geoalchemy2 import Geography, WKBElement
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

from geography_types.codecs.registry import DEFAULT_REGISTRY, CodecRegistry
from geography_types.config import DEFAULT_SETTINGS, GeographySettings
from geography_types.errors import DecodeError, EncodeError
from geography_types.models.geometry import Geography as GeographyValue
from geography_types.models.geometry import GeometryKind
from geography_types.spatial.srid import stamp_srid

logger = logging.getLogger(__name__)


def _wire_payload(value: Any) -> tuple[bytes, int | None]:
    """Split a driver/GeoAlchemy2 result value into raw bytes and a column SRID.

    GeoAlchemy2 selects geography columns through ``ST_AsBinary``, which drops
    the SRID; the element then carries the SRID declared on the column instead.
    """
    srid = None
    if isinstance(value, WKBElement):
        srid = value.srid if value.srid > 0 else None
        value = value.data

    if isinstance(value, str):
        return bytes.fromhex(value), srid
    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value), srid

    msg = f"Unsupported geography result value: {type(value).__name__}"
    raise TypeError(msg)


class GeographyType(TypeDecorator):
    """Geography column holding one shape kind.

    NULL policy: unless the type is nullable, reading SQL NULL raises
    DecodeError and binding None raises EncodeError. A nullable type maps NULL
    to and from None.

    Attributes:
        kind: Shape kind stored in the column
        srid: SRID declared on the column (geography(<TYPE>, <srid>))
        nullable: Whether NULL maps to None instead of failing
        registry: Codec bindings used to resolve the codec
    """

    impl = Geography
    cache_ok = True

    def __init__(
        self,
        kind: GeometryKind | str,
        srid: int | None = None,
        nullable: bool | None = None,
        registry: CodecRegistry = DEFAULT_REGISTRY,
        settings: GeographySettings | None = None,
    ):
        """Initialize column type.

        Args:
            kind: Shape kind stored in the column (e.g. "point", GeometryKind.POLYGON)
            srid: Column SRID. If None, uses settings.default_srid.
            nullable: NULL policy. If None, uses settings.nullable.
            registry: Codec bindings (default: DEFAULT_REGISTRY)
            settings: Column defaults. If None, uses DEFAULT_SETTINGS.

        Raises:
            KeyError: If the registry has no codec for ``kind``
        """
        if settings is None:
            settings = DEFAULT_SETTINGS

        self.kind = GeometryKind(kind)
        self.srid = settings.default_srid if srid is None else srid
        self.nullable = settings.nullable if nullable is None else nullable
        self.registry = registry
        self.codec = registry.codec_for(self.kind)

        super().__init__(
            geometry_type=self.kind.geometry_type,
            srid=self.srid,
            dimension=self.kind.dimension,
            spatial_index=settings.spatial_index,
        )

    @property
    def python_type(self) -> type:
        return self.codec.model

    def process_bind_param(self, value: GeographyValue | None, dialect: Dialect) -> WKBElement | None:
        """Encode a value for binding; a non-None result marks the parameter NOT NULL."""
        if value is None:
            if self.nullable:
                return None
            msg = f"Cannot bind NULL to non-nullable {self.kind} geography column"
            raise EncodeError(msg, kind=self.kind)

        data = self.codec.encode(value)
        return WKBElement(data, srid=-1 if value.srid is None else value.srid, extended=True)

    def process_result_value(self, value: Any, dialect: Dialect) -> GeographyValue | None:
        """Decode a column value read from the database."""
        if value is None:
            if self.nullable:
                return self.codec.decode_optional(None)
            return self.codec.decode(None)

        try:
            data, column_srid = _wire_payload(value)
        except (TypeError, ValueError) as e:
            msg = f"Cannot decode {self.kind}: {e}"
            raise DecodeError(msg, kind=self.kind) from e

        decoded = self.codec.decode(data)
        if decoded.srid is None and column_srid is not None:
            decoded = stamp_srid(decoded, column_srid)
        return decoded
