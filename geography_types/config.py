"""Configuration and constants for geography column codecs.

Includes configuration for:
- Wire format constants (CONSTANTS, not configurable)
- Geography column defaults (GeographySettings with GEOG_ prefix)
- Database connection (DatabaseSettings with DB_ prefix)

Configuration can be overridden via:
1. Environment variables (e.g., GEOG_DEFAULT_SRID=27700, DB_HOST=db)
2. .env file in the current directory
3. Default values in code
"""

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class PhysicalConstants:
    """Fixed constants of the EWKB wire format and the PostGIS geography type.

    These are NOT configurable - the store expects one exact wire variant,
    so byte order and SRID handling are pinned here rather than chosen per call.

    All attributes are immutable (frozen=True prevents modification).
    """

    # Spatial reference systems
    SRID_WGS84: int = 4326
    SRID_UNKNOWN: int = 0  # GEOS "no SRID"

    # Signed 32-bit range of the EWKB SRID field
    SRID_MIN: int = -(2**31)
    SRID_MAX: int = 2**31 - 1

    # Wire format: little-endian (NDR) extended WKB
    WKB_BYTE_ORDER_XDR: int = 0
    WKB_BYTE_ORDER_NDR: int = 1

    # EWKB geometry type flag bits
    WKB_Z_FLAG: int = 0x80000000
    WKB_M_FLAG: int = 0x40000000
    WKB_SRID_FLAG: int = 0x20000000

    # SQL type tag the column binding registers against
    SQL_TYPE_TAG: str = "geography"


# Module-level singleton for physical constants
CONSTANTS = PhysicalConstants()


class GeographySettings(BaseSettings):
    """Defaults applied when declaring geography columns.

    Can be overridden via environment variables with GEOG_ prefix:
    - GEOG_DEFAULT_SRID
    - GEOG_NULLABLE
    - GEOG_SPATIAL_INDEX

    Attributes:
        default_srid: SRID declared on the column type (geography(POINT, <srid>))
        nullable: Map SQL NULL to None instead of failing the row
        spatial_index: Create a GIST index with the column
    """

    model_config = SettingsConfigDict(
        env_prefix="GEOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_srid: int = Field(
        default=CONSTANTS.SRID_WGS84,
        ge=CONSTANTS.SRID_MIN,
        le=CONSTANTS.SRID_MAX,
        description="SRID declared on geography column types",
    )
    nullable: bool = Field(
        default=False,
        description="Treat SQL NULL as an absent value rather than a decode failure",
    )
    spatial_index: bool = Field(default=True, description="Create a spatial index")


# Column defaults, read from the environment once at import
DEFAULT_SETTINGS = GeographySettings()


class DatabaseSettings(BaseSettings):
    """Database connection configuration for PostGIS.

    Environment variables:
    - DB_HOST: Database host (default: localhost)
    - DB_PORT: Database port (default: 5432)
    - DB_DATABASE: Database name (default: geography)
    - DB_USER: Database user (default: postgres)
    - DB_PASSWORD: Static password (default: empty)
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="geography", description="Database name")
    user: str = Field(default="postgres", description="Database user")
    password: str = Field(default="", description="Static database password")

    @property
    def connection_url(self) -> str:
        """Build connection URL from individual parameters."""
        if self.password:
            return (
                f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
            )
        return f"postgresql://{self.user}@{self.host}:{self.port}/{self.database}"
