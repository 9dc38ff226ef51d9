"""Database bindings for geography values."""

from geography_types.repositories.engine import create_db_engine
from geography_types.repositories.types import GeographyType

__all__ = ["GeographyType", "create_db_engine"]
