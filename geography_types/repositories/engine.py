"""SQLAlchemy engine factory for PostGIS connection management."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool, QueuePool

from geography_types.config import DatabaseSettings

logger = logging.getLogger(__name__)


def create_db_engine(
    settings: DatabaseSettings | None = None,
    *,
    pool_size: int = 5,
    max_overflow: int = 10,
    echo: bool = False,
    use_null_pool: bool = False,
) -> Engine:
    """Create a SQLAlchemy engine from database settings.

    Args:
        settings: Database connection settings. If None, uses default settings.
        pool_size: Number of connections to keep in the pool (default: 5)
        max_overflow: Max overflow connections beyond pool_size (default: 10)
        echo: Enable SQLAlchemy query logging (default: False)
        use_null_pool: Use NullPool instead of QueuePool for testing (default: False)

    Returns:
        Configured SQLAlchemy Engine instance
    """
    if settings is None:
        settings = DatabaseSettings()

    if use_null_pool:
        # NullPool: No connection pooling, useful for testing
        engine = create_engine(settings.connection_url, poolclass=NullPool, echo=echo)
        logger.info("Created engine without connection pooling")
        return engine

    engine = create_engine(
        settings.connection_url,
        poolclass=QueuePool,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,  # Verify connections before use
        echo=echo,
    )
    logger.info(f"Created engine for {settings.host}:{settings.port}/{settings.database}")
    return engine
