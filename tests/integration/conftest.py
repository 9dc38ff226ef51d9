"""Integration test fixtures for geography columns against PostGIS."""

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from geography_types.config import DatabaseSettings
from geography_types.repositories.engine import create_db_engine

TEST_DATABASE = "test_geography_types"


@pytest.fixture(scope="session")
def test_engine() -> Iterator[Engine]:
    """Create test database with the PostGIS extension enabled.

    Drops the database again after all tests complete.
    """
    settings = DatabaseSettings()
    admin_url = settings.model_copy(update={"database": "postgres"}).connection_url
    admin_engine = create_engine(admin_url)

    with admin_engine.connect() as conn:
        conn.execution_options(isolation_level="AUTOCOMMIT")
        conn.execute(text(f"DROP DATABASE IF EXISTS {TEST_DATABASE}"))
        conn.execute(text(f"CREATE DATABASE {TEST_DATABASE}"))
    admin_engine.dispose()

    engine = create_db_engine(
        settings.model_copy(update={"database": TEST_DATABASE}), use_null_pool=True
    )
    with engine.connect() as conn:
        conn.execution_options(isolation_level="AUTOCOMMIT")
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS postgis"))

    yield engine

    engine.dispose()
    admin_engine = create_engine(admin_url)
    with admin_engine.connect() as conn:
        conn.execution_options(isolation_level="AUTOCOMMIT")
        conn.execute(text(f"DROP DATABASE IF EXISTS {TEST_DATABASE}"))
    admin_engine.dispose()

