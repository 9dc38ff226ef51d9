"""Integration tests for geography columns with a PostGIS database.

These tests use a throwaway test database (test_geography_types) created from
the DB_* settings.
"""

from collections.abc import Iterator

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import StatementError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from geography_types.errors import DecodeError
from geography_types.models import LineString, LineStringZ, Point, PointZ, Polygon
from geography_types.repositories.types import GeographyType

# Mark all tests in this module as integration tests
pytestmark = pytest.mark.integration


class Base(DeclarativeBase):
    """Base class for test models."""


class Feature(Base):
    """One column per shape kind, plus a nullable point."""

    __tablename__ = "feature"

    id: Mapped[int] = mapped_column(primary_key=True)
    location: Mapped[Point] = mapped_column(GeographyType("point"))
    summit: Mapped[PointZ] = mapped_column(GeographyType("point_z"))
    route: Mapped[LineString] = mapped_column(GeographyType("linestring"))
    track: Mapped[LineStringZ] = mapped_column(GeographyType("linestring_z"))
    boundary: Mapped[Polygon] = mapped_column(GeographyType("polygon"))
    entrance: Mapped[Point | None] = mapped_column(
        GeographyType("point", nullable=True), nullable=True
    )


@pytest.fixture(scope="function")
def session(test_engine: Engine) -> Iterator[Session]:
    """Session on a freshly truncated feature table."""
    Base.metadata.create_all(test_engine)
    with test_engine.connect() as conn:
        conn.execution_options(isolation_level="AUTOCOMMIT")
        conn.execute(text("TRUNCATE feature"))

    with Session(test_engine) as session:
        yield session


def _square(size: float, srid: int = 4326) -> LineString:
    coords = [(0.0, 0.0), (size, 0.0), (size, size), (0.0, size), (0.0, 0.0)]
    return LineString(points=[Point(x=x, y=y, srid=srid) for x, y in coords], srid=srid)


def _feature(**overrides) -> Feature:
    values = {
        "location": Point(x=-1.2577, y=51.7520, srid=4326),
        "summit": PointZ(x=-5.0036, y=56.7969, z=1345.0, srid=4326),
        "route": LineString(
            points=[Point(x=-1.0, y=51.0, srid=4326), Point(x=-1.1, y=51.1, srid=4326)],
            srid=4326,
        ),
        "track": LineStringZ(
            points=[
                PointZ(x=-1.0, y=51.0, z=10.0, srid=4326),
                PointZ(x=-1.1, y=51.1, z=12.5, srid=4326),
            ],
            srid=4326,
        ),
        "boundary": Polygon(rings=[_square(0.01)], srid=4326),
    }
    values.update(overrides)
    return Feature(**values)


def _reload(session: Session, feature_id: int) -> Feature:
    session.expunge_all()
    return session.scalars(select(Feature).where(Feature.id == feature_id)).one()


class TestRoundTrip:
    """Test values survive a write and read through PostGIS."""

    def test_all_kinds_round_trip(self, session: Session):
        """Every column reads back exactly what was written."""
        feature = _feature()
        session.add(feature)
        session.commit()
        expected = _feature()

        loaded = _reload(session, feature.id)

        assert loaded.location == expected.location
        assert loaded.summit == expected.summit
        assert loaded.route == expected.route
        assert loaded.track == expected.track
        assert loaded.boundary == expected.boundary
        assert loaded.entrance is None

    def test_polygon_with_hole(self, session: Session):
        """Ring count and order survive storage."""
        outer = _square(1.0)
        hole = LineString(
            points=[
                Point(x=0.2, y=0.2, srid=4326),
                Point(x=0.4, y=0.2, srid=4326),
                Point(x=0.4, y=0.4, srid=4326),
                Point(x=0.2, y=0.2, srid=4326),
            ],
            srid=4326,
        )
        feature = _feature(boundary=Polygon(rings=[outer, hole], srid=4326))
        session.add(feature)
        session.commit()

        loaded = _reload(session, feature.id)

        assert loaded.boundary.rings == (outer, hole)

    def test_point_srids_follow_line(self, session: Session):
        """Point SRIDs written to a line come back as the line SRID."""
        route = LineString(
            points=[Point(x=0.0, y=0.0, srid=3857), Point(x=1.0, y=1.0)], srid=4326
        )
        feature = _feature(route=route)
        session.add(feature)
        session.commit()

        loaded = _reload(session, feature.id)

        assert [p.srid for p in loaded.route.points] == [4326, 4326]

    def test_nullable_column(self, session: Session):
        """A nullable column round trips a value."""
        entrance = Point(x=-1.2, y=51.7, srid=4326)
        feature = _feature(entrance=entrance)
        session.add(feature)
        session.commit()

        assert _reload(session, feature.id).entrance == entrance


class TestDatabaseInterop:
    """Test the stored values are real PostGIS geography values."""

    def test_postgis_reads_srid_and_coordinates(self, session: Session):
        """PostGIS sees the SRID and coordinates written by the codec."""
        feature = _feature(location=Point(x=1.0, y=2.0, srid=4326))
        session.add(feature)
        session.commit()

        row = session.execute(
            select(
                func.ST_SRID(Feature.location),
                func.ST_AsText(Feature.location),
            ).where(Feature.id == feature.id)
        ).one()

        assert row[0] == 4326
        assert row[1] == "POINT(1 2)"

    def test_null_in_required_column_fails_row(self, session: Session, test_engine):
        """SQL NULL in a non-nullable geography column fails the whole row."""
        feature = _feature()
        session.add(feature)
        session.commit()

        with test_engine.connect() as conn:
            conn.execution_options(isolation_level="AUTOCOMMIT")
            conn.execute(text("UPDATE feature SET location = NULL"))

        session.expunge_all()
        with pytest.raises((DecodeError, StatementError)):
            session.scalars(select(Feature)).all()
