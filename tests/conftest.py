"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from globetrotter.db.engine import create_session_factory, init_schema
from globetrotter.db.inmemory import InMemoryRecordStore
from globetrotter.db.repositories import TripRepository
from globetrotter.models.common import ActivityType, TripCategory
from globetrotter.models.trip import Activity, CityStop, Trip, TripDraft
from globetrotter.utils.ids import SequentialIdGenerator


@pytest.fixture
def ids() -> SequentialIdGenerator:
    """Deterministic ID generator."""
    return SequentialIdGenerator("t")


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def repository(store: InMemoryRecordStore, ids: SequentialIdGenerator) -> TripRepository:
    return TripRepository(store, ids)


@pytest.fixture
def make_activity() -> Callable[..., Activity]:
    """Factory for activities with sensible defaults."""

    def _make(
        activity_id: str = "act-1",
        cost: float = 1000,
        actual_cost: float | None = None,
        activity_type: ActivityType = ActivityType.SIGHTSEEING,
        name: str = "City walk",
    ) -> Activity:
        return Activity(
            id=activity_id,
            name=name,
            type=activity_type,
            cost=cost,
            actual_cost=actual_cost,
            duration="2h",
        )

    return _make


@pytest.fixture
def make_trip() -> Callable[..., Trip]:
    """Factory for trips; activities go into a single city stop."""

    def _make(
        trip_id: str = "trip-1",
        name: str = "Rajasthan Loop",
        start: date = date(2030, 3, 1),
        end: date = date(2030, 3, 7),
        total_budget: float = 100000,
        activities: tuple[Activity, ...] = (),
        adults: int = 1,
        children: int = 0,
        city_name: str | None = "Jaipur",
    ) -> Trip:
        cities: tuple[CityStop, ...] = ()
        if city_name is not None:
            cities = (
                CityStop(
                    id=f"{trip_id}-city",
                    city_name=city_name,
                    country="India",
                    start_date=start,
                    end_date=end,
                    activities=activities,
                ),
            )
        return Trip(
            id=trip_id,
            name=name,
            start_date=start,
            end_date=end,
            cities=cities,
            total_budget=total_budget,
            adults_count=adults,
            children_count=children,
        )

    return _make


@pytest.fixture
def draft() -> TripDraft:
    return TripDraft(
        name="Kerala Backwaters",
        description="Houseboats and hill stations",
        start_date=date(2030, 1, 10),
        end_date=date(2030, 1, 14),
        total_budget=80000,
        currency_code="INR",
        adults_count=2,
        children_count=1,
        category=TripCategory.FAMILY,
    )


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """File-backed SQLite engine with the record table created."""
    engine = create_engine(f"sqlite:///{tmp_path / 'globetrotter.db'}")
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(sqlite_engine)
