"""Dashboard trip filtering, search and ordering.

Stateless: every function takes the trips it works on and returns a new
list. ``dashboard_view`` always applies filter, then search, then sort.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from globetrotter.models.trip import Trip


class TripFilter(str, Enum):
    """Dashboard tab."""

    UPCOMING = "upcoming"
    PAST = "past"
    ALL = "all"


class DashboardStats(BaseModel):
    """Header figures across all of the user's trips."""

    model_config = ConfigDict(frozen=True)

    trip_count: int
    destination_count: int
    total_budget: float


def _as_date(now: date | datetime) -> date:
    return now.date() if isinstance(now, datetime) else now


def filter_trips(
    trips: Iterable[Trip], mode: TripFilter | str, now: date | datetime
) -> list[Trip]:
    """Keep the trips belonging to a dashboard tab.

    ``upcoming`` keeps trips starting today or later and ``past`` keeps trips
    that ended before today. A trip under way (started before today, not yet
    ended) matches neither.
    """
    mode = TripFilter(mode)
    today = _as_date(now)
    if mode is TripFilter.UPCOMING:
        return [t for t in trips if t.start_date >= today]
    if mode is TripFilter.PAST:
        return [t for t in trips if t.end_date < today]
    return list(trips)


def search_trips(trips: Iterable[Trip], query: str) -> list[Trip]:
    """Case-insensitive substring match on trip name or any city name."""
    needle = query.strip().lower()
    if not needle:
        return list(trips)
    return [
        t
        for t in trips
        if needle in t.name.lower() or any(needle in c.city_name.lower() for c in t.cities)
    ]


def sort_by_start_date(trips: Iterable[Trip]) -> list[Trip]:
    """Ascending by start date; ties keep their stored order."""
    return sorted(trips, key=lambda t: t.start_date)


def dashboard_view(
    trips: Sequence[Trip],
    mode: TripFilter | str = TripFilter.UPCOMING,
    query: str = "",
    now: date | datetime | None = None,
) -> list[Trip]:
    """Trips shown on the dashboard: filter, then search, then sort."""
    today = _as_date(now) if now is not None else date.today()
    return sort_by_start_date(search_trips(filter_trips(trips, mode, today), query))


def dashboard_stats(trips: Sequence[Trip]) -> DashboardStats:
    return DashboardStats(
        trip_count=len(trips),
        destination_count=sum(len(t.cities) for t in trips),
        total_budget=sum((t.total_budget for t in trips), 0.0),
    )
