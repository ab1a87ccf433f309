"""Tests for dashboard filtering, search and ordering."""

from collections.abc import Callable
from datetime import date, datetime

import pytest

from globetrotter.dashboard.query import (
    TripFilter,
    dashboard_stats,
    dashboard_view,
    filter_trips,
    search_trips,
    sort_by_start_date,
)
from globetrotter.models.trip import Trip

TODAY = date(2030, 6, 15)


@pytest.fixture
def trips(make_trip: Callable[..., Trip]) -> list[Trip]:
    return [
        make_trip("paris", "Paris Spring", date(2030, 7, 1), date(2030, 7, 5), 90000, city_name="Paris"),
        make_trip("tokyo", "Japan Autumn", date(2030, 3, 1), date(2030, 3, 9), 150000, city_name="Tokyo"),
        make_trip("goa", "Goa Break", date(2030, 6, 15), date(2030, 6, 18), 30000, city_name="Panaji"),
        make_trip("ladakh", "Ladakh Ride", date(2030, 6, 10), date(2030, 6, 20), 60000, city_name="Leh"),
        make_trip("lisbon", "Lisbon Weekend", date(2030, 7, 1), date(2030, 7, 3), 70000, city_name=None),
    ]


def _ids(trips: list[Trip]) -> list[str]:
    return [t.id for t in trips]


def test_upcoming_keeps_trips_starting_today_or_later(trips: list[Trip]) -> None:
    assert _ids(filter_trips(trips, TripFilter.UPCOMING, TODAY)) == ["paris", "goa", "lisbon"]


def test_past_keeps_trips_ended_before_today(trips: list[Trip]) -> None:
    assert _ids(filter_trips(trips, "past", TODAY)) == ["tokyo"]


def test_trip_under_way_is_in_neither_tab(trips: list[Trip]) -> None:
    upcoming = filter_trips(trips, TripFilter.UPCOMING, TODAY)
    past = filter_trips(trips, TripFilter.PAST, TODAY)

    assert "ladakh" not in _ids(upcoming) + _ids(past)
    assert "ladakh" in _ids(filter_trips(trips, TripFilter.ALL, TODAY))


def test_unknown_mode_rejected(trips: list[Trip]) -> None:
    with pytest.raises(ValueError):
        filter_trips(trips, "someday", TODAY)


@pytest.mark.parametrize(
    "query,expected",
    [
        ("japan", ["tokyo"]),
        ("TOKYO", ["tokyo"]),
        ("  leh ", ["ladakh"]),
        ("weekend", ["lisbon"]),
        ("zzz", []),
    ],
)
def test_search_matches_trip_or_city_name(trips: list[Trip], query: str, expected: list[str]) -> None:
    assert _ids(search_trips(trips, query)) == expected


def test_blank_search_keeps_everything(trips: list[Trip]) -> None:
    assert search_trips(trips, "   ") == trips


def test_sort_is_stable_on_equal_start_dates(trips: list[Trip]) -> None:
    assert _ids(sort_by_start_date(trips)) == ["tokyo", "ladakh", "goa", "paris", "lisbon"]


def test_view_filters_then_searches_then_sorts(trips: list[Trip]) -> None:
    assert _ids(dashboard_view(trips, TripFilter.UPCOMING, "", now=TODAY)) == ["goa", "paris", "lisbon"]
    assert _ids(dashboard_view(trips, TripFilter.UPCOMING, "paris", now=TODAY)) == ["paris"]
    assert _ids(dashboard_view(trips, TripFilter.PAST, "paris", now=TODAY)) == []


def test_view_all_without_query_is_sorted_collection(trips: list[Trip]) -> None:
    assert dashboard_view(trips, TripFilter.ALL, now=TODAY) == sort_by_start_date(trips)


def test_view_accepts_datetime_now(trips: list[Trip]) -> None:
    late_evening = datetime(2030, 6, 15, 23, 59)
    assert dashboard_view(trips, "upcoming", now=late_evening) == dashboard_view(
        trips, "upcoming", now=TODAY
    )


def test_view_does_not_modify_input(trips: list[Trip]) -> None:
    before = list(trips)
    dashboard_view(trips, TripFilter.ALL, "a", now=TODAY)
    assert trips == before


def test_stats(trips: list[Trip]) -> None:
    stats = dashboard_stats(trips)

    assert stats.trip_count == 5
    assert stats.destination_count == 4
    assert stats.total_budget == 400000


def test_stats_empty() -> None:
    assert dashboard_stats([]).trip_count == 0
    assert dashboard_stats([]).total_budget == 0
