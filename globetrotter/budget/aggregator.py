"""Budget aggregation over a trip.

Planned spend sums each activity's ``cost``; actual spend sums only logged
``actual_cost`` values, so an unlogged activity counts as nothing spent.
Everything is recomputed on each call.
"""

from collections.abc import Iterator

from globetrotter.models.budget import BudgetBreakdown, BudgetSummary
from globetrotter.models.common import ActivityType
from globetrotter.models.trip import Activity, Trip

BUCKET_BY_TYPE: dict[ActivityType, str] = {
    ActivityType.SIGHTSEEING: "activities",
    ActivityType.OTHER: "activities",
    ActivityType.FOOD: "food",
    ActivityType.TRANSPORT: "transport",
    ActivityType.STAY: "stay",
}


def iter_activities(trip: Trip) -> Iterator[Activity]:
    """All activities in itinerary order."""
    for city in trip.cities:
        yield from city.activities


def planned_total(trip: Trip) -> float:
    return sum((activity.cost for activity in iter_activities(trip)), 0.0)


def actual_total(trip: Trip) -> float:
    """Logged spend; always equal to the breakdown total."""
    return breakdown(trip).total


def cost_per_person(trip: Trip) -> float:
    """Actual spend split across all travelers (never fewer than one)."""
    return actual_total(trip) / trip.traveler_count


def is_over_budget(trip: Trip) -> bool:
    return actual_total(trip) > trip.total_budget


def remaining_budget(trip: Trip) -> float:
    """Budget left to spend, floored at zero."""
    return max(0.0, trip.total_budget - actual_total(trip))


def budget_progress(trip: Trip) -> float:
    """Percentage of the budget spent, capped at 100."""
    spent = actual_total(trip)
    if trip.total_budget <= 0:
        return 100.0 if spent > 0 else 0.0
    return min(spent / trip.total_budget * 100, 100.0)


def breakdown(trip: Trip) -> BudgetBreakdown:
    """Bucket actual spend by activity type."""
    totals = {"transport": 0.0, "stay": 0.0, "activities": 0.0, "food": 0.0}
    for activity in iter_activities(trip):
        if activity.actual_cost is None:
            continue
        totals[BUCKET_BY_TYPE[activity.type]] += activity.actual_cost
    return BudgetBreakdown(**totals)


def summarize(trip: Trip) -> BudgetSummary:
    """Compute every budget figure for a trip in one pass of calls."""
    buckets = breakdown(trip)
    spent = buckets.total
    return BudgetSummary(
        planned_total=planned_total(trip),
        actual_total=spent,
        cost_per_person=spent / trip.traveler_count,
        remaining_budget=remaining_budget(trip),
        progress_pct=budget_progress(trip),
        over_budget=spent > trip.total_budget,
        breakdown=buckets,
    )
