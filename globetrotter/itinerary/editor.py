"""Pure trip mutations.

Each function returns a new Trip for TripRepository.update_trip and leaves
its input untouched. Children are always located through their owning
parent's sequence.
"""

from collections.abc import Callable

from globetrotter.errors import NotFound
from globetrotter.models.common import ActivityType
from globetrotter.models.trip import Activity, CityStop, Trip
from globetrotter.utils.ids import IdGenerator

CUSTOM_DURATION = "Custom"
CUSTOM_TIME = "12:00 PM"


def new_custom_activity(
    ids: IdGenerator,
    name: str,
    activity_type: ActivityType | str,
    cost: float,
    duration: str = CUSTOM_DURATION,
    time: str | None = CUSTOM_TIME,
) -> Activity:
    """Build a manually entered activity under a fresh ID.

    Raises:
        pydantic.ValidationError: On an empty name or negative cost
    """
    return Activity(
        id=ids.new_id(),
        name=name,
        type=activity_type,
        cost=cost,
        duration=duration,
        time=time,
    )


def add_city(trip: Trip, city: CityStop) -> Trip:
    """Append a city stop to the itinerary.

    Raises:
        ValueError: If the trip already has a stop with this ID
    """
    if trip.find_city(city.id) is not None:
        raise ValueError(f"city id already exists: {city.id}")
    return trip.model_copy(update={"cities": trip.cities + (city,)})


def remove_city(trip: Trip, city_id: str) -> Trip:
    """Remove a city stop and, with it, all of its activities."""
    if trip.find_city(city_id) is None:
        raise NotFound("city", city_id)
    return trip.model_copy(update={"cities": tuple(c for c in trip.cities if c.id != city_id)})


def _replace_city(trip: Trip, city_id: str, change: Callable[[CityStop], CityStop]) -> Trip:
    city = trip.find_city(city_id)
    if city is None:
        raise NotFound("city", city_id)
    updated = change(city)
    return trip.model_copy(
        update={"cities": tuple(updated if c.id == city_id else c for c in trip.cities)}
    )


def add_activity(trip: Trip, city_id: str, activity: Activity) -> Trip:
    """Append an activity to a city stop.

    Raises:
        NotFound: If the city is unknown
        ValueError: If the city already has an activity with this ID
    """

    def change(city: CityStop) -> CityStop:
        if city.find_activity(activity.id) is not None:
            raise ValueError(f"activity id already exists: {activity.id}")
        return city.model_copy(update={"activities": city.activities + (activity,)})

    return _replace_city(trip, city_id, change)


def remove_activity(trip: Trip, city_id: str, activity_id: str) -> Trip:
    """Remove one activity from a city stop."""

    def change(city: CityStop) -> CityStop:
        if city.find_activity(activity_id) is None:
            raise NotFound("activity", activity_id)
        return city.model_copy(
            update={"activities": tuple(a for a in city.activities if a.id != activity_id)}
        )

    return _replace_city(trip, city_id, change)


def _set_actual_cost(trip: Trip, city_id: str, activity_id: str, amount: float | None) -> Trip:
    def change(city: CityStop) -> CityStop:
        activity = city.find_activity(activity_id)
        if activity is None:
            raise NotFound("activity", activity_id)
        # Re-validate so a negative amount is rejected before anything changes
        logged = Activity.model_validate({**dict(activity), "actual_cost": amount})
        return city.model_copy(
            update={
                "activities": tuple(
                    logged if a.id == activity_id else a for a in city.activities
                )
            }
        )

    return _replace_city(trip, city_id, change)


def log_spend(trip: Trip, city_id: str, activity_id: str, amount: float) -> Trip:
    """Record the actual amount spent on an activity.

    Raises:
        NotFound: If the city or activity is unknown
        pydantic.ValidationError: If the amount is negative
    """
    return _set_actual_cost(trip, city_id, activity_id, amount)


def clear_spend(trip: Trip, city_id: str, activity_id: str) -> Trip:
    """Forget logged spend; the activity counts as unlogged again."""
    return _set_actual_cost(trip, city_id, activity_id, None)
