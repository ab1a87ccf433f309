"""Validate content-service payloads and splice them into trips.

Payloads are parsed into typed models first (``parse_*`` return ``Ok`` or
``Err``); only a fully parsed payload is turned into entities, so a merge
either adds a whole city or nothing at all.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from globetrotter.errors import MalformedSuggestionError
from globetrotter.models.suggestions import (
    ActivityPayload,
    CityLookupPayload,
    CityPlanPayload,
    GeneratedTripPayload,
)
from globetrotter.models.trip import Activity, CityStop, Trip, TripDraft
from globetrotter.utils.ids import IdGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

CITY_IMAGE_URL = "https://picsum.photos/seed/{seed}/800/400"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful parse."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed parse."""

    error: MalformedSuggestionError


ParseResult = Ok[T] | Err


def _describe(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    ]


def _parse(model: type[M], payload: Any, what: str) -> ParseResult[M]:
    if not isinstance(payload, Mapping):
        return Err(
            MalformedSuggestionError(
                f"{what} payload must be an object, got {type(payload).__name__}"
            )
        )
    try:
        return Ok(model.model_validate(dict(payload)))
    except ValidationError as e:
        problems = _describe(e)
        return Err(MalformedSuggestionError(f"Malformed {what} payload: {'; '.join(problems)}", problems))


def parse_city_plan(payload: Any) -> ParseResult[CityPlanPayload]:
    """Parse a city-with-activities suggestion."""
    return _parse(CityPlanPayload, payload, "city suggestion")


def parse_generated_trip(payload: Any) -> ParseResult[GeneratedTripPayload]:
    """Parse a full generated itinerary."""
    return _parse(GeneratedTripPayload, payload, "generated trip")


def parse_city_lookup(payload: Any) -> ParseResult[CityLookupPayload]:
    """Parse a city lookup response."""
    return _parse(CityLookupPayload, payload, "city lookup")


def build_city_payload(lookup: Mapping[str, Any], activities: list[Any]) -> dict[str, Any]:
    """Combine a city lookup and an activity list into one city suggestion."""
    return {
        "cityName": lookup.get("cityName"),
        "country": lookup.get("country"),
        "imageKeyword": lookup.get("imageKeyword"),
        "activities": list(activities),
    }


def city_image_url(city: CityPlanPayload) -> str:
    return CITY_IMAGE_URL.format(seed=city.image_keyword or city.city_name)


def _to_activity(suggestion: ActivityPayload, ids: IdGenerator) -> Activity:
    return Activity(
        id=ids.new_id(),
        name=suggestion.name,
        type=suggestion.type,
        cost=suggestion.cost,
        duration=suggestion.duration,
        time=suggestion.time,
    )


def _to_city_stop(city: CityPlanPayload, trip: Trip | TripDraft, ids: IdGenerator) -> CityStop:
    return CityStop(
        id=ids.new_id(),
        city_name=city.city_name,
        country=city.country,
        start_date=trip.start_date,
        end_date=trip.end_date,
        activities=tuple(_to_activity(a, ids) for a in city.activities),
        image=city_image_url(city),
    )


def merge_city_suggestion(trip: Trip, payload: Any, ids: IdGenerator) -> Trip:
    """Append a suggested city (with its activities) to a trip.

    The new stop spans the trip's own dates; it and every activity get fresh
    IDs. The input trip is never modified.

    Args:
        trip: Trip to extend
        payload: Untrusted ``{cityName, country, imageKeyword?, activities}``
        ids: ID source

    Returns:
        New Trip to pass to TripRepository.update_trip

    Raises:
        MalformedSuggestionError: If the payload does not have the expected shape
    """
    result = parse_city_plan(payload)
    if isinstance(result, Err):
        logger.warning(f"Rejected city suggestion for trip {trip.id}: {result.error}")
        raise result.error

    try:
        city = _to_city_stop(result.value, trip, ids)
    except ValidationError as e:
        raise MalformedSuggestionError("City suggestion violates trip invariants", _describe(e)) from e

    logger.info(
        f"Merged city {city.city_name} with {len(city.activities)} activities into trip {trip.id}"
    )
    return trip.model_copy(update={"cities": trip.cities + (city,)})


def merge_generated_trip(draft: TripDraft, payload: Any, ids: IdGenerator) -> Trip:
    """Build a new trip from declared fields plus a generated itinerary.

    Declared fields (name, dates, budget, currency, traveler counts,
    category, image) always win; the payload contributes only the
    description and the city/activity tree. Every trip, city and activity
    gets a fresh ID.

    Raises:
        MalformedSuggestionError: If the payload does not have the expected shape
    """
    result = parse_generated_trip(payload)
    if isinstance(result, Err):
        logger.warning(f"Rejected generated itinerary for '{draft.name}': {result.error}")
        raise result.error

    generated = result.value
    description = (
        generated.description
        if generated.description and generated.description.strip()
        else draft.description
    )
    try:
        cities = tuple(_to_city_stop(city, draft, ids) for city in generated.cities)
        return draft.to_trip(ids.new_id(), description=description, cities=cities)
    except ValidationError as e:
        raise MalformedSuggestionError("Generated itinerary violates trip invariants", _describe(e)) from e
