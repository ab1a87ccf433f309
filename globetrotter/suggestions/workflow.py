"""Orchestrate content-service calls and suggestion merges.

A user action issues a ticket; the response that comes back is applied
only if its ticket is still the current one for the same trip. Anything
else is a stale response and is dropped.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any

from globetrotter.db.repositories import TripRepository
from globetrotter.errors import MalformedSuggestionError, ServiceUnavailable
from globetrotter.models.suggestions import ItineraryRequest
from globetrotter.models.trip import Trip, TripDraft
from globetrotter.suggestions.content_service import ContentService
from globetrotter.suggestions.merger import build_city_payload, merge_city_suggestion, merge_generated_trip
from globetrotter.utils.ids import IdGenerator

logger = logging.getLogger(__name__)

# Ticket subject for the create-trip form, before any trip id exists
NEW_TRIP = "new-trip"


@dataclass(frozen=True)
class SuggestionTicket:
    """Originating context of one content-service request."""

    trip_id: str
    token: int


class SuggestionTracker:
    """Tracks which suggestion request is current."""

    def __init__(self) -> None:
        self._tokens = itertools.count(1)
        self._current: SuggestionTicket | None = None

    def issue(self, trip_id: str) -> SuggestionTicket:
        """Start a new request for a trip; earlier tickets become stale."""
        self._current = SuggestionTicket(trip_id=trip_id, token=next(self._tokens))
        return self._current

    def cancel(self) -> None:
        """The user navigated away; every outstanding ticket is stale."""
        self._current = None

    def is_current(self, ticket: SuggestionTicket) -> bool:
        return self._current == ticket

    def complete(self, ticket: SuggestionTicket) -> None:
        if self._current == ticket:
            self._current = None


@dataclass(frozen=True)
class CityProposal:
    """City lookup plus activity suggestions awaiting user confirmation."""

    ticket: SuggestionTicket
    lookup: dict[str, Any]
    activities: list[dict[str, Any]] = field(default_factory=list)

    @property
    def city_name(self) -> str:
        name = self.lookup.get("cityName")
        return name if isinstance(name, str) else ""

    def payload(self) -> dict[str, Any]:
        return build_city_payload(self.lookup, self.activities)


def itinerary_request_for(draft: TripDraft) -> ItineraryRequest:
    """Brief for full itinerary generation; a same-day trip counts as one day."""
    return ItineraryRequest(
        name=draft.name,
        day_count=(draft.end_date - draft.start_date).days or 1,
        budget=draft.total_budget,
        currency_code=draft.currency_code,
        adults=draft.adults_count,
        children=draft.children_count,
        category=draft.category,
    )


async def fetch_city_proposal(
    service: ContentService,
    ticket: SuggestionTicket,
    query: str,
    currency_code: str,
) -> CityProposal:
    """Look up a city and its suggested activities.

    Raises:
        ServiceUnavailable: If the city lookup failed; the caller falls back
            to manual entry
    """
    lookup = await service.lookup_city(query, currency_code)
    if lookup is None:
        raise ServiceUnavailable(f"No suggestion available for '{query}'")

    city_name = lookup.get("cityName")
    if not isinstance(city_name, str) or not city_name.strip():
        city_name = query
    activities = await service.suggest_activities(city_name, currency_code)
    return CityProposal(ticket=ticket, lookup=lookup, activities=list(activities))


def apply_city_proposal(
    tracker: SuggestionTracker,
    trip: Trip,
    proposal: CityProposal,
    ids: IdGenerator,
) -> Trip | None:
    """Merge a confirmed city proposal into the trip it was requested for.

    Returns:
        The merged trip, or None if the proposal is stale

    Raises:
        MalformedSuggestionError: If the proposal payload is malformed; the
            trip is left unchanged
    """
    if not tracker.is_current(proposal.ticket) or proposal.ticket.trip_id != trip.id:
        logger.info(
            f"Discarding stale city proposal (token {proposal.ticket.token}) for trip {trip.id}"
        )
        return None

    merged = merge_city_suggestion(trip, proposal.payload(), ids)
    tracker.complete(proposal.ticket)
    return merged


async def create_generated_trip(
    service: ContentService,
    repository: TripRepository,
    draft: TripDraft,
    ids: IdGenerator,
    tracker: SuggestionTracker,
    ticket: SuggestionTicket,
) -> Trip | None:
    """Create a trip from an AI-generated itinerary.

    Generation failure or a malformed payload falls back to an empty
    itinerary built from the draft alone; trip creation itself never fails
    because of the content service.

    Returns:
        The stored trip, or None if the ticket went stale while the
        itinerary was being generated (nothing is stored)
    """
    payload = await service.generate_itinerary(itinerary_request_for(draft))
    if not tracker.is_current(ticket):
        logger.info(f"Discarding stale generated itinerary (token {ticket.token}) for '{draft.name}'")
        return None
    tracker.complete(ticket)

    if payload is None:
        logger.warning(f"Itinerary generation unavailable for '{draft.name}', creating empty itinerary")
        return repository.create_trip(draft)

    try:
        trip = merge_generated_trip(draft, payload, ids)
    except MalformedSuggestionError as e:
        logger.warning(f"Generated itinerary rejected for '{draft.name}', creating empty itinerary: {e}")
        return repository.create_trip(draft)

    return repository.add_trip(trip)
