"""Repositories over the durable record store.

TripRepository owns the canonical trip collection for the signed-in
session; ProfileRepository owns the user and currency records. Both load
once at construction and write through on every mutation.
"""

import logging

from pydantic import TypeAdapter, ValidationError

from globetrotter.db.store import RecordKey, RecordStore
from globetrotter.errors import NotFound
from globetrotter.models.common import DEFAULT_CURRENCY, Currency, User, currency_for_code
from globetrotter.models.trip import Trip, TripDraft
from globetrotter.utils.ids import IdGenerator
from globetrotter.utils.logging import StructuredEventLogger

logger = logging.getLogger(__name__)

_TRIP_LIST = TypeAdapter(list[Trip])


class TripRepository:
    """Canonical trip collection with write-through persistence."""

    def __init__(
        self,
        store: RecordStore,
        ids: IdGenerator,
        events: StructuredEventLogger | None = None,
    ) -> None:
        self._store = store
        self._ids = ids
        self._events = events or StructuredEventLogger()
        self._trips: tuple[Trip, ...] = self._load()

    def _load(self) -> tuple[Trip, ...]:
        raw = self._store.load(RecordKey.TRIPS.value)
        if raw is None:
            return ()
        try:
            return tuple(_TRIP_LIST.validate_json(raw))
        except ValidationError as e:
            logger.warning(f"Trip record unreadable, starting with no trips: {e.error_count()} error(s)")
            return ()

    def _commit(self, trips: tuple[Trip, ...]) -> None:
        # Serialize first: a failed save leaves the in-memory collection as it was
        payload = _TRIP_LIST.dump_json(list(trips)).decode("utf-8")
        self._store.save(RecordKey.TRIPS.value, payload)
        self._trips = trips

    def list_trips(self) -> list[Trip]:
        """Trips in stored order."""
        return list(self._trips)

    def find_trip(self, trip_id: str) -> Trip | None:
        """Get trip by ID, or None."""
        for trip in self._trips:
            if trip.id == trip_id:
                return trip
        return None

    def get_trip(self, trip_id: str) -> Trip:
        """Get trip by ID.

        Raises:
            NotFound: If no trip has this ID
        """
        trip = self.find_trip(trip_id)
        if trip is None:
            raise NotFound("trip", trip_id)
        return trip

    def create_trip(self, draft: TripDraft) -> Trip:
        """Create a trip from a draft under a fresh ID.

        Args:
            draft: Validated trip fields

        Returns:
            The stored trip
        """
        return self.add_trip(draft.to_trip(self._ids.new_id()))

    def add_trip(self, trip: Trip) -> Trip:
        """Append an already-built trip (e.g. a generated itinerary).

        Raises:
            ValueError: If a trip with the same ID is already stored
        """
        if self.find_trip(trip.id) is not None:
            raise ValueError(f"trip id already exists: {trip.id}")
        self._commit(self._trips + (trip,))
        self._events.log_mutation("create", trip.id, "ok", trip_count=len(self._trips))
        return trip

    def update_trip(self, trip: Trip) -> Trip:
        """Replace the stored trip with the same ID.

        An unknown ID is a no-op: nothing is stored or persisted.
        """
        if self.find_trip(trip.id) is None:
            self._events.log_mutation("update", trip.id, "not_found")
            return trip
        self._commit(tuple(trip if t.id == trip.id else t for t in self._trips))
        self._events.log_mutation("update", trip.id, "ok", trip_count=len(self._trips))
        return trip

    def delete_trip(self, trip_id: str) -> None:
        """Remove the trip with this ID. Deleting an absent ID is allowed."""
        remaining = tuple(t for t in self._trips if t.id != trip_id)
        outcome = "ok" if len(remaining) != len(self._trips) else "not_found"
        self._commit(remaining)
        self._events.log_mutation("delete", trip_id, outcome, trip_count=len(self._trips))


class ProfileRepository:
    """Current user profile and currency selection."""

    def __init__(self, store: RecordStore, default_currency: Currency = DEFAULT_CURRENCY) -> None:
        self._store = store
        self._default_currency = default_currency
        self._user = self._load_user()
        self._currency = self._load_currency()

    def _load_user(self) -> User | None:
        raw = self._store.load(RecordKey.USER.value)
        if raw is None:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError:
            logger.warning("User record unreadable, treating session as signed out")
            return None

    def _load_currency(self) -> Currency:
        raw = self._store.load(RecordKey.CURRENCY.value)
        if raw is None:
            return self._default_currency
        try:
            return Currency.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"Currency record unreadable, using {self._default_currency.code}")
            return self._default_currency

    def current_user(self) -> User | None:
        return self._user

    def save_user(self, user: User) -> User:
        """Store the signed-in user."""
        self._store.save(RecordKey.USER.value, user.model_dump_json())
        self._user = user
        return user

    def clear_user(self) -> None:
        """Sign out."""
        self._store.delete(RecordKey.USER.value)
        self._user = None

    def currency(self) -> Currency:
        return self._currency

    def set_currency(self, currency: Currency | str) -> Currency:
        """Select the display currency (a Currency or a supported code)."""
        if isinstance(currency, str):
            currency = currency_for_code(currency)
        self._store.save(RecordKey.CURRENCY.value, currency.model_dump_json())
        self._currency = currency
        return currency
