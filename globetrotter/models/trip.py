"""Trip, city stop and activity models.

All entities are frozen: every change produces a new object, so a Trip
handed out earlier stays a valid snapshot. Children are reached only
through their parent's sequence; nothing holds a back-reference.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from globetrotter.models.common import ActivityType, TripCategory


class Activity(BaseModel):
    """Single plannable item within a city stop."""

    # Amounts must survive a JSON round trip, which has no inf or nan
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(..., min_length=1)
    name: str
    type: ActivityType
    cost: float = Field(..., ge=0, description="Planned cost")
    actual_cost: float | None = Field(default=None, ge=0, description="Logged spend")
    duration: str = ""
    time: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Ensure the activity has a name."""
        if not v.strip():
            raise ValueError("name must not be empty")
        return v

    @property
    def is_logged(self) -> bool:
        return self.actual_cost is not None


class CityStop(BaseModel):
    """One destination leg of a trip."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(..., min_length=1)
    city_name: str
    country: str = ""
    start_date: date
    end_date: date
    activities: tuple[Activity, ...] = ()
    image: str | None = None

    @field_validator("city_name")
    @classmethod
    def validate_city_name_not_blank(cls, v: str) -> str:
        """Ensure the stop names a city."""
        if not v.strip():
            raise ValueError("city_name must not be empty")
        return v

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(cls, v: date, info: ValidationInfo) -> date:
        """Ensure end_date >= start_date."""
        if "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("end_date must be >= start_date")
        return v

    def find_activity(self, activity_id: str) -> Activity | None:
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        return None


class _TripFields(BaseModel):
    """Fields and invariants shared by Trip and TripDraft."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str
    description: str = ""
    start_date: date
    end_date: date
    cities: tuple[CityStop, ...] = ()
    total_budget: float = Field(..., ge=0)
    currency_code: str = "INR"
    # adults_count >= 1 keeps the traveler count (a divisor) non-zero
    adults_count: int = Field(default=1, ge=1)
    children_count: int = Field(default=0, ge=0)
    category: TripCategory = TripCategory.SOLO
    image: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Ensure the trip has a name."""
        if not v.strip():
            raise ValueError("name must not be empty")
        return v

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(cls, v: date, info: ValidationInfo) -> date:
        """Ensure end_date >= start_date."""
        if "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("end_date must be >= start_date")
        return v

    @property
    def traveler_count(self) -> int:
        return self.adults_count + self.children_count


class TripDraft(_TripFields):
    """Creation input for a trip: everything but the identifier."""

    def to_trip(self, trip_id: str, **overrides: Any) -> "Trip":
        """Build a Trip with the given id; overrides replace draft fields."""
        return Trip.model_validate({**dict(self), **overrides, "id": trip_id})


class Trip(_TripFields):
    """A planned journey with ordered city stops."""

    id: str = Field(..., min_length=1)

    def find_city(self, city_id: str) -> CityStop | None:
        for city in self.cities:
            if city.id == city_id:
                return city
        return None
