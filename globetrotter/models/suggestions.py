"""Typed shapes of content-service payloads.

Payloads arrive as untrusted camelCase JSON. They are parsed into these
models before anything crosses into the trip entities.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from globetrotter.models.common import ActivityType, TripCategory

_PAYLOAD_CONFIG = ConfigDict(
    extra="ignore", populate_by_name=True, frozen=True, allow_inf_nan=False
)


class ActivityPayload(BaseModel):
    """Suggested activity."""

    model_config = _PAYLOAD_CONFIG

    name: str
    type: ActivityType
    cost: float = Field(..., ge=0)
    duration: str
    time: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Reject blank activity names."""
        if not v.strip():
            raise ValueError("name must not be empty")
        return v.strip()

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> ActivityType:
        """Match the type case-insensitively; unknown labels become Other."""
        if isinstance(v, ActivityType):
            return v
        if not isinstance(v, str):
            raise ValueError("type must be a string")
        label = v.strip().lower()
        for member in ActivityType:
            if member.value.lower() == label:
                return member
        return ActivityType.OTHER

    @field_validator("cost", mode="before")
    @classmethod
    def validate_cost_is_number(cls, v: Any) -> Any:
        """Only real numbers count as a cost; numeric strings do not."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("cost must be a number")
        return v


class CityPlanPayload(BaseModel):
    """A city with its suggested activities."""

    model_config = _PAYLOAD_CONFIG

    city_name: str = Field(..., alias="cityName")
    country: str
    image_keyword: str | None = Field(default=None, alias="imageKeyword")
    activities: list[ActivityPayload]

    @field_validator("city_name")
    @classmethod
    def validate_city_name_not_blank(cls, v: str) -> str:
        """Reject blank city names."""
        if not v.strip():
            raise ValueError("cityName must not be empty")
        return v.strip()


class GeneratedTripPayload(BaseModel):
    """Full generated itinerary."""

    model_config = _PAYLOAD_CONFIG

    description: str | None = None
    cities: list[CityPlanPayload]


class CityLookupPayload(BaseModel):
    """City lookup response."""

    model_config = _PAYLOAD_CONFIG

    city_name: str = Field(..., alias="cityName")
    country: str
    popularity_score: float | None = Field(default=None, alias="popularityScore")
    cost_index: str | None = Field(default=None, alias="costIndex")
    description: str | None = None
    image_keyword: str | None = Field(default=None, alias="imageKeyword")


class ItineraryRequest(BaseModel):
    """Brief sent to the content service for full itinerary generation."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str
    day_count: int = Field(..., ge=1)
    budget: float = Field(..., ge=0)
    currency_code: str
    adults: int = Field(..., ge=1)
    children: int = Field(default=0, ge=0)
    category: TripCategory

    @property
    def traveler_count(self) -> int:
        return self.adults + self.children
