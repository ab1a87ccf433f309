"""Models package - re-exports for convenience."""

from globetrotter.models.budget import BudgetBreakdown, BudgetSummary
from globetrotter.models.common import (
    DEFAULT_CURRENCY,
    SUPPORTED_CURRENCIES,
    ActivityType,
    Currency,
    TripCategory,
    User,
    currency_for_code,
)
from globetrotter.models.suggestions import (
    ActivityPayload,
    CityLookupPayload,
    CityPlanPayload,
    GeneratedTripPayload,
    ItineraryRequest,
)
from globetrotter.models.trip import Activity, CityStop, Trip, TripDraft

__all__ = [
    # Common
    "ActivityType",
    "TripCategory",
    "Currency",
    "User",
    "SUPPORTED_CURRENCIES",
    "DEFAULT_CURRENCY",
    "currency_for_code",
    # Trip
    "Trip",
    "TripDraft",
    "CityStop",
    "Activity",
    # Budget
    "BudgetBreakdown",
    "BudgetSummary",
    # Suggestion payloads
    "ActivityPayload",
    "CityPlanPayload",
    "CityLookupPayload",
    "GeneratedTripPayload",
    "ItineraryRequest",
]
