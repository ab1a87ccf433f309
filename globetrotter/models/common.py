"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActivityType(str, Enum):
    """Kind of itinerary activity."""

    SIGHTSEEING = "Sightseeing"
    FOOD = "Food"
    TRANSPORT = "Transport"
    STAY = "Stay"
    OTHER = "Other"


class TripCategory(str, Enum):
    """Who the trip is for."""

    SOLO = "Solo"
    COUPLE = "Couple"
    FAMILY = "Family"
    FRIENDS = "Friends"


class Currency(BaseModel):
    """Display currency.

    ``rate`` is a static multiplier against the base unit. Amounts are never
    converted; switching currency only changes labels.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    code: str = Field(..., min_length=1)
    symbol: str
    rate: float = Field(..., gt=0)

    def format(self, amount: float) -> str:
        """Render an amount with this currency's symbol, e.g. ``₹12,500``."""
        if float(amount).is_integer():
            return f"{self.symbol}{int(amount):,}"
        return f"{self.symbol}{amount:,.2f}"


class User(BaseModel):
    """Signed-in user profile record."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    token: str | None = None


SUPPORTED_CURRENCIES: tuple[Currency, ...] = (
    Currency(code="INR", symbol="₹", rate=1),
    Currency(code="USD", symbol="$", rate=0.012),
    Currency(code="EUR", symbol="€", rate=0.011),
)

DEFAULT_CURRENCY = SUPPORTED_CURRENCIES[0]


def currency_for_code(code: str) -> Currency:
    """Look up a supported currency by code, falling back to the default."""
    for currency in SUPPORTED_CURRENCIES:
        if currency.code == code.upper():
            return currency
    return DEFAULT_CURRENCY
