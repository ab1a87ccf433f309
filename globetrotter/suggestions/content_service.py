"""Content service for city, activity and itinerary suggestions.

Security: Reads API key from settings/environment only, never hardcoded.
Provides a deterministic stub when no key is present for testing.

Every request is one request/response exchange. Failure is signalled by
``None`` (or an empty list for activity suggestions); nothing is raised to
the caller.
"""

import asyncio
import json
import logging
import time
from typing import Any, Protocol

from openai import AsyncOpenAI

from globetrotter.config import Settings, get_settings
from globetrotter.models.suggestions import ItineraryRequest
from globetrotter.utils.logging import StructuredEventLogger

logger = logging.getLogger(__name__)

ACTIVITY_TYPES = ["Sightseeing", "Food", "Transport", "Stay", "Other"]

STUB_TIME_SLOTS = ("09:00 AM", "01:00 PM", "06:00 PM")

CITY_LOOKUP_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "cityName": {"type": "string"},
        "country": {"type": "string"},
        "popularityScore": {"type": "number"},
        "costIndex": {"type": "string", "description": "Low, Medium, High"},
        "description": {"type": "string"},
        "imageKeyword": {"type": "string"},
    },
    "required": ["cityName", "country", "popularityScore", "costIndex", "imageKeyword"],
}

_ACTIVITY_ITEM_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "type": {"type": "string", "enum": ACTIVITY_TYPES},
        "cost": {"type": "number"},
        "duration": {"type": "string"},
    },
    "required": ["name", "type", "cost", "duration"],
}

ACTIVITY_LIST_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"activities": {"type": "array", "items": _ACTIVITY_ITEM_SCHEMA}},
    "required": ["activities"],
}

ITINERARY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "description": {"type": "string"},
        "cities": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "cityName": {"type": "string"},
                    "country": {"type": "string"},
                    "imageKeyword": {"type": "string"},
                    "activities": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                **_ACTIVITY_ITEM_SCHEMA["properties"],
                                "cost": {
                                    "type": "number",
                                    "description": "Total cost for all travelers",
                                },
                                "time": {"type": "string", "description": "e.g. 09:00 AM"},
                            },
                            "required": ["name", "type", "cost", "duration"],
                        },
                    },
                },
                "required": ["cityName", "country", "activities", "imageKeyword"],
            },
        },
    },
    "required": ["cities"],
}


class ContentService(Protocol):
    """Protocol for suggestion content providers."""

    async def lookup_city(self, query: str, currency_code: str) -> dict[str, Any] | None:
        """Look up travel details for a free-text city name.

        Returns:
            ``{cityName, country, popularityScore, costIndex, description,
            imageKeyword}`` or None on failure
        """
        ...

    async def suggest_activities(self, city_name: str, currency_code: str) -> list[dict[str, Any]]:
        """Suggest activities for a city.

        Returns:
            Ordered ``{name, type, cost, duration}`` items, empty on failure
        """
        ...

    async def generate_itinerary(self, request: ItineraryRequest) -> dict[str, Any] | None:
        """Generate a multi-city itinerary.

        Returns:
            ``{description, cities: [...]}`` or None on failure
        """
        ...


class DeterministicStubContentService:
    """Deterministic stub content service for testing (no API key required)."""

    async def lookup_city(self, query: str, currency_code: str) -> dict[str, Any] | None:
        """Return placeholder details for any non-blank query."""
        city = query.strip().title()
        if not city:
            return None
        return {
            "cityName": city,
            "country": "Unknown",
            "popularityScore": 0,
            "costIndex": "Medium",
            "description": f"Placeholder travel details for {city} ({currency_code}).",
            "imageKeyword": city.lower().replace(" ", "-"),
        }

    async def suggest_activities(self, city_name: str, currency_code: str) -> list[dict[str, Any]]:
        """Return a fixed activity list for the city."""
        return [
            {"name": f"{city_name} walking tour", "type": "Sightseeing", "cost": 500, "duration": "3h"},
            {"name": f"{city_name} food trail", "type": "Food", "cost": 800, "duration": "2h"},
            {"name": "Local transfers", "type": "Transport", "cost": 1200, "duration": "1 day"},
        ]

    async def generate_itinerary(self, request: ItineraryRequest) -> dict[str, Any] | None:
        """Return a single-city placeholder itinerary."""
        activities = await self.suggest_activities(request.name, request.currency_code)
        return {
            "description": (
                f"A {request.day_count}-day {request.category.value} trip for "
                f"{request.traveler_count} traveler(s). "
                "This is a stub itinerary generated without a content model."
            ),
            "cities": [
                {
                    "cityName": request.name,
                    "country": "Unknown",
                    "imageKeyword": request.name.lower().replace(" ", "-"),
                    "activities": [
                        {**activity, "time": slot}
                        for activity, slot in zip(activities, STUB_TIME_SLOTS)
                    ],
                }
            ],
        }


class OpenAIContentService:
    """OpenAI-backed content service."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        itinerary_model: str = "gpt-4o",
        timeout_seconds: float = 30.0,
        client: AsyncOpenAI | None = None,
        events: StructuredEventLogger | None = None,
    ):
        """Initialize OpenAI content service.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model for city lookup and activity suggestions
            itinerary_model: Model for full itinerary generation
            timeout_seconds: Per-request timeout
            client: Preconfigured client (tests)
            events: Structured event logger
        """
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model
        self.itinerary_model = itinerary_model
        self.timeout_seconds = timeout_seconds
        self._events = events or StructuredEventLogger()

    async def lookup_city(self, query: str, currency_code: str) -> dict[str, Any] | None:
        """Look up travel details for a city."""
        prompt = (
            f"Search for travel details about the city: {query}. Return JSON format with details. "
            f"All cost indications should consider {currency_code}. "
            "Include an imageKeyword field for a high-quality travel photo search."
        )
        result = await self._complete_json("city_lookup", self.model, prompt, CITY_LOOKUP_SCHEMA)
        return result if isinstance(result, dict) else None

    async def suggest_activities(self, city_name: str, currency_code: str) -> list[dict[str, Any]]:
        """Suggest top activities for a city."""
        prompt = (
            f"Suggest 5 top travel activities for {city_name}. "
            f"Include estimated cost in {currency_code} and duration."
        )
        result = await self._complete_json(
            "activity_suggestions", self.model, prompt, ACTIVITY_LIST_SCHEMA
        )
        if not isinstance(result, dict):
            return []
        activities = result.get("activities")
        if not isinstance(activities, list):
            return []
        return activities

    async def generate_itinerary(self, request: ItineraryRequest) -> dict[str, Any] | None:
        """Generate a full multi-city itinerary."""
        travelers = request.traveler_count
        prompt = (
            f"Generate a detailed multi-city travel itinerary for a {request.category.value} trip "
            f'called "{request.name}" lasting {request.day_count} days for {request.adults} adults '
            f"and {request.children} children (Total: {travelers} people). "
            f"Total budget: {request.budget} {request.currency_code}. Return JSON format. "
            "For each city, provide an 'imageKeyword' for finding a relevant high-quality travel photo. "
            f"Ensure activities are suitable for a {request.category.value} trip. "
            f"All costs must be the TOTAL cost for all {travelers} travelers in {request.currency_code}."
        )
        result = await self._complete_json(
            "itinerary_generation", self.itinerary_model, prompt, ITINERARY_SCHEMA
        )
        return result if isinstance(result, dict) else None

    async def _complete_json(
        self, request_name: str, model: str, prompt: str, schema: dict[str, Any]
    ) -> Any | None:
        """Run one schema-constrained completion and decode its JSON body."""
        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=model,
                    messages=[
                        {"role": "system", "content": "You are a travel planning assistant. Reply with JSON only."},
                        {"role": "user", "content": prompt},
                    ],
                    response_format={
                        "type": "json_schema",
                        "json_schema": {"name": request_name, "schema": schema},
                    },
                    temperature=0.7,
                ),
                timeout=self.timeout_seconds,
            )
            text = response.choices[0].message.content or ""
            if not text.strip():
                self._log_failure(request_name, start, "empty_response")
                return None
            decoded = json.loads(text)
        except asyncio.TimeoutError:
            self._log_failure(request_name, start, "timeout")
            return None
        except json.JSONDecodeError as e:
            self._log_failure(request_name, start, f"invalid_json: {e.msg}")
            return None
        except Exception as e:
            logger.error(f"OpenAI API call failed: {e}")
            self._log_failure(request_name, start, type(e).__name__)
            return None

        self._events.log_service_call(request_name, "success", _elapsed_ms(start))
        return decoded

    def _log_failure(self, request_name: str, start: float, reason: str) -> None:
        self._events.log_service_call(request_name, "failure", _elapsed_ms(start), error_reason=reason)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def get_content_service(settings: Settings | None = None) -> ContentService:
    """Factory function to get appropriate content service based on config.

    Returns:
        OpenAIContentService if API key is configured, DeterministicStubContentService otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI content service for suggestions")
        return OpenAIContentService(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            itinerary_model=settings.openai_itinerary_model,
            timeout_seconds=settings.content_timeout_seconds,
        )
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub content service")
        return DeterministicStubContentService()
