"""Tests for the content service.

All tests are deterministic and do not make real network calls.
"""

import asyncio
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from globetrotter.config import Settings
from globetrotter.models.common import TripCategory
from globetrotter.models.suggestions import ItineraryRequest
from globetrotter.suggestions.content_service import (
    DeterministicStubContentService,
    OpenAIContentService,
    get_content_service,
)
from globetrotter.suggestions.merger import Ok, parse_city_lookup, parse_generated_trip


@pytest.fixture
def itinerary_request() -> ItineraryRequest:
    return ItineraryRequest(
        name="Golden Triangle",
        day_count=6,
        budget=120000,
        currency_code="INR",
        adults=2,
        children=0,
        category=TripCategory.COUPLE,
    )


def _mock_client(content: str | None) -> AsyncMock:
    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = content

    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(return_value=mock_response)
    return mock_openai_client


def _service(client: Any, timeout_seconds: float = 5.0) -> OpenAIContentService:
    return OpenAIContentService(api_key="test_key", client=client, timeout_seconds=timeout_seconds)


@pytest.mark.asyncio
async def test_stub_lookup_is_deterministic() -> None:
    stub = DeterministicStubContentService()

    first = await stub.lookup_city("  varanasi ", "INR")
    second = await stub.lookup_city("varanasi", "INR")

    assert first == second
    assert first is not None
    assert first["cityName"] == "Varanasi"
    assert isinstance(parse_city_lookup(first), Ok)


@pytest.mark.asyncio
async def test_stub_lookup_blank_query_fails() -> None:
    assert await DeterministicStubContentService().lookup_city("  ", "INR") is None


@pytest.mark.asyncio
async def test_stub_itinerary_parses(itinerary_request: ItineraryRequest) -> None:
    payload = await DeterministicStubContentService().generate_itinerary(itinerary_request)

    result = parse_generated_trip(payload)

    assert isinstance(result, Ok)
    assert result.value.cities[0].city_name == "Golden Triangle"
    assert all(a.time for a in result.value.cities[0].activities)


@pytest.mark.asyncio
async def test_openai_lookup_decodes_json() -> None:
    body = {"cityName": "Leh", "country": "India", "popularityScore": 4.9, "costIndex": "High", "imageKeyword": "ladakh"}
    client = _mock_client(json.dumps(body))

    result = await _service(client).lookup_city("leh", "INR")

    assert result == body
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["response_format"]["type"] == "json_schema"
    assert "leh" in kwargs["messages"][1]["content"]
    assert "INR" in kwargs["messages"][1]["content"]


@pytest.mark.asyncio
async def test_openai_activities_unwrap_list() -> None:
    items = [{"name": "Shanti Stupa", "type": "Sightseeing", "cost": 0, "duration": "1h"}]
    client = _mock_client(json.dumps({"activities": items}))

    assert await _service(client).suggest_activities("Leh", "INR") == items


@pytest.mark.asyncio
async def test_openai_activities_wrong_shape_is_empty() -> None:
    client = _mock_client(json.dumps({"activities": "none"}))
    assert await _service(client).suggest_activities("Leh", "INR") == []


@pytest.mark.asyncio
async def test_openai_itinerary_uses_itinerary_model(itinerary_request: ItineraryRequest) -> None:
    client = _mock_client(json.dumps({"description": "d", "cities": []}))
    service = OpenAIContentService(api_key="k", itinerary_model="big-model", client=client)

    result = await service.generate_itinerary(itinerary_request)

    assert result == {"description": "d", "cities": []}
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "big-model"
    prompt = kwargs["messages"][1]["content"]
    assert "Golden Triangle" in prompt
    assert "6 days" in prompt
    assert "Couple" in prompt


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", None, "not json", "[1, 2]"])
async def test_openai_bad_body_maps_to_none(content: str | None) -> None:
    assert await _service(_mock_client(content)).lookup_city("Goa", "INR") is None


@pytest.mark.asyncio
async def test_openai_api_error_maps_to_failure_values(itinerary_request: ItineraryRequest) -> None:
    client = AsyncMock()
    client.chat.completions.create = AsyncMock(side_effect=Exception("API error"))
    service = _service(client)

    assert await service.lookup_city("Goa", "INR") is None
    assert await service.suggest_activities("Goa", "INR") == []
    assert await service.generate_itinerary(itinerary_request) is None


@pytest.mark.asyncio
async def test_openai_timeout_maps_to_none() -> None:
    async def slow_create(**kwargs: Any) -> None:
        await asyncio.sleep(1)

    client = AsyncMock()
    client.chat.completions.create = slow_create

    assert await _service(client, timeout_seconds=0.01).lookup_city("Goa", "INR") is None


def test_factory_returns_stub_without_key() -> None:
    service = get_content_service(Settings(openai_api_key=None))
    assert isinstance(service, DeterministicStubContentService)


def test_factory_returns_openai_with_key() -> None:
    service = get_content_service(
        Settings(openai_api_key=SecretStr("test_key"), openai_model="m", content_timeout_seconds=3)
    )

    assert isinstance(service, OpenAIContentService)
    assert service.model == "m"
    assert service.timeout_seconds == 3
