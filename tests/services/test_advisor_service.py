"""
Unit tests for AdvisorService.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

from app.models.advisor import FieldConditions
from app.services.advisor_service import AdvisorService


def make_service(text: str = "Irrigate weekly.") -> AdvisorService:
    client = Mock()
    client.agenerate_content = AsyncMock(return_value=text)
    return AdvisorService(client=client)


def sent_prompt(service: AdvisorService) -> str:
    return service.client.agenerate_content.call_args.args[0]


def test_farming_advice():
    service = make_service()
    conditions = FieldConditions(temperature=31.5, humidity=70, soil_type="Black", rainfall=12)

    text = asyncio.run(service.farming_advice("Cotton", conditions))

    assert text == "Irrigate weekly."
    prompt = sent_prompt(service)
    assert "growing Cotton" in prompt
    assert "Temperature: 31.5°C" in prompt
    assert "Humidity: 70%" in prompt
    assert "Soil type: Black" in prompt


def test_farming_advice_unknown_conditions():
    service = make_service()
    asyncio.run(service.farming_advice("Cotton", FieldConditions()))
    assert "Temperature: unknown°C" in sent_prompt(service)


def test_pest_control():
    service = make_service()
    asyncio.run(service.pest_control("aphids", "mustard"))
    assert "control aphids affecting mustard crops" in sent_prompt(service)


def test_price_prediction():
    service = make_service()
    asyncio.run(service.price_prediction("onion"))
    assert "price trajectory for onion" in sent_prompt(service)


def test_ask_sends_prompt_unchanged():
    service = make_service("Sow in November.")
    assert asyncio.run(service.ask("When to sow mustard?")) == "Sow in November."
    assert sent_prompt(service) == "When to sow mustard?"
