"""
Unit tests for CropService.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from app.models.crop import CropConditions
from app.services.crop_service import CropService, format_conditions
from app.services.gemini_client import GeminiAPIError

ANSWER = "1. Rice\n- Growing Season: Kharif\n2. Maize\n- Water Requirement: Medium\n"


def make_client(text=ANSWER):
    client = Mock()
    client.agenerate_content = AsyncMock(return_value=text)
    return client


def test_format_conditions_full():
    conditions = CropConditions(
        season="Kharif",
        soil_type="Clay",
        temperature=28,
        water_availability="High",
        location="Punjab",
    )
    assert format_conditions(conditions) == (
        "Season: Kharif\n"
        "Soil Type: Clay\n"
        "Average Temperature: 28°C\n"
        "Water Availability: High\n"
        "Location: Punjab"
    )


def test_format_conditions_defaults_season():
    assert format_conditions(CropConditions()) == "Season: Current growing season"


class TestRecommend:
    """Tests for CropService.recommend."""

    def test_parses_answer(self):
        client = make_client()
        service = CropService(client=client)
        conditions = CropConditions(soil_type="Loam")

        response = asyncio.run(service.recommend(conditions))

        assert [c.name for c in response.data] == ["Rice", "Maize"]
        assert response.conditions == conditions

    def test_prompt_contains_conditions(self):
        client = make_client()
        asyncio.run(CropService(client=client).recommend(CropConditions(location="Bihar")))

        prompt = client.agenerate_content.call_args.args[0]
        assert "Location: Bihar" in prompt
        assert "Growing Season:" in prompt

    def test_custom_parser(self):
        parser = Mock()
        parser.parse.return_value = []
        service = CropService(client=make_client(), parser=parser)

        response = asyncio.run(service.recommend(CropConditions()))

        parser.parse.assert_called_once_with(ANSWER)
        assert response.data == []

    def test_gateway_error_propagates(self):
        client = Mock()
        client.agenerate_content = AsyncMock(side_effect=GeminiAPIError("boom", 500))
        with pytest.raises(GeminiAPIError):
            asyncio.run(CropService(client=client).recommend(CropConditions()))
