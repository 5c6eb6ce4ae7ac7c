"""
Unit tests for the prompt templates.
"""

import pytest
from langchain_core.prompts import PromptTemplate

from app.core.templates import TEMPLATES, get_prompt_template, render_prompt

EXPECTED_VARIABLES = {
    "crop_recommendation": {"conditions"},
    "pest_identification": {"crop_name"},
    "treatment": {"pest_name", "scientific_name"},
    "pest_alert": {"region", "month"},
    "market_prices": {"crop", "location", "as_of"},
    "market_trends": {"crop", "location_clause", "days", "as_of"},
    "market_comparison": {"crop", "locations", "as_of"},
    "farming_advice": {"crop_type", "temperature", "humidity", "soil_type", "rainfall"},
    "pest_control": {"pest_type", "crop_type"},
    "price_prediction": {"crop_type"},
}


@pytest.mark.parametrize("name", sorted(TEMPLATES))
def test_template_variables(name):
    template = get_prompt_template(name)
    assert isinstance(template, PromptTemplate)
    assert set(template.input_variables) == EXPECTED_VARIABLES[name]


def test_unknown_template():
    with pytest.raises(ValueError) as exc_info:
        get_prompt_template("weather")
    assert "Unknown prompt template" in str(exc_info.value)


def test_crop_prompt_keeps_answer_format():
    prompt = render_prompt("crop_recommendation", conditions="Season: Rabi")
    assert "Season: Rabi" in prompt
    assert "1. [Crop Name]" in prompt
    for label in ("Growing Season:", "Water Requirement:", "Key Benefits:"):
        assert label in prompt
