"""
Unit tests for the crop recommendation parser.

Tests cover labelled fields, ordering, preambles and empty input.
"""

import pytest

from app.models.provenance import Provenance
from app.parsers import ParseError
from app.parsers.crops import CropRecommendationParser, parse_crop_recommendations

FULL_ANSWER = """Here are 2 crops suited to your farm:

1. **Rice**
   - Growing Season: Kharif (June-October)
   - Water Requirement: High
   - Temperature Range: 20-35°C
   - Soil Requirement: Clay loam
   - Growing Duration: 120-150 days
   - Expected Yield: 2.5 tons per hectare
   - Key Benefits: Staple food with assured procurement

2. [Wheat]
   - Growing Season: Rabi
   - Water Requirement: Medium
"""

REFUSAL = "I cannot recommend crops without more information."


class TestCropRecommendationParser:
    """Tests for CropRecommendationParser."""

    def test_single_crop_with_two_labels(self):
        """Unlabelled fields are empty strings."""
        crops = parse_crop_recommendations(
            "1. Rice\n- Growing Season: Monsoon\n- Water Requirement: high\n"
        )

        assert len(crops) == 1
        crop = crops[0]
        assert crop.name == "Rice"
        assert crop.season == "Monsoon"
        assert crop.water_requirement == "high"
        assert crop.temperature == ""
        assert crop.soil_type == ""
        assert crop.duration == ""
        assert crop.expected_yield == ""
        assert crop.benefits == ""

    def test_all_labels_populated(self):
        crop = parse_crop_recommendations(FULL_ANSWER)[0]

        assert crop.season == "Kharif (June-October)"
        assert crop.water_requirement == "High"
        assert crop.temperature == "20-35°C"
        assert crop.soil_type == "Clay loam"
        assert crop.duration == "120-150 days"
        assert crop.expected_yield == "2.5 tons per hectare"
        assert crop.benefits == "Staple food with assured procurement"

    def test_order_preserved_and_preamble_dropped(self):
        crops = parse_crop_recommendations(FULL_ANSWER)
        assert [c.name for c in crops] == ["Rice", "Wheat"]

    def test_name_markup_removed(self):
        """Brackets and markdown bold are stripped from names."""
        crops = parse_crop_recommendations(FULL_ANSWER)
        assert crops[0].name == "Rice"
        assert crops[1].name == "Wheat"

    def test_provenance_tags(self):
        crop = parse_crop_recommendations(FULL_ANSWER)[1]
        assert crop.provenance["name"] == Provenance.EXTRACTED
        assert crop.provenance["season"] == Provenance.EXTRACTED
        assert crop.provenance["benefits"] == Provenance.MISSING
        assert crop.synthetic is False

    def test_id_is_stable(self):
        first = parse_crop_recommendations(FULL_ANSWER)
        second = parse_crop_recommendations(FULL_ANSWER)
        assert first[0].id == second[0].id
        assert first[0].id.startswith("crop_")
        assert first[0].id != first[1].id

    def test_parsing_is_idempotent(self):
        first = [c.model_dump() for c in parse_crop_recommendations(FULL_ANSWER)]
        second = [c.model_dump() for c in parse_crop_recommendations(FULL_ANSWER)]
        assert first == second

    def test_empty_input_yields_no_records(self):
        assert parse_crop_recommendations("") == []
        assert parse_crop_recommendations("   \n\n ") == []

    def test_unknown_label_is_ignored(self):
        crops = parse_crop_recommendations("1. Millet\n- Market Price: good\n")
        assert crops[0].name == "Millet"
        assert crops[0].season == ""

    def test_text_without_numbered_items_yields_no_records(self):
        assert parse_crop_recommendations(REFUSAL) == []

    def test_parse_strict_raises_on_empty_text(self):
        with pytest.raises(ParseError):
            CropRecommendationParser().parse_strict("")

    def test_parse_strict_raises_on_refusal(self):
        with pytest.raises(ParseError):
            CropRecommendationParser().parse_strict(REFUSAL)

    def test_parse_strict_returns_records(self):
        crops = CropRecommendationParser().parse_strict(FULL_ANSWER)
        assert len(crops) == 2
