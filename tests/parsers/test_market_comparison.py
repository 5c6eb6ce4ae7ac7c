"""
Unit tests for the market comparison parser.
"""

import random

import pytest

from app.models.provenance import Provenance
from app.parsers import ParseError
from app.parsers.market_comparison import (
    LOCAL_FACTORS,
    MarketComparisonParser,
    normalize_locations,
    parse_market_comparison,
)

ANSWER = """Delhi: Current price ₹2,300 per quintal
Delhi historical average: ₹2,250
Delhi price differential: +3.5%
Delhi local factors: High demand from mills
Delhi transportation cost: ₹150
Mumbai: ₹2,600
Analysis: Mumbai prices are higher due to transport.
"""


def make_parser(locations, **kwargs) -> MarketComparisonParser:
    kwargs.setdefault("rng", random.Random(5))
    return MarketComparisonParser("Wheat", locations, **kwargs)


class TestExtraction:
    """Tests for quotes read from the text."""

    def test_all_fields_for_location(self):
        comparison = make_parser(["Delhi", "Mumbai"]).parse(ANSWER)
        delhi = comparison.locations[0]

        assert delhi.name == "Delhi"
        assert delhi.price == 2300
        assert delhi.historical_average == 2250
        assert delhi.price_differential == "+3.5%"
        assert delhi.local_factors == "High demand from mills"
        assert delhi.transportation_cost == 150
        assert delhi.synthetic is False

    def test_partial_location_filled(self):
        comparison = make_parser(["Delhi", "Mumbai"]).parse(ANSWER)
        mumbai = comparison.locations[1]

        assert mumbai.price == 2600
        assert mumbai.provenance["price"] == Provenance.EXTRACTED
        # Relative to the mean of the locations before it
        assert mumbai.price_differential == "+13.04%"
        assert mumbai.local_factors in LOCAL_FACTORS
        assert 100 <= mumbai.transportation_cost <= 299
        assert mumbai.provenance["transportation_cost"] == Provenance.SYNTHESIZED

    def test_analysis_extracted(self):
        comparison = make_parser(["Delhi", "Mumbai"]).parse(ANSWER)
        assert comparison.analysis == "Mumbai prices are higher due to transport."
        assert comparison.provenance["analysis"] == Provenance.EXTRACTED

    def test_analysis_paragraph_fallback(self):
        paragraph = (
            "Prices differ across these markets mainly because of distance from the "
            "growing belt, mandi fees and the number of competing buyers in each town."
        )
        comparison = make_parser(["Delhi"]).parse(f"Delhi: ₹2,300\n\n{paragraph}")
        assert comparison.analysis == paragraph

    def test_location_names_are_literal(self):
        """Regex metacharacters in names do not break matching."""
        comparison = make_parser(["Delhi (Azadpur)"]).parse("Delhi (Azadpur): ₹2,410")
        assert comparison.locations[0].price == 2410


class TestSynthesis:
    """Tests for synthesized comparison values."""

    def test_empty_text(self):
        comparison = make_parser(["Pune", "Nagpur"]).parse("")

        first, second = comparison.locations
        assert 2000 <= first.price <= 2799
        assert first.price_differential == "+5.26%"
        assert abs(first.historical_average - first.price) <= first.price * 0.1 + 1
        assert second.synthetic is True
        assert "Pune" in comparison.analysis or "Nagpur" in comparison.analysis
        assert comparison.provenance["analysis"] == Provenance.SYNTHESIZED

    def test_locations_not_reordered_or_mutated(self):
        locations = ["Mumbai", "Delhi"]
        comparison = make_parser(locations).parse("")
        assert locations == ["Mumbai", "Delhi"]
        assert [q.name for q in comparison.locations] == ["Mumbai", "Delhi"]

    def test_deterministic_with_seed(self):
        first = make_parser(["Pune"], rng=random.Random(9)).parse("").model_dump()
        second = make_parser(["Pune"], rng=random.Random(9)).parse("").model_dump()
        assert first == second

    def test_disabled(self):
        comparison = parse_market_comparison("", "Wheat", ["Pune"], synthesize=False)
        quote = comparison.locations[0]
        assert quote.price is None
        assert quote.provenance["price"] == Provenance.MISSING
        assert comparison.analysis == ""

    def test_parse_strict_rejects_synthetic_only_result(self):
        with pytest.raises(ParseError):
            make_parser(["Pune"]).parse_strict("")


def test_normalize_locations():
    assert normalize_locations("Delhi, Mumbai ,,Pune") == ["Delhi", "Mumbai", "Pune"]
    assert normalize_locations(["Delhi", " ", "Pune"]) == ["Delhi", "Pune"]
