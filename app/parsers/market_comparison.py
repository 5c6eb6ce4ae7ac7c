"""
Market comparison parser.

For every requested location, looks for the location name followed on the
same line by a price, a historical average, a percentage differential,
local factors and transportation cost. Missing values are synthesized when
synthesis is enabled.
"""

import logging
import random
import re
from typing import List, Optional, Sequence, Union

from app.models.market import LocationComparison, LocationQuote
from app.models.provenance import Provenance
from app.parsers.base import SynthesizingParser, clean_text, parse_number

logger = logging.getLogger(__name__)

AMOUNT = r"₹?\s*(\d+,?\d*(?:\.\d+)?)"
ANALYSIS_RE = re.compile(r"(?:analysis|comparison|summary)\s*:\s*([^\n]*)", re.IGNORECASE)

LOCAL_FACTORS = [
    "Proximity to production centers",
    "High local demand",
    "Transportation costs",
    "Storage facilities availability",
    "Local government policies",
    "Middleman margins",
    "Competition among buyers",
]


def normalize_locations(locations: Union[str, Sequence[str]]) -> List[str]:
    """Accept a list or a comma separated string of location names."""
    if isinstance(locations, str):
        locations = locations.split(",")
    return [loc.strip() for loc in locations if loc and loc.strip()]


def _location_patterns(location: str) -> dict:
    loc = re.escape(location)
    flags = re.IGNORECASE
    return {
        "price": re.compile(rf"{loc}[^\n]*?{AMOUNT}", flags),
        "historical_average": re.compile(
            rf"{loc}[^\n]*?(?:historical|average)[^\n]*?{AMOUNT}", flags
        ),
        "price_differential": re.compile(
            rf"{loc}[^\n]*?(?:differential|difference)[^\n]*?([+-]?\s*\d+(?:\.\d+)?%)", flags
        ),
        "local_factors": re.compile(
            rf"{loc}[^\n]*?(?:factors?|affecting)[^\n]*?:([^\n]*)", flags
        ),
        "transportation_cost": re.compile(
            rf"{loc}[^\n]*?(?:transport|logistics)[^\n]*?{AMOUNT}", flags
        ),
    }


def _analysis_paragraph(text: str) -> str:
    for paragraph in text.split("\n\n"):
        lowered = paragraph.lower()
        if (
            len(paragraph) > 100 and "₹" not in paragraph
            and ("differ" in lowered or "compar" in lowered or "factor" in lowered)
        ):
            return paragraph.strip()
    return ""


class MarketComparisonParser(SynthesizingParser[LocationComparison]):
    """
    Parser for the cross-location comparison prompt.

    Args:
        crop: Crop being compared
        locations: Location names, as a list or comma separated string
        rng: Random source for synthesized values
        synthesize: Fill values the text does not provide when True
    """

    def __init__(
        self,
        crop: str,
        locations: Union[str, Sequence[str]],
        rng: Optional[random.Random] = None,
        synthesize: bool = True,
    ):
        super().__init__(rng=rng, synthesize=synthesize)
        self.crop = crop
        self.locations = normalize_locations(locations)

    def is_empty(self, result: LocationComparison) -> bool:
        return not result.extracted_fields() and not any(
            quote.extracted_fields() for quote in result.locations
        )

    def parse(self, text: str) -> LocationComparison:
        text = text or ""
        comparison = LocationComparison(crop=self.crop)

        match = ANALYSIS_RE.search(text)
        comparison.analysis = clean_text(match.group(1)) if match else _analysis_paragraph(text)
        comparison.tag_value("analysis", comparison.analysis)

        for location in self.locations:
            quote = self._extract_quote(text, location)
            if self.synthesize:
                self._fill_missing(quote, comparison.locations)
            comparison.locations.append(quote)

        if not comparison.analysis and self.synthesize and comparison.locations:
            priced = [q for q in comparison.locations if q.price is not None]
            if priced:
                highest = max(priced, key=lambda q: q.price)
                lowest = min(priced, key=lambda q: q.price)
                comparison.analysis = (
                    f"Market prices for {self.crop} show significant variation across "
                    f"locations due to factors such as transportation costs, local "
                    f"demand-supply dynamics, and storage infrastructure. The highest "
                    f"prices are observed in {highest.name}, while {lowest.name} has the "
                    f"lowest prices in the comparison set."
                )
                comparison.tag("analysis", Provenance.SYNTHESIZED)

        return comparison

    @staticmethod
    def _extract_quote(text: str, location: str) -> LocationQuote:
        quote = LocationQuote(name=location)
        quote.tag("name", Provenance.DEFAULT)

        for field, pattern in _location_patterns(location).items():
            match = pattern.search(text)
            value = None
            if match:
                raw = match.group(1).strip()
                if field in ("price", "historical_average", "transportation_cost"):
                    value = parse_number(raw) or None
                elif field == "price_differential":
                    value = raw.replace(" ", "")
                else:
                    value = clean_text(raw) or None
            setattr(quote, field, value)
            quote.tag_value(field, value)

        if quote.historical_average is not None:
            quote.historical_average = round(quote.historical_average)
        return quote

    def _fill_missing(self, quote: LocationQuote, previous: List[LocationQuote]) -> None:
        rng = self.rng

        if quote.price is None:
            quote.price = float(rng.randint(2000, 2799))
            quote.tag("price", Provenance.SYNTHESIZED)

        if quote.historical_average is None:
            quote.historical_average = round(quote.price * (1 + rng.uniform(-0.1, 0.1)))
            quote.tag("historical_average", Provenance.SYNTHESIZED)

        if quote.price_differential is None:
            if previous:
                reference = sum(q.price for q in previous) / len(previous)
            else:
                reference = quote.price * 0.95
            diff = (quote.price / reference - 1) * 100
            quote.price_differential = f"{'+' if diff > 0 else ''}{diff:.2f}%"
            quote.tag("price_differential", Provenance.SYNTHESIZED)

        if quote.local_factors is None:
            quote.local_factors = rng.choice(LOCAL_FACTORS)
            quote.tag("local_factors", Provenance.SYNTHESIZED)

        if quote.transportation_cost is None:
            quote.transportation_cost = float(rng.randint(100, 299))
            quote.tag("transportation_cost", Provenance.SYNTHESIZED)


def parse_market_comparison(
    text: str,
    crop: str,
    locations: Union[str, Sequence[str]],
    rng: Optional[random.Random] = None,
    synthesize: bool = True,
) -> LocationComparison:
    return MarketComparisonParser(crop, locations, rng=rng, synthesize=synthesize).parse(text)
