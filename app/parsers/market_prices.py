"""
Market price parser.

Reads "Crop: ₹price/unit" headers followed by detail lines (price change,
trend, demand, supply, forecast). Whatever the text does not provide is
synthesized when synthesis is enabled, and every parsed crop is expanded
into rows for a few major city markets. Synthesized values are tagged in
each row's provenance map.
"""

import logging
import random
import re
from datetime import datetime, timezone
from typing import List, Optional

from app.models.market import MarketPriceEntry
from app.models.provenance import Provenance
from app.parsers.base import SynthesizingParser, clean_text, parse_number, value_after_colon

logger = logging.getLogger(__name__)

CROP_LINE_RE = re.compile(
    r"^(?:\d+\.\s+)?([A-Za-z][A-Za-z\s]*)(?::|-)"
    r"(?:\s+₹?\s*(\d[\d,]*(?:\.\d+)?)\s*(?:/|per\s+)(quintal|kg))?",
    re.IGNORECASE,
)
RUPEE_AMOUNT_RE = re.compile(r"₹\s*(\d[\d,]*(?:\.\d+)?)")
AMOUNT_RE = re.compile(r"(\d[\d,]*(?:\.\d+)?)")
PERCENT_RE = re.compile(r"([+-]?\d+(?:\.\d+)?)\s*%")

# A header-looking line whose "name" contains one of these is a detail line
DETAIL_WORDS = (
    "price", "change", "trend", "demand", "supply", "forecast", "market",
    "note", "source", "disclaimer", "summary", "analysis",
)

CITY_MARKETS = ["Delhi", "Mumbai", "Kolkata", "Chennai", "Bangalore", "Hyderabad"]
CITY_VARIANTS = 3
MARKET_TYPES = ["Wholesale", "Retail", "Farmer's Market"]
DEMAND_LEVELS = ["high", "medium", "low"]
SUPPLY_LEVELS = ["abundant", "sufficient", "limited"]
FORECAST_DIRECTIONS = ["increase", "decrease", "remain stable"]
DEFAULT_CROPS = ["Rice", "Wheat", "Maize", "Soybeans", "Cotton", "Sugarcane", "Potato"]
ALL_CROPS = "major crops"

SYNTHESIZABLE_FIELDS = ("price", "price_change", "price_trend", "demand", "supply", "forecast")


class MarketPriceParser(SynthesizingParser[List[MarketPriceEntry]]):
    """
    Parser for the market price prompt.

    Args:
        crop_filter: Keep only crops whose name contains this text
            ("major crops" or None keeps everything)
        rng: Random source for synthesized values
        synthesize: Fill gaps and expand city rows when True
        now: Timestamp stamped on the rows (defaults to current UTC time)
    """

    def __init__(
        self,
        crop_filter: Optional[str] = None,
        rng: Optional[random.Random] = None,
        synthesize: bool = True,
        now: Optional[datetime] = None,
    ):
        super().__init__(rng=rng, synthesize=synthesize)
        self.crop_filter = crop_filter
        self.now = now

    def is_empty(self, result: List[MarketPriceEntry]) -> bool:
        return not any(
            entry.provenance.get("crop_name") == Provenance.EXTRACTED for entry in result
        )

    def parse(self, text: str) -> List[MarketPriceEntry]:
        timestamp = (self.now or datetime.now(timezone.utc)).isoformat()
        entries = self._extract(text or "", timestamp)

        if self.crop_filter and self.crop_filter.lower() != ALL_CROPS:
            wanted = self.crop_filter.lower()
            entries = [e for e in entries if wanted in e.crop_name.lower()]

        if not self.synthesize:
            return entries

        if not entries:
            crops = [self.crop_filter.title()] if self._has_filter() else DEFAULT_CROPS
            logger.info(f"No market prices found in text, synthesizing {len(crops)} crops")
            entries = [self._synthetic_entry(name, timestamp) for name in crops]

        rows: List[MarketPriceEntry] = []
        for entry in entries:
            self._fill_missing(entry)
            rows.append(entry)
            rows.extend(self._city_variants(entry))
        return rows

    def _has_filter(self) -> bool:
        return bool(self.crop_filter) and self.crop_filter.lower() != ALL_CROPS

    def _extract(self, text: str, timestamp: str) -> List[MarketPriceEntry]:
        entries: List[MarketPriceEntry] = []
        current: Optional[MarketPriceEntry] = None

        for raw_line in text.split("\n"):
            line = raw_line.replace("*", "").lstrip("# ")
            header = CROP_LINE_RE.match(line)
            if header and not any(w in header.group(1).lower() for w in DETAIL_WORDS):
                current = self._new_entry(header, timestamp)
                entries.append(current)
            elif current is not None:
                self._read_detail(current, line)

        for entry in entries:
            for field in SYNTHESIZABLE_FIELDS:
                entry.tag_value(field, getattr(entry, field))
        return entries

    @staticmethod
    def _new_entry(header: re.Match, timestamp: str) -> MarketPriceEntry:
        price, unit = header.group(2), header.group(3)
        entry = MarketPriceEntry(
            crop_name=header.group(1).strip(),
            price=parse_number(price) if price else None,
            unit=unit.lower() if unit else "quintal",
            date=timestamp,
        )
        entry.tag("crop_name", Provenance.EXTRACTED)
        entry.tag("unit", Provenance.EXTRACTED if unit else Provenance.DEFAULT)
        entry.tag_many(["location", "market_type", "date"], Provenance.DEFAULT)
        return entry

    @staticmethod
    def _read_detail(entry: MarketPriceEntry, line: str) -> None:
        lowered = line.lower()

        if (
            "price" in lowered and entry.price is None
            and "change" not in lowered and AMOUNT_RE.search(line)
        ):
            match = RUPEE_AMOUNT_RE.search(line) or AMOUNT_RE.search(line)
            entry.price = parse_number(match.group(1))

        if "change" in lowered:
            match = PERCENT_RE.search(line)
            if match:
                entry.price_change = float(match.group(1))
                entry.price_trend = float(match.group(1))

        if "trend" in lowered:
            if "increas" in lowered:
                entry.price_trend = 2
            elif "decreas" in lowered:
                entry.price_trend = -2
            elif "stable" in lowered or "unchanged" in lowered:
                entry.price_trend = 0

        if "demand" in lowered:
            for level in DEMAND_LEVELS:
                if level in lowered:
                    entry.demand = level
                    break

        if "supply" in lowered:
            for level in SUPPLY_LEVELS:
                if level in lowered:
                    entry.supply = level
                    break

        if "forecast" in lowered:
            entry.forecast = value_after_colon(line) or clean_text(line)

    def _synthetic_forecast(self) -> str:
        return f"Expected to {self.rng.choice(FORECAST_DIRECTIONS)} next week."

    def _fill_missing(self, entry: MarketPriceEntry) -> None:
        rng = self.rng
        fillers = {
            "price": lambda: float(rng.randint(1000, 3999)),
            "price_change": lambda: round(rng.uniform(-5, 5), 2),
            "price_trend": lambda: round(rng.uniform(-5, 5), 2),
            "demand": lambda: rng.choice(DEMAND_LEVELS),
            "supply": lambda: rng.choice(SUPPLY_LEVELS),
            "forecast": self._synthetic_forecast,
        }
        for field, make in fillers.items():
            if getattr(entry, field) is None:
                setattr(entry, field, make())
                entry.tag(field, Provenance.SYNTHESIZED)

    def _synthetic_entry(self, crop_name: str, timestamp: str) -> MarketPriceEntry:
        entry = MarketPriceEntry(crop_name=crop_name, date=timestamp)
        entry.tag("crop_name", Provenance.SYNTHESIZED)
        entry.tag_many(["location", "market_type", "unit", "date"], Provenance.DEFAULT)
        return entry

    def _city_variants(self, entry: MarketPriceEntry) -> List[MarketPriceEntry]:
        variants = []
        for city in CITY_MARKETS[:CITY_VARIANTS]:
            variation = self.rng.uniform(-0.1, 0.1)
            variant = entry.model_copy(deep=True)
            variant.location = city
            variant.market_type = self.rng.choice(MARKET_TYPES)
            variant.price = float(round(entry.price * (1 + variation)))
            variant.tag_many(["location", "market_type", "price"], Provenance.SYNTHESIZED)
            variants.append(variant)
        return variants


def parse_market_prices(
    text: str,
    crop_filter: Optional[str] = None,
    rng: Optional[random.Random] = None,
    synthesize: bool = True,
) -> List[MarketPriceEntry]:
    return MarketPriceParser(crop_filter=crop_filter, rng=rng, synthesize=synthesize).parse(text)
