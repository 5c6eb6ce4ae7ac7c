"""
Market trend parser.

Extracts a daily price series ("Apr 3: ₹2,450", "12/04: 2450", markdown
tables...) plus the analysis and volatility sentences. With fewer than three
data points the series is replaced by a synthetic random walk with drift.
"""

import logging
import random
import re
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from app.models.market import MarketEvent, PricePoint, TrendSeries
from app.models.provenance import Provenance
from app.parsers.base import NUMBER_RE, SynthesizingParser, clean_text, parse_number

logger = logging.getLogger(__name__)

MONTHS = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\w*"
DATE_RE = re.compile(
    rf"(\d{{1,2}}(?:st|nd|rd|th)?\s+{MONTHS}"
    rf"|{MONTHS}\s+\d{{1,2}}(?:st|nd|rd|th)?\b"
    r"|\d{1,2}/\d{1,2}(?:/\d{2,4})?)",
    re.IGNORECASE,
)
LEADING_YEAR_RE = re.compile(r"^\s*,?\s*\d{4}\b")
RUPEE_AMOUNT_RE = re.compile(r"₹\s*(\d[\d,]*(?:\.\d+)?)")
EVENT_RE = re.compile(r"(?:event|factor|note):\s*(.*?)\s*$", re.IGNORECASE)
ANALYSIS_RE = re.compile(
    r"(?:overall\s+)?(?:trend analysis|analysis|summary)\s*:\s*([^\n]*)", re.IGNORECASE
)
VOLATILITY_RE = re.compile(
    r"(?:price volatility|volatility)(?:\s+assessment)?\s*:\s*([^\n]*)", re.IGNORECASE
)

MIN_REAL_POINTS = 3

MARKET_EVENTS = [
    "Heavy rainfall affected supply",
    "Government announced minimum support price",
    "Export restrictions lifted",
    "Large procurement by government agencies",
    "Harvest season began",
    "Supply chain disruption due to fuel price hike",
]


def format_short_date(day: date) -> str:
    """Format a date like "Apr 3"."""
    return f"{day:%b} {day.day}"


def _line_price(line: str, date_match: re.Match) -> Optional[float]:
    rest = line[:date_match.start()] + " " + LEADING_YEAR_RE.sub("", line[date_match.end():])
    match = RUPEE_AMOUNT_RE.search(rest) or NUMBER_RE.search(rest)
    if not match:
        return None
    return parse_number(match.group(1))


class MarketTrendParser(SynthesizingParser[TrendSeries]):
    """
    Parser for the market trend prompt.

    Args:
        crop: Crop the series is about
        days: Length of the synthetic series
        rng: Random source for synthesized values
        synthesize: Replace a too-short series with a synthetic one when True
        today: Last day of the synthetic series is the day before this
    """

    def __init__(
        self,
        crop: str,
        days: int = 30,
        rng: Optional[random.Random] = None,
        synthesize: bool = True,
        today: Optional[date] = None,
    ):
        super().__init__(rng=rng, synthesize=synthesize)
        self.crop = crop
        self.days = days
        self.today = today

    def is_empty(self, result: TrendSeries) -> bool:
        return not result.extracted_fields()

    def parse(self, text: str) -> TrendSeries:
        text = text or ""
        series = TrendSeries(crop=self.crop)

        analysis = ANALYSIS_RE.search(text)
        if analysis:
            series.analysis = clean_text(analysis.group(1))
        volatility = VOLATILITY_RE.search(text)
        if volatility:
            series.volatility = clean_text(volatility.group(1))

        for line in text.split("\n"):
            if not line.strip() or "Date" in line or "---" in line:
                continue
            if ANALYSIS_RE.search(line) or VOLATILITY_RE.search(line):
                continue
            date_match = DATE_RE.search(line)
            if not date_match:
                continue
            price = _line_price(line, date_match)
            if price is None:
                continue

            day = date_match.group(1)
            series.prices.append(PricePoint(date=day, price=price))
            event = EVENT_RE.search(line)
            if event and event.group(1):
                series.events.append(MarketEvent(date=day, event=event.group(1)))

        for field in ("prices", "events", "analysis", "volatility"):
            series.tag_value(field, getattr(series, field))

        if len(series.prices) < MIN_REAL_POINTS and self.synthesize:
            logger.info(
                f"Only {len(series.prices)} price points for {self.crop}, "
                f"synthesizing {self.days} days"
            )
            self._synthesize(series)

        return series

    def _synthesize(self, series: TrendSeries) -> None:
        rng = self.rng
        today = self.today or datetime.now(timezone.utc).date()

        price = float(rng.randint(2000, 2999))
        volatility = rng.random() * 0.03 + 0.01
        drift = (rng.random() - 0.5) * 0.01

        series.prices = []
        for i in range(self.days):
            day = today - timedelta(days=self.days - i)
            price *= 1 + (rng.random() * 2 - 1) * volatility + drift
            series.prices.append(PricePoint(date=format_short_date(day), price=round(price)))

        series.events = []
        if series.prices:
            for _ in range(rng.randint(2, 3)):
                point = rng.choice(series.prices)
                series.events.append(MarketEvent(date=point.date, event=rng.choice(MARKET_EVENTS)))
        series.tag_many(["prices", "events"], Provenance.SYNTHESIZED)

        if not series.analysis and series.prices:
            average = round(sum(p.price for p in series.prices) / len(series.prices))
            direction = "positive" if drift > 0 else "negative"
            series.analysis = (
                f"{self.crop} prices have shown a {direction} trend over the past "
                f"{self.days} days, with an average price of ₹{average}/quintal."
            )
            series.tag("analysis", Provenance.SYNTHESIZED)

        if not series.volatility:
            level = "high" if volatility > 0.03 else "moderate" if volatility > 0.02 else "low"
            series.volatility = (
                f"Price volatility has been {level} with daily fluctuations "
                f"averaging {volatility * 100:.1f}%."
            )
            series.tag("volatility", Provenance.SYNTHESIZED)


def parse_market_trends(
    text: str,
    crop: str,
    days: int = 30,
    rng: Optional[random.Random] = None,
    synthesize: bool = True,
) -> TrendSeries:
    return MarketTrendParser(crop, days=days, rng=rng, synthesize=synthesize).parse(text)
