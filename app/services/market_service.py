"""
MarketService for Smart Farming system.

This module generates market prices, price trends and cross-location
comparisons with the Gemini API. Values the model does not provide are
synthesized (and tagged as such) unless ALLOW_SYNTHETIC_DATA is disabled.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Union

from app.core.config import get_settings
from app.core.templates import render_prompt
from app.models.market import (
    MarketComparisonResponse,
    MarketPricesResponse,
    MarketTrendResponse,
)
from app.parsers.market_comparison import MarketComparisonParser, normalize_locations
from app.parsers.market_prices import ALL_CROPS, MarketPriceParser
from app.parsers.market_trends import MarketTrendParser
from app.services.gemini_client import GeminiClient, get_gemini_client

logger = logging.getLogger(__name__)

MAX_TREND_DAYS = 365


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MarketService:
    """
    AI-generated market data.

    Args:
        client: Gemini client (defaults to the module singleton)
        synthesize: Whether parsers fill gaps with synthesized values
            (defaults to the ALLOW_SYNTHETIC_DATA setting)
        rng: Random source shared by the parsers (a fresh one per call if None)
        clock: Current time provider
    """

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        synthesize: Optional[bool] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._client = client
        self.synthesize = (
            get_settings().allow_synthetic_data if synthesize is None else synthesize
        )
        self._rng = rng
        self.clock = clock

    @property
    def client(self) -> GeminiClient:
        return self._client or get_gemini_client()

    def _random(self) -> random.Random:
        return self._rng or random.Random()

    async def prices(
        self,
        crop: Optional[str] = None,
        location: Optional[str] = None,
    ) -> MarketPricesResponse:
        """
        Market prices for one crop, or for major crops when crop is None.

        Raises:
            GeminiError: If the Gemini call fails
        """
        crop = (crop or "").strip() or ALL_CROPS
        location = (location or "").strip() or "India"
        now = self.clock()

        text = await self.client.agenerate_content(
            render_prompt("market_prices", crop=crop, location=location, as_of=f"{now:%B %d, %Y}")
        )
        parser = MarketPriceParser(
            crop_filter=crop, rng=self._random(), synthesize=self.synthesize, now=now
        )
        rows = parser.parse(text)
        logger.info(
            f"Market prices for {crop}: {len(rows)} rows, "
            f"{sum(1 for r in rows if r.synthetic)} with synthesized fields"
        )
        return MarketPricesResponse(
            data=rows,
            source=f"AI-Generated Market Data (as of {now:%B %d, %Y})",
        )

    async def trends(
        self,
        crop: str,
        location: Optional[str] = None,
        days: int = 30,
    ) -> MarketTrendResponse:
        """
        Daily price trend of a crop.

        Raises:
            ValueError: If crop is empty or days is out of range
            GeminiError: If the Gemini call fails
        """
        if not crop or not crop.strip():
            raise ValueError("crop cannot be empty")
        if not 1 <= days <= MAX_TREND_DAYS:
            raise ValueError(f"days must be between 1 and {MAX_TREND_DAYS}")

        crop = crop.strip()
        now = self.clock()
        location_clause = f"in {location.strip()}" if location and location.strip() else "in major Indian markets"

        text = await self.client.agenerate_content(
            render_prompt(
                "market_trends",
                crop=crop,
                location_clause=location_clause,
                days=days,
                as_of=f"{now:%B %d, %Y}",
            )
        )
        parser = MarketTrendParser(
            crop, days=days, rng=self._random(), synthesize=self.synthesize, today=now.date()
        )
        return MarketTrendResponse(
            data=parser.parse(text),
            source=f"AI-Generated Market Trend Data (as of {now:%B %d, %Y})",
        )

    async def compare(
        self,
        crop: str,
        locations: Union[str, Sequence[str]],
    ) -> MarketComparisonResponse:
        """
        Compare a crop's price across locations.

        Raises:
            ValueError: If crop or locations are empty
            GeminiError: If the Gemini call fails
        """
        if not crop or not crop.strip():
            raise ValueError("crop cannot be empty")
        location_list = normalize_locations(locations)
        if not location_list:
            raise ValueError("locations cannot be empty")

        crop = crop.strip()
        now = self.clock()
        text = await self.client.agenerate_content(
            render_prompt(
                "market_comparison",
                crop=crop,
                locations=", ".join(location_list),
                as_of=f"{now:%B %d, %Y}",
            )
        )
        parser = MarketComparisonParser(
            crop, location_list, rng=self._random(), synthesize=self.synthesize
        )
        return MarketComparisonResponse(
            data=parser.parse(text),
            source=f"AI-Generated Market Comparison Data (as of {now:%B %d, %Y})",
        )


# Module-level singleton instance
_market_service: Optional[MarketService] = None


def get_market_service() -> MarketService:
    """Get the singleton MarketService instance."""
    global _market_service
    if _market_service is None:
        _market_service = MarketService()
    return _market_service
