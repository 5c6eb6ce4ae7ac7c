"""
Market data models for Smart Farming system.

This module contains Pydantic models for AI-derived market prices,
price trend series and cross-location price comparisons.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.models.provenance import ParsedRecord


Demand = Literal["high", "medium", "low"]
Supply = Literal["abundant", "sufficient", "limited"]


class MarketPriceEntry(ParsedRecord):
    """Price row for one crop at one market."""
    crop_name: str
    price: Optional[float] = Field(None, description="Price per unit (₹)")
    price_change: Optional[float] = Field(None, description="Weekly change (%)")
    price_trend: Optional[float] = Field(
        None, description="2 increasing, -2 decreasing, 0 stable, or raw percent"
    )
    demand: Optional[Demand] = None
    supply: Optional[Supply] = None
    forecast: Optional[str] = None
    location: str = "National Average"
    market_type: str = "Wholesale"
    unit: str = "quintal"
    date: str = Field(..., description="ISO timestamp")


class PricePoint(BaseModel):
    date: str
    price: float


class MarketEvent(BaseModel):
    date: str
    event: str


class TrendSeries(ParsedRecord):
    """Daily price series for a crop."""
    crop: str
    prices: List[PricePoint] = Field(default_factory=list)
    events: List[MarketEvent] = Field(default_factory=list)
    analysis: str = ""
    volatility: str = ""


class LocationQuote(ParsedRecord):
    """Price situation of a crop in one location."""
    name: str
    price: Optional[float] = None
    historical_average: Optional[float] = None
    price_differential: Optional[str] = None
    local_factors: Optional[str] = None
    transportation_cost: Optional[float] = None


class LocationComparison(ParsedRecord):
    """Cross-location comparison of a crop's price."""
    crop: str
    locations: List[LocationQuote] = Field(default_factory=list)
    analysis: str = ""


AI_SOURCE_NOTE = "This is AI-generated data; fields tagged 'synthesized' are placeholders."


class MarketPricesResponse(BaseModel):
    data: List[MarketPriceEntry]
    source: str = "AI-Generated Market Data"
    note: str = AI_SOURCE_NOTE


class MarketTrendResponse(BaseModel):
    data: TrendSeries
    source: str = "AI-Generated Market Trend Data"
    note: str = AI_SOURCE_NOTE


class MarketComparisonResponse(BaseModel):
    data: LocationComparison
    source: str = "AI-Generated Market Comparison Data"
    note: str = AI_SOURCE_NOTE
