"""
Market API endpoints for Smart Farming system.

This module provides AI-generated market prices, price trends and
cross-location price comparisons. Every response says it is AI-generated and
each record tags its synthesized fields.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from app.core import depends_market
from app.models.market import (
    MarketComparisonResponse,
    MarketPricesResponse,
    MarketTrendResponse,
)
from app.services.market_service import MAX_TREND_DAYS, MarketService

router = APIRouter(prefix="/api/v1/market", tags=["market"])


@router.get("/prices", response_model=MarketPricesResponse)
async def market_prices(
    crop: Optional[str] = Query(None, max_length=100, description="Crop name (default: major crops)"),
    location: Optional[str] = Query(None, max_length=100, description="Market location (default: India)"),
    market: MarketService = Depends(depends_market),
) -> MarketPricesResponse:
    """
    Current market prices.

    Example:
        GET /api/v1/market/prices?crop=Rice
        Response:
        {
            "data": [
                {"crop_name": "Rice", "price": 2500.0, "location": "National Average", ...},
                {"crop_name": "Rice", "price": 2391.0, "location": "Delhi", ...},
                ...
            ],
            "source": "AI-Generated Market Data (as of October 19, 2026)",
            "note": "This is AI-generated data; ..."
        }
    """
    return await market.prices(crop, location)


@router.get("/trends/{crop}", response_model=MarketTrendResponse)
async def market_trends(
    crop: str = Path(..., min_length=1, max_length=100, description="Crop name"),
    location: Optional[str] = Query(None, max_length=100, description="Market location"),
    days: int = Query(30, ge=1, le=MAX_TREND_DAYS, description="Days of history"),
    market: MarketService = Depends(depends_market),
) -> MarketTrendResponse:
    """Daily price trend of a crop with market events and analysis."""
    return await market.trends(crop, location, days)


@router.get("/compare", response_model=MarketComparisonResponse)
async def compare_markets(
    crop: str = Query(..., min_length=1, max_length=100, description="Crop name"),
    locations: str = Query(..., min_length=1, description="Comma separated locations"),
    market: MarketService = Depends(depends_market),
) -> MarketComparisonResponse:
    """
    Compare a crop's price across locations.

    Example:
        GET /api/v1/market/compare?crop=Wheat&locations=Delhi,Mumbai
    """
    return await market.compare(crop, locations)
