"""
FastAPI dependency injection utilities for Smart Farming system.

This module provides dependency injection functions for FastAPI routes.
Tests replace the services through ``app.dependency_overrides``.
"""

from typing import TYPE_CHECKING
from fastapi import Depends

if TYPE_CHECKING:
    from app.services.advisor_service import AdvisorService
    from app.services.crop_service import CropService
    from app.services.market_service import MarketService
    from app.services.pest_service import PestService


# Lazy imports to avoid circular dependency
def _get_crop_service():
    from app.services.crop_service import get_crop_service
    return get_crop_service()


def _get_pest_service():
    from app.services.pest_service import get_pest_service
    return get_pest_service()


def _get_market_service():
    from app.services.market_service import get_market_service
    return get_market_service()


def _get_advisor_service():
    from app.services.advisor_service import get_advisor_service
    return get_advisor_service()


async def depends_crops(
    service: "CropService" = Depends(_get_crop_service),
) -> "CropService":
    """
    FastAPI dependency injection for CropService.

    Usage in routes:
        @router.post("/recommendations")
        async def recommend(
            conditions: CropConditions,
            crops: CropService = Depends(depends_crops)
        ):
            return await crops.recommend(conditions)

    Returns:
        CropService: The singleton crop service instance
    """
    return service


async def depends_pests(
    service: "PestService" = Depends(_get_pest_service),
) -> "PestService":
    """FastAPI dependency injection for PestService."""
    return service


async def depends_market(
    service: "MarketService" = Depends(_get_market_service),
) -> "MarketService":
    """FastAPI dependency injection for MarketService."""
    return service


async def depends_advisor(
    service: "AdvisorService" = Depends(_get_advisor_service),
) -> "AdvisorService":
    """FastAPI dependency injection for AdvisorService."""
    return service
