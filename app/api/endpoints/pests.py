"""
Pest API endpoints for Smart Farming system.

This module provides pest identification, treatment recommendations and
regional pest alert bulletins.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core import depends_pests
from app.models.pest import (
    IdentifyPestRequest,
    IdentifyPestResponse,
    PestAlertBulletin,
    TreatmentRequest,
    TreatmentSet,
)
from app.services.pest_service import PestService

router = APIRouter(prefix="/api/v1/pests", tags=["pests"])


@router.post("/identify", response_model=IdentifyPestResponse)
async def identify_pest(
    request: IdentifyPestRequest,
    pests: PestService = Depends(depends_pests),
) -> IdentifyPestResponse:
    """
    Identify the most likely pest of a crop.

    Example:
        POST /api/v1/pests/identify
        {"crop_name": "Cotton"}

        Response:
        {
            "pest": {
                "id": "pest_5f3a",
                "name": "Pink Bollworm",
                "scientific_name": "Pectinophora gossypiella",
                ...
            },
            "alternatives": [...]
        }
    """
    return await pests.identify(request.crop_name)


@router.post("/treatments", response_model=TreatmentSet)
async def recommend_treatments(
    request: TreatmentRequest,
    pests: PestService = Depends(depends_pests),
) -> TreatmentSet:
    """Organic, chemical, preventive and IPM treatments for a pest."""
    return await pests.treatments(request.pest_name, request.scientific_name)


@router.get("/alerts", response_model=PestAlertBulletin)
async def pest_alerts(
    region: Optional[str] = Query(None, max_length=100, description="Region (default: India)"),
    pests: PestService = Depends(depends_pests),
) -> PestAlertBulletin:
    """Current pest alert bulletin for a region."""
    return await pests.alerts(region)
