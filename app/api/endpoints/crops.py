"""
Crop API endpoints for Smart Farming system.

This module provides crop recommendations for a set of growing conditions.
"""

from fastapi import APIRouter, Depends

from app.core import depends_crops
from app.models.crop import CropConditions, CropRecommendationResponse
from app.services.crop_service import CropService

router = APIRouter(prefix="/api/v1/crops", tags=["crops"])


@router.post("/recommendations", response_model=CropRecommendationResponse)
async def recommend_crops(
    conditions: CropConditions,
    crops: CropService = Depends(depends_crops),
) -> CropRecommendationResponse:
    """
    Recommend crops suited to the given conditions.

    Example:
        POST /api/v1/crops/recommendations
        {
            "season": "Kharif",
            "soil_type": "Clay loam",
            "temperature": 28,
            "water_availability": "High",
            "location": "Punjab"
        }

        Response:
        {
            "data": [
                {
                    "id": "crop_1a2b3c",
                    "name": "Rice",
                    "season": "Kharif",
                    "water_requirement": "High",
                    ...
                    "provenance": {"name": "extracted", ...},
                    "synthetic": false
                }
            ],
            "conditions": {...}
        }
    """
    return await crops.recommend(conditions)
