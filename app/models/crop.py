"""
Crop recommendation data models for Smart Farming system.

This module contains Pydantic models for the crop recommendation workflow
including the growing conditions request and the parsed recommendations.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.provenance import ParsedRecord


class CropConditions(BaseModel):
    """Growing conditions used to ask for crop recommendations."""
    season: Optional[str] = Field(None, description="Growing season")
    soil_type: Optional[str] = Field(None, description="Soil type")
    temperature: Optional[float] = Field(None, description="Average temperature (°C)")
    water_availability: Optional[str] = Field(None, description="Water availability")
    location: Optional[str] = Field(None, description="Region or district")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "season": "Kharif",
                    "soil_type": "Clay loam",
                    "temperature": 28,
                    "water_availability": "high",
                    "location": "West Bengal",
                }
            ]
        }
    }


class CropRecommendation(ParsedRecord):
    """A single crop recommendation parsed from a numbered list."""
    id: str = Field(..., description="Pseudo ID derived from the crop name")
    name: str = Field(..., description="Crop name")
    season: str = Field("", description="Growing season")
    water_requirement: str = Field("", description="Water requirement")
    temperature: str = Field("", description="Temperature range")
    soil_type: str = Field("", description="Soil requirement")
    duration: str = Field("", description="Growing duration")
    expected_yield: str = Field("", description="Expected yield")
    benefits: str = Field("", description="Key benefits")


class CropRecommendationResponse(BaseModel):
    """Crop recommendation response."""
    data: List[CropRecommendation] = Field(default_factory=list)
    conditions: CropConditions
