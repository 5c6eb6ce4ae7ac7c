"""
Advisor data models for Smart Farming system.

Free-text advice requests; the answers are returned as raw AI text.
"""

from typing import Optional

from pydantic import BaseModel, Field


class FieldConditions(BaseModel):
    """Current weather and soil conditions of a field."""
    temperature: Optional[float] = Field(None, description="Temperature (°C)")
    humidity: Optional[float] = Field(None, ge=0, le=100, description="Humidity (%)")
    soil_type: Optional[str] = Field(None, description="Soil type")
    rainfall: Optional[float] = Field(None, ge=0, description="Recent rainfall (mm)")


class FarmingAdviceRequest(BaseModel):
    crop_type: str = Field(..., min_length=1)
    conditions: FieldConditions = Field(default_factory=FieldConditions)


class PestControlRequest(BaseModel):
    pest_type: str = Field(..., min_length=1)
    crop_type: str = Field(..., min_length=1)


class PricePredictionRequest(BaseModel):
    crop_type: str = Field(..., min_length=1)


class AskRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=8000)


class AdviceResponse(BaseModel):
    """Raw advice text."""
    text: str = Field(..., description="AI answer, unparsed")
