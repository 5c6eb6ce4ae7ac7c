"""
Pest data models for Smart Farming system.

This module defines Pydantic models for pest identification, treatment
recommendations and regional pest alert bulletins.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.provenance import ParsedRecord


class ControlMethods(BaseModel):
    """Control methods split by approach."""
    organic: List[str] = Field(default_factory=list)
    chemical: List[str] = Field(default_factory=list)


class PestInfo(ParsedRecord):
    """Pest description parsed from AI text."""
    id: str = Field(..., description="Pseudo ID derived from the pest name")
    name: str = Field(..., description="Common name")
    scientific_name: str = Field("", description="Scientific name")
    description: str = Field("", description="Appearance and description")
    symptoms: str = Field("", description="Symptoms on infested plants")
    control_methods: ControlMethods = Field(default_factory=ControlMethods)


class TreatmentSet(ParsedRecord):
    """Treatment recommendations grouped by category."""
    organic: List[str] = Field(default_factory=list)
    chemical: List[str] = Field(default_factory=list)
    preventive: List[str] = Field(default_factory=list)
    ipm: List[str] = Field(default_factory=list)


class PestAlert(ParsedRecord):
    """One alert of a pest bulletin."""
    id: str
    title: str
    pest: str = ""
    severity: str = ""
    crops: List[str] = Field(default_factory=list)
    regions: List[str] = Field(default_factory=list)
    actions: List[str] = Field(default_factory=list)
    details: str = ""


class PestAlertBulletin(BaseModel):
    """Pest alert bulletin for a region."""
    date: str = Field(..., description="ISO timestamp of the bulletin")
    region: str
    alerts: List[PestAlert] = Field(default_factory=list)
    source: str = "AI-Generated Pest Alert System"


class IdentifyPestRequest(BaseModel):
    """Pest identification request."""
    crop_name: Optional[str] = Field(None, description="Affected crop (optional)")


class IdentifyPestResponse(BaseModel):
    """Pest identification response."""
    pest: Optional[PestInfo] = Field(
        None, description="Most likely pest, None when the answer named none"
    )
    alternatives: List[PestInfo] = Field(
        default_factory=list, description="Other pests found in the same answer"
    )


class TreatmentRequest(BaseModel):
    """Treatment recommendation request."""
    pest_name: str = Field(..., min_length=1, description="Pest common name")
    scientific_name: Optional[str] = Field(None, description="Scientific name")
