"""
CropService for Smart Farming system.

Asks the generative model for crops suited to a set of growing conditions
and parses the numbered answer into CropRecommendation records.
"""

import logging
from typing import Optional

from app.core.templates import render_prompt
from app.models.crop import CropConditions, CropRecommendationResponse
from app.parsers.base import ResponseParser
from app.parsers.crops import CropRecommendationParser
from app.services.gemini_client import GeminiClient, get_gemini_client

logger = logging.getLogger(__name__)


def format_conditions(conditions: CropConditions) -> str:
    """Render the known growing conditions, one per line."""
    lines = [f"Season: {conditions.season}" if conditions.season else "Season: Current growing season"]
    if conditions.soil_type:
        lines.append(f"Soil Type: {conditions.soil_type}")
    if conditions.temperature is not None:
        lines.append(f"Average Temperature: {conditions.temperature:g}°C")
    if conditions.water_availability:
        lines.append(f"Water Availability: {conditions.water_availability}")
    if conditions.location:
        lines.append(f"Location: {conditions.location}")
    return "\n".join(lines)


class CropService:
    """Crop recommendations backed by the Gemini API."""

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        parser: Optional[ResponseParser] = None,
    ):
        self._client = client
        self.parser = parser or CropRecommendationParser()

    @property
    def client(self) -> GeminiClient:
        return self._client or get_gemini_client()

    async def recommend(self, conditions: CropConditions) -> CropRecommendationResponse:
        """
        Recommend crops for the given conditions.

        Args:
            conditions: Season, soil, temperature, water and location hints

        Returns:
            Parsed recommendations, in the order the model listed them

        Raises:
            GeminiError: If the Gemini call fails
        """
        prompt = render_prompt("crop_recommendation", conditions=format_conditions(conditions))
        text = await self.client.agenerate_content(prompt)
        crops = self.parser.parse(text)
        logger.info(f"Crop recommendation returned {len(crops)} crops")
        return CropRecommendationResponse(data=crops, conditions=conditions)


# Module-level singleton instance
_crop_service: Optional[CropService] = None


def get_crop_service() -> CropService:
    """Get the singleton CropService instance."""
    global _crop_service
    if _crop_service is None:
        _crop_service = CropService()
    return _crop_service
