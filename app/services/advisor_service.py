"""
AdvisorService for Smart Farming system.

Free-text farming advice: the model's answer is returned as-is.
"""

import logging
from typing import Optional

from app.core.templates import render_prompt
from app.models.advisor import FieldConditions
from app.services.gemini_client import GeminiClient, get_gemini_client

logger = logging.getLogger(__name__)


def _or_unknown(value) -> str:
    if value is None or value == "":
        return "unknown"
    return f"{value:g}" if isinstance(value, float) else str(value)


class AdvisorService:
    """Unparsed advice prompts backed by the Gemini API."""

    def __init__(self, client: Optional[GeminiClient] = None):
        self._client = client

    @property
    def client(self) -> GeminiClient:
        return self._client or get_gemini_client()

    async def farming_advice(self, crop_type: str, conditions: FieldConditions) -> str:
        prompt = render_prompt(
            "farming_advice",
            crop_type=crop_type,
            temperature=_or_unknown(conditions.temperature),
            humidity=_or_unknown(conditions.humidity),
            soil_type=_or_unknown(conditions.soil_type),
            rainfall=_or_unknown(conditions.rainfall),
        )
        return await self.client.agenerate_content(prompt)

    async def pest_control(self, pest_type: str, crop_type: str) -> str:
        return await self.client.agenerate_content(
            render_prompt("pest_control", pest_type=pest_type, crop_type=crop_type)
        )

    async def price_prediction(self, crop_type: str) -> str:
        return await self.client.agenerate_content(
            render_prompt("price_prediction", crop_type=crop_type)
        )

    async def ask(self, prompt: str) -> str:
        """Send a custom prompt unchanged."""
        logger.info(f"Custom advisor prompt ({len(prompt)} chars)")
        return await self.client.agenerate_content(prompt)


# Module-level singleton instance
_advisor_service: Optional[AdvisorService] = None


def get_advisor_service() -> AdvisorService:
    """Get the singleton AdvisorService instance."""
    global _advisor_service
    if _advisor_service is None:
        _advisor_service = AdvisorService()
    return _advisor_service
