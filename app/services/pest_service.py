"""
PestService for Smart Farming system.

This module provides pest identification, treatment recommendations and
regional pest alert bulletins, all generated by the Gemini API and parsed
into structured records.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from app.core.config import get_settings
from app.core.templates import render_prompt
from app.models.pest import IdentifyPestResponse, PestAlertBulletin, TreatmentSet
from app.parsers.alerts import PestAlertParser
from app.parsers.pests import PestInformationParser, fallback_pest
from app.parsers.treatments import TreatmentRecommendationParser
from app.services.gemini_client import GeminiClient, get_gemini_client

logger = logging.getLogger(__name__)

DEFAULT_CROP = "agricultural crops"
DEFAULT_REGION = "India"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PestService:
    """
    Pest knowledge backed by the Gemini API.

    When synthesize is off (ALLOW_SYNTHETIC_DATA=false), identify returns no
    placeholder pest for an answer that names none.
    """

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        pest_parser: Optional[PestInformationParser] = None,
        treatment_parser: Optional[TreatmentRecommendationParser] = None,
        alert_parser: Optional[PestAlertParser] = None,
        synthesize: Optional[bool] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._client = client
        self.synthesize = (
            get_settings().allow_synthetic_data if synthesize is None else synthesize
        )
        self.pest_parser = pest_parser or PestInformationParser(
            get_settings().pest_unclassified_control_policy
        )
        self.treatment_parser = treatment_parser or TreatmentRecommendationParser()
        self.alert_parser = alert_parser or PestAlertParser()
        self.clock = clock

    @property
    def client(self) -> GeminiClient:
        return self._client or get_gemini_client()

    async def identify(self, crop_name: Optional[str] = None) -> IdentifyPestResponse:
        """
        Identify the most likely pest of a crop.

        The first pest of the answer is returned. When the answer could not
        be parsed a placeholder pest with synthesized provenance is returned,
        or no pest at all when synthesis is disabled.

        Raises:
            GeminiError: If the Gemini call fails
        """
        crop = (crop_name or "").strip() or DEFAULT_CROP
        text = await self.client.agenerate_content(
            render_prompt("pest_identification", crop_name=crop)
        )
        pests = self.pest_parser.parse(text)

        if not pests:
            if not self.synthesize:
                logger.warning(f"No pests parsed for {crop}")
                return IdentifyPestResponse(pest=None)
            logger.warning(f"No pests parsed for {crop}, returning placeholder pest")
            return IdentifyPestResponse(pest=fallback_pest())

        return IdentifyPestResponse(pest=pests[0], alternatives=pests[1:])

    async def treatments(
        self,
        pest_name: str,
        scientific_name: Optional[str] = None,
    ) -> TreatmentSet:
        """
        Treatment recommendations for a pest.

        Raises:
            ValueError: If pest_name is empty
            GeminiError: If the Gemini call fails
        """
        if not pest_name or not pest_name.strip():
            raise ValueError("pest_name cannot be empty")

        prompt = render_prompt(
            "treatment",
            pest_name=pest_name.strip(),
            scientific_name=(scientific_name or "").strip() or "pest",
        )
        text = await self.client.agenerate_content(prompt)
        return self.treatment_parser.parse(text)

    async def alerts(self, region: Optional[str] = None) -> PestAlertBulletin:
        """
        Current pest alert bulletin for a region.

        Raises:
            GeminiError: If the Gemini call fails
        """
        region = (region or "").strip() or DEFAULT_REGION
        now = self.clock()
        text = await self.client.agenerate_content(
            render_prompt("pest_alert", region=region, month=f"{now:%B %Y}")
        )
        alerts = self.alert_parser.parse(text)
        logger.info(f"Pest bulletin for {region}: {len(alerts)} alerts")

        return PestAlertBulletin(
            date=now.isoformat(),
            region="All India" if region == DEFAULT_REGION else region,
            alerts=alerts,
        )


# Module-level singleton instance
_pest_service: Optional[PestService] = None


def get_pest_service() -> PestService:
    """Get the singleton PestService instance."""
    global _pest_service
    if _pest_service is None:
        _pest_service = PestService()
    return _pest_service
