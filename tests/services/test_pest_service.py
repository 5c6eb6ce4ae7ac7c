"""
Unit tests for PestService.
"""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from app.core.config import reset_settings
from app.models.provenance import Provenance
from app.parsers.pests import UnclassifiedControlPolicy
from app.services.pest_service import PestService

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)

PESTS = """1. Stem Borer
Scientific Name: Scirpophaga incertulas
Symptoms: Dead hearts in young plants
2. Brown Planthopper
Scientific Name: Nilaparvata lugens
"""

TREATMENTS = "Chemical Control:\n- Apply cartap hydrochloride\n- Drain the field\n"

ALERTS = "PEST ALERT\n\nFall Armyworm\nSeverity: High\nRegion: Karnataka\n"


def make_service(text: str, **kwargs) -> PestService:
    client = Mock()
    client.agenerate_content = AsyncMock(return_value=text)
    return PestService(client=client, clock=lambda: NOW, **kwargs)


class TestIdentify:
    """Tests for PestService.identify."""

    def test_first_pest_and_alternatives(self):
        response = asyncio.run(make_service(PESTS).identify("Rice"))
        assert response.pest.name == "Stem Borer"
        assert [p.name for p in response.alternatives] == ["Brown Planthopper"]

    def test_default_crop_in_prompt(self):
        service = make_service(PESTS)
        asyncio.run(service.identify(None))
        prompt = service.client.agenerate_content.call_args.args[0]
        assert "agricultural crops" in prompt

    def test_placeholder_when_nothing_parsed(self):
        response = asyncio.run(
            make_service("I cannot help with that.", synthesize=True).identify("Rice")
        )
        assert response.pest.id == "pest_001"
        assert response.pest.provenance["name"] == Provenance.SYNTHESIZED
        assert response.alternatives == []

    def test_no_placeholder_without_synthesis(self):
        response = asyncio.run(
            make_service("I cannot help with that.", synthesize=False).identify("Rice")
        )
        assert response.pest is None
        assert response.alternatives == []

    def test_synthesis_switch_from_settings(self, monkeypatch):
        monkeypatch.setenv("ALLOW_SYNTHETIC_DATA", "false")
        reset_settings()
        try:
            service = make_service("I cannot help with that.")
        finally:
            reset_settings()

        assert service.synthesize is False
        assert asyncio.run(service.identify("Rice")).pest is None

    def test_policy_from_settings(self):
        assert make_service("").pest_parser.unclassified_policy == UnclassifiedControlPolicy.BALANCE


class TestTreatments:
    """Tests for PestService.treatments."""

    def test_parses_treatments(self):
        treatments = asyncio.run(make_service(TREATMENTS).treatments("Stem Borer"))
        assert treatments.chemical == ["Apply cartap hydrochloride", "Drain the field"]

    def test_scientific_name_default(self):
        service = make_service(TREATMENTS)
        asyncio.run(service.treatments("Stem Borer"))
        prompt = service.client.agenerate_content.call_args.args[0]
        assert "Stem Borer (pest)" in prompt

    def test_empty_pest_rejected(self):
        service = make_service(TREATMENTS)
        with pytest.raises(ValueError):
            asyncio.run(service.treatments("  "))
        service.client.agenerate_content.assert_not_called()


class TestAlerts:
    """Tests for PestService.alerts."""

    def test_bulletin(self):
        bulletin = asyncio.run(make_service(ALERTS).alerts())
        assert bulletin.region == "All India"
        assert bulletin.date == NOW.isoformat()
        assert [a.title for a in bulletin.alerts] == ["Fall Armyworm"]

    def test_region_and_month_in_prompt(self):
        service = make_service(ALERTS)
        bulletin = asyncio.run(service.alerts("Punjab"))
        prompt = service.client.agenerate_content.call_args.args[0]
        assert bulletin.region == "Punjab"
        assert "Punjab for October 2026" in prompt
