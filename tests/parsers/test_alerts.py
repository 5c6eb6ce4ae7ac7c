"""
Unit tests for the pest alert bulletin parser.
"""

from app.models.provenance import Provenance
from app.parsers.alerts import detect_crops, detect_severity, parse_pest_alerts

BULLETIN = """PEST ALERT BULLETIN - October 2026

Fall Armyworm Outbreak
Pest: Spodoptera frugiperda
Severity: High
Affected Crops: Maize, Sorghum and Sugarcane
Regions: Karnataka, Maharashtra
Recommended Action: Spray emamectin benzoate
Action: Install pheromone traps

Whitefly build-up in cotton
Expect moderate spread over the next two weeks.
"""


class TestPestAlertParser:
    """Tests for parse_pest_alerts."""

    def test_headline_block_skipped(self):
        alerts = parse_pest_alerts(BULLETIN)
        assert [a.title for a in alerts] == [
            "Fall Armyworm Outbreak",
            "Whitefly build-up in cotton",
        ]

    def test_labelled_fields(self):
        alert = parse_pest_alerts(BULLETIN)[0]
        assert alert.pest == "Spodoptera frugiperda"
        assert alert.severity == "High"
        assert alert.crops == ["Maize", "Sorghum", "Sugarcane"]
        assert alert.regions == ["Karnataka", "Maharashtra"]
        assert alert.actions == ["Spray emamectin benzoate", "Install pheromone traps"]
        assert alert.provenance["severity"] == Provenance.EXTRACTED

    def test_inferred_fields_tagged_default(self):
        alert = parse_pest_alerts(BULLETIN)[1]
        assert alert.severity == "Medium"
        assert alert.crops == ["Cotton"]
        assert alert.provenance["severity"] == Provenance.DEFAULT
        assert alert.provenance["crops"] == Provenance.DEFAULT
        assert alert.details == "Expect moderate spread over the next two weeks."

    def test_list_split_keeps_words_containing_and(self):
        alerts = parse_pest_alerts("Locust swarm\nRegions: Rajasthan and Thailand border")
        assert alerts[0].regions == ["Rajasthan", "Thailand border"]

    def test_empty_input(self):
        assert parse_pest_alerts("") == []


def test_detect_severity():
    assert detect_severity("A critical outbreak") == "High"
    assert detect_severity("Medium pressure expected") == "Medium"
    assert detect_severity("Minor sightings") == "Low"


def test_detect_crops_fallback():
    assert detect_crops("Damage seen in wheat and potato fields") == ["Wheat", "Potato"]
    assert detect_crops("No crop named") == ["Multiple crops"]
