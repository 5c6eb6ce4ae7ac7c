"""
Tests for the pest API endpoints.
"""

from app.core import depends_pests
from app.models.pest import IdentifyPestResponse, PestAlertBulletin, TreatmentSet
from app.parsers.pests import fallback_pest


def test_identify(client, override):
    service = override(depends_pests, identify=IdentifyPestResponse(pest=fallback_pest()))

    response = client.post("/api/v1/pests/identify", json={"crop_name": "Tomato"})

    assert response.status_code == 200
    data = response.json()
    assert data["pest"]["name"] == "Aphid"
    assert data["pest"]["synthetic"] is True
    service.identify.assert_awaited_once_with("Tomato")


def test_identify_without_crop(client, override):
    service = override(depends_pests, identify=IdentifyPestResponse(pest=fallback_pest()))
    response = client.post("/api/v1/pests/identify", json={})
    assert response.status_code == 200
    service.identify.assert_awaited_once_with(None)


def test_identify_nothing_found(client, override):
    override(depends_pests, identify=IdentifyPestResponse(pest=None))
    response = client.post("/api/v1/pests/identify", json={"crop_name": "Rice"})
    assert response.status_code == 200
    assert response.json() == {"pest": None, "alternatives": []}


def test_treatments(client, override):
    service = override(
        depends_pests, treatments=TreatmentSet(organic=["Neem oil spray"])
    )

    response = client.post(
        "/api/v1/pests/treatments",
        json={"pest_name": "Aphid", "scientific_name": "Aphidoidea"},
    )

    assert response.status_code == 200
    assert response.json()["organic"] == ["Neem oil spray"]
    service.treatments.assert_awaited_once_with("Aphid", "Aphidoidea")


def test_treatments_requires_pest_name(client, override):
    override(depends_pests, treatments=TreatmentSet())
    response = client.post("/api/v1/pests/treatments", json={"pest_name": ""})
    assert response.status_code == 422


def test_alerts(client, override):
    bulletin = PestAlertBulletin(date="2026-10-19T08:00:00+00:00", region="Punjab")
    service = override(depends_pests, alerts=bulletin)

    response = client.get("/api/v1/pests/alerts?region=Punjab")

    assert response.status_code == 200
    assert response.json()["region"] == "Punjab"
    assert response.json()["source"] == "AI-Generated Pest Alert System"
    service.alerts.assert_awaited_once_with("Punjab")
