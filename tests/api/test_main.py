"""
Tests for the application-level endpoints and error handlers.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from app.core import depends_crops
from app.services.gemini_client import GeminiAPIError, GeminiTimeoutError


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "smart-farming-web"}


def test_info(client):
    data = client.get("/api/v1/info").json()
    assert data["app_name"]
    assert "gemini_model" in data
    assert "allow_synthetic_data" in data


def test_gemini_error_is_bad_gateway(client, override):
    override(depends_crops, recommend=GeminiAPIError("API key not valid", 403))

    response = client.post("/api/v1/crops/recommendations", json={})

    assert response.status_code == 502
    assert response.json()["detail"] == "API key not valid"


def test_gemini_timeout_is_bad_gateway(client, override):
    override(depends_crops, recommend=GeminiTimeoutError("timed out"))
    response = client.post("/api/v1/crops/recommendations", json={})
    assert response.status_code == 502


def test_service_value_error_is_unprocessable(client, override):
    override(depends_crops, recommend=ValueError("crop cannot be empty"))
    response = client.post("/api/v1/crops/recommendations", json={})
    assert response.status_code == 422
    assert response.json() == {"error": "Invalid request", "detail": "crop cannot be empty"}


def test_internal_validation_error_is_server_error(client, override):
    with pytest.raises(ValidationError) as info:
        TypeAdapter(int).validate_python("not a number")
    override(depends_crops, recommend=info.value)

    response = client.post("/api/v1/crops/recommendations", json={})

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
