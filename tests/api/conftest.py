"""
Shared fixtures for API tests.

Services are replaced through FastAPI dependency overrides so no request
reaches the Gemini API.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from app.api.main import app


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def override():
    """Install a mock service for a dependency and return it."""

    def _override(dependency, **async_methods):
        service = Mock()
        for name, value in async_methods.items():
            if isinstance(value, Exception):
                setattr(service, name, AsyncMock(side_effect=value))
            else:
                setattr(service, name, AsyncMock(return_value=value))
        app.dependency_overrides[dependency] = lambda: service
        return service

    return _override
