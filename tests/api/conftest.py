"""
API test fixtures.

Builds the app without running its lifespan and swaps services through
FastAPI dependency overrides.

Dependencies: pytest, fastapi
System role: HTTP test harness
"""

import pytest
from fastapi.testclient import TestClient

from lumen.api.main import create_app


@pytest.fixture
def app():
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
