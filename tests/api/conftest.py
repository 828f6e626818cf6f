"""
API test fixtures.

Provides: application built by create_app and a TestClient
Dependencies: fastapi
System role: HTTP test infrastructure
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from rag_starter.api.main import create_app


@pytest.fixture
def app() -> FastAPI:
    """Create FastAPI test application with all routers."""
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app, raise_server_exceptions=False)
