"""
Test API structure and endpoint definitions.

These tests verify the API is properly configured without exercising the
calculations in depth.
"""

import pytest
from fastapi.testclient import TestClient


def test_api_can_import():
    """Test that API modules can be imported."""
    from redcf.api import main
    from redcf.api import schemas
    from redcf.api.routes import analysis

    assert main.app is not None
    assert hasattr(schemas, "AnalysisRequest")
    assert hasattr(analysis, "router")


def test_schemas_defined():
    """Test that all required Pydantic schemas are defined."""
    from redcf.api.schemas import (
        AnalysisRequest,
        AnalysisResponse,
        AnnualTable,
        IRRRequest,
        IRRResponse,
        HoldingPeriodRequest,
        HoldingPeriodResponse,
        ErrorResponse,
    )

    assert AnalysisRequest().assumptions.purchase_price == 300000
    assert AnalysisResponse is not None
    assert AnnualTable is not None
    assert IRRRequest is not None
    assert IRRResponse is not None
    assert HoldingPeriodRequest is not None
    assert HoldingPeriodResponse is not None
    assert ErrorResponse is not None


def test_api_routes_registered():
    """Test that all expected routes are registered."""
    from redcf.api.main import app

    routes = [route.path for route in app.routes]

    assert "/health" in routes
    assert "/" in routes
    assert "/api/analysis/" in routes
    assert "/api/analysis/irr" in routes
    assert "/api/analysis/holding-periods" in routes


def test_health_endpoint():
    """Test health check endpoint."""
    from redcf.api.main import app

    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "redcf-api"


def test_root_endpoint():
    """Test root endpoint."""
    from redcf.api.main import app

    client = TestClient(app)
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "REDCF API"
    assert data["docs"] == "/api/docs"


def test_openapi_schema():
    """Test OpenAPI schema generation."""
    from redcf.api.main import app

    client = TestClient(app)
    response = client.get("/api/openapi.json")

    assert response.status_code == 200
    schema = response.json()
    assert schema["info"]["title"] == "REDCF API"
    assert "/api/analysis/irr" in schema["paths"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
