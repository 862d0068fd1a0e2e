"""
Tests for health and readiness endpoints.

These tests verify the observability endpoints work correctly:
- /health: Liveness probe
- /ready: Readiness probe with dependency checks
- /: Root endpoint with API info
"""
from unittest.mock import MagicMock

from core import dependencies as deps


# =============================================================================
# ROOT ENDPOINT TESTS
# =============================================================================

def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Dialysis Companion API"
    assert data["version"] == "1.0.0"
    assert "health" in data
    assert "ready" in data


# =============================================================================
# HEALTH ENDPOINT TESTS (LIVENESS)
# =============================================================================

def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data


# =============================================================================
# READINESS ENDPOINT TESTS
# =============================================================================

def test_ready_is_degraded_without_gemini_key(client):
    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "degraded"

    by_name = {d["name"]: d for d in data["dependencies"]}
    assert by_name["database"]["status"] == "ok"
    assert by_name["gemini"]["status"] == "degraded"


def test_ready_when_all_configured(test_app, client):
    gemini = MagicMock()
    gemini.is_configured = True
    test_app.dependency_overrides[deps.get_gemini_service] = lambda: gemini

    data = client.get("/ready").json()
    assert data["status"] == "ready"


def test_ready_returns_503_when_database_down(test_app, client):
    broken_db = MagicMock()
    broken_db.get_connection.side_effect = Exception("unable to open database file")
    test_app.dependency_overrides[deps.get_database] = lambda: broken_db

    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
