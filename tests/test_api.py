"""
Tests for the FastAPI application.

Tests the API endpoints with various inputs and error conditions.

Test categories:
- Happy path (valid request → 200)
- Domain errors (no surplus, no deficit, infeasible pool → 400)
- Unknown vessel (→ 404)
- Pydantic errors (missing fields → 422)
- Environment-driven configuration
"""

import pytest
from fastapi.testclient import TestClient

import fuelbank.api as api
from fuelbank.api import app, get_engine_config
from fuelbank.seed import seed_routes
from fuelbank.service import create_in_memory_service


# =============================================================================
# Test Client
# =============================================================================


@pytest.fixture
def client(monkeypatch) -> TestClient:
    """Test client backed by a freshly seeded service."""
    monkeypatch.setattr(api, "service", create_in_memory_service(seed_routes()))
    return TestClient(app)


def error_code(response) -> str:
    return response.json()["detail"]["code"]


# =============================================================================
# System
# =============================================================================


class TestHealthCheck:
    """Tests for health check endpoint."""

    def test_health_check_returns_200(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "service" in data
        assert "version" in data


class TestEngineConfigFromEnv:
    """Tests for get_engine_config."""

    def test_default(self, monkeypatch) -> None:
        monkeypatch.delenv("TARGET_INTENSITY", raising=False)
        assert get_engine_config().target_intensity == 89.3368

    def test_override(self, monkeypatch) -> None:
        monkeypatch.setenv("TARGET_INTENSITY", "85.5")
        assert get_engine_config().target_intensity == 85.5


# =============================================================================
# Routes
# =============================================================================


class TestRoutes:
    """Tests for /api/routes endpoints."""

    def test_list_routes(self, client: TestClient) -> None:
        response = client.get("/api/routes")

        assert response.status_code == 200
        assert len(response.json()) == 5

    def test_list_routes_by_year(self, client: TestClient) -> None:
        response = client.get("/api/routes", params={"year": 2024})
        assert [r["vessel_id"] for r in response.json()] == ["R001", "R002", "R003"]

    def test_comparison(self, client: TestClient) -> None:
        response = client.get("/api/routes/comparison")

        assert response.status_code == 200
        data = response.json()
        assert data["baseline"]["vessel_id"] == "R001"
        assert len(data["rows"]) == 4
        r002 = data["rows"][0]
        assert r002["vessel_id"] == "R002"
        assert r002["percent_diff"] == pytest.approx(-3.2967, abs=1e-4)
        assert r002["compliant"] is True

    def test_set_baseline(self, client: TestClient) -> None:
        response = client.post("/api/routes/R003/baseline")

        assert response.status_code == 200
        assert response.json()["is_baseline"] is True
        baselines = [r["vessel_id"] for r in client.get("/api/routes").json() if r["is_baseline"]]
        assert baselines == ["R003"]

    def test_set_baseline_unknown(self, client: TestClient) -> None:
        response = client.post("/api/routes/NOPE/baseline")

        assert response.status_code == 404
        assert error_code(response) == "NOT_FOUND"

    def test_comparison_without_baseline(self, monkeypatch) -> None:
        routes = [r.model_copy(update={"is_baseline": False}) for r in seed_routes()]
        monkeypatch.setattr(api, "service", create_in_memory_service(routes))

        response = TestClient(app).get("/api/routes/comparison")

        assert response.status_code == 400
        assert error_code(response) == "NO_BASELINE"


# =============================================================================
# Compliance
# =============================================================================


class TestCompliance:
    """Tests for /api/compliance endpoints."""

    def test_compliance_balance(self, client: TestClient) -> None:
        response = client.get("/api/compliance/cb", params={"vessel_id": "R001"})

        assert response.status_code == 200
        data = response.json()
        assert round(data["balance_g"]) == -340_956_000
        assert data["energy_mj"] == 205_000_000
        assert data["status"] == "deficit"

    def test_compliance_balance_unknown_vessel(self, client: TestClient) -> None:
        response = client.get("/api/compliance/cb", params={"vessel_id": "NOPE"})

        assert response.status_code == 404
        assert error_code(response) == "NOT_FOUND"

    def test_compliance_balance_missing_vessel(self, client: TestClient) -> None:
        response = client.get("/api/compliance/cb")
        assert response.status_code == 422

    def test_adjusted_balances(self, client: TestClient) -> None:
        response = client.get("/api/compliance/adjusted-cb", params={"year": 2025})

        assert response.status_code == 200
        data = response.json()
        assert [a["vessel_id"] for a in data] == ["R004", "R005"]
        assert all(a["banked_g"] == 0 for a in data)

    def test_adjusted_balances_requires_year(self, client: TestClient) -> None:
        response = client.get("/api/compliance/adjusted-cb")
        assert response.status_code == 422


# =============================================================================
# Banking
# =============================================================================


class TestBanking:
    """Tests for /api/banking endpoints."""

    def test_bank_surplus(self, client: TestClient) -> None:
        response = client.post("/api/banking/bank", json={"vessel_id": "R002", "year": 2024})

        assert response.status_code == 200
        data = response.json()
        assert data["amount_banked_g"] > 0
        assert data["entry"]["amount_g"] == data["amount_banked_g"]

        records = client.get(
            "/api/banking/records", params={"vessel_id": "R002", "year": 2024}
        ).json()
        assert records["total_banked_g"] == data["amount_banked_g"]
        assert len(records["entries"]) == 1
        assert records["running_totals_g"] == [data["amount_banked_g"]]

    def test_bank_deficit_rejected(self, client: TestClient) -> None:
        response = client.post("/api/banking/bank", json={"vessel_id": "R001", "year": 2024})

        assert response.status_code == 400
        assert error_code(response) == "NO_SURPLUS"

    def test_bank_unknown_vessel(self, client: TestClient) -> None:
        response = client.post("/api/banking/bank", json={"vessel_id": "NOPE", "year": 2024})
        assert response.status_code == 404

    def test_bank_missing_fields(self, client: TestClient) -> None:
        response = client.post("/api/banking/bank", json={"vessel_id": "R002"})
        assert response.status_code == 422

    def test_apply_without_funds(self, client: TestClient) -> None:
        response = client.post("/api/banking/apply", json={"vessel_id": "R001", "year": 2024})

        assert response.status_code == 400
        assert error_code(response) == "NO_FUNDS_AVAILABLE"

    def test_apply_without_deficit(self, client: TestClient) -> None:
        response = client.post("/api/banking/apply", json={"vessel_id": "R002", "year": 2024})

        assert response.status_code == 400
        assert error_code(response) == "NO_DEFICIT"

    def test_empty_records(self, client: TestClient) -> None:
        response = client.get("/api/banking/records", params={"vessel_id": "R001", "year": 2024})

        assert response.status_code == 200
        assert response.json()["total_banked_g"] == 0
        assert response.json()["entries"] == []


# =============================================================================
# Pools
# =============================================================================


class TestPools:
    """Tests for /api/pools endpoints."""

    def test_create_pool(self, client: TestClient) -> None:
        response = client.post(
            "/api/pools",
            json={
                "year": 2024,
                "members": [
                    {"ship_id": "A", "cb_before_g": 200},
                    {"ship_id": "B", "cb_before_g": -150},
                ],
            },
        )

        assert response.status_code == 200
        members = {m["ship_id"]: m for m in response.json()["members"]}
        assert members["A"]["cb_after_g"] == 50
        assert members["B"]["cb_after_g"] == 0
        assert members["B"]["cb_before_g"] == -150

    def test_infeasible_pool(self, client: TestClient) -> None:
        response = client.post(
            "/api/pools",
            json={
                "year": 2024,
                "members": [
                    {"ship_id": "A", "cb_before_g": -200},
                    {"ship_id": "B", "cb_before_g": 100},
                ],
            },
        )

        assert response.status_code == 400
        assert error_code(response) == "POOL_INFEASIBLE"
        assert client.get("/api/pools").json() == []

    def test_duplicate_members(self, client: TestClient) -> None:
        response = client.post(
            "/api/pools",
            json={
                "year": 2024,
                "members": [
                    {"ship_id": "A", "cb_before_g": 200},
                    {"ship_id": "A", "cb_before_g": -150},
                ],
            },
        )

        assert response.status_code == 400
        assert error_code(response) == "VALIDATION_FAILED"

    def test_list_pools_by_year(self, client: TestClient) -> None:
        for year in (2024, 2025):
            client.post(
                "/api/pools",
                json={"year": year, "members": [{"ship_id": "A", "cb_before_g": 10}]},
            )

        response = client.get("/api/pools", params={"year": 2025})

        assert response.status_code == 200
        assert [p["year"] for p in response.json()] == [2025]
