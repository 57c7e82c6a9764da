"""
Tests for FastAPI endpoints.

Uses TestClient to test API endpoints without running a server.
"""

import pytest
from fastapi.testclient import TestClient

from terramech.api.server import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def example_input():
    """Example input data for testing."""
    return {
        "soil": "sandy",
        "tire_width_m": 0.2,
        "tire_radius_m": 0.3,
        "contact_length_m": 0.1,
        "slip_ratio": 0.2,
    }


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_health_returns_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data


class TestRootEndpoint:
    """Tests for / endpoint (HTML UI)."""

    def test_root_returns_html(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Terramech" in response.text


class TestReferenceEndpoints:
    """Tests for /presets and /example."""

    def test_presets(self, client):
        response = client.get("/presets")

        assert response.status_code == 200
        keys = [p["key"] for p in response.json()]
        assert keys == ["sandy", "loam"]
        sandy = response.json()[0]
        assert sandy["friction_angle_deg"] == pytest.approx(31.1)

    def test_example_is_valid_input(self, client):
        example = client.get("/example").json()
        response = client.post("/analyze", json=example)
        assert response.status_code == 200


class TestAnalyzeEndpoint:
    """Tests for /analyze endpoint."""

    def test_analyze(self, client, example_input):
        response = client.post("/analyze", json=example_input)

        assert response.status_code == 200
        data = response.json()
        assert data["entry_angle_deg"] == pytest.approx(45.0)
        assert data["arc_step_count"] == 6
        assert data["reactions"]["thrust_N"] > 0

    def test_unknown_preset_is_400(self, client, example_input):
        example_input["soil"] = "clay"
        response = client.post("/analyze", json=example_input)

        assert response.status_code == 400
        assert "clay" in response.json()["detail"]

    def test_missing_field_is_422(self, client):
        response = client.post("/analyze", json={"soil": "sandy"})
        assert response.status_code == 422

    def test_custom_soil(self, client, example_input):
        example_input["soil"] = {
            "name": "Regolith",
            "k1": 1.0,
            "k2": 1000.0,
            "n": 1.0,
            "cohesion_Pa": 170.0,
            "friction_angle_deg": 35.0,
            "shear_modulus_m": 0.018,
            "density_kg_m3": 1500.0,
        }
        response = client.post("/analyze", json=example_input)

        assert response.status_code == 200
        assert response.json()["classification"] == "custom"


class TestAnalysisEndpoints:
    """Tests for /sweep, /profile and /solve."""

    def test_sweep(self, client, example_input):
        response = client.post("/sweep", json=example_input)

        assert response.status_code == 200
        assert len(response.json()["points"]) > 0

    def test_profile_samples(self, client, example_input):
        response = client.post("/profile?samples=7", json=example_input)

        assert response.status_code == 200
        assert len(response.json()["points"]) == 7

    def test_profile_rejects_one_sample(self, client, example_input):
        response = client.post("/profile?samples=1", json=example_input)
        assert response.status_code == 422

    def test_solve(self, client, example_input):
        response = client.post("/solve?target_load=300", json=example_input)

        assert response.status_code == 200
        data = response.json()
        assert data["target_load_N"] == 300.0
        assert data["reference_angle_deg"] == 20.0
