"""
Tests for the recommendations REST API.
"""

import pytest
from fastapi.testclient import TestClient

from db import get_session
from main import app

PROFILE = {
    "gre_score": 315,
    "ielts_score": 7.5,
    "cgpa": 8.5,
    "preferred_countries": ["CA"],
    "preferred_university_names": ["Toronto"],
    "reason_for_studying": "Career advancement",
}


@pytest.fixture
def client(seeded_session):
    def _override():
        yield seeded_session

    app.dependency_overrides[get_session] = _override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class TestScoreEndpoint:

    def test_breakdown(self, client):
        response = client.post("/recommendations/score", json={"gre": 315, "ielts": 7.5, "cgpa": 8.5})

        assert response.status_code == 200
        assert response.json() == {
            "normalized_gre": 68.75,
            "normalized_ielts": 83.33,
            "normalized_cgpa": 85.0,
            "final_score": pytest.approx(76.38, abs=0.01),
        }

    def test_out_of_range(self, client):
        response = client.post("/recommendations/score", json={"gre": 350, "ielts": 7.5, "cgpa": 8.5})

        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == {"gre": "GRE score must be between 260-340"}


class TestRecommendationsEndpoint:

    def test_fit(self, client):
        response = client.post("/recommendations", json={"student_profile": PROFILE})

        assert response.status_code == 200
        body = response.json()
        assert body["mode"] == "fit"
        assert body["student_score"] == pytest.approx(76.375, abs=0.01)
        assert body["summary"]["total_evaluated"] == 3
        top = body["recommendations"][0]
        assert top["name"] == "University of Toronto"
        assert top["rank"] == 1
        assert top["match_score"] == pytest.approx(0.854)
        assert top["match_breakdown"]["country"] == 0.2
        assert top["tier"] is None

    def test_prestige_filter(self, client):
        response = client.post(
            "/recommendations",
            json={"student_profile": PROFILE, "mode": "prestige", "filter": "Dream"},
        )

        body = response.json()
        assert response.status_code == 200
        assert [r["name"] for r in body["recommendations"]] == ["University of Toronto", "McGill University"]
        assert body["summary"]["category_counts"] == {"Dream": 2, "Competitive": 0, "Safe": 1}

    def test_tier(self, client):
        response = client.post("/recommendations", json={"student_profile": PROFILE, "mode": "tier"})

        assert response.status_code == 200
        tiers = {r["name"]: r["tier"] for r in response.json()["recommendations"]}
        assert tiers["Arizona State University"] == "Safe"

    def test_validation_error(self, client):
        profile = dict(PROFILE, preferred_countries=[])
        response = client.post("/recommendations", json={"student_profile": profile})

        assert response.status_code == 422
        assert "preferred_countries" in response.json()["detail"]["errors"]

    def test_bad_filter(self, client):
        response = client.post(
            "/recommendations",
            json={"student_profile": PROFILE, "mode": "tier", "filter": "Dream"},
        )
        assert response.status_code == 422

    def test_nothing_left_after_filter(self, client):
        response = client.post(
            "/recommendations",
            json={"student_profile": PROFILE, "mode": "prestige", "filter": "Competitive"},
        )
        assert response.status_code == 404


def test_health(client):
    response = client.get("/recommendations/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
