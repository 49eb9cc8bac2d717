import json
from types import SimpleNamespace

from fastapi.testclient import TestClient

from carbon_estimator.main import app
from carbon_estimator.routes import analyze_footprint as analyze_route
from carbon_estimator.services import gemini_footprint
from carbon_estimator.services.fallback import GENERAL_SUGGESTION
from carbon_estimator.settings import settings

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "carbon-estimator"}


def test_analyze_without_key_uses_fallback(no_api_key):
    r = client.post("/ai/analyze_footprint", json={"text": "I drove 20 miles and ate a burger"})

    assert r.status_code == 200
    assert r.headers["X-Footprint-Source"] == "fallback"
    body = r.json()
    assert set(body) == {"totalEmissions", "activities", "breakdown", "suggestions", "ecoScore"}
    assert [a["type"] for a in body["activities"]] == ["transport", "diet"]
    assert body["breakdown"]["energy"] == 0
    assert body["breakdown"]["waste"] == 0
    assert body["suggestions"][-1] == GENERAL_SUGGESTION
    assert 0 <= body["ecoScore"] <= 100


def test_analyze_empty_text(no_api_key):
    r = client.post("/ai/analyze_footprint", json={"text": ""})

    assert r.status_code == 200
    activities = r.json()["activities"]
    assert len(activities) == 1
    assert activities[0]["description"] == "Daily activities"
    assert activities[0]["icon"] == "🏠"


def test_analyze_requires_text():
    r = client.post("/ai/analyze_footprint", json={})

    assert r.status_code == 422


def test_total_failure_returns_generic_error(monkeypatch):
    async def broken(text):
        raise RuntimeError("estimator unreachable")

    monkeypatch.setattr(analyze_route, "analyze_footprint", broken)

    r = client.post("/ai/analyze_footprint", json={"text": "car"})

    assert r.status_code == 500
    assert r.json() == {"detail": "There was an error analyzing your carbon footprint. Please try again."}
    assert "X-Footprint-Source" not in r.headers


def test_analyze_with_gemini_answer(monkeypatch):
    payload = {
        "totalEmissions": 6.0,
        "activities": [{"type": "diet", "description": "Steak dinner", "emissions": 6.0, "icon": "🥩"}],
        "breakdown": {"transport": 0.0, "diet": 6.0, "energy": 0.0, "waste": 0.0},
        "suggestions": ["Swap one steak a week for beans"],
        "ecoScore": 94.0,
    }

    class StubModel:
        def generate_content(self, parts):
            return SimpleNamespace(text=json.dumps(payload))

    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    monkeypatch.setattr(gemini_footprint, "_get_model", lambda cfg: StubModel())

    r = client.post(
        "/ai/analyze_footprint",
        json={"text": "steak for dinner"},
        headers={"Origin": "http://localhost:5173"},
    )

    assert r.status_code == 200
    assert r.headers["X-Footprint-Source"] == "gemini"
    assert "X-Footprint-Source" in r.headers["Access-Control-Expose-Headers"]
    assert r.json() == payload
