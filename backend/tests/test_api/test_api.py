"""Tests for API endpoints (pipeline integration through the HTTP layer)."""

from __future__ import annotations

from fastapi.testclient import TestClient

from funnelsight.main import app
from tests.conftest import optin_page, unbalanced_page


client = TestClient(app)


def payload(page) -> dict:
    return page.model_dump(mode="json")


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["heuristics_registered"] == 9
    assert data["templates_registered"] == 5
    assert data["geometry_locked"] is True


def test_analyze_optin():
    response = client.post("/api/analyze", json={"page": payload(optin_page())})
    assert response.status_code == 200
    data = response.json()
    # Default settings keep geometry locked
    assert data["layout"] == []
    assert len(data["suggestions"]) <= 3
    assert data["template"]["template_id"] == "optin-standard"
    assert data["structure"]["funnel_intent"] == "optin"
    assert data["errors"] == {}
    assert data["processing_time_ms"] >= 0


def test_analyze_layout_locked():
    response = client.post("/api/analyze/layout", json={"page": payload(unbalanced_page()), "viewport": "mobile"})
    assert response.status_code == 200
    assert response.json() == {"suggestions": [], "geometry_locked": True}


def test_analyze_rejects_malformed_page():
    response = client.post("/api/analyze", json={"page": {"id": "p"}})
    assert response.status_code == 422


def test_analyze_rejects_unknown_viewport():
    response = client.post("/api/analyze", json={"page": payload(optin_page()), "viewport": "tablet"})
    assert response.status_code == 422


def test_apply_spacing():
    suggestion = {
        "id": "manual-1",
        "type": "spacing",
        "confidence": 0.7,
        "message": "More room",
        "affected_node_ids": ["email", "submit"],
        "recommendation": {"token": "--space-form-gap", "delta": 8},
    }
    response = client.post("/api/apply", json={"page": payload(unbalanced_page()), "suggestion": suggestion})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["props_changes"] == {"form": {"gap": 16}}
    assert data["modified_node_ids"] == ["form"]


def test_apply_failure_is_not_an_error():
    suggestion = {
        "id": "manual-2",
        "type": "hierarchy",
        "confidence": 0.5,
        "message": "Bigger headline",
        "affected_node_ids": ["ghost"],
        "recommendation": {"delta": 4},
    }
    response = client.post("/api/apply", json={"page": payload(optin_page()), "suggestion": suggestion})
    assert response.status_code == 200
    assert response.json()["success"] is False


def test_list_templates():
    response = client.get("/api/templates")
    assert response.status_code == 200
    templates = response.json()["templates"]
    assert len(templates) == 5
    assert "optin-standard" in {t["id"] for t in templates}


def test_match_template():
    response = client.post("/api/templates/match", json={"page": payload(optin_page())})
    assert response.status_code == 200
    data = response.json()
    assert data["match"]["template"]["id"] == "optin-standard"
    assert data["suggestion"]["can_apply"] is True


def test_plan_template():
    response = client.post("/api/templates/optin-standard/plan", json={"page": payload(optin_page())})
    assert response.status_code == 200
    data = response.json()
    assert data["personality"] == "conversion"
    assert data["props_changes"]["root"] == {"gap": 36}
    assert data["section_order"] == []
    assert data["already_applied"] is False


def test_plan_unknown_template():
    response = client.post("/api/templates/nope/plan", json={"page": payload(optin_page())})
    assert response.status_code == 404


def test_personality():
    response = client.get("/api/personality/clean")
    assert response.status_code == 200
    data = response.json()
    assert data["personality"] == "clean"
    assert data["variables"]


def test_unknown_personality():
    assert client.get("/api/personality/fancy").status_code == 404


def test_intent():
    response = client.post("/api/intent", json={"page": payload(optin_page())})
    assert response.status_code == 200
    data = response.json()
    assert data["intent"] == "optin"
    assert data["source"] == "composition"
    assert data["inspector_order"]


def test_triggers():
    data = client.get("/api/triggers/COMMIT_NODE_PROPS").json()
    assert data == {
        "action": "COMMIT_NODE_PROPS",
        "layout": True,
        "composition": False,
        "structural": False,
        "template": False,
    }
    data = client.get("/api/triggers/IMPORT_PAGE").json()
    assert data["structural"] and data["template"] and not data["layout"]
