"""
Tests for the HTTP service.

Covers:
- Health check
- Successful scoring and dealbreaker responses
- 400 for missing, blank or identical ids and malformed bodies
- 500 for unknown users and missing personality data
- File-backed profile store reloading
"""

import json

import pytest
from fastapi.testclient import TestClient

from matchcore.api import create_app, InMemoryProfileStore, JsonProfileStore
from matchcore.exceptions import ProfileNotFound

from conftest import make_profile


@pytest.fixture
def store(scenario_a, scenario_b):
    incomplete = make_profile("harper", personality=None, interests=["art"])
    other = make_profile("devon", lifestyle={"wants_kids": "dont_want"})
    return InMemoryProfileStore([scenario_a, scenario_b, incomplete, other])


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_compatibility(client):
    response = client.post("/compatibility", json={"user1_id": "alex", "user2_id": "blake"})
    assert response.status_code == 200

    body = response.json()
    assert body["overall_score"] == 81
    assert body["personality"]["score"] == 100
    assert body["personality"]["details"]["openness"] == {"user1": 50, "user2": 50, "difference": 0}
    assert body["interests_and_values"]["score"] == 25
    assert body["interests_and_values"]["interests"]["unique"] == {"user1": ["hiking"], "user2": []}
    assert body["lifestyle"] == {
        "score": 100,
        "compatible": ["wants_kids", "drinking", "smoking", "cannabis", "politics"],
        "neutral": [],
    }
    assert body["reasons"][0] == "Very similar personalities"


@pytest.mark.parametrize("payload", [
    {"user1_id": "alex"},
    {"user2_id": "blake"},
    {"user1_id": "  ", "user2_id": "blake"},
    {},
])
def test_missing_ids_rejected(client, payload):
    response = client.post("/compatibility", json=payload)
    assert response.status_code == 400
    assert "Missing user IDs" in response.json()["detail"]


def test_same_user_rejected(client):
    response = client.post("/compatibility", json={"user1_id": "alex", "user2_id": "alex"})
    assert response.status_code == 400


def test_malformed_body_rejected(client):
    response = client.post("/compatibility", json={"user1_id": 12, "user2_id": ["blake"]})
    assert response.status_code == 400


def test_unknown_user(client):
    response = client.post("/compatibility", json={"user1_id": "alex", "user2_id": "nobody"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Profiles not found: nobody"


def test_missing_personality(client):
    response = client.post("/compatibility", json={"user1_id": "harper", "user2_id": "alex"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Missing personality profile for: harper"


def test_dealbreakers(client):
    response = client.post("/dealbreakers", json={"user1_id": "alex", "user2_id": "devon"})
    assert response.status_code == 200
    assert response.json() == {"compatible": False, "reason": "Incompatible kids preference"}

    response = client.post("/dealbreakers", json={"user1_id": "alex", "user2_id": "blake"})
    assert response.json() == {"compatible": True, "reason": None}


def test_store_reports_every_missing_id(store):
    with pytest.raises(ProfileNotFound) as exc_info:
        store.get_profiles(["x", "alex", "y"])
    assert exc_info.value.user_ids == ["x", "y"]


def test_json_store(sample_profiles_path):
    store = JsonProfileStore(sample_profiles_path)
    assert len(store) == 8
    client = TestClient(create_app(store))
    response = client.post("/compatibility", json={"user1_id": "alex", "user2_id": "blake"})
    assert response.json()["overall_score"] == 81


def test_json_store_reload(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps([{"user_id": "a"}]))
    store = JsonProfileStore(str(path))
    assert len(store) == 1

    path.write_text(json.dumps([{"user_id": "b"}, {"user_id": "c"}]))
    store.reload()
    assert len(store) == 2
    assert store.get_profile("c").user_id == "c"
    with pytest.raises(ProfileNotFound):
        store.get_profile("a")
