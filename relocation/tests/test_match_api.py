from __future__ import annotations

from fastapi.testclient import TestClient

from relocation.app import app
from relocation.repositories.catalog import get_property_repository
from relocation.repositories.results import (
    clear_match_results,
    get_match_result_repository,
)

client = TestClient(app)

REMOTE_SINGLE_NATURE = {
    "q1_work_mode": "remote_majority",
    "q3_household": "single",
    "q4_priority": "nature",
    "q5_budget": "under_150k",
}


def _login(c):
    c.post("/auth/login", json={"email": "user@example.com", "password": "user123"})


def test_ai_match_requires_login():
    c = TestClient(app)
    resp = c.post("/ai-match", json=REMOTE_SINGLE_NATURE)
    assert resp.status_code == 401


def test_ai_match_returns_ranked_properties():
    _login(client)
    resp = client.post("/ai-match", json=REMOTE_SINGLE_NATURE)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert 0 < len(body["properties"]) <= 10

    scores = [p["ai_score"] for p in body["properties"]]
    assert scores == sorted(scores, reverse=True)

    first = body["properties"][0]
    for key in ("id", "name", "region", "rent", "ai_score", "match_reasons", "score_breakdown"):
        assert key in first
    assert set(first["score_breakdown"]) == {
        "budget", "lifestyle", "environment", "workstyle", "family",
    }


def test_ai_match_end_to_end_scenario():
    _login(client)
    body = client.post("/ai-match", json=REMOTE_SINGLE_NATURE).json()
    by_id = {p["id"]: p for p in body["properties"]}
    # Lavender Field Cabin: 富良野市, 140000 yen
    cabin = by_id["p-009"]
    assert cabin["score_breakdown"] == {
        "budget": 100, "lifestyle": 90, "environment": 50, "workstyle": 90, "family": 80,
    }
    assert cabin["ai_score"] == 84


def test_ai_match_caps_at_ten():
    _login(client)
    body = client.post("/ai-match", json={}).json()
    assert len(body["properties"]) == 10
    # every property is neutral, so the catalog order survives
    assert [p["id"] for p in body["properties"]][:3] == ["p-001", "p-002", "p-003"]
    assert all(p["ai_score"] == 50 for p in body["properties"])


def test_ai_match_ignores_unused_and_unknown_keys():
    _login(client)
    resp = client.post("/ai-match", json={
        "q2_income_stability": "stable",
        "q6_duration": "long",
        "q7_timing": "within_year",
        "favourite_colour": "blue",
    })
    assert resp.status_code == 200
    assert all(p["ai_score"] == 50 for p in resp.json()["properties"])


def test_ai_match_persists_top_five_without_duplicates():
    clear_match_results()
    _login(client)
    client.post("/ai-match", json=REMOTE_SINGLE_NATURE)
    client.post("/ai-match", json=REMOTE_SINGLE_NATURE)
    rows = get_match_result_repository().list_for_user("u-0001")
    assert len(rows) == 5
    assert len({r.property_id for r in rows}) == 5


def test_ai_match_results_requires_login():
    c = TestClient(app)
    assert c.get("/ai-match/results").status_code == 401


def test_ai_match_results_empty_before_matching():
    clear_match_results()
    c = TestClient(app)
    _login(c)
    resp = c.get("/ai-match/results")
    assert resp.status_code == 200
    assert resp.json() == []


def test_ai_match_results_lists_saved_top_five():
    clear_match_results()
    c = TestClient(app)
    _login(c)
    matched = c.post("/ai-match", json=REMOTE_SINGLE_NATURE).json()["properties"]

    rows = c.get("/ai-match/results").json()

    assert len(rows) == 5
    assert {r["user_id"] for r in rows} == {"u-0001"}
    assert {r["property_id"] for r in rows} == {p["id"] for p in matched[:5]}
    totals = [r["total_score"] for r in rows]
    assert totals == sorted(totals, reverse=True)
    assert totals[0] == matched[0]["ai_score"]


def test_ai_match_results_are_per_user():
    clear_match_results()
    c = TestClient(app)
    _login(c)
    c.post("/ai-match", json=REMOTE_SINGLE_NATURE)

    other = TestClient(app)
    other.post("/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert other.get("/ai-match/results").json() == []


class _BrokenResults:
    def upsert(self, record):
        raise ConnectionError("database unavailable")

    def list_for_user(self, user_id):
        return []


def test_ai_match_survives_persistence_failure():
    app.dependency_overrides[get_match_result_repository] = lambda: _BrokenResults()
    try:
        _login(client)
        resp = client.post("/ai-match", json=REMOTE_SINGLE_NATURE)
    finally:
        app.dependency_overrides.pop(get_match_result_repository, None)
    assert resp.status_code == 200
    assert len(resp.json()["properties"]) == 10


class _UnreachableCatalog:
    def list_all(self):
        raise ConnectionError("catalog unreachable")

    def get_many(self, ids):
        raise ConnectionError("catalog unreachable")


def test_ai_match_catalog_failure_is_generic_500():
    app.dependency_overrides[get_property_repository] = lambda: _UnreachableCatalog()
    try:
        _login(client)
        resp = client.post("/ai-match", json=REMOTE_SINGLE_NATURE)
    finally:
        app.dependency_overrides.pop(get_property_repository, None)
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Matching failed"}


# ── Catalog endpoints ────────────────────────────────────────────────────


def test_list_properties_is_public():
    c = TestClient(app)
    resp = c.get("/properties")
    assert resp.status_code == 200
    assert len(resp.json()) == 12


def test_compare_returns_requested_properties():
    resp = client.get("/properties/compare", params={"ids": "p-003,p-001"})
    assert resp.status_code == 200
    ids = [p["id"] for p in resp.json()["properties"]]
    assert ids == ["p-001", "p-003"]


def test_compare_without_ids():
    resp = client.get("/properties/compare")
    assert resp.json() == {"properties": []}


def test_compare_unknown_ids():
    resp = client.get("/properties/compare", params={"ids": "nope"})
    assert resp.json() == {"properties": []}
