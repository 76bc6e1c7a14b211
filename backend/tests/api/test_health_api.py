from __future__ import annotations

from sqlalchemy import text


def test_health_ok(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert "version" in body


def test_health_degraded_when_store_fails(client, monkeypatch):
    monkeypatch.setattr(
        "donorlink.api.v1.health.text", lambda _: text("SELECT * FROM missing_table")
    )

    resp = client.get("/api/v1/health")

    assert resp.status_code == 503
    assert resp.get_json()["status"] == "degraded"


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "not_found"


def test_request_id_is_echoed_in_problems(client):
    resp = client.get("/api/v1/nope", headers={"X-Request-Id": "abc-123"})
    assert resp.get_json()["request_id"] == "abc-123"
