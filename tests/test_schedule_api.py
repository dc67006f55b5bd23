from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskwise.main import app

NOW = "2026-10-19T08:00:00+00:00"


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


def _task(title: str, **overrides) -> dict:
    payload = {"title": title, "duration": 60, "priority": "High", "energy_level": "High"}
    payload.update(overrides)
    return payload


def test_slots_endpoint(client):
    resp = client.post("/schedule/slots", json={"day": "2026-10-19", "preferences": {"energy_type": "evening"}})

    assert resp.status_code == 200
    body = resp.json()
    assert body["day"] == "2026-10-19"
    assert len(body["slots"]) == 8
    assert body["slots"][3]["type"] == "lunch"
    assert body["request_id"]


def test_urgency_endpoint(client):
    resp = client.post(
        "/schedule/urgency",
        json={"task": _task("ship", deadline="2026-10-20", id="t-1"), "now": NOW},
    )

    assert resp.status_code == 200
    assert resp.json()["task_id"] == "t-1"
    assert resp.json()["urgency"] == 20


def test_best_slot_endpoint(client):
    slots = [
        {"start": "13:00", "end": "14:00", "available": True, "energy_level": "Medium", "type": "work"},
        {"start": "09:00", "end": "10:00", "available": True, "energy_level": "High", "type": "work"},
    ]

    resp = client.post("/schedule/best-slot", json={"task": _task("ship"), "slots": slots, "now": NOW})

    assert resp.status_code == 200
    match = resp.json()["match"]
    assert match["slot"]["start"] == "09:00:00"
    assert match["confidence"] == 75


def test_best_slot_without_candidates(client):
    resp = client.post("/schedule/best-slot", json={"task": _task("ship", duration=90), "slots": [], "now": NOW})

    assert resp.status_code == 200
    assert resp.json()["match"] is None


def test_week_endpoint(client):
    resp = client.post(
        "/schedule/week",
        json={"tasks": [_task("ship", id="t-1"), _task("plain", priority="Medium", energy_level="Medium")], "now": NOW},
    )

    assert resp.status_code == 200
    result = resp.json()["result"]
    assert [t["id"] for t in result["scheduled_tasks"]] == ["t-1"]
    assert result["scheduled_tasks"][0]["scheduled_date"] == "2026-10-19"
    assert result["scheduled_tasks"][0]["scheduled_time"] == "09:00:00"
    assert [t["title"] for t in result["unscheduled_tasks"]] == ["plain"]


def test_week_rejects_invalid_task(client):
    resp = client.post("/schedule/week", json={"tasks": [_task("broken", duration=0)], "now": NOW})

    assert resp.status_code == 422


def test_optimize_endpoint(client):
    resp = client.post(
        "/schedule/optimize",
        json={"tasks": [_task("ship")], "mode": "frontload", "start_date": "2026-10-21", "now": NOW},
    )

    assert resp.status_code == 200
    assert resp.json()["result"]["scheduled_tasks"][0]["scheduled_date"] == "2026-10-21"


def test_optimize_rejects_unknown_mode(client):
    resp = client.post("/schedule/optimize", json={"tasks": [], "mode": "chaos"})

    assert resp.status_code == 422


def test_breaks_endpoint(client):
    placed = [
        {**_task("long", id="a", duration=90), "scheduled": True, "scheduled_time": "09:00",
         "scheduled_date": "2026-10-19", "confidence": 80},
        {**_task("next", id="b"), "scheduled": True, "scheduled_time": "11:00",
         "scheduled_date": "2026-10-19", "confidence": 80},
    ]

    resp = client.post("/schedule/breaks", json={"scheduled_tasks": placed, "now": NOW})

    assert resp.status_code == 200
    body = resp.json()
    assert body["breaks_inserted"] == 1
    assert [t["id"] for t in body["scheduled_tasks"]] == ["a", "break-a", "b"]


def test_best_slot_accepts_slot_ending_at_midnight(client):
    slots = [{"start": "23:00", "end": "00:00", "available": True, "energy_level": "High", "type": "work"}]

    resp = client.post("/schedule/best-slot", json={"task": _task("late shift"), "slots": slots, "now": NOW})

    assert resp.status_code == 200
    assert resp.json()["match"]["slot"]["start"] == "23:00:00"
