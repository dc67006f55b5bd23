from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskwise.api.deps import get_workspace
from taskwise.main import app
from taskwise.services.workspace import Workspace


@pytest.fixture()
def client():
    workspace = Workspace()
    app.dependency_overrides[get_workspace] = lambda: workspace
    with TestClient(app) as test_client:
        yield test_client, workspace
    app.dependency_overrides.clear()


def _create(client: TestClient, **overrides) -> dict:
    payload = {"title": "Write report", "duration": 45}
    payload.update(overrides)
    resp = client.post("/tasks", json=payload)
    assert resp.status_code == 201
    return resp.json()


def test_create_and_list_tasks(client):
    test_client, workspace = client
    created = _create(test_client, category="Health", priority="High", deadline="soon-ish")

    assert created["scheduled"] is False
    assert created["deadline"] is None
    assert len(workspace.tasks) == 1

    resp = test_client.get("/tasks")
    assert resp.status_code == 200
    assert [t["id"] for t in resp.json()["tasks"]] == [created["id"]]
    assert test_client.get("/tasks", params={"category": "Work"}).json()["tasks"] == []
    assert len(test_client.get("/tasks", params={"priority": "High"}).json()["tasks"]) == 1
    assert len(test_client.get("/tasks", params={"unscheduled": True}).json()["tasks"]) == 1
    assert test_client.get("/tasks", params={"today": True}).json()["tasks"] == []


def test_create_rejects_non_positive_duration(client):
    test_client, workspace = client

    resp = test_client.post("/tasks", json={"title": "Nothing", "duration": 0})

    assert resp.status_code == 422
    assert len(workspace.tasks) == 0


def test_update_task(client):
    test_client, _ = client
    created = _create(test_client)

    resp = test_client.patch(f"/tasks/{created['id']}", json={"priority": "Low", "duration": 30})
    assert resp.status_code == 200
    assert resp.json()["priority"] == "Low"
    assert resp.json()["duration"] == 30

    bad = test_client.patch(f"/tasks/{created['id']}", json={"scheduled": True})
    assert bad.status_code == 422
    assert test_client.patch("/tasks/missing", json={"priority": "Low"}).status_code == 404


def test_complete_toggle(client):
    test_client, _ = client
    created = _create(test_client)

    done = test_client.post(f"/tasks/{created['id']}/complete")
    assert done.status_code == 200
    assert done.json()["completed"] is True
    assert done.json()["completed_at"]

    undone = test_client.post(f"/tasks/{created['id']}/uncomplete")
    assert undone.json()["completed"] is False
    assert undone.json()["completed_at"] is None


def test_get_and_delete(client):
    test_client, workspace = client
    created = _create(test_client)

    assert test_client.get(f"/tasks/{created['id']}").json()["title"] == "Write report"
    assert test_client.delete(f"/tasks/{created['id']}").status_code == 204
    assert test_client.get(f"/tasks/{created['id']}").status_code == 404
    assert test_client.delete(f"/tasks/{created['id']}").status_code == 404
    assert workspace.tasks.all() == []


def test_patch_with_malformed_deadline_clears_it(client):
    test_client, workspace = client
    created = _create(test_client, deadline="2026-10-30")
    assert created["deadline"] == "2026-10-30"

    resp = test_client.patch(f"/tasks/{created['id']}", json={"deadline": "garbage"})

    assert resp.status_code == 200
    assert resp.json()["deadline"] is None
    assert workspace.tasks.get(created["id"]).deadline is None
