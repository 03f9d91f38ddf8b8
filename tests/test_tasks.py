import uuid

import pytest

from task_api.services import users as user_service
from task_api.errors import StoreUnavailable

TASK = {
    "task": "write spec",
    "dueDate": "2024-01-01",
    "status": "open",
    "priority": "high",
    "createdBy": "alice-id",
}


async def _create(client, **overrides):
    response = await client.post("/createTask", json={**TASK, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["task"]


async def test_signup_login_and_task_scenario(client):
    assert (await client.post("/signup", json={"username": "alice", "password": "p1"})).status_code == 201
    assert (await client.post("/signup", json={"username": "alice", "password": "p1"})).status_code == 409

    response = await client.post("/login", json={"username": "alice", "password": "wrong"})
    assert response.status_code != 200
    assert "token" not in response.json()

    response = await client.post("/createTask", json=TASK)
    assert response.status_code == 201
    assert response.json()["message"] == "Task created successfully"

    response = await client.get("/tasks/alice-id")
    assert response.status_code == 200
    tasks = response.json()
    assert len(tasks) == 1
    for key, value in TASK.items():
        assert tasks[0][key] == value
    assert tasks[0]["id"]


async def test_create_task_missing_field(client):
    body = dict(TASK)
    del body["priority"]
    response = await client.post("/createTask", json=body)
    assert response.status_code == 422
    assert response.json()["message"] == "Validation failed"


async def test_create_task_strips_markup(client):
    task = await _create(client, task="<b>write</b> spec  ")
    assert task["task"] == "write spec"


async def test_list_tasks_for_owner_without_tasks(client):
    response = await client.get("/tasks/nobody")
    assert response.status_code == 200
    assert response.json() == []


async def test_update_task_partial(client):
    task = await _create(client)

    response = await client.put(f"/updateTask/{task['id']}", json={"status": "done"})
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Task updated successfully"
    assert data["task"]["status"] == "done"
    assert data["task"]["task"] == "write spec"
    assert data["task"]["dueDate"] == "2024-01-01"


async def test_update_task_rejects_unknown_fields(client):
    task = await _create(client)

    response = await client.put(f"/updateTask/{task['id']}", json={"createdBy": "mallory-id"})
    assert response.status_code == 422

    response = await client.put(f"/updateTask/{task['id']}", json={"role": "admin"})
    assert response.status_code == 422

    tasks = (await client.get("/tasks/alice-id")).json()
    assert tasks[0]["createdBy"] == "alice-id"


async def test_update_task_rejects_null(client):
    task = await _create(client)
    response = await client.put(f"/updateTask/{task['id']}", json={"status": None})
    assert response.status_code == 422


@pytest.mark.parametrize("task_id", [str(uuid.uuid4()), "not-an-id"])
async def test_update_missing_task(client, task_id):
    response = await client.put(f"/updateTask/{task_id}", json={"status": "done"})
    assert response.status_code == 404
    assert response.json() == {"message": "Task not found"}


async def test_delete_task(client):
    task = await _create(client)

    response = await client.delete(f"/deleteTask/{task['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}

    response = await client.delete(f"/deleteTask/{task['id']}")
    assert response.status_code == 404
    assert (await client.get("/tasks/alice-id")).json() == []


async def test_store_failure_returns_generic_error(client, monkeypatch):
    async def unavailable(*args, **kwargs):
        raise StoreUnavailable()

    monkeypatch.setattr(user_service, "create_user", unavailable)
    response = await client.post("/signup", json={"username": "alice", "password": "p1"})
    assert response.status_code == 500
    assert response.json() == {"message": "Server Internal Error"}
