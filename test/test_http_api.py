import json
from datetime import datetime

from models import Task, TaskStatus
from routers.tasks import WELCOME_MESSAGE


def test_home_returns_welcome_text(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == WELCOME_MESSAGE
    assert response.headers["content-type"].startswith("text/plain")


def test_tasks_on_empty_store(client):
    response = client.get("/tasks")
    assert response.status_code == 200
    assert response.json() == []


def test_add_to_empty_file(client, tasks_file):
    response = client.post("/add", json={"description": "buy milk"})

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 1
    assert body["description"] == "buy milk"
    assert body["status"] == "Not Completed"
    assert datetime.fromisoformat(body["createdAt"].replace("Z", "+00:00")).year >= 2024

    stored = json.loads(tasks_file.read_text(encoding="utf-8"))
    assert stored == [body]


def test_add_overwrites_client_id_and_timestamp(client):
    client.post("/add", json={"description": "first"})
    response = client.post("/add", json={
        "id": 42,
        "description": "second",
        "status": "In Progress",
        "createdAt": "2000-01-01T00:00:00Z",
    })

    body = response.json()
    assert body["id"] == 2
    assert body["status"] == "In Progress"
    assert not body["createdAt"].startswith("2000-")


def test_add_rejects_malformed_json(client, tasks_file):
    response = client.post("/add", content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.text
    assert not tasks_file.exists()


def test_add_rejects_unknown_status(client):
    response = client.post("/add", json={"description": "x", "status": "Done-ish"})
    assert response.status_code == 400
    assert "status" in response.text


def test_mutating_routes_reject_other_methods(client):
    for path in ("/add", "/update", "/delete"):
        assert client.get(path).status_code == 405
        assert client.put(path).status_code == 405


def test_get_tasks_is_idempotent(client):
    client.post("/add", json={"description": "a"})
    client.post("/add", json={"description": "b"})

    first = client.get("/tasks")
    second = client.get("/tasks")

    assert first.json() == second.json()
    assert [t["description"] for t in first.json()] == ["a", "b"]


def test_update_replaces_the_whole_task(client, store):
    store.add("a")
    store.add("b")
    payload = {
        "id": 2,
        "description": "b, revised",
        "status": "Completed",
        "createdAt": "2024-03-01T08:00:00Z",
    }

    response = client.post("/update", json=payload)

    assert response.status_code == 200
    assert response.json() == payload
    assert store.find(2).to_json() == payload
    assert store.find(1).description == "a"


def test_update_unknown_id_leaves_file_byte_for_byte(client, store, tasks_file):
    store.add("a")
    before = tasks_file.read_bytes()

    response = client.post("/update", json={"id": 9, "description": "ghost", "status": "Completed"})

    assert response.status_code == 404
    assert response.text == "Task not found"
    assert tasks_file.read_bytes() == before


def test_update_rejects_malformed_json(client, store, tasks_file):
    store.add("a")
    before = tasks_file.read_bytes()

    response = client.post("/update", content="{\"id\": 1,", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.text
    assert tasks_file.read_bytes() == before


def test_update_requires_an_id(client, store):
    store.add("a")
    response = client.post("/update", json={"description": "no id"})
    assert response.status_code == 400


def test_delete_last_task_leaves_empty_array(client, store, tasks_file):
    store.save([Task(id=1, description="x", status=TaskStatus.IN_PROGRESS)])

    response = client.post("/delete?id=1")

    assert response.status_code == 204
    assert response.content == b""
    assert json.loads(tasks_file.read_text(encoding="utf-8")) == []


def test_delete_with_invalid_id(client):
    for query in ("?id=abc", "?id=", "", "?id=99999999999999999999999"):
        response = client.post("/delete" + query)
        assert response.status_code == 400
        assert response.text == "Invalid task ID"


def test_delete_unknown_id(client, store):
    store.add("a")
    response = client.post("/delete?id=5")
    assert response.status_code == 404
    assert len(store.load()) == 1


def test_delete_removes_first_duplicate_only(client, store):
    store.save([Task(id=3, description="old"), Task(id=3, description="new")])

    assert client.post("/delete?id=3").status_code == 204
    assert [t.description for t in store.load()] == ["new"]


def test_delete_reads_the_id_query_parameter(client, store):
    store.add("a")
    store.add("b")

    assert client.post("/delete", params={"id": "2"}).status_code == 204
    assert [t.description for t in store.load()] == ["a"]
