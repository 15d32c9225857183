import pytest
from pathlib import Path

from fastapi.testclient import TestClient

from main import create_app
from storage import TaskStore


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    """A task file path inside the per-test temp dir; the file itself does not exist yet."""
    return tmp_path / "tasks.json"


@pytest.fixture()
def store(tasks_file: Path) -> TaskStore:
    return TaskStore(tasks_file)


@pytest.fixture()
def client(store: TaskStore) -> TestClient:
    """In-process client for the HTTP front end, backed by the temp store."""
    return TestClient(create_app(store))
