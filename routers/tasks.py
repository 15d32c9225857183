# routers/tasks.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import PlainTextResponse
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from dependencies import get_store
from models import Task, TaskUpdate, parse_task_id
from storage import TaskStore

# --- Router Setup ---
router = APIRouter(
    tags=["Task Management"],
)

# --- Constants ---
WELCOME_MESSAGE = "Welcome to Task Manager. Available endpoints: /tasks, /add, /update, /delete"

# --- Endpoints ---

@router.get("/", response_class=PlainTextResponse)
async def home():
    return WELCOME_MESSAGE

@router.get("/tasks")
async def list_tasks(store: TaskStore = Depends(get_store)):
    """Return the whole collection."""
    return [task.to_json() for task in store.load()]

@router.post("/add", status_code=HTTP_201_CREATED)
async def add_task(task: Task, store: TaskStore = Depends(get_store)):
    """Create a task. Any id or createdAt sent by the client is overwritten."""
    created = store.add(task.description, task.status)
    return created.to_json()

@router.post("/update")
async def update_task(task: TaskUpdate, store: TaskStore = Depends(get_store)):
    """Replace the first task with the same id; omitted fields are reset."""
    updated = store.replace(Task(**task.model_dump()))
    if updated is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Task not found")
    return updated.to_json()

@router.post("/delete", status_code=HTTP_204_NO_CONTENT)
async def delete_task(
    raw_id: Optional[str] = Query(None, alias="id"),
    store: TaskStore = Depends(get_store),
):
    task_id = parse_task_id(raw_id)
    if task_id is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Invalid task ID")

    if store.delete(task_id) is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Task not found")
    return Response(status_code=HTTP_204_NO_CONTENT)
