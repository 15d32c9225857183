# storage.py
import json
import logging
import threading
from pathlib import Path
from typing import List, Optional

from models import Task, TaskStatus, now

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = Path("tasks.json")


def next_task_id(tasks: List[Task]) -> int:
    """
    IDs are derived from the collection length, so a delete followed by an
    add can hand out an ID that is still in use.
    """
    return len(tasks) + 1


def filter_by_status(tasks: List[Task], status: TaskStatus) -> List[Task]:
    return [task for task in tasks if task.status == status]


def _index_of(tasks: List[Task], task_id: int) -> Optional[int]:
    return next((i for i, task in enumerate(tasks) if task.id == task_id), None)


class TaskStore:
    """
    The whole task collection lives in one JSON file. Every operation reads the
    full file, changes it in memory and writes it back.

    The lock only serializes callers sharing this instance (the HTTP thread and
    the terminal loop). Another process writing the same file can still lose
    updates, and writes are not atomic.
    """

    def __init__(self, path: Path = DEFAULT_TASKS_FILE):
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> List[Task]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable task file %s: %s", self.path, e)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring task file %s: expected a JSON array", self.path)
            return []
        return [Task.from_raw(item) for item in data]

    def save(self, tasks: List[Task]) -> None:
        payload = json.dumps([task.to_json() for task in tasks], indent=2, ensure_ascii=False)
        try:
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            # Write failures are dropped; the caller already reported success.
            logger.error("Failed to write task file %s: %s", self.path, e)

    # --- Read-modify-write helpers shared by both front ends ---

    def add(self, description: str, status: TaskStatus = TaskStatus.NOT_COMPLETED) -> Task:
        with self._lock:
            tasks = self.load()
            task = Task(id=next_task_id(tasks), description=description, status=status, created_at=now())
            tasks.append(task)
            self.save(tasks)
        logger.debug("Added task %d", task.id)
        return task

    def replace(self, task: Task) -> Optional[Task]:
        with self._lock:
            tasks = self.load()
            index = _index_of(tasks, task.id)
            if index is None:
                return None
            tasks[index] = task
            self.save(tasks)
        logger.debug("Replaced task %d", task.id)
        return task

    def set_status(self, task_id: int, status: TaskStatus) -> Optional[Task]:
        with self._lock:
            tasks = self.load()
            index = _index_of(tasks, task_id)
            if index is None:
                return None
            tasks[index] = tasks[index].model_copy(update={"status": status})
            self.save(tasks)
        logger.debug("Task %d is now %s", task_id, status.value)
        return tasks[index]

    def delete(self, task_id: int) -> Optional[Task]:
        with self._lock:
            tasks = self.load()
            index = _index_of(tasks, task_id)
            if index is None:
                return None
            removed = tasks.pop(index)
            self.save(tasks)
        logger.debug("Deleted task %d", task_id)
        return removed

    def find(self, task_id: int) -> Optional[Task]:
        tasks = self.load()
        index = _index_of(tasks, task_id)
        return None if index is None else tasks[index]

    def by_status(self, status: TaskStatus) -> List[Task]:
        return filter_by_status(self.load(), status)
