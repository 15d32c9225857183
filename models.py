# models.py
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Zero timestamp for records with a missing or unreadable createdAt
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_TASK_ID_RE = re.compile(r"[+-]?\d+")
MIN_TASK_ID = -(2 ** 63)
MAX_TASK_ID = 2 ** 63 - 1


class TaskStatus(str, Enum):
    NOT_COMPLETED = "Not Completed"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = 0
    description: str = ""
    status: TaskStatus = TaskStatus.NOT_COMPLETED
    created_at: datetime = Field(default=ZERO_TIME, alias="createdAt")

    def to_json(self) -> Dict[str, Any]:
        """Field order is id, description, status, createdAt."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_raw(cls, raw: Any) -> "Task":
        """
        Best-effort decode of a stored record.
        Fields that fail validation keep their zero value instead of
        discarding the whole task.
        """
        if not isinstance(raw, dict):
            return cls()
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            bad_fields = {err["loc"][0] for err in e.errors() if err["loc"]}
            return cls.model_validate({k: v for k, v in raw.items() if k not in bad_fields})


class TaskUpdate(Task):
    # /update replaces a task wholesale, so the id is mandatory
    id: int


def now() -> datetime:
    return datetime.now().astimezone()


def format_created_at(task: Task) -> str:
    """RFC 822 style, e.g. '02 Jan 06 15:04 CET' or '02 Jan 06 15:04 +0100'."""
    stamp = task.created_at
    zone = stamp.tzname() or ""
    # Fixed offsets parsed from ISO strings are named 'UTC+01:00' or '+01:00'
    if zone.startswith(("UTC", "+", "-")) and stamp.utcoffset():
        return stamp.strftime("%d %b %y %H:%M %z")
    return stamp.strftime("%d %b %y %H:%M %Z").rstrip()


def parse_task_id(raw: Optional[str]) -> Optional[int]:
    """Accepts an optionally signed decimal integer that fits in 64 bits, nothing else."""
    if raw is None or not _TASK_ID_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not MIN_TASK_ID <= value <= MAX_TASK_ID:
        return None
    return value
