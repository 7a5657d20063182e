import re
from datetime import datetime, timezone

from .errors import TaskNotFoundError

_INT_RE = re.compile(r"^-?\d+$")
_SQLITE_MAX_INT = 2**63 - 1

SAMPLE_TASKS = [
    {
        "title": "Welcome to TaskMaster API",
        "description": "This is a demo task in your deployed API",
        "status": "completed",
        "priority": "high",
    },
    {
        "title": "Test the API endpoints",
        "description": "Verify that all API endpoints work correctly",
        "status": "in_progress",
        "priority": "high",
    },
    {
        "title": "API Documentation Complete",
        "description": "OpenAPI schema is ready and comprehensive",
        "status": "completed",
        "priority": "medium",
    },
]


def utcnow() -> datetime:
    # SQLite DATETIME columns drop tzinfo, so keep everything naive UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_task_id(raw: str | int) -> int:
    """Turn a path id into an int, treating anything unusable as a missing task."""
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not _INT_RE.match(text):
            raise TaskNotFoundError()
        value = int(text)

    if not -_SQLITE_MAX_INT - 1 <= value <= _SQLITE_MAX_INT:
        raise TaskNotFoundError()
    return value
