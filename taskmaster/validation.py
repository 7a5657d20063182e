"""Pure checks over task request bodies.

Create and update deliberately differ: create enforces the status/priority enums and
fills in defaults, update only insists on a title and writes the rest as given.
"""

import json
from typing import Any

from .errors import EmptyBodyError, InvalidPriorityError, InvalidStatusError, InvalidTitleError
from .models import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    VALID_PRIORITIES,
    VALID_STATUSES,
    TaskFields,
    TaskPayload,
)

UPDATE_TITLE_MESSAGE = "Title is required"


def _clean_title(title: Any) -> str | None:
    if not isinstance(title, str) or not title.strip():
        return None
    return title.strip()


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def _clean_description(description: Any) -> str:
    # Any falsy value (null, false, 0, "") means "no description".
    if not description:
        return ""
    return _as_text(description)


def _passthrough(value: Any) -> str | None:
    if value is None:
        return None
    return _as_text(value)


def validate_create(payload: TaskPayload | None) -> TaskFields:
    if payload is None or payload.is_empty():
        raise EmptyBodyError()

    title = _clean_title(payload.title)
    if title is None:
        raise InvalidTitleError()

    # An explicit null is not "absent" and gets no default.
    status = payload.status if payload.is_set("status") else DEFAULT_STATUS
    if status not in VALID_STATUSES:
        raise InvalidStatusError()

    priority = payload.priority if payload.is_set("priority") else DEFAULT_PRIORITY
    if priority not in VALID_PRIORITIES:
        raise InvalidPriorityError()

    return TaskFields(
        title=title,
        description=_clean_description(payload.description),
        status=status,
        priority=priority,
    )


def validate_update(payload: TaskPayload | None) -> TaskFields:
    title = _clean_title(payload.title) if payload is not None else None
    if title is None:
        raise InvalidTitleError(UPDATE_TITLE_MESSAGE)

    return TaskFields(
        title=title,
        description=_clean_description(payload.description),
        status=_passthrough(payload.status),
        priority=_passthrough(payload.priority),
    )
