class TaskError(Exception):
    """Base class for every failure a task operation can report.

    Each subclass fixes the HTTP status and a stable ``code``; the message is the
    single human-readable line handed back to the caller.
    """

    status_code = 400
    code = "task_error"
    default_message = "Task request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class EmptyBodyError(TaskError):
    code = "empty_body"
    default_message = "Request body is required"


class InvalidTitleError(TaskError):
    code = "invalid_title"
    default_message = "Title is required and must be a non-empty string"


class InvalidStatusError(TaskError):
    code = "invalid_status"
    default_message = "Status must be one of: pending, in_progress, completed"


class InvalidPriorityError(TaskError):
    code = "invalid_priority"
    default_message = "Priority must be one of: low, medium, high"


class TaskNotFoundError(TaskError):
    status_code = 404
    code = "not_found"
    default_message = "Task not found"


class StoreError(TaskError):
    status_code = 500
    code = "store_error"
    default_message = "Database error"
