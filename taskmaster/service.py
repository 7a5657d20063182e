import logging

from .errors import TaskNotFoundError
from .models import (
    DeleteResponse,
    OutputTask,
    StatsResponse,
    TaskListResponse,
    TaskPayload,
    TaskResponse,
)
from .queries import build_list_query
from .store import TaskStore
from .utils import parse_task_id
from .validation import validate_create, validate_update

logger = logging.getLogger(__name__)


class TaskService:
    """Validation, query construction and response shaping around a ``TaskStore``.

    Invalid input is rejected before the store is touched; each operation then makes
    exactly one store call.
    """

    def __init__(self, store: TaskStore) -> None:
        self.store = store

    def list_tasks(self, status: str | None = None, priority: str | None = None) -> TaskListResponse:
        query = build_list_query(status=status, priority=priority)
        rows = self.store.select_all(query)
        items = [OutputTask(**row.to_dict()) for row in rows]
        return TaskListResponse(items=items, total=len(items))

    def get_task(self, task_id: str | int) -> TaskResponse:
        task = self.store.select_one(parse_task_id(task_id))
        if not task:
            raise TaskNotFoundError()
        return TaskResponse(item=OutputTask(**task.to_dict()))

    def create_task(self, payload: TaskPayload | None) -> TaskResponse:
        fields = validate_create(payload)
        task = self.store.insert(fields)
        logger.info("Task created id=%s", task.id)
        return TaskResponse(item=OutputTask(**task.to_dict()))

    def update_task(self, task_id: str | int, payload: TaskPayload | None) -> TaskResponse:
        fields = validate_update(payload)
        task = self.store.update_fields(parse_task_id(task_id), fields)
        if not task:
            raise TaskNotFoundError()
        logger.info("Task updated id=%s", task.id)
        return TaskResponse(item=OutputTask(**task.to_dict()))

    def delete_task(self, task_id: str | int) -> DeleteResponse:
        if self.store.delete_by_id(parse_task_id(task_id)) == 0:
            raise TaskNotFoundError()
        logger.info("Task deleted id=%s", task_id)
        return DeleteResponse()

    def stats(self) -> StatsResponse:
        counts = self.store.aggregate_counts()
        return StatsResponse(
            total=counts.get("total") or 0,
            pending=counts.get("pending") or 0,
            in_progress=counts.get("in_progress") or 0,
            completed=counts.get("completed") or 0,
        )
