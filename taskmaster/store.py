import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StoreError
from .models import TaskDB, TaskFields
from .queries import ListQuery, build_stats_query
from .utils import utcnow

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Row-level access to the ``tasks`` table through one SQLAlchemy session.

    Every public method is a single statement (plus commit for writes). Any
    SQLAlchemy failure rolls the session back and surfaces as ``StoreError``
    carrying the driver's message.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Database error during %s", action)
            orig = getattr(exc, "orig", None)
            raise StoreError(str(orig or exc)) from exc

    def insert(self, fields: TaskFields) -> TaskDB:
        now = utcnow()
        task = TaskDB(**fields.model_dump(), created_at=now, updated_at=now)
        with self._guard("insert"):
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        logger.debug("Task inserted id=%s status=%s priority=%s", task.id, task.status, task.priority)
        return task

    def select_all(self, query: ListQuery) -> list[TaskDB]:
        with self._guard("select_all"):
            return list(self.db.scalars(query.statement, query.bindings()).all())

    def select_one(self, task_id: int) -> TaskDB | None:
        with self._guard("select_one"):
            return self.db.get(TaskDB, task_id)

    def update_fields(self, task_id: int, fields: TaskFields) -> TaskDB | None:
        """Rewrite all four mutable columns and refresh ``updated_at``.

        Returns None when no row has ``task_id``.
        """
        with self._guard("update_fields"):
            task = self.db.get(TaskDB, task_id)
            if not task:
                return None

            for key, value in fields.model_dump().items():
                setattr(task, key, value)
            task.updated_at = max(utcnow(), task.created_at)

            self.db.commit()
            self.db.refresh(task)
        logger.debug("Task updated id=%s", task_id)
        return task

    def delete_by_id(self, task_id: int) -> int:
        with self._guard("delete_by_id"):
            result = self.db.execute(delete(TaskDB).where(TaskDB.id == task_id))
            self.db.commit()
        logger.debug("Task delete id=%s rows=%s", task_id, result.rowcount)
        return result.rowcount

    def aggregate_counts(self) -> dict:
        with self._guard("aggregate_counts"):
            row = self.db.execute(build_stats_query()).mappings().one()
        return dict(row)

    def count(self) -> int:
        with self._guard("count"):
            return self.db.scalar(select(func.count(TaskDB.id))) or 0

    def seed(self, tasks: Iterable[dict]) -> int:
        """Insert demo rows; returns how many were added."""
        added = 0
        for data in tasks:
            self.insert(TaskFields(**data))
            added += 1
        logger.info("Sample data added (%s tasks)", added)
        return added
