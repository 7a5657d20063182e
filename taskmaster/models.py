from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()

VALID_STATUSES = ("pending", "in_progress", "completed")
VALID_PRIORITIES = ("low", "medium", "high")

DEFAULT_STATUS = "pending"
DEFAULT_PRIORITY = "medium"


# ---------- Database Models ----------
class TaskDB(Base):
    __tablename__ = "tasks"
    # Ids of deleted rows are never handed out again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str | None] = mapped_column(String, default=DEFAULT_STATUS, index=True)
    priority: Mapped[str | None] = mapped_column(String, default=DEFAULT_PRIORITY, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"Task(id: {self.id}, title: '{self.title}', status: {self.status}, priority: {self.priority})"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description or "",
            "status": self.status,
            "priority": self.priority,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


# ---------- Data Models ----------
class TaskPayload(BaseModel):
    """Request body for create and update.

    Fields stay untyped here so the validation rules, not the framework, decide
    which error a malformed value produces. Unknown keys are kept so that a body
    such as ``{"foo": 1}`` still counts as non-empty.
    """

    model_config = ConfigDict(extra="allow")

    title: Any = None
    description: Any = None
    status: Any = None
    priority: Any = None

    @model_validator(mode="before")
    @classmethod
    def array_as_keyed_object(cls, data: Any) -> Any:
        # An array body behaves like an object keyed by index: [] is empty, and no
        # element can ever supply a title.
        if isinstance(data, list):
            return {str(i): value for i, value in enumerate(data)}
        return data

    def is_empty(self) -> bool:
        return not self.model_fields_set and not self.model_extra

    def is_set(self, name: str) -> bool:
        return name in self.model_fields_set


class TaskFields(BaseModel):
    """Normalized, validated values for the four mutable columns."""

    title: str
    description: str = ""
    status: str | None = DEFAULT_STATUS
    priority: str | None = DEFAULT_PRIORITY


class OutputTask(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: str | None
    priority: str | None
    created_at: datetime
    updated_at: datetime


# ---------- Response Envelopes ----------
class TaskListResponse(BaseModel):
    items: list[OutputTask]
    total: int


class TaskResponse(BaseModel):
    item: OutputTask


class DeleteResponse(BaseModel):
    success: bool = True
    message: str = "Task deleted successfully"


class StatsResponse(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
