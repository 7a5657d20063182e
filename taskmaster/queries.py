from dataclasses import dataclass, field

from sqlalchemy import Select, bindparam, case, func, select

from .models import VALID_STATUSES, TaskDB


@dataclass(frozen=True)
class ListQuery:
    """A filtered task listing: the statement plus its bound values.

    The statement only carries named placeholders; values are supplied at execution
    time through ``bindings()``, in the same status-then-priority order as ``params``.
    """

    statement: Select
    filters: list[tuple[str, str]] = field(default_factory=list)

    @property
    def params(self) -> list[str]:
        return [value for _, value in self.filters]

    def bindings(self) -> dict[str, str]:
        return dict(self.filters)


def build_list_query(status: str | None = None, priority: str | None = None) -> ListQuery:
    statement = select(TaskDB)
    filters: list[tuple[str, str]] = []

    if status:
        statement = statement.where(TaskDB.status == bindparam("status"))
        filters.append(("status", status))
    if priority:
        statement = statement.where(TaskDB.priority == bindparam("priority"))
        filters.append(("priority", priority))

    statement = statement.order_by(TaskDB.created_at.desc(), TaskDB.id.desc())
    return ListQuery(statement=statement, filters=filters)


def build_stats_query() -> Select:
    columns = [func.count(TaskDB.id).label("total")]
    for status in VALID_STATUSES:
        columns.append(func.count(case((TaskDB.status == status, 1))).label(status))
    return select(*columns)
