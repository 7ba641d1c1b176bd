import math
import uuid
from enum import Enum

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import ColumnElement, or_

from taskboard.config import settings
from taskboard.models.enums import TaskStatus
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.repositories import TaskRepository

class SortBy(str, Enum):
    title = "title"
    created_at = "createdAt"

class SortOrder(str, Enum):
    asc = "ASC"
    desc = "DESC"

# keeps (page - 1) * limit inside a bigint
MAX_PAGE = 2**31 - 1

def _positive_int(v, default: int) -> int:
    if v is None or v == "":
        return default
    try:
        n = int(v)
    except (TypeError, ValueError):
        return default
    return max(n, 1)

# bad page/limit input is clamped, never rejected
class TaskFilters(BaseModel):
    search: str | None = None
    statuses: list[TaskStatus] = Field(default_factory=list)
    assignee_id: uuid.UUID | None = None
    page: int = 1
    limit: int = Field(default_factory=lambda: settings.default_page_limit)
    sort_by: SortBy = SortBy.created_at
    sort_order: SortOrder = SortOrder.desc

    @field_validator("search", mode="before")
    @classmethod
    def _empty_search(cls, v):
        return v or None

    @field_validator("statuses", mode="before")
    @classmethod
    def _drop_empty_statuses(cls, v):
        if v is None:
            return []
        if isinstance(v, (str, TaskStatus)):
            v = [v]
        return [s for s in v if s]

    @field_validator("assignee_id", mode="before")
    @classmethod
    def _empty_assignee(cls, v):
        return v or None

    @field_validator("page", mode="before")
    @classmethod
    def _clamp_page(cls, v):
        return min(_positive_int(v, 1), MAX_PAGE)

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, v):
        return min(_positive_int(v, settings.default_page_limit), settings.max_page_limit)

    @field_validator("sort_by", mode="before")
    @classmethod
    def _sort_key(cls, v):
        return SortBy.title if v in ("title", SortBy.title) else SortBy.created_at

    @field_validator("sort_order", mode="before")
    @classmethod
    def _sort_dir(cls, v):
        if isinstance(v, SortOrder):
            return v
        return SortOrder.asc if str(v or "").upper() == "ASC" else SortOrder.desc

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)

def task_predicates(filters: TaskFilters) -> list[ColumnElement[bool]]:
    where: list[ColumnElement[bool]] = []

    if filters.search:
        where.append(
            or_(
                Task.title.icontains(filters.search, autoescape=True),
                Task.description.icontains(filters.search, autoescape=True),
            )
        )

    if filters.statuses:
        where.append(Task.status.in_(filters.statuses))

    # exists() keeps one row per task, so the count stays right
    if filters.assignee_id is not None:
        where.append(Task.assignees.any(User.id == filters.assignee_id))

    return where

def task_ordering(filters: TaskFilters) -> list[ColumnElement]:
    col = Task.title if filters.sort_by is SortBy.title else Task.created_at
    if filters.sort_order is SortOrder.asc:
        return [col.asc(), Task.id.asc()]
    return [col.desc(), Task.id.desc()]

def list_tasks(repo: TaskRepository, filters: TaskFilters) -> tuple[list[Task], int]:
    return repo.find_and_count(
        task_predicates(filters),
        task_ordering(filters),
        offset=filters.offset,
        limit=filters.limit,
    )
