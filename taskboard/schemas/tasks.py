import uuid
from datetime import datetime

from pydantic import Field

from taskboard.models.enums import TaskStatus
from taskboard.schemas.base import ApiModel
from taskboard.schemas.users import UserOut

class TaskCreateIn(ApiModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: TaskStatus = TaskStatus.todo
    assignee_ids: list[uuid.UUID] = Field(default_factory=list)

class TaskUpdateIn(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: TaskStatus | None = None
    assignee_ids: list[uuid.UUID] | None = None

class TaskOut(ApiModel):
    id: uuid.UUID
    title: str
    description: str | None
    status: TaskStatus
    owner: UserOut
    assignees: list[UserOut]
    created_at: datetime
    updated_at: datetime

class PaginationOut(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int

class TaskListOut(ApiModel):
    tasks: list[TaskOut]
    pagination: PaginationOut
