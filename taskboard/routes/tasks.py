import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy import func

from taskboard.auth.deps import get_current_actor
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.rbac.deps import require_perm
from taskboard.rbac.perms import Actor, can_delete, can_edit
from taskboard.repositories import (
    TaskRepository,
    UserRepository,
    get_task_repository,
    get_user_repository,
)
from taskboard.schemas.tasks import PaginationOut, TaskCreateIn, TaskListOut, TaskOut, TaskUpdateIn
from taskboard.tasks.query import TaskFilters, list_tasks as query_tasks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

def _resolve_assignees(users: UserRepository, ids: list[uuid.UUID]) -> list[User]:
    found = users.find_by_ids(ids)
    missing = set(ids) - {u.id for u in found}
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"unknown assignee ids: {', '.join(sorted(str(i) for i in missing))}",
        )
    return found

def _get_task_or_404(tasks: TaskRepository, task_id: uuid.UUID) -> Task:
    t = tasks.get(task_id)
    if t is None:
        raise HTTPException(status_code=404, detail="task not found")
    return t

@router.get("", response_model=TaskListOut)
def list_tasks(
    search: str | None = Query(None),
    status: list[str] | None = Query(None),
    assignee_id: str | None = Query(None, alias="assigneeId"),
    page: str | None = Query(None),
    limit: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    _: Actor = Depends(require_perm("tasks:read")),
    tasks: TaskRepository = Depends(get_task_repository),
) -> TaskListOut:
    # empty status/assigneeId values mean "no filter", so they are parsed here
    try:
        filters = TaskFilters(
            search=search,
            statuses=status,
            assignee_id=assignee_id,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    rows, total = query_tasks(tasks, filters)
    return TaskListOut(
        tasks=[TaskOut.model_validate(r) for r in rows],
        pagination=PaginationOut(
            page=filters.page,
            limit=filters.limit,
            total=total,
            total_pages=filters.total_pages(total),
        ),
    )

@router.post("", response_model=TaskOut, status_code=201)
def create_task(
    payload: TaskCreateIn,
    actor: Actor = Depends(require_perm("tasks:create")),
    tasks: TaskRepository = Depends(get_task_repository),
    users: UserRepository = Depends(get_user_repository),
) -> TaskOut:
    owner = users.get(actor.user_id)
    if owner is None:
        raise HTTPException(status_code=404, detail="owner not found")

    t = Task(
        title=payload.title,
        description=payload.description,
        status=payload.status,
        owner=owner,
        assignees=_resolve_assignees(users, payload.assignee_ids),
    )
    tasks.save(t)
    logger.info("task %s created by %s", t.id, actor.user_id)
    return TaskOut.model_validate(t)

@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: uuid.UUID,
    payload: TaskUpdateIn,
    actor: Actor = Depends(get_current_actor),
    tasks: TaskRepository = Depends(get_task_repository),
    users: UserRepository = Depends(get_user_repository),
) -> TaskOut:
    t = _get_task_or_404(tasks, task_id)

    if not can_edit(actor.roles, actor.user_id, t):
        logger.warning("user %s denied edit on task %s", actor.user_id, t.id)
        raise HTTPException(status_code=403, detail="You do not have permission to edit this task")

    # resolve before touching the row so a bad id changes nothing
    sent = payload.model_fields_set
    assignees = None
    if "assignee_ids" in sent:
        assignees = _resolve_assignees(users, payload.assignee_ids or [])

    if payload.title is not None:
        t.title = payload.title
    if "description" in sent:
        t.description = payload.description
    if payload.status is not None:
        t.status = payload.status
    if assignees is not None:
        t.assignees = assignees
        # only task_assignees is written otherwise, so onupdate would not fire
        t.updated_at = func.now()

    tasks.save(t)
    return TaskOut.model_validate(t)

@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    tasks: TaskRepository = Depends(get_task_repository),
) -> Response:
    t = _get_task_or_404(tasks, task_id)

    if not can_delete(actor.roles, actor.user_id, t):
        logger.warning("user %s denied delete on task %s", actor.user_id, t.id)
        raise HTTPException(status_code=403, detail="You do not have permission to delete this task")

    tasks.remove(t)
    logger.info("task %s deleted by %s", task_id, actor.user_id)
    return Response(status_code=204)
