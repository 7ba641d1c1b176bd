import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from taskboard.models.enums import Role

PERMS: dict[str, set[Role]] = {
    "tasks:create": {Role.admin, Role.manager},
    "tasks:read": {Role.admin, Role.manager, Role.user},
    "users:read": {Role.admin, Role.manager, Role.user},
}

@dataclass(frozen=True)
class Actor:
    user_id: uuid.UUID
    roles: frozenset[Role] = field(default_factory=frozenset)

class Owned(Protocol):
    owner_id: uuid.UUID

class TaskAction(str, Enum):
    edit = "edit"
    delete = "delete"

class Grant(str, Enum):
    any = "any"
    own = "own"
    deny = "deny"

# action -> role -> grant; manager does not imply user
TASK_RULES: dict[TaskAction, dict[Role, Grant]] = {
    TaskAction.edit: {Role.admin: Grant.any, Role.manager: Grant.any, Role.user: Grant.own},
    TaskAction.delete: {Role.admin: Grant.any, Role.manager: Grant.own, Role.user: Grant.own},
}
# applies when none of the held roles is listed
TASK_FALLBACK: dict[TaskAction, Grant] = {
    TaskAction.edit: Grant.own,
    TaskAction.delete: Grant.deny,
}

def decide(action: TaskAction, roles: Iterable[Role], actor_id: uuid.UUID, task: Owned) -> bool:
    rules = TASK_RULES[action]
    grants = {rules[r] for r in roles if r in rules}
    if not grants:
        grants = {TASK_FALLBACK[action]}

    if Grant.any in grants:
        return True
    if Grant.own in grants:
        return task.owner_id == actor_id
    return False

def can_edit(roles: Iterable[Role], actor_id: uuid.UUID, task: Owned) -> bool:
    return decide(TaskAction.edit, roles, actor_id, task)

def can_delete(roles: Iterable[Role], actor_id: uuid.UUID, task: Owned) -> bool:
    return decide(TaskAction.delete, roles, actor_id, task)
