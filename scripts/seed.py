import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.auth.passwords import hash_password
from taskboard.db import session_scope
from taskboard.models.enums import Role, TaskStatus
from taskboard.models.task import Task
from taskboard.models.user import User

SEED_PASSWORD = "Passw0rd!"

@dataclass
class SeedResult:
    admin_email: str
    manager_email: str
    user_email: str
    task_ids: list[uuid.UUID]

def get_or_create_user(db: Session, email: str, first_name: str, last_name: str, roles: set[Role]) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(SEED_PASSWORD),
        )
        u.set_roles(roles)
        db.add(u)
        db.flush()
    elif u.roles != roles:
        u.set_roles(roles)
        db.flush()
    return u

def get_or_create_task(
    db: Session,
    title: str,
    owner: User,
    status: TaskStatus,
    assignees: list[User],
    description: str | None = None,
) -> Task:
    t = db.scalar(select(Task).where(Task.title == title, Task.owner_id == owner.id))
    if t is None:
        t = Task(title=title, description=description, status=status, owner=owner, assignees=assignees)
        db.add(t)
        db.flush()
    else:
        # keep it stable if you re-run seed
        if {u.id for u in t.assignees} != {u.id for u in assignees}:
            t.assignees = assignees
            db.flush()
    return t

def seed() -> SeedResult:
    with session_scope() as db:
        admin = get_or_create_user(db, "admin@example.com", "Ada", "Admin", {Role.admin})
        manager = get_or_create_user(db, "manager@example.com", "Max", "Manager", {Role.manager})
        user = get_or_create_user(db, "user@example.com", "Uma", "User", {Role.user})

        tasks = [
            get_or_create_task(db, "Write onboarding guide", manager, TaskStatus.todo, [user],
                               "First-week checklist for new hires"),
            get_or_create_task(db, "Triage open bugs", manager, TaskStatus.in_progress, [user, manager]),
            get_or_create_task(db, "Rotate API keys", admin, TaskStatus.done, []),
        ]

        return SeedResult(
            admin_email=admin.email,
            manager_email=manager.email,
            user_email=user.email,
            task_ids=[t.id for t in tasks],
        )

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"tasks: {', '.join(str(i) for i in r.task_ids)}")
    print(f"users (password {SEED_PASSWORD}):")
    print(f"  admin:   {r.admin_email}")
    print(f"  manager: {r.manager_email}")
    print(f"  user:    {r.user_email}")
