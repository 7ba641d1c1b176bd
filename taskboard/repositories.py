import uuid
from collections.abc import Iterable, Sequence

from fastapi import Depends
from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session

from taskboard.db import get_db
from taskboard.models.task import Task
from taskboard.models.user import User

class TaskRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, task_id: uuid.UUID) -> Task | None:
        return self.db.get(Task, task_id)

    def find_and_count(
        self,
        where: Sequence[ColumnElement[bool]],
        order_by: Sequence[ColumnElement],
        offset: int,
        limit: int,
    ) -> tuple[list[Task], int]:
        # same predicates for the page and the count
        total = self.db.scalar(select(func.count()).select_from(Task).where(*where)) or 0
        if offset >= total:
            # past the end, also keeps huge offsets out of the db
            return [], total
        q = select(Task).where(*where).order_by(*order_by).offset(offset).limit(limit)
        return list(self.db.scalars(q).all()), total

    def save(self, task: Task) -> Task:
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def remove(self, task: Task) -> None:
        self.db.delete(task)
        self.db.commit()

class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: uuid.UUID) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.db.scalar(select(User).where(User.email == email.lower().strip()))

    def find_by_ids(self, ids: Iterable[uuid.UUID]) -> list[User]:
        ids = set(ids)
        if not ids:
            return []
        return list(self.db.scalars(select(User).where(User.id.in_(ids)).order_by(User.email)).all())

    def list_all(self) -> list[User]:
        return list(self.db.scalars(select(User).order_by(User.email)).all())

    def save(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)

def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
