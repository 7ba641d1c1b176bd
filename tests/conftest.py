import os

# must be set before taskboard.config is imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ALLOW_ROLE_SELF_ASSIGNMENT"] = "true"

import uuid
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.auth.passwords import hash_password
from taskboard.auth.tokens import issue_access_token
from taskboard.db import get_db
from taskboard.main import create_app
from taskboard.models import Base
from taskboard.models.enums import Role, TaskStatus
from taskboard.models.task import Task
from taskboard.models.user import User

PASSWORD = "Passw0rdOk"
T0 = datetime(2026, 1, 1, 9, 0, 0)

@pytest.fixture()
def db_session() -> Session:
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

@pytest.fixture(scope="session")
def password_hash() -> str:
    # bcrypt is slow, hash once
    return hash_password(PASSWORD)

@pytest.fixture()
def make_user(db_session: Session, password_hash: str):
    def _make(*roles: Role, email: str | None = None) -> User:
        email = email or f"u+{uuid.uuid4().hex[:10]}@example.com"
        u = User(email=email, first_name="Test", last_name="User", password_hash=password_hash)
        u.set_roles(set(roles) or {Role.user})
        db_session.add(u)
        db_session.commit()
        return u

    return _make

@pytest.fixture()
def make_task(db_session: Session):
    counter = {"n": 0}

    def _make(
        owner: User,
        title: str | None = None,
        status: TaskStatus = TaskStatus.todo,
        description: str | None = None,
        assignees: list[User] | None = None,
    ) -> Task:
        # strictly increasing created_at keeps default ordering predictable
        counter["n"] += 1
        t = Task(
            title=title or f"task {counter['n']:03d}",
            description=description,
            status=status,
            owner=owner,
            assignees=assignees or [],
            created_at=T0 + timedelta(minutes=counter["n"]),
        )
        db_session.add(t)
        db_session.commit()
        return t

    return _make

def auth(user: User) -> dict[str, str]:
    return {"authorization": f"bearer {issue_access_token(user.id, user.roles)}"}
