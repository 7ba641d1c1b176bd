from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from taskboard.auth.passwords import hash_password, verify_password
from taskboard.auth.tokens import issue_access_token
from taskboard.config import settings
from taskboard.models.enums import Role
from taskboard.models.user import User
from taskboard.ratelimit import rate_limit
from taskboard.repositories import UserRepository, get_user_repository
from taskboard.schemas.auth import AuthOut, LoginIn, RegisterIn
from taskboard.schemas.users import UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

def _auth_out(user: User) -> AuthOut:
    return AuthOut(
        access_token=issue_access_token(user.id, user.roles),
        user=UserOut.model_validate(user),
    )

@router.post("/register", response_model=AuthOut, status_code=201)
def register(
    payload: RegisterIn,
    users: UserRepository = Depends(get_user_repository),
    _: None = Depends(
        rate_limit(
            "auth:register",
            limit_per_window=settings.rate_limit_auth_register_per_min,
            window_seconds=60,
        )
    ),
) -> AuthOut:
    email = payload.email.lower().strip()
    if users.get_by_email(email) is not None:
        raise HTTPException(status_code=409, detail="email already registered")

    roles = {Role.user}
    if payload.roles and settings.allow_role_self_assignment:
        roles = set(payload.roles)

    user = User(
        email=email,
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        password_hash=hash_password(payload.password),
    )
    user.set_roles(roles)
    users.save(user)
    logger.info("registered user %s with roles %s", user.id, sorted(r.value for r in roles))
    return _auth_out(user)

@router.post("/login", response_model=AuthOut)
def login(
    payload: LoginIn,
    users: UserRepository = Depends(get_user_repository),
    _: None = Depends(
        rate_limit(
            "auth:login",
            limit_per_window=settings.rate_limit_auth_login_per_min,
            window_seconds=60,
        )
    ),
) -> AuthOut:
    user = users.get_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning("failed login for %s", payload.email.lower())
        raise HTTPException(status_code=401, detail="invalid credentials")
    return _auth_out(user)
