import re

from pydantic import EmailStr, Field, field_validator

from taskboard.models.enums import Role
from taskboard.schemas.base import ApiModel
from taskboard.schemas.users import UserOut

_PASSWORD_CLASSES = (
    (re.compile(r"[a-z]"), "one lowercase letter"),
    (re.compile(r"[A-Z]"), "one uppercase letter"),
    (re.compile(r"\d"), "one number"),
)

class RegisterIn(ApiModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    roles: list[Role] | None = None

    @field_validator("password")
    @classmethod
    def _password_strength(cls, v: str) -> str:
        missing = [label for rx, label in _PASSWORD_CLASSES if not rx.search(v)]
        if missing:
            raise ValueError(f"password must contain at least {', '.join(missing)}")
        return v

class LoginIn(ApiModel):
    email: EmailStr
    password: str = Field(min_length=1)

class AuthOut(ApiModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
