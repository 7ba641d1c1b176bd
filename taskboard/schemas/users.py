import uuid

from pydantic import field_validator

from taskboard.models.enums import Role
from taskboard.schemas.base import ApiModel

class UserOut(ApiModel):
    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    roles: list[Role]

    @field_validator("roles", mode="before")
    @classmethod
    def _stable_roles(cls, v):
        return sorted(v, key=lambda r: Role(r).value)
