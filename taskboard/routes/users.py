from fastapi import APIRouter, Depends

from taskboard.rbac.deps import require_perm
from taskboard.rbac.perms import Actor
from taskboard.repositories import UserRepository, get_user_repository
from taskboard.schemas.users import UserOut

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=list[UserOut])
def list_users(
    _: Actor = Depends(require_perm("users:read")),
    users: UserRepository = Depends(get_user_repository),
) -> list[UserOut]:
    return [UserOut.model_validate(u) for u in users.list_all()]
