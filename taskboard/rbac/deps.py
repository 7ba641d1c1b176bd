import logging

from fastapi import Depends, HTTPException

from taskboard.auth.deps import get_current_actor
from taskboard.rbac.perms import PERMS, Actor

logger = logging.getLogger(__name__)

def require_perm(action: str):
    allowed = PERMS.get(action)
    if allowed is None:
        raise RuntimeError(f"unknown permission action: {action}")

    def _checker(actor: Actor = Depends(get_current_actor)) -> Actor:
        if not (actor.roles & allowed):
            logger.warning("user %s denied %s", actor.user_id, action)
            raise HTTPException(status_code=403, detail="forbidden")
        return actor

    return _checker
