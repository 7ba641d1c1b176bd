import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from taskboard.db import db_ping
from taskboard.redis_client import redis_ping

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

CHECKS = {"db": db_ping, "redis": redis_ping}

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

# readiness: 503 until every backing service answers
@router.get("/ready")
def ready() -> JSONResponse:
    checks = {name: bool(ping()) for name, ping in CHECKS.items()}
    failing = sorted(name for name, ok in checks.items() if not ok)
    if failing:
        logger.warning("not ready: %s", ", ".join(failing))

    body = {"status": "unready" if failing else "ok", "checks": checks}
    return JSONResponse(status_code=503 if failing else 200, content=body)
