import logging

from fastapi import FastAPI

from taskboard.errors import install_error_handlers
from taskboard.log import setup_logging
from taskboard.routes.auth import router as auth_router
from taskboard.routes.health import router as health_router
from taskboard.routes.tasks import router as tasks_router
from taskboard.routes.users import router as users_router

logger = logging.getLogger(__name__)

def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="taskboard", version="0.1.0")
    install_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(tasks_router)
    logger.info("taskboard app created")
    return app

app = create_app()
