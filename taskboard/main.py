from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.routes import auth, health, reports, tasks, users
from taskboard.config import settings
from taskboard.db import check_db_connection, init_db
from taskboard.errors import register_error_handlers
from taskboard.logger import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    setup_logging(level=settings.log_level, log_file=settings.log_file or None)
    logger.info("Starting application...")

    init_db()
    if not check_db_connection():
        logger.warning("Database is not reachable; requests will fail until it is")

    yield

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Taskboard Backend",
        description="Task management API with checklist progress, dashboards and spreadsheet reports",
        version="1.0.0",
        lifespan=app_lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(tasks.router)
    app.include_router(reports.router)

    return app


app = create_app()
