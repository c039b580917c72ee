"""FastAPI application factory.

Assembles CORS, request logging, the JSON error envelope and all routers.
This module is the authoritative app object; basel_compliance/main.py
re-exports it.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from basel_compliance.api.errors import register_exception_handlers
from basel_compliance.api.middleware.request_logging import RequestLoggingMiddleware
from basel_compliance.api.routes.auth import router as auth_router
from basel_compliance.api.routes.health import router as health_router
from basel_compliance.api.routes.notifications import router as notifications_router
from basel_compliance.api.routes.packages import router as packages_router
from basel_compliance.api.routes.users import router as users_router
from basel_compliance.core.logging import setup_logging
from basel_compliance.core.settings import get_settings
from basel_compliance.db.base import Base
from basel_compliance.db.session import get_engine

logger = logging.getLogger(__name__)


def _init_sqlite_schema() -> None:
    """Create tables for SQLite development databases; others use Alembic."""
    settings = get_settings()
    if not settings.database_url.startswith("sqlite"):
        return
    db_path = settings.database_url.split(":///", 1)[-1]
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=get_engine())


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    _init_sqlite_schema()
    settings = get_settings()
    logger.info(
        "%s %s starting (env=%s, renderer=%s)",
        settings.app_name,
        settings.app_version,
        settings.app_env,
        settings.pdf_renderer_backend,
    )
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(packages_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
