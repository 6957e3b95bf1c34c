"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.middleware.sessions import SessionMiddleware

from job_trust.config import AppConfig, load_config
from job_trust.errors import TrustError
from job_trust.models import create_db_engine, init_db, make_session_factory

from .exceptions import (
    general_exception_handler,
    http_exception_handler,
    request_validation_handler,
    trust_error_handler,
)
from .feedback import router as feedback_router
from .jobs import router as jobs_router


def _load_app_config() -> AppConfig:
    path = os.environ.get("JOB_TRUST_CONFIG", "config.yaml")
    if Path(path).exists():
        return load_config(path)
    return AppConfig()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine)

    refresh = app.state.config.decay_refresh
    if refresh.enabled:
        from job_trust.scheduler import schedule_decay_refresh, shutdown_scheduler
        schedule_decay_refresh(refresh, app.state.session_factory)

    yield

    if refresh.enabled:
        shutdown_scheduler()


def create_app(config: AppConfig | None = None) -> FastAPI:
    app = FastAPI(title="Job Trust", lifespan=lifespan)
    app.state.config = config or _load_app_config()
    # Requests get sessions on the configured database, not the import-time default
    app.state.engine = create_db_engine(app.state.config.database.url)
    app.state.session_factory = make_session_factory(app.state.engine)

    # Session middleware for cookie-based identity
    app.add_middleware(SessionMiddleware, secret_key=app.state.config.web.session_secret)

    app.add_exception_handler(TrustError, trust_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(feedback_router)
    app.include_router(jobs_router)

    @app.get("/api/health")
    def health():
        from job_trust.scheduler import get_scheduler_info
        return {"success": True, "data": {"scheduler": get_scheduler_info()}}

    return app


app = create_app()
