"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import register_exception_handlers, register_routes
from .core import Database, Settings, load_settings
from .core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.db
    database.create_all()
    logger.info("Database ready (%s)", app.state.settings.app_env)
    yield
    database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Trading Quiz API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = Database(settings.database)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        # uvicorn already writes an access line per request.
        logger.debug(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    register_exception_handlers(app)
    register_routes(app)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "trading_quiz.app:create_app",
        factory=True,
        host="127.0.0.1",
        port=load_settings().port,
        reload=True,
    )
