"""API assembly helpers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import QuizError
from .routers import ALL_ROUTERS

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI) -> None:
    """Attach all application routers to the given app."""

    for router in ALL_ROUTERS:
        app.include_router(router)


def register_exception_handlers(app: FastAPI) -> None:
    """Answer every error with an ``{"error": ...}`` body."""

    @app.exception_handler(QuizError)
    async def quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = {"error": "Something went wrong!"}
        settings = getattr(request.app.state, "settings", None)
        if settings is not None and not settings.is_production:
            body["message"] = str(exc)
        return JSONResponse(body, status_code=500)


__all__ = ["register_exception_handlers", "register_routes"]
