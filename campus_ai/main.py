"""FastAPI application — entry point, middleware, and health endpoint.

Creates the campus AI assistant API with:
- API versioning via router prefix (/api/v1/)
- CORS middleware (origins from settings)
- Request logging middleware (raw ASGI — no response body buffering)
- Global exception handlers (HTTPException, validation, catch-all)
- Health endpoint
- AI chat routes under /api/v1/ai

On startup, chat sessions idle for CHAT_ARCHIVE_AFTER_DAYS are archived;
on shutdown, the provider's HTTP client is closed.

Run with: campus-ai (or uvicorn campus_ai.main:app --reload)
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from datetime import timedelta
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from campus_ai.config import get_settings
from campus_ai.schemas import ApiError, ApiResponse

logger = logging.getLogger("campus_ai")


# ---------------------------------------------------------------------------
# Request logging middleware (raw ASGI)
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware:
    """Logs method, path, status code, and duration for every request.

    Uses raw ASGI to avoid response body buffering. Does NOT log
    request/response bodies (student messages), query params, auth
    headers, or client IPs.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Wraps the ASGI call to measure timing and capture status code."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "?")
        path = scope.get("path", "?")
        start = time.monotonic()
        status_code = 0

        async def logging_send(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, receive, logging_send)
        finally:
            duration_ms = (time.monotonic() - start) * 1000
            logger.info(
                "%s %s %d %.1fms", method, path, status_code, duration_ms
            )


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


def _http_exception_response(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wraps HTTPException in ApiResponse envelope.

    If the detail is already an ApiResponse dict (from deps.py auth),
    returns it directly. Otherwise wraps in a generic error.
    """
    if isinstance(exc.detail, dict) and "ok" in exc.detail:
        return JSONResponse(status_code=exc.status_code, content=exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse(
            ok=False,
            error=ApiError(code="HTTP_ERROR", message=str(exc.detail)),
        ).model_dump(),
    )


def _validation_error_response(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Wraps Pydantic validation errors in ApiResponse envelope.

    Returns a human-readable summary without leaking internal details.
    """
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = " -> ".join(str(part) for part in first.get("loc", []))
        msg = first.get("msg", "Validation error")
        detail = f"{loc}: {msg}" if loc else msg
    else:
        detail = "Request validation failed."

    return JSONResponse(
        status_code=422,
        content=ApiResponse(
            ok=False,
            error=ApiError(code="VALIDATION_ERROR", message=detail),
        ).model_dump(),
    )


def _unhandled_exception_response(request: Request, exc: Exception) -> JSONResponse:
    """Catches all unhandled exceptions — never leaks internals to client.

    Logs the full traceback server-side. Returns a generic 500 response.
    Provider failures never get here: the assistant degrades to canned
    replies on its own.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=500,
        content=ApiResponse(
            ok=False,
            error=ApiError(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred.",
            ),
        ).model_dump(),
    )



# ---------------------------------------------------------------------------
# App creation
# ---------------------------------------------------------------------------


def _init_ai_services() -> None:
    """Initializes the chat assistant singleton during app startup.

    Builds the shared response cache and the completion provider from
    settings. A missing API key is logged but never prevents startup:
    the assistant then answers with canned replies.

    Uses local imports to avoid circular imports during module loading.
    """
    from campus_ai.ai.assistant import ChatAssistant
    from campus_ai.ai.cache import ResponseCache
    from campus_ai.api import deps

    settings = get_settings()

    if not settings.ai_service_api_key:
        logger.warning(
            "Missing AI_SERVICE_API_KEY. The assistant will serve fallback replies only."
        )
    provider = deps.create_provider(settings)

    cache = ResponseCache(
        ttl_ms=settings.ai_cache_ttl_ms,
        max_entries=settings.ai_cache_max_entries,
    )
    deps._assistant = ChatAssistant(
        provider,
        cache,
        default_mode=settings.ai_default_mode,
        catalog=deps.get_course_catalog(),
    )

    logger.info(
        "AI services initialized: url=%s, default_mode=%s, cache_max_entries=%d",
        settings.ai_service_url,
        settings.ai_default_mode.value,
        settings.ai_cache_max_entries,
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Archives idle chat sessions on startup, closes the provider on shutdown."""
    from campus_ai.api import deps

    archive_after_days = get_settings().chat_archive_after_days
    archived = await deps.get_chat_store().archive_inactive_sessions(
        timedelta(days=archive_after_days)
    )
    logger.info(
        "Archived %d chat sessions idle for over %d days", archived, archive_after_days
    )

    yield

    assistant = deps._assistant
    if assistant is not None:
        await assistant.aclose()


def create_app() -> FastAPI:
    """Creates and configures the FastAPI application."""
    settings = get_settings()

    # Configure logging level
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    application = FastAPI(
        title="Campus AI",
        description="Tiered AI chat assistant for the university platform",
        version="0.1.0",
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --

    # CORS — must be outermost to handle preflight before auth
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging
    application.add_middleware(RequestLoggingMiddleware)

    # -- Exception handlers --
    application.add_exception_handler(StarletteHTTPException, _http_exception_response)
    application.add_exception_handler(RequestValidationError, _validation_error_response)
    application.add_exception_handler(Exception, _unhandled_exception_response)

    # -- Routers --
    _register_routes(application)

    # -- AI services --
    _init_ai_services()

    return application


def _register_routes(application: FastAPI) -> None:
    """Registers all API routers on the application."""
    from fastapi import APIRouter

    v1 = APIRouter(prefix="/api/v1")

    @v1.get("/health")
    async def health() -> dict[str, Any]:
        return ApiResponse(
            ok=True, data={"status": "healthy", "environment": get_settings().app_env}
        ).model_dump()

    # Sub-routers (BEFORE including v1 into the app):
    from campus_ai.api.chat import router as chat_router

    v1.include_router(chat_router, prefix="/ai", tags=["ai"])

    application.include_router(v1)


app = create_app()


def run() -> None:
    """Console entry point: serves the app on APP_PORT.

    Auto-reload is on in the development environment only.
    """
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "campus_ai.main:app",
        host="0.0.0.0",
        port=settings.app_port,
        reload=settings.app_env == "development",
    )
