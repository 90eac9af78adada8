"""Shared FastAPI dependencies — auth, catalog, chat store, assistant injection.

Module-level singletons for each service stub. Route handlers access them
via FastAPI's Depends() system — never by importing stubs directly. When the
team swaps a stub for a real implementation, they change the class here and
every downstream handler picks it up automatically.

TEAM: To wire your real services, replace the stub class on the right side
of each singleton assignment below. The get_* functions and all route
handlers stay unchanged.

Usage:
    from campus_ai.api.deps import get_current_user, get_assistant

    @router.post("/something")
    async def do_thing(
        user: User = Depends(get_current_user),
        assistant: ChatAssistant = Depends(get_assistant),
    ): ...
"""

import logging

from fastapi import Depends, Header, HTTPException

from campus_ai.ai.assistant import ChatAssistant
from campus_ai.ai.providers.base import AIProvider
from campus_ai.config import Settings
from campus_ai.hooks.auth import FakeAuthService
from campus_ai.hooks.database import InMemoryCourseCatalog
from campus_ai.hooks.interfaces import AuthService, ChatSessionStore, CourseCatalog
from campus_ai.hooks.sessions import InMemoryChatSessionStore
from campus_ai.schemas import ApiError, ApiResponse, User

logger = logging.getLogger("campus_ai")

# ---------------------------------------------------------------------------
# Service singletons — the swap point
# ---------------------------------------------------------------------------

# TEAM: Replace with your real implementations here.
_auth_service: AuthService = FakeAuthService()
_course_catalog: CourseCatalog = InMemoryCourseCatalog()
_chat_store: ChatSessionStore = InMemoryChatSessionStore()

# Set by _init_ai_services() in main.py at startup
_assistant: ChatAssistant | None = None


# ---------------------------------------------------------------------------
# Dependency providers
# ---------------------------------------------------------------------------


def get_auth_service() -> AuthService:
    """Returns the auth service singleton."""
    return _auth_service


def get_course_catalog() -> CourseCatalog:
    """Returns the course catalog singleton."""
    return _course_catalog


def get_chat_store() -> ChatSessionStore:
    """Returns the chat session store singleton."""
    return _chat_store


def get_assistant() -> ChatAssistant:
    """Returns the chat assistant singleton.

    Raises HTTPException(503) if the assistant hasn't been initialized yet
    (startup not complete).
    """
    if _assistant is None:
        raise HTTPException(
            status_code=503,
            detail=ApiResponse(
                ok=False,
                error=ApiError(
                    code="SERVICE_UNAVAILABLE",
                    message="AI assistant is not yet available. Server is starting up.",
                ),
            ).model_dump(),
        )
    return _assistant


# ---------------------------------------------------------------------------
# AI provider factory
# ---------------------------------------------------------------------------


def create_provider(settings: Settings) -> AIProvider | None:
    """Builds the completion provider from settings.

    Args:
        settings: Application settings with the provider URL and key.

    Returns:
        An OpenAICompatProvider, or None when no API key is configured
        (the assistant then serves canned replies).
    """
    if not settings.ai_service_api_key:
        return None

    # Local import keeps httpx client construction out of module import.
    from campus_ai.ai.providers.openai_compat import OpenAICompatProvider

    return OpenAICompatProvider(
        api_key=settings.ai_service_api_key,
        base_url=settings.ai_service_url,
        timeout_s=settings.ai_request_timeout_s,
    )


# ---------------------------------------------------------------------------
# Auth dependency — used by route handlers
# ---------------------------------------------------------------------------


async def get_current_user(
    authorization: str | None = Header(default=None),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Extracts and validates a Bearer token from the Authorization header.

    Returns the authenticated User on success. Raises HTTPException(401)
    on missing header, malformed header, or invalid token.

    Args:
        authorization: The raw Authorization header value.
        auth_service: Injected auth service.

    Returns:
        The authenticated User.

    Raises:
        HTTPException: 401 with ApiResponse envelope on auth failure.
    """
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail=ApiResponse(
                ok=False,
                error=ApiError(code="UNAUTHORIZED", message="Missing authorization header."),
            ).model_dump(),
        )

    parts = authorization.split(" ", maxsplit=1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise HTTPException(
            status_code=401,
            detail=ApiResponse(
                ok=False,
                error=ApiError(code="UNAUTHORIZED", message="Invalid authorization header format."),
            ).model_dump(),
        )

    token = parts[1].strip()
    user = await auth_service.validate_token(token)

    if user is None:
        raise HTTPException(
            status_code=401,
            detail=ApiResponse(
                ok=False,
                error=ApiError(code="UNAUTHORIZED", message="Invalid or expired token."),
            ).model_dump(),
        )

    return user
