"""AI chat API routes — course, general and academic chats plus chat history.

Endpoints:
- Chat: course (persistent per-course session), general, academic
- Course outline straight from the catalog
- Study insights: course study plan, personalised recommendations
- Session history: active course session, per-course list, list, get, delete
- GDPR: export of the caller's chats

All responses use the ApiResponse envelope. Auth is enforced on every
endpoint via get_current_user dependency. The assistant never raises for
provider failures, so a chat reply is always 200 — a canned answer is not
an error.
"""

import logging
import time
from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from campus_ai.ai import insights
from campus_ai.ai.assistant import ChatAssistant, course_details_from_catalog
from campus_ai.api.deps import (
    get_assistant,
    get_chat_store,
    get_course_catalog,
    get_current_user,
)
from campus_ai.config import get_settings
from campus_ai.hooks.interfaces import ChatSessionStore, CourseCatalog
from campus_ai.models import UserMode
from campus_ai.schemas import (
    ApiError,
    ApiResponse,
    ChatResponse,
    ChatSession,
    ConversationMessage,
    Course,
    CourseContext,
    CourseProgress,
    StudentContext,
    User,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Stored messages fed back to the assistant as history.
_HISTORY_WINDOW = 20
_TITLE_CLIP = 50


# ---------------------------------------------------------------------------
# Request bodies (API-boundary types, local to this module)
# ---------------------------------------------------------------------------


class CourseChatRequest(BaseModel):
    """Request body for POST /chat/course."""

    message: str = Field(min_length=1)
    course_id: str = Field(min_length=1)
    context: CourseContext | None = None
    user_mode: UserMode | None = None


class GeneralChatRequest(BaseModel):
    """Request body for POST /chat/general."""

    message: str = Field(min_length=1)
    conversation_history: list[ConversationMessage] = Field(default_factory=list)
    user_mode: UserMode | None = None


class AcademicChatRequest(BaseModel):
    """Request body for POST /chat/academic."""

    message: str = Field(min_length=1)
    student_context: StudentContext
    conversation_history: list[ConversationMessage] = Field(default_factory=list)
    user_mode: UserMode | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ApiResponse(ok=False, error=ApiError(code=code, message=message)).model_dump(),
    )


def _check_message_length(message: str) -> None:
    """Rejects messages over the configured maximum with 422 MESSAGE_TOO_LONG."""
    limit = get_settings().max_message_length
    if len(message) > limit:
        raise _error(
            422,
            "MESSAGE_TOO_LONG",
            f"Message content exceeds maximum length of {limit} characters.",
        )


def _title(prefix: str, message: str) -> str:
    return f"{prefix}: {message[:_TITLE_CLIP]}..."


async def _find_course(catalog: CourseCatalog, course_id: str) -> Course | None:
    """Resolves a course by code first, then by ID."""
    course = await catalog.get_course_by_code(course_id)
    if course is None:
        course = await catalog.get_course_by_id(course_id)
    return course


def _merge_course_context(context: CourseContext | None, course: Course) -> CourseContext:
    """Fills gaps in the caller's context from the catalog record.

    Fields the caller supplied win over catalog data.
    """
    merged = course_details_from_catalog(course, course.code)
    if context is not None:
        merged.update(context.model_dump(exclude_none=True, exclude_defaults=True))
    return CourseContext(**merged)


def _is_complete(context: CourseContext | None) -> bool:
    return context is not None and bool(context.course_code) and bool(context.course_name)


async def _get_session_or_404(
    session_id: str, user: User, chat_store: ChatSessionStore
) -> ChatSession:
    """Retrieves the caller's session or raises 404 CHAT_SESSION_NOT_FOUND."""
    session = await chat_store.get_session(session_id, user.id)
    if session is None:
        raise _error(404, "CHAT_SESSION_NOT_FOUND", "Chat session not found.")
    return session


async def _record_exchange(
    chat_store: ChatSessionStore,
    session_id: str,
    reply: ChatResponse,
    response_time_ms: float,
) -> None:
    """Stores the assistant reply with its analytics metadata."""
    await chat_store.add_message(
        session_id,
        role="assistant",
        content=reply.response,
        content_type="markdown",
        metadata={
            "model": reply.model,
            "tokens_used": reply.tokens_used,
            "estimated_cost": reply.estimated_cost,
            "confidence": reply.confidence,
            "cached": reply.cached,
            "response_time_ms": round(response_time_ms, 1),
            "sources": reply.sources,
            "suggestions": reply.suggestions,
        },
    )


def _session_summary(session: ChatSession) -> dict[str, Any]:
    last = session.messages[-1] if session.messages else None
    return {
        "id": session.id,
        "course_id": session.course_id,
        "session_type": session.session_type,
        "title": session.title,
        "status": session.status,
        "created_at": session.created_at.isoformat(),
        "updated_at": session.updated_at.isoformat(),
        "last_message_at": session.last_message_at.isoformat() if session.last_message_at else None,
        "message_count": len(session.messages),
        "last_message": (
            {"role": last.role, "content": last.content, "created_at": last.created_at.isoformat()}
            if last
            else None
        ),
    }


# ---------------------------------------------------------------------------
# Chat endpoints
# ---------------------------------------------------------------------------


@router.post("/chat/course")
async def course_chat(
    body: CourseChatRequest,
    user: User = Depends(get_current_user),
    assistant: ChatAssistant = Depends(get_assistant),
    catalog: CourseCatalog = Depends(get_course_catalog),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """Answers a course question inside the student's active course session.

    The stored session history (last 20 messages) is what the assistant
    sees as conversation history; the request carries only the new message.
    """
    _check_message_length(body.message)

    course = await _find_course(catalog, body.course_id)
    if _is_complete(body.context):
        context = body.context
    elif course is None:
        raise _error(
            404,
            "COURSE_NOT_FOUND",
            f"Course with ID or code {body.course_id!r} not found.",
        )
    else:
        context = _merge_course_context(body.context, course)

    course_key = course.id if course is not None else body.course_id
    session = await chat_store.get_active_course_session(user.id, course_key)
    if session is None:
        session = await chat_store.create_session(
            user.id,
            course_id=course_key,
            session_type="course",
            title=f"{context.course_code} Chat Session",
            metadata={"course_code": context.course_code, "course_name": context.course_name},
        )
        logger.info("Started course chat session %s for course %s", session.id, course_key)

    stored = await chat_store.get_recent_messages(session.id, _HISTORY_WINDOW)
    history = [ConversationMessage(role=m.role, content=m.content) for m in stored]

    await chat_store.add_message(session.id, role="user", content=body.message)

    started = time.monotonic()
    reply = await assistant.generate_course_response(
        body.message, context, history, body.user_mode
    )
    await _record_exchange(
        chat_store, session.id, reply, (time.monotonic() - started) * 1000
    )

    return ApiResponse(
        ok=True, data={**reply.model_dump(), "session_id": session.id}
    ).model_dump()


@router.post("/chat/general")
async def general_chat(
    body: GeneralChatRequest,
    user: User = Depends(get_current_user),
    assistant: ChatAssistant = Depends(get_assistant),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """Answers a general university-life question in a new session."""
    _check_message_length(body.message)

    session = await chat_store.create_session(
        user.id, session_type="general", title=_title("General", body.message)
    )
    await chat_store.add_message(session.id, role="user", content=body.message)

    started = time.monotonic()
    reply = await assistant.generate_general_response(
        body.message, body.conversation_history, body.user_mode
    )
    await _record_exchange(
        chat_store, session.id, reply, (time.monotonic() - started) * 1000
    )

    return ApiResponse(
        ok=True, data={**reply.model_dump(), "session_id": session.id}
    ).model_dump()


@router.post("/chat/academic")
async def academic_chat(
    body: AcademicChatRequest,
    user: User = Depends(get_current_user),
    assistant: ChatAssistant = Depends(get_assistant),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """Runs the academic advisor over the supplied student profile."""
    _check_message_length(body.message)

    session = await chat_store.create_session(
        user.id, session_type="academic", title=_title("Academic", body.message)
    )
    await chat_store.add_message(session.id, role="user", content=body.message)

    started = time.monotonic()
    reply = await assistant.generate_academic_response(
        body.message, body.student_context, body.conversation_history, body.user_mode
    )
    await _record_exchange(
        chat_store, session.id, reply, (time.monotonic() - started) * 1000
    )

    return ApiResponse(
        ok=True, data={**reply.model_dump(), "session_id": session.id}
    ).model_dump()


# ---------------------------------------------------------------------------
# Course data
# ---------------------------------------------------------------------------


@router.get("/course/{course_id}/outline")
async def course_outline(
    course_id: str,
    user: User = Depends(get_current_user),
    catalog: CourseCatalog = Depends(get_course_catalog),
) -> dict:
    """Returns a course's outline from the catalog."""
    course = await _find_course(catalog, course_id)
    if course is None:
        raise _error(404, "COURSE_NOT_FOUND", f"Course with ID or code {course_id!r} not found.")
    if not course.outline:
        raise _error(422, "OUTLINE_NOT_AVAILABLE", "This course has no outline yet.")

    return ApiResponse(
        ok=True,
        data={
            "course_id": course.id,
            "course_code": course.code,
            "course_name": course.name,
            "instructor": course.coordinator,
            "outline": course.outline,
        },
    ).model_dump()


# ---------------------------------------------------------------------------
# Study insights
# ---------------------------------------------------------------------------


@router.get("/insights/course/{course_id}")
async def course_insights(
    course_id: str,
    user: User = Depends(get_current_user),
    catalog: CourseCatalog = Depends(get_course_catalog),
) -> dict:
    """Returns a rule-based study plan, key topics and resources for a course."""
    course = await _find_course(catalog, course_id)
    if course is None:
        raise _error(404, "COURSE_NOT_FOUND", f"Course with ID or code {course_id!r} not found.")

    result = insights.course_insights(course)
    return ApiResponse(
        ok=True,
        data={"course_id": course.id, "course_code": course.code, **result.model_dump()},
    ).model_dump()


@router.get("/recommendations")
async def recommendations(
    course_id: str = Query(min_length=1),
    completed_topics: list[str] = Query(default=[]),
    struggling_areas: list[str] = Query(default=[]),
    study_hours: float = Query(default=0, ge=0),
    last_assignment_score: float = Query(default=100, ge=0, le=100),
    attendance_rate: float = Query(default=1.0, ge=0, le=1),
    forum_participation: Literal["low", "moderate", "high"] = Query(default="moderate"),
    user: User = Depends(get_current_user),
    catalog: CourseCatalog = Depends(get_course_catalog),
) -> dict:
    """Personalised study advice for the caller in one course.

    Progress comes in as query parameters; list parameters repeat
    (?struggling_areas=Arrays&struggling_areas=Loops).
    """
    course = await _find_course(catalog, course_id)
    if course is None:
        raise _error(404, "COURSE_NOT_FOUND", f"Course with ID or code {course_id!r} not found.")

    progress = CourseProgress(
        completed_topics=completed_topics,
        struggling_areas=struggling_areas,
        study_hours=study_hours,
        last_assignment_score=last_assignment_score,
        attendance_rate=attendance_rate,
        forum_participation=forum_participation,
    )
    result = insights.personalized_recommendations(progress)
    return ApiResponse(
        ok=True, data={"course_id": course.id, **result.model_dump()}
    ).model_dump()


# ---------------------------------------------------------------------------
# Session history
# ---------------------------------------------------------------------------


@router.get("/courses/{course_id}/chats/session")
async def course_chat_session(
    course_id: str,
    user: User = Depends(get_current_user),
    catalog: CourseCatalog = Depends(get_course_catalog),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """Returns the caller's active session for a course, creating it if needed."""
    course = await _find_course(catalog, course_id)
    course_key = course.id if course is not None else course_id

    session = await chat_store.get_active_course_session(user.id, course_key)
    if session is None:
        if course is None:
            raise _error(
                404, "COURSE_NOT_FOUND", f"Course with ID or code {course_id!r} not found."
            )
        session = await chat_store.create_session(
            user.id,
            course_id=course.id,
            session_type="course",
            title=f"{course.code} Chat Session",
            metadata={
                "course_code": course.code,
                "course_name": course.name,
                "outline": course.outline,
                "instructor": course.coordinator,
            },
        )

    return ApiResponse(ok=True, data=session.model_dump(mode="json")).model_dump()


@router.get("/courses/{course_id}/chats")
async def course_chat_sessions(
    course_id: str,
    user: User = Depends(get_current_user),
    catalog: CourseCatalog = Depends(get_course_catalog),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """Lists the caller's sessions for one course, newest first.

    An unknown course is not an error: course is null and the sessions
    are looked up by the raw ID.
    """
    course = await _find_course(catalog, course_id)
    course_key = course.id if course is not None else course_id
    sessions = await chat_store.list_sessions(user.id, course_id=course_key)

    return ApiResponse(
        ok=True,
        data={
            "course": (
                {"id": course.id, "code": course.code, "name": course.name}
                if course is not None
                else None
            ),
            "sessions": [_session_summary(s) for s in sessions],
            "total_sessions": len(sessions),
        },
    ).model_dump()


@router.get("/sessions")
async def list_sessions(
    user: User = Depends(get_current_user),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """Lists the caller's chat sessions, newest first."""
    sessions = await chat_store.list_sessions(user.id)
    return ApiResponse(
        ok=True, data={"sessions": [_session_summary(s) for s in sessions]}
    ).model_dump()


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str,
    user: User = Depends(get_current_user),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """Returns one of the caller's sessions with all messages."""
    session = await _get_session_or_404(session_id, user, chat_store)
    return ApiResponse(ok=True, data=session.model_dump(mode="json")).model_dump()


@router.delete("/sessions/{session_id}")
async def delete_session(
    session_id: str,
    user: User = Depends(get_current_user),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """Deletes one of the caller's sessions."""
    deleted = await chat_store.delete_session(session_id, user.id)
    if not deleted:
        raise _error(404, "CHAT_SESSION_NOT_FOUND", "Chat session not found.")
    return ApiResponse(ok=True, data={"deleted": session_id}).model_dump()


@router.get("/export")
async def export_chats(
    user: User = Depends(get_current_user),
    chat_store: ChatSessionStore = Depends(get_chat_store),
) -> dict:
    """GDPR export of every chat the caller has had with the assistant."""
    export = await chat_store.export_student_chats(user.id)
    return ApiResponse(ok=True, data=export).model_dump()
