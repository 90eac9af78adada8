"""Tests for campus_ai.schemas — Core Pydantic data models."""

import pytest
from pydantic import ValidationError

from campus_ai.schemas import (
    ApiError,
    ApiResponse,
    ChatMessage,
    ChatResponse,
    ChatSession,
    ConversationMessage,
    Course,
    CourseContext,
    StudentContext,
    User,
)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


class TestUser:
    """User identity model — frozen, Literal role validation."""

    def test_valid_roles(self) -> None:
        for role in ("student", "lecturer", "admin"):
            assert User(id="u", role=role, name="N").role == role

    def test_invalid_role_rejected(self) -> None:
        with pytest.raises(ValidationError):
            User(id="u", role="professor", name="N")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        user = User(id="u", role="student", name="N")
        with pytest.raises(ValidationError):
            user.name = "Other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Conversation + context
# ---------------------------------------------------------------------------


class TestConversationMessage:
    def test_unknown_role_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ConversationMessage(role="tool", content="x")  # type: ignore[arg-type]

    def test_equality_by_value(self) -> None:
        assert ConversationMessage(role="user", content="a") == ConversationMessage(
            role="user", content="a"
        )


class TestContexts:
    def test_course_context_all_optional(self) -> None:
        context = CourseContext()
        assert context.course_code == ""
        assert context.outline is None
        assert context.assessment is None

    def test_assessment_parsed_from_dicts(self) -> None:
        context = CourseContext(assessment=[{"type": "Final", "percentage": 100}])
        assert context.assessment is not None
        assert context.assessment[0].percentage == 100.0

    def test_student_context_requires_id(self) -> None:
        with pytest.raises(ValidationError):
            StudentContext()  # type: ignore[call-arg]


# ---------------------------------------------------------------------------
# Assistant answer
# ---------------------------------------------------------------------------


class TestChatResponse:
    def test_defaults(self) -> None:
        response = ChatResponse(response="hi", confidence=0.8, model="gpt-4o")
        assert response.sources == []
        assert response.suggestions == []
        assert response.cached is False
        assert response.tokens_used is None
        assert response.estimated_cost is None


# ---------------------------------------------------------------------------
# Persistence models
# ---------------------------------------------------------------------------


class TestPersistenceModels:
    def test_course_outline_defaults_empty(self) -> None:
        assert Course(id="c", code="X", name="N").outline == []

    def test_chat_session_defaults(self) -> None:
        session = ChatSession(id="chat-1", student_id="s")
        assert session.status == "active"
        assert session.session_type == "general"
        assert session.messages == []
        assert session.last_message_at is None
        assert session.created_at.tzinfo is not None

    def test_chat_message_content_type_validated(self) -> None:
        with pytest.raises(ValidationError):
            ChatMessage(
                id="m",
                session_id="chat-1",
                role="user",
                content="x",
                content_type="html",  # type: ignore[arg-type]
                sequence_number=1,
            )


# ---------------------------------------------------------------------------
# API envelope
# ---------------------------------------------------------------------------


class TestApiResponse:
    def test_success_shape(self) -> None:
        assert ApiResponse(ok=True, data={"a": 1}).model_dump() == {
            "ok": True,
            "data": {"a": 1},
            "error": None,
        }

    def test_error_shape(self) -> None:
        dumped = ApiResponse(
            ok=False, error=ApiError(code="COURSE_NOT_FOUND", message="nope")
        ).model_dump()
        assert dumped["error"] == {"code": "COURSE_NOT_FOUND", "message": "nope"}
