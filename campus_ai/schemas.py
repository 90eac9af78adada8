"""Core data models — shared Pydantic types for the campus AI assistant.

Every conversation turn, course/student context, assistant answer and API
response flows through these types. They are the shared vocabulary between
the HTTP layer, the assistant and the storage hooks.

Leaf module: imports only from pydantic and the stdlib. No project
imports allowed — everything else imports from here.

Usage:
    from campus_ai.schemas import ConversationMessage, CourseContext, ChatResponse
"""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant", "system"]


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


class ConversationMessage(BaseModel):
    """One message of a conversation, or of an assembled prompt."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


# ---------------------------------------------------------------------------
# Assistant context
# ---------------------------------------------------------------------------


class AssessmentItem(BaseModel):
    """One line of a course's grading breakdown."""

    model_config = ConfigDict(frozen=True)

    type: str
    percentage: float


class CourseContext(BaseModel):
    """What the assistant knows about the course a student is chatting about.

    Only code and name are required; every other field falls back to a
    placeholder when the system prompt is rendered.
    """

    course_code: str = ""
    course_name: str = ""
    outline: list[str] | None = None
    assessment: list[AssessmentItem] | None = None
    instructor: str | None = None
    description: str | None = None


class StudentContext(BaseModel):
    """Academic profile signals used by the advisor domain."""

    student_id: str
    current_gpa: float | None = None
    enrolled_courses: list[str] | None = None
    completed_courses: list[str] | None = None
    struggling_subjects: list[str] | None = None
    study_hours: float | None = None
    active_forum_posts: int | None = None


# ---------------------------------------------------------------------------
# Assistant answer
# ---------------------------------------------------------------------------


class ChatResponse(BaseModel):
    """Result of one assistant call.

    tokens_used and estimated_cost are None whenever no provider call was
    billed (canned fallback, cache hit).
    """

    response: str
    confidence: float
    sources: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    cached: bool = False
    model: str
    tokens_used: int | None = None
    estimated_cost: float | None = None


# ---------------------------------------------------------------------------
# Study insights
# ---------------------------------------------------------------------------

Difficulty = Literal["Beginner", "Intermediate", "Advanced"]


class CourseProgress(BaseModel):
    """What a student reports about their progress in one course."""

    completed_topics: list[str] = Field(default_factory=list)
    struggling_areas: list[str] = Field(default_factory=list)
    study_hours: float = 0
    last_assignment_score: float = Field(default=100, ge=0, le=100)
    attendance_rate: float = Field(default=1.0, ge=0, le=1)
    forum_participation: Literal["low", "moderate", "high"] = "moderate"


class CourseInsights(BaseModel):
    """Study plan and resources derived from a catalog course."""

    study_plan: list[str]
    key_topics: list[str]
    assessment_tips: list[str]
    resources: list[str]
    difficulty_rating: Difficulty
    estimated_study_hours: int


class StudyRecommendations(BaseModel):
    """Personalised advice for one student in one course."""

    recommendations: list[str]
    focus_areas: list[str]
    time_allocation: dict[str, int]
    next_steps: list[str]


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class User(BaseModel):
    """Identity model returned by the auth layer.

    Frozen — users are identity objects, no mutation after creation.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Literal["student", "lecturer", "admin"]
    name: str


# ---------------------------------------------------------------------------
# Catalog + chat persistence
# ---------------------------------------------------------------------------


class Course(BaseModel):
    """Catalog record for a course, as the course module stores it."""

    model_config = ConfigDict(frozen=True)

    id: str
    code: str
    name: str
    outline: list[str] = Field(default_factory=list)
    coordinator: str | None = None
    unit_load: int | None = None
    semester: int | None = None
    department: str | None = None
    level: str | None = None


class ChatMessage(BaseModel):
    """A persisted chat message with its position in the session."""

    id: str
    session_id: str
    role: Role
    content: str
    content_type: Literal["text", "markdown", "json"] = "text"
    metadata: dict[str, Any] = Field(default_factory=dict)
    sequence_number: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatSession(BaseModel):
    """A student's conversation with the assistant.

    Mutable: messages are appended and timestamps bumped on every turn.
    """

    id: str
    student_id: str
    course_id: str | None = None
    session_type: Literal["course", "general", "academic", "campus"] = "general"
    title: str = "New Chat Session"
    status: Literal["active", "archived"] = "active"
    metadata: dict[str, Any] = Field(default_factory=dict)
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_message_at: datetime | None = None


# ---------------------------------------------------------------------------
# API envelope
# ---------------------------------------------------------------------------


class ApiError(BaseModel):
    """Error detail inside ApiResponse.error.

    code is an uppercase string like "COURSE_NOT_FOUND" or
    "VALIDATION_ERROR". Not an enum — error codes grow with the API.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    message: str


class ApiResponse(BaseModel):
    """Universal response envelope — every API endpoint returns this shape."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    data: Any | None = None
    error: ApiError | None = None
