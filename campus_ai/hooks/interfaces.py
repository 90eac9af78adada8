"""Hook interfaces — abstract base classes for all swappable services.

These ABCs define the contracts between the assistant/API logic and the
infrastructure layer owned by the rest of the platform (auth, the course
module's database, chat persistence). Each one has an in-memory stub
that lets the service run end-to-end without real infrastructure.

Leaf module: imports only from abc, datetime (stdlib) and
campus_ai.schemas (also a leaf). No project services, no orchestration.

TEAM: To implement a real service, subclass the relevant ABC and implement
every abstract method. Python will raise TypeError at instantiation if
any method is missing — you'll know immediately what's left to do.

Usage:
    from campus_ai.hooks.interfaces import AuthService, CourseCatalog
    from campus_ai.hooks.interfaces import ChatSessionStore
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any

from campus_ai.schemas import ChatMessage, ChatSession, Course, Role, User


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class AuthService(ABC):
    """Validates auth tokens and resolves users.

    Token issuance and signing live in the platform's auth module. This
    service only asks it "who does this token belong to?" and gets a
    User back.

    TEAM: Replace the stub (FakeAuthService) with the JWT verifier.
    """

    @abstractmethod
    async def validate_token(self, token: str) -> User | None:
        """Validates an auth token and returns the associated user.

        Args:
            token: Bearer token from the Authorization header.

        Returns:
            The User if the token is valid and not expired, None otherwise.
        """
        ...


# ---------------------------------------------------------------------------
# Course catalog (read-only view of the course module)
# ---------------------------------------------------------------------------


class CourseCatalog(ABC):
    """Read access to course records for context enrichment.

    The assistant works without a catalog; when one is wired, course chats
    get outline, coordinator and unit data from it.

    TEAM: Replace the stub (InMemoryCourseCatalog) with a query against
    the courses table.
    """

    @abstractmethod
    async def get_course_by_code(self, code: str) -> Course | None:
        """Looks up a course by its exact code (e.g. "CSC101")."""
        ...

    @abstractmethod
    async def get_course_by_id(self, course_id: str) -> Course | None:
        """Looks up a course by its opaque ID."""
        ...

    @abstractmethod
    async def search_courses_by_code(self, code: str) -> list[Course]:
        """Returns courses whose code contains the given fragment.

        Args:
            code: Code fragment, matched case-insensitively.

        Returns:
            Matching courses, best match first. Empty list if none.
        """
        ...


# ---------------------------------------------------------------------------
# Chat persistence
# ---------------------------------------------------------------------------


class ChatSessionStore(ABC):
    """Persistent storage for chat sessions and their messages.

    Ownership is part of every read: a session is only visible to the
    student who owns it. Messages within a session are strictly ordered
    by sequence_number, assigned by the store.

    TEAM: Replace the stub (InMemoryChatSessionStore) with your database.
    """

    @abstractmethod
    async def create_session(
        self,
        student_id: str,
        *,
        course_id: str | None = None,
        session_type: str = "general",
        title: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ChatSession:
        """Creates a new, empty, active session."""
        ...

    @abstractmethod
    async def get_session(self, session_id: str, student_id: str) -> ChatSession | None:
        """Returns the session if it exists and belongs to student_id."""
        ...

    @abstractmethod
    async def list_sessions(
        self, student_id: str, course_id: str | None = None
    ) -> list[ChatSession]:
        """Lists a student's sessions, newest first, optionally for one course."""
        ...

    @abstractmethod
    async def get_active_course_session(
        self, student_id: str, course_id: str
    ) -> ChatSession | None:
        """Returns the student's active course-type session for a course."""
        ...

    @abstractmethod
    async def add_message(
        self,
        session_id: str,
        *,
        role: Role,
        content: str,
        content_type: str = "text",
        metadata: dict[str, Any] | None = None,
    ) -> ChatMessage:
        """Appends a message with the next sequence number.

        Also bumps the session's updated_at and last_message_at.

        Raises:
            KeyError: If the session doesn't exist.
        """
        ...

    @abstractmethod
    async def get_recent_messages(self, session_id: str, limit: int) -> list[ChatMessage]:
        """Returns the last `limit` messages in sequence order."""
        ...

    @abstractmethod
    async def delete_session(self, session_id: str, student_id: str) -> bool:
        """Deletes a session owned by student_id. Returns False if not found."""
        ...

    @abstractmethod
    async def archive_inactive_sessions(self, older_than: timedelta) -> int:
        """Archives active sessions idle for longer than older_than.

        The app runs one pass at startup with CHAT_ARCHIVE_AFTER_DAYS;
        long-running deployments can also call it from a scheduler.

        Returns:
            Number of sessions archived.
        """
        ...

    @abstractmethod
    async def export_student_chats(self, student_id: str) -> dict[str, Any]:
        """Exports every session and message of a student (GDPR)."""
        ...
