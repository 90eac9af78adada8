"""In-memory chat session store — development stub for ChatSessionStore.

Python dict-backed storage for chat sessions and their messages. Every
read is scoped to the owning student: asking for someone else's session
returns None, exactly like asking for a missing one.

TEAM: Replace this with your real database. Subclass ChatSessionStore
from campus_ai.hooks.interfaces and implement all abstract methods.
Sequence numbers must stay gap-free and strictly increasing per session.

Usage:
    from campus_ai.hooks.sessions import InMemoryChatSessionStore

    store = InMemoryChatSessionStore()
    session = await store.create_session("student-1", course_id="course-1")
    await store.add_message(session.id, role="user", content="Hi")
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from campus_ai.hooks.interfaces import ChatSessionStore
from campus_ai.schemas import ChatMessage, ChatSession, Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _activity(session: ChatSession) -> datetime:
    return session.last_message_at or session.created_at


class InMemoryChatSessionStore(ChatSessionStore):
    """STUB — dict-backed chat storage, loses data on restart.

    Sessions are keyed by id; ownership is checked against student_id
    on every read and delete.
    """

    def __init__(self) -> None:
        """Initialises empty session store."""
        self._sessions: dict[str, ChatSession] = {}

    async def create_session(
        self,
        student_id: str,
        *,
        course_id: str | None = None,
        session_type: str = "general",
        title: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ChatSession:
        session = ChatSession(
            id=f"chat-{uuid4().hex[:12]}",
            student_id=student_id,
            course_id=course_id,
            session_type=session_type,  # type: ignore[arg-type]
            title=title or "New Chat Session",
            metadata=metadata or {},
        )
        self._sessions[session.id] = session
        return session

    async def get_session(self, session_id: str, student_id: str) -> ChatSession | None:
        session = self._sessions.get(session_id)
        if session is None or session.student_id != student_id:
            return None
        return session

    async def list_sessions(
        self, student_id: str, course_id: str | None = None
    ) -> list[ChatSession]:
        sessions = [
            s
            for s in self._sessions.values()
            if s.student_id == student_id and (course_id is None or s.course_id == course_id)
        ]
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    async def get_active_course_session(
        self, student_id: str, course_id: str
    ) -> ChatSession | None:
        for session in self._sessions.values():
            if (
                session.student_id == student_id
                and session.course_id == course_id
                and session.session_type == "course"
                and session.status == "active"
            ):
                return session
        return None

    async def add_message(
        self,
        session_id: str,
        *,
        role: Role,
        content: str,
        content_type: str = "text",
        metadata: dict[str, Any] | None = None,
    ) -> ChatMessage:
        session = self._sessions[session_id]
        next_sequence = session.messages[-1].sequence_number + 1 if session.messages else 1
        message = ChatMessage(
            id=f"msg-{uuid4().hex[:12]}",
            session_id=session_id,
            role=role,
            content=content,
            content_type=content_type,  # type: ignore[arg-type]
            metadata=metadata or {},
            sequence_number=next_sequence,
        )
        session.messages.append(message)
        session.last_message_at = message.created_at
        session.updated_at = message.created_at
        return message

    async def get_recent_messages(self, session_id: str, limit: int) -> list[ChatMessage]:
        session = self._sessions.get(session_id)
        if session is None or limit <= 0:
            return []
        return list(session.messages[-limit:])

    async def delete_session(self, session_id: str, student_id: str) -> bool:
        session = await self.get_session(session_id, student_id)
        if session is None:
            return False
        del self._sessions[session_id]
        return True

    async def archive_inactive_sessions(self, older_than: timedelta) -> int:
        cutoff = _utcnow() - older_than
        archived = 0
        for session in self._sessions.values():
            if session.status == "active" and _activity(session) < cutoff:
                session.status = "archived"
                session.updated_at = _utcnow()
                archived += 1
        return archived

    async def export_student_chats(self, student_id: str) -> dict[str, Any]:
        sessions = await self.list_sessions(student_id)
        return {
            "user_id": student_id,
            "export_date": _utcnow().isoformat(),
            "total_sessions": len(sessions),
            "sessions": [s.model_dump(mode="json") for s in sessions],
        }
