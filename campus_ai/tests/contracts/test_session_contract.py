"""Contract tests for ChatSessionStore.

Verifies that any ChatSessionStore implementation satisfies:
- Session CRUD scoped to the owning student
- Gap-free, strictly increasing message sequence numbers per session
- One active course session per (student, course) lookup
- Archiving of inactive sessions
- GDPR export of everything a student has said

Run against registered implementations:
    python -m pytest campus_ai/tests/contracts/test_session_contract.py -v
"""

from datetime import timedelta

import pytest

from campus_ai.schemas import ChatSession


class TestChatSessionContract:
    """Behavioral contract for ChatSessionStore implementations."""

    # -- CRUD basics -------------------------------------------------------

    @pytest.mark.asyncio
    async def test_create_then_get(self, chat_store) -> None:
        """A created session can be read back by its owner."""
        session = await chat_store.create_session(
            "student-1", course_id="course-1", session_type="course", title="CSC101 Chat"
        )
        result = await chat_store.get_session(session.id, "student-1")
        assert isinstance(result, ChatSession)
        assert result.id == session.id
        assert result.course_id == "course-1"
        assert result.session_type == "course"
        assert result.title == "CSC101 Chat"
        assert result.status == "active"

    @pytest.mark.asyncio
    async def test_other_student_cannot_read(self, chat_store) -> None:
        """Reading someone else's session looks exactly like a missing one."""
        session = await chat_store.create_session("student-1")
        assert await chat_store.get_session(session.id, "student-2") is None

    @pytest.mark.asyncio
    async def test_get_nonexistent_returns_none(self, chat_store) -> None:
        assert await chat_store.get_session("chat-missing", "student-1") is None

    @pytest.mark.asyncio
    async def test_delete(self, chat_store) -> None:
        """Delete returns True once, then False; the session is gone."""
        session = await chat_store.create_session("student-1")
        assert await chat_store.delete_session(session.id, "student-1") is True
        assert await chat_store.delete_session(session.id, "student-1") is False
        assert await chat_store.get_session(session.id, "student-1") is None

    @pytest.mark.asyncio
    async def test_delete_by_other_student_refused(self, chat_store) -> None:
        session = await chat_store.create_session("student-1")
        assert await chat_store.delete_session(session.id, "student-2") is False
        assert await chat_store.get_session(session.id, "student-1") is not None

    # -- Listing -----------------------------------------------------------

    @pytest.mark.asyncio
    async def test_list_scoped_to_student(self, chat_store) -> None:
        await chat_store.create_session("student-1")
        await chat_store.create_session("student-2")
        sessions = await chat_store.list_sessions("student-1")
        assert len(sessions) == 1
        assert sessions[0].student_id == "student-1"

    @pytest.mark.asyncio
    async def test_list_filtered_by_course(self, chat_store) -> None:
        await chat_store.create_session("student-1", course_id="course-1", session_type="course")
        await chat_store.create_session("student-1", course_id="course-2", session_type="course")
        sessions = await chat_store.list_sessions("student-1", course_id="course-2")
        assert [s.course_id for s in sessions] == ["course-2"]

    # -- Messages ----------------------------------------------------------

    @pytest.mark.asyncio
    async def test_sequence_numbers_start_at_one_and_increase(self, chat_store) -> None:
        session = await chat_store.create_session("student-1")
        numbers = []
        for i in range(3):
            message = await chat_store.add_message(session.id, role="user", content=f"m{i}")
            numbers.append(message.sequence_number)
        assert numbers == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_add_message_bumps_last_message_at(self, chat_store) -> None:
        session = await chat_store.create_session("student-1")
        message = await chat_store.add_message(session.id, role="user", content="hi")
        stored = await chat_store.get_session(session.id, "student-1")
        assert stored is not None
        assert stored.last_message_at == message.created_at

    @pytest.mark.asyncio
    async def test_message_metadata_preserved(self, chat_store) -> None:
        session = await chat_store.create_session("student-1")
        await chat_store.add_message(
            session.id,
            role="assistant",
            content="answer",
            content_type="markdown",
            metadata={"model": "gpt-4o-mini", "tokens_used": 15},
        )
        [message] = await chat_store.get_recent_messages(session.id, 10)
        assert message.content_type == "markdown"
        assert message.metadata == {"model": "gpt-4o-mini", "tokens_used": 15}

    @pytest.mark.asyncio
    async def test_recent_messages_are_tail_in_order(self, chat_store) -> None:
        session = await chat_store.create_session("student-1")
        for i in range(25):
            await chat_store.add_message(session.id, role="user", content=f"m{i}")
        recent = await chat_store.get_recent_messages(session.id, 20)
        assert len(recent) == 20
        assert recent[0].content == "m5"
        assert recent[-1].content == "m24"

    @pytest.mark.asyncio
    async def test_recent_messages_of_unknown_session(self, chat_store) -> None:
        assert await chat_store.get_recent_messages("chat-missing", 20) == []

    # -- Active course session ---------------------------------------------

    @pytest.mark.asyncio
    async def test_active_course_session_found(self, chat_store) -> None:
        session = await chat_store.create_session(
            "student-1", course_id="course-1", session_type="course"
        )
        active = await chat_store.get_active_course_session("student-1", "course-1")
        assert active is not None
        assert active.id == session.id

    @pytest.mark.asyncio
    async def test_general_session_is_not_a_course_session(self, chat_store) -> None:
        await chat_store.create_session("student-1", course_id="course-1", session_type="general")
        assert await chat_store.get_active_course_session("student-1", "course-1") is None

    # -- Archiving + export ------------------------------------------------

    @pytest.mark.asyncio
    async def test_archive_leaves_recent_sessions(self, chat_store) -> None:
        session = await chat_store.create_session("student-1")
        await chat_store.add_message(session.id, role="user", content="hi")
        assert await chat_store.archive_inactive_sessions(timedelta(days=30)) == 0
        stored = await chat_store.get_session(session.id, "student-1")
        assert stored is not None
        assert stored.status == "active"

    @pytest.mark.asyncio
    async def test_export(self, chat_store) -> None:
        session = await chat_store.create_session("student-1", title="Mine")
        await chat_store.add_message(session.id, role="user", content="hello")
        await chat_store.create_session("student-2", title="Theirs")

        export = await chat_store.export_student_chats("student-1")

        assert export["user_id"] == "student-1"
        assert export["total_sessions"] == 1
        assert "export_date" in export
        [exported] = export["sessions"]
        assert exported["title"] == "Mine"
        assert exported["messages"][0]["content"] == "hello"
