"""Shared assistant test fixtures.

Factory-pattern fixtures that return callables accepting **overrides.
Every test module imports from here — no reinventing test scaffolding.

Fixtures:
    mock_provider: Factory for MockProvider instances
    fake_clock: Manually advanced millisecond clock for cache tests
    make_course_context: Factory for valid CourseContext instances
    make_student_context: Factory for valid StudentContext instances
    make_course: Factory for catalog Course records
    make_assistant: Factory for ChatAssistant wired to a MockProvider
"""

from uuid import uuid4

import pytest

from campus_ai.ai.assistant import ChatAssistant
from campus_ai.ai.cache import ResponseCache
from campus_ai.ai.providers.mock import MockProvider
from campus_ai.schemas import AssessmentItem, Course, CourseContext, StudentContext


# ---------------------------------------------------------------------------
# MockProvider factory
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_provider():
    """Returns a factory function for creating MockProvider instances."""

    def _make(**kwargs) -> MockProvider:
        return MockProvider(**kwargs)

    return _make


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def fake_clock() -> FakeClock:
    """A FakeClock starting at an arbitrary fixed instant."""
    return FakeClock()


# ---------------------------------------------------------------------------
# Context factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_course_context():
    """Returns a factory function for creating valid CourseContext instances.

    Defaults describe a fully populated course. Override any field via kwargs.
    """

    def _make(**overrides) -> CourseContext:
        defaults = {
            "course_code": "CSC101",
            "course_name": "Intro to Computing",
            "outline": ["Variables", "Loops", "Functions"],
            "assessment": [
                AssessmentItem(type="Assignments", percentage=40),
                AssessmentItem(type="Final Exam", percentage=60),
            ],
            "instructor": "Jane Doe",
            "description": "Foundations of programming.",
        }
        defaults.update(overrides)
        return CourseContext(**defaults)

    return _make


@pytest.fixture
def make_student_context():
    """Returns a factory function for creating valid StudentContext instances.

    Defaults describe a student doing fine (no profile-forced complexity).
    """

    def _make(**overrides) -> StudentContext:
        defaults = {
            "student_id": f"student-{uuid4().hex[:8]}",
            "current_gpa": 3.4,
            "enrolled_courses": ["CSC101", "MTH102"],
            "completed_courses": ["ENG100"],
            "struggling_subjects": [],
            "study_hours": 15,
            "active_forum_posts": 8,
        }
        defaults.update(overrides)
        return StudentContext(**defaults)

    return _make


@pytest.fixture
def make_course():
    """Returns a factory function for creating catalog Course records."""

    def _make(**overrides) -> Course:
        defaults = {
            "id": f"course-{uuid4().hex[:8]}",
            "code": "CSC101",
            "name": "Intro to Computing",
            "outline": ["Variables", "Loops", "Functions"],
            "coordinator": "Jane Doe",
            "unit_load": 3,
            "semester": 1,
            "department": "Computer Science",
        }
        defaults.update(overrides)
        return Course(**defaults)

    return _make


# ---------------------------------------------------------------------------
# ChatAssistant factory
# ---------------------------------------------------------------------------


@pytest.fixture
def make_assistant(fake_clock):
    """Returns a factory function for creating ChatAssistant instances.

    provider defaults to a fresh MockProvider; pass provider=None for the
    no-credential mode. The cache runs on the fake_clock fixture.
    """

    def _make(**overrides) -> ChatAssistant:
        provider = overrides.pop("provider", MockProvider())
        cache = overrides.pop("cache", ResponseCache(clock=fake_clock))
        return ChatAssistant(provider, cache, **overrides)

    return _make
