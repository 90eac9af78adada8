"""Fixtures for contract tests — one parameterized fixture per hook interface.

Each fixture yields a fresh implementation instance. Today there's only the
stub ("stub" param). When the team adds a real implementation (e.g., the
platform's Postgres tables), they add a second param value and an elif branch.

TEAM: To test your implementation against the contracts:
    1. Add your param string (e.g., "postgres") to the params list.
    2. Add an elif branch that yields your implementation instance.
    3. Run: python -m pytest campus_ai/tests/contracts/ -v
    All tests should pass. If any fail, your implementation doesn't satisfy
    the contract — read the failing test's docstring for what's expected.

Uses @pytest_asyncio.fixture (not @pytest.fixture) for async fixture support
in strict mode.
"""

import pytest_asyncio

from campus_ai.hooks.auth import FakeAuthService
from campus_ai.hooks.database import InMemoryCourseCatalog
from campus_ai.hooks.sessions import InMemoryChatSessionStore
from campus_ai.schemas import Course


# ---------------------------------------------------------------------------
# Interface fixtures (parameterized for future implementations)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(params=["stub"])
async def auth_service(request):
    """Yields an AuthService implementation.

    TEAM: Add your JWT verifier here:
        @pytest_asyncio.fixture(params=["stub", "jwt"])
        async def auth_service(request):
            if request.param == "stub":
                yield FakeAuthService()
            elif request.param == "jwt":
                yield YourJwtAuthService(test_secret)
    """
    if request.param == "stub":
        yield FakeAuthService()


@pytest_asyncio.fixture(params=["stub"])
async def course_catalog(request, sample_course):
    """Yields a CourseCatalog implementation seeded with sample_course.

    TEAM: Add your catalog here and seed sample_course with your own
    strategy (e.g., INSERT INTO courses ...) — add_course() is not part
    of the CourseCatalog ABC.
    """
    if request.param == "stub":
        yield InMemoryCourseCatalog([sample_course])


@pytest_asyncio.fixture(params=["stub"])
async def chat_store(request):
    """Yields a ChatSessionStore implementation.

    TEAM: Add your chat persistence here:
        @pytest_asyncio.fixture(params=["stub", "postgres"])
        async def chat_store(request):
            if request.param == "stub":
                yield InMemoryChatSessionStore()
            elif request.param == "postgres":
                store = YourChatStore(test_dsn)
                yield store
                await store.truncate()  # if needed
    """
    if request.param == "stub":
        yield InMemoryChatSessionStore()


# ---------------------------------------------------------------------------
# Helper fixtures (shared test data)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def sample_course():
    """A fully populated catalog course for data integrity assertions."""
    return Course(
        id="course-contract-1",
        code="CSC201",
        name="Data Structures",
        outline=["Arrays", "Linked Lists", "Trees"],
        coordinator="Ada Byron",
        unit_load=4,
        semester=2,
        department="Computer Science",
    )
