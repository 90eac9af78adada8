"""Fake auth service — development stub for AuthService.

Accepts any non-empty token and returns a configurable test user. Empty
tokens return None (simulates a missing/invalid Authorization header).

TEAM: Replace this with the platform's JWT verifier. Subclass AuthService
from campus_ai.hooks.interfaces and implement validate_token. The assistant
never touches tokens directly — it gets a User back from your
implementation.

Usage:
    from campus_ai.hooks.auth import FakeAuthService

    auth = FakeAuthService()                           # default: student
    auth = FakeAuthService(default_role="lecturer")    # lecturer user
"""

from campus_ai.hooks.interfaces import AuthService
from campus_ai.schemas import User

_ROLE_NAMES: dict[str, str] = {
    "student": "Test Student",
    "lecturer": "Test Lecturer",
    "admin": "Test Admin",
}

FAKE_USER_ID = "fake-user-1"


class FakeAuthService(AuthService):
    """STUB — returns a test user for any non-empty token.

    Does not perform real authentication. Any non-empty string is treated
    as a valid token. The returned user's role is configurable at
    construction time.
    """

    def __init__(self, default_role: str = "student") -> None:
        """Initialises the fake auth service.

        Args:
            default_role: The role assigned to all returned users.
                Must be "student", "lecturer", or "admin".
        """
        self._default_role = default_role

    async def validate_token(self, token: str) -> User | None:
        """Returns a test user for any non-empty token.

        Args:
            token: Any string. Non-empty → valid user, empty → None.

        Returns:
            A User with the configured role, or None if token is empty.
        """
        if not token:
            return None
        return User(
            id=FAKE_USER_ID,
            role=self._default_role,  # type: ignore[arg-type]
            name=_ROLE_NAMES.get(self._default_role, "Test User"),
        )
