"""Mock AI provider for testing and development.

Deterministic, zero-cost AIProvider implementation that returns a
configurable canned completion. Used by:
- Assistant and API tests (via conftest.mock_provider fixture)
- Reference implementation of the AIProvider contract

Records every call so tests can assert on the assembled prompt.
"""

from dataclasses import dataclass

from campus_ai.ai.providers.base import (
    AIProvider,
    Completion,
    ModelConfig,
    UsageInfo,
)
from campus_ai.schemas import ConversationMessage

_DEFAULT_RESPONSE = "Hello from MockProvider"
_DEFAULT_USAGE = UsageInfo(total_tokens=15)


@dataclass(frozen=True)
class RecordedCall:
    """Arguments of one complete() call."""

    messages: list[ConversationMessage]
    model_config: ModelConfig


class MockProvider(AIProvider):
    """Deterministic AI provider for testing.

    Args:
        response: Text returned by complete(). Defaults to
            "Hello from MockProvider".
        usage: Token usage returned by complete(). Defaults to 15 tokens.
        error: If set, complete() raises this immediately (after recording
            the call).
    """

    def __init__(
        self,
        response: str | None = None,
        usage: UsageInfo | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response if response is not None else _DEFAULT_RESPONSE
        self.usage = usage or _DEFAULT_USAGE
        self.error = error
        self.calls: list[RecordedCall] = []

    async def complete(
        self,
        *,
        messages: list[ConversationMessage],
        model_config: ModelConfig,
    ) -> Completion:
        """Returns the configured response and usage info.

        Raises configured error immediately if error is set.
        """
        self.calls.append(RecordedCall(messages=list(messages), model_config=model_config))
        if self.error is not None:
            raise self.error
        return Completion(content=self.response, usage=self.usage)
