"""Base AI provider interface and completion result types.

Defines the contract that every AI provider implementation (the
OpenAI-compatible HTTP provider, Mock) must satisfy. The assistant only
ever talks to this interface.

Leaf module — imports only stdlib, models and schemas.
No config, no framework imports.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from campus_ai.models import ModelConfig
from campus_ai.schemas import ConversationMessage


# ---------------------------------------------------------------------------
# Result + error types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UsageInfo:
    """Token usage reported by the provider for one completion.

    Used for cost estimation and usage logging.
    """

    total_tokens: int = 0


@dataclass(frozen=True)
class Completion:
    """The assistant text and usage from one completion call."""

    content: str
    usage: UsageInfo


class ProviderError(Exception):
    """Any failure to obtain a completion.

    Transport errors, non-2xx responses and unparseable bodies are all
    reported as ProviderError. retryable marks failures worth a second
    attempt (timeouts, connection errors, 429, 5xx).
    """

    def __init__(self, message: str, *, status_code: int | None = None, retryable: bool = False) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


# ---------------------------------------------------------------------------
# AIProvider ABC
# ---------------------------------------------------------------------------


class AIProvider(ABC):
    """Abstract base for chat-completion providers.

    Concrete implementations (OpenAICompatProvider, MockProvider)
    implement complete() to talk to their respective backends.
    """

    @abstractmethod
    async def complete(
        self,
        *,
        messages: list[ConversationMessage],
        model_config: ModelConfig,
    ) -> Completion:
        """Returns the full response text and usage info.

        Args:
            messages: The assembled prompt, system message first.
            model_config: Tier configuration (model name, max_tokens,
                temperature).

        Returns:
            The completion text and token usage.

        Raises:
            ProviderError: If no completion could be obtained.
        """

    async def aclose(self) -> None:
        """Releases network resources. No-op by default."""
