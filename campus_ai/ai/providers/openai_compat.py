"""OpenAI-compatible chat-completion provider over plain HTTP (httpx).

Implements the AIProvider contract against any API that speaks the
Chat Completions protocol: POST {base_url}/chat/completions with
{model, messages, max_tokens, temperature}, bearer auth, and a JSON body
carrying choices[0].message.content and usage.total_tokens.

Every request is bounded by the client timeout. Transient failures
(timeouts, connection errors, 429, 5xx) get one retry after a short
backoff; everything else fails straight away as ProviderError.
"""

import asyncio
import logging
from typing import Any

import httpx

from campus_ai.ai.providers.base import (
    AIProvider,
    Completion,
    ModelConfig,
    ProviderError,
    UsageInfo,
)
from campus_ai.schemas import ConversationMessage

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_S = 30.0
_MAX_RETRIES = 1  # 2 total attempts
_BACKOFF_S = 1.0
_EMPTY_RESPONSE = "No response generated"


def _is_retryable_status(status_code: int) -> bool:
    """429 and 5xx are transient; other 4xx mean the request itself is bad."""
    return status_code == 429 or status_code >= 500


def _parse_completion(payload: Any) -> Completion:
    """Extracts text and usage from a Chat Completions response body.

    Missing content becomes a placeholder text; missing or non-integer usage
    counts as 0 tokens. A body that isn't a JSON object, or content that
    isn't a string, is a ProviderError.
    """
    if not isinstance(payload, dict):
        raise ProviderError("Malformed completion body: expected a JSON object")

    content = None
    choices = payload.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        message = choices[0].get("message")
        if isinstance(message, dict):
            content = message.get("content")
    if content is not None and not isinstance(content, str):
        raise ProviderError("Malformed completion body: content is not a string")

    usage = payload.get("usage")
    total_tokens = usage.get("total_tokens") if isinstance(usage, dict) else None
    if not isinstance(total_tokens, int) or isinstance(total_tokens, bool):
        total_tokens = 0

    return Completion(
        content=content or _EMPTY_RESPONSE,
        usage=UsageInfo(total_tokens=total_tokens),
    )


class OpenAICompatProvider(AIProvider):
    """Chat Completions provider using httpx.AsyncClient.

    Args:
        api_key: Bearer credential for the provider.
        base_url: Provider base URL, e.g. "https://api.openai.com/v1".
        timeout_s: Per-request timeout in seconds.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
        backoff_s: Delay before the retry attempt.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout_s: float = _DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
        backoff_s: float = _BACKOFF_S,
    ) -> None:
        self._backoff_s = backoff_s
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            timeout=timeout_s,
            transport=transport,
        )

    async def complete(
        self,
        *,
        messages: list[ConversationMessage],
        model_config: ModelConfig,
    ) -> Completion:
        """Posts the prompt and returns the completion.

        Args:
            messages: The assembled prompt, system message first.
            model_config: Tier configuration for the request body.

        Returns:
            The completion text and token usage.

        Raises:
            ProviderError: On transport failure, non-2xx status or a
                malformed body, after the last retry.
        """
        body = {
            "model": model_config.name,
            "messages": [m.model_dump() for m in messages],
            "max_tokens": model_config.max_tokens,
            "temperature": model_config.temperature,
        }

        for attempt in range(_MAX_RETRIES + 1):
            if attempt > 0:
                logger.warning(
                    "AI provider retry %d/%d after %.1fs backoff",
                    attempt,
                    _MAX_RETRIES,
                    self._backoff_s,
                )
                await asyncio.sleep(self._backoff_s)
            try:
                return await self._post_once(body)
            except ProviderError as exc:
                if not exc.retryable or attempt == _MAX_RETRIES:
                    raise

        raise RuntimeError("Unreachable")  # pragma: no cover

    async def _post_once(self, body: dict[str, Any]) -> Completion:
        try:
            response = await self._client.post("/chat/completions", json=body)
        except httpx.TimeoutException as exc:
            raise ProviderError(f"AI service timed out: {exc}", retryable=True) from exc
        except httpx.TransportError as exc:
            raise ProviderError(f"AI service unreachable: {exc}", retryable=True) from exc

        if response.is_error:
            raise ProviderError(
                f"AI service error: {response.status_code}",
                status_code=response.status_code,
                retryable=_is_retryable_status(response.status_code),
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Malformed completion body: not JSON") from exc

        return _parse_completion(payload)

    async def aclose(self) -> None:
        """Closes the underlying HTTP client."""
        await self._client.aclose()
