"""Tests for campus_ai.ai.providers.mock — MockProvider contract verification."""

import pytest

from campus_ai.ai.providers.base import AIProvider, Completion, ProviderError, UsageInfo
from campus_ai.ai.providers.mock import MockProvider
from campus_ai.models import TIER_MAP, ModelTier
from campus_ai.schemas import ConversationMessage

_CONFIG = TIER_MAP[ModelTier.BALANCED]
_MESSAGES = [
    ConversationMessage(role="system", content="You are a test."),
    ConversationMessage(role="user", content="Hello"),
]


class TestABCContract:
    """MockProvider is a proper AIProvider subclass."""

    def test_isinstance(self) -> None:
        assert isinstance(MockProvider(), AIProvider)


class TestComplete:
    @pytest.mark.asyncio
    async def test_default_response(self) -> None:
        result = await MockProvider().complete(messages=_MESSAGES, model_config=_CONFIG)
        assert result == Completion(content="Hello from MockProvider", usage=UsageInfo(total_tokens=15))

    @pytest.mark.asyncio
    async def test_custom_response_and_usage(self) -> None:
        provider = MockProvider(response="Custom", usage=UsageInfo(total_tokens=99))
        result = await provider.complete(messages=_MESSAGES, model_config=_CONFIG)
        assert result.content == "Custom"
        assert result.usage.total_tokens == 99

    @pytest.mark.asyncio
    async def test_records_calls(self) -> None:
        provider = MockProvider()
        await provider.complete(messages=_MESSAGES, model_config=_CONFIG)
        assert len(provider.calls) == 1
        assert provider.calls[0].messages == _MESSAGES
        assert provider.calls[0].model_config is _CONFIG

    @pytest.mark.asyncio
    async def test_error_raised_after_recording(self) -> None:
        provider = MockProvider(error=ProviderError("boom"))
        with pytest.raises(ProviderError, match="boom"):
            await provider.complete(messages=_MESSAGES, model_config=_CONFIG)
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_aclose_is_noop(self) -> None:
        await MockProvider().aclose()
