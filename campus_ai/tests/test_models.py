"""Tests for campus_ai.models — tier registry and tier selection."""

import dataclasses

import pytest

from campus_ai.models import (
    GPT_35_TURBO,
    GPT_4O,
    GPT_4O_MINI,
    TIER_MAP,
    ModelConfig,
    ModelTier,
    TaskComplexity,
    UserMode,
    resolve_tier,
    select_tier,
)


class TestModelConstants:
    """Tests for module-level model ID constants."""

    def test_cheap_model_value(self) -> None:
        assert GPT_35_TURBO == "gpt-3.5-turbo"

    def test_balanced_model_value(self) -> None:
        assert GPT_4O_MINI == "gpt-4o-mini"

    def test_smart_model_value(self) -> None:
        assert GPT_4O == "gpt-4o"


class TestTierMap:
    """Tests for TIER_MAP presets."""

    def test_has_exactly_three_tiers(self) -> None:
        assert set(TIER_MAP) == {ModelTier.CHEAP, ModelTier.BALANCED, ModelTier.SMART}

    def test_cheap_preset(self) -> None:
        assert TIER_MAP[ModelTier.CHEAP] == ModelConfig(
            name="gpt-3.5-turbo", max_tokens=500, temperature=0.7, cost_per_million_tokens=0.50
        )

    def test_balanced_preset(self) -> None:
        assert TIER_MAP[ModelTier.BALANCED] == ModelConfig(
            name="gpt-4o-mini", max_tokens=800, temperature=0.7, cost_per_million_tokens=0.15
        )

    def test_smart_preset(self) -> None:
        assert TIER_MAP[ModelTier.SMART] == ModelConfig(
            name="gpt-4o", max_tokens=1500, temperature=0.6, cost_per_million_tokens=2.50
        )

    def test_model_config_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            TIER_MAP[ModelTier.CHEAP].max_tokens = 1  # type: ignore[misc]


class TestResolveTier:
    """resolve_tier() accepts enum members and plain strings."""

    def test_resolves_enum(self) -> None:
        assert resolve_tier(ModelTier.SMART).name == "gpt-4o"

    def test_resolves_string(self) -> None:
        assert resolve_tier("balanced").name == "gpt-4o-mini"

    def test_unknown_tier_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            resolve_tier("premium")


class TestSelectTier:
    """select_tier() — explicit modes win, balanced defers to complexity."""

    @pytest.mark.parametrize("complexity", list(TaskComplexity))
    def test_fast_mode_always_cheap(self, complexity: TaskComplexity) -> None:
        assert select_tier(complexity, UserMode.FAST) == ModelTier.CHEAP

    @pytest.mark.parametrize("complexity", list(TaskComplexity))
    def test_smart_mode_always_smart(self, complexity: TaskComplexity) -> None:
        assert select_tier(complexity, UserMode.SMART) == ModelTier.SMART

    @pytest.mark.parametrize(
        ("complexity", "expected"),
        [
            (TaskComplexity.SIMPLE, ModelTier.CHEAP),
            (TaskComplexity.MODERATE, ModelTier.BALANCED),
            (TaskComplexity.COMPLEX, ModelTier.SMART),
        ],
    )
    def test_balanced_mode_follows_complexity(
        self, complexity: TaskComplexity, expected: ModelTier
    ) -> None:
        assert select_tier(complexity, UserMode.BALANCED) == expected

    def test_no_mode_behaves_like_balanced(self) -> None:
        assert select_tier(TaskComplexity.MODERATE, None) == ModelTier.BALANCED
