"""Model tier registry — single source of truth for AI model identifiers.

Every AI call made by the assistant resolves its model through this module.
The rest of the codebase imports tier and mode names from here — no raw
model ID strings anywhere else.

Three-layer abstraction:
  Layer 1: The caller picks a UserMode ("fast", "balanced", "smart"), or
           lets the classifier's TaskComplexity decide
  Layer 2: select_tier() resolves (complexity, mode) → ModelTier
  Layer 3: TIER_MAP resolves ModelTier → ModelConfig (model, limits, cost)

To swap a model: change a TIER_MAP value below. One line changed,
every course chat speaks to a new mind.
"""

from dataclasses import dataclass
from enum import StrEnum

# ---------------------------------------------------------------------------
# Model IDs (update when the provider releases new versions)
# ---------------------------------------------------------------------------

GPT_35_TURBO: str = "gpt-3.5-turbo"
GPT_4O_MINI: str = "gpt-4o-mini"
GPT_4O: str = "gpt-4o"

# Pseudo-model reported when an answer is built from catalog data alone.
DATABASE_LOOKUP: str = "database_lookup"


# ---------------------------------------------------------------------------
# Closed vocabularies
# ---------------------------------------------------------------------------


class ModelTier(StrEnum):
    """Cost/quality preset used for one completion call."""

    CHEAP = "cheap"
    BALANCED = "balanced"
    SMART = "smart"


class UserMode(StrEnum):
    """Caller-supplied override of automatic tier selection."""

    FAST = "fast"
    BALANCED = "balanced"
    SMART = "smart"


class TaskComplexity(StrEnum):
    """Heuristic reasoning depth of a single message. Derived, never stored."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


# ---------------------------------------------------------------------------
# ModelConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModelConfig:
    """Bundles all provider-facing configuration for a model tier.

    Leaf type — no project imports. Constructed in TIER_MAP below,
    consumed by providers and cost estimation via resolve_tier().
    """

    name: str                       # model identifier sent to the provider
    max_tokens: int                 # max_tokens for the completion
    temperature: float              # sampling temperature, 0..1
    cost_per_million_tokens: float  # USD, used for estimated_cost


TIER_MAP: dict[ModelTier, ModelConfig] = {
    ModelTier.CHEAP: ModelConfig(
        name=GPT_35_TURBO, max_tokens=500, temperature=0.7, cost_per_million_tokens=0.50
    ),
    ModelTier.BALANCED: ModelConfig(
        name=GPT_4O_MINI, max_tokens=800, temperature=0.7, cost_per_million_tokens=0.15
    ),
    ModelTier.SMART: ModelConfig(
        name=GPT_4O, max_tokens=1500, temperature=0.6, cost_per_million_tokens=2.50
    ),
}


def resolve_tier(tier: str) -> ModelConfig:
    """Resolves a tier name to its ModelConfig.

    Args:
        tier: Tier name ("cheap", "balanced", "smart") or a ModelTier.

    Returns:
        The ModelConfig for the given tier.

    Raises:
        KeyError: If the tier name is not found in TIER_MAP.
    """
    return TIER_MAP[tier]  # type: ignore[index]


def select_tier(complexity: TaskComplexity, user_mode: UserMode | None) -> ModelTier:
    """Picks the tier for a message.

    An explicit fast/smart mode always wins; balanced (or no mode) lets the
    complexity decide.
    """
    if user_mode == UserMode.FAST:
        return ModelTier.CHEAP
    if user_mode == UserMode.SMART:
        return ModelTier.SMART

    if complexity == TaskComplexity.SIMPLE:
        return ModelTier.CHEAP
    if complexity == TaskComplexity.COMPLEX:
        return ModelTier.SMART
    return ModelTier.BALANCED
