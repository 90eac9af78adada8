"""Structured usage logging for assistant answers.

Emits one structured log line per answer with all fields needed for
cost analysis. Machine-parseable via the ``extra`` dict — standard JSON
log formatters (e.g., python-json-logger) pick these up automatically.

Logger name: ``campus_ai.ai.usage``

Cache hits, outline lookups and canned fallbacks are logged too (with
zero tokens), so hit rates can be read off the same stream.
"""

import logging

logger = logging.getLogger("campus_ai.ai.usage")


def log_ai_call(
    *,
    domain: str,
    model: str,
    tier: str | None,
    complexity: str | None,
    tokens_used: int,
    estimated_cost: float,
    latency_ms: float,
    cached: bool,
) -> None:
    """Emits a structured INFO log for a completed assistant answer.

    All fields are passed as ``extra`` for machine-parseable output.
    The log message itself is a human-readable summary.

    Args:
        domain: Chat domain ("course", "general", "academic").
        model: Model name that produced the answer (or "database_lookup").
        tier: Resolved ModelTier value, None when no tier was selected.
        complexity: Classified TaskComplexity value, None when skipped.
        tokens_used: Total tokens billed (0 when nothing was billed).
        estimated_cost: Estimated USD cost (0.0 when nothing was billed).
        latency_ms: Wall-clock duration of the answer in milliseconds.
        cached: Whether the answer came from the response cache.
    """
    logger.info(
        "AI answer: %s %s tier=%s complexity=%s tokens=%d cost=$%.6f latency=%.0fms cached=%s",
        domain,
        model,
        tier,
        complexity,
        tokens_used,
        estimated_cost,
        latency_ms,
        cached,
        extra={
            "domain": domain,
            "model": model,
            "tier": tier,
            "complexity": complexity,
            "tokens_used": tokens_used,
            "estimated_cost": estimated_cost,
            "latency_ms": latency_ms,
            "cached": cached,
        },
    )
