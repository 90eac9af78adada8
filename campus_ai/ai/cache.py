"""In-process response cache for repeated, student-independent questions.

Bounded TTL map: entries expire lazily on read and the oldest-inserted
key is dropped when the store is full. Eviction follows insertion order,
not access recency — a hit does not refresh an entry's position.

The cache is a plain object created once at startup and handed to the
assistant; this module keeps no module-level state. The clock is injected
so tests can move time without sleeping.

Everything here is synchronous. On the asyncio loop a get-check-set
sequence never yields, so no lock is needed.

Usage:
    cache = ResponseCache(ttl_ms=1_800_000, max_entries=1000)
    key = make_cache_key("course", "CSC101", "What is the syllabus?")
    entry = cache.get(key)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_KEY_PREFIX = "ai_cache"
_NORMALIZED_LENGTH = 50
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

DEFAULT_TTL_MS = 30 * 60 * 1000
DEFAULT_MAX_ENTRIES = 1000


def _wall_clock_ms() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class CacheEntry:
    """A cached assistant answer."""

    content: str
    created_at: float  # milliseconds, same clock as the owning cache
    model: str


# ---------------------------------------------------------------------------
# Key derivation
# ---------------------------------------------------------------------------


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _utf16_units(text: str) -> list[int]:
    encoded = text.encode("utf-16-le", "surrogatepass")
    return [encoded[i] | (encoded[i + 1] << 8) for i in range(0, len(encoded), 2)]


def _hash_units(units: list[int]) -> str:
    h = 0
    for code in units:
        h = ((h << 5) - h + code) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return _to_base36(abs(h))


def hash_message(text: str) -> str:
    """Cheap 32-bit rolling hash of a string, rendered in base 36.

    h = h * 31 + code for every UTF-16 code unit, wrapped to a signed
    32-bit integer after each step; the absolute value of the result is
    rendered in lowercase base 36.
    """
    return _hash_units(_utf16_units(text))


def make_cache_key(domain: str, context_id: str, message: str) -> str:
    """Builds the cache key for a question.

    Args:
        domain: Chat domain tag ("course", "general").
        context_id: Scope within the domain (course code, or a fixed
            literal for general questions).
        message: The raw question; lowercased, trimmed and cut to its
            first 50 UTF-16 code units before hashing. A character outside
            the Basic Multilingual Plane counts as two units and may be
            split at the boundary.

    Returns:
        A key of the form "ai_cache:{domain}:{context_id}:{hash}".
    """
    units = _utf16_units(message.lower().strip())[:_NORMALIZED_LENGTH]
    return f"{_KEY_PREFIX}:{domain}:{context_id}:{_hash_units(units)}"


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ResponseCache:
    """Bounded, TTL-aware map of cache key → CacheEntry.

    Args:
        ttl_ms: Maximum entry age in milliseconds. An entry older than
            this is deleted by the read that finds it.
        max_entries: Maximum number of live entries.
        clock: Returns the current time in milliseconds. Defaults to the
            wall clock.
    """

    def __init__(
        self,
        ttl_ms: float = DEFAULT_TTL_MS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.ttl_ms = ttl_ms
        self.max_entries = max_entries
        self._clock = clock or _wall_clock_ms
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> CacheEntry | None:
        """Returns the live entry for key, or None.

        An expired entry is removed before None is returned.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.created_at > self.ttl_ms:
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None
        return entry

    def set(self, key: str, entry: CacheEntry) -> None:
        """Inserts or overwrites the entry for key.

        Adding a new key to a full store first drops the oldest-inserted
        key. Overwriting an existing key keeps its existing position.
        """
        if key not in self._entries and len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Cache full (%d entries), evicted %s", self.max_entries, oldest)
        self._entries[key] = entry

    def put(self, key: str, *, content: str, model: str) -> CacheEntry:
        """Stores an answer stamped with the cache's current time."""
        entry = CacheEntry(content=content, created_at=self._clock(), model=model)
        self.set(key, entry)
        return entry

    def clear(self) -> None:
        """Drops every entry."""
        self._entries.clear()
