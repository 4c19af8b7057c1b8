"""Thread-safe TTL cache for grounding results."""

import hashlib
import threading
import time
from typing import Any


class InMemoryTTLCache:
    """
    Thread-safe in-memory cache with TTL (Time To Live).

    Keys are the sha256 of the normalized prompt (first 16 hex chars).
    Expiry uses a monotonic clock so wall-clock changes cannot resurrect entries.
    """

    def __init__(self, ttl_seconds: int, max_entries: int = 256):
        """
        Args:
            ttl_seconds: Time to live in seconds for cached entries
            max_entries: Oldest entry is evicted once this many are stored
        """
        self._cache: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._ttl = float(ttl_seconds)
        self._max_entries = max_entries

    def _make_key(self, text: str) -> str:
        normalized = " ".join(text.lower().split())
        return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:16]

    def get(self, text: str) -> Any | None:
        """
        Get cached value if present and not expired.

        Args:
            text: Prompt used as cache key

        Returns:
            Cached value, or None
        """
        key = self._make_key(text)
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            value, expiry = entry
            if time.monotonic() < expiry:
                return value
            del self._cache[key]
            return None

    def set(self, text: str, value: Any):
        """
        Store value with TTL.

        Args:
            text: Prompt used as cache key
            value: Value to cache
        """
        if self._ttl <= 0:
            return
        key = self._make_key(text)
        with self._lock:
            if key not in self._cache and len(self._cache) >= self._max_entries:
                oldest = next(iter(self._cache))
                del self._cache[oldest]
            self._cache[key] = (value, time.monotonic() + self._ttl)

    def clear(self):
        """Clear all cached entries."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
