"""Swappable memoization stores for normalization results."""

from __future__ import annotations

import threading
from collections.abc import Hashable
from typing import Protocol

CacheKey = tuple[str, Hashable, str]
CacheValue = str | tuple[str, ...]


class TokenCache(Protocol):
    """Store for memoized normalization output keyed by (operation, options, raw text)."""

    def get(self, key: CacheKey) -> CacheValue | None: ...

    def put(self, key: CacheKey, value: CacheValue) -> None: ...


class NullTokenCache:
    """Cache that never stores anything."""

    def get(self, key: CacheKey) -> CacheValue | None:
        return None

    def put(self, key: CacheKey, value: CacheValue) -> None:
        return None


class InMemoryTokenCache:
    """Bounded, thread-safe dictionary cache owned by one matching run."""

    def __init__(self, max_entries: int = 50_000) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be greater than zero.")
        self._max_entries = max_entries
        self._entries: dict[CacheKey, CacheValue] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> CacheValue | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: CacheKey, value: CacheValue) -> None:
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_entries:
                # Evict the oldest insertion.
                self._entries.pop(next(iter(self._entries)))
            self._entries[key] = value

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
