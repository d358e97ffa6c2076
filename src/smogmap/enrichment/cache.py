"""In-memory TTL cache for city descriptions."""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable

from .port import EnrichmentEntry


class DescriptionCache:
    """Maps canonical city names to enrichment entries for a fixed TTL.

    Expired entries are evicted when they are looked up. The cache is
    unbounded unless max_size is given, in which case the least recently
    used entry is dropped once the bound is exceeded.

    Each process has its own cache; concurrent fills of the same key store
    equivalent values.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600,
        max_size: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be positive")
        self._ttl = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._store: OrderedDict[str, tuple[float, EnrichmentEntry]] = OrderedDict()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> EnrichmentEntry | None:
        item = self._store.get(key)
        if item is None:
            return None

        expires_at, value = item
        if self._clock() >= expires_at:
            del self._store[key]
            return None

        self._store.move_to_end(key)
        return value

    def set(self, key: str, value: EnrichmentEntry) -> None:
        self._store[key] = (self._clock() + self._ttl, value)
        self._store.move_to_end(key)
        if self._max_size is not None:
            while len(self._store) > self._max_size:
                self._store.popitem(last=False)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        """Number of live entries; expired ones are evicted first."""
        self.prune()
        return len(self._store)

    def prune(self) -> int:
        """Evict every expired entry and return how many were dropped."""
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._store.items() if now >= expires_at]
        for key in expired:
            del self._store[key]
        return len(expired)
