"""Filter rule cache with TTL support.

Provides in-memory caching of filter rule lists per storage source and view.
Thread-safe implementation for concurrent access.
"""

import threading
import time
from dataclasses import dataclass
from typing import Union

from filegate.domain.entities.filter_rule import FilterMode, FilterRule

# View name for the unfiltered rule list of a storage source
ALL_RULES = "all"

RuleView = Union[FilterMode, str]


@dataclass
class CacheEntry:
    """Cache entry with TTL support.

    Attributes:
        rules: The cached rule list (stored as a tuple so it cannot be mutated).
        expires_at: Unix timestamp when this entry expires.
    """

    rules: tuple[FilterRule, ...]
    expires_at: float


class FilterRuleCache:
    """Thread-safe TTL-based cache for filter rule lists.

    Cache keys are (storage_id, view) where view is ALL_RULES or a FilterMode.
    A TTL of 0 disables caching.

    Each storage source has a generation counter that invalidate_storage
    bumps. A reader captures the generation before querying the database and
    passes it to set; a write carrying an older generation is dropped, so a
    read racing a replace cannot re-cache the replaced rules.
    """

    def __init__(self, ttl_seconds: int = 300):
        """Initialize the cache.

        Args:
            ttl_seconds: Time-to-live for cache entries in seconds (default: 5 minutes).
        """
        self.ttl_seconds = ttl_seconds
        self._cache: dict[tuple[int, str], CacheEntry] = {}
        self._generations: dict[int, int] = {}
        self._epoch = 0
        self._lock = threading.RLock()

    @staticmethod
    def _make_key(storage_id: int, view: RuleView) -> tuple[int, str]:
        if isinstance(view, FilterMode):
            view = view.value
        return (storage_id, view)

    def get(self, storage_id: int, view: RuleView) -> list[FilterRule] | None:
        """Get a cached rule list.

        Args:
            storage_id: Storage source ID.
            view: ALL_RULES or a FilterMode.

        Returns:
            A fresh list of the cached rules if found and not expired, None otherwise.
        """
        key = self._make_key(storage_id, view)

        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if time.time() > entry.expires_at:
                del self._cache[key]
                return None

            return list(entry.rules)

    def generation(self, storage_id: int) -> int:
        """Get the current invalidation generation of a storage source."""
        with self._lock:
            return self._current_generation(storage_id)

    def _current_generation(self, storage_id: int) -> int:
        # Both counters only grow, so any invalidation changes the sum
        return self._epoch + self._generations.get(storage_id, 0)

    def set(
        self,
        storage_id: int,
        view: RuleView,
        rules: list[FilterRule],
        generation: int | None = None,
    ) -> bool:
        """Store a rule list in the cache.

        Args:
            storage_id: Storage source ID.
            view: ALL_RULES or a FilterMode.
            rules: Rules to cache.
            generation: Generation captured before the rules were loaded.
                The write is skipped if the storage source was invalidated since.

        Returns:
            True if the rules were cached.
        """
        if self.ttl_seconds <= 0:
            return False

        key = self._make_key(storage_id, view)
        expires_at = time.time() + self.ttl_seconds

        with self._lock:
            if generation is not None and generation != self._current_generation(storage_id):
                return False
            self._cache[key] = CacheEntry(rules=tuple(rules), expires_at=expires_at)
            return True

    def invalidate_storage(self, storage_id: int) -> int:
        """Invalidate every view cached for a storage source.

        Args:
            storage_id: Storage source ID to invalidate.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            self._generations[storage_id] = self._generations.get(storage_id, 0) + 1
            keys_to_delete = [key for key in self._cache if key[0] == storage_id]
            for key in keys_to_delete:
                del self._cache[key]
            return len(keys_to_delete)

    def invalidate_all(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._epoch += 1
            self._cache.clear()

    def cleanup_expired(self) -> int:
        """Remove all expired entries from cache.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            current_time = time.time()
            keys_to_delete = [
                key for key, entry in self._cache.items()
                if current_time > entry.expires_at
            ]

            for key in keys_to_delete:
                del self._cache[key]

            return len(keys_to_delete)

    def size(self) -> int:
        """Get current cache size."""
        with self._lock:
            return len(self._cache)
