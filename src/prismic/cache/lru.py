"""Bounded in-memory response cache with least-recently-used eviction.

Everything is stored in memory. Published API content never changes under a
given ref, so entries never go stale; the cache is bounded only to keep memory
in check, and is cleared wholesale when the API's master ref advances (see
:meth:`~prismic.api.Api.refresh`).

Recency is the insertion order of an :class:`~collections.OrderedDict`: the
first key is the least recently used one and is evicted first.

The cache does no locking. Callers sharing one instance between threads
must guard ``get``, ``store`` and ``set_capacity`` themselves.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Callable, Optional

from prismic.exceptions import InvalidCapacityError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
"""Number of entries kept by a cache created without an explicit capacity."""


class LruCache:
    """Capacity-bounded key/value store with get-or-compute semantics.

    Keys are opaque strings (in practice full request URLs); values are
    already-parsed API responses, so a hit never re-parses anything.

    Args:
        capacity: Maximum number of entries. Must be at least 1.

    Raises:
        InvalidCapacityError: If *capacity* is below 1.

    Example::

        cache = LruCache(capacity=2)
        cache.get("https://repo/api/documents/search?ref=x", fetch_and_parse)
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise InvalidCapacityError(capacity)
        self._capacity = capacity
        self._entries: OrderedDict[str, Any] = OrderedDict()

    @property
    def capacity(self) -> int:
        """The maximum number of entries."""
        return self._capacity

    @capacity.setter
    def capacity(self, capacity: int) -> None:
        self.set_capacity(capacity)

    def store(self, key: str, value: Any) -> Any:
        """Insert or overwrite *key*, making it the most recently used entry.

        Evicts least-recently-used entries while the cache is over capacity.

        Returns:
            The stored *value*.
        """
        self._entries.pop(key, None)
        self._entries[key] = value
        self._evict()
        return value

    def get(self, key: str, producer: Optional[Callable[[str], Any]] = None) -> Any:
        """Return the value for *key*, computing and storing it on a miss.

        On a hit the entry becomes the most recently used one and *producer*
        is not called. On a miss ``producer(key)`` is called exactly once and
        its result is stored.

        Args:
            key: The cache key.
            producer: Called with *key* to compute a missing value.

        Returns:
            The cached or freshly produced value.

        Raises:
            KeyError: On a miss when no *producer* was given.
        """
        if key in self._entries:
            self._entries.move_to_end(key)
            logger.debug("Cache hit: %s", key)
            return self._entries[key]

        if producer is None:
            raise KeyError(key)

        logger.debug("Cache miss: %s", key)
        return self.store(key, producer(key))

    def contains(self, key: str) -> bool:
        """Return whether *key* is cached, without touching its recency."""
        return key in self._entries

    def set_capacity(self, capacity: int) -> None:
        """Change the capacity, evicting least-recently-used entries if needed.

        Raises:
            InvalidCapacityError: If *capacity* is below 1.
        """
        if capacity < 1:
            raise InvalidCapacityError(capacity)
        self._capacity = capacity
        self._evict()

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def size(self) -> int:
        """Return the number of entries."""
        return len(self._entries)

    def keys(self) -> list[str]:
        """Return the keys, least recently used first (for debugging)."""
        return list(self._entries)

    def _evict(self) -> None:
        while len(self._entries) > self._capacity:
            key, _ = self._entries.popitem(last=False)
            logger.debug("Cache eviction: %s", key)

    __setitem__ = store
    __contains__ = contains
    __len__ = size

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __repr__(self) -> str:
        return f"LruCache(capacity={self._capacity}, size={len(self._entries)})"


# --- Process-wide default instance ---

_default_cache: Optional[LruCache] = None


def get_default_cache() -> LruCache:
    """Return the process-wide cache shared by API clients, creating it on first use."""
    global _default_cache
    if _default_cache is None:
        _default_cache = LruCache()
    return _default_cache


def set_default_cache(cache: LruCache) -> None:
    """Replace the process-wide cache."""
    global _default_cache
    _default_cache = cache


def reset_default_cache() -> None:
    """Drop the process-wide cache so that the next call creates a fresh one."""
    global _default_cache
    _default_cache = None
