"""Capacity-bounded key/value cache used in front of the player store."""

from __future__ import annotations

import logging
from typing import Dict, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class BoundedCache(Generic[K, V]):
    """Insertion-ordered cache that evicts the oldest entry when full.

    Reads do not promote entries, so this is not an LRU. Overwriting a key
    keeps its original position. Access is not locked; callers that share an
    instance across threads must serialize it themselves.
    """

    def __init__(self, capacity: int):
        self._capacity = capacity
        self._entries: Dict[K, V] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: K) -> Optional[V]:
        return self._entries.get(key)

    def put(self, key: K, value: V) -> V:
        if key not in self._entries and self._entries and len(self._entries) >= self._capacity:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Cache full (capacity=%d); evicted key %r", self._capacity, oldest)
        self._entries[key] = value
        logger.debug("Cached key %r (%d entries)", key, len(self._entries))
        return value

    def remove(self, key: K) -> Optional[V]:
        value = self._entries.pop(key, None)
        if value is not None:
            logger.debug("Removed key %r from cache", key)
        return value

    def clear(self) -> None:
        logger.debug("Clearing cache (%d entries)", len(self._entries))
        self._entries.clear()


__all__ = ["BoundedCache"]
