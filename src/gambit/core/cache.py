"""Memoisation store for rule queries keyed by structural board snapshots."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

_LOGGER = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(slots=True, frozen=True)
class CacheInfo:
    """Hit/miss counters of a :class:`StructuralCache`."""

    hits: int
    misses: int
    size: int


class StructuralCache(Generic[V]):
    """Unbounded, thread-safe ``key -> value`` store.

    Keys must be deep, hashable snapshots (see :meth:`Board.snapshot`), never
    object identities; dict lookup hashes first and confirms with a full
    equality check.  Stored values must be immutable.
    """

    __slots__ = ("_entries", "_lock", "_hits", "_misses")

    def __init__(self) -> None:
        self._entries: dict[Hashable, V] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get_or_create(self, key: Hashable, factory: Callable[[], V]) -> V:
        with self._lock:
            try:
                value = self._entries[key]
            except KeyError:
                pass
            else:
                self._hits += 1
                return value

        # Compute outside the lock; factories may recurse into the cache.
        value = factory()
        with self._lock:
            self._misses += 1
            return self._entries.setdefault(key, value)

    def clear(self) -> None:
        with self._lock:
            _LOGGER.debug(
                "Dropping %d cached entries (%d hits, %d misses)",
                len(self._entries),
                self._hits,
                self._misses,
            )
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(self._hits, self._misses, len(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
