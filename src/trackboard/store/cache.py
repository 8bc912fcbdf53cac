"""RecordCache: process-wide memo of fetched annotation records."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from ..core.models import AnnotationRecord


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
        }


class RecordCache:
    """Write-once, read-many cache of records keyed by track name.

    Entries are never updated in place: when two fetches race to insert the
    same key the first insert is kept and returned to both. Records for one
    key are content-identical, so which writer wins does not matter.

    ``max_size`` bounds the number of entries (least recently used entries
    are evicted first, ``0`` means unbounded). ``ttl`` expires entries that
    many seconds after insertion (``None`` disables expiry). ``clock`` is
    injectable for tests.
    """

    def __init__(
        self,
        max_size: int = 0,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {max_size}.")
        if ttl is not None and ttl <= 0:
            raise ValueError(f"ttl must be positive or None, got {ttl}.")
        self._max_size = max_size
        self._ttl = ttl
        self._clock = clock
        # {name: (inserted_at, record)}
        self._entries: OrderedDict[str, tuple[float, AnnotationRecord]] = OrderedDict()
        self._lock = threading.Lock()
        self.stats = CacheStats()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def ttl(self) -> float | None:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            entry = self._entries.get(name)
            return entry is not None and not self._expired(entry[0])

    def _expired(self, inserted_at: float) -> bool:
        return self._ttl is not None and self._clock() - inserted_at >= self._ttl

    def get(self, name: str) -> AnnotationRecord | None:
        """Return the cached record for ``name`` or None."""
        with self._lock:
            entry = self._entries.get(name)
            if entry is not None and self._expired(entry[0]):
                del self._entries[name]
                self.stats.expirations += 1
                entry = None
            if entry is None:
                self.stats.misses += 1
                return None
            self._entries.move_to_end(name)
            self.stats.hits += 1
            return entry[1]

    def put(self, name: str, record: AnnotationRecord) -> AnnotationRecord:
        """Insert ``record`` unless a live entry exists; return the cached one."""
        with self._lock:
            entry = self._entries.get(name)
            if entry is not None and not self._expired(entry[0]):
                self._entries.move_to_end(name)
                return entry[1]
            self._entries[name] = (self._clock(), record)
            self._entries.move_to_end(name)
            if self._max_size:
                while len(self._entries) > self._max_size:
                    self._entries.popitem(last=False)
                    self.stats.evictions += 1
            return record

    def invalidate(self, name: str) -> bool:
        """Drop ``name`` from the cache. Returns whether it was present."""
        with self._lock:
            return self._entries.pop(name, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
