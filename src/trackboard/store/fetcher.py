"""AnnotationFetcher: cache-first retrieval of one track's record."""

from __future__ import annotations

import logging
import time

from ..core.errors import FetchFailed, StoreUnavailable
from ..core.models import AnnotationRecord
from .base import AnnotationStore
from .cache import RecordCache

logger = logging.getLogger(__name__)


class AnnotationFetcher:
    """Fetches records by track name, consulting a RecordCache first.

    There is no single-flight gate: two threads missing the cache for the
    same name at the same time will both query the store, and the cache
    keeps whichever record lands first.
    """

    def __init__(self, store: AnnotationStore, cache: RecordCache | None = None) -> None:
        self._store = store
        self._cache = cache

    @property
    def store(self) -> AnnotationStore:
        return self._store

    @property
    def cache(self) -> RecordCache | None:
        return self._cache

    def fetch(self, name: str) -> AnnotationRecord:
        """Return the record for ``name``.

        Raises RecordNotFound when the store has no such track and
        StoreUnavailable when the store cannot be reached.
        """
        if self._cache is not None:
            record = self._cache.get(name)
            if record is not None:
                logger.debug("Cache hit for track %s", name)
                return record

        t0 = time.perf_counter()
        try:
            record = self._store.lookup_by_track_name(name)
        except FetchFailed:
            raise
        except OSError as exc:
            # ConnectionError and socket timeouts are OSErrors
            raise StoreUnavailable(name, str(exc)) from exc
        logger.debug(
            "Fetched track %s from store in %.1f ms",
            name, (time.perf_counter() - t0) * 1000,
        )

        if self._cache is not None:
            record = self._cache.put(name, record)
        return record
