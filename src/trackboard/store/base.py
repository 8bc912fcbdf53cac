"""AnnotationStore: the interface every record backend implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..core.models import AnnotationRecord


class AnnotationStore(ABC):
    """Source of annotation records, looked up by track name.

    Implementations raise ``RecordNotFound`` for unknown names and
    ``StoreUnavailable`` when the backend cannot answer. Calls are
    synchronous and may block; they must be safe to call from several
    threads at once.
    """

    @abstractmethod
    def lookup_by_track_name(self, name: str) -> AnnotationRecord:
        """Return the record stored under ``name``."""
        ...

    @abstractmethod
    def sequence_length(self, names: Iterable[str]) -> int:
        """Maximum known sequence length over ``names`` (the "limit" query).

        Clients use it to bound the windows they request.
        """
        ...

    @abstractmethod
    def track_names(self, group: str | None = None) -> list[str]:
        """Names of all stored tracks, optionally restricted to one gene tree."""
        ...
