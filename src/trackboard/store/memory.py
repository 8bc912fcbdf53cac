"""InMemoryAnnotationStore: records held in a pandas DataFrame."""

from __future__ import annotations

import logging
import pathlib
from typing import Iterable

import pandas as pd

from ..core.errors import RecordNotFound
from ..core.models import AnnotationRecord
from .base import AnnotationStore

logger = logging.getLogger(__name__)

_COLUMNS = ["id", "subseq", "exon_boundaries", "gaps", "length", "genetree"]


class InMemoryAnnotationStore(AnnotationStore):
    """Annotation store backed by a DataFrame indexed by track name.

    Rows follow the document layout of the original annotation collection
    (``id``, ``subseq``, ``exon_boundaries``, ``gaps``, ``length``,
    ``genetree``). Records are materialized on lookup; the DataFrame itself
    is never mutated after construction, so lookups need no locking.

    Usage::

        store = InMemoryAnnotationStore.from_json_lines("annot.jsonl")
        record = store.lookup_by_track_name("ENSAPLG00000013960")
    """

    def __init__(self, frame: pd.DataFrame) -> None:
        frame = frame.reindex(columns=_COLUMNS).copy()
        if frame["id"].isna().any():
            raise ValueError("Every store document needs an 'id'.")
        if frame["id"].duplicated().any():
            dupes = frame.loc[frame["id"].duplicated(), "id"].unique().tolist()
            raise ValueError(f"Track ids must be unique. Found duplicates: {dupes[:5]}")
        frame = frame.set_index("id", drop=False)
        # Stored length wins; fall back to the sequence length.
        seq_len = frame["subseq"].map(lambda s: len(s) if isinstance(s, str) else 0)
        frame["length"] = pd.to_numeric(frame["length"]).fillna(seq_len).astype("int64")
        self._frame = frame

    @classmethod
    def from_documents(cls, documents: Iterable[dict]) -> InMemoryAnnotationStore:
        """Build a store from an iterable of store documents."""
        return cls(pd.DataFrame.from_records(list(documents), columns=_COLUMNS))

    @classmethod
    def from_records(cls, records: Iterable[AnnotationRecord]) -> InMemoryAnnotationStore:
        """Build a store from already constructed records."""
        return cls.from_documents(
            {
                "id": r.id,
                "subseq": r.sequence,
                "exon_boundaries": r.exon_boundaries.tolist(),
                "gaps": [g.to_dict() for g in r.gaps],
                "length": r.length,
                "genetree": r.group,
            }
            for r in records
        )

    @classmethod
    def from_json_lines(cls, path: str | pathlib.Path) -> InMemoryAnnotationStore:
        """Load one JSON document per line."""
        path = pathlib.Path(path)
        frame = pd.read_json(path, lines=True, dtype=False)
        logger.info("Loaded %d annotation records from %s", len(frame), path)
        return cls(frame)

    def __len__(self) -> int:
        return len(self._frame)

    def __contains__(self, name: object) -> bool:
        return name in self._frame.index

    def lookup_by_track_name(self, name: str) -> AnnotationRecord:
        if name not in self._frame.index:
            raise RecordNotFound(name)
        return AnnotationRecord.from_document(self._frame.loc[name].to_dict())

    def sequence_length(self, names: Iterable[str]) -> int:
        names = list(names)
        missing = [n for n in names if n not in self._frame.index]
        if missing:
            raise RecordNotFound(missing[0])
        if not names:
            return 0
        return int(self._frame.loc[names, "length"].max())

    def track_names(self, group: str | None = None) -> list[str]:
        frame = self._frame
        if group is not None:
            frame = frame[frame["genetree"] == group]
        return frame.index.tolist()
