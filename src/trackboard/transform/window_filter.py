"""Restrict an annotation record to the elements overlapping a window."""

from __future__ import annotations

import numpy as np

from ..core.models import AnnotationRecord, FilteredRecord, GenomicWindow


def gap_overlap_mask(
    starts: np.ndarray,
    ends: np.ndarray,
    window: GenomicWindow,
) -> np.ndarray:
    """Boolean mask of gaps sharing interior with the window.

    A gap overlaps when ``start < window.end and end > window.start``. This
    covers gaps starting inside, ending inside, lying inside, or straddling
    the whole window. Gaps that merely touch an edge are excluded.
    """
    return (starts < window.end) & (ends > window.start)


def boundary_mask(boundaries: np.ndarray, window: GenomicWindow) -> np.ndarray:
    """Boolean mask of boundaries strictly inside the window.

    Boundaries lying exactly on ``window.start`` or ``window.end`` are dropped.
    """
    return (boundaries > window.start) & (boundaries < window.end)


def extract_subsequence(sequence: str, window: GenomicWindow) -> str:
    """Slice ``[window.start, window.end)`` out of the stored sequence.

    Offsets are absolute into ``sequence``. When the sequence is shorter than
    ``window.end`` (or the window starts before 0) it runs past the known
    data and the result is empty.
    """
    if window.start < 0 or len(sequence) < window.end:
        return ""
    return sequence[int(window.start):int(window.end)]


def filter_record(record: AnnotationRecord, window: GenomicWindow) -> FilteredRecord:
    """Return the subset of ``record`` visible in ``window``."""
    if record.gaps:
        keep = gap_overlap_mask(record.gap_starts, record.gap_ends, window)
        gaps = tuple(g for g, k in zip(record.gaps, keep) if k)
    else:
        gaps = ()
    boundaries = record.exon_boundaries
    return FilteredRecord(
        id=record.id,
        subsequence=extract_subsequence(record.sequence, window),
        exon_boundaries=boundaries[boundary_mask(boundaries, window)],
        gaps=gaps,
        window=window,
    )
