"""Coordinate scaling and window filtering."""

from .scaler import LinearScale, make_scale
from .window_filter import filter_record, gap_overlap_mask, boundary_mask

__all__ = [
    "LinearScale",
    "make_scale",
    "filter_record",
    "gap_overlap_mask",
    "boundary_mask",
]
