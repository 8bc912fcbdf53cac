"""Raster drawing surface and per-track rendering."""

from .surface import DrawingSurface
from .track_renderer import TrackRenderer, BASE_COLORS

__all__ = ["DrawingSurface", "TrackRenderer", "BASE_COLORS"]
