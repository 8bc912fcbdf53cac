"""TrackRenderer: draws one filtered track into a surface."""

from __future__ import annotations

import numpy as np

from ..core.color import RGB, WHITE
from ..core.errors import UnknownGapKind
from ..core.models import FilteredRecord, TrackSpec
from ..transform.scaler import LinearScale
from .surface import DrawingSurface


DEFAULT_GAP_COLORS = {
    "low": RGB(154, 205, 50),
    "high": RGB(0, 100, 0),
}
DEFAULT_BOUNDARY_COLOR = RGB(205, 0, 0)
DEFAULT_ZOOM_THRESHOLD = 300.0

# IGV-style nucleotide colors
BASE_COLORS = {
    "A": RGB(0, 150, 0),
    "C": RGB(0, 0, 255),
    "G": RGB(209, 113, 5),
    "T": RGB(255, 0, 0),
}
UNKNOWN_BASE_COLOR = RGB(128, 128, 128)

# Smallest base width (px) at which the letter is drawn on its block
MIN_GLYPH_WIDTH = 8.0


class TrackRenderer:
    """Draws guides, gap blocks, exon boundaries and sequence glyphs.

    Layout within a track of height ``h`` at offset ``v``:

    - upper guide at ``v + h/8``, lower guide at ``v + h - 2*(h/8)``;
    - gap blocks fill the band between the guides;
    - exon boundaries span the full height ``[v, v + h]``;
    - sequence glyphs sit below the lower guide, only when the window is
      narrower than ``zoom_threshold`` bases.

    The renderer holds no per-request state and may be shared by threads.
    """

    def __init__(
        self,
        gap_colors: dict[str, RGB] | None = None,
        boundary_color: RGB = DEFAULT_BOUNDARY_COLOR,
        zoom_threshold: float = DEFAULT_ZOOM_THRESHOLD,
    ) -> None:
        self._gap_colors = dict(gap_colors) if gap_colors is not None else dict(DEFAULT_GAP_COLORS)
        self._boundary_color = boundary_color
        self._zoom_threshold = zoom_threshold

    @classmethod
    def from_settings(cls, settings) -> TrackRenderer:
        return cls(
            gap_colors=settings.gap_colors,
            boundary_color=settings.boundary_rgb,
            zoom_threshold=settings.zoom_threshold,
        )

    @property
    def zoom_threshold(self) -> float:
        return self._zoom_threshold

    def gap_color(self, kind: str) -> RGB:
        """Fill color for a gap kind. Raises UnknownGapKind for anything else."""
        try:
            return self._gap_colors[kind]
        except KeyError:
            raise UnknownGapKind(kind, tuple(self._gap_colors)) from None

    def render(
        self,
        filtered: FilteredRecord,
        spec: TrackSpec,
        scale: LinearScale,
        surface: DrawingSurface,
    ) -> None:
        """Draw ``filtered`` onto ``surface`` at the position given by ``spec``."""
        if spec.bg_color is not None:
            surface.rect(0, spec.v_offset, surface.width, spec.bottom)
            surface.set_fill_color(spec.bg_color)
            surface.fill()
        self._draw_guides(spec, surface)
        self._draw_gaps(filtered, spec, scale, surface)
        self._draw_boundaries(filtered, spec, scale, surface)
        if filtered.window.width < self._zoom_threshold and filtered.subsequence:
            self._draw_sequence(filtered, spec, scale, surface)

    def _draw_guides(self, spec: TrackSpec, surface: DrawingSurface) -> None:
        surface.move_to(0, spec.band_top)
        surface.line_to(surface.width, spec.band_top)
        surface.move_to(0, spec.band_bottom)
        surface.line_to(surface.width, spec.band_bottom)
        surface.set_stroke_color(spec.fg_color)
        surface.stroke()

    def _draw_gaps(
        self,
        filtered: FilteredRecord,
        spec: TrackSpec,
        scale: LinearScale,
        surface: DrawingSurface,
    ) -> None:
        if not filtered.gaps:
            return
        # gaps may run far past the window; keep edges near the surface
        lo, hi = -1, surface.width + 1
        x0s = np.clip(scale(np.array([g.start for g in filtered.gaps])), lo, hi)
        x1s = np.clip(scale(np.array([g.end for g in filtered.gaps])), lo, hi)
        for gap, x0, x1 in zip(filtered.gaps, x0s, x1s):
            surface.rect(x0, spec.band_top, x1, spec.band_bottom)
            surface.set_fill_color(self.gap_color(gap.kind))
            surface.fill()

    def _draw_boundaries(
        self,
        filtered: FilteredRecord,
        spec: TrackSpec,
        scale: LinearScale,
        surface: DrawingSurface,
    ) -> None:
        if len(filtered.exon_boundaries) == 0:
            return
        for x in scale(filtered.exon_boundaries):
            surface.move_to(x, spec.v_offset)
            surface.line_to(x, spec.bottom)
        surface.set_stroke_color(self._boundary_color)
        surface.stroke()

    def _draw_sequence(
        self,
        filtered: FilteredRecord,
        spec: TrackSpec,
        scale: LinearScale,
        surface: DrawingSurface,
    ) -> None:
        first = int(filtered.window.start)
        positions = np.arange(first, first + len(filtered.subsequence) + 1)
        edges = scale(positions)
        top = spec.band_bottom + 2
        bottom = spec.bottom - 2
        if bottom <= top:
            return
        show_letters = (edges[1] - edges[0]) >= MIN_GLYPH_WIDTH and bottom - top >= 8
        for i, base in enumerate(filtered.subsequence.upper()):
            x0, x1 = edges[i], edges[i + 1]
            surface.rect(x0, top, max(x0, x1 - 1), bottom)
            surface.set_fill_color(BASE_COLORS.get(base, UNKNOWN_BASE_COLOR))
            surface.fill()
            if show_letters:
                surface.text((x0 + x1) / 2 - 3, top, base, WHITE)
