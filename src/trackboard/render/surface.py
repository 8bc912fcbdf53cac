"""DrawingSurface: path-based 2D drawing over a Pillow RGBA image."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..core.color import RGB, BLACK

TRANSPARENT = (0, 0, 0, 0)


@lru_cache(maxsize=1)
def _default_font() -> ImageFont.ImageFont:
    return ImageFont.load_default()


class DrawingSurface:
    """A mutable raster target with move/line/rect path primitives.

    Paths accumulate through ``move_to``, ``line_to`` and ``rect`` and are
    consumed by ``stroke`` or ``fill``, which paint them in the current
    stroke or fill color. Colors are converted to the surface's RGBA
    format; drawing replaces pixels, it does not blend.

    A surface has no internal locking. Each track renders into its own
    surface and only the compositor touches the shared canvas.
    """

    def __init__(self, width: int, height: int, background: RGB | None = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface must be at least 1x1, got {width}x{height}.")
        fill = background.rgba() if background is not None else TRANSPARENT
        self._image = Image.new("RGBA", (int(width), int(height)), fill)
        self._draw = ImageDraw.Draw(self._image)
        self._subpaths: list[list[tuple[float, float]]] = []
        self._stroke_color: RGB = BLACK
        self._fill_color: RGB = BLACK
        self._line_width = 1

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    # --- Path construction ---

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(float(x), float(y))])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((float(x), float(y)))

    def rect(self, x0: float, y0: float, x1: float, y1: float) -> None:
        """Add a closed axis-aligned rectangle with corners (x0, y0), (x1, y1)."""
        self.move_to(x0, y0)
        self.line_to(x1, y0)
        self.line_to(x1, y1)
        self.line_to(x0, y1)
        self.line_to(x0, y0)

    # --- State ---

    def set_stroke_color(self, color: Any) -> None:
        self._stroke_color = RGB.parse(color)

    def set_fill_color(self, color: Any) -> None:
        self._fill_color = RGB.parse(color)

    def set_line_width(self, width: int) -> None:
        self._line_width = max(1, int(width))

    # --- Painting ---

    def stroke(self) -> None:
        """Paint the outline of every pending subpath, then clear the path."""
        ink = self._stroke_color.rgba()
        for points in self._subpaths:
            if len(points) >= 2:
                self._draw.line(points, fill=ink, width=self._line_width)
        self._subpaths = []

    def fill(self) -> None:
        """Paint the interior of every pending subpath, then clear the path."""
        ink = self._fill_color.rgba()
        for points in self._subpaths:
            if len(points) >= 3:
                self._draw.polygon(points, fill=ink)
        self._subpaths = []

    def text(self, x: float, y: float, label: str, color: Any = BLACK) -> None:
        self._draw.text((x, y), label, fill=RGB.parse(color).rgba(), font=_default_font())

    # --- Compositing and export ---

    def composite(self, other: DrawingSurface) -> None:
        """Alpha-blend ``other`` over this surface. Sizes must match."""
        if other.size != self.size:
            raise ValueError(
                f"Cannot composite a {other.size} surface onto a {self.size} surface."
            )
        self._image.alpha_composite(other._image)

    def to_image(self, mode: str = "RGB") -> Image.Image:
        """Copy of the surface as a Pillow image (alpha dropped by default)."""
        return self._image.convert(mode)

    def to_array(self) -> np.ndarray:
        """(height, width, 3) uint8 RGB pixel array."""
        return np.asarray(self.to_image("RGB"))

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        r, g, b, _ = self._image.getpixel((int(x), int(y)))
        return (r, g, b)
