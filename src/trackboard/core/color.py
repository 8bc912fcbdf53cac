"""RGB: 8-bit color values accepted from requests and settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from matplotlib import colors as mcolors


@dataclass(frozen=True)
class RGB:
    """An opaque 8-bit RGB color."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in ("r", "g", "b"):
            value = getattr(self, channel)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(
                    f"Color channel '{channel}' must be an int, got {type(value).__name__}."
                )
            if not 0 <= value <= 255:
                raise ValueError(
                    f"Color channel '{channel}' must be in [0, 255], got {value}."
                )

    @classmethod
    def parse(cls, value: Any) -> RGB:
        """Build an RGB from any supported representation.

        Accepts an existing RGB, a ``{"r", "g", "b"}`` mapping (the wire
        format), a 3-sequence of 0-255 ints, or any matplotlib color string
        such as ``"#9acd32"`` or ``"yellowgreen"``.
        """
        if isinstance(value, RGB):
            return value
        if isinstance(value, dict):
            missing = [k for k in ("r", "g", "b") if k not in value]
            if missing:
                raise ValueError(f"Color is missing channels: {missing}")
            return cls(int(value["r"]), int(value["g"]), int(value["b"]))
        if isinstance(value, str):
            try:
                rgb = mcolors.to_rgb(value)
            except ValueError:
                raise ValueError(
                    f"Unknown color '{value}'. Use a hex string like '#ff0000' "
                    "or a matplotlib color name."
                ) from None
            return cls(*(int(round(c * 255)) for c in rgb))
        if isinstance(value, (tuple, list)) and len(value) == 3:
            return cls(*(int(c) for c in value))
        raise TypeError(f"Cannot interpret {value!r} as a color.")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def rgba(self, alpha: int = 255) -> tuple[int, int, int, int]:
        """Surface-native RGBA tuple."""
        return (self.r, self.g, self.b, alpha)

    def to_hex(self) -> str:
        return mcolors.to_hex(tuple(c / 255 for c in self.as_tuple()))

    def to_dict(self) -> dict:
        return {"r": self.r, "g": self.g, "b": self.b}


BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)
