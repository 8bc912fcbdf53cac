"""Linear mapping from genomic coordinates to pixel coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ..core.errors import InvalidWindow


@dataclass(frozen=True)
class LinearScale:
    """Maps a domain interval ``[d0, d1]`` onto a pixel range ``[r0, r1]``.

    Both spans are computed once at construction; calling the scale is pure
    and accepts scalars or numpy arrays. One instance is shared by every
    track of a request so all tracks line up to the same pixel grid.
    """

    r0: float
    r1: float
    d0: float
    d1: float
    factor: float = field(init=False)
    _span: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        bounds = (self.r0, self.r1, self.d0, self.d1)
        if not all(math.isfinite(b) for b in bounds):
            raise InvalidWindow(f"Scale bounds must be finite, got {bounds}.")
        if self.d0 == self.d1:
            raise InvalidWindow(
                f"Cannot scale a zero-width domain [{self.d0:g}, {self.d1:g}]."
            )
        span = (self.r1 - self.r0, self.d1 - self.d0)
        object.__setattr__(self, "_span", span)
        object.__setattr__(self, "factor", span[0] / span[1])

    def __call__(self, x):
        # multiply before dividing so d1 maps exactly onto r1
        pixels, units = self._span
        if isinstance(x, np.ndarray):
            return self.r0 + (x.astype(np.float64) - self.d0) * pixels / units
        return self.r0 + (x - self.d0) * pixels / units

    @property
    def units_per_pixel(self) -> float:
        """Genomic units covered by one pixel."""
        return 1.0 / self.factor


def make_scale(
    pixel_range: Sequence[float],
    domain: Sequence[float],
) -> LinearScale:
    """Build the scale for ``pixel_range`` ``[r0, r1]`` over ``domain`` ``[d0, d1]``.

    Raises InvalidWindow when the domain has zero width.
    """
    r0, r1 = pixel_range
    d0, d1 = domain
    return LinearScale(float(r0), float(r1), float(d0), float(d1))
