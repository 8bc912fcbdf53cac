"""Value types flowing through the compositing pipeline.

Everything here is immutable. Records come out of the store read-only and
are shared by every request that hits the cache, so arrays are exposed as
non-writeable views.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import cached_property

import numpy as np

from .color import RGB, BLACK, WHITE
from .errors import InvalidCanvasConfig, InvalidWindow


def _missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _readonly(values, dtype=np.float64) -> np.ndarray:
    arr = np.array(values, dtype=dtype).reshape(-1)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class GenomicWindow:
    """The requested slice of genomic coordinate space, ``start <= end``."""

    start: float
    end: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            raise InvalidWindow(
                f"Window bounds must be finite, got from={self.start} to={self.end}."
            )
        if self.start > self.end:
            raise InvalidWindow(
                f"Window is inverted: from={self.start} is greater than to={self.end}."
            )

    @property
    def width(self) -> float:
        return self.end - self.start

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    def to_dict(self) -> dict:
        return {"from": self.start, "to": self.end}


@dataclass(frozen=True)
class TrackSpec:
    """Which record to fetch and where and how to draw it."""

    name: str
    height: float
    v_offset: float = 0.0
    fg_color: RGB = BLACK
    bg_color: RGB | None = None

    @property
    def band_top(self) -> float:
        """Upper guide line, one eighth of the height below the offset."""
        return self.v_offset + self.height / 8

    @property
    def band_bottom(self) -> float:
        """Lower guide line, two eighths of the height above the bottom."""
        return self.v_offset + self.height - 2 * (self.height / 8)

    @property
    def bottom(self) -> float:
        return self.v_offset + self.height


@dataclass(frozen=True)
class CanvasConfig:
    """Size and background of the shared raster surface."""

    width: float
    height: float
    bg_color: RGB = WHITE

    def __post_init__(self) -> None:
        if self.pixel_width <= 0 or self.pixel_height <= 0:
            raise InvalidCanvasConfig(
                f"Canvas must be at least 1x1 pixels, got "
                f"width={self.width} height={self.height}."
            )

    @property
    def pixel_width(self) -> int:
        return int(self.width) if math.isfinite(self.width) else 0

    @property
    def pixel_height(self) -> int:
        return int(self.height) if math.isfinite(self.height) else 0

    @property
    def size(self) -> tuple[int, int]:
        return (self.pixel_width, self.pixel_height)


@dataclass(frozen=True)
class Gap:
    """A discontinuous region within a track, classified by ``kind``."""

    start: float
    end: float
    kind: str

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "type": self.kind}


@dataclass(frozen=True, eq=False)
class AnnotationRecord:
    """One track's stored annotation: sequence, exon boundaries and gaps."""

    id: str
    sequence: str = ""
    exon_boundaries: np.ndarray = field(default_factory=lambda: _readonly([]))
    gaps: tuple[Gap, ...] = ()
    length: int | None = None
    group: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "exon_boundaries", _readonly(self.exon_boundaries))
        object.__setattr__(self, "gaps", tuple(self.gaps))
        if self.length is None:
            object.__setattr__(self, "length", len(self.sequence))

    @cached_property
    def gap_starts(self) -> np.ndarray:
        return _readonly([g.start for g in self.gaps])

    @cached_property
    def gap_ends(self) -> np.ndarray:
        return _readonly([g.end for g in self.gaps])

    @classmethod
    def from_document(cls, doc: dict) -> AnnotationRecord:
        """Build a record from a store document.

        Documents use the store field names: ``id``, ``subseq``,
        ``exon_boundaries``, ``gaps`` (each ``{start, end, type}``) and the
        optional ``length`` and ``genetree``.
        """
        gaps = tuple(
            Gap(float(g["start"]), float(g["end"]), str(g["type"]))
            for g in ([] if _missing(doc.get("gaps")) else doc["gaps"])
        )
        boundaries = doc.get("exon_boundaries")
        sequence = doc.get("subseq")
        length = doc.get("length")
        group = doc.get("genetree")
        return cls(
            id=str(doc["id"]),
            sequence="" if _missing(sequence) else str(sequence),
            exon_boundaries=[] if _missing(boundaries) else boundaries,
            gaps=gaps,
            length=None if _missing(length) else int(length),
            group=None if _missing(group) else str(group),
        )


@dataclass(frozen=True, eq=False)
class FilteredRecord:
    """Request-scoped view of a record restricted to one window."""

    id: str
    subsequence: str
    exon_boundaries: np.ndarray
    gaps: tuple[Gap, ...]
    window: GenomicWindow

    def __post_init__(self) -> None:
        object.__setattr__(self, "exon_boundaries", _readonly(self.exon_boundaries))
        object.__setattr__(self, "gaps", tuple(self.gaps))
