"""CompositeResult and TrackFailure: what a composite request returns."""

from __future__ import annotations

from dataclasses import dataclass

from ..export.encoding import encode_png, to_data_uri
from ..render.surface import DrawingSurface


@dataclass(frozen=True)
class TrackFailure:
    """Why one track is missing from the composite."""

    track: str
    kind: str
    message: str

    @classmethod
    def from_exception(cls, track: str, exc: BaseException) -> TrackFailure:
        return cls(track=track, kind=getattr(exc, "kind", "error"), message=str(exc))

    def to_dict(self) -> dict:
        return {"track": self.track, "kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class CompositeResult:
    """The finished canvas plus the tracks that did and did not make it."""

    canvas: DrawingSurface
    rendered: tuple[str, ...] = ()
    failures: tuple[TrackFailure, ...] = ()
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_png(self) -> bytes:
        return encode_png(self.canvas.to_image())

    def to_data_uri(self) -> str:
        return to_data_uri(self.to_png())

    def failures_to_list(self) -> list[dict]:
        return [f.to_dict() for f in self.failures]
