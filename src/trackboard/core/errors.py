"""Error taxonomy for the compositing pipeline.

Request-level errors (``InvalidWindow``, ``InvalidCanvasConfig``,
``InvalidRequest``) abort a request before any fetch starts. Track-level
errors (``FetchFailed`` and its subclasses, ``UnknownGapKind``,
``RequestTimeout``) are isolated to one track by the compositor.
"""

from __future__ import annotations


class TrackboardError(Exception):
    """Base class for every error raised by trackboard."""


class InvalidWindow(TrackboardError, ValueError):
    """Genomic window is inverted, non-finite or has zero width."""


class InvalidCanvasConfig(TrackboardError, ValueError):
    """Canvas dimensions are not positive."""


class InvalidRequest(TrackboardError, ValueError):
    """Request payload is malformed (missing fields, wrong types)."""


class FetchFailed(TrackboardError):
    """An annotation record could not be retrieved for a track."""

    kind = "fetch_failed"

    def __init__(self, track: str, message: str) -> None:
        super().__init__(message)
        self.track = track


class RecordNotFound(FetchFailed):
    """The store has no record for the requested track name."""

    kind = "not_found"

    def __init__(self, track: str) -> None:
        super().__init__(track, f"No annotation record for track '{track}'.")


class StoreUnavailable(FetchFailed):
    """The store could not be reached or failed while answering."""

    kind = "store_unavailable"

    def __init__(self, track: str, reason: str = "") -> None:
        message = f"Annotation store unavailable while fetching '{track}'"
        if reason:
            message += f": {reason}"
        super().__init__(track, message)


class UnknownGapKind(TrackboardError, ValueError):
    """A gap carries a classification the renderer has no color for."""

    kind = "unknown_gap_kind"

    def __init__(self, kind: str, known: tuple[str, ...] = ("low", "high")) -> None:
        super().__init__(
            f"Unknown gap kind '{kind}'. Expected one of: {', '.join(known)}."
        )
        self.gap_kind = kind


class RequestTimeout(TrackboardError, TimeoutError):
    """The request deadline passed before a track finished."""

    kind = "timeout"

    def __init__(self, track: str, timeout: float) -> None:
        super().__init__(
            f"Track '{track}' did not finish within the {timeout:g}s request deadline."
        )
        self.track = track
        self.timeout = timeout
