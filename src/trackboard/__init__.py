"""trackboard: composite genomic annotation tracks into one raster image."""

from ._version import __version__
from .core.color import RGB
from .core.errors import (
    TrackboardError,
    InvalidWindow,
    InvalidCanvasConfig,
    InvalidRequest,
    FetchFailed,
    RecordNotFound,
    StoreUnavailable,
    UnknownGapKind,
    RequestTimeout,
)
from .core.models import (
    GenomicWindow,
    TrackSpec,
    CanvasConfig,
    Gap,
    AnnotationRecord,
    FilteredRecord,
)
from .compose import Compositor, CompositeResult, TrackFailure
from .settings import Settings
from .store import AnnotationStore, AnnotationFetcher, InMemoryAnnotationStore, RecordCache


def render_board(store, window, tracks, canvas, settings=None):
    """One-shot composite: build a compositor, render, shut it down.

    Parameters
    ----------
    store : AnnotationStore
        Where track records come from.
    window : GenomicWindow
    tracks : iterable of TrackSpec
    canvas : CanvasConfig
    settings : Settings, optional
    """
    with Compositor.from_store(store, settings) as compositor:
        return compositor.composite(window, tracks, canvas)


__all__ = [
    "__version__",
    "render_board",
    "RGB",
    "GenomicWindow",
    "TrackSpec",
    "CanvasConfig",
    "Gap",
    "AnnotationRecord",
    "FilteredRecord",
    "Compositor",
    "CompositeResult",
    "TrackFailure",
    "Settings",
    "AnnotationStore",
    "AnnotationFetcher",
    "InMemoryAnnotationStore",
    "RecordCache",
    "TrackboardError",
    "InvalidWindow",
    "InvalidCanvasConfig",
    "InvalidRequest",
    "FetchFailed",
    "RecordNotFound",
    "StoreUnavailable",
    "UnknownGapKind",
    "RequestTimeout",
]
