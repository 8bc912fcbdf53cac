"""Per-request fan-out of fetch, filter and render across tracks."""

from .compositor import Compositor
from .result import CompositeResult, TrackFailure

__all__ = ["Compositor", "CompositeResult", "TrackFailure"]
