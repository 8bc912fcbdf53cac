"""Compositor: fans a request out over its tracks and joins the results."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Iterable

from ..core.errors import RequestTimeout, TrackboardError
from ..core.models import CanvasConfig, GenomicWindow, TrackSpec
from ..core.validation import ensure_renderable
from ..render.surface import DrawingSurface
from ..render.track_renderer import TrackRenderer
from ..settings import Settings
from ..store.base import AnnotationStore
from ..store.cache import RecordCache
from ..store.fetcher import AnnotationFetcher
from ..transform.scaler import LinearScale, make_scale
from ..transform.window_filter import filter_record
from .result import CompositeResult, TrackFailure

logger = logging.getLogger(__name__)

_UNSET = object()


class Compositor:
    """Composites many tracks into one canvas.

    Each track runs fetch -> filter -> render on a worker thread and draws
    into its own transparent surface. Once every unit has finished, or the
    request deadline has passed, the successful surfaces are blended onto
    the shared canvas one after another in request order. The canvas is
    only ever touched by the calling thread, so output does not depend on
    thread scheduling.

    Usage::

        with Compositor.from_store(store, settings) as compositor:
            result = compositor.composite(window, tracks, canvas_config)
            uri = result.to_data_uri()
    """

    def __init__(
        self,
        fetcher: AnnotationFetcher,
        renderer: TrackRenderer | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else Settings()
        self._fetcher = fetcher
        self._renderer = renderer if renderer is not None else TrackRenderer.from_settings(self._settings)
        self._executor = ThreadPoolExecutor(
            max_workers=self._settings.max_workers,
            thread_name_prefix="trackboard-track",
        )

    @classmethod
    def from_store(
        cls,
        store: AnnotationStore,
        settings: Settings | None = None,
    ) -> Compositor:
        """Build a compositor with a cache sized from ``settings``."""
        settings = settings if settings is not None else Settings()
        cache = RecordCache(max_size=settings.cache_size, ttl=settings.cache_ttl)
        return cls(AnnotationFetcher(store, cache), settings=settings)

    @property
    def fetcher(self) -> AnnotationFetcher:
        return self._fetcher

    @property
    def settings(self) -> Settings:
        return self._settings

    def close(self) -> None:
        """Stop accepting work. In-flight tracks are left to finish."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> Compositor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def composite(
        self,
        window: GenomicWindow,
        tracks: Iterable[TrackSpec],
        canvas_config: CanvasConfig,
        timeout=_UNSET,
    ) -> CompositeResult:
        """Render ``tracks`` over ``window`` into one canvas.

        Raises InvalidWindow or InvalidCanvasConfig before any track work
        when the request cannot be drawn. Per-track problems never raise;
        they are reported in ``CompositeResult.failures`` and the track is
        left out of the image.

        ``timeout`` overrides ``settings.request_timeout`` (seconds, None
        waits for every track).
        """
        ensure_renderable(window, canvas_config)
        tracks = tuple(tracks)
        if timeout is _UNSET:
            timeout = self._settings.request_timeout

        scale = make_scale((0, canvas_config.width), (window.start, window.end))
        canvas = DrawingSurface(*canvas_config.size, background=canvas_config.bg_color)

        t0 = time.perf_counter()
        logger.debug("Firing track processing (%d tracks)", len(tracks))
        futures = [
            self._executor.submit(self._process_track, spec, window, scale, canvas.size)
            for spec in tracks
        ]
        _, pending = wait(futures, timeout=timeout)

        rendered: list[str] = []
        failures: list[TrackFailure] = []
        for spec, future in zip(tracks, futures):
            if future in pending:
                future.cancel()
                failures.append(
                    TrackFailure.from_exception(spec.name, RequestTimeout(spec.name, timeout))
                )
                continue
            surface = self._collect(spec, future, failures)
            if surface is not None:
                canvas.composite(surface)
                rendered.append(spec.name)

        elapsed = time.perf_counter() - t0
        logger.debug(
            "Composited %d/%d tracks in %.1f ms",
            len(rendered), len(tracks), elapsed * 1000,
        )
        for failure in failures:
            logger.warning("Track %s left out (%s): %s", failure.track, failure.kind, failure.message)
        return CompositeResult(
            canvas=canvas,
            rendered=tuple(rendered),
            failures=tuple(failures),
            elapsed=elapsed,
        )

    def _collect(
        self,
        spec: TrackSpec,
        future: Future,
        failures: list[TrackFailure],
    ) -> DrawingSurface | None:
        try:
            return future.result()
        except TrackboardError as exc:
            failures.append(TrackFailure.from_exception(spec.name, exc))
        except Exception as exc:
            logger.exception("Unexpected error while rendering track %s", spec.name)
            failures.append(TrackFailure.from_exception(spec.name, exc))
        return None

    def _process_track(
        self,
        spec: TrackSpec,
        window: GenomicWindow,
        scale: LinearScale,
        size: tuple[int, int],
    ) -> DrawingSurface:
        record = self._fetcher.fetch(spec.name)
        filtered = filter_record(record, window)
        surface = DrawingSurface(*size)
        self._renderer.render(filtered, spec, scale, surface)
        return surface
