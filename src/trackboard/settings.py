"""Settings: typed, validated configuration threaded through the pipeline."""

from __future__ import annotations

import os
from typing import Mapping

import param

from .core.color import RGB

ENV_PREFIX = "TRACKBOARD_"


class Settings(param.Parameterized):
    """Process configuration for the compositor, cache, renderer and server.

    One instance is built at startup and passed explicitly to whatever
    needs it; nothing reads configuration from module globals.
    """

    # --- Server ---
    host = param.String(default="127.0.0.1", doc="Interface the HTTP server binds to")
    port = param.Integer(default=1338, bounds=(0, 65535), doc="HTTP port, 0 = auto-assign")

    # --- Compositing ---
    max_workers = param.Integer(default=8, bounds=(1, None), doc="Track worker threads")
    request_timeout = param.Number(
        default=10.0, bounds=(0, None), inclusive_bounds=(False, True), allow_None=True,
        doc="Seconds a request may spend fetching and rendering; None = no deadline",
    )

    # --- Record cache ---
    cache_size = param.Integer(default=1024, bounds=(0, None), doc="Max cached records, 0 = unbounded")
    cache_ttl = param.Number(
        default=None, bounds=(0, None), inclusive_bounds=(False, True), allow_None=True,
        doc="Seconds before a cached record expires; None = never",
    )

    # --- Rendering ---
    zoom_threshold = param.Number(
        default=300.0, bounds=(0, None),
        doc="Windows narrower than this many bases get sequence glyphs",
    )
    low_gap_color = param.NumericTuple(default=(154, 205, 50), length=3)
    high_gap_color = param.NumericTuple(default=(0, 100, 0), length=3)
    boundary_color = param.NumericTuple(default=(205, 0, 0), length=3)

    # --- Logging ---
    log_level = param.Selector(
        default="INFO", objects=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    _ENV_KEYS = (
        "host", "port", "max_workers", "request_timeout", "cache_size",
        "cache_ttl", "zoom_threshold", "low_gap_color", "high_gap_color",
        "boundary_color", "log_level",
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> Settings:
        """Build settings from ``TRACKBOARD_<NAME>`` environment variables.

        Explicit ``overrides`` win over the environment. Values outside a
        parameter's bounds raise ValueError.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for key in cls._ENV_KEYS:
            raw = environ.get(ENV_PREFIX + key.upper())
            if raw is not None:
                values[key] = cls._coerce(key, raw)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def _coerce(cls, key: str, raw: str):
        p = cls.param[key]
        raw = raw.strip()
        if isinstance(p, param.NumericTuple):
            parts = raw.split(",")
            return RGB.parse(parts if len(parts) == 3 else raw).as_tuple()
        if p.allow_None and raw.lower() in ("", "none"):
            return None
        if isinstance(p, param.Integer):
            return int(raw)
        if isinstance(p, param.Number):
            return float(raw)
        if isinstance(p, param.Selector):
            return raw.upper()
        return raw

    @property
    def gap_colors(self) -> dict[str, RGB]:
        return {
            "low": RGB(*(int(c) for c in self.low_gap_color)),
            "high": RGB(*(int(c) for c in self.high_gap_color)),
        }

    @property
    def boundary_rgb(self) -> RGB:
        return RGB(*(int(c) for c in self.boundary_color))

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in self._ENV_KEYS}
