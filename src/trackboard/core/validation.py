"""Input validation with clear error messages for request payloads."""

from __future__ import annotations

import math
from typing import Any

from .color import RGB, BLACK, WHITE
from .errors import InvalidCanvasConfig, InvalidRequest, InvalidWindow
from .models import CanvasConfig, GenomicWindow, TrackSpec


def _number(payload: dict, key: str, where: str, default: Any = None) -> float:
    value = payload.get(key, default)
    if value is None:
        raise InvalidRequest(f"{where} is missing required field '{key}'.")
    if isinstance(value, bool):
        raise InvalidRequest(f"{where}.{key} must be a number, got a boolean.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidRequest(
            f"{where}.{key} must be a number, got {type(value).__name__} {value!r}."
        ) from None
    if not math.isfinite(number):
        raise InvalidRequest(f"{where}.{key} must be finite, got {value!r}.")
    return number


def _mapping(payload: Any, where: str) -> dict:
    if not isinstance(payload, dict):
        raise InvalidRequest(
            f"{where} must be a JSON object, got {type(payload).__name__}."
        )
    return payload


def _color(value: Any, where: str, default: RGB | None) -> RGB | None:
    if value is None:
        return default
    try:
        return RGB.parse(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRequest(f"{where}: {exc}") from None


def validate_window(payload: Any) -> GenomicWindow:
    """Parse ``{"from", "to"}`` into a GenomicWindow.

    Raises InvalidWindow for inverted windows and InvalidRequest for
    malformed payloads. Zero-width windows are accepted here; the
    compositor rejects them before scaling.
    """
    payload = _mapping(payload, "loc")
    start = _number(payload, "from", "loc")
    end = _number(payload, "to", "loc")
    return GenomicWindow(start, end)


def validate_canvas_config(payload: Any) -> CanvasConfig:
    """Parse ``{"width", "height", "bgColor"}`` into a CanvasConfig."""
    payload = _mapping(payload, "conf")
    width = _number(payload, "width", "conf")
    height = _number(payload, "height", "conf")
    bg_color = _color(payload.get("bgColor"), "conf.bgColor", WHITE)
    return CanvasConfig(width=width, height=height, bg_color=bg_color)


def validate_track_spec(payload: Any, index: int = 0) -> TrackSpec:
    """Parse one track entry. ``index`` is only used in error messages."""
    where = f"tracks[{index}]"
    payload = _mapping(payload, where)
    name = payload.get("name")
    if not isinstance(name, str) or not name:
        raise InvalidRequest(f"{where}.name must be a non-empty string, got {name!r}.")
    height = _number(payload, "height", where)
    if height <= 0:
        raise InvalidRequest(f"{where}.height must be positive, got {height:g}.")
    v_offset = _number(payload, "v_offset", where, default=0.0)
    return TrackSpec(
        name=name,
        height=height,
        v_offset=v_offset,
        fg_color=_color(payload.get("fgColor"), f"{where}.fgColor", BLACK),
        bg_color=_color(payload.get("bgColor"), f"{where}.bgColor", None),
    )


def validate_tracks(payload: Any) -> tuple[TrackSpec, ...]:
    """Parse the track list. An empty list is valid and renders a blank canvas."""
    if payload is None:
        return ()
    if not isinstance(payload, list):
        raise InvalidRequest(
            f"tracks must be a JSON array, got {type(payload).__name__}."
        )
    return tuple(validate_track_spec(item, i) for i, item in enumerate(payload))


def ensure_renderable(window: GenomicWindow, canvas: CanvasConfig) -> None:
    """Request-level checks performed before any track work starts."""
    if not isinstance(canvas, CanvasConfig):
        raise InvalidCanvasConfig(
            f"Expected a CanvasConfig, got {type(canvas).__name__}."
        )
    if canvas.pixel_width <= 0 or canvas.pixel_height <= 0:
        raise InvalidCanvasConfig(
            f"Canvas must be at least 1x1 pixels, got {canvas.width}x{canvas.height}."
        )
    if window.is_degenerate:
        raise InvalidWindow(
            f"Window has zero width (from={window.start:g}, to={window.end:g})."
        )
