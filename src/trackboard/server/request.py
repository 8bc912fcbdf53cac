"""BoardRequest: the parsed body of a ``POST /board`` call."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..core.errors import InvalidRequest
from ..core.models import CanvasConfig, GenomicWindow, TrackSpec
from ..core.validation import validate_canvas_config, validate_tracks, validate_window


@dataclass(frozen=True)
class BoardRequest:
    window: GenomicWindow
    tracks: tuple[TrackSpec, ...]
    canvas: CanvasConfig


def parse_board_request(body: str | bytes | dict) -> BoardRequest:
    """Parse ``{"loc": {...}, "tracks": [...], "conf": {...}}``.

    Accepts raw JSON text or an already decoded mapping. Raises
    InvalidRequest, InvalidWindow or InvalidCanvasConfig.
    """
    payload: Any = body
    if isinstance(body, (str, bytes)):
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise InvalidRequest(f"Request body is not valid JSON: {exc}") from None
    if not isinstance(payload, dict):
        raise InvalidRequest(
            f"Request body must be a JSON object, got {type(payload).__name__}."
        )
    for key in ("loc", "conf"):
        if key not in payload:
            raise InvalidRequest(f"Request body is missing '{key}'.")
    return BoardRequest(
        window=validate_window(payload["loc"]),
        tracks=validate_tracks(payload.get("tracks")),
        canvas=validate_canvas_config(payload["conf"]),
    )
