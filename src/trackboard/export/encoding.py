"""PNG encoding and data-URI wrapping for transport."""

from __future__ import annotations

import base64
import io

from PIL import Image

_PREFIX = "data:image/png;base64,"


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_uri(png: bytes) -> str:
    """Wrap PNG bytes as ``data:image/png;base64,...``."""
    return _PREFIX + base64.b64encode(png).decode("ascii")


def decode_data_uri(uri: str) -> bytes:
    """Inverse of to_data_uri. Raises ValueError for anything but a PNG data URI."""
    if not uri.startswith(_PREFIX):
        raise ValueError("Expected a 'data:image/png;base64,' URI.")
    return base64.b64decode(uri[len(_PREFIX):])
