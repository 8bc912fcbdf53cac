"""Image encoding and standalone HTML export."""

from .encoding import encode_png, to_data_uri, decode_data_uri
from .html_export import HTMLExporter

__all__ = ["encode_png", "to_data_uri", "decode_data_uri", "HTMLExporter"]
