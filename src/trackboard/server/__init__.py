"""HTTP boundary: request parsing and the board server."""

from .request import BoardRequest, parse_board_request
from .app import TrackboardHandler, make_server, serve

__all__ = [
    "BoardRequest",
    "parse_board_request",
    "TrackboardHandler",
    "make_server",
    "serve",
]
