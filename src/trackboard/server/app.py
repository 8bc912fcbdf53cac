"""Board server: HTTP endpoints in front of the compositor.

Endpoints:
    GET  /                    - Viewer page
    POST /board               - Composite image as a PNG data URI
                                (``?format=json`` adds the failure list)
    GET  /limit?node=<name>   - Max known sequence length over the named tracks
    GET  /tracks[?genetree=]  - Track names, optionally within one gene tree
"""

from __future__ import annotations

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlparse

from .._version import __version__
from ..compose.compositor import Compositor
from ..core.errors import (
    InvalidCanvasConfig,
    InvalidRequest,
    InvalidWindow,
    RecordNotFound,
    StoreUnavailable,
)
from ..export.html_export import render_viewer_page
from ..settings import Settings
from ..store.base import AnnotationStore
from .request import parse_board_request

logger = logging.getLogger(__name__)


class TrackboardHandler(BaseHTTPRequestHandler):
    """HTTP handler for the board API.

    ``compositor`` and ``store`` are bound per server by ``make_server``,
    which subclasses this handler.
    """

    compositor: Compositor | None = None
    store: AnnotationStore | None = None
    server_version = f"trackboard/{__version__}"

    def log_message(self, format, *args):
        logger.info("%s %s", self.address_string(), format % args)

    # --- Responses ---

    def _send(self, status: int, body: bytes, content_type: str, headers: dict | None = None) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        for key, value in (headers or {}).items():
            self.send_header(key, value)
        self.end_headers()
        self.wfile.write(body)

    def _send_json(self, payload: dict, status: int = 200) -> None:
        self._send(status, json.dumps(payload).encode("utf-8"), "application/json")

    def _send_error(self, status: int, message: str) -> None:
        self._send_json({"error": message}, status)

    # --- Routing ---

    def do_GET(self):
        parsed = urlparse(self.path)
        query = parse_qs(parsed.query)
        if parsed.path in ("/", "/index.html"):
            self._send(200, render_viewer_page().encode("utf-8"), "text/html; charset=utf-8")
        elif parsed.path == "/limit":
            self._limit(query)
        elif parsed.path == "/tracks":
            self._tracks(query)
        else:
            self._send_error(404, f"No such endpoint: {parsed.path}")

    def do_POST(self):
        parsed = urlparse(self.path)
        if parsed.path != "/board":
            self._send_error(404, f"No such endpoint: {parsed.path}")
            return
        query = parse_qs(parsed.query)
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            self._send_error(400, "Content-Length must be an integer.")
            return
        if length < 0:
            self._send_error(400, "Content-Length must not be negative.")
            return
        body = self.rfile.read(length)
        try:
            request = parse_board_request(body)
            result = self.compositor.composite(request.window, request.tracks, request.canvas)
        except (InvalidRequest, InvalidWindow, InvalidCanvasConfig) as exc:
            logger.info("Rejected board request: %s", exc)
            self._send_error(400, str(exc))
            return

        data_uri = result.to_data_uri()
        failures = result.failures_to_list()
        if query.get("format", [""])[0] == "json":
            self._send_json({"image": data_uri, "failures": failures})
        else:
            self._send(
                200,
                data_uri.encode("ascii"),
                "text/plain; charset=ascii",
                headers={"X-Track-Failures": json.dumps(failures)},
            )
        logger.debug("%d bytes transferred (board)", len(data_uri))

    def _limit(self, query: dict) -> None:
        names = query.get("node", [])
        if not names:
            self._send_error(400, "Missing 'node' query parameter.")
            return
        try:
            limit = self.store.sequence_length(names)
        except RecordNotFound as exc:
            self._send_error(404, str(exc))
            return
        except StoreUnavailable as exc:
            logger.warning("Limit query failed: %s", exc)
            self._send_error(503, str(exc))
            return
        self._send_json({"limit": limit})

    def _tracks(self, query: dict) -> None:
        group = query.get("genetree", [None])[0]
        self._send_json({"tracks": self.store.track_names(group)})


def make_server(
    compositor: Compositor,
    store: AnnotationStore,
    host: str = "127.0.0.1",
    port: int = 0,
) -> ThreadingHTTPServer:
    """Create (but do not start) a threaded server bound to ``host:port``."""
    handler = type(
        "BoundTrackboardHandler",
        (TrackboardHandler,),
        {"compositor": compositor, "store": store},
    )
    return ThreadingHTTPServer((host, port), handler)


def serve(store: AnnotationStore, settings: Settings | None = None) -> None:
    """Run the board server until interrupted."""
    settings = settings if settings is not None else Settings()
    with Compositor.from_store(store, settings) as compositor:
        httpd = make_server(compositor, store, settings.host, settings.port)
        host, port = httpd.server_address[:2]
        logger.info("Listening on http://%s:%d", host, port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down")
        finally:
            httpd.server_close()
