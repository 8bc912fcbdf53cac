"""trackboard command line.

Usage:
    trackboard serve  --store annot.jsonl [--host H] [--port P]
    trackboard render request.json --store annot.jsonl --out board.png [--html board.html]

Settings not given on the command line are read from ``TRACKBOARD_*``
environment variables (see ``trackboard.settings.Settings``).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .compose.compositor import Compositor
from .core.errors import TrackboardError
from .export.html_export import HTMLExporter
from .server.app import serve
from .server.request import parse_board_request
from .settings import Settings
from .store.memory import InMemoryAnnotationStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Route every trackboard logger to stderr at ``level``."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("trackboard").setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trackboard",
        description="Composite genomic annotation tracks into PNG images.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging verbosity (default: TRACKBOARD_LOG_LEVEL or INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the HTTP board server")
    p_serve.add_argument("--store", type=Path, required=True,
                         help="JSON-lines file of annotation records")
    p_serve.add_argument("--host", default=None, help="Bind address (default: 127.0.0.1)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: 1338)")
    p_serve.add_argument("--workers", type=int, default=None, metavar="N",
                         help="Track worker threads")

    p_render = sub.add_parser("render", help="Render one request file to PNG")
    p_render.add_argument("request", type=Path, help="JSON file with loc, conf and tracks")
    p_render.add_argument("--store", type=Path, required=True,
                          help="JSON-lines file of annotation records")
    p_render.add_argument("--out", type=Path, required=True, help="Output PNG path")
    p_render.add_argument("--html", type=Path, default=None,
                          help="Also write a standalone HTML page")
    p_render.add_argument("--timeout", type=float, default=None, metavar="SECONDS",
                          help="Request deadline")
    return parser


def _render(args: argparse.Namespace, settings: Settings) -> int:
    store = InMemoryAnnotationStore.from_json_lines(args.store)
    request = parse_board_request(args.request.read_text(encoding="utf-8"))
    with Compositor.from_store(store, settings) as compositor:
        result = compositor.composite(request.window, request.tracks, request.canvas)

    args.out.write_bytes(result.to_png())
    print(f"Wrote {args.out} ({len(result.rendered)}/{len(request.tracks)} tracks)")
    if args.html is not None:
        HTMLExporter.export(args.html, result, title=args.request.stem, window=request.window)
        print(f"Wrote {args.html}")
    for failure in result.failures:
        print(f"  {failure.track}: {failure.kind}: {failure.message}", file=sys.stderr)
    return 0 if result.ok else 2


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {"log_level": args.log_level}
    if args.command == "serve":
        overrides.update(host=args.host, port=args.port, max_workers=args.workers)
    elif args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    try:
        settings = Settings.from_env(**overrides)
    except ValueError as exc:
        sys.exit(f"Error: invalid setting: {exc}")
    configure_logging(settings.log_level)
    logger.debug("Settings: %s", settings.to_dict())

    if not args.store.is_file():
        sys.exit(f"Error: store file not found: {args.store}")

    if args.command == "serve":
        serve(InMemoryAnnotationStore.from_json_lines(args.store), settings)
        return 0
    try:
        return _render(args, settings)
    except (TrackboardError, OSError) as exc:
        sys.exit(f"Error: {exc}")


if __name__ == "__main__":
    sys.exit(main())
