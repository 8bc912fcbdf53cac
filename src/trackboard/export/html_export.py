"""HTMLExporter: standalone HTML pages built from jinja2 templates."""

from __future__ import annotations

import pathlib
from typing import TYPE_CHECKING

import jinja2

from .._version import __version__

if TYPE_CHECKING:
    from ..compose.result import CompositeResult
    from ..core.models import GenomicWindow

_TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=jinja2.select_autoescape(["html", "j2"]),
    )


class HTMLExporter:
    """Export a composite as a self-contained HTML page.

    The image is embedded as a data URI, so the file has no external
    references. Tracks that failed are listed under the image.
    """

    @staticmethod
    def render(
        result: CompositeResult,
        title: str = "trackboard",
        window: GenomicWindow | None = None,
    ) -> str:
        template = _environment().get_template("standalone.html.j2")
        return template.render(
            title=title,
            image_uri=result.to_data_uri(),
            width=result.canvas.width,
            height=result.canvas.height,
            window=window.to_dict() if window is not None else None,
            rendered=list(result.rendered),
            failures=result.failures_to_list(),
            version=__version__,
        )

    @staticmethod
    def export(
        path: str | pathlib.Path,
        result: CompositeResult,
        title: str = "trackboard",
        window: GenomicWindow | None = None,
    ) -> None:
        """Write the page to ``path``."""
        path = pathlib.Path(path)
        path.write_text(HTMLExporter.render(result, title, window), encoding="utf-8")


def render_viewer_page(title: str = "trackboard") -> str:
    """Interactive page served at ``/`` by the HTTP server."""
    return _environment().get_template("viewer.html.j2").render(
        title=title, version=__version__,
    )
