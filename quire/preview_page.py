"""Standalone HTML preview rendering for a manuscript.

This module turns one markdown manuscript into a self-contained HTML page: the
rendered and dictionary-highlighted body, an outline sidebar indented by
heading level, and the Pygments stylesheet for fenced code. The main entry
point is :class:`PreviewPageBuilder`.

>>> from pathlib import Path
>>> from quire.config import EditorConfig
>>> builder = PreviewPageBuilder(EditorConfig())  # doctest: +SKIP
>>> builder.run("# Title\\n\\nBody", Path("preview.html"), title="Draft")  # doctest: +SKIP
PosixPath('preview.html')

The builder reads ``preview_page.jinja`` from ``quire/templates`` unless a
custom directory is supplied, renders with autoescape enabled, and writes
UTF-8 encoded files.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .markdown_parser import parse_outline_sections
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from .config import EditorConfig


class PreviewPageBuilder:
    """Render a manuscript preview page from markdown and editor config."""

    def __init__(
        self, config: EditorConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the builder, renderer and Jinja environment.

        Parameters
        ----------
        config : EditorConfig
            Editor configuration providing render options and the dictionary.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``quire/templates`` when not supplied.
        """
        self.config = config
        self.renderer = HtmlContentRenderer(
            config.render.pygments_style,
            hard_breaks=config.render.hard_breaks,
            highlight_class=config.render.highlight_class,
            fallback_markdown=config.render.fallback_markdown,
        )
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("preview_page.jinja")

    def render(self, markdown: str, *, title: str = "") -> str:
        """Return the preview page HTML for ``markdown``."""
        sections = parse_outline_sections(markdown)
        context = {
            "title": title or (sections[0].text if sections else "Preview"),
            "sections": sections,
            "body_html": self.renderer.preview(markdown, self.config.dictionary),
            "pygments_css": self.renderer.stylesheet,
            "highlight_class": self.config.render.highlight_class,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def run(self, markdown: str, output_path: Path, *, title: str = "") -> Path:
        """Render and write the preview page, returning the output path."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(markdown, title=title), encoding="utf-8")
        return output_path


__all__ = ["PreviewPageBuilder"]
