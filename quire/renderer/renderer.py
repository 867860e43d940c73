"""Utilities for rendering manuscript markdown into safe, highlighted HTML."""

from __future__ import annotations

import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from .highlighter import DEFAULT_HIGHLIGHT_CLASS, apply_dictionary_highlights
from .safe_markup import SafeMarkupExtension

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension

    from .models import DictionaryEntry
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any


class HtmlContentRenderer:
    """Render markdown and dictionary highlights with consistent styling."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        *,
        hard_breaks: bool = False,
        highlight_class: str = DEFAULT_HIGHLIGHT_CLASS,
        fallback_markdown: str = "",
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for fenced code blocks. Defaults to
            ``"monokai"``.
        hard_breaks : bool, optional
            Render single newlines inside paragraphs as ``<br />``.
        highlight_class : str, optional
            CSS class applied to dictionary highlight spans.
        fallback_markdown : str, optional
            Markdown previewed when the manuscript itself is empty.
        """
        self.pygments_style = pygments_style
        self.hard_breaks = hard_breaks
        self.highlight_class = highlight_class
        self.fallback_markdown = fallback_markdown
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into escaped HTML.

        Every call builds a fresh ``Markdown`` instance, so the output depends
        on ``text`` and the renderer options only.
        """
        if not text.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "sane_lists",
            SafeMarkupExtension(),
        ]
        if self.hard_breaks:
            extensions.append("nl2br")
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(text)

    def preview(
        self, text: str, entries: cabc.Sequence[DictionaryEntry] = ()
    ) -> str:
        """Render ``text`` (or the fallback) and overlay dictionary highlights."""
        source = text or self.fallback_markdown
        return apply_dictionary_highlights(
            self.markdown(source), entries, css_class=self.highlight_class
        )


def render_markdown_to_html(markdown: str) -> str:
    """Render ``markdown`` with the default renderer settings."""
    return HtmlContentRenderer().markdown(markdown)


__all__ = ["HtmlContentRenderer", "render_markdown_to_html"]
