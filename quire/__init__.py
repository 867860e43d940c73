"""Outline, reorder, render and transcode markdown manuscripts.

This package exposes the pure text operations behind a manuscript editor
(outline parsing, section reordering, plain-text round trips, safe HTML
rendering and dictionary highlighting) together with the ``quire`` CLI.

Exports
-------
- ``parse_outline_sections``: flat heading outline with line ranges.
- ``reorder_sections_in_markdown``: move a section before another.
- ``to_plain_text`` / ``from_plain_text`` / ``remove_hash_symbols`` /
  ``apply_plain_edit``: the lossy plain-view round trip.
- ``render_markdown_to_html`` / ``apply_dictionary_highlights``: preview HTML.
- ``app`` / ``main``: the Cyclopts application.

Examples
--------
>>> from quire import parse_outline_sections
>>> [section.text for section in parse_outline_sections("# A\\n## B")]
['A', 'B']
>>> from quire import render_markdown_to_html
>>> render_markdown_to_html("<script>")
'<p>&lt;script&gt;</p>'
"""

from __future__ import annotations

from .cli import app, main
from .config import EditorConfig, load_editor_config
from .markdown_parser import Section, parse_outline_sections, scan_heading
from .plain_text import (
    apply_plain_edit,
    from_plain_text,
    remove_hash_symbols,
    to_plain_text,
)
from .renderer import (
    DictionaryEntry,
    HtmlContentRenderer,
    apply_dictionary_highlights,
    dictionary_markdown,
    html_to_markdown,
    render_markdown_to_html,
)
from .reorder import reorder_sections_in_markdown
from .scaffold import ensure_chapter_scaffold

__all__ = [
    "DictionaryEntry",
    "EditorConfig",
    "HtmlContentRenderer",
    "Section",
    "app",
    "apply_dictionary_highlights",
    "apply_plain_edit",
    "dictionary_markdown",
    "ensure_chapter_scaffold",
    "from_plain_text",
    "html_to_markdown",
    "load_editor_config",
    "main",
    "parse_outline_sections",
    "remove_hash_symbols",
    "render_markdown_to_html",
    "reorder_sections_in_markdown",
    "scan_heading",
    "to_plain_text",
]
