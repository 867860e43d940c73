"""Utilities for rendering manuscripts, highlighting terms, and reading edits back."""

from .highlighter import (
    DEFAULT_HIGHLIGHT_CLASS,
    apply_dictionary_highlights,
    dictionary_markdown,
)
from .html_extract import html_to_markdown
from .models import DictionaryEntry
from .renderer import HtmlContentRenderer, render_markdown_to_html
from .safe_markup import SafeMarkupExtension

__all__ = [
    "DEFAULT_HIGHLIGHT_CLASS",
    "DictionaryEntry",
    "HtmlContentRenderer",
    "SafeMarkupExtension",
    "apply_dictionary_highlights",
    "dictionary_markdown",
    "html_to_markdown",
    "render_markdown_to_html",
]
