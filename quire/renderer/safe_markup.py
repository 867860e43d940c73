"""Markdown extension that keeps rendered manuscripts injection-safe.

Python-Markdown passes raw HTML, autolinks and character entities through to
its output. :class:`SafeMarkupExtension` switches those features off so that
every ``<``, ``>``, ``&`` and ``"`` typed into a manuscript is rendered as
text, aligns ATX heading detection with
:func:`quire.markdown_parser.scan_heading`, and keeps link-reference
definitions visible instead of silently consuming them.
"""

from __future__ import annotations

import re
import typing as typ

from markdown import util
from markdown.blockprocessors import HashHeaderProcessor
from markdown.extensions import Extension
from markdown.postprocessors import Postprocessor
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

UNSAFE_URL_PREFIXES = ("javascript:", "vbscript:", "data:")
URL_ATTRIBUTES = ("href", "src")
ESCAPED_AMP = f"{util.AMP_SUBSTITUTE}amp;"
ESCAPED_QUOTE = f"{util.AMP_SUBSTITUTE}quot;"

STASH_TEXT_QUOTE_PATTERN = re.compile(r'(?P<tag><[^>]*>)|"')

_DISABLED_PREPROCESSORS = ("html_block",)
_DISABLED_INLINE_PATTERNS = ("html", "entity", "autolink", "automail")
_DISABLED_BLOCK_PROCESSORS = ("reference", "setextheader")


class ScannedHeaderProcessor(HashHeaderProcessor):
    """ATX heading processor that requires whitespace and a non-blank label."""

    RE = re.compile(
        r"(?:^|\n)(?P<level>#{1,6})[^\S\n]+(?P<header>[^\n]*\S)[^\S\n]*(?:\n|$)"
    )


class SafeTextTreeprocessor(Treeprocessor):
    """Escape ampersands and quotes in text and drop scriptable URLs.

    Ampersands and quotes are replaced with Python-Markdown's ampersand
    substitute so the serializer cannot mistake ``&copy;`` typed by a user
    for an entity; the ``amp_substitute`` postprocessor turns the marker back
    into ``&`` once serialization has finished.
    """

    def run(self, root: Element) -> Element:
        """Escape every text node under ``root`` and sanitize link targets."""
        for element in root.iter():
            element.text = self._escape(element.text)
            element.tail = self._escape(element.tail)
            for name, value in list(element.attrib.items()):
                if name in URL_ATTRIBUTES and _is_unsafe_url(value):
                    del element.attrib[name]
                else:
                    element.set(name, value.replace("&", ESCAPED_AMP))
        return root

    @staticmethod
    def _escape(text: str | None) -> str | None:
        if not text:
            return text
        if isinstance(text, util.AtomicString):
            # Code spans arrive with ``&``, ``<`` and ``>`` already escaped.
            return util.AtomicString(text.replace('"', ESCAPED_QUOTE))
        return text.replace("&", ESCAPED_AMP).replace('"', ESCAPED_QUOTE)


class StashedQuotePostprocessor(Postprocessor):
    """Escape quotes in the text of stashed HTML before it is spliced back.

    Highlighted code blocks bypass the element tree, so their text is only
    as escaped as Pygments leaves it.
    """

    def run(self, text: str) -> str:
        """Rewrite every stashed block in place and return ``text`` untouched."""
        stash = self.md.htmlStash
        stash.rawHtmlBlocks = [
            STASH_TEXT_QUOTE_PATTERN.sub(_escape_quote, block)
            if isinstance(block, str)
            else block
            for block in stash.rawHtmlBlocks
        ]
        return text


def _escape_quote(match: re.Match[str]) -> str:
    return match.group("tag") or "&quot;"


def _is_unsafe_url(value: str) -> bool:
    """Return whether ``value`` uses a scheme that can execute script."""
    normalized = re.sub(r"\s+", "", value).lower()
    return normalized.startswith(UNSAFE_URL_PREFIXES)


class SafeMarkupExtension(Extension):
    """Register the safe-rendering processors on a Markdown instance."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Disable raw HTML handling and install the escaping processors."""
        for name in _DISABLED_PREPROCESSORS:
            md.preprocessors.deregister(name, strict=False)
        for name in _DISABLED_INLINE_PATTERNS:
            md.inlinePatterns.deregister(name, strict=False)
        for name in _DISABLED_BLOCK_PROCESSORS:
            md.parser.blockprocessors.deregister(name, strict=False)
        md.parser.blockprocessors.register(
            ScannedHeaderProcessor(md.parser), "hashheader", 70
        )
        # Runs after inline parsing (20), prettifying (10) and unescaping (0).
        md.treeprocessors.register(SafeTextTreeprocessor(md), "quire_safe_text", -1)
        # Runs before ``raw_html`` (30) splices stashed code blocks back in.
        md.postprocessors.register(
            StashedQuotePostprocessor(md), "quire_stash_quotes", 35
        )


__all__ = [
    "SafeMarkupExtension",
    "SafeTextTreeprocessor",
    "ScannedHeaderProcessor",
    "StashedQuotePostprocessor",
]
