"""Lossy conversion between markdown and the heading-free plain editing view.

``to_plain_text`` forgets heading markers. ``from_plain_text`` tries to put
them back: it walks the plain text and treats every line that looks like a
numbered chapter, section or part heading as the next heading of the
reference markdown, re-using that heading's level. Matching is positional,
never keyed on content, so headings whose label does not look like a chapter
marker are lost and reordered headings receive the wrong levels.

Examples
--------
>>> from quire.plain_text import from_plain_text, to_plain_text
>>> markdown = "## 第一章\\n本文\\n## 第二章\\n続き"
>>> plain = to_plain_text(markdown)
>>> plain
'第一章\\n本文\\n第二章\\n続き'
>>> from_plain_text(plain, markdown) == markdown
True
"""

from __future__ import annotations

import logging
import re
import typing as typ

from .markdown_parser import (
    join_lines,
    line_separators,
    parse_outline_sections,
    split_lines,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

# Stacked markers ("## # x") are removed in one pass so stripping is idempotent.
# A marker with nothing after it is body text, as in the outline scanner.
HEADING_MARKER_PATTERN = re.compile(r"^(?:#{1,6}[^\S\r\n]+)+(?=\S)", re.MULTILINE)

_NUMERAL = "[一二三四五六七八九十百千万0-9]+"
DEFAULT_HEADING_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"^第{_NUMERAL}章"),
    re.compile(r"^Chapter\s+[0-9]+", re.IGNORECASE),
    re.compile(rf"^第{_NUMERAL}節"),
    re.compile(rf"^第{_NUMERAL}部"),
)


def remove_hash_symbols(text: str) -> str:
    """Strip a leading ``#{1,6}`` + whitespace marker from every line."""
    return HEADING_MARKER_PATTERN.sub("", text)


def to_plain_text(markdown: str) -> str:
    """Project markdown onto the plain view by dropping heading markers.

    Heading labels stay in place and every other line passes through
    unchanged. Heading levels are discarded; applying the projection twice
    gives the same result as applying it once.
    """
    if not markdown:
        return ""
    return remove_hash_symbols(markdown)


def is_heading_candidate(
    line: str, patterns: cabc.Iterable[re.Pattern[str]] = DEFAULT_HEADING_PATTERNS
) -> bool:
    """Return whether the trimmed ``line`` looks like a chapter heading.

    Patterns are searched, so only anchored patterns restrict the match to
    the start of the line.
    """
    trimmed = line.strip()
    return bool(trimmed) and any(pattern.search(trimmed) for pattern in patterns)


def from_plain_text(
    plain: str,
    reference_markdown: str,
    *,
    patterns: cabc.Sequence[re.Pattern[str]] | None = None,
) -> str:
    """Restore heading markers on ``plain`` using ``reference_markdown``.

    Parameters
    ----------
    plain : str
        Plain text, usually an edited copy of ``to_plain_text(reference)``.
    reference_markdown : str
        Last known-good markdown whose outline supplies heading levels.
    patterns : Sequence[re.Pattern[str]], optional
        Heading-candidate patterns matched against each trimmed line;
        defaults to :data:`DEFAULT_HEADING_PATTERNS`.

    Returns
    -------
    str
        Markdown in which each candidate line consumes the next reference
        section and is prefixed with that section's marker. Lines that match
        no pattern, and candidates left over once the reference outline is
        exhausted, are emitted verbatim.
    """
    if not plain:
        return ""

    candidates = patterns if patterns is not None else DEFAULT_HEADING_PATTERNS
    reference = parse_outline_sections(reference_markdown)
    result: list[str] = []
    restored = 0
    for line in split_lines(plain):
        if restored < len(reference) and is_heading_candidate(line, candidates):
            prefix = "#" * reference[restored].level
            result.append(f"{prefix} {line.strip()}")
            restored += 1
        else:
            result.append(line)

    if restored < len(reference):
        logger.debug(
            "Restored %d of %d reference headings; the rest stay body text",
            restored,
            len(reference),
        )
    return join_lines(result, line_separators(plain))


def apply_plain_edit(
    edited_plain: str,
    reference_markdown: str,
    *,
    patterns: cabc.Sequence[re.Pattern[str]] | None = None,
) -> str:
    """Turn an edit made in the plain view back into markdown.

    Manually typed heading markers are removed first so the plain view can
    never introduce headings of its own; restoration then follows
    :func:`from_plain_text`.
    """
    return from_plain_text(
        remove_hash_symbols(edited_plain), reference_markdown, patterns=patterns
    )


def compile_heading_patterns(
    extra: cabc.Iterable[str] = (),
) -> tuple[re.Pattern[str], ...]:
    """Return the default heading patterns followed by compiled ``extra`` ones."""
    return DEFAULT_HEADING_PATTERNS + tuple(re.compile(source) for source in extra)


__all__ = [
    "DEFAULT_HEADING_PATTERNS",
    "HEADING_MARKER_PATTERN",
    "apply_plain_edit",
    "compile_heading_patterns",
    "from_plain_text",
    "is_heading_candidate",
    "remove_hash_symbols",
    "to_plain_text",
]
