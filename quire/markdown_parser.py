r"""Parse Markdown manuscripts into a flat outline of heading sections.

This module powers quire's outline view by scanning each line for ATX
headings and recording the line range every heading governs. Sections are
returned as a flat, ordered list; ``level`` carries the hierarchy for display
purposes but sections are never nested.

Example
-------
>>> from quire.markdown_parser import parse_outline_sections
>>> sections = parse_outline_sections("# Title\n\n## Intro\nBody text")
>>> [(s.level, s.text, s.start_line, s.end_line) for s in sections]
[(1, 'Title', 0, 1), (2, 'Intro', 2, 3)]
"""

from __future__ import annotations

import dataclasses as dc
import re

HEADING_PATTERN = re.compile(r"^(#{1,6})[^\S\r\n]+(.*\S.*)$")
LINE_BREAK_PATTERN = re.compile(r"\r?\n")


@dc.dataclass(frozen=True, slots=True)
class HeadingMatch:
    """Result of scanning a single heading line.

    Attributes
    ----------
    level : int
        Number of leading ``#`` markers (1-6).
    text : str
        Heading label with the marker and surrounding whitespace removed.
    """

    level: int
    text: str


@dc.dataclass(frozen=True, slots=True)
class Section:
    """Heading metadata and the line range it governs.

    Attributes
    ----------
    id : str
        Identifier unique within one parse result. It is rebuilt on every
        parse, so callers must re-parse before reusing an id after an edit.
    level : int
        Heading level between 1 and 6.
    text : str
        Trimmed heading label.
    start_line : int
        Zero-based index of the heading line.
    end_line : int
        Index of the last line belonging to the section.
    """

    id: str
    level: int
    text: str
    start_line: int
    end_line: int

    @property
    def line_count(self) -> int:
        """Return the number of lines covered by the section."""
        return self.end_line - self.start_line + 1


def split_lines(text: str) -> list[str]:
    """Split ``text`` into lines, keeping the empty tail after a final newline."""
    return LINE_BREAK_PATTERN.split(text)


def line_separators(text: str) -> list[str]:
    """Return the terminators between the lines of ``text``, in order."""
    return LINE_BREAK_PATTERN.findall(text)


def join_lines(lines: list[str], separators: list[str]) -> str:
    """Join ``lines`` using ``separators`` gap by gap.

    Rearranging lines keeps the terminator of each gap, so a document with
    mixed endings keeps every one of its CRLF and LF separators.
    """
    parts = [lines[0]] if lines else []
    for separator, line in zip(separators, lines[1:], strict=True):
        parts.extend((separator, line))
    return "".join(parts)


def scan_heading(line: str) -> HeadingMatch | None:
    """Return the heading level and label for ``line`` or ``None``.

    A heading is one to six ``#`` at the very start of the line, at least one
    whitespace character, and a non-blank remainder. ``#title`` and
    ``####### title`` are plain text.
    """
    match = HEADING_PATTERN.match(line)
    if match is None:
        return None
    markers, label = match.groups()
    return HeadingMatch(level=len(markers), text=label.strip())


def _slugify(title: str) -> str:
    slug = re.sub(r"[\W_]+", "-", title.lower()).strip("-")
    return slug or "section"


def _section_id(title: str, ordinal: int) -> str:
    """Build an id from the heading label and its 1-based position."""
    return f"{_slugify(title)}-{ordinal}"


def parse_outline_sections(text: str) -> list[Section]:
    """Split markdown into ordered, non-overlapping heading sections.

    Parameters
    ----------
    text : str
        Raw markdown document.

    Returns
    -------
    list[Section]
        Sections in document order. Each section ends on the line before the
        next heading of any level, or on the last line of the document. An
        empty list is returned when the document has no heading lines.
    """
    lines = split_lines(text)
    entries: list[tuple[int, HeadingMatch]] = []
    for index, line in enumerate(lines):
        heading = scan_heading(line)
        if heading is not None:
            entries.append((index, heading))
    if not entries:
        return []

    sections: list[Section] = []
    for idx, (start, heading) in enumerate(entries):
        end = entries[idx + 1][0] - 1 if idx + 1 < len(entries) else len(lines) - 1
        sections.append(
            Section(
                id=_section_id(heading.text, idx + 1),
                level=heading.level,
                text=heading.text,
                start_line=start,
                end_line=end,
            )
        )
    return sections


def find_section(sections: list[Section], section_id: str) -> Section | None:
    """Return the section with ``section_id`` from ``sections``, if present."""
    return next((section for section in sections if section.id == section_id), None)


__all__ = [
    "HEADING_PATTERN",
    "HeadingMatch",
    "Section",
    "find_section",
    "join_lines",
    "line_separators",
    "parse_outline_sections",
    "scan_heading",
    "split_lines",
]
