"""Move outline sections around a markdown document by line range.

The reorderer never trusts a cached outline: it re-parses the text it is
given, resolves both ids against that fresh outline, and moves the source
section's ``[start_line, end_line]`` block so it sits immediately before the
target heading. Sub-headings are independent sections and stay where they
are.

Example
-------
>>> from quire.markdown_parser import parse_outline_sections
>>> from quire.reorder import reorder_sections_in_markdown
>>> text = "## A\\nbody A\\n## B\\nbody B"
>>> a, b = parse_outline_sections(text)
>>> reorder_sections_in_markdown(text, b.id, a.id)
'## B\\nbody B\\n## A\\nbody A'
"""

from __future__ import annotations

import logging

from .markdown_parser import (
    find_section,
    join_lines,
    line_separators,
    parse_outline_sections,
    split_lines,
)

logger = logging.getLogger(__name__)


def reorder_sections_in_markdown(text: str, source_id: str, target_id: str) -> str:
    """Return ``text`` with the source section moved before the target section.

    Parameters
    ----------
    text : str
        Markdown document to rearrange.
    source_id : str
        Id of the section to move, taken from a parse of ``text``.
    target_id : str
        Id of the section the source should be placed in front of.

    Returns
    -------
    str
        The rearranged document. The input is returned unchanged when either
        id is unknown or both ids are equal. Line count and the multiset of
        lines are always preserved.
    """
    if source_id == target_id:
        return text

    sections = parse_outline_sections(text)
    source = find_section(sections, source_id)
    target = find_section(sections, target_id)
    if source is None or target is None:
        logger.debug(
            "Ignoring reorder of %r before %r: id not in current outline",
            source_id,
            target_id,
        )
        return text

    lines = split_lines(text)
    moved = lines[source.start_line : source.end_line + 1]
    remaining = lines[: source.start_line] + lines[source.end_line + 1 :]

    insert_at = target.start_line
    if target.start_line > source.end_line:
        insert_at -= len(moved)

    remaining[insert_at:insert_at] = moved
    logger.debug(
        "Moved %d lines of section %r before %r", len(moved), source_id, target_id
    )
    return join_lines(remaining, line_separators(text))


__all__ = ["reorder_sections_in_markdown"]
