"""Seed manuscripts with the default four-chapter skeleton.

New projects start from a fixed set of ``## 第N章`` chapters. Existing
manuscripts with too few second-level chapters are topped up with the same
skeleton, and leftover template placeholder headings are removed.
"""

from __future__ import annotations

import logging
import re

from ._constants import DEFAULT_CHAPTER_SCAFFOLD, SHORT_MANUSCRIPT_LENGTH
from .markdown_parser import parse_outline_sections

logger = logging.getLogger(__name__)

PLACEHOLDER_HEADING_PATTERN = re.compile(r"^#+\s*見出しレベル")
CHAPTER_LEVEL = 2


def strip_placeholder_headings(text: str) -> str:
    """Drop template placeholder heading lines such as ``## 見出しレベル2``."""
    lines = text.split("\n")
    kept = [
        line for line in lines if not PLACEHOLDER_HEADING_PATTERN.match(line.strip())
    ]
    return "\n".join(kept)


def count_chapters(text: str) -> int:
    """Return the number of second-level headings in ``text``."""
    return sum(
        1 for section in parse_outline_sections(text) if section.level == CHAPTER_LEVEL
    )


def ensure_chapter_scaffold(text: str, *, minimum: int = 4) -> str:
    """Return ``text`` with placeholders removed and the chapter skeleton applied.

    Parameters
    ----------
    text : str
        Manuscript markdown.
    minimum : int, optional
        Number of second-level chapters a manuscript is expected to have.

    Returns
    -------
    str
        ``text`` minus placeholder headings when it already has ``minimum``
        chapters. Otherwise the default scaffold replaces near-empty
        manuscripts and is appended (after a blank line) to longer ones.
    """
    cleaned = strip_placeholder_headings(text)
    chapters = count_chapters(cleaned)
    if chapters >= minimum:
        return cleaned

    body = cleaned.strip()
    if len(body) < SHORT_MANUSCRIPT_LENGTH:
        logger.debug("Replacing short manuscript with the chapter scaffold")
        return DEFAULT_CHAPTER_SCAFFOLD
    logger.debug("Appending chapter scaffold to manuscript with %d chapters", chapters)
    return f"{body}\n\n{DEFAULT_CHAPTER_SCAFFOLD}"


__all__ = [
    "count_chapters",
    "ensure_chapter_scaffold",
    "strip_placeholder_headings",
]
