"""Tests for moving sections within a manuscript.

Usage
-----
Run ``pytest tests/test_reorder.py -v``.
"""

from __future__ import annotations

import itertools

import pytest

from quire.markdown_parser import parse_outline_sections
from quire.reorder import reorder_sections_in_markdown

SCENARIO = "# T\n\n## A\nbody A\n\n## B\nbody B\n"

DOCUMENTS = [
    SCENARIO,
    "## A\na\n## B\nb\n## C\nc",
    "intro\n\n## 第一章\n本文\n### 第1節\n節\n## 第二章\n続き\n\n",
    "# One\n# Two\n# Three",
]


def _ids(text: str) -> dict[str, str]:
    return {section.text: section.id for section in parse_outline_sections(text)}


def test_moves_later_section_before_earlier_one() -> None:
    """Moving B before A swaps the two chapters and keeps the title."""
    ids = _ids(SCENARIO)
    result = reorder_sections_in_markdown(SCENARIO, ids["B"], ids["A"])
    assert result == "# T\n\n## B\nbody B\n\n## A\nbody A\n", (
        f"unexpected reorder result {result!r}"
    )


def test_moves_earlier_section_before_later_one() -> None:
    """Moving forward inserts the block immediately before the target."""
    text = "## A\na\n## B\nb\n## C\nc"
    ids = _ids(text)
    result = reorder_sections_in_markdown(text, ids["A"], ids["C"])
    assert result == "## B\nb\n## A\na\n## C\nc"


def test_moving_before_the_next_section_is_identity() -> None:
    """A section already directly before its target stays where it is."""
    text = "## A\na\n## B\nb"
    ids = _ids(text)
    assert reorder_sections_in_markdown(text, ids["A"], ids["B"]) == text


@pytest.mark.parametrize(
    ("source_id", "target_id"),
    [("a-2", "a-2"), ("missing", "b-3"), ("a-2", "missing"), ("", "")],
)
def test_invalid_requests_return_text_unchanged(
    source_id: str, target_id: str
) -> None:
    """Identical or unknown ids are silent no-ops."""
    result = reorder_sections_in_markdown(SCENARIO, source_id, target_id)
    assert result == SCENARIO, "invalid requests must not modify the manuscript"


def test_sub_headings_do_not_travel_with_their_parent() -> None:
    """Only the moved heading's own lines move."""
    text = "## A\na\n### A1\na1\n## B\nb"
    ids = _ids(text)
    result = reorder_sections_in_markdown(text, ids["A"], ids["B"])
    assert result == "### A1\na1\n## A\na\n## B\nb", (
        "the sub-heading should remain at its original position"
    )


def test_crlf_line_endings_are_preserved() -> None:
    """Documents using CRLF keep CRLF after a move."""
    text = "## A\r\na\r\n## B\r\nb"
    ids = _ids(text)
    assert reorder_sections_in_markdown(text, ids["B"], ids["A"]) == (
        "## B\r\nb\r\n## A\r\na"
    )


def test_mixed_line_endings_are_not_normalised() -> None:
    """A move keeps the document's sequence of CRLF and LF terminators."""
    text = "## A\r\na\n## B\nb"
    ids = _ids(text)
    assert reorder_sections_in_markdown(text, ids["B"], ids["A"]) == (
        "## B\r\nb\n## A\na"
    )


def test_ids_are_rederived_after_a_move() -> None:
    """Ids from before a move no longer address the moved sections."""
    ids = _ids(SCENARIO)
    moved = reorder_sections_in_markdown(SCENARIO, ids["B"], ids["A"])
    assert _ids(moved) == {"T": "t-1", "B": "b-2", "A": "a-3"}
    assert reorder_sections_in_markdown(moved, ids["A"], ids["B"]) == moved, (
        "stale ids should not resolve to any section"
    )


@pytest.mark.parametrize("text", DOCUMENTS)
def test_every_move_preserves_lines(text: str) -> None:
    """Any move keeps the same number of lines and the same line multiset."""
    sections = parse_outline_sections(text)
    before = text.split("\n")
    for source, target in itertools.permutations(sections, 2):
        result = reorder_sections_in_markdown(text, source.id, target.id)
        after = result.split("\n")
        assert len(after) == len(before), (
            f"line count changed moving {source.id} before {target.id}"
        )
        assert sorted(after) == sorted(before), (
            f"line content changed moving {source.id} before {target.id}"
        )
