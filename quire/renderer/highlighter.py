"""Overlay dictionary-term highlights onto rendered HTML.

The highlighter never parses HTML into a tree: it splits the markup into tags
and text runs, touches only the text runs, and copies every tag through
byte for byte. Character references inside text are decoded for matching
only, so a term such as ``A&B`` matches ``A&amp;B`` while the original
escaping is preserved in the output.

Longer terms are claimed first. Once a run of characters is claimed it is
never reconsidered, so a short term cannot split a longer one:

>>> from quire.renderer.highlighter import apply_dictionary_highlights
>>> from quire.renderer.models import DictionaryEntry
>>> entries = [DictionaryEntry("d1", "猫"), DictionaryEntry("d2", "猫背")]
>>> print(apply_dictionary_highlights("<p>猫背の猫</p>", entries, css_class="t"))
<p><span class="t" data-term-id="d2">猫背</span>の<span class="t" data-term-id="d1">猫</span></p>
"""

from __future__ import annotations

import re
import typing as typ
from html import escape, unescape

from .models import usable_entries

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import DictionaryEntry

DEFAULT_HIGHLIGHT_CLASS = "dictionary-term"
TAG_PATTERN = re.compile(r"<!--.*?-->|<[^>]*>", re.DOTALL)
RAW_TEXT_OPEN_PATTERN = re.compile(r"<(script|style)\b", re.IGNORECASE)
TEXT_UNIT_PATTERN = re.compile(
    r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);|.", re.DOTALL
)


def apply_dictionary_highlights(
    html: str,
    entries: cabc.Iterable[DictionaryEntry],
    *,
    css_class: str = DEFAULT_HIGHLIGHT_CLASS,
) -> str:
    """Wrap dictionary terms found in the text nodes of ``html``.

    Parameters
    ----------
    html : str
        Freshly rendered HTML. Passing output of this function back in is not
        supported.
    entries : Iterable[DictionaryEntry]
        Dictionary snapshot. Entries with blank terms are ignored and the
        first entry wins when several share a term.
    css_class : str, optional
        Class attribute applied to each highlight span.

    Returns
    -------
    str
        HTML with every claimed occurrence wrapped in a ``<span>``. The input
        is returned unchanged when no usable entry exists.
    """
    terms = sorted(
        usable_entries(entries), key=lambda entry: len(entry.term), reverse=True
    )
    if not terms or not html:
        return html

    pieces: list[str] = []
    cursor = 0
    raw_text_tag: str | None = None
    for match in TAG_PATTERN.finditer(html):
        text = html[cursor : match.start()]
        pieces.append(text if raw_text_tag else _highlight_text(text, terms, css_class))
        tag = match.group(0)
        pieces.append(tag)
        cursor = match.end()
        if raw_text_tag:
            if tag.lower().startswith(f"</{raw_text_tag}"):
                raw_text_tag = None
        elif opened := RAW_TEXT_OPEN_PATTERN.match(tag):
            raw_text_tag = opened.group(1).lower()
    tail = html[cursor:]
    pieces.append(tail if raw_text_tag else _highlight_text(tail, terms, css_class))
    return "".join(pieces)


def _highlight_text(
    raw: str, terms: cabc.Sequence[DictionaryEntry], css_class: str
) -> str:
    """Highlight claimed term occurrences inside one raw text run."""
    if not raw:
        return raw
    units = TEXT_UNIT_PATTERN.findall(raw)
    decoded_units = [unescape(unit) if len(unit) > 1 else unit for unit in units]

    # Map decoded character offsets back to unit indices; matches must start
    # and end on a unit boundary so entities are never split.
    boundaries: dict[int, int] = {}
    offset = 0
    for index, part in enumerate(decoded_units):
        boundaries[offset] = index
        offset += len(part)
    boundaries[offset] = len(units)
    decoded = "".join(decoded_units)

    claims: list[tuple[int, int, DictionaryEntry]] = []
    for entry in terms:
        start = decoded.find(entry.term)
        while start != -1:
            end = start + len(entry.term)
            first = boundaries.get(start)
            last = boundaries.get(end)
            on_boundary = first is not None and last is not None
            if on_boundary and not _overlaps(claims, first, last):
                claims.append((first, last, entry))
                start = decoded.find(entry.term, end)
            else:
                start = decoded.find(entry.term, start + 1)

    if not claims:
        return raw
    claims.sort(key=lambda claim: claim[0])
    pieces: list[str] = []
    cursor = 0
    for first, last, entry in claims:
        pieces.append("".join(units[cursor:first]))
        pieces.append(_wrap("".join(units[first:last]), entry, css_class))
        cursor = last
    pieces.append("".join(units[cursor:]))
    return "".join(pieces)


def _overlaps(
    claims: cabc.Iterable[tuple[int, int, DictionaryEntry]], first: int, last: int
) -> bool:
    return any(first < end and start < last for start, end, _ in claims)


def _wrap(raw_term: str, entry: DictionaryEntry, css_class: str) -> str:
    """Return ``raw_term`` wrapped in a highlight span for ``entry``."""
    attributes = [
        f'class="{escape(css_class, quote=True)}"',
        f'data-term-id="{escape(entry.id, quote=True)}"',
    ]
    if entry.description:
        attributes.append(f'title="{escape(entry.description, quote=True)}"')
    return f"<span {' '.join(attributes)}>{raw_term}</span>"


def dictionary_markdown(entries: cabc.Iterable[DictionaryEntry]) -> str:
    """Return the project dictionary as a markdown document.

    Each usable entry becomes a level-three heading followed by its
    description; entries are separated by blank lines.
    """
    return "\n\n".join(
        f"### {entry.term}\n{entry.description}" for entry in usable_entries(entries)
    )


__all__ = [
    "DEFAULT_HIGHLIGHT_CLASS",
    "apply_dictionary_highlights",
    "dictionary_markdown",
]
