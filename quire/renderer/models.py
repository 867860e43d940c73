"""Shared dataclasses used by the rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """User-defined term highlighted in rendered manuscripts.

    Attributes
    ----------
    id : str
        Identifier of the entry within its project.
    term : str
        Exact, case-sensitive text to highlight.
    description : str
        Explanation shown alongside highlighted occurrences.
    created_at : datetime.datetime or None
        Creation timestamp in UTC, when known.
    """

    id: str
    term: str
    description: str = ""
    created_at: dt.datetime | None = None

    @property
    def is_usable(self) -> bool:
        """Return whether the term contains anything besides whitespace."""
        return bool(self.term.strip())


def usable_entries(entries: cabc.Iterable[DictionaryEntry]) -> list[DictionaryEntry]:
    """Return entries with a usable term, keeping the first entry per term."""
    seen: set[str] = set()
    result: list[DictionaryEntry] = []
    for entry in entries:
        if not entry.is_usable or entry.term in seen:
            continue
        seen.add(entry.term)
        result.append(entry)
    return result


__all__ = ["DictionaryEntry", "usable_entries"]
