"""Utility helpers shared by the quire configuration loader."""

from __future__ import annotations

import datetime as dt
import re
import typing as typ

from quire.plain_text import compile_heading_patterns
from quire.renderer.models import DictionaryEntry

from .models import ConfigError, PlainTextConfig, RenderConfig, ScaffoldConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_timestamp(value: dt.datetime | str | None) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def _build_render_config(payload: typ.Mapping[str, typ.Any]) -> RenderConfig:
    """Build a RenderConfig from the ``render`` mapping, keeping defaults."""
    base = RenderConfig()
    hard_breaks = payload.get("hard_breaks", base.hard_breaks)
    if not isinstance(hard_breaks, bool):
        msg = "'render.hard_breaks' must be a boolean."
        raise ConfigError(msg)
    return RenderConfig(
        pygments_style=payload.get("pygments_style", base.pygments_style),
        hard_breaks=hard_breaks,
        highlight_class=_optional_str(payload.get("highlight_class"))
        or base.highlight_class,
        fallback_markdown=payload.get("fallback_markdown") or base.fallback_markdown,
    )


def _build_plain_text_config(payload: typ.Mapping[str, typ.Any]) -> PlainTextConfig:
    """Compile configured extra heading patterns on top of the defaults."""
    extra = payload.get("extra_heading_patterns") or []
    if not isinstance(extra, list):
        msg = "'plain_text.extra_heading_patterns' must be a list of regexes."
        raise ConfigError(msg)
    try:
        patterns = compile_heading_patterns(str(source) for source in extra)
    except re.error as exc:
        msg = f"Invalid heading pattern in 'plain_text.extra_heading_patterns': {exc}"
        raise ConfigError(msg) from exc
    return PlainTextConfig(heading_patterns=patterns)


def _build_scaffold_config(payload: typ.Mapping[str, typ.Any]) -> ScaffoldConfig:
    """Build a ScaffoldConfig, rejecting non-positive chapter counts."""
    minimum = payload.get("minimum_chapters", ScaffoldConfig().minimum_chapters)
    if not isinstance(minimum, int) or isinstance(minimum, bool) or minimum < 1:
        msg = "'scaffold.minimum_chapters' must be a positive integer."
        raise ConfigError(msg)
    return ScaffoldConfig(minimum_chapters=minimum)


def _build_dictionary(raw: object) -> list[DictionaryEntry]:
    """Build dictionary entries from the ``dictionary`` list."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        msg = "'dictionary' must be a list of entries."
        raise ConfigError(msg)
    entries: list[DictionaryEntry] = []
    for index, payload in enumerate(raw, start=1):
        if not isinstance(payload, dict):
            msg = f"Dictionary entry #{index} must be a mapping."
            raise ConfigError(msg)
        term = payload.get("term")
        if not isinstance(term, str) or not term.strip():
            msg = f"Dictionary entry #{index} is missing a 'term'."
            raise ConfigError(msg)
        entries.append(
            DictionaryEntry(
                id=_optional_str(payload.get("id")) or f"dict-{index}",
                term=term,
                description=str(payload.get("description") or ""),
                created_at=_parse_timestamp(payload.get("created_at")),
            )
        )
    return entries


__all__ = [
    "_build_dictionary",
    "_build_plain_text_config",
    "_build_render_config",
    "_build_scaffold_config",
    "_optional_str",
    "_parse_timestamp",
]
