"""Typed dataclasses describing quire editor configuration structures."""

from __future__ import annotations

import dataclasses as dc
import re  # noqa: TC003 - used for runtime type metadata

from quire.plain_text import DEFAULT_HEADING_PATTERNS
from quire.renderer.highlighter import DEFAULT_HIGHLIGHT_CLASS
from quire.renderer.models import DictionaryEntry


class ConfigError(ValueError):
    """Raised when the editor configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class RenderConfig:
    """Options applied when rendering manuscripts to HTML."""

    pygments_style: str = "monokai"
    hard_breaks: bool = False
    highlight_class: str = DEFAULT_HIGHLIGHT_CLASS
    fallback_markdown: str = ""


@dc.dataclass(slots=True)
class PlainTextConfig:
    """Heading patterns recognised when restoring plain text."""

    heading_patterns: tuple[re.Pattern[str], ...] = DEFAULT_HEADING_PATTERNS


@dc.dataclass(slots=True)
class ScaffoldConfig:
    """Chapter skeleton expectations for new manuscripts."""

    minimum_chapters: int = 4


@dc.dataclass(slots=True)
class EditorConfig:
    """Aggregated editor configuration sourced from YAML."""

    render: RenderConfig = dc.field(default_factory=RenderConfig)
    plain_text: PlainTextConfig = dc.field(default_factory=PlainTextConfig)
    scaffold: ScaffoldConfig = dc.field(default_factory=ScaffoldConfig)
    dictionary: list[DictionaryEntry] = dc.field(default_factory=list)


__all__ = [
    "ConfigError",
    "EditorConfig",
    "PlainTextConfig",
    "RenderConfig",
    "ScaffoldConfig",
]
