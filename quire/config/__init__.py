"""Load and validate editor configuration YAML for quire.

This subpackage parses the project's ``quire.yaml`` file, merges it with the
built-in defaults, and produces strongly typed dataclasses
(:class:`EditorConfig`, :class:`RenderConfig`, etc.) that the renderer, the
plain-text transcoder and the CLI consume. The primary entry point is
:func:`load_editor_config`.

Examples
--------
>>> from pathlib import Path
>>> from quire.config import load_editor_config
>>> config = load_editor_config(Path("quire.yaml"))  # doctest: +SKIP
>>> [entry.term for entry in config.dictionary]  # doctest: +SKIP
['猫背', '猫']
"""

from .loader import load_editor_config
from .models import (
    ConfigError,
    EditorConfig,
    PlainTextConfig,
    RenderConfig,
    ScaffoldConfig,
)

__all__ = [
    "ConfigError",
    "EditorConfig",
    "PlainTextConfig",
    "RenderConfig",
    "ScaffoldConfig",
    "load_editor_config",
]
