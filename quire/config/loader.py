"""Load editor configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .helpers import (
    _build_dictionary,
    _build_plain_text_config,
    _build_render_config,
    _build_scaffold_config,
)
from .models import ConfigError, EditorConfig

if typ.TYPE_CHECKING:
    from pathlib import Path

SECTION_KEYS = ("render", "plain_text", "scaffold")


def load_editor_config(path: Path | None = None) -> EditorConfig:
    """Load the YAML configuration describing rendering and dictionary choices.

    Parameters
    ----------
    path : Path, optional
        Filesystem path to the YAML configuration file (for example,
        ``quire.yaml``). When ``None`` the built-in defaults are returned.

    Returns
    -------
    EditorConfig
        Parsed configuration including render options, plain-text heading
        patterns, scaffold expectations, and dictionary entries.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigError
        If a section or dictionary entry is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from quire.config import load_editor_config
    >>> config = load_editor_config(Path("quire.yaml"))  # doctest: +SKIP
    >>> config.render.highlight_class  # doctest: +SKIP
    'dictionary-term'
    """
    if path is None:
        return EditorConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    for key in SECTION_KEYS:
        if not isinstance(raw.get(key) or {}, dict):
            msg = f"'{key}' must be a mapping."
            raise ConfigError(msg)

    return EditorConfig(
        render=_build_render_config(raw.get("render") or {}),
        plain_text=_build_plain_text_config(raw.get("plain_text") or {}),
        scaffold=_build_scaffold_config(raw.get("scaffold") or {}),
        dictionary=_build_dictionary(raw.get("dictionary")),
    )


__all__ = ["load_editor_config"]
