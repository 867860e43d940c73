"""Cyclopts CLI entrypoint for working with markdown manuscripts.

The ``quire`` console script exposes the outline engine on files: list the
heading outline, move a section before another, switch between markdown and
the plain editing view, render dictionary-highlighted HTML, and apply the
default chapter scaffold. Results are printed to stdout unless an output path
(or ``--in-place``) is given.

Set ``QUIRE_LOG_LEVEL=DEBUG`` to see what the engine decided (ignored
reorders, headings left as body text, scaffold choices).

Examples
--------
Print the outline of a manuscript:

>>> from quire.cli import app
>>> app(["outline", "novel.md"])  # doctest: +SKIP

Move a chapter and rewrite the file:

>>> app(["reorder", "novel.md", "第三章-3", "第一章-1", "--in-place"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_FILENAME
from .config import load_editor_config
from .markdown_parser import parse_outline_sections
from .plain_text import from_plain_text, to_plain_text
from .preview_page import PreviewPageBuilder
from .reorder import reorder_sections_in_markdown
from .scaffold import ensure_chapter_scaffold

if typ.TYPE_CHECKING:
    from .config import EditorConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

app = App(name="quire", config=cyclopts.config.Env("QUIRE_", command=False))  # type: ignore[unknown-argument]

logger = logging.getLogger(__name__)


def _read(path: Path) -> str:
    """Return the UTF-8 contents of ``path``."""
    if not path.exists():
        msg = f"Manuscript '{path}' not found."
        raise FileNotFoundError(msg)
    return path.read_text(encoding="utf-8")


def _emit(text: str, output: Path | None) -> None:
    """Write ``text`` to ``output`` or print it to stdout."""
    if output is None:
        print(text, end="" if text.endswith("\n") else "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


def _resolve_output(path: Path, output: Path | None, *, in_place: bool) -> Path | None:
    """Return where a rewritten manuscript should go."""
    if in_place and output is not None:
        msg = "Cannot combine --in-place with --output."
        raise ValueError(msg)
    return path if in_place else output


def _load_config(path: Path | None) -> EditorConfig:
    """Load ``path``, falling back to ``quire.yaml`` in the working directory."""
    if path is None:
        candidate = Path(DEFAULT_CONFIG_FILENAME)
        if not candidate.is_file():
            return load_editor_config()
        logger.debug("Using %s from the working directory", candidate)
        path = candidate
    return load_editor_config(path)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="List the heading outline of a manuscript.")
def outline(
    path: Path,
    *,
    as_json: typ.Annotated[
        bool, Parameter(name="--json", help="Print the outline as JSON")
    ] = False,
) -> None:
    """Print every heading section with its id and line range.

    Parameters
    ----------
    path : Path
        Markdown manuscript to scan.
    as_json : bool, optional
        Emit a JSON array of section records instead of an indented listing.
    """
    sections = parse_outline_sections(_read(path))
    if as_json:
        payload = [dc.asdict(section) for section in sections]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    if not sections:
        print("no headings found")
        return
    for section in sections:
        indent = "  " * (section.level - 1)
        print(
            f"{indent}{section.text}  [{section.id}] "
            f"lines {section.start_line}-{section.end_line}"
        )


@app.command(help="Move a section so it sits before another section.")
def reorder(
    path: Path,
    source_id: str,
    target_id: str,
    *,
    in_place: typ.Annotated[
        bool, Parameter(help="Rewrite the manuscript file")
    ] = False,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the result to this path")
    ] = None,
) -> None:
    """Move ``source_id`` before ``target_id`` using ids from ``quire outline``.

    Unknown or identical ids leave the manuscript unchanged.

    Raises
    ------
    ValueError
        If ``--in-place`` and ``--output`` are both supplied.
    """
    destination = _resolve_output(path, output, in_place=in_place)
    text = _read(path)
    updated = reorder_sections_in_markdown(text, source_id, target_id)
    if updated == text:
        logger.info("Outline unchanged for %s", path)
    _emit(updated, destination)


@app.command(help="Print the plain (heading-marker free) view of a manuscript.")
def plain(
    path: Path,
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the plain text to this path")
    ] = None,
) -> None:
    """Strip heading markers from ``path`` and emit the result."""
    _emit(to_plain_text(_read(path)), output)


@app.command(help="Restore heading markers on plain text from a reference manuscript.")
def restore(
    path: Path,
    *,
    reference: typ.Annotated[
        Path, Parameter(help="Last known-good markdown manuscript")
    ],
    config: typ.Annotated[
        Path | None, Parameter(help="Path to quire config", env_var="QUIRE_CONFIG")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the restored markdown to this path")
    ] = None,
) -> None:
    """Rebuild markdown from the plain text at ``path``.

    Only lines that look like numbered chapter, section or part headings are
    restored; other former headings stay body text.
    """
    editor_config = _load_config(config)
    restored = from_plain_text(
        _read(path),
        _read(reference),
        patterns=editor_config.plain_text.heading_patterns,
    )
    _emit(restored, output)


@app.command(help="Render a manuscript to HTML with dictionary highlights.")
def render(
    path: Path,
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to quire config", env_var="QUIRE_CONFIG")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the HTML to this path")
    ] = None,
    standalone: typ.Annotated[
        bool, Parameter(help="Wrap the fragment in a full preview page")
    ] = False,
    title: typ.Annotated[str, Parameter(help="Title of the standalone page")] = "",
) -> None:
    """Render ``path`` into HTML, highlighting configured dictionary terms."""
    editor_config = _load_config(config)
    builder = PreviewPageBuilder(editor_config)
    markdown = _read(path)
    if standalone:
        html = builder.render(markdown, title=title)
    else:
        html = builder.renderer.preview(markdown, editor_config.dictionary)
    _emit(html, output)


@app.command(help="Apply the default chapter scaffold to a manuscript.")
def scaffold(
    path: Path,
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to quire config", env_var="QUIRE_CONFIG")
    ] = None,
    in_place: typ.Annotated[
        bool, Parameter(help="Rewrite the manuscript file")
    ] = False,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the result to this path")
    ] = None,
) -> None:
    """Top up ``path`` with default chapters when it has too few.

    Raises
    ------
    ValueError
        If ``--in-place`` and ``--output`` are both supplied.
    """
    destination = _resolve_output(path, output, in_place=in_place)
    editor_config = _load_config(config)
    text = ensure_chapter_scaffold(
        _read(path), minimum=editor_config.scaffold.minimum_chapters
    )
    _emit(text, destination)


def _configure_logging() -> None:
    """Configure root logging from ``QUIRE_LOG_LEVEL`` (default ``WARNING``)."""
    level_name = os.getenv("QUIRE_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main() -> None:
    """Invoke the Cyclopts application that powers the `quire` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    _configure_logging()
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
