"""Tests for the ``quire`` CLI commands.

The command functions are called directly with ``tmp_path`` manuscripts and
their stdout captured through ``capsys``.

Usage
-----
Run ``pytest tests/test_cli.py -v``.
"""

from __future__ import annotations

import json
import logging
import typing as typ

import pytest
from bs4 import BeautifulSoup

from quire import cli
from quire._constants import DEFAULT_CHAPTER_SCAFFOLD

if typ.TYPE_CHECKING:
    from pathlib import Path

MANUSCRIPT = "# T\n\n## A\nbody A\n\n## B\nbody B\n"


def _manuscript(tmp_path: Path, text: str = MANUSCRIPT) -> Path:
    path = tmp_path / "novel.md"
    path.write_text(text, encoding="utf-8")
    return path


def test_outline_lists_sections(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """The listing is indented by level and shows ids and ranges."""
    cli.outline(_manuscript(tmp_path))
    assert capsys.readouterr().out.splitlines() == [
        "T  [t-1] lines 0-1",
        "  A  [a-2] lines 2-4",
        "  B  [b-3] lines 5-7",
    ]


def test_outline_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """``--json`` emits section records."""
    cli.outline(_manuscript(tmp_path), as_json=True)
    payload = json.loads(capsys.readouterr().out)
    assert payload[1] == {
        "id": "a-2",
        "level": 2,
        "text": "A",
        "start_line": 2,
        "end_line": 4,
    }


def test_outline_without_headings(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Manuscripts without headings say so."""
    cli.outline(_manuscript(tmp_path, "just prose\n"))
    assert capsys.readouterr().out == "no headings found\n"


def test_missing_manuscript(tmp_path: Path) -> None:
    """Unknown paths raise ``FileNotFoundError``."""
    with pytest.raises(FileNotFoundError, match="not found"):
        cli.plain(tmp_path / "absent.md")


def test_reorder_prints_result(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Without an output option the rearranged text goes to stdout."""
    path = _manuscript(tmp_path)
    cli.reorder(path, "b-3", "a-2")
    assert capsys.readouterr().out == "# T\n\n## B\nbody B\n\n## A\nbody A\n"
    assert path.read_text(encoding="utf-8") == MANUSCRIPT, "file must be untouched"


def test_reorder_in_place(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """``--in-place`` rewrites the manuscript."""
    path = _manuscript(tmp_path)
    cli.reorder(path, "b-3", "a-2", in_place=True)
    assert path.read_text(encoding="utf-8") == "# T\n\n## B\nbody B\n\n## A\nbody A\n"
    assert capsys.readouterr().out.startswith("wrote ")


def test_reorder_unknown_id_logs_and_keeps_text(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Stale ids leave the manuscript as it was."""
    path = _manuscript(tmp_path)
    with caplog.at_level(logging.INFO, logger="quire.cli"):
        cli.reorder(path, "b-9", "a-2")
    assert capsys.readouterr().out == MANUSCRIPT
    assert "Outline unchanged" in caplog.text


def test_reorder_rejects_conflicting_destinations(tmp_path: Path) -> None:
    """``--in-place`` and ``--output`` cannot be combined."""
    path = _manuscript(tmp_path)
    with pytest.raises(ValueError, match="Cannot combine"):
        cli.reorder(path, "b-3", "a-2", in_place=True, output=tmp_path / "out.md")


def test_plain_and_restore(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """The plain view written to disk restores against its reference."""
    reference = _manuscript(tmp_path, "## 第一章\n本文\n## 第二章\n続き\n")
    plain_path = tmp_path / "plain" / "novel.txt"
    cli.plain(reference, output=plain_path)
    assert plain_path.read_text(encoding="utf-8") == "第一章\n本文\n第二章\n続き\n"

    capsys.readouterr()
    cli.restore(plain_path, reference=reference)
    assert capsys.readouterr().out == "## 第一章\n本文\n## 第二章\n続き\n"


def test_restore_uses_configured_patterns(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Extra heading patterns from the config file are honoured."""
    reference = _manuscript(tmp_path, "# Prologue\n序\n")
    plain_path = tmp_path / "novel.txt"
    plain_path.write_text("Prologue\n序\n", encoding="utf-8")
    config = tmp_path / "quire.yaml"
    config.write_text(
        "plain_text:\n  extra_heading_patterns: ['^Prologue$']\n", encoding="utf-8"
    )
    cli.restore(plain_path, reference=reference, config=config)
    assert capsys.readouterr().out == "# Prologue\n序\n"


def test_render_fragment_with_dictionary(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Rendered fragments carry dictionary highlights from the config."""
    path = _manuscript(tmp_path, "# 猫の話\n\n猫背の猫")
    config = tmp_path / "quire.yaml"
    config.write_text(
        "dictionary:\n  - {id: c, term: 猫}\n  - {id: h, term: 猫背}\n",
        encoding="utf-8",
    )
    cli.render(path, config=config)
    soup = BeautifulSoup(capsys.readouterr().out, "html.parser")
    assert soup.h1 is not None
    ids = [span["data-term-id"] for span in soup.select("span.dictionary-term")]
    assert ids == ["c", "h", "c"], f"unexpected highlight ids {ids!r}"


def test_render_uses_config_from_working_directory(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Without ``--config`` a ``quire.yaml`` in the cwd is loaded."""
    (tmp_path / "quire.yaml").write_text(
        "render:\n  highlight_class: term\ndictionary:\n  - term: 猫\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    cli.render(_manuscript(tmp_path, "猫"))
    assert capsys.readouterr().out == (
        '<p><span class="term" data-term-id="dict-1">猫</span></p>\n'
    )


def test_render_standalone_page(tmp_path: Path) -> None:
    """``--standalone`` writes a full page with the outline sidebar."""
    path = _manuscript(tmp_path)
    output = tmp_path / "site" / "preview.html"
    cli.render(path, output=output, standalone=True, title="Draft")

    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    assert soup.title is not None
    assert soup.title.get_text() == "Draft"
    outline = [
        (li["data-section-id"], li["class"][0])
        for li in soup.select("nav.outline li")
    ]
    assert outline == [("t-1", "level-1"), ("a-2", "level-2"), ("b-3", "level-2")]
    manuscript = soup.select_one("main.manuscript")
    assert manuscript is not None
    assert [h.get_text() for h in manuscript.find_all("h2")] == ["A", "B"]


def test_scaffold_output(tmp_path: Path) -> None:
    """Short manuscripts are replaced with the chapter skeleton."""
    path = _manuscript(tmp_path, "")
    output = tmp_path / "scaffolded.md"
    cli.scaffold(path, output=output)
    assert output.read_text(encoding="utf-8") == DEFAULT_CHAPTER_SCAFFOLD


def test_scaffold_respects_configured_minimum(tmp_path: Path) -> None:
    """A configured minimum of two accepts a two-chapter manuscript."""
    path = _manuscript(tmp_path)
    config = tmp_path / "quire.yaml"
    config.write_text("scaffold:\n  minimum_chapters: 2\n", encoding="utf-8")
    cli.scaffold(path, config=config, in_place=True)
    assert path.read_text(encoding="utf-8") == MANUSCRIPT


def test_configure_logging_reads_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """``QUIRE_LOG_LEVEL`` selects the root log level."""
    calls: list[dict[str, object]] = []
    monkeypatch.setenv("QUIRE_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    cli._configure_logging()
    assert calls == [{"level": logging.DEBUG, "format": cli.LOG_FORMAT}]
