"""Tests for the command line interface."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from law_hierarchy_studio import cli as cli_mod

FIXTURE_JSON = Path(__file__).resolve().parents[1] / "fixtures" / "sample_law.json"

runner = CliRunner()


@pytest.fixture()
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write a config pointing at the sample law and keep logging untouched."""

    monkeypatch.setattr(cli_mod, "configure_logging", lambda cfg: None)
    path = tmp_path / "config.yaml"
    path.write_text(
        f"data:\n  elements_path: {FIXTURE_JSON}\n  default_law_id: cp\n"
        "flatten:\n  display_max_chars: 30\n"
        "llm:\n  provider: local\n",
        encoding="utf-8",
    )
    return path


def test_tree_focus_prints_context_outline(config_path: Path) -> None:
    """The outline keeps only the focused article and its ancestors."""

    result = runner.invoke(cli_mod.app, ["tree", "--config", str(config_path), "--focus", "a13"])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[:3] == [
        "- Title I: Of the Application of Criminal Law",
        "  - Chapter II: Of the Crime",
        "    - Art. 13",
    ]
    assert "Chapter I:" not in result.stdout


def test_tree_select_marks_checkboxes(config_path: Path, tmp_path: Path) -> None:
    """Selecting a chapter marks its title as partially checked."""

    output = tmp_path / "outline.md"
    result = runner.invoke(
        cli_mod.app,
        ["tree", "--config", str(config_path), "--select", "c1", "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "- [-] Title I: Of the Application of Criminal Law"
    assert lines[1] == "  - [x] Chapter I: General Rules"


def test_content_full_mode_prints_whole_text(config_path: Path) -> None:
    """Full mode prints the uncapped subtree text."""

    result = runner.invoke(cli_mod.app, ["content", "a1", "--config", str(config_path), "--mode", "full"])

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == (
        "There is no crime without a prior law that defines it.\n\n"
        "§ 1º\nThere is no penalty without prior legal provision."
    )


def test_extract_writes_copied_elements(config_path: Path, tmp_path: Path) -> None:
    """Extraction writes the copied records as JSON."""

    output = tmp_path / "copied" / "s2.json"
    result = runner.invoke(cli_mod.app, ["extract", "s2", "--config", str(config_path), "--output", str(output)])

    assert result.exit_code == 0, result.output
    copied = json.loads(output.read_text(encoding="utf-8"))
    assert [e["id"] for e in copied] == ["s2", "a2", "k1", "k0"]


def test_unknown_element_is_a_usage_error(config_path: Path) -> None:
    """Unknown element ids end with a non-zero exit code."""

    result = runner.invoke(cli_mod.app, ["content", "ghost", "--config", str(config_path)])

    assert result.exit_code != 0
