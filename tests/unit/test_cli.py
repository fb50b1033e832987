"""Tests for the typer command line."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from rules_enforcer import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("RULE_ROOT", "MCP_SERVER_NAME", "AUTO_INJECT", "RULES_ENFORCER_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_help() -> None:
    result = runner.invoke(cli.app, ["--help"])

    assert result.exit_code == 0
    assert "serve" in result.output
    assert "show" in result.output


def test_show_raw_prints_rules(rules_file: Path) -> None:
    result = runner.invoke(cli.app, ["--rule-root", str(rules_file), "show", "--raw"])

    assert result.exit_code == 0
    assert "Always answer in French." in result.output


def test_show_renders_formatted_rules(rules_file: Path) -> None:
    result = runner.invoke(cli.app, ["--rule-root", str(rules_file.parent), "show"])

    assert result.exit_code == 0
    assert "Always answer in French." in result.output
    assert "MANDATORY AI AGENT RULES" in result.output


def test_show_missing_file_exits_nonzero(missing_rules_file: Path) -> None:
    result = runner.invoke(cli.app, ["--rule-root", str(missing_rules_file), "show", "--raw"])

    assert result.exit_code == 1
    assert "RULES FILE NOT FOUND" in result.output


def test_serve_passes_overrides(rules_file: Path) -> None:
    with patch.object(cli, "run_stdio", return_value=0) as run_stdio:
        result = runner.invoke(
            cli.app,
            ["--rule-root", str(rules_file), "--name", "Team", "--no-auto-inject", "serve"],
        )

    assert result.exit_code == 0
    settings = run_stdio.call_args.args[0]
    assert settings.rules_path == rules_file
    assert settings.server_name == "Team"
    assert settings.auto_inject is False


def test_no_command_serves(rules_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RULE_ROOT", str(rules_file))

    with patch.object(cli, "run_stdio", return_value=1) as run_stdio:
        result = runner.invoke(cli.app, [])

    assert result.exit_code == 1
    assert run_stdio.call_args.args[0].rules_path == rules_file
