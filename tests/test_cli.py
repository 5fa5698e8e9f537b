"""Tests for the root datewise CLI."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from datewise import __version__
from datewise.cli import cli

NOW = "2025-06-15 14:30:00"


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "datewise" in result.output
    for group in ("convert", "calc", "business", "range", "sub"):
        assert group in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


def test_json_flag(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "--now", NOW, "convert", "now"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["op"] == "now"
    assert payload["meta"] is None


def test_quiet_flag(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "--now", NOW, "convert", "now"])
    assert result.stdout == f"{NOW}\n"


def test_verbose_adds_telemetry(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-v", "--json", "--now", NOW, "convert", "now"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["meta"]["telemetry"]["name"] == "ConvertService.now"


def test_verbose_rich_meta(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-v", "--now", NOW, "convert", "now"])
    assert "meta:" in result.stdout
    assert "ConvertService.now" in result.stdout


def test_log_json_writes_structured_stderr(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(
        cli, ["-v", "--log-json", "-q", "--now", NOW, "convert", "to-utc", "2025-06-15"]
    )
    assert result.exit_code == 0
    events = [json.loads(line) for line in result.stderr.splitlines() if line.strip()]
    assert any(event.get("event") == "span.complete" for event in events)


def test_config_flag(cli_runner: CliRunner, tmp_path: Path) -> None:
    custom = tmp_path / "conf" / "site.toml"
    custom.parent.mkdir()
    custom.write_text('[site]\ntimezone = "Asia/Tokyo"\n')
    result = cli_runner.invoke(
        cli, ["-c", str(custom), "-q", "--now", NOW, "convert", "to-local", NOW]
    )
    assert result.stdout == "2025-06-15 23:30:00\n"


def test_missing_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["-c", str(tmp_path / "nope.toml"), "convert", "now"])
    assert result.exit_code == 1
    assert "Config file not found" in result.stderr


def test_invalid_config_value(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "datewise.toml").write_text("[subscription]\nremind_days = 0\n")
    result = cli_runner.invoke(cli, ["convert", "now"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.stderr


def test_config_env_var(cli_runner: CliRunner, tmp_path: Path) -> None:
    custom = tmp_path / "env.toml"
    custom.write_text('[site]\ntimezone = "Europe/Berlin"\n')
    result = cli_runner.invoke(
        cli,
        ["-q", "--now", NOW, "convert", "to-local", NOW],
        env={"DATEWISE_CONFIG": str(custom)},
    )
    assert result.stdout == "2025-06-15 16:30:00\n"
