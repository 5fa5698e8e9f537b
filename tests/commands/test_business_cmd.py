"""Tests for the ``business`` command group and the [business] config."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner, Result

from datewise.cli import cli

NOW = "2025-06-15 14:30:00"


def _quiet(runner: CliRunner, *args: str) -> Result:
    return runner.invoke(cli, ["--now", NOW, "-q", "business", *args])


class TestDefaultWeek:
    def test_check_saturday(self, cli_runner: CliRunner) -> None:
        assert _quiet(cli_runner, "check", "2025-06-14").stdout == "false\n"

    def test_next(self, cli_runner: CliRunner) -> None:
        result = _quiet(cli_runner, "next", "2025-06-13 09:00:00")
        assert result.stdout == "2025-06-16 09:00:00\n"

    def test_add(self, cli_runner: CliRunner) -> None:
        assert _quiet(cli_runner, "add", "2025-06-13 09:00:00", "5").stdout == (
            "2025-06-20 09:00:00\n"
        )

    def test_add_backwards(self, cli_runner: CliRunner) -> None:
        result = _quiet(cli_runner, "add", "2025-06-16 17:00:00", "--", "-1")
        assert result.stdout == "2025-06-13 17:00:00\n"

    def test_count(self, cli_runner: CliRunner) -> None:
        assert _quiet(cli_runner, "count", "2025-06-01", "2025-06-30").stdout == "21\n"

    def test_json_check(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "business", "check", "2025-06-13"])
        payload = json.loads(result.stdout)
        assert payload["op"] == "business_check"
        assert payload["data"]["weekday"] == 5


class TestConfiguredPolicy:
    def test_holidays_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "datewise.toml").write_text('[business]\nholidays = ["2025-12-25"]\n')
        assert _quiet(cli_runner, "next", "2025-12-24").stdout == "2025-12-26 00:00:00\n"

    def test_custom_week(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "datewise.toml").write_text("[business]\ndays = [7, 1, 2, 3, 4]\n")
        assert _quiet(cli_runner, "check", "2025-06-15").stdout == "true\n"
        assert _quiet(cli_runner, "check", "2025-06-13").stdout == "false\n"

    def test_empty_week_is_a_usage_error(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "datewise.toml").write_text("[business]\ndays = []\n")
        result = _quiet(cli_runner, "check", "2025-06-13")
        assert result.exit_code == 1
        assert "must not be empty" in result.stderr


class TestHours:
    def test_default_window(self, cli_runner: CliRunner) -> None:
        assert _quiet(cli_runner, "hours", "2025-06-13 09:00:00").stdout == "true\n"
        assert _quiet(cli_runner, "hours", "2025-06-13 17:01:00").stdout == "false\n"

    def test_zone_option(self, cli_runner: CliRunner) -> None:
        result = _quiet(cli_runner, "hours", "2025-06-13 07:00:00", "--zone", "Europe/Berlin")
        assert result.stdout == "true\n"

    def test_overnight_window(self, cli_runner: CliRunner) -> None:
        result = _quiet(
            cli_runner, "hours", "2025-06-13 23:00:00", "--start", "22:00", "--end", "06:00"
        )
        assert result.stdout == "true\n"

    def test_window_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "datewise.toml").write_text(
            '[business]\nhours_start = "10:00"\nhours_end = "18:30"\n'
        )
        assert _quiet(cli_runner, "hours", "2025-06-13 09:30:00").stdout == "false\n"
        assert _quiet(cli_runner, "hours", "2025-06-13 18:30:00").stdout == "true\n"

    def test_bad_window_in_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "datewise.toml").write_text('[business]\nhours_end = "5pm"\n')
        result = _quiet(cli_runner, "hours", "2025-06-13 09:30:00")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stderr

    def test_bad_window_option(self, cli_runner: CliRunner) -> None:
        result = _quiet(cli_runner, "hours", "2025-06-13 09:30:00", "--start", "nine")
        assert result.exit_code == 1
        assert "ERROR: business_hours" in result.stderr

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--now", NOW, "--json", "business", "hours", "2025-06-13 12:00:00"]
        )
        payload = json.loads(result.stdout)
        assert payload["data"]["opens"] == "09:00"
        assert payload["data"]["result"] is True
