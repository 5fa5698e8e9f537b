"""Tests for output mode selection."""

from __future__ import annotations

import json

from datewise.output.formatters import OutputSettings, format_result
from datewise.services.result import ServiceResult

RESULT = ServiceResult(ok=True, op="to_utc", data={"result": "2025-06-15 14:30:00"})


class TestFormatResult:
    def test_default_is_rich(self) -> None:
        output = format_result(RESULT)
        assert output.startswith("OK")
        assert "result: 2025-06-15 14:30:00" in output

    def test_quiet(self) -> None:
        output = format_result(RESULT, settings=OutputSettings(quiet=True))
        assert output == "2025-06-15 14:30:00"

    def test_json(self) -> None:
        output = format_result(RESULT, settings=OutputSettings(json_output=True))
        payload = json.loads(output)
        assert payload["ok"] is True
        assert payload["op"] == "to_utc"
        assert payload["data"] == {"result": "2025-06-15 14:30:00"}
        assert payload["warnings"] == []

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(RESULT, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "to_utc"
