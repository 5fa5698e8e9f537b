"""Shared pytest fixtures for datewise tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from datewise.domain.clock import FixedClock
from datewise.services.telemetry import disable_telemetry

# Sunday, 2025-06-15 14:30:00 UTC.
FIXED_NOW = "2025-06-15 14:30:00"


@pytest.fixture(autouse=True)
def _isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None]:
    """Run each test away from any real datewise.toml or DATEWISE_* env vars.

    Also restores logging and telemetry state that the CLI root mutates.
    """
    for name in list(os.environ):
        if name.startswith("DATEWISE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    dw_level = logging.getLogger("datewise").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("datewise").setLevel(dw_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> FixedClock:
    """UTC clock pinned at FIXED_NOW."""
    return FixedClock(FIXED_NOW)


@pytest.fixture
def berlin_clock() -> FixedClock:
    """Europe/Berlin site clock pinned at FIXED_NOW (16:30 local, CEST)."""
    return FixedClock(FIXED_NOW, zone="Europe/Berlin")
