"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``DATEWISE_*`` prefix (``DATEWISE_SITE__TIMEZONE``)
  3. TOML file    — ``datewise.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from datewise.config.discovery import find_config
from datewise.config.models import BusinessConfig, RangesConfig, SiteConfig, SubscriptionConfig
from datewise.domain.clock import Clock, FixedClock, SystemClock


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``datewise.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path for the settings object under construction.
_tls = threading.local()


class DatewiseSettings(BaseSettings):
    """All datewise settings, frozen after construction.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        now: Fixed "current" instant (``--now``); None means the system clock.
        tz: Site timezone override (``--tz``); wins over ``[site] timezone``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DATEWISE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    now: str | None = None
    tz: str | None = None

    # --- TOML sections ---
    site: SiteConfig = Field(default_factory=SiteConfig)
    business: BusinessConfig = Field(default_factory=BusinessConfig)
    subscription: SubscriptionConfig = Field(default_factory=SubscriptionConfig)
    ranges: RangesConfig = Field(default_factory=RangesConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> DatewiseSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, otherwise walks up from *cwd* for
        ``datewise.toml``.  CLI flags whose value is None are left to the
        lower-priority sources.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
            toml_path = p
        else:
            toml_path = find_config(cwd)

        flags = {k: v for k, v in cli_flags.items() if v is not None}
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        except ValidationError as exc:
            source = toml_path or "environment"
            raise click.ClickException(f"Invalid configuration ({source}): {exc}") from exc
        finally:
            _tls.toml_path = None

    @property
    def timezone(self) -> str:
        """Effective site timezone (``--tz`` over ``[site] timezone``)."""
        return self.tz or self.site.timezone

    def build_clock(self) -> Clock:
        """SystemClock, or a FixedClock when ``now`` is configured."""
        if self.now:
            return FixedClock(self.now, zone=self.timezone)
        return SystemClock(zone=self.timezone)
