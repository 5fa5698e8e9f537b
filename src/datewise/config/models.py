"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``datewise.toml`` only holds
overrides.  A site in Berlin needs nothing more than::

    [site]
    timezone = "Europe/Berlin"
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator

from datewise.domain.calendar_math import parse_clock_time
from datewise.domain.errors import DatewiseError
from datewise.domain.instants import get_zone
from datewise.domain.types import RangeName
from datewise.domain.values import DEFAULT_BUSINESS_DAYS, BusinessDayPolicy


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        try:
            get_zone(value)
        except DatewiseError as exc:
            raise ValueError(exc.message) from None
        return value


class BusinessConfig(BaseModel):
    """[business] section — ISO weekdays (1=Mon..7=Sun), holidays and opening hours."""

    model_config = {"frozen": True}

    days: list[int] = Field(default_factory=lambda: sorted(DEFAULT_BUSINESS_DAYS))
    holidays: list[date] = Field(default_factory=list)
    hours_start: str = "09:00"
    hours_end: str = "17:00"

    @field_validator("hours_start", "hours_end")
    @classmethod
    def _clock_time(cls, value: str) -> str:
        try:
            parse_clock_time(value)
        except DatewiseError as exc:
            raise ValueError(exc.message) from None
        return value

    def policy(self) -> BusinessDayPolicy:
        """Build the domain policy; raises ConfigurationError for bad weekdays."""
        return BusinessDayPolicy.build(self.days, self.holidays)


class SubscriptionConfig(BaseModel):
    """[subscription] section."""

    model_config = {"frozen": True}

    grace_days: int = Field(default=0, ge=0)
    remind_days: int = Field(default=7, ge=1)
    trial_days: int = Field(default=14, ge=1)
    occurrences: int = Field(default=5, ge=0)


class RangesConfig(BaseModel):
    """[ranges] section."""

    model_config = {"frozen": True}

    default: str = "today"

    @field_validator("default")
    @classmethod
    def _known_range(cls, value: str) -> str:
        try:
            return str(RangeName.parse(value))
        except DatewiseError as exc:
            raise ValueError(exc.message) from None

