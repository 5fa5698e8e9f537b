"""Closed value enums for units, periods, intervals and range names.

String arguments arriving from callers (CLI flags, config files) are
validated once at the boundary through each enum's ``parse()`` class
method, which raises the matching domain error instead of ``ValueError``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from datewise.domain.errors import InvalidArgumentError, UnknownPeriodError, UnknownRangeError

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3_600
SECONDS_PER_DAY = 86_400
SECONDS_PER_WEEK = 604_800
# Fixed-length approximations used only by diff(): 365.25-day year.
SECONDS_PER_YEAR = 31_557_600
SECONDS_PER_MONTH = SECONDS_PER_YEAR // 12


class Unit(StrEnum):
    """Arithmetic units for add/subtract/diff."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"

    @property
    def is_calendar(self) -> bool:
        """Months and years are calendar-relative, everything else is fixed."""
        return self in (Unit.MONTHS, Unit.YEARS)

    @property
    def seconds(self) -> int:
        """Length of one unit in seconds (approximate for months/years)."""
        return _UNIT_SECONDS[self]

    @classmethod
    def parse(cls, value: str | Unit) -> Self:
        """Accept plural or singular names (``"day"`` → ``DAYS``)."""
        key = str(value).strip().lower()
        if not key.endswith("s"):
            key += "s"
        try:
            return cls(key)
        except ValueError:
            raise InvalidArgumentError(f"Invalid unit: {value}", unit=str(value)) from None


_UNIT_SECONDS: dict[Unit, int] = {
    Unit.SECONDS: 1,
    Unit.MINUTES: SECONDS_PER_MINUTE,
    Unit.HOURS: SECONDS_PER_HOUR,
    Unit.DAYS: SECONDS_PER_DAY,
    Unit.WEEKS: SECONDS_PER_WEEK,
    Unit.MONTHS: SECONDS_PER_MONTH,
    Unit.YEARS: SECONDS_PER_YEAR,
}


class Interval(StrEnum):
    """Step sizes for RangeResolver.between()."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def unit(self) -> Unit:
        return Unit(f"{self.value}s")

    @classmethod
    def parse(cls, value: str | Interval) -> Self:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid interval: {value}", interval=str(value)
            ) from None


class Period(StrEnum):
    """Boundary periods for start_of/end_of and period_boundaries."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @classmethod
    def parse(cls, value: str | Period) -> Self:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownPeriodError(f"Invalid period: {value}", period=str(value)) from None


class BillingPeriod(StrEnum):
    """Subscription billing cycles."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    BIANNUAL = "biannual"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: str | BillingPeriod) -> Self:
        """Resolve a period name or alias, raising UnknownPeriodError."""
        key = str(value).strip().lower()
        key = _BILLING_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownPeriodError(
                f"Invalid subscription period: {value}", period=str(value)
            ) from None

    @property
    def amount(self) -> int:
        return _BILLING_STEPS[self][0]

    @property
    def unit(self) -> Unit:
        return _BILLING_STEPS[self][1]


_BILLING_ALIASES: dict[str, str] = {
    "every_3_months": "quarterly",
    "every_6_months": "biannual",
}

_BILLING_STEPS: dict[BillingPeriod, tuple[int, Unit]] = {
    BillingPeriod.DAILY: (1, Unit.DAYS),
    BillingPeriod.WEEKLY: (1, Unit.WEEKS),
    BillingPeriod.MONTHLY: (1, Unit.MONTHS),
    BillingPeriod.QUARTERLY: (3, Unit.MONTHS),
    BillingPeriod.BIANNUAL: (6, Unit.MONTHS),
    BillingPeriod.YEARLY: (1, Unit.YEARS),
}


class SubscriptionState(StrEnum):
    """Derived subscription status label."""

    ACTIVE = "active"
    GRACE = "grace"
    EXPIRED = "expired"


class RoundDirection(StrEnum):
    UP = "up"
    DOWN = "down"
    NEAREST = "nearest"

    @classmethod
    def parse(cls, value: str | RoundDirection) -> Self:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid round direction: {value}", direction=str(value)
            ) from None


class RangeName(StrEnum):
    """Predefined named date ranges."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    NEXT_WEEK = "next_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    NEXT_MONTH = "next_month"
    THIS_QUARTER = "this_quarter"
    LAST_QUARTER = "last_quarter"
    THIS_YEAR = "this_year"
    LAST_YEAR = "last_year"
    NEXT_YEAR = "next_year"
    LAST_7_DAYS = "last_7_days"
    LAST_30_DAYS = "last_30_days"
    LAST_60_DAYS = "last_60_days"
    LAST_90_DAYS = "last_90_days"
    LAST_180_DAYS = "last_180_days"
    LAST_365_DAYS = "last_365_days"
    NEXT_7_DAYS = "next_7_days"
    NEXT_30_DAYS = "next_30_days"
    NEXT_90_DAYS = "next_90_days"
    YEAR_TO_DATE = "year_to_date"
    MONTH_TO_DATE = "month_to_date"
    WEEK_TO_DATE = "week_to_date"

    @classmethod
    def parse(cls, value: str | RangeName) -> Self:
        """Resolve a range name or rolling alias, raising UnknownRangeError."""
        key = str(value).strip().lower()
        key = RANGE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownRangeError(f"Invalid range: {value}", range=str(value)) from None


RANGE_ALIASES: dict[str, str] = {
    "last_week_rolling": "last_7_days",
    "last_month_rolling": "last_30_days",
    "last_3_months": "last_90_days",
    "last_6_months": "last_180_days",
    "last_year_rolling": "last_365_days",
}
