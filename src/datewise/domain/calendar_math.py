"""CalendarMath — precise date arithmetic, period boundaries, business days.

Two kinds of arithmetic live here and must not be merged:

- ``add``/``subtract``: seconds..weeks are epoch-second offsets; months and
  years are calendar-field jumps (``dateutil.relativedelta``) that clamp
  the day-of-month, so Jan 31 + 1 month is Feb 28/29, never Mar 3.
- ``diff``: absolute seconds divided by a fixed unit length.  Months and
  years use 365.25-day averages.  ``get_age`` is the exact calendar
  alternative for whole years.

Boundary helpers (``period_start``/``period_end``) work on any datetime,
aware or naive, so RangeResolver can apply them to local wall time.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, time, timedelta

from dateutil.relativedelta import relativedelta

from datewise.domain.clock import Clock
from datewise.domain.errors import InvalidArgumentError, InvalidDateError
from datewise.domain.instants import (
    InstantLike,
    calendar_bounds,
    format_instant,
    get_zone,
    is_zero,
    parse_instant,
)
from datewise.domain.types import Period, RoundDirection, Unit
from datewise.domain.values import BusinessDayPolicy, Duration

logger = logging.getLogger(__name__)

WEEKEND_DAYS: frozenset[int] = frozenset({6, 7})


# ---------------------------------------------------------------------------
# Pure boundary helpers
# ---------------------------------------------------------------------------


def shift(dt: datetime, amount: int, unit: Unit) -> datetime:
    """Move *dt* by *amount* units, clamping day-of-month for months/years.

    Raises InvalidArgumentError when the result falls outside years 1..9999.
    """
    with calendar_bounds(amount=amount, unit=str(unit)):
        if unit is Unit.MONTHS:
            return dt + relativedelta(months=amount)
        if unit is Unit.YEARS:
            return dt + relativedelta(years=amount)
        return dt + timedelta(seconds=amount * unit.seconds)


def parse_clock_time(text: str) -> time:
    """Parse an ``HH:MM`` wall-clock time."""
    try:
        return datetime.strptime(text.strip(), "%H:%M").time()
    except ValueError:
        raise InvalidArgumentError(f"Invalid time of day: {text!r}", time=text) from None


def quarter_of(month: int) -> int:
    return (month - 1) // 3 + 1


def period_start(dt: datetime, period: Period) -> datetime:
    """First second of the *period* containing *dt* (weeks start Monday)."""
    midnight = dt.replace(hour=0, minute=0, second=0, microsecond=0)
    match period:
        case Period.MINUTE:
            return dt.replace(second=0, microsecond=0)
        case Period.HOUR:
            return dt.replace(minute=0, second=0, microsecond=0)
        case Period.DAY:
            return midnight
        case Period.WEEK:
            with calendar_bounds():
                return midnight - timedelta(days=dt.isoweekday() - 1)
        case Period.MONTH:
            return midnight.replace(day=1)
        case Period.QUARTER:
            first_month = (quarter_of(dt.month) - 1) * 3 + 1
            return midnight.replace(month=first_month, day=1)
        case Period.YEAR:
            return midnight.replace(month=1, day=1)
    raise InvalidArgumentError(f"Invalid period: {period}")


def period_end(dt: datetime, period: Period) -> datetime:
    """Last whole second of the *period* containing *dt*."""
    last_second = dt.replace(hour=23, minute=59, second=59, microsecond=0)
    match period:
        case Period.MINUTE:
            return dt.replace(second=59, microsecond=0)
        case Period.HOUR:
            return dt.replace(minute=59, second=59, microsecond=0)
        case Period.DAY:
            return last_second
        case Period.WEEK:
            with calendar_bounds():
                return last_second + timedelta(days=7 - dt.isoweekday())
        case Period.MONTH:
            return last_second.replace(day=calendar.monthrange(dt.year, dt.month)[1])
        case Period.QUARTER:
            last_month = quarter_of(dt.month) * 3
            last_day = calendar.monthrange(dt.year, last_month)[1]
            return last_second.replace(month=last_month, day=last_day)
        case Period.YEAR:
            return last_second.replace(month=12, day=31)
    raise InvalidArgumentError(f"Invalid period: {period}")


# ---------------------------------------------------------------------------
# CalendarMath
# ---------------------------------------------------------------------------


class CalendarMath:
    """Calendar arithmetic over UTC Instants with an injected clock."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock

    # -- Arithmetic ------------------------------------------------------

    def add(self, instant: InstantLike, amount: int, unit: str | Unit) -> str:
        """Add *amount* of *unit* to *instant*; negative amounts subtract."""
        return format_instant(shift(parse_instant(instant), int(amount), Unit.parse(unit)))

    def subtract(self, instant: InstantLike, amount: int, unit: str | Unit) -> str:
        return self.add(instant, -int(amount), unit)

    def add_duration(self, instant: InstantLike, duration: Duration) -> str:
        return self.add(instant, duration.amount, duration.unit)

    def diff(self, first: InstantLike, second: InstantLike, unit: str | Unit = Unit.DAYS) -> int:
        """Absolute difference floor-divided by the unit's fixed length."""
        resolved = Unit.parse(unit)
        seconds = abs(int((parse_instant(first) - parse_instant(second)).total_seconds()))
        return seconds // resolved.seconds

    def elapsed(self, instant: InstantLike | None, unit: str | Unit = Unit.DAYS) -> int | None:
        """Time since *instant*, or None when there is no usable value."""
        resolved = Unit.parse(unit)
        if is_zero(instant):
            return None
        try:
            then = parse_instant(instant)
        except InvalidDateError:
            logger.debug("elapsed: unparsable input %r", instant)
            return None
        return self.diff(then, self._clock.now(), resolved)

    def _age_seconds(self, instant: InstantLike) -> int:
        return int((self._clock.now() - parse_instant(instant)).total_seconds())

    def is_older_than(self, instant: InstantLike, seconds: int) -> bool:
        """True when more than *seconds* have passed since *instant*."""
        return self._age_seconds(instant) > seconds

    def is_newer_than(self, instant: InstantLike, seconds: int) -> bool:
        """True when fewer than *seconds* have passed since *instant*.

        Instants in the future are always newer.
        """
        return self._age_seconds(instant) < seconds

    # -- Boundaries ------------------------------------------------------

    def start_of_day(self, instant: InstantLike) -> str:
        return format_instant(period_start(parse_instant(instant), Period.DAY))

    def end_of_day(self, instant: InstantLike) -> str:
        return format_instant(period_end(parse_instant(instant), Period.DAY))

    def start_of(self, instant: InstantLike, period: str | Period) -> str:
        return format_instant(period_start(parse_instant(instant), Period.parse(period)))

    def end_of(self, instant: InstantLike, period: str | Period) -> str:
        return format_instant(period_end(parse_instant(instant), Period.parse(period)))

    def quarter(self, instant: InstantLike) -> int:
        return quarter_of(parse_instant(instant).month)

    def is_same_period(self, first: InstantLike, second: InstantLike, period: str | Period) -> bool:
        resolved = Period.parse(period)
        return period_start(parse_instant(first), resolved) == period_start(
            parse_instant(second), resolved
        )

    # -- Ages and expirations -------------------------------------------

    def get_age(self, birth: InstantLike) -> int:
        """Whole calendar years since *birth*.

        A 29 February birthday is reached on 1 March in non-leap years,
        because the anniversary check compares (month, day) tuples.
        Birth dates in the future give 0.
        """
        born = parse_instant(birth).date()
        today = self._clock.now().date()
        years = today.year - born.year
        if (today.month, today.day) < (born.month, born.day):
            years -= 1
        return max(years, 0)

    def get_age_in_days(self, birth: InstantLike) -> int:
        return self.diff(birth, self._clock.now(), Unit.DAYS)

    def meets_age_requirement(self, birth: InstantLike, min_age: int) -> bool:
        return self.get_age(birth) >= min_age

    def calculate_expiration(
        self,
        duration: int,
        unit: str | Unit = Unit.DAYS,
        from_: InstantLike | None = None,
    ) -> str:
        """Instant *duration* units after *from_* (default: now)."""
        if duration <= 0:
            raise InvalidArgumentError("Duration must be positive", duration=duration)
        start = self._clock.now() if is_zero(from_) else from_
        return self.add(start, duration, unit)

    def is_expired(self, expiry: InstantLike | None, grace_hours: int = 0) -> bool:
        """True once now is past *expiry* plus *grace_hours*.

        Missing or unparsable expiry dates count as expired.
        """
        try:
            deadline = parse_instant(expiry)
        except InvalidDateError:
            return True
        if grace_hours > 0:
            try:
                deadline = shift(deadline, grace_hours, Unit.HOURS)
            except InvalidArgumentError:
                return False
        return self._clock.now() > deadline

    @staticmethod
    def round_timestamp(
        timestamp: int,
        interval: int,
        direction: str | RoundDirection = RoundDirection.NEAREST,
    ) -> int:
        """Round a Unix timestamp to a multiple of *interval* seconds."""
        if interval <= 0:
            raise InvalidArgumentError("Interval must be positive", interval=interval)
        resolved = RoundDirection.parse(direction)
        quotient, remainder = divmod(timestamp, interval)
        if resolved is RoundDirection.DOWN:
            return quotient * interval
        if resolved is RoundDirection.UP:
            return (quotient + (1 if remainder else 0)) * interval
        return (quotient + (1 if 2 * remainder >= interval else 0)) * interval

    # -- Business days ---------------------------------------------------

    def is_weekend(self, instant: InstantLike) -> bool:
        return parse_instant(instant).isoweekday() in WEEKEND_DAYS

    def is_business_day(
        self, instant: InstantLike, policy: BusinessDayPolicy | None = None
    ) -> bool:
        policy = policy or BusinessDayPolicy()
        return policy.is_business_date(parse_instant(instant).date())

    def is_business_hours(
        self,
        instant: InstantLike,
        start: str = "09:00",
        end: str = "17:00",
        zone: str | None = None,
    ) -> bool:
        """True when *instant*'s wall time in *zone* falls in ``start..end``.

        Both bounds are inclusive at minute precision, so 17:00:59 is still
        inside a window ending at 17:00.  A window whose start is later
        than its end wraps past midnight (``22:00``-``06:00``).
        """
        opens, closes = parse_clock_time(start), parse_clock_time(end)
        tz = get_zone(zone or self._clock.zone())
        with calendar_bounds(zone=str(tz)):
            local = parse_instant(instant).astimezone(tz)
        minute = time(local.hour, local.minute)
        if opens <= closes:
            return opens <= minute <= closes
        return minute >= opens or minute <= closes

    def next_business_day(
        self, instant: InstantLike, policy: BusinessDayPolicy | None = None
    ) -> str:
        """First business day strictly after *instant*, time of day kept."""
        policy = policy or BusinessDayPolicy()
        current = parse_instant(instant)
        while True:
            current = shift(current, 1, Unit.DAYS)
            if policy.is_business_date(current.date()):
                return format_instant(current)

    def add_working_days(
        self,
        instant: InstantLike,
        days: int,
        policy: BusinessDayPolicy | None = None,
    ) -> str:
        """Step ``|days|`` business days forward (>0) or backward (<0)."""
        policy = policy or BusinessDayPolicy()
        current = parse_instant(instant)
        step = 1 if days > 0 else -1
        remaining = abs(int(days))
        while remaining:
            current = shift(current, step, Unit.DAYS)
            if policy.is_business_date(current.date()):
                remaining -= 1
        return format_instant(current)

    def working_days_between(
        self,
        start: InstantLike,
        end: InstantLike,
        policy: BusinessDayPolicy | None = None,
    ) -> int:
        """Inclusive count of business days between two Instants' dates."""
        policy = policy or BusinessDayPolicy()
        first, last = sorted((parse_instant(start).date(), parse_instant(end).date()))
        return sum(1 for day in _date_span(first, last) if policy.is_business_date(day))


def _date_span(first: date, last: date) -> list[date]:
    count = (last - first).days
    return [first + timedelta(days=offset) for offset in range(count + 1)]
