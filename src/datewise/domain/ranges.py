"""RangeResolver — named date ranges and range stepping.

Boundaries for a named range are computed on a wall calendar and then
converted to UTC:

- with an anchor zone, "today" and "this week" are the zone's local day
  and week, so a Berlin "today" starts at 22:00 or 23:00 UTC;
- without one, the calendar is UTC itself (rolling-window mode).

Whole-period ends are inclusive at ``23:59:59``.  ``last_N_days`` covers
N calendar days including today; ``*_to_date`` ranges end at the end of
the current day.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta, tzinfo

from datewise.domain.calendar_math import period_end, period_start, shift
from datewise.domain.clock import Clock
from datewise.domain.errors import InvalidArgumentError, InvalidRangeError
from datewise.domain.instants import (
    InstantLike,
    calendar_bounds,
    format_instant,
    format_wall,
    get_zone,
    is_zero,
    parse_instant,
)
from datewise.domain.types import RANGE_ALIASES, Interval, Period, RangeName, Unit
from datewise.domain.values import DateRange, LocalInstant

logger = logging.getLogger(__name__)

Bounds = tuple[datetime, datetime]

# N calendar days ending today (inclusive).
_TRAILING_DAYS: dict[RangeName, int] = {
    RangeName.LAST_7_DAYS: 7,
    RangeName.LAST_30_DAYS: 30,
    RangeName.LAST_60_DAYS: 60,
    RangeName.LAST_90_DAYS: 90,
    RangeName.LAST_180_DAYS: 180,
    RangeName.LAST_365_DAYS: 365,
}

# Today through today + N days.
_LEADING_DAYS: dict[RangeName, int] = {
    RangeName.NEXT_7_DAYS: 7,
    RangeName.NEXT_30_DAYS: 30,
    RangeName.NEXT_90_DAYS: 90,
}


def _whole(ref: datetime, period: Period) -> Bounds:
    return period_start(ref, period), period_end(ref, period)


def _to_date(now: datetime, period: Period) -> Bounds:
    return period_start(now, period), period_end(now, Period.DAY)


_CALENDAR_RANGES: dict[RangeName, Callable[[datetime], Bounds]] = {
    RangeName.TODAY: lambda now: _whole(now, Period.DAY),
    RangeName.YESTERDAY: lambda now: _whole(now - timedelta(days=1), Period.DAY),
    RangeName.TOMORROW: lambda now: _whole(now + timedelta(days=1), Period.DAY),
    RangeName.THIS_WEEK: lambda now: _whole(now, Period.WEEK),
    RangeName.LAST_WEEK: lambda now: _whole(now - timedelta(weeks=1), Period.WEEK),
    RangeName.NEXT_WEEK: lambda now: _whole(now + timedelta(weeks=1), Period.WEEK),
    RangeName.THIS_MONTH: lambda now: _whole(now, Period.MONTH),
    RangeName.LAST_MONTH: lambda now: _whole(shift(now, -1, Unit.MONTHS), Period.MONTH),
    RangeName.NEXT_MONTH: lambda now: _whole(shift(now, 1, Unit.MONTHS), Period.MONTH),
    RangeName.THIS_QUARTER: lambda now: _whole(now, Period.QUARTER),
    RangeName.LAST_QUARTER: lambda now: _whole(shift(now, -3, Unit.MONTHS), Period.QUARTER),
    RangeName.THIS_YEAR: lambda now: _whole(now, Period.YEAR),
    RangeName.LAST_YEAR: lambda now: _whole(shift(now, -1, Unit.YEARS), Period.YEAR),
    RangeName.NEXT_YEAR: lambda now: _whole(shift(now, 1, Unit.YEARS), Period.YEAR),
    RangeName.YEAR_TO_DATE: lambda now: _to_date(now, Period.YEAR),
    RangeName.MONTH_TO_DATE: lambda now: _to_date(now, Period.MONTH),
    RangeName.WEEK_TO_DATE: lambda now: _to_date(now, Period.WEEK),
}


def range_bounds(name: RangeName, now: datetime) -> Bounds:
    """Wall-clock ``(start, end)`` of *name* relative to wall time *now*."""
    if name in _TRAILING_DAYS:
        first_day = now - timedelta(days=_TRAILING_DAYS[name] - 1)
        return period_start(first_day, Period.DAY), period_end(now, Period.DAY)
    if name in _LEADING_DAYS:
        last_day = now + timedelta(days=_LEADING_DAYS[name])
        return period_start(now, Period.DAY), period_end(last_day, Period.DAY)
    return _CALENDAR_RANGES[name](now)


class RangeResolver:
    """Resolve named ranges and step through spans of time."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock

    @staticmethod
    def available_ranges(*, include_aliases: bool = False) -> list[str]:
        names = [str(name) for name in RangeName]
        if include_aliases:
            names.extend(RANGE_ALIASES)
        return names

    def get_range(self, name: str | RangeName, anchor_zone: str | None = None) -> DateRange:
        """Resolve *name* to a UTC DateRange.

        Raises UnknownRangeError for unrecognized names.
        """
        resolved = RangeName.parse(name)
        tz: tzinfo = get_zone(anchor_zone) if anchor_zone else UTC
        with calendar_bounds(range=str(resolved)):
            wall_now = self._clock.now().astimezone(tz).replace(tzinfo=None)
            start, end = range_bounds(resolved, wall_now)
        logger.debug(
            "range %s [%s]: %s .. %s (wall)", resolved, anchor_zone or "UTC", start, end
        )
        return DateRange(
            start=format_instant(start.replace(tzinfo=tz)),
            end=format_instant(end.replace(tzinfo=tz)),
        )

    def between(
        self,
        start: InstantLike,
        end: InstantLike,
        interval: str | Interval = Interval.DAY,
    ) -> list[str]:
        """Every step from *start* through *end* (inclusive).

        Step *k* is ``start + k * interval`` computed from *start*, so month
        and year steps clamp against the starting day-of-month without
        drifting.
        """
        step = Interval.parse(interval).unit
        first, last = parse_instant(start), parse_instant(end)
        if first > last:
            raise InvalidRangeError(
                "Start date must be before end date",
                start=format_instant(first),
                end=format_instant(last),
            )
        steps: list[str] = []
        index = 0
        current = first
        while current <= last:
            steps.append(format_instant(current))
            index += 1
            try:
                current = shift(first, index, step)
            except InvalidArgumentError:
                break
        return steps

    def local_to_utc(
        self,
        start_local: InstantLike,
        end_local: InstantLike,
        zone: str | None = None,
    ) -> DateRange:
        tz = get_zone(zone or self._clock.zone())
        return DateRange(
            start=format_instant(parse_instant(start_local, tz)),
            end=format_instant(parse_instant(end_local, tz)),
        )

    def today_local(self, zone: str | None = None) -> tuple[LocalInstant, LocalInstant]:
        """Wall-clock bounds of today in *zone* (not converted to UTC)."""
        zone = zone or self._clock.zone()
        with calendar_bounds(zone=zone):
            wall_now = self._clock.now().astimezone(get_zone(zone)).replace(tzinfo=None)
        start, end = _whole(wall_now, Period.DAY)
        return (
            LocalInstant(value=format_wall(start), zone=zone),
            LocalInstant(value=format_wall(end), zone=zone),
        )

    def today_utc(self, zone: str | None = None) -> DateRange:
        return self.get_range(RangeName.TODAY, zone or self._clock.zone())

    def period_boundaries(
        self,
        period: str | Period,
        reference: InstantLike | None = None,
    ) -> DateRange:
        """UTC boundaries of the *period* containing *reference* (default: now)."""
        resolved = Period.parse(period)
        ref = self._clock.now() if is_zero(reference) else parse_instant(reference)
        start, end = _whole(ref, resolved)
        return DateRange(start=format_instant(start), end=format_instant(end))
