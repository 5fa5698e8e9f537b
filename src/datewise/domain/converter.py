"""TimeConverter — UTC/local conversion and zero-date detection.

Storage is always UTC; display is local.  ``to_utc`` parses wall-clock
input in a zone (default: the clock's site zone) and ``to_local``
reprojects a stored Instant onto a zone's wall clock.  See
:mod:`datewise.domain.instants` for the DST disambiguation rule.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from datewise.domain.clock import Clock
from datewise.domain.errors import DatewiseError, InvalidArgumentError, InvalidTimezoneError
from datewise.domain.instants import (
    InstantLike,
    calendar_bounds,
    format_instant,
    format_wall,
    get_zone,
    is_zero,
    parse_instant,
)
from datewise.domain.values import LocalInstant

logger = logging.getLogger(__name__)


class TimeConverter:
    """Timezone reprojection over an injected :class:`Clock`."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, value: InstantLike | None) -> datetime:
        """Parse a UTC Instant into an aware datetime."""
        return parse_instant(value)

    @staticmethod
    def format(dt: datetime) -> str:
        return format_instant(dt)

    @staticmethod
    def is_zero(value: InstantLike | None) -> bool:
        return is_zero(value)

    def is_valid(self, value: InstantLike | None) -> bool:
        """True when *value* parses; zero sentinels are never valid."""
        if is_zero(value):
            return False
        try:
            parse_instant(value)
        except DatewiseError:
            return False
        return True

    @staticmethod
    def is_valid_timezone(zone: str) -> bool:
        try:
            get_zone(zone)
        except InvalidTimezoneError:
            return False
        return True

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_utc(self, local_string: InstantLike, zone: str | None = None) -> str:
        """Interpret *local_string* as wall time in *zone*; return a UTC Instant."""
        zone = zone or self._clock.zone()
        result = format_instant(parse_instant(local_string, get_zone(zone)))
        logger.debug("to_utc %s [%s] -> %s", local_string, zone, result)
        return result

    def to_local(self, instant: InstantLike, zone: str | None = None) -> LocalInstant:
        """Reproject a UTC Instant onto *zone*'s wall clock."""
        zone = zone or self._clock.zone()
        tz = get_zone(zone)
        with calendar_bounds(zone=zone):
            local = parse_instant(instant).astimezone(tz)
        return LocalInstant(value=format_wall(local), zone=zone)

    def now_utc(self) -> str:
        return format_instant(self._clock.now())

    def now_local(self, zone: str | None = None) -> LocalInstant:
        return self.to_local(self._clock.now(), zone)

    # ------------------------------------------------------------------
    # Timestamps and comparisons
    # ------------------------------------------------------------------

    def to_timestamp(self, value: InstantLike) -> int:
        """Unix epoch seconds of a UTC Instant."""
        return int(parse_instant(value).timestamp())

    @staticmethod
    def from_timestamp(timestamp: int) -> str:
        try:
            return format_instant(datetime.fromtimestamp(timestamp, UTC))
        except (OverflowError, OSError, ValueError):
            raise InvalidArgumentError(
                f"Timestamp out of range: {timestamp}", timestamp=timestamp
            ) from None

    def is_past(self, value: InstantLike) -> bool:
        return parse_instant(value) < self._clock.now()

    def is_future(self, value: InstantLike) -> bool:
        return parse_instant(value) > self._clock.now()

    def in_range(
        self,
        value: InstantLike,
        start: InstantLike,
        end: InstantLike,
        *,
        inclusive: bool = True,
    ) -> bool:
        instant = parse_instant(value)
        lower, upper = parse_instant(start), parse_instant(end)
        if inclusive:
            return lower <= instant <= upper
        return lower < instant < upper

    def is_today(self, value: InstantLike, zone: str | None = None) -> bool:
        """True when *value* falls on the current calendar day in *zone*."""
        tz = get_zone(zone or self._clock.zone())
        instant = parse_instant(value)
        with calendar_bounds(zone=str(tz)):
            return instant.astimezone(tz).date() == self._clock.now().astimezone(tz).date()
