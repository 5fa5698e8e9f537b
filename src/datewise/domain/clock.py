"""Clock — the injected source of "now" and of the site timezone.

Every domain component receives a Clock at construction instead of reading
process-wide state.  Clocks are immutable, so one instance can be shared
freely between callers and threads.

Usage::

    clock = FixedClock("2025-06-15 14:30:00", zone="Europe/Berlin")
    RangeResolver(clock).get_range("today", clock.zone())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from datewise.domain.instants import InstantLike, format_instant, get_zone, parse_instant

DEFAULT_ZONE = "UTC"


class Clock(ABC):
    """Abstract clock/timezone provider."""

    def __init__(self, zone: str | None = None) -> None:
        self._zone = zone or DEFAULT_ZONE
        # Fail fast on an unknown zone id.
        get_zone(self._zone)

    @abstractmethod
    def now(self) -> datetime:
        """Current instant as an aware UTC datetime."""

    def zone(self) -> str:
        """Site timezone id."""
        return self._zone

    def tzinfo(self) -> ZoneInfo:
        return get_zone(self._zone)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(zone={self._zone!r})"


class SystemClock(Clock):
    """Real wall-clock time from the host."""

    def now(self) -> datetime:
        return datetime.now(UTC).replace(microsecond=0)


class FixedClock(Clock):
    """A clock frozen at one instant (tests, ``--now`` on the CLI)."""

    def __init__(self, now: InstantLike, zone: str | None = None) -> None:
        super().__init__(zone)
        self._now = parse_instant(now)

    def now(self) -> datetime:
        return self._now

    def __repr__(self) -> str:
        return f"FixedClock(now={format_instant(self._now)!r}, zone={self._zone!r})"
