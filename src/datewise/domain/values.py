"""Immutable value objects returned by the domain layer.

All values are frozen dataclasses.  Instants inside them are always held
as canonical UTC strings so they serialize without further conversion.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Self

from datewise.domain.errors import ConfigurationError, InvalidDateError, InvalidRangeError
from datewise.domain.instants import format_instant, get_zone, normalize, parse_instant, parse_wall
from datewise.domain.types import SubscriptionState, Unit

DEFAULT_BUSINESS_DAYS: frozenset[int] = frozenset({1, 2, 3, 4, 5})


@dataclass(frozen=True)
class DateRange:
    """Inclusive ``[start, end]`` pair of UTC Instants.

    INVARIANT: ``start <= end``.  Bounds are normalized to canonical form
    on construction.
    """

    start: str
    end: str

    def __post_init__(self) -> None:
        start = normalize(self.start)
        end = normalize(self.end)
        if start > end:
            msg = f"Range start {start} is after end {end}"
            raise InvalidRangeError(msg, start=start, end=end)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def contains(self, value: str, *, inclusive: bool = True) -> bool:
        instant = normalize(value)
        if inclusive:
            return self.start <= instant <= self.end
        return self.start < instant < self.end

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class LocalInstant:
    """An Instant reprojected onto a named zone's wall clock.

    Keeps the zone id so the conversion back to UTC is lossless.
    """

    value: str
    zone: str

    def to_utc(self) -> str:
        return format_instant(parse_instant(self.value, get_zone(self.zone)))

    def to_dict(self) -> dict[str, str]:
        return {"value": self.value, "zone": self.zone}

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Duration:
    """Signed amount of a calendar or fixed-length unit."""

    amount: int
    unit: Unit

    def negated(self) -> Duration:
        return Duration(-self.amount, self.unit)

    def __str__(self) -> str:
        return f"{self.amount} {self.unit}"


@dataclass(frozen=True)
class BusinessDayPolicy:
    """Working weekdays (ISO 1=Mon..7=Sun) plus holiday dates to skip.

    INVARIANT: ``business_days`` is non-empty and within 1..7, so any
    day-stepping loop over this policy terminates.
    """

    business_days: frozenset[int] = DEFAULT_BUSINESS_DAYS
    holidays: frozenset[date] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.business_days:
            raise ConfigurationError("Business day set must not be empty")
        invalid = sorted(d for d in self.business_days if d not in range(1, 8))
        if invalid:
            msg = f"Business days must be ISO weekdays 1-7, got {invalid}"
            raise ConfigurationError(msg, invalid=invalid)

    @classmethod
    def build(
        cls,
        business_days: Iterable[int] | None = None,
        holidays: Iterable[str | date] | None = None,
    ) -> Self:
        """Construct from loose iterables (holidays as ISO strings or dates)."""
        days = frozenset(int(d) for d in business_days) if business_days is not None else None
        parsed: set[date] = set()
        for item in holidays or ():
            if isinstance(item, date):
                parsed.add(item)
                continue
            try:
                parsed.add(parse_wall(item).date())
            except InvalidDateError:
                raise ConfigurationError(f"Invalid holiday date: {item}", holiday=item) from None
        if days is None:
            return cls(holidays=frozenset(parsed))
        return cls(business_days=days, holidays=frozenset(parsed))

    def is_business_date(self, day: date) -> bool:
        return day.isoweekday() in self.business_days and day not in self.holidays


@dataclass(frozen=True)
class SubscriptionStatus:
    """Derived subscription state at a given "now"."""

    active: bool
    in_grace: bool
    expired: bool
    status: SubscriptionState

    def to_dict(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "in_grace": self.in_grace,
            "expired": self.expired,
            "status": str(self.status),
        }
