"""Instant parsing and formatting primitives.

An Instant is an absolute point in time.  Internally it is an aware
``datetime`` in UTC; on the wire it is the canonical string
``YYYY-MM-DD HH:MM:SS`` (UTC, 24-hour clock, zero padded).

INVARIANT: the zero sentinels (``None``, ``""``, ``0000-00-00 00:00:00``,
``0000-00-00``) are checked before any parse attempt.  They mean "no
value" and are never confused with the epoch (``1970-01-01 00:00:00``).

Naive inputs are wall-clock times in a given zone.  Attaching the zone
uses ``fold=0``: a repeated (fall-back) wall time resolves to its earlier
occurrence, a skipped (spring-forward) wall time takes the offset in force
before the transition and therefore lands past the gap.
"""

from __future__ import annotations

import contextlib
import functools
from collections.abc import Iterator
from datetime import UTC, date, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from datewise.domain.errors import (
    DatewiseError,
    InvalidArgumentError,
    InvalidDateError,
    InvalidTimezoneError,
)

CANONICAL_FORMAT = "%Y-%m-%d %H:%M:%S"
ZERO_DATES: frozenset[str] = frozenset({"0000-00-00 00:00:00", "0000-00-00"})

InstantLike = str | datetime | date


def is_zero(value: InstantLike | None) -> bool:
    """True for null/empty input and for the zero-date sentinels."""
    if value is None:
        return True
    if isinstance(value, (datetime, date)):
        return False
    return value == "" or value in ZERO_DATES


@contextlib.contextmanager
def calendar_bounds(
    error: type[DatewiseError] = InvalidArgumentError, **detail: object
) -> Iterator[None]:
    """Raise *error* when datetime arithmetic leaves years 1..9999."""
    try:
        yield
    except DatewiseError:
        raise
    except (OverflowError, ValueError) as exc:
        raise error(f"Date out of range: {exc}", **detail) from None


@functools.lru_cache(maxsize=128)
def get_zone(name: str) -> ZoneInfo:
    """Resolve an IANA zone id, raising InvalidTimezoneError when unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidTimezoneError(f"Unknown timezone: {name}", zone=name) from None


def parse_instant(value: InstantLike | None, zone: tzinfo = UTC) -> datetime:
    """Parse *value* into an aware UTC datetime truncated to whole seconds.

    Strings may be canonical, date-only, or ISO 8601 with ``T`` and/or an
    offset.  Values without an offset are interpreted as wall-clock time
    in *zone*.
    """
    if is_zero(value):
        raise InvalidDateError(f"Empty or zero date: {value!r}", value=value)

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidDateError(f"Invalid date: {value}", value=value) from None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone)
    with calendar_bounds(InvalidDateError, value=str(value)):
        return dt.astimezone(UTC).replace(microsecond=0)


def parse_wall(value: InstantLike | None) -> datetime:
    """Parse *value* as a naive wall-clock datetime (offset, if any, dropped)."""
    if is_zero(value):
        raise InvalidDateError(f"Empty or zero date: {value!r}", value=value)
    if isinstance(value, datetime):
        return value.replace(tzinfo=None, microsecond=0)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        dt = datetime.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidDateError(f"Invalid date: {value}", value=value) from None
    return dt.replace(tzinfo=None, microsecond=0)


def format_wall(dt: datetime) -> str:
    """Format the wall-clock fields of *dt* without any zone conversion."""
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )


def format_instant(dt: datetime) -> str:
    """Format *dt* as a canonical UTC Instant string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    with calendar_bounds():
        return format_wall(dt.astimezone(UTC))


def normalize(value: InstantLike, zone: tzinfo = UTC) -> str:
    """Parse and re-emit *value* in canonical form."""
    return format_instant(parse_instant(value, zone))
