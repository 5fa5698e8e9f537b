"""RangeService — named ranges, stepping and period boundaries."""

from __future__ import annotations

from datewise.domain.clock import Clock
from datewise.domain.errors import DatewiseError
from datewise.domain.instants import InstantLike
from datewise.domain.ranges import RangeResolver
from datewise.domain.types import Interval, Period, RangeName
from datewise.services.base import BaseService
from datewise.services.result import ServiceResult
from datewise.services.telemetry import traced


class RangeService(BaseService):
    """Range operations backed by :class:`RangeResolver`."""

    def __init__(self, clock: Clock) -> None:
        super().__init__(clock)
        self._resolver = RangeResolver(clock)

    @traced
    def get_range(self, name: str, zone: str | None = None, *, utc: bool = False) -> ServiceResult:
        """Resolve *name* on *zone*'s calendar, or on UTC when *utc* is set."""
        op = "get_range"
        anchor = None if utc else (zone or self._clock.zone())
        try:
            resolved = RangeName.parse(name)
            span = self._resolver.get_range(resolved, anchor)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, name=str(resolved), zone=anchor or "UTC", **span.to_dict())

    @traced
    def today_local(self, zone: str | None = None) -> ServiceResult:
        op = "today_local"
        try:
            start, end = self._resolver.today_local(zone)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, zone=start.zone, start=start.value, end=end.value)

    @traced
    def list_ranges(self, *, include_aliases: bool = False) -> ServiceResult:
        op = "list_ranges"
        items = self._resolver.available_ranges(include_aliases=include_aliases)
        return self._success(op, count=len(items), items=items)

    @traced
    def between(
        self,
        start: InstantLike,
        end: InstantLike,
        interval: str = "day",
    ) -> ServiceResult:
        op = "between"
        try:
            resolved = Interval.parse(interval)
            items = self._resolver.between(start, end, resolved)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, interval=str(resolved), count=len(items), items=items)

    @traced
    def local_to_utc(
        self,
        start_local: str,
        end_local: str,
        zone: str | None = None,
    ) -> ServiceResult:
        op = "local_to_utc"
        zone = zone or self._clock.zone()
        try:
            span = self._resolver.local_to_utc(start_local, end_local, zone)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, zone=zone, **span.to_dict())

    @traced
    def period(self, period: str, reference: InstantLike | None = None) -> ServiceResult:
        op = "period_boundaries"
        try:
            resolved = Period.parse(period)
            span = self._resolver.period_boundaries(resolved, reference)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, period=str(resolved), **span.to_dict())
