"""CalcService — calendar arithmetic, boundaries, ages and expirations."""

from __future__ import annotations

from datewise.domain.calendar_math import CalendarMath
from datewise.domain.clock import Clock
from datewise.domain.errors import DatewiseError
from datewise.domain.instants import InstantLike, format_instant, is_zero
from datewise.domain.types import Period, Unit
from datewise.services.base import BaseService
from datewise.services.result import ServiceResult
from datewise.services.telemetry import traced


class CalcService(BaseService):
    """Date arithmetic operations backed by :class:`CalendarMath`."""

    def __init__(self, clock: Clock) -> None:
        super().__init__(clock)
        self._math = CalendarMath(clock)

    @traced
    def add(self, value: InstantLike, amount: int, unit: str) -> ServiceResult:
        op = "add"
        try:
            resolved = Unit.parse(unit)
            result = self._math.add(value, amount, resolved)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=str(value), amount=amount, unit=str(resolved), result=result)

    @traced
    def subtract(self, value: InstantLike, amount: int, unit: str) -> ServiceResult:
        op = "subtract"
        try:
            resolved = Unit.parse(unit)
            result = self._math.subtract(value, amount, resolved)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=str(value), amount=amount, unit=str(resolved), result=result)

    @traced
    def diff(self, first: InstantLike, second: InstantLike, unit: str = "days") -> ServiceResult:
        op = "diff"
        try:
            resolved = Unit.parse(unit)
            result = self._math.diff(first, second, resolved)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(
            op, first=str(first), second=str(second), unit=str(resolved), result=result
        )

    @traced
    def elapsed(self, value: str | None, unit: str = "days") -> ServiceResult:
        """Elapsed time since *value*; ``result`` is None for empty input."""
        op = "elapsed"
        warnings: list[str] = []
        try:
            resolved = Unit.parse(unit)
            result = self._math.elapsed(value, resolved)
        except DatewiseError as exc:
            return self._failure(op, exc)
        if result is None:
            warnings.append(f"No usable date in {value!r}")
        return self._success(op, warnings=warnings, input=value, unit=str(resolved), result=result)

    @traced
    def older_than(self, value: InstantLike, seconds: int) -> ServiceResult:
        op = "older_than"
        try:
            result = self._math.is_older_than(value, seconds)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=str(value), seconds=seconds, result=result)

    @traced
    def newer_than(self, value: InstantLike, seconds: int) -> ServiceResult:
        op = "newer_than"
        try:
            result = self._math.is_newer_than(value, seconds)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=str(value), seconds=seconds, result=result)

    @traced
    def age(self, birth: InstantLike, min_age: int | None = None) -> ServiceResult:
        op = "age"
        try:
            years = self._math.get_age(birth)
            days = self._math.get_age_in_days(birth)
        except DatewiseError as exc:
            return self._failure(op, exc)
        data: dict[str, object] = {"birth": str(birth), "result": years, "days": days}
        if min_age is not None:
            data["min_age"] = min_age
            data["meets_requirement"] = years >= min_age
        return self._success(op, **data)

    @traced
    def start_of(self, value: InstantLike, period: str = "day") -> ServiceResult:
        op = "start_of"
        try:
            resolved = Period.parse(period)
            result = self._math.start_of(value, resolved)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=str(value), period=str(resolved), result=result)

    @traced
    def end_of(self, value: InstantLike, period: str = "day") -> ServiceResult:
        op = "end_of"
        try:
            resolved = Period.parse(period)
            result = self._math.end_of(value, resolved)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=str(value), period=str(resolved), result=result)

    @traced
    def expires(
        self,
        duration: int,
        unit: str = "days",
        from_: InstantLike | None = None,
    ) -> ServiceResult:
        """Expiration instant *duration* units after *from_* (default: now)."""
        op = "expires"
        try:
            resolved = Unit.parse(unit)
            result = self._math.calculate_expiration(duration, resolved, from_)
        except DatewiseError as exc:
            return self._failure(op, exc)
        base = format_instant(self._clock.now()) if is_zero(from_) else str(from_)
        return self._success(op, base=base, duration=duration, unit=str(resolved), result=result)

    @traced
    def expired(self, expiry: str | None, grace_hours: int = 0) -> ServiceResult:
        op = "expired"
        result = self._math.is_expired(expiry, grace_hours)
        return self._success(op, expiry=expiry, grace_hours=grace_hours, result=result)

    @traced
    def round_timestamp(
        self, timestamp: int, interval: int, direction: str = "nearest"
    ) -> ServiceResult:
        op = "round_timestamp"
        try:
            result = self._math.round_timestamp(timestamp, interval, direction)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(
            op, timestamp=timestamp, interval=interval, direction=direction, result=result
        )
