"""BusinessService — business-day checks and stepping under a policy."""

from __future__ import annotations

from datewise.domain.calendar_math import CalendarMath
from datewise.domain.clock import Clock
from datewise.domain.errors import DatewiseError
from datewise.domain.instants import InstantLike, parse_instant
from datewise.domain.values import BusinessDayPolicy
from datewise.services.base import BaseService
from datewise.services.result import ServiceResult
from datewise.services.telemetry import traced


class BusinessService(BaseService):
    """Business-day operations for one :class:`BusinessDayPolicy`."""

    def __init__(self, clock: Clock, policy: BusinessDayPolicy | None = None) -> None:
        super().__init__(clock)
        self._math = CalendarMath(clock)
        self._policy = policy or BusinessDayPolicy()

    @property
    def policy(self) -> BusinessDayPolicy:
        return self._policy

    @traced
    def check(self, value: InstantLike) -> ServiceResult:
        op = "business_check"
        try:
            day = parse_instant(value).date()
            weekend = self._math.is_weekend(value)
            business = self._math.is_business_day(value, self._policy)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(
            op,
            date=day.isoformat(),
            weekday=day.isoweekday(),
            weekend=weekend,
            holiday=day in self._policy.holidays,
            result=business,
        )

    @traced
    def next_day(self, value: InstantLike) -> ServiceResult:
        op = "next_business_day"
        try:
            result = self._math.next_business_day(value, self._policy)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=str(value), result=result)

    @traced
    def add(self, value: InstantLike, days: int) -> ServiceResult:
        op = "add_working_days"
        try:
            result = self._math.add_working_days(value, days, self._policy)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=str(value), days=days, result=result)

    @traced
    def count(self, start: InstantLike, end: InstantLike) -> ServiceResult:
        op = "working_days_between"
        try:
            result = self._math.working_days_between(start, end, self._policy)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, first=str(start), last=str(end), result=result)

    @traced
    def hours(
        self,
        value: InstantLike,
        start: str = "09:00",
        end: str = "17:00",
        zone: str | None = None,
    ) -> ServiceResult:
        """Whether *value* falls inside the ``start..end`` wall-clock window."""
        op = "business_hours"
        zone = zone or self._clock.zone()
        try:
            result = self._math.is_business_hours(value, start, end, zone)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(
            op, input=str(value), zone=zone, opens=start, closes=end, result=result
        )
