"""SubscriptionService — billing, trials, grace periods and renewals.

Defaults for grace/reminder/trial lengths are passed in by the caller
(the CLI reads them from the ``[subscription]`` config section).
"""

from __future__ import annotations

from datewise.domain.clock import Clock
from datewise.domain.errors import DatewiseError, UnknownPeriodError
from datewise.domain.instants import InstantLike, format_instant
from datewise.domain.subscription import SubscriptionScheduler
from datewise.domain.types import BillingPeriod
from datewise.services.base import BaseService
from datewise.services.result import ServiceResult
from datewise.services.telemetry import traced


class SubscriptionService(BaseService):
    """Subscription operations backed by :class:`SubscriptionScheduler`."""

    def __init__(self, clock: Clock) -> None:
        super().__init__(clock)
        self._scheduler = SubscriptionScheduler(clock)

    @traced
    def next_billing(self, last_payment: InstantLike, period: str) -> ServiceResult:
        """Next billing date; an unknown period is billed monthly with a warning."""
        op = "next_billing"
        warnings: list[str] = []
        try:
            resolved = str(BillingPeriod.parse(period))
        except UnknownPeriodError:
            resolved = str(BillingPeriod.MONTHLY)
            warnings.append(f"Unknown billing period {period!r}, defaulted to monthly")
        try:
            result = self._scheduler.next_billing(last_payment, period)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(
            op,
            warnings=warnings,
            last_payment=str(last_payment),
            period=resolved,
            result=result,
        )

    @traced
    def renewal(self, start: InstantLike, period: str) -> ServiceResult:
        op = "renewal_date"
        try:
            resolved = BillingPeriod.parse(period)
            result = self._scheduler.get_renewal_date(start, resolved)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, base=str(start), period=str(resolved), result=result)

    @traced
    def trial(
        self,
        start: InstantLike,
        days: int,
        current: InstantLike | None = None,
    ) -> ServiceResult:
        op = "trial_dates"
        try:
            span = self._scheduler.get_trial_dates(start, days)
            in_trial = self._scheduler.is_in_trial(start, days, current)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, days=days, in_trial=in_trial, **span.to_dict())

    @traced
    def status(
        self,
        expires: InstantLike,
        grace_days: int = 0,
        trial_end: InstantLike | None = None,
    ) -> ServiceResult:
        op = "subscription_status"
        try:
            status = self._scheduler.get_status(expires, grace_days)
            grace_end = (
                self._scheduler.get_grace_period_end(expires, grace_days)
                if grace_days > 0
                else None
            )
        except DatewiseError as exc:
            return self._failure(op, exc)
        data = status.to_dict()
        if trial_end is not None:
            # A running trial keeps the subscription usable past expiry.
            data["usable"] = self._scheduler.is_active(expires, grace_days, trial_end)
        return self._success(
            op,
            expires=str(expires),
            grace_days=grace_days,
            grace_end=grace_end,
            now=format_instant(self._clock.now()),
            result=data["status"],
            **data,
        )

    @traced
    def needs_renewal(
        self,
        expires: InstantLike,
        remind_days: int = 7,
        grace_days: int = 0,
    ) -> ServiceResult:
        op = "needs_renewal"
        try:
            result = self._scheduler.needs_renewal(expires, remind_days, grace_days)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, expires=str(expires), remind_days=remind_days, result=result)

    @traced
    def reminder(self, expires: InstantLike, days_before: int = 7) -> ServiceResult:
        op = "renewal_reminder"
        try:
            result = self._scheduler.get_renewal_reminder_date(expires, days_before)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, expires=str(expires), days_before=days_before, result=result)

    @traced
    def occurrences(
        self,
        period: str,
        count: int = 5,
        from_: InstantLike | None = None,
    ) -> ServiceResult:
        op = "occurrences"
        try:
            resolved = BillingPeriod.parse(period)
            items = self._scheduler.get_next_occurrences(resolved, count, from_)
        except DatewiseError as exc:
            return self._failure(op, exc)
        base = format_instant(self._clock.now()) if from_ is None else str(from_)
        return self._success(op, period=str(resolved), base=base, count=len(items), items=items)
