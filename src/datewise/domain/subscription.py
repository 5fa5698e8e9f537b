"""SubscriptionScheduler — billing cycles, trials, grace periods, renewals.

Built on :class:`CalendarMath`, so monthly/quarterly/yearly cycles clamp
to the end of shorter months (a Jan 31 payment renews on Feb 28/29).

Unknown billing periods are handled differently on purpose:

- ``next_billing`` falls back to monthly and logs a warning;
- ``get_renewal_date`` and ``get_next_occurrences`` raise
  UnknownPeriodError.
"""

from __future__ import annotations

import logging

from datewise.domain.calendar_math import CalendarMath, shift
from datewise.domain.clock import Clock
from datewise.domain.errors import InvalidArgumentError, UnknownPeriodError
from datewise.domain.instants import InstantLike, format_instant, is_zero, normalize, parse_instant
from datewise.domain.types import BillingPeriod, SubscriptionState, Unit
from datewise.domain.values import DateRange, Duration, SubscriptionStatus

logger = logging.getLogger(__name__)


class SubscriptionScheduler:
    """Subscription date calculations against an injected clock."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._math = CalendarMath(clock)

    @staticmethod
    def period_duration(period: str | BillingPeriod) -> Duration:
        resolved = BillingPeriod.parse(period)
        return Duration(resolved.amount, resolved.unit)

    # ------------------------------------------------------------------
    # Billing
    # ------------------------------------------------------------------

    def next_billing(self, last_payment: InstantLike, period: str | BillingPeriod) -> str:
        """Next billing date after *last_payment*; unknown periods bill monthly."""
        try:
            duration = self.period_duration(period)
        except UnknownPeriodError:
            logger.warning("Unknown billing period %r, defaulting to monthly", str(period))
            duration = self.period_duration(BillingPeriod.MONTHLY)
        return self._math.add_duration(last_payment, duration)

    def get_renewal_date(self, start: InstantLike, period: str | BillingPeriod) -> str:
        """Like next_billing, but raises UnknownPeriodError for unknown periods."""
        return self._math.add_duration(start, self.period_duration(period))

    def get_next_occurrences(
        self,
        period: str | BillingPeriod,
        count: int = 5,
        from_: InstantLike | None = None,
    ) -> list[str]:
        """The next *count* renewals after *from_* (default: now).

        Each occurrence is computed from the previous one, so a clamped
        month (Jan 31 -> Feb 28) carries forward (-> Mar 28).
        """
        duration = self.period_duration(period)
        if count < 0:
            raise InvalidArgumentError("Occurrence count must not be negative", count=count)
        current = self._clock.now() if is_zero(from_) else parse_instant(from_)
        occurrences: list[str] = []
        for _ in range(count):
            current = shift(current, duration.amount, duration.unit)
            occurrences.append(format_instant(current))
        return occurrences

    # ------------------------------------------------------------------
    # Trials
    # ------------------------------------------------------------------

    def get_trial_end_date(self, start: InstantLike, days: int) -> str:
        if days <= 0:
            raise InvalidArgumentError("Trial days must be positive", days=days)
        return self._math.end_of_day(self._math.add(start, days, Unit.DAYS))

    def get_trial_dates(self, start: InstantLike, days: int) -> DateRange:
        """``{start, end_of_day(start + days)}``."""
        end = self.get_trial_end_date(start, days)
        return DateRange(start=normalize(start), end=end)

    def is_in_trial(
        self,
        start: InstantLike,
        trial_days: int,
        current: InstantLike | None = None,
    ) -> bool:
        if trial_days <= 0:
            return False
        trial = self.get_trial_dates(start, trial_days)
        now = self._clock.now() if is_zero(current) else parse_instant(current)
        return trial.contains(format_instant(now))

    # ------------------------------------------------------------------
    # Grace periods and status
    # ------------------------------------------------------------------

    def get_grace_period_end(self, expires: InstantLike, days: int) -> str:
        if days <= 0:
            raise InvalidArgumentError("Grace period days must be positive", days=days)
        return self._math.end_of_day(self._math.add(expires, days, Unit.DAYS))

    def is_in_grace_period(self, expires: InstantLike, grace_days: int | None) -> bool:
        """True while now is strictly between expiry and the end of grace."""
        if grace_days is None or grace_days <= 0:
            return False
        expiration = parse_instant(expires)
        grace_end = parse_instant(self.get_grace_period_end(expires, grace_days))
        now = self._clock.now()
        return expiration < now < grace_end

    def get_status(self, expires: InstantLike, grace_days: int | None = None) -> SubscriptionStatus:
        past_expiry = self._clock.now() > parse_instant(expires)
        in_grace = past_expiry and self.is_in_grace_period(expires, grace_days)
        if not past_expiry:
            state = SubscriptionState.ACTIVE
        elif in_grace:
            state = SubscriptionState.GRACE
        else:
            state = SubscriptionState.EXPIRED
        return SubscriptionStatus(
            active=not past_expiry or in_grace,
            in_grace=in_grace,
            expired=past_expiry and not in_grace,
            status=state,
        )

    def is_expired(self, expires: InstantLike, grace_days: int | None = None) -> bool:
        """Expired beyond any grace period."""
        return self.get_status(expires, grace_days).expired

    def is_active(
        self,
        expires: InstantLike,
        grace_days: int | None = None,
        trial_end: InstantLike | None = None,
    ) -> bool:
        """Active during a trial, before expiry, or within grace."""
        now = self._clock.now()
        if not is_zero(trial_end) and now <= parse_instant(trial_end):
            return True
        if now <= parse_instant(expires):
            return True
        return self.is_in_grace_period(expires, grace_days)

    # ------------------------------------------------------------------
    # Renewal reminders
    # ------------------------------------------------------------------

    def get_renewal_reminder_date(self, expires: InstantLike, days_before: int) -> str:
        if days_before <= 0:
            raise InvalidArgumentError(
                "Days before expiration must be positive", days_before=days_before
            )
        return self._math.start_of_day(self._math.subtract(expires, days_before, Unit.DAYS))

    def needs_renewal(
        self,
        expires: InstantLike,
        remind_days: int = 7,
        grace_days: int | None = None,
    ) -> bool:
        """True once past expiry (grace or not) or inside the reminder window.

        *grace_days* does not change the answer: an expired subscription
        needs renewal whether or not it is still in grace.
        """
        now = self._clock.now()
        expiration = parse_instant(expires)
        if now > expiration:
            if self.is_in_grace_period(expires, grace_days):
                logger.debug("needs_renewal: %s is in grace", format_instant(expiration))
            return True
        reminder_start = parse_instant(
            self._math.start_of_day(self._math.subtract(expiration, remind_days, Unit.DAYS))
        )
        return now >= reminder_start
