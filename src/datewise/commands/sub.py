"""Command group: subscriptions.

Defaults for grace, reminder, trial and occurrence counts come from the
``[subscription]`` config section.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datewise.commands._base import DateGroup
from datewise.services.subscription import SubscriptionService

if TYPE_CHECKING:
    from datewise.commands._context import AppContext

_SUB_EXAMPLES = """\
  datewise sub next-billing 2025-01-31 monthly
  datewise sub renewal 2025-01-15 yearly
  datewise sub trial 2025-06-01 --days 14
  datewise sub status "2025-06-10 00:00:00" --grace-days 7
  datewise sub needs-renewal 2025-06-20
  datewise sub occurrences monthly --from 2025-01-31 --count 3"""


@click.group(cls=DateGroup, examples=_SUB_EXAMPLES)
@click.pass_obj
def sub(app: AppContext) -> None:
    """Billing cycles, trials, grace periods and renewals."""


@sub.command(
    "next-billing",
    examples="""\
  datewise sub next-billing 2025-01-31 monthly
  datewise sub next-billing "2025-03-15 09:00:00" every_3_months""",
)
@click.argument("last_payment")
@click.argument("period")
@click.pass_obj
def next_billing(app: AppContext, last_payment: str, period: str) -> None:
    """Next billing date (unknown periods fall back to monthly)."""
    app.emit(SubscriptionService(app.clock).next_billing(last_payment, period))


@sub.command(
    examples="""\
  datewise sub renewal 2025-01-15 yearly
  datewise sub renewal 2024-02-29 yearly"""
)
@click.argument("start")
@click.argument("period")
@click.pass_obj
def renewal(app: AppContext, start: str, period: str) -> None:
    """Renewal date for a billing period (unknown periods are an error)."""
    app.emit(SubscriptionService(app.clock).renewal(start, period))


@sub.command(
    examples="""\
  datewise sub trial 2025-06-01
  datewise sub trial "2025-06-01 10:00:00" --days 30"""
)
@click.argument("start")
@click.option("--days", type=int, default=None, help="Trial length (default from config).")
@click.pass_obj
def trial(app: AppContext, start: str, days: int | None) -> None:
    """Trial window starting at START."""
    days = app.settings.subscription.trial_days if days is None else days
    app.emit(SubscriptionService(app.clock).trial(start, days))


@sub.command(
    examples="""\
  datewise sub status "2025-06-10 00:00:00"
  datewise sub status "2025-06-10 00:00:00" --grace-days 7
  datewise sub status 2025-06-10 --trial-end 2025-06-30"""
)
@click.argument("expires")
@click.option("--grace-days", type=int, default=None, help="Grace period (default from config).")
@click.option("--trial-end", default=None, help="End of a running trial, if any.")
@click.pass_obj
def status(app: AppContext, expires: str, grace_days: int | None, trial_end: str | None) -> None:
    """Active / grace / expired status of a subscription."""
    grace = app.settings.subscription.grace_days if grace_days is None else grace_days
    app.emit(SubscriptionService(app.clock).status(expires, grace, trial_end))


@sub.command(
    "needs-renewal",
    examples="""\
  datewise sub needs-renewal 2025-06-20
  datewise -q sub needs-renewal 2025-07-01 --remind-days 30""",
)
@click.argument("expires")
@click.option(
    "--remind-days", type=int, default=None, help="Reminder window (default from config)."
)
@click.pass_obj
def needs_renewal(app: AppContext, expires: str, remind_days: int | None) -> None:
    """Whether a subscription is inside its renewal window or past expiry."""
    config = app.settings.subscription
    remind = config.remind_days if remind_days is None else remind_days
    app.emit(SubscriptionService(app.clock).needs_renewal(expires, remind, config.grace_days))


@sub.command(
    examples="""\
  datewise sub reminder "2025-06-20 12:00:00"
  datewise sub reminder 2025-06-20 --days-before 3"""
)
@click.argument("expires")
@click.option("--days-before", type=int, default=None, help="Lead time (default from config).")
@click.pass_obj
def reminder(app: AppContext, expires: str, days_before: int | None) -> None:
    """Date to send a renewal reminder."""
    days = app.settings.subscription.remind_days if days_before is None else days_before
    app.emit(SubscriptionService(app.clock).reminder(expires, days))


@sub.command(
    examples="""\
  datewise sub occurrences monthly
  datewise sub occurrences monthly --from 2025-01-31 --count 3
  datewise -q sub occurrences weekly --count 4"""
)
@click.argument("period")
@click.option("--count", type=int, default=None, help="How many (default from config).")
@click.option("--from", "from_", default=None, help="Start instant (default: now).")
@click.pass_obj
def occurrences(app: AppContext, period: str, count: int | None, from_: str | None) -> None:
    """Upcoming renewal dates for a billing period."""
    count = app.settings.subscription.occurrences if count is None else count
    app.emit(SubscriptionService(app.clock).occurrences(period, count, from_))
