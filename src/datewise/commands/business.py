"""Command group: business days.

Working weekdays and holidays come from the ``[business]`` config
section (default Monday-Friday, no holidays).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datewise.commands._base import DateGroup
from datewise.services.business import BusinessService

if TYPE_CHECKING:
    from datewise.commands._context import AppContext

_BUSINESS_EXAMPLES = """\
  datewise business check 2025-06-14
  datewise business next "2025-06-13 09:00:00"
  datewise business add 2025-06-13 5
  datewise business count 2025-06-01 2025-06-30
  datewise business hours "2025-06-13 15:30:00" --zone Europe/Berlin"""


@click.group(cls=DateGroup, examples=_BUSINESS_EXAMPLES)
@click.pass_obj
def business(app: AppContext) -> None:
    """Business-day checks and stepping."""


@business.command(
    examples="""\
  datewise business check 2025-06-14
  datewise -q business check 2025-12-25"""
)
@click.argument("value")
@click.pass_obj
def check(app: AppContext, value: str) -> None:
    """Whether a date is a business day."""
    app.emit(BusinessService(app.clock, app.policy).check(value))


@business.command(
    "next",
    examples="""\
  datewise business next "2025-06-13 09:00:00"
  datewise -q business next 2025-12-24""",
)
@click.argument("value")
@click.pass_obj
def next_day(app: AppContext, value: str) -> None:
    """First business day after a date (time of day kept)."""
    app.emit(BusinessService(app.clock, app.policy).next_day(value))


@business.command(
    examples="""\
  datewise business add 2025-06-13 5
  datewise business add "2025-06-16 17:00:00" -- -3"""
)
@click.argument("value")
@click.argument("days", type=int)
@click.pass_obj
def add(app: AppContext, value: str, days: int) -> None:
    """Step DAYS business days forward (or backward when negative)."""
    app.emit(BusinessService(app.clock, app.policy).add(value, days))


@business.command(
    examples="""\
  datewise business count 2025-06-01 2025-06-30
  datewise -q business count 2025-06-14 2025-06-14"""
)
@click.argument("start")
@click.argument("end")
@click.pass_obj
def count(app: AppContext, start: str, end: str) -> None:
    """Count business days between two dates, inclusive."""
    app.emit(BusinessService(app.clock, app.policy).count(start, end))


@business.command(
    examples="""\
  datewise business hours "2025-06-13 15:30:00"
  datewise business hours "2025-06-13 07:30:00" --zone Europe/Berlin
  datewise -q business hours "2025-06-13 23:00:00" --start 22:00 --end 06:00"""
)
@click.argument("value")
@click.option("--start", default=None, help="Opening time, HH:MM (default from config).")
@click.option("--end", default=None, help="Closing time, HH:MM (default from config).")
@click.option("--zone", default=None, help="IANA zone (default: site timezone).")
@click.pass_obj
def hours(
    app: AppContext, value: str, start: str | None, end: str | None, zone: str | None
) -> None:
    """Whether an instant falls within business hours, bounds inclusive."""
    config = app.settings.business
    app.emit(
        BusinessService(app.clock, app.policy).hours(
            value, start or config.hours_start, end or config.hours_end, zone
        )
    )
