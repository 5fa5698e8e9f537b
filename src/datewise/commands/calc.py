"""Command group: calendar arithmetic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datewise.commands._base import DateGroup
from datewise.domain.types import Period, RoundDirection, Unit
from datewise.services.calc import CalcService

if TYPE_CHECKING:
    from datewise.commands._context import AppContext

_UNITS = [str(u) for u in Unit]
_PERIODS = [str(p) for p in Period]

_CALC_EXAMPLES = """\
  datewise calc add "2025-01-31 10:00:00" 1 months
  datewise calc subtract 2025-03-31 1 month
  datewise calc diff 2025-01-01 2025-12-31 --unit weeks
  datewise calc age 2000-02-29
  datewise calc start-of "2025-05-14 10:00:00" --period quarter
  datewise calc expires 30 --unit days"""


@click.group(cls=DateGroup, examples=_CALC_EXAMPLES)
@click.pass_obj
def calc(app: AppContext) -> None:
    """Calendar-precise date arithmetic."""


@calc.command(
    examples="""\
  datewise calc add "2025-01-31 10:00:00" 1 months
  datewise calc add 2024-02-29 1 year
  datewise calc add "2025-06-15 12:00:00" -- -90 minutes"""
)
@click.argument("value")
@click.argument("amount", type=int)
@click.argument("unit", type=click.Choice(_UNITS + [u.rstrip("s") for u in _UNITS]))
@click.pass_obj
def add(app: AppContext, value: str, amount: int, unit: str) -> None:
    """Add AMOUNT UNITs to an instant (months/years clamp to month end)."""
    app.emit(CalcService(app.clock).add(value, amount, unit))


@calc.command(
    examples="""\
  datewise calc subtract 2025-03-31 1 month
  datewise calc subtract "2025-06-15 12:00:00" 2 weeks"""
)
@click.argument("value")
@click.argument("amount", type=int)
@click.argument("unit", type=click.Choice(_UNITS + [u.rstrip("s") for u in _UNITS]))
@click.pass_obj
def subtract(app: AppContext, value: str, amount: int, unit: str) -> None:
    """Subtract AMOUNT UNITs from an instant."""
    app.emit(CalcService(app.clock).subtract(value, amount, unit))


@calc.command(
    examples="""\
  datewise calc diff 2025-01-01 2025-12-31
  datewise calc diff 2025-01-01 2026-01-01 --unit months"""
)
@click.argument("first")
@click.argument("second")
@click.option("--unit", type=click.Choice(_UNITS), default="days", show_default=True)
@click.pass_obj
def diff(app: AppContext, first: str, second: str, unit: str) -> None:
    """Absolute difference between two instants in whole units."""
    app.emit(CalcService(app.clock).diff(first, second, unit))


@calc.command(
    examples="""\
  datewise calc elapsed 2025-01-01
  datewise calc elapsed "2025-06-15 08:00:00" --unit hours"""
)
@click.argument("value")
@click.option("--unit", type=click.Choice(_UNITS), default="days", show_default=True)
@click.pass_obj
def elapsed(app: AppContext, value: str, unit: str) -> None:
    """Time elapsed since an instant (empty for zero dates)."""
    app.emit(CalcService(app.clock).elapsed(value, unit))


@calc.command(
    "older-than",
    examples="""\
  datewise calc older-than "2025-06-15 08:00:00" 3600
  datewise -q calc older-than 2025-06-01 86400""",
)
@click.argument("value")
@click.argument("seconds", type=int)
@click.pass_obj
def older_than(app: AppContext, value: str, seconds: int) -> None:
    """Whether more than SECONDS have passed since an instant."""
    app.emit(CalcService(app.clock).older_than(value, seconds))


@calc.command(
    "newer-than",
    examples="""\
  datewise calc newer-than "2025-06-15 14:00:00" 3600
  datewise -q calc newer-than 2025-06-15 300""",
)
@click.argument("value")
@click.argument("seconds", type=int)
@click.pass_obj
def newer_than(app: AppContext, value: str, seconds: int) -> None:
    """Whether fewer than SECONDS have passed since an instant."""
    app.emit(CalcService(app.clock).newer_than(value, seconds))


@calc.command(
    examples="""\
  datewise calc age 1990-05-20
  datewise calc age 2007-09-01 --min-age 18"""
)
@click.argument("birth")
@click.option("--min-age", type=int, default=None, help="Also check a minimum age.")
@click.pass_obj
def age(app: AppContext, birth: str, min_age: int | None) -> None:
    """Whole calendar years since a birth date."""
    app.emit(CalcService(app.clock).age(birth, min_age))


@calc.command(
    "start-of",
    examples="""\
  datewise calc start-of "2025-06-15 14:30:00"
  datewise calc start-of "2025-06-15 14:30:00" --period week""",
)
@click.argument("value")
@click.option("--period", type=click.Choice(_PERIODS), default="day", show_default=True)
@click.pass_obj
def start_of(app: AppContext, value: str, period: str) -> None:
    """First second of the period containing an instant (UTC)."""
    app.emit(CalcService(app.clock).start_of(value, period))


@calc.command(
    "end-of",
    examples="""\
  datewise calc end-of "2025-02-10 09:00:00" --period month
  datewise calc end-of 2025-05-14 --period quarter""",
)
@click.argument("value")
@click.option("--period", type=click.Choice(_PERIODS), default="day", show_default=True)
@click.pass_obj
def end_of(app: AppContext, value: str, period: str) -> None:
    """Last second of the period containing an instant (UTC)."""
    app.emit(CalcService(app.clock).end_of(value, period))


@calc.command(
    examples="""\
  datewise calc expires 30
  datewise calc expires 1 --unit years --from "2025-01-31 00:00:00\""""
)
@click.argument("duration", type=int)
@click.option("--unit", type=click.Choice(_UNITS), default="days", show_default=True)
@click.option("--from", "from_", default=None, help="Start instant (default: now).")
@click.pass_obj
def expires(app: AppContext, duration: int, unit: str, from_: str | None) -> None:
    """Expiration instant DURATION units from now (or --from)."""
    app.emit(CalcService(app.clock).expires(duration, unit, from_))


@calc.command(
    examples="""\
  datewise calc expired "2025-06-01 00:00:00"
  datewise calc expired "2025-06-15 10:00:00" --grace-hours 24"""
)
@click.argument("expiry")
@click.option("--grace-hours", type=int, default=0, show_default=True)
@click.pass_obj
def expired(app: AppContext, expiry: str, grace_hours: int) -> None:
    """Whether an expiry instant (plus grace hours) has passed."""
    app.emit(CalcService(app.clock).expired(expiry, grace_hours))


@calc.command(
    "round",
    examples="""\
  datewise calc round 1750000123 900
  datewise calc round 1750000123 3600 --direction down""",
)
@click.argument("timestamp", type=int)
@click.argument("interval", type=int)
@click.option(
    "--direction",
    type=click.Choice([str(d) for d in RoundDirection]),
    default="nearest",
    show_default=True,
)
@click.pass_obj
def round_cmd(app: AppContext, timestamp: int, interval: int, direction: str) -> None:
    """Round a Unix timestamp to a multiple of INTERVAL seconds."""
    app.emit(CalcService(app.clock).round_timestamp(timestamp, interval, direction))
