"""Command group: UTC/local conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datewise.commands._base import DateGroup
from datewise.services.convert import ConvertService

if TYPE_CHECKING:
    from datewise.commands._context import AppContext

_CONVERT_EXAMPLES = """\
  datewise convert to-utc "2025-06-15 14:30:00" --zone Europe/Berlin
  datewise convert to-local "2025-06-15 12:30:00" --zone America/New_York
  datewise convert now
  datewise convert check 0000-00-00
  datewise convert timestamp 1750000000"""


@click.group(cls=DateGroup, examples=_CONVERT_EXAMPLES)
@click.pass_obj
def convert(app: AppContext) -> None:
    """Convert between UTC storage and local display time."""


@convert.command(
    "to-utc",
    examples="""\
  datewise convert to-utc "2025-06-15 14:30:00" --zone Europe/Berlin
  datewise --tz Asia/Tokyo convert to-utc 2025-01-01
  datewise -q convert to-utc "2025-03-09 02:30:00" --zone America/New_York""",
)
@click.argument("value")
@click.option("--zone", default=None, help="Zone of the wall-clock input (default: site zone).")
@click.pass_obj
def to_utc(app: AppContext, value: str, zone: str | None) -> None:
    """Interpret a wall-clock time in a zone and print the UTC instant."""
    app.emit(ConvertService(app.clock).to_utc(value, zone))


@convert.command(
    "to-local",
    examples="""\
  datewise convert to-local "2025-06-15 12:30:00" --zone Europe/Berlin
  datewise --json convert to-local 2025-06-15T12:30:00Z""",
)
@click.argument("value")
@click.option("--zone", default=None, help="Target zone (default: site zone).")
@click.pass_obj
def to_local(app: AppContext, value: str, zone: str | None) -> None:
    """Reproject a UTC instant onto a zone's wall clock."""
    app.emit(ConvertService(app.clock).to_local(value, zone))


@convert.command(
    examples="""\
  datewise convert now
  datewise convert now --zone Australia/Sydney"""
)
@click.option("--zone", default=None, help="Zone for the local reading (default: site zone).")
@click.pass_obj
def now(app: AppContext, zone: str | None) -> None:
    """Print the current time in UTC and locally."""
    app.emit(ConvertService(app.clock).now(zone))


@convert.command(
    examples="""\
  datewise convert check "2025-06-15 12:00:00"
  datewise convert check 0000-00-00
  datewise -q convert check not-a-date"""
)
@click.argument("value")
@click.option("--zone", default=None, help="Zone used for the 'today' test.")
@click.pass_obj
def check(app: AppContext, value: str, zone: str | None) -> None:
    """Check whether a value is a usable date (zero dates are not)."""
    app.emit(ConvertService(app.clock).check(value, zone))


@convert.command(
    examples="""\
  datewise convert timestamp 1750000000
  datewise convert timestamp "2025-06-15 15:06:40\""""
)
@click.argument("value")
@click.pass_obj
def timestamp(app: AppContext, value: str) -> None:
    """Convert Unix seconds to an instant, or an instant to Unix seconds."""
    app.emit(ConvertService(app.clock).timestamp(value))
