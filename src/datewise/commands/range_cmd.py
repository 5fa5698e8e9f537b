"""Command group: named ranges and range stepping."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datewise.commands._base import DateGroup
from datewise.domain.types import Interval, Period
from datewise.services.ranges import RangeService

if TYPE_CHECKING:
    from datewise.commands._context import AppContext

_RANGE_EXAMPLES = """\
  datewise range get today --zone Europe/Berlin
  datewise range get last_7_days --utc
  datewise range list --aliases
  datewise range between 2025-01-31 2025-06-30 --interval month
  datewise range local-to-utc 2025-06-01 "2025-06-30 23:59:59" --zone America/Chicago
  datewise range period quarter --at 2025-05-14"""


@click.group("range", cls=DateGroup, examples=_RANGE_EXAMPLES)
@click.pass_obj
def range_cmd(app: AppContext) -> None:
    """Resolve named ranges and step through spans of time."""


@range_cmd.command(
    examples="""\
  datewise range get
  datewise range get this_month --zone Europe/Berlin
  datewise range get last_30_days --utc
  datewise -q range get yesterday"""
)
@click.argument("name", required=False)
@click.option("--zone", default=None, help="Anchor zone (default: site zone).")
@click.option("--utc", is_flag=True, help="Compute on the UTC calendar instead.")
@click.option("--local", "local", is_flag=True, help="Show today's wall-clock bounds instead.")
@click.pass_obj
def get(app: AppContext, name: str | None, zone: str | None, utc: bool, local: bool) -> None:
    """Resolve a named range (default from [ranges] config) to UTC bounds."""
    service = RangeService(app.clock)
    if local:
        app.emit(service.today_local(zone))
        return
    app.emit(service.get_range(name or app.settings.ranges.default, zone, utc=utc))


@range_cmd.command(
    "list",
    examples="""\
  datewise range list
  datewise -q range list --aliases""",
)
@click.option("--aliases", is_flag=True, help="Include rolling aliases.")
@click.pass_obj
def list_cmd(app: AppContext, aliases: bool) -> None:
    """List the available range names."""
    app.emit(RangeService(app.clock).list_ranges(include_aliases=aliases))


@range_cmd.command(
    examples="""\
  datewise range between 2025-06-01 2025-06-07
  datewise range between 2025-01-31 2025-12-31 --interval month"""
)
@click.argument("start")
@click.argument("end")
@click.option(
    "--interval",
    type=click.Choice([str(i) for i in Interval]),
    default="day",
    show_default=True,
)
@click.pass_obj
def between(app: AppContext, start: str, end: str, interval: str) -> None:
    """Every step from START through END (inclusive)."""
    app.emit(RangeService(app.clock).between(start, end, interval))


@range_cmd.command(
    "local-to-utc",
    examples="""\
  datewise range local-to-utc 2025-06-01 "2025-06-30 23:59:59" --zone Europe/Berlin""",
)
@click.argument("start")
@click.argument("end")
@click.option("--zone", default=None, help="Zone of the inputs (default: site zone).")
@click.pass_obj
def local_to_utc(app: AppContext, start: str, end: str, zone: str | None) -> None:
    """Convert a pair of wall-clock bounds to a UTC range."""
    app.emit(RangeService(app.clock).local_to_utc(start, end, zone))


@range_cmd.command(
    examples="""\
  datewise range period month
  datewise range period quarter --at 2025-05-14"""
)
@click.argument("period", type=click.Choice([str(p) for p in Period]))
@click.option("--at", "reference", default=None, help="Reference instant (default: now).")
@click.pass_obj
def period(app: AppContext, period: str, reference: str | None) -> None:
    """UTC boundaries of the period containing an instant."""
    app.emit(RangeService(app.clock).period(period, reference))
