"""Subcommand modules for datewise.

Provides register_commands() which uses deferred imports to keep
``datewise --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the five command groups on the root CLI group."""
    from datewise.commands.business import business
    from datewise.commands.calc import calc
    from datewise.commands.convert import convert
    from datewise.commands.range_cmd import range_cmd
    from datewise.commands.sub import sub

    cli.add_command(convert)
    cli.add_command(calc)
    cli.add_command(business)
    cli.add_command(range_cmd)
    cli.add_command(sub)
