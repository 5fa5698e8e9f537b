"""Root CLI group for datewise with global flags and command registration."""

from __future__ import annotations

import click

from datewise import __version__
from datewise.commands import register_commands
from datewise.commands._context import AppContext
from datewise.config.settings import DatewiseSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="datewise")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Bare values only.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--tz", default=None, help="Site timezone (IANA id), overrides [site] timezone.")
@click.option("--now", default=None, help="Pin the current time (UTC instant).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    tz: str | None,
    now: str | None,
) -> None:
    """datewise — UTC-first date and time toolkit."""
    ctx.ensure_object(dict)
    settings = DatewiseSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        tz=tz,
        now=now,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
