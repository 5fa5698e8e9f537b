"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to every subcommand via
``@click.pass_obj``.  Builds the clock and business-day policy lazily
from settings and routes results to stdout/stderr with exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datewise.config.logging import configure_logging
from datewise.domain.errors import DatewiseError
from datewise.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from datewise.config.settings import DatewiseSettings
    from datewise.domain.clock import Clock
    from datewise.domain.values import BusinessDayPolicy
    from datewise.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The clock and policy are built on first use so ``--help`` never
    fails on a bad ``--tz`` or ``--now`` value.
    """

    def __init__(self, settings: DatewiseSettings) -> None:
        self.settings = settings
        self._clock: Clock | None = None
        self._policy: BusinessDayPolicy | None = None

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            zone=settings.timezone,
            now=settings.now,
        )

        if settings.verbose:
            from datewise.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def clock(self) -> Clock:
        """The clock for this invocation (fixed when ``--now`` is set)."""
        if self._clock is None:
            try:
                self._clock = self.settings.build_clock()
            except DatewiseError as exc:
                raise click.ClickException(exc.message) from exc
        return self._clock

    @property
    def policy(self) -> BusinessDayPolicy:
        """Business-day policy from the ``[business]`` config section."""
        if self._policy is None:
            try:
                self._policy = self.settings.business.policy()
            except DatewiseError as exc:
                raise click.ClickException(exc.message) from exc
        return self._policy

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
