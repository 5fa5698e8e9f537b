"""Output mode selection for ServiceResult.

The CLI renders results for humans (Rich), for scripts (``--quiet``: bare
values one per line) or for machines (``--json``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from datewise.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from datewise.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over the Rich renderers.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
