"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from datewise.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from datewise.services.result import ServiceResult

# Keys holding Instants or wall-clock values.
_INSTANT_KEYS = frozenset(
    {"result", "start", "end", "utc", "local", "base", "now", "expires", "grace_end"}
)


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Bare values for ``--quiet`` mode, one per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    items = data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item) for item in items)
    if "start" in data and "end" in data:
        return f"{data['start']}\n{data['end']}"
    if "result" in data:
        return _plain(data["result"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _plain(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _styled(key: str, value: Any) -> Text:
    if isinstance(value, bool):
        return Text(_plain(value), style="dw.true" if value else "dw.false")
    if value is None:
        return Text("-", style="dim")
    if key == "zone":
        return Text(str(value), style="dw.zone")
    if key in _INSTANT_KEYS:
        return Text(str(value), style="dw.instant")
    return Text(str(value))


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="dw.ok")
    op = Text(f"  {result.op}", style="dw.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dw.key")
    console.print(Text.assemble(k, _styled(key, value)))


def _fields(
    console: Console, data: dict[str, Any], *, skip: frozenset[str] = frozenset()
) -> None:
    for key, value in data.items():
        if key not in skip:
            _field(console, key, value)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including timing (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            duration = v.get("duration_ms", 0.0)
            style = "yellow" if duration > 100 else "dim"
            console.print(f"    [{style}]{duration:>8.3f}ms[/{style}]  {v.get('name', '?')}")
        else:
            console.print(f"    {k}: {v}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dw.error")
    op = Text(f"  {result.op}", style="dw.op")
    code = Text(f" [{err.code}]", style="dim") if err else Text("")
    console.print(label, op, code, Text(" — "), msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Result renderers ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Status line plus every data field."""
    _status_line(console, result)
    _fields(console, result.data)
    if verbose:
        _render_meta(console, result)


def _render_span(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render start/end results: named ranges, trials, period boundaries."""
    _status_line(console, result)
    data = result.data
    _fields(console, data, skip=frozenset({"start", "end"}))
    _field(console, "start", data.get("start"))
    _field(console, "end", data.get("end"))
    if verbose:
        _render_meta(console, result)


def _render_sequence(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render step lists (between, occurrences, list_ranges) as a numbered table."""
    _status_line(console, result)
    data = result.data
    _fields(console, data, skip=frozenset({"items"}))

    items = data.get("items") or []
    if not items:
        console.print(Text("  (none)", style="dim"))
    else:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Value", style="dw.instant" if result.op != "list_ranges" else "")
        for index, item in enumerate(items, start=1):
            table.add_row(str(index), str(item))
        console.print(table)

    if verbose:
        _render_meta(console, result)


def _render_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render subscription status with a coloured state label."""
    data = result.data
    status = str(data.get("status", ""))
    label = Text("OK", style="dw.ok")
    op = Text(f"  {result.op}  ", style="dw.op")
    state = Text(status.upper(), style=style_for_status(status))
    console.print(label, op, state, end="")
    console.print()
    _fields(console, data, skip=frozenset({"status", "result"}))
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    # Ranges
    "get_range": _render_span,
    "today_local": _render_span,
    "local_to_utc": _render_span,
    "period_boundaries": _render_span,
    "between": _render_sequence,
    "list_ranges": _render_sequence,
    # Subscription
    "trial_dates": _render_span,
    "occurrences": _render_sequence,
    "subscription_status": _render_status,
}
