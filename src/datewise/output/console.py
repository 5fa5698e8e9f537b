"""Rich Console factory and theme for datewise output.

Consoles render into a StringIO buffer so ``format_result()`` can return
a plain string.  In non-TTY environments (tests, pipes) Rich drops the
colour codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DW_THEME = Theme(
    {
        "dw.ok": "bold green",
        "dw.error": "bold red",
        "dw.warning": "bold yellow",
        "dw.op": "bold cyan",
        "dw.key": "dim",
        "dw.instant": "bold blue",
        "dw.zone": "magenta",
        "dw.true": "green",
        "dw.false": "red",
        "dw.status.active": "bold green",
        "dw.status.grace": "bold yellow",
        "dw.status.expired": "bold red",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "active": "dw.status.active",
    "grace": "dw.status.grace",
    "expired": "dw.status.expired",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (stable output in tests).
    """
    return Console(
        file=StringIO(),
        theme=DW_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Theme style for a subscription status label."""
    return _STATUS_STYLES.get(status, "")
