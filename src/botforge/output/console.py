"""Buffered Rich consoles for human-readable output.

Renderers draw into an in-memory console and hand back plain text, so the
caller decides which stream it goes to. Rich drops colour on its own when
the buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

_SEVERITY_COLOURS = {
    "error": "bold red",
    "warning": "bold yellow",
    "info": "cyan",
}

BOT_THEME = Theme(
    {
        "bot.ok": "bold green",
        **{f"bot.{name}": colour for name, colour in _SEVERITY_COLOURS.items()},
        "bot.op": "bold cyan",
        "bot.key": "dim",
        "bot.slot": "bold blue",
        "bot.required": "bold magenta",
        "bot.score": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Return a console writing to a fresh ``StringIO``."""
    buffer = StringIO()
    return Console(
        file=buffer,
        theme=BOT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console was not created by create_console()"
        raise TypeError(msg)
    return buffer.getvalue()


def style_for_severity(severity: str) -> str:
    """Theme style for ``error``/``warning``/``info``; empty when unknown."""
    return f"bot.{severity}" if severity in _SEVERITY_COLOURS else ""
