"""Rich Console factory and theme for dealref output.

Consoles render to a StringIO buffer so renderers can return strings.
In non-TTY environments (tests, pipes) Rich drops color codes itself.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEALREF_THEME = Theme(
    {
        "dealref.ok": "bold green",
        "dealref.error": "bold red",
        "dealref.op": "bold cyan",
        "dealref.key": "dim",
        "dealref.month": "bold",
        "dealref.root": "bold blue",
        "dealref.count": "magenta",
    }
)


def create_console(*, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        width: Override terminal width (keeps table layout stable in tests).
    """
    return Console(
        file=StringIO(),
        theme=DEALREF_THEME,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
