"""Rich Console factory and theme for datastruct output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DS_THEME = Theme(
    {
        "ds.ok": "bold green",
        "ds.error": "bold red",
        "ds.warning": "bold yellow",
        "ds.op": "bold cyan",
        "ds.key": "dim",
        "ds.path": "dim",
        "ds.size": "magenta",
        "ds.type.scalar": "green",
        "ds.type.binary": "yellow",
        "ds.type.compound": "bold blue",
    }
)

_TYPE_STYLES: dict[str, str] = {
    "String": "ds.type.scalar",
    "Number": "ds.type.scalar",
    "Boolean": "ds.type.scalar",
    "Binary": "ds.type.binary",
    "List": "ds.type.compound",
    "Tuple": "ds.type.compound",
    "Dict": "ds.type.compound",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_datatype(datatype: str) -> str:
    """Return the Rich style name for a DValue variant name."""
    return _TYPE_STYLES.get(datatype, "")
