"""Rich Console factory and theme for vaultbridge output.

Creates Console instances that render to a StringIO buffer, preserving
the ``render_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BRIDGE_THEME = Theme(
    {
        "vb.ok": "bold green",
        "vb.error": "bold red",
        "vb.warning": "bold yellow",
        "vb.op": "bold cyan",
        "vb.key": "dim",
        "vb.id": "bold blue",
        "vb.path": "dim",
        "vb.placeholder": "magenta",
        "vb.kind.document": "green",
        "vb.kind.asset": "yellow",
    }
)

_KIND_STYLES: dict[str, str] = {
    "document": "vb.kind.document",
    "asset": "vb.kind.asset",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=BRIDGE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a reference kind."""
    return _KIND_STYLES.get(kind, "")
