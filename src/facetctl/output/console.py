"""Rich consoles that render into a string.

Renderers draw on a Console backed by a StringIO so ``format_result``
can return text for ``click.echo``. Rich drops colour on its own when the
buffer is not a terminal, which keeps test output plain.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

FACET_THEME = Theme(
    {
        "facet.ok": "bold green",
        "facet.error": "bold red",
        "facet.warning": "bold yellow",
        "facet.op": "bold cyan",
        "facet.key": "dim",
        "facet.wire": "bold blue",
        "facet.null": "dim italic",
        "facet.label": "bold",
        "facet.count": "magenta",
        "facet.empty": "dim",
        "facet.selected": "bold green",
        "facet.hint": "yellow",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Buffered Console using the facet theme; *width* defaults to 120 columns."""
    return Console(
        file=StringIO(),
        theme=FACET_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    assert isinstance(buffer, StringIO)
    return buffer.getvalue()


def count_style(count: int | None) -> str:
    """Style for a live term count; zero and unknown counts are dimmed."""
    if count:
        return "facet.count"
    return "facet.empty"
