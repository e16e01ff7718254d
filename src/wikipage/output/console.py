"""Rich Console factory and theme for wikipage output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

WIKI_THEME = Theme(
    {
        "wiki.ok": "bold green",
        "wiki.error": "bold red",
        "wiki.warning": "bold yellow",
        "wiki.op": "bold cyan",
        "wiki.key": "dim",
        "wiki.path": "bold blue",
        "wiki.title": "bold",
        "wiki.format.yaml": "green",
        "wiki.format.toml": "yellow",
        "wiki.format.json": "cyan",
    }
)


def create_console() -> Console:
    """Create a 120-column Console that renders to a StringIO buffer."""
    return Console(file=StringIO(), theme=WIKI_THEME, highlight=False, width=120)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_format(format_name: str) -> str:
    """Return the Rich style name for a front-matter format (``yaml``/``toml``/``json``)."""
    return f"wiki.format.{format_name}" if format_name in ("yaml", "toml", "json") else ""
