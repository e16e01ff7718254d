"""Command: show a page's typed fields and body."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wikipage.commands._base import WikiCommand

if TYPE_CHECKING:
    from wikipage.commands._context import AppContext


@click.command(
    cls=WikiCommand,
    examples="""\
  wikipage show home
  wikipage show notes/python-tips
  wikipage --json show home
  wikipage -v show home""",
)
@click.argument("path")
@click.pass_obj
def show(app: AppContext, path: str) -> None:
    """Show the page at PATH."""
    app.emit(app.pages.show(path))
