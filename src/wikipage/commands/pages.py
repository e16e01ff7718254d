"""Command: list page paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wikipage.commands._base import WikiCommand

if TYPE_CHECKING:
    from wikipage.commands._context import AppContext


@click.command(
    cls=WikiCommand,
    examples="""\
  wikipage pages
  wikipage -q pages""",
)
@click.pass_obj
def pages(app: AppContext) -> None:
    """List all pages in the content directory."""
    app.emit(app.pages.list_pages())
