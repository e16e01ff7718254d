"""Command: rewrite a page's front matter in another format."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wikipage.commands._base import WikiCommand

if TYPE_CHECKING:
    from wikipage.commands._context import AppContext


@click.command(
    cls=WikiCommand,
    examples="""\
  wikipage convert home --to yaml
  wikipage convert notes/python-tips --to json""",
)
@click.argument("path")
@click.option(
    "--to",
    "target",
    type=click.Choice(["yaml", "toml", "json"]),
    required=True,
    help="Target front-matter format.",
)
@click.pass_obj
def convert(app: AppContext, path: str, target: str) -> None:
    """Convert the front matter of PATH to another format."""
    app.emit(app.pages.convert(path, to=target))
