"""Command: decode every page and report problems."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wikipage.commands._base import WikiCommand

if TYPE_CHECKING:
    from wikipage.commands._context import AppContext


@click.command(
    cls=WikiCommand,
    examples="""\
  wikipage check
  wikipage check --errors-only
  wikipage --json check""",
)
@click.option("--errors-only", is_flag=True, help="Hide warnings.")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any error is found.")
@click.pass_obj
def check(app: AppContext, errors_only: bool, strict: bool) -> None:
    """Check that every page's front matter decodes cleanly."""
    app.emit(app.pages.check(errors_only=errors_only), strict=strict)
