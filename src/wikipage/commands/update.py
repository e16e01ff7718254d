"""Command: set page fields and body, creating the page if needed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from wikipage.commands._base import WikiCommand

if TYPE_CHECKING:
    from wikipage.commands._context import AppContext


@click.command(
    cls=WikiCommand,
    examples="""\
  wikipage update home --title "Home" --tags "wiki start"
  wikipage update notes/new --date 2024-05-01 --draft false
  wikipage update home --body-file home.md
  cat body.md | wikipage update home --body-file -""",
)
@click.argument("path")
@click.option("--title", default=None, help="Page title.")
@click.option("--description", default=None, help="Page description.")
@click.option("--tags", default=None, help="Whitespace-separated tags.")
@click.option("--date", "date_text", default=None, help="Page date in the configured format.")
@click.option("--language", default=None, help="Page language.")
@click.option("--draft", default=None, help='Draft flag; only "true" counts as true.')
@click.option(
    "--body-file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Replace the body with this file's contents ('-' for stdin).",
)
@click.pass_obj
def update(
    app: AppContext,
    path: str,
    title: str | None,
    description: str | None,
    tags: str | None,
    date_text: str | None,
    language: str | None,
    draft: str | None,
    body_file: Any,
) -> None:
    """Update fields of the page at PATH."""
    changes: dict[str, Any] = {
        "title": title,
        "description": description,
        "tags": tags,
        "date": date_text,
        "language": language,
        "draft": draft,
    }
    if body_file is not None:
        changes["body"] = body_file.read()
    app.emit(app.pages.update(path, changes=changes))
