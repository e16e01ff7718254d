"""Subcommand modules for wikipage.

Provides register_commands() which uses deferred imports to keep
``wikipage --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from wikipage.commands.check import check
    from wikipage.commands.convert import convert
    from wikipage.commands.pages import pages
    from wikipage.commands.show import show
    from wikipage.commands.update import update

    cli.add_command(show)
    cli.add_command(pages)
    cli.add_command(update)
    cli.add_command(convert)
    cli.add_command(check)
