"""Click base classes shared by every wikipage command.

A command declares usage examples with ``examples="..."``.  ``--help``
stays short and only points at them; ``--examples`` prints them and exits.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesOption(click.Option):
    """Eager ``--examples`` flag bound to one command's example text."""

    def __init__(self, examples: str) -> None:
        self.examples = examples
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._print_examples,
            help="Show usage examples and exit.",
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


def _attach_examples(cmd: click.Command, examples: str | None) -> None:
    cmd.examples = examples  # type: ignore[attr-defined]
    if examples:
        cmd.params.append(ExamplesOption(examples))
        if not cmd.epilog:
            cmd.epilog = "Run with --examples for usage examples."


class WikiCommand(click.Command):
    """Command accepting an ``examples`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        _attach_examples(self, examples)


class WikiGroup(click.Group):
    """Group whose subcommands are :class:`WikiCommand` by default."""

    command_class = WikiCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        _attach_examples(self, examples)
