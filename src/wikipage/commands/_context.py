"""AppContext — state shared by the commands of one CLI run.

The root group stores it in ``ctx.obj``; commands receive it through
``@click.pass_obj``.  It owns the output mode and the exit status, so
commands only build a request and hand the result to :meth:`AppContext.emit`.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from wikipage.config.logging import configure_logging
from wikipage.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from wikipage.config.settings import WikiSettings
    from wikipage.infrastructure.store import PageStore
    from wikipage.services.pages import PageService
    from wikipage.services.result import ServiceResult


class AppContext:
    """Settings, output mode and lazily built services for one run.

    Nothing touches the content directory until a command asks for
    :attr:`store`, so ``--help`` and ``--version`` work anywhere.
    """

    def __init__(self, settings: WikiSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @cached_property
    def store(self) -> PageStore:
        from wikipage.infrastructure.store import PageStore

        return PageStore(
            self.settings.content_root,
            suffix=self.settings.store.suffix,
            default_mark=self.settings.pages.default_mark,
            date_format=self.settings.pages.date_format,
        )

    @cached_property
    def pages(self) -> PageService:
        from wikipage.services.pages import PageService

        return PageService(self.store)

    def emit(self, result: ServiceResult, *, strict: bool = False) -> None:
        """Print *result* and set the exit status.

        A successful result goes to stdout with its warnings on stderr
        (the JSON form already carries them).  A failed result goes to
        stderr and exits 1.  With *strict*, a result reporting
        ``error_count`` > 0 also exits 1 after printing.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if strict and result.data.get("error_count", 0):
            raise SystemExit(1)
