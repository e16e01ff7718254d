"""Root CLI group for wikipage with global flags and command registration."""

from __future__ import annotations

import click

from wikipage import __version__
from wikipage.commands import register_commands
from wikipage.commands._base import WikiGroup
from wikipage.commands._context import AppContext
from wikipage.config.settings import WikiSettings


@click.group(
    cls=WikiGroup,
    invoke_without_command=True,
    examples="""\
  wikipage pages
  wikipage show home
  wikipage --content-dir docs check --strict
  wikipage -c wiki.toml --json convert home --to yaml""",
)
@click.version_option(version=__version__, prog_name="wikipage")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--content-dir",
    default=None,
    help="Content directory (relative paths resolve against the wiki root).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    content_dir: str | None,
) -> None:
    """wikipage — front-matter aware markdown wiki pages."""
    overrides: dict[str, object] = {}
    if content_dir is not None:
        overrides["store"] = {"content_dir": content_dir}
    settings = WikiSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        **overrides,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
