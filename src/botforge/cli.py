"""``botforge`` entry point: global flags, settings, and the command tree."""

from __future__ import annotations

import click

from botforge import __version__
from botforge.commands import register_commands
from botforge.commands._base import botforge_errors
from botforge.commands._context import AppContext
from botforge.config.settings import BotforgeSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="botforge")
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Show detail and debug logging.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this botforge.toml instead of searching for one.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """botforge: archetype slot catalog, compatibility and assembly checks."""
    # A flag left off must not mask BOTFORGE_* env vars, so only set ones count.
    overrides = {name: True for name, on in flags.items() if on}
    with botforge_errors():
        settings = BotforgeSettings.load(config_path=config_path, **overrides)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
