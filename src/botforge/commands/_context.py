"""The object every command receives through ``@click.pass_obj``."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from botforge.config.logging import configure_logging
from botforge.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from botforge.config.settings import BotforgeSettings
    from botforge.context import BotforgeContext
    from botforge.services.result import ServiceResult


class AppContext:
    """Settings plus a lazily built :class:`BotforgeContext`.

    Building services loads plugins, so it waits until a command actually
    asks for them; ``--help`` and ``--examples`` stay side-effect free.
    """

    def __init__(self, settings: BotforgeSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(json_output=settings.json_output, verbose=settings.verbose)
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @cached_property
    def services(self) -> BotforgeContext:
        from botforge.context import BotforgeContext

        return BotforgeContext(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits with 1.

        In human mode the warnings of a successful result are echoed to
        stderr so stdout stays pipeable. JSON output already embeds them.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
