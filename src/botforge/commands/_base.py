"""Click classes shared by every botforge command.

``--help`` stays short; worked invocations live behind ``--examples``,
which any command or group gets by passing ``examples="..."`` to its
decorator. ``botforge_errors`` turns domain errors into exit status 1.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import click

from botforge.domain.errors import BotforgeError


class _ExamplesMixin:
    """Accept an ``examples`` keyword and expose it as an eager flag."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class BotCommand(_ExamplesMixin, click.Command):
    """A leaf command that can carry ``--examples``."""


class BotGroup(_ExamplesMixin, click.Group):
    """A command group whose subcommands default to :class:`BotCommand`."""

    command_class = BotCommand


@contextmanager
def botforge_errors() -> Iterator[None]:
    """Surface a :class:`BotforgeError` as a ``ClickException``."""
    try:
        yield
    except BotforgeError as exc:
        raise click.ClickException(str(exc)) from exc
