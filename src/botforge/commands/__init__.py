"""Subcommand modules for botforge.

Provides register_commands() which uses deferred imports to keep
``botforge --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from botforge.commands.compat import compat

    cli.add_command(compat)

    # --- Standalone commands ---
    from botforge.commands.assemble import assemble
    from botforge.commands.catalog import archetypes, constraints, layout

    cli.add_command(archetypes)
    cli.add_command(layout)
    cli.add_command(constraints)
    cli.add_command(assemble)
