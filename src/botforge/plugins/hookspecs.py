"""Pluggy hook specifications for botforge.

One setup-time hook lets plugins contribute assembly rules.
One lifecycle hook observes successful slot commands; it is dispatched
synchronously after the configuration has been mutated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from botforge.domain.validation import ValidationRule

PROJECT_NAME = "botforge"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class BotforgeHookSpec:
    """Hook specifications for the botforge plugin system."""

    @hookspec
    def register_assembly_rules(self) -> list[ValidationRule[Any]] | None:
        """Return extra rules to run against every bot assembly."""

    @hookspec
    def post_slot_command(
        self,
        config_id: str,
        operation: str,
        actor_id: str,
        slot_ids: list[str],
    ) -> None:
        """Called after a slot command mutates a configuration."""
