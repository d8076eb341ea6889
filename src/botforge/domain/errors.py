"""Exception hierarchy for botforge.

Only lookups against the static catalog and rule registration raise.
Validation and command execution always return structured results.
"""

from __future__ import annotations


class BotforgeError(Exception):
    """Base class for all botforge errors."""


class UnknownArchetypeError(BotforgeError, KeyError):
    """Raised when an archetype has no slot layout or constraint table."""

    def __init__(self, archetype: str) -> None:
        self.archetype = archetype
        super().__init__(f"Unknown archetype: {archetype}")

    def __str__(self) -> str:
        return f"Unknown archetype: {self.archetype}"


class UnknownSlotError(BotforgeError, KeyError):
    """Raised when a slot identifier is missing from the slot registry."""

    def __init__(self, slot_id: str) -> None:
        self.slot_id = slot_id
        super().__init__(f"Unknown slot identifier: {slot_id}")

    def __str__(self) -> str:
        return f"Unknown slot identifier: {self.slot_id}"


class DuplicateRuleError(BotforgeError, ValueError):
    """Raised when a rule name is registered twice for one entity type."""

    def __init__(self, rule_name: str, entity_type: str) -> None:
        self.rule_name = rule_name
        self.entity_type = entity_type
        super().__init__(
            f"Rule '{rule_name}' already registered for entity type '{entity_type}'"
        )
