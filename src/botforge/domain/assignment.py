"""Slot assignment aggregate, commands, history, and report models.

``SkeletonSlotConfiguration`` is the aggregate root for one assembled bot.
It is mutated only through :class:`~botforge.services.assignment.SlotAssignmentService`
commands; everything else in this module is an immutable value.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from botforge.domain.slots import SlotDefinition, VisualPosition
from botforge.domain.types import Archetype, ItemTag, PartCategory, SlotId, SlotOperation


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SlotAssignment(BaseModel):
    """Binding of one item to one slot."""

    model_config = {"frozen": True}

    slot_id: SlotId
    item_id: str
    item_name: str
    category: PartCategory
    assigned_at: datetime = Field(default_factory=_utc_now)
    metadata: dict[str, Any] = Field(default_factory=dict)


class SkeletonSlotConfiguration(BaseModel):
    """Per-bot slot state: a catalog snapshot plus the current assignments.

    INVARIANT: at most one assignment per slot (enforced by the mapping).
    """

    config_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    archetype: Archetype
    available_slots: tuple[SlotDefinition, ...]
    assignments: dict[SlotId, SlotAssignment] = Field(default_factory=dict)
    last_modified: datetime = Field(default_factory=_utc_now)

    def slot(self, slot_id: SlotId | str) -> SlotDefinition | None:
        """Definition of *slot_id* in this configuration's catalog, if present."""
        for definition in self.available_slots:
            if definition.slot_id == slot_id:
                return definition
        return None

    def find_item(self, item_id: str) -> SlotAssignment | None:
        """Current assignment holding *item_id*, if any."""
        for assignment in self.assignments.values():
            if assignment.item_id == item_id:
                return assignment
        return None

    @property
    def required_slots(self) -> list[SlotDefinition]:
        return [s for s in self.available_slots if s.required]


class SlotCommand(BaseModel):
    """Imperative request to mutate a configuration.

    ``operation`` accepts arbitrary strings so that unsupported kinds
    reach the service and fail with a structured result.
    """

    model_config = {"frozen": True}

    operation: SlotOperation | str
    slot_id: SlotId
    item_id: str | None = None
    category: PartCategory | None = None
    tags: frozenset[ItemTag] = frozenset()
    target_slot_id: SlotId | None = None
    swap_with_slot_id: SlotId | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def assign(cls, slot_id: SlotId, item_id: str, **kwargs: Any) -> SlotCommand:
        return cls(operation=SlotOperation.ASSIGN, slot_id=slot_id, item_id=item_id, **kwargs)

    @classmethod
    def unassign(cls, slot_id: SlotId) -> SlotCommand:
        return cls(operation=SlotOperation.UNASSIGN, slot_id=slot_id)

    @classmethod
    def swap(cls, slot_id: SlotId, swap_with_slot_id: SlotId) -> SlotCommand:
        return cls(
            operation=SlotOperation.SWAP, slot_id=slot_id, swap_with_slot_id=swap_with_slot_id
        )

    @classmethod
    def move(cls, slot_id: SlotId, target_slot_id: SlotId, **kwargs: Any) -> SlotCommand:
        return cls(
            operation=SlotOperation.MOVE, slot_id=slot_id, target_slot_id=target_slot_id, **kwargs
        )


class AssignmentHistoryEntry(BaseModel):
    """Immutable audit record of one command's effect on one slot."""

    model_config = {"frozen": True}

    entry_id: str
    operation: SlotOperation
    previous_state: SlotAssignment | None = None
    new_state: SlotAssignment | None = None
    actor_id: str
    timestamp: datetime = Field(default_factory=_utc_now)


# --- Validation reports ---


class AssignmentCheck(BaseModel):
    """Structural pre-check of placing one item into one slot."""

    model_config = {"frozen": True}

    valid: bool
    slot_id: SlotId | str
    item_id: str | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class ConfigurationSummary(BaseModel):
    model_config = {"frozen": True}

    total_slots: int
    assigned_slots: int
    required_slots: int
    optional_slots: int
    conflicts: int


class ConfigurationReport(BaseModel):
    """Whole-configuration re-validation."""

    model_config = {"frozen": True}

    valid: bool
    assignments: list[AssignmentCheck]
    conflicting_slots: list[SlotId]
    unfilled_required_slots: list[SlotId]
    summary: ConfigurationSummary


# --- Visual projection ---


class VisualItem(BaseModel):
    model_config = {"frozen": True}

    item_id: str
    item_name: str
    category: PartCategory
    visual_metadata: dict[str, Any] = Field(default_factory=dict)


class VisualSlot(BaseModel):
    model_config = {"frozen": True}

    slot_id: SlotId
    category: PartCategory
    position: VisualPosition
    occupied: bool
    item: VisualItem | None = None


class VisualRepresentation(BaseModel):
    """Read-only, render-ready view of a configuration."""

    model_config = {"frozen": True}

    archetype: Archetype
    slots: list[VisualSlot]
