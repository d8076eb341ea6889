"""SlotAssignmentService: the only component that mutates a configuration.

Commands (assign, unassign, swap, move) either apply fully or not at all.
Multi-slot commands stage both new assignments, validate them, and only
then write them. Every successful mutation appends to a bounded,
per-configuration history ring.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from typing import Any

from botforge.domain.assignment import (
    AssignmentCheck,
    AssignmentHistoryEntry,
    ConfigurationReport,
    ConfigurationSummary,
    SkeletonSlotConfiguration,
    SlotAssignment,
    SlotCommand,
    VisualItem,
    VisualRepresentation,
    VisualSlot,
)
from botforge.domain.items import ItemCatalog
from botforge.domain.types import Archetype, ItemTag, PartCategory, SlotId, SlotOperation
from botforge.domain.validation import ValidationResult
from botforge.plugins.manager import PluginManager
from botforge.services._helpers import new_id, utc_now
from botforge.services.base import BaseService
from botforge.services.catalog import SlotCatalog
from botforge.services.compatibility import CompatibilityService

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_CAPACITY = 100
DEFAULT_PLACEHOLDER_NAME = "Part {item_id}"


class HistoryRing:
    """Fixed-capacity audit log per configuration; oldest entries evicted first."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if capacity < 1:
            msg = f"History capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._rings: dict[str, deque[AssignmentHistoryEntry]] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, config_id: str, entry: AssignmentHistoryEntry) -> None:
        ring = self._rings.get(config_id)
        if ring is None:
            ring = self._rings[config_id] = deque(maxlen=self._capacity)
        ring.append(entry)

    def entries(self, config_id: str) -> tuple[AssignmentHistoryEntry, ...]:
        """Retained entries for *config_id*, most recent last."""
        return tuple(self._rings.get(config_id, ()))

    def discard(self, config_id: str) -> None:
        self._rings.pop(config_id, None)

    def __len__(self) -> int:
        return len(self._rings)


class SlotAssignmentService(BaseService):
    """Create configurations, validate placements, and execute slot commands.

    Args:
        catalog: Source of slot layouts.
        plugins: Optional plugin manager; ``post_slot_command`` fires after
            every successful command.
        compatibility: Used for tag-based archetype fit checks. Built from
            *catalog* when omitted.
        items: Optional item catalog used to resolve display names.
        history_capacity: Entries retained per configuration.
        placeholder_name: Format string for unresolved item names; receives
            ``item_id``.
    """

    def __init__(
        self,
        catalog: SlotCatalog,
        plugins: PluginManager | None = None,
        *,
        compatibility: CompatibilityService | None = None,
        items: ItemCatalog | None = None,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY,
        placeholder_name: str = DEFAULT_PLACEHOLDER_NAME,
    ) -> None:
        super().__init__(catalog, plugins)
        self._compatibility = compatibility or CompatibilityService(catalog)
        self._items = items
        self._history = HistoryRing(history_capacity)
        self._placeholder_name = placeholder_name

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def create_configuration(self, archetype: Archetype) -> SkeletonSlotConfiguration:
        """New, empty configuration seeded with *archetype*'s slot layout."""
        layout = self._catalog.get_slot_layout(archetype)
        config = SkeletonSlotConfiguration(archetype=archetype, available_slots=tuple(layout))
        logger.debug("Created configuration %s for %s", config.config_id, archetype)
        return config

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_single_assignment(
        self,
        config: SkeletonSlotConfiguration,
        slot_id: SlotId | str,
        item_id: str,
        category: PartCategory,
        tags: Iterable[ItemTag] | None = None,
    ) -> AssignmentCheck:
        """Structural pre-check of placing *item_id* into *slot_id*.

        Occupied slots and items already placed elsewhere are warnings;
        a missing slot, a category mismatch, or an archetype misfit are errors.
        """
        return self._check(config, slot_id, item_id, category, tags)

    def validate_full_configuration(self, config: SkeletonSlotConfiguration) -> ConfigurationReport:
        """Re-validate every assignment and list unfilled required slots."""
        checks: list[AssignmentCheck] = []
        conflicting: list[SlotId] = []
        for slot_id, assignment in config.assignments.items():
            check = self._check(
                config, slot_id, assignment.item_id, assignment.category, current_slot=slot_id
            )
            checks.append(check)
            if not check.valid:
                conflicting.append(slot_id)

        unfilled = [
            d.slot_id
            for d in config.available_slots
            if d.required and d.slot_id not in config.assignments
        ]
        total = len(config.available_slots)
        required = len(config.required_slots)
        return ConfigurationReport(
            valid=not conflicting and not unfilled,
            assignments=checks,
            conflicting_slots=conflicting,
            unfilled_required_slots=unfilled,
            summary=ConfigurationSummary(
                total_slots=total,
                assigned_slots=len(config.assignments),
                required_slots=required,
                optional_slots=total - required,
                conflicts=len(conflicting),
            ),
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def execute_command(
        self, config: SkeletonSlotConfiguration, command: SlotCommand, actor_id: str
    ) -> ValidationResult:
        """Apply *command* to *config* on behalf of *actor_id*.

        Never raises: every failure, expected or not, comes back as an
        invalid :class:`ValidationResult` and leaves *config* untouched.
        """
        try:
            operation = SlotOperation(command.operation)
        except ValueError:
            return ValidationResult.error(
                "SlotAssignmentOperation", f"Unsupported operation: {command.operation}"
            )

        handlers = {
            SlotOperation.ASSIGN: self._assign,
            SlotOperation.UNASSIGN: self._unassign,
            SlotOperation.SWAP: self._swap,
            SlotOperation.MOVE: self._move,
        }
        try:
            result = handlers[operation](config, command, actor_id)
        except Exception as exc:
            logger.warning(
                "Slot command %s on %s failed", operation, config.config_id, exc_info=True
            )
            return ValidationResult.error(
                "SlotAssignmentExecution",
                f"Failed to execute slot command: {exc}",
                error_type=type(exc).__name__,
            )

        if not result.valid:
            logger.debug("Slot command %s rejected: %s", operation, result.message)
            return result

        logger.info(
            "Slot command %s on %s by %s: %s",
            operation,
            config.config_id,
            actor_id,
            result.message,
        )
        slot_ids = [
            str(s)
            for s in (command.slot_id, command.swap_with_slot_id, command.target_slot_id)
            if s is not None
        ]
        warnings = self._notify_plugins(
            "post_slot_command",
            config_id=config.config_id,
            operation=str(operation),
            actor_id=actor_id,
            slot_ids=slot_ids,
        )
        if warnings:
            result = result.model_copy(update={"detail": {**result.detail, "warnings": warnings}})
        return result

    def _assign(
        self, config: SkeletonSlotConfiguration, command: SlotCommand, actor_id: str
    ) -> ValidationResult:
        if not command.item_id:
            return ValidationResult.error(
                "SlotAssignmentAssign", "Item ID is required for assign operation"
            )

        definition = config.slot(command.slot_id)
        info = self._items.resolve(command.item_id) if self._items is not None else None
        category = (
            command.category
            or (info.category if info is not None else None)
            or (definition.category if definition else None)
        )
        if category is None:
            category = self._catalog.get_slot_definition(command.slot_id).category
        tags = command.tags or (info.tags if info is not None else frozenset())

        check = self._check(config, command.slot_id, command.item_id, category, tags or None)
        if not check.valid:
            return ValidationResult.error(
                "SlotAssignmentValidation",
                f"Assignment validation failed: {', '.join(check.errors)}",
                validation=check,
            )

        previous = config.assignments.get(command.slot_id)
        assignment = SlotAssignment(
            slot_id=command.slot_id,
            item_id=command.item_id,
            item_name=info.name if info is not None else self._placeholder(command.item_id),
            category=category,
            assigned_at=utc_now(),
            metadata=dict(command.metadata),
        )
        vacated = [
            held
            for held in config.assignments.values()
            if held.item_id == command.item_id and held.slot_id != command.slot_id
        ]
        for held in vacated:
            del config.assignments[held.slot_id]
            self._record(config, SlotOperation.ASSIGN, held, None, actor_id)
        config.assignments[command.slot_id] = assignment
        config.last_modified = utc_now()
        self._record(config, SlotOperation.ASSIGN, previous, assignment, actor_id)

        return ValidationResult.ok(
            "SlotAssignmentAssign",
            f"Successfully assigned item {command.item_id} to slot {command.slot_id}",
            assignment=assignment,
            vacated_slots=[held.slot_id for held in vacated],
            validation=check,
        )

    def _unassign(
        self, config: SkeletonSlotConfiguration, command: SlotCommand, actor_id: str
    ) -> ValidationResult:
        existing = config.assignments.get(command.slot_id)
        if existing is None:
            return ValidationResult.warning(
                "SlotAssignmentUnassign",
                f"Slot {command.slot_id} is not currently assigned",
                valid=False,
            )
        definition = config.slot(command.slot_id)
        if definition is not None and definition.required:
            return ValidationResult.error(
                "SlotAssignmentUnassign", f"Cannot unassign required slot {command.slot_id}"
            )

        del config.assignments[command.slot_id]
        config.last_modified = utc_now()
        self._record(config, SlotOperation.UNASSIGN, existing, None, actor_id)

        return ValidationResult.ok(
            "SlotAssignmentUnassign",
            f"Successfully unassigned item from slot {command.slot_id}",
            removed_assignment=existing,
        )

    def _swap(
        self, config: SkeletonSlotConfiguration, command: SlotCommand, actor_id: str
    ) -> ValidationResult:
        other = command.swap_with_slot_id
        if other is None:
            return ValidationResult.error(
                "SlotAssignmentSwap", "Swap target slot ID is required for swap operation"
            )
        if other == command.slot_id:
            return ValidationResult.error("SlotAssignmentSwap", "Cannot swap a slot with itself")

        first = config.assignments.get(command.slot_id)
        second = config.assignments.get(other)
        if first is None or second is None:
            return ValidationResult.error(
                "SlotAssignmentSwap", "Both slots must be assigned to perform swap operation"
            )

        # Phase 1: validate both cross placements.
        into_first = self._check(
            config, command.slot_id, second.item_id, second.category, current_slot=other
        )
        into_second = self._check(
            config, other, first.item_id, first.category, current_slot=command.slot_id
        )
        if not into_first.valid or not into_second.valid:
            return ValidationResult.error(
                "SlotAssignmentSwap",
                "Swap would result in incompatible item assignments",
                validation_first=into_first,
                validation_second=into_second,
            )

        # Phase 2: commit both slots together.
        now = utc_now()
        swapped_first = second.model_copy(update={"slot_id": command.slot_id, "assigned_at": now})
        swapped_second = first.model_copy(update={"slot_id": other, "assigned_at": now})
        config.assignments[command.slot_id] = swapped_first
        config.assignments[other] = swapped_second
        config.last_modified = now
        self._record(config, SlotOperation.SWAP, first, swapped_first, actor_id)
        self._record(config, SlotOperation.SWAP, second, swapped_second, actor_id)

        return ValidationResult.ok(
            "SlotAssignmentSwap",
            f"Successfully swapped items between slots {command.slot_id} and {other}",
            assignments=[swapped_first, swapped_second],
        )

    def _move(
        self, config: SkeletonSlotConfiguration, command: SlotCommand, actor_id: str
    ) -> ValidationResult:
        target = command.target_slot_id
        if target is None:
            return ValidationResult.error(
                "SlotAssignmentMove", "Target slot ID is required for move operation"
            )
        if target == command.slot_id:
            return ValidationResult.error(
                "SlotAssignmentMove", "Source and target slots must differ"
            )

        source = config.assignments.get(command.slot_id)
        if source is None:
            return ValidationResult.error(
                "SlotAssignmentMove", f"No item assigned to source slot {command.slot_id}"
            )
        definition = config.slot(command.slot_id)
        if definition is not None and definition.required:
            return ValidationResult.error(
                "SlotAssignmentMove", f"Cannot move item from required slot {command.slot_id}"
            )

        check = self._check(
            config, target, source.item_id, source.category, current_slot=command.slot_id
        )
        if not check.valid:
            return ValidationResult.error(
                "SlotAssignmentMove",
                f"Cannot move item to target slot: {', '.join(check.errors)}",
                validation=check,
            )

        replaced = config.assignments.get(target)
        now = utc_now()
        moved = source.model_copy(
            update={
                "slot_id": target,
                "assigned_at": now,
                "metadata": {**source.metadata, **command.metadata},
            }
        )
        del config.assignments[command.slot_id]
        config.assignments[target] = moved
        config.last_modified = now
        self._record(config, SlotOperation.MOVE, source, None, actor_id)
        self._record(config, SlotOperation.MOVE, replaced, moved, actor_id)

        if replaced is not None:
            logger.info(
                "Move onto %s replaced item %s in %s", target, replaced.item_id, config.config_id
            )
        return ValidationResult.ok(
            "SlotAssignmentMove",
            f"Successfully moved item from slot {command.slot_id} to {target}",
            assignment=moved,
            replaced_assignment=replaced,
            validation=check,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_assignment_history(self, config_id: str) -> tuple[AssignmentHistoryEntry, ...]:
        """Up to ``history_capacity`` entries, most recent last."""
        return self._history.entries(config_id)

    def discard_configuration(self, config_id: str) -> None:
        """Forget the history of a disassembled configuration."""
        self._history.discard(config_id)
        logger.debug("Discarded history for configuration %s", config_id)

    def get_visual_representation(self, config: SkeletonSlotConfiguration) -> VisualRepresentation:
        """Render-ready view of *config* in catalog order. Read-only."""
        slots: list[VisualSlot] = []
        for definition in config.available_slots:
            assignment = config.assignments.get(definition.slot_id)
            item = None
            if assignment is not None:
                item = VisualItem(
                    item_id=assignment.item_id,
                    item_name=assignment.item_name,
                    category=assignment.category,
                    visual_metadata=dict(assignment.metadata),
                )
            slots.append(
                VisualSlot(
                    slot_id=definition.slot_id,
                    category=definition.category,
                    position=definition.visual_position,
                    occupied=assignment is not None,
                    item=item,
                )
            )
        return VisualRepresentation(archetype=config.archetype, slots=slots)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check(
        self,
        config: SkeletonSlotConfiguration,
        slot_id: SlotId | str,
        item_id: str,
        category: PartCategory,
        tags: Iterable[ItemTag] | None = None,
        *,
        current_slot: SlotId | str | None = None,
    ) -> AssignmentCheck:
        """Shared placement check.

        *current_slot* names the slot the item occupies today (revalidation,
        swap, move) so that its own placement is not reported as a conflict.
        """
        errors: list[str] = []
        warnings: list[str] = []
        suggestions: list[str] = []

        definition = config.slot(slot_id)
        if definition is None:
            errors.append(f"Slot {slot_id} is not available for {config.archetype} skeleton")
            return AssignmentCheck(valid=False, slot_id=slot_id, item_id=item_id, errors=errors)

        existing = config.assignments.get(definition.slot_id)
        if existing is not None and definition.slot_id != current_slot:
            warnings.append(
                f"Slot {slot_id} is already occupied by item {existing.item_id}. "
                "This will replace the existing assignment."
            )
            suggestions.append("Consider using swap operation to exchange items safely.")

        if category not in definition.accepts:
            accepts = ", ".join(str(c) for c in definition.accepts)
            errors.append(
                f"Item category {category} is not compatible with slot {slot_id} "
                f"(accepts: {accepts})"
            )

        own_slots = (definition.slot_id, current_slot)
        for holder in config.assignments.values():
            if holder.item_id == item_id and holder.slot_id not in own_slots:
                warnings.append(
                    f"Item {item_id} is already assigned to slot {holder.slot_id}. "
                    "This will move the item."
                )
                break

        if tags:
            fits, reason = self._compatibility.check_item_fit(config.archetype, category, tags)
            if not fits:
                errors.append(reason)

        return AssignmentCheck(
            valid=not errors,
            slot_id=definition.slot_id,
            item_id=item_id,
            errors=errors,
            warnings=warnings,
            suggestions=suggestions,
        )

    def _record(
        self,
        config: SkeletonSlotConfiguration,
        operation: SlotOperation,
        previous: SlotAssignment | None,
        new: SlotAssignment | None,
        actor_id: str,
    ) -> None:
        self._history.append(
            config.config_id,
            AssignmentHistoryEntry(
                entry_id=new_id(),
                operation=operation,
                previous_state=previous,
                new_state=new,
                actor_id=actor_id,
                timestamp=utc_now(),
            ),
        )

    def _placeholder(self, item_id: str) -> str:
        return self._placeholder_name.format(item_id=item_id)

    def stats(self) -> dict[str, Any]:
        return {
            "tracked_configurations": len(self._history),
            "history_capacity": self._history.capacity,
        }
