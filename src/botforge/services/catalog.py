"""SlotCatalog: static per-archetype slot layouts and category budgets.

Pure lookup over three immutable tables (see :mod:`botforge.domain.slots`).
Every derived view is precomputed at construction and memoized; ``reset()``
is the only mutation path and exists for configuration-load time reloads.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from botforge.domain.budget import SlotBudget
from botforge.domain.errors import UnknownArchetypeError, UnknownSlotError
from botforge.domain.slots import (
    ARCHETYPE_CONSTRAINTS,
    ARCHETYPE_LAYOUTS,
    SLOT_REGISTRY,
    CategoryConstraint,
    SkeletonSummary,
    SlotConfigurationCheck,
    SlotDefinition,
)
from botforge.domain.types import (
    ALL_CATEGORIES,
    STANDARD_CATEGORIES,
    Archetype,
    PartCategory,
    SlotId,
)

logger = logging.getLogger(__name__)


class SlotCatalog:
    """Memoized lookups over the slot registry, layouts, and constraint tables.

    Args:
        slot_registry: Slot definitions keyed by id. Defaults to ``SLOT_REGISTRY``.
        layouts: Ordered slot ids per archetype. Defaults to ``ARCHETYPE_LAYOUTS``.
        constraints: Category budgets per archetype. Defaults to
            ``ARCHETYPE_CONSTRAINTS``. Each table must cover all seven categories.
    """

    def __init__(
        self,
        slot_registry: Mapping[SlotId, SlotDefinition] | None = None,
        layouts: Mapping[Archetype, tuple[SlotId, ...]] | None = None,
        constraints: Mapping[Archetype, Mapping[PartCategory, CategoryConstraint]] | None = None,
    ) -> None:
        self._registry: dict[SlotId, SlotDefinition] = dict(
            SLOT_REGISTRY if slot_registry is None else slot_registry
        )
        self._layouts: dict[Archetype, tuple[SlotId, ...]] = dict(
            ARCHETYPE_LAYOUTS if layouts is None else layouts
        )
        source = ARCHETYPE_CONSTRAINTS if constraints is None else constraints
        self._constraints: dict[Archetype, dict[PartCategory, CategoryConstraint]] = {
            arch: dict(table) for arch, table in source.items()
        }

        self._layout_cache: dict[Archetype, tuple[SlotDefinition, ...]] = {}
        self._summary_cache: dict[Archetype, SkeletonSummary] = {}
        self._compat_cache: dict[SlotId, frozenset[PartCategory]] = {}
        self.preload()

    # ------------------------------------------------------------------
    # Core lookups
    # ------------------------------------------------------------------

    def get_slot_layout(self, archetype: Archetype | str) -> list[SlotDefinition]:
        """Ordered slot definitions exposed by *archetype*."""
        return list(self._layout(archetype))

    def get_slot_definition(self, slot_id: SlotId | str) -> SlotDefinition:
        try:
            return self._registry[slot_id]  # type: ignore[index]
        except KeyError:
            raise UnknownSlotError(str(slot_id)) from None

    def get_category_constraints(
        self, archetype: Archetype | str
    ) -> dict[PartCategory, CategoryConstraint]:
        """Min/max/default per category, special categories included."""
        try:
            return dict(self._constraints[archetype])  # type: ignore[index]
        except KeyError:
            raise UnknownArchetypeError(str(archetype)) from None

    def get_default_slot_counts(self, archetype: Archetype | str) -> dict[PartCategory, int]:
        """Recommended counts for the five standard categories."""
        table = self.get_category_constraints(archetype)
        return {category: table[category].default for category in STANDARD_CATEGORIES}

    def get_default_budget(self, archetype: Archetype | str) -> SlotBudget:
        """Recommended counts for all seven categories, as an assembly budget."""
        table = self.get_category_constraints(archetype)
        return SlotBudget.from_counts({c: table[c].default for c in ALL_CATEGORIES})

    def is_category_compatible_with_slot(
        self, slot_id: SlotId | str, category: PartCategory | str
    ) -> bool:
        """Whether *slot_id* accepts *category*. Never raises."""
        accepted = self._compat_cache.get(slot_id)  # type: ignore[call-overload]
        if accepted is None:
            try:
                accepted = self._accepted_categories(self.get_slot_definition(slot_id))
            except UnknownSlotError:
                logger.warning("Compatibility lookup for unknown slot %s", slot_id)
                return False
        return category in accepted

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def get_skeleton_configuration(self, archetype: Archetype | str) -> SkeletonSummary:
        """Memoized summary of one archetype: slots, budgets, grouping."""
        cached = self._summary_cache.get(archetype)  # type: ignore[call-overload]
        if cached is not None:
            logger.debug("Cache hit for skeleton configuration: %s", archetype)
            return cached

        slots = self._layout(archetype)
        grouped: dict[PartCategory, list[SlotDefinition]] = {c: [] for c in STANDARD_CATEGORIES}
        for definition in slots:
            for category in self._accepted_categories(definition):
                if category in grouped:
                    grouped[category].append(definition)

        summary = SkeletonSummary(
            archetype=Archetype(archetype),
            slots=slots,
            constraints=self.get_category_constraints(archetype),
            total_slots=len(slots),
            slots_by_category={c: tuple(defs) for c, defs in grouped.items()},
        )
        self._summary_cache[summary.archetype] = summary
        logger.debug("Built skeleton configuration for %s (%d slots)", archetype, len(slots))
        return summary

    def validate_slot_configuration(
        self,
        archetype: Archetype | str,
        slot_categories: Mapping[SlotId | str, PartCategory | str],
    ) -> SlotConfigurationCheck:
        """Check a planned ``{slot_id: category}`` mapping against one archetype."""
        errors: list[str] = []
        warnings: list[str] = []

        available = {d.slot_id for d in self._layout(archetype)}
        for slot_id, category in slot_categories.items():
            if slot_id not in available:
                errors.append(f"Slot {slot_id} is not available for skeleton type {archetype}")
                continue
            if not self.is_category_compatible_with_slot(slot_id, category):
                errors.append(f"Part category {category} is not compatible with slot {slot_id}")

        planned = list(slot_categories.values())
        for category, constraint in self.get_category_constraints(archetype).items():
            count = sum(1 for c in planned if c == category)
            if count < constraint.minimum:
                errors.append(
                    f"Insufficient {category} parts: {count}/{constraint.minimum} minimum required"
                )
            if constraint.maximum is not None and count > constraint.maximum:
                errors.append(
                    f"Too many {category} parts: {count}/{constraint.maximum} maximum allowed"
                )
            if count < constraint.default:
                warnings.append(
                    f"Below recommended {category} parts: "
                    f"{count}/{constraint.default} recommended"
                )

        logger.debug(
            "Slot configuration check for %s: %d errors, %d warnings",
            archetype,
            len(errors),
            len(warnings),
        )
        return SlotConfigurationCheck(valid=not errors, errors=errors, warnings=warnings)

    # ------------------------------------------------------------------
    # Enumeration and maintenance
    # ------------------------------------------------------------------

    def supported_archetypes(self) -> list[Archetype]:
        return list(self._layouts)

    def all_slot_ids(self) -> list[SlotId]:
        return list(self._registry)

    def all_slots(self) -> list[SlotDefinition]:
        """Every registered slot, in registry order."""
        return list(self._registry.values())

    def stats(self) -> dict[str, Any]:
        return {
            "supported_archetypes": len(self._layouts),
            "total_slot_types": len(self._registry),
            "cached": {
                "layouts": len(self._layout_cache),
                "configurations": len(self._summary_cache),
                "compatibility": len(self._compat_cache),
            },
        }

    def clear_caches(self) -> None:
        self._layout_cache.clear()
        self._summary_cache.clear()
        self._compat_cache.clear()
        logger.info("Slot catalog caches cleared")

    def reset(self) -> None:
        """Clear and rebuild every cache."""
        self.clear_caches()
        self.preload()

    def preload(self) -> None:
        """Precompute compatibility sets and per-archetype layouts.

        Raises:
            UnknownSlotError: A layout references a slot missing from the registry.
            ValueError: A constraint table does not cover every category.
        """
        for definition in self._registry.values():
            self._accepted_categories(definition)
        for archetype in self._layouts:
            self._layout(archetype)
            missing = [c for c in ALL_CATEGORIES if c not in self._constraints.get(archetype, {})]
            if missing:
                msg = f"Constraint table for {archetype} is missing categories: {missing}"
                raise ValueError(msg)
        logger.debug(
            "Slot catalog preloaded: %d slots, %d archetypes",
            len(self._compat_cache),
            len(self._layout_cache),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _layout(self, archetype: Archetype | str) -> tuple[SlotDefinition, ...]:
        cached = self._layout_cache.get(archetype)  # type: ignore[call-overload]
        if cached is not None:
            return cached
        try:
            slot_ids = self._layouts[archetype]  # type: ignore[index]
        except KeyError:
            raise UnknownArchetypeError(str(archetype)) from None
        layout = tuple(self.get_slot_definition(slot_id) for slot_id in slot_ids)
        self._layout_cache[Archetype(archetype)] = layout
        return layout

    def _accepted_categories(self, definition: SlotDefinition) -> frozenset[PartCategory]:
        accepted = self._compat_cache.get(definition.slot_id)
        if accepted is None:
            accepted = frozenset(definition.accepts)
            self._compat_cache[definition.slot_id] = accepted
        return accepted
