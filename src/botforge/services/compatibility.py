"""CompatibilityService: derived analyses over the slot catalog.

Answers "which slots take this category" and "which archetype best fits
this set of categories". Results of category analyses are memoized by
input signature until ``clear_cache()``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from botforge.domain.compatibility import (
    ArchetypeCompatibility,
    ArchetypeRanking,
    BulkAssignmentReport,
    BulkAssignmentSummary,
    CategoryCompatibility,
    RejectedPair,
    SlotCategoryPair,
)
from botforge.domain.errors import UnknownSlotError
from botforge.domain.types import (
    Archetype,
    CompatibilityTier,
    ItemTag,
    PartCategory,
    SlotId,
)
from botforge.services._helpers import percentage
from botforge.services.base import BaseService

logger = logging.getLogger(__name__)


class CompatibilityService(BaseService):
    """Read-only compatibility analyses. Never mutates the catalog."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._cache: dict[tuple[PartCategory, tuple[str, ...] | None], CategoryCompatibility] = {}

    # ------------------------------------------------------------------
    # Slot-level
    # ------------------------------------------------------------------

    def get_compatible_slots(self, category: PartCategory) -> list[SlotId]:
        """Every registered slot accepting *category*, in registry order."""
        return [
            slot_id
            for slot_id in self._catalog.all_slot_ids()
            if self._catalog.is_category_compatible_with_slot(slot_id, category)
        ]

    def analyze_category_compatibility(
        self,
        category: PartCategory,
        slot_subset: Sequence[SlotId | str] | None = None,
    ) -> CategoryCompatibility:
        """Partition *slot_subset* (default: every slot) by whether it accepts *category*."""
        subset_key = tuple(str(s) for s in slot_subset) if slot_subset is not None else None
        key = (PartCategory(category), subset_key)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for category compatibility: %s", key)
            return cached

        slots = list(slot_subset) if slot_subset is not None else self._catalog.all_slot_ids()
        compatible: list[SlotId] = []
        incompatible: list[SlotId | str] = []
        reasons: list[str] = []

        for slot_id in slots:
            if self._catalog.is_category_compatible_with_slot(slot_id, category):
                compatible.append(SlotId(slot_id))
                continue
            try:
                accepts = self._catalog.get_slot_definition(slot_id).accepts
            except UnknownSlotError:
                incompatible.append(str(slot_id))
                reasons.append(f"{slot_id}: compatibility rules not found")
                continue
            incompatible.append(SlotId(slot_id))
            reasons.append(f"{slot_id} only accepts: {', '.join(str(c) for c in accepts)}")

        total = len(slots)
        recommendations: list[str] = []
        if not compatible:
            tier = CompatibilityTier.NONE
            recommendations.append(f"No compatible slots found for {category} parts")
            recommendations.append("Consider using a different part category")
        elif len(compatible) < total / 2:
            tier = CompatibilityTier.LIMITED
            recommendations.append(
                f"Limited compatibility: only {len(compatible)}/{total} slots "
                f"accept {category} parts"
            )
            recommendations.append("Consider specialized skeleton types for better compatibility")
        else:
            tier = CompatibilityTier.GOOD
            recommendations.append(
                f"Good compatibility: {len(compatible)}/{total} slots accept {category} parts"
            )

        result = CategoryCompatibility(
            category=category,
            compatible=bool(compatible),
            tier=tier,
            compatible_slots=compatible,
            incompatible_slots=incompatible,
            reasons=reasons,
            recommendations=recommendations,
        )
        self._cache[key] = result
        logger.debug(
            "Category compatibility for %s: %d/%d (%s)", category, len(compatible), total, tier
        )
        return result

    # ------------------------------------------------------------------
    # Archetype-level
    # ------------------------------------------------------------------

    def analyze_archetype_compatibility(
        self, archetype: Archetype, category: PartCategory
    ) -> ArchetypeCompatibility:
        layout = self._catalog.get_slot_layout(archetype)
        details = [
            d for d in layout if self._catalog.is_category_compatible_with_slot(d.slot_id, category)
        ]
        return ArchetypeCompatibility(
            archetype=archetype,
            category=category,
            total_slots=len(layout),
            compatible_slots=len(details),
            percentage=percentage(len(details), len(layout)),
            compatible_slot_details=details,
        )

    def rank_archetypes_for_categories(
        self, categories: Iterable[PartCategory]
    ) -> list[ArchetypeRanking]:
        """Archetypes sorted by score, best first.

        ``score = average percentage + 2 * total compatible slots``. Equal
        scores keep archetype declaration order.
        """
        wanted = list(categories)
        rankings: list[ArchetypeRanking] = []
        for archetype in self._catalog.supported_archetypes():
            per_category = {
                PartCategory(c): self.analyze_archetype_compatibility(archetype, c) for c in wanted
            }
            overall = (
                sum(a.percentage for a in per_category.values()) / len(wanted) if wanted else 0.0
            )
            total_compatible = sum(a.compatible_slots for a in per_category.values())
            rankings.append(
                ArchetypeRanking(
                    archetype=archetype,
                    overall_compatibility=overall,
                    total_compatible_slots=total_compatible,
                    score=overall + 2 * total_compatible,
                    per_category=per_category,
                )
            )

        rankings.sort(key=lambda r: r.score, reverse=True)
        if rankings:
            logger.debug("Best archetype for %s: %s", wanted, rankings[0].archetype)
        return rankings

    def check_item_fit(
        self,
        archetype: Archetype,
        category: PartCategory,
        tags: Iterable[ItemTag] = (),
    ) -> tuple[bool, str]:
        """Archetype-level acceptance of an item, from its structured tags.

        Returns ``(fits, reason)``; *reason* is empty when the item fits.
        """
        tag_set = frozenset(ItemTag(t) for t in tags)
        if archetype == Archetype.LIGHT and ItemTag.HEAVY in tag_set:
            return False, "Light skeletons cannot use heavy items"
        if archetype == Archetype.FLYING:
            if category == PartCategory.LEG and ItemTag.LANDING_GEAR not in tag_set:
                return False, "Flying skeletons need leg items rated as landing gear"
            if ItemTag.HEAVY in tag_set and ItemTag.FLIGHT_RATED not in tag_set:
                return False, "Flying skeletons cannot use heavy items unless flight rated"
        return True, ""

    # ------------------------------------------------------------------
    # Bulk
    # ------------------------------------------------------------------

    def validate_bulk_assignment(
        self, assignments: Iterable[SlotCategoryPair | dict[str, Any]]
    ) -> BulkAssignmentReport:
        valid: list[SlotCategoryPair] = []
        invalid: list[RejectedPair] = []

        for raw in assignments:
            pair = SlotCategoryPair.model_validate(raw)
            if self._catalog.is_category_compatible_with_slot(pair.slot_id, pair.category):
                valid.append(pair)
                continue
            try:
                accepts = self._catalog.get_slot_definition(pair.slot_id).accepts
                reason = (
                    f"Slot accepts: {', '.join(str(c) for c in accepts)}, "
                    f"but got: {pair.category}"
                )
            except UnknownSlotError:
                reason = "Slot compatibility rules not found"
            invalid.append(
                RejectedPair(slot_id=pair.slot_id, category=pair.category, reason=reason)
            )

        total = len(valid) + len(invalid)
        return BulkAssignmentReport(
            valid=not invalid,
            valid_assignments=valid,
            invalid_assignments=invalid,
            summary=BulkAssignmentSummary(
                total=total,
                valid=len(valid),
                invalid=len(invalid),
                validity_percentage=percentage(len(valid), total),
            ),
        )

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Compatibility cache cleared")

    def stats(self) -> dict[str, Any]:
        return {"cache_size": len(self._cache), "cached_keys": [str(k) for k in self._cache]}
