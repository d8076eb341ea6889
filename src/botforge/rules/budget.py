"""Skeleton slot budget rule.

Checks, per category, that the equipped count fits both the resolved slot
budget and the archetype's min/max table, and that the budget itself is
not underprovisioned for the archetype.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from botforge.domain.assembly import SlotRuleInput
from botforge.domain.types import ALL_CATEGORIES
from botforge.domain.validation import ValidationResult, ValidationRule

if TYPE_CHECKING:
    from botforge.services.catalog import SlotCatalog

SKELETON_SLOT_RULE = "SkeletonSlotRule"


class SkeletonSlotRule(ValidationRule[SlotRuleInput]):
    """Per-category budget check; yields one aggregated result."""

    def __init__(self, catalog: SlotCatalog) -> None:
        self._catalog = catalog

    @property
    def name(self) -> str:
        return SKELETON_SLOT_RULE

    @property
    def description(self) -> str:
        return "Validates that parts fit within skeleton slot constraints"

    def validate(self, entity: SlotRuleInput) -> ValidationResult:
        table = self._catalog.get_category_constraints(entity.archetype)
        errors: list[str] = []
        warnings: list[str] = []
        categories: dict[str, dict[str, Any]] = {}

        for category in ALL_CATEGORIES:
            constraint = table[category]
            used = entity.usage.count(category)
            available = entity.budget.count(category)

            failures: list[str] = []
            if used > available:
                failures.append(
                    f"{category}: trying to use {used} parts but only {available} slots available"
                )
            if used < constraint.minimum:
                failures.append(
                    f"{category}: using {used} parts but minimum {constraint.minimum} required"
                )
            if constraint.maximum is not None and used > constraint.maximum:
                failures.append(
                    f"{category}: using {used} parts but maximum {constraint.maximum} allowed"
                )
            if available < constraint.minimum:
                failures.append(
                    f"{category}: skeleton only has {available} slots but minimum "
                    f"{constraint.minimum} required for this skeleton type"
                )

            below_default = not failures and used < constraint.default
            if below_default:
                warnings.append(
                    f"{category}: using {used} parts, below recommended default "
                    f"{constraint.default}"
                )
            errors.extend(failures)

            categories[str(category)] = {
                "used": used,
                "available": available,
                "minimum": constraint.minimum,
                "maximum": constraint.maximum,
                "default": constraint.default,
                "valid": not failures,
                "messages": failures,
            }

        detail: dict[str, Any] = {
            "archetype": str(entity.archetype),
            "categories": categories,
            "errors": errors,
            "warnings": warnings,
        }
        if errors:
            return ValidationResult.error(
                self.name, f"Slot constraint violations: {', '.join(errors)}", **detail
            )
        if warnings:
            return ValidationResult.warning(
                self.name, f"Below recommended defaults: {', '.join(warnings)}", **detail
            )
        return ValidationResult.ok(
            self.name, "All parts fit within skeleton slot constraints", **detail
        )
