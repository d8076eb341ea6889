"""BotAssemblyService: can this item set legally assemble onto this archetype?

Resolves a slot budget, tallies equipped items per category, runs every
rule registered for the ``bot-assembly`` entity type, and, when the
assembly is rejected, derives remediation text from the usage/budget diff
plus archetype-specific hard rules.
"""

from __future__ import annotations

import logging
from typing import Any

from botforge.domain.assembly import AssemblyConfig, AssemblyReport, SlotRuleInput
from botforge.domain.budget import PartUsage, SlotBudget
from botforge.domain.errors import DuplicateRuleError
from botforge.domain.types import Archetype, PartCategory
from botforge.domain.validation import (
    RuleExecutionOptions,
    ValidationContext,
    ValidationRule,
)
from botforge.plugins.manager import PluginManager
from botforge.rules.budget import SkeletonSlotRule
from botforge.rules.engine import RuleEngine
from botforge.services.base import BaseService
from botforge.services.catalog import SlotCatalog

logger = logging.getLogger(__name__)

ASSEMBLY_ENTITY_TYPE = "bot-assembly"

# (item label, slot label) used in removal recommendations.
_LABELS: dict[PartCategory, tuple[str, str]] = {
    PartCategory.HEAD: ("head part(s)", "head slot(s)"),
    PartCategory.TORSO: ("torso part(s)", "torso slot(s)"),
    PartCategory.ARM: ("arm part(s)", "arm slot(s)"),
    PartCategory.LEG: ("leg part(s)", "leg slot(s)"),
    PartCategory.ACCESSORY: ("accessory part(s)", "accessory slot(s)"),
    PartCategory.EXPANSION_CHIP: ("expansion chip(s)", "expansion slot(s)"),
    PartCategory.SOUL_CHIP: ("soul chip(s)", "soul chip slot(s)"),
}

_MISSING: dict[PartCategory, str] = {
    PartCategory.HEAD: "Add at least 1 head part - required for all skeletons",
    PartCategory.TORSO: "Add 1 torso part - required for all skeletons",
    PartCategory.SOUL_CHIP: "Add 1 soul chip - required for all bots",
}


class BotAssemblyService(BaseService):
    """Whole-bot budget validation on top of the rule engine.

    The skeleton slot rule is always registered first; rules contributed by
    plugins through ``register_assembly_rules`` follow in plugin order.
    """

    def __init__(
        self,
        catalog: SlotCatalog,
        plugins: PluginManager | None = None,
        *,
        rule_engine: RuleEngine | None = None,
        options: RuleExecutionOptions | None = None,
    ) -> None:
        super().__init__(catalog, plugins)
        self._engine = rule_engine or RuleEngine()
        self._options = options or RuleExecutionOptions()
        self._engine.register_rule(ASSEMBLY_ENTITY_TYPE, SkeletonSlotRule(catalog))
        if plugins is not None:
            for rule in plugins.collect_assembly_rules():
                try:
                    self._engine.register_rule(ASSEMBLY_ENTITY_TYPE, rule)
                except DuplicateRuleError:
                    logger.warning("Skipping duplicate plugin rule %s", rule.name)

    @property
    def rule_engine(self) -> RuleEngine:
        return self._engine

    def add_custom_rule(self, rule: ValidationRule[Any]) -> None:
        """Register an extra assembly rule.

        Raises:
            DuplicateRuleError: The rule name is already registered.
        """
        self._engine.register_rule(ASSEMBLY_ENTITY_TYPE, rule)

    def validate_assembly(
        self,
        assembly: AssemblyConfig,
        context: ValidationContext | None = None,
        options: RuleExecutionOptions | None = None,
    ) -> AssemblyReport:
        budget = assembly.budget or self._catalog.get_default_budget(assembly.archetype)
        usage = PartUsage.tally(assembly.equipped_categories())
        entity = SlotRuleInput(
            archetype=assembly.archetype, budget=budget, usage=usage, assembly=assembly
        )

        results = self._engine.validate_entity(
            ASSEMBLY_ENTITY_TYPE, entity, context, options or self._options
        )
        recommendations: list[str] = []
        if not results.valid:
            recommendations = self._recommend(assembly.archetype, budget, usage)

        logger.debug(
            "Assembly on %s: valid=%s errors=%d warnings=%d",
            assembly.archetype,
            results.valid,
            len(results.errors),
            len(results.warnings),
        )
        return AssemblyReport(
            **dict(results),
            assembly=assembly,
            budget=budget,
            usage=usage,
            can_assemble=results.valid,
            recommendations=recommendations,
        )

    def is_valid_assembly(self, assembly: AssemblyConfig) -> bool:
        return self.validate_assembly(assembly).can_assemble

    def get_minimum_required_parts(self, archetype: Archetype) -> dict[PartCategory, int]:
        """Per-category minimums from the archetype's constraint table."""
        return {c: k.minimum for c, k in self._catalog.get_category_constraints(archetype).items()}

    def get_maximum_allowed_parts(
        self, archetype: Archetype, budget: SlotBudget | None = None
    ) -> SlotBudget:
        """The slot budget an assembly on *archetype* is checked against."""
        return budget or self._catalog.get_default_budget(archetype)

    @staticmethod
    def _recommend(archetype: Archetype, budget: SlotBudget, usage: PartUsage) -> list[str]:
        recommendations: list[str] = []
        for category, used in usage.items():
            available = budget.count(category)
            item_label, slot_label = _LABELS[category]
            if used > available:
                recommendations.append(
                    f"Remove {used - available} {item_label} - skeleton only supports "
                    f"{available} {slot_label}"
                )
            elif used == 0 and category in _MISSING:
                recommendations.append(_MISSING[category])

        if archetype == Archetype.HEAVY:
            if usage.leg < 2:
                recommendations.append("Heavy skeletons require at least 2 leg parts")
            if usage.arm < 2:
                recommendations.append("Heavy skeletons require at least 2 arm parts")
        if archetype == Archetype.LIGHT and usage.leg > 2:
            recommendations.append("Light skeletons support maximum 2 leg parts")
        return recommendations
