"""Tests for SkeletonSlotRule: per-category budget enforcement."""

from __future__ import annotations

from botforge.domain.assembly import SlotRuleInput
from botforge.domain.budget import PartUsage, SlotBudget
from botforge.domain.types import Archetype, PartCategory
from botforge.domain.validation import Severity
from botforge.rules.budget import SKELETON_SLOT_RULE, SkeletonSlotRule
from botforge.services.catalog import SlotCatalog

_H = PartCategory.HEAD
_T = PartCategory.TORSO
_A = PartCategory.ARM
_L = PartCategory.LEG
_X = PartCategory.EXPANSION_CHIP
_S = PartCategory.SOUL_CHIP


def _input(catalog: SlotCatalog, archetype: Archetype, parts: list[PartCategory]) -> SlotRuleInput:
    return SlotRuleInput(
        archetype=archetype,
        budget=catalog.get_default_budget(archetype),
        usage=PartUsage.tally(parts),
    )


class TestSkeletonSlotRule:
    def test_metadata(self, catalog: SlotCatalog) -> None:
        rule = SkeletonSlotRule(catalog)
        assert rule.name == SKELETON_SLOT_RULE
        assert rule.required
        assert "slot constraints" in rule.description

    def test_full_light_build_passes(self, catalog: SlotCatalog) -> None:
        entity = _input(catalog, Archetype.LIGHT, [_H, _T, _A, _A, _L, _L, _X, _S])
        result = SkeletonSlotRule(catalog).validate(entity)
        assert result.valid
        assert result.severity == Severity.INFO
        assert result.message == "All parts fit within skeleton slot constraints"

    def test_over_budget(self, catalog: SlotCatalog) -> None:
        entity = _input(catalog, Archetype.LIGHT, [_H, _H, _T, _A, _A, _L, _L, _X, _S])
        result = SkeletonSlotRule(catalog).validate(entity)
        assert not result.valid
        assert "head: trying to use 2 parts but only 1 slots available" in result.detail["errors"]
        assert "head: using 2 parts but maximum 1 allowed" in result.detail["errors"]
        assert result.detail["categories"]["head"]["valid"] is False

    def test_below_minimum(self, catalog: SlotCatalog) -> None:
        entity = _input(catalog, Archetype.HEAVY, [_H, _T, _A, _L, _L, _S])
        result = SkeletonSlotRule(catalog).validate(entity)
        assert not result.valid
        assert "arm: using 1 parts but minimum 2 required" in result.message

    def test_underprovisioned_budget(self, catalog: SlotCatalog) -> None:
        entity = SlotRuleInput(
            archetype=Archetype.BALANCED,
            budget=catalog.get_default_budget(Archetype.BALANCED).model_copy(update={"leg": 1}),
            usage=PartUsage.tally([_H, _T, _A, _A, _L, _S]),
        )
        result = SkeletonSlotRule(catalog).validate(entity)
        errors = result.detail["errors"]
        assert (
            "leg: skeleton only has 1 slots but minimum 2 required for this skeleton type"
            in errors
        )

    def test_below_default_is_warning(self, catalog: SlotCatalog) -> None:
        entity = _input(catalog, Archetype.LIGHT, [_H, _T, _L, _S])
        result = SkeletonSlotRule(catalog).validate(entity)
        assert result.valid
        assert result.severity == Severity.WARNING
        assert "arm: using 0 parts, below recommended default 2" in result.detail["warnings"]
        assert "leg: using 1 parts, below recommended default 2" in result.detail["warnings"]

    def test_no_warning_for_failing_category(self, catalog: SlotCatalog) -> None:
        entity = _input(catalog, Archetype.HEAVY, [_H, _T, _A, _L, _L, _S])
        result = SkeletonSlotRule(catalog).validate(entity)
        assert not any(w.startswith("arm:") for w in result.detail["warnings"])

    def test_usage_never_exceeds_budget_when_valid(self, catalog: SlotCatalog) -> None:
        entity = SlotRuleInput(
            archetype=Archetype.MODULAR,
            budget=SlotBudget(
                head=2, torso=1, arm=4, leg=3, accessory=2, expansion_chip=2, soul_chip=1
            ),
            usage=PartUsage.tally([_H, _H, _T, _A, _A, _A, _L, _L, _L, _X, _S]),
        )
        result = SkeletonSlotRule(catalog).validate(entity)
        assert result.valid
        for info in result.detail["categories"].values():
            assert info["used"] <= info["available"]
