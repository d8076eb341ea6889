"""Tests for SlotBudget and PartUsage."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from botforge.domain.budget import PartUsage, SlotBudget
from botforge.domain.types import ALL_CATEGORIES, PartCategory


class TestPartUsage:
    def test_tally_counts_each_category(self) -> None:
        usage = PartUsage.tally(
            [PartCategory.ARM, PartCategory.ARM, PartCategory.SOUL_CHIP, PartCategory.HEAD]
        )
        assert usage.arm == 2
        assert usage.soul_chip == 1
        assert usage.head == 1
        assert usage.leg == 0

    def test_tally_empty(self) -> None:
        usage = PartUsage.tally([])
        assert all(n == 0 for _, n in usage.items())

    def test_items_follow_category_order(self) -> None:
        usage = PartUsage.tally([PartCategory.LEG])
        assert [c for c, _ in usage.items()] == list(ALL_CATEGORIES)

    def test_as_dict_uses_category_values(self) -> None:
        usage = PartUsage.tally([PartCategory.EXPANSION_CHIP])
        assert usage.as_dict()["expansion-chip"] == 1


class TestSlotBudget:
    def test_from_counts(self) -> None:
        budget = SlotBudget.from_counts({PartCategory.ARM: 4, PartCategory.SOUL_CHIP: 1})
        assert budget.count(PartCategory.ARM) == 4
        assert budget.count(PartCategory.SOUL_CHIP) == 1
        assert budget.count(PartCategory.HEAD) == 0

    def test_from_counts_keeps_subclass(self) -> None:
        assert type(SlotBudget.from_counts({})) is SlotBudget
        assert type(PartUsage.from_counts({PartCategory.LEG: 2})) is PartUsage

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SlotBudget(arm=-1)

    def test_frozen(self) -> None:
        budget = SlotBudget()
        with pytest.raises(ValidationError):
            budget.arm = 3  # type: ignore[misc]
