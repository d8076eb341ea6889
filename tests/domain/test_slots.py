"""Tests for the static slot tables and slot value models."""

from __future__ import annotations

import pytest

from botforge.domain.slots import (
    ARCHETYPE_CONSTRAINTS,
    ARCHETYPE_LAYOUTS,
    SLOT_REGISTRY,
    CategoryConstraint,
    SlotDefinition,
)
from botforge.domain.types import ALL_CATEGORIES, Archetype, PartCategory, SlotId


class TestSlotRegistry:
    def test_every_slot_id_registered(self) -> None:
        assert set(SLOT_REGISTRY) == set(SlotId)

    def test_required_slots(self) -> None:
        required = {s.slot_id for s in SLOT_REGISTRY.values() if s.required}
        assert required == {
            SlotId.HEAD_1,
            SlotId.TORSO_1,
            SlotId.LEG_LEFT,
            SlotId.LEG_RIGHT,
            SlotId.SOUL_CHIP,
        }

    def test_accepts_defaults_to_primary_category(self) -> None:
        assert SLOT_REGISTRY[SlotId.ARM_LEFT].accepts == (PartCategory.ARM,)

    def test_explicit_compatible_categories(self) -> None:
        slot = SlotDefinition(
            slot_id=SlotId.ACCESSORY_1,
            category=PartCategory.ACCESSORY,
            position="primary",
            index=1,
            compatible_categories=(PartCategory.ACCESSORY, PartCategory.EXPANSION_CHIP),
        )
        assert PartCategory.EXPANSION_CHIP in slot.accepts

    def test_visual_position_default(self) -> None:
        slot = SlotDefinition(
            slot_id=SlotId.HEAD_2, category=PartCategory.HEAD, position="secondary", index=2
        )
        assert (slot.visual_position.x, slot.visual_position.y, slot.visual_position.z) == (
            0.0,
            0.0,
            0.0,
        )


class TestLayouts:
    @pytest.mark.parametrize(
        ("archetype", "count"),
        [
            (Archetype.LIGHT, 8),
            (Archetype.BALANCED, 10),
            (Archetype.HEAVY, 13),
            (Archetype.FLYING, 9),
            (Archetype.MODULAR, 15),
        ],
    )
    def test_slot_counts(self, archetype: Archetype, count: int) -> None:
        assert len(ARCHETYPE_LAYOUTS[archetype]) == count

    def test_every_layout_has_required_core(self) -> None:
        for layout in ARCHETYPE_LAYOUTS.values():
            assert SlotId.HEAD_1 in layout
            assert SlotId.TORSO_1 in layout
            assert SlotId.SOUL_CHIP in layout

    def test_no_duplicate_slots(self) -> None:
        for layout in ARCHETYPE_LAYOUTS.values():
            assert len(set(layout)) == len(layout)


class TestConstraints:
    def test_tables_cover_every_category(self) -> None:
        for table in ARCHETYPE_CONSTRAINTS.values():
            assert set(table) == set(ALL_CATEGORIES)

    def test_soul_chip_exactly_one(self) -> None:
        for table in ARCHETYPE_CONSTRAINTS.values():
            soul = table[PartCategory.SOUL_CHIP]
            assert (soul.minimum, soul.maximum) == (1, 1)

    def test_light_legs(self) -> None:
        legs = ARCHETYPE_CONSTRAINTS[Archetype.LIGHT][PartCategory.LEG]
        assert (legs.minimum, legs.maximum, legs.default) == (1, 2, 2)

    def test_allows(self) -> None:
        constraint = CategoryConstraint(minimum=1, maximum=2, default=2)
        assert not constraint.allows(0)
        assert constraint.allows(2)
        assert not constraint.allows(3)

    def test_unbounded(self) -> None:
        constraint = CategoryConstraint(minimum=0, maximum=None, default=2)
        assert not constraint.bounded
        assert constraint.allows(50)
