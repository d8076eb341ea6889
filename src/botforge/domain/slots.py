"""Static slot definitions, archetype layouts, and category budgets.

Three code-baked tables drive the whole engine:

- ``SLOT_REGISTRY``: every slot identifier and its definition.
- ``ARCHETYPE_LAYOUTS``: the ordered slots each archetype exposes.
- ``ARCHETYPE_CONSTRAINTS``: per-category min/max/default counts.

The tables are immutable after import. The catalog service accepts
replacement tables at construction for configuration-load time overrides.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field

from botforge.domain.types import Archetype, PartCategory, SlotId

# --- Value models ---


class VisualPosition(BaseModel):
    """3D placement hint for renderers."""

    model_config = {"frozen": True}

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class SlotConstraints(BaseModel):
    """Optional per-slot restrictions beyond the category."""

    model_config = {"frozen": True}

    compatible_part_types: tuple[str, ...] = ()
    max_part_size: str | None = None
    visual_position: VisualPosition | None = None


class SlotDefinition(BaseModel):
    """One attachment point. Immutable once defined.

    Attributes:
        slot_id: Stable identifier.
        category: Primary category the slot is built for.
        position: Human label ("left", "primary", "center", ...).
        index: Ordinal among same-category slots.
        required: Whether the slot must be filled for a valid configuration.
        compatible_categories: Categories the slot accepts. Empty means
            only ``category``.
    """

    model_config = {"frozen": True}

    slot_id: SlotId
    category: PartCategory
    position: str
    index: int = Field(ge=1)
    required: bool = False
    constraints: SlotConstraints | None = None
    compatible_categories: tuple[PartCategory, ...] = ()

    @property
    def accepts(self) -> tuple[PartCategory, ...]:
        """Categories this slot accepts."""
        return self.compatible_categories or (self.category,)

    @property
    def visual_position(self) -> VisualPosition:
        if self.constraints is not None and self.constraints.visual_position is not None:
            return self.constraints.visual_position
        return VisualPosition()


class CategoryConstraint(BaseModel):
    """Min/max/default item count for one category on one archetype.

    ``maximum`` of None means unbounded.
    """

    model_config = {"frozen": True}

    minimum: int = Field(ge=0)
    maximum: int | None = None
    default: int = Field(ge=0)

    @property
    def bounded(self) -> bool:
        return self.maximum is not None

    def allows(self, count: int) -> bool:
        """Whether *count* lies within ``[minimum, maximum]``."""
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum


ArchetypeConstraints = Mapping[PartCategory, CategoryConstraint]


# --- Slot registry ---


def _slot(
    slot_id: SlotId,
    category: PartCategory,
    position: str,
    index: int,
    xyz: tuple[float, float, float],
    *,
    required: bool = False,
) -> SlotDefinition:
    x, y, z = xyz
    return SlotDefinition(
        slot_id=slot_id,
        category=category,
        position=position,
        index=index,
        required=required,
        constraints=SlotConstraints(visual_position=VisualPosition(x=x, y=y, z=z)),
    )


_HEAD = PartCategory.HEAD
_TORSO = PartCategory.TORSO
_ARM = PartCategory.ARM
_LEG = PartCategory.LEG
_ACC = PartCategory.ACCESSORY
_EXP = PartCategory.EXPANSION_CHIP
_SOUL = PartCategory.SOUL_CHIP

SLOT_REGISTRY: dict[SlotId, SlotDefinition] = {
    s.slot_id: s
    for s in (
        _slot(SlotId.HEAD_1, _HEAD, "primary", 1, (0, 0, 1.8), required=True),
        _slot(SlotId.HEAD_2, _HEAD, "secondary", 2, (0.3, 0, 1.8)),
        _slot(SlotId.HEAD_3, _HEAD, "tertiary", 3, (-0.3, 0, 1.8)),
        _slot(SlotId.TORSO_1, _TORSO, "center", 1, (0, 0, 1.0), required=True),
        _slot(SlotId.ARM_LEFT, _ARM, "left", 1, (-0.6, 0, 1.2)),
        _slot(SlotId.ARM_RIGHT, _ARM, "right", 1, (0.6, 0, 1.2)),
        _slot(SlotId.ARM_LEFT_2, _ARM, "left", 2, (-0.8, 0, 1.0)),
        _slot(SlotId.ARM_RIGHT_2, _ARM, "right", 2, (0.8, 0, 1.0)),
        _slot(SlotId.ARM_LEFT_3, _ARM, "left", 3, (-1.0, 0, 0.8)),
        _slot(SlotId.ARM_RIGHT_3, _ARM, "right", 3, (1.0, 0, 0.8)),
        _slot(SlotId.LEG_LEFT, _LEG, "left", 1, (-0.2, 0, 0.0), required=True),
        _slot(SlotId.LEG_RIGHT, _LEG, "right", 1, (0.2, 0, 0.0), required=True),
        _slot(SlotId.LEG_LEFT_2, _LEG, "left", 2, (-0.4, 0, 0.0)),
        _slot(SlotId.LEG_RIGHT_2, _LEG, "right", 2, (0.4, 0, 0.0)),
        _slot(SlotId.LEG_CENTER, _LEG, "center", 1, (0, 0, 0.0)),
        _slot(SlotId.ACCESSORY_1, _ACC, "primary", 1, (0, 0.3, 1.0)),
        _slot(SlotId.ACCESSORY_2, _ACC, "secondary", 2, (0, -0.3, 1.0)),
        _slot(SlotId.ACCESSORY_3, _ACC, "tertiary", 3, (0.3, 0, 1.0)),
        _slot(SlotId.ACCESSORY_4, _ACC, "quaternary", 4, (-0.3, 0, 1.0)),
        _slot(SlotId.EXPANSION_1, _EXP, "primary", 1, (0.2, 0.2, 1.0)),
        _slot(SlotId.EXPANSION_2, _EXP, "secondary", 2, (-0.2, 0.2, 1.0)),
        _slot(SlotId.EXPANSION_3, _EXP, "tertiary", 3, (0.2, -0.2, 1.0)),
        _slot(SlotId.EXPANSION_4, _EXP, "quaternary", 4, (-0.2, -0.2, 1.0)),
        _slot(SlotId.SOUL_CHIP, _SOUL, "center", 1, (0, 0, 1.1), required=True),
    )
}


# --- Archetype layouts ---

_CORE = (SlotId.HEAD_1, SlotId.TORSO_1)
_TWO_ARMS = (SlotId.ARM_LEFT, SlotId.ARM_RIGHT)
_FOUR_ARMS = _TWO_ARMS + (SlotId.ARM_LEFT_2, SlotId.ARM_RIGHT_2)
_TWO_LEGS = (SlotId.LEG_LEFT, SlotId.LEG_RIGHT)

ARCHETYPE_LAYOUTS: dict[Archetype, tuple[SlotId, ...]] = {
    Archetype.LIGHT: (
        *_CORE,
        *_TWO_ARMS,
        *_TWO_LEGS,
        SlotId.EXPANSION_1,
        SlotId.SOUL_CHIP,
    ),
    Archetype.BALANCED: (
        *_CORE,
        *_TWO_ARMS,
        *_TWO_LEGS,
        SlotId.ACCESSORY_1,
        SlotId.EXPANSION_1,
        SlotId.EXPANSION_2,
        SlotId.SOUL_CHIP,
    ),
    Archetype.HEAVY: (
        *_CORE,
        *_FOUR_ARMS,
        *_TWO_LEGS,
        SlotId.LEG_LEFT_2,
        SlotId.LEG_RIGHT_2,
        SlotId.ACCESSORY_1,
        SlotId.EXPANSION_1,
        SlotId.SOUL_CHIP,
    ),
    Archetype.FLYING: (
        SlotId.HEAD_1,
        SlotId.HEAD_2,
        SlotId.TORSO_1,
        *_TWO_ARMS,
        *_TWO_LEGS,
        SlotId.EXPANSION_1,
        SlotId.SOUL_CHIP,
    ),
    Archetype.MODULAR: (
        SlotId.HEAD_1,
        SlotId.HEAD_2,
        SlotId.TORSO_1,
        *_FOUR_ARMS,
        *_TWO_LEGS,
        SlotId.LEG_CENTER,
        SlotId.ACCESSORY_1,
        SlotId.ACCESSORY_2,
        SlotId.EXPANSION_1,
        SlotId.EXPANSION_2,
        SlotId.SOUL_CHIP,
    ),
}


# --- Category budgets ---


def _c(minimum: int, maximum: int | None, default: int) -> CategoryConstraint:
    return CategoryConstraint(minimum=minimum, maximum=maximum, default=default)


_ONE = _c(1, 1, 1)

ARCHETYPE_CONSTRAINTS: dict[Archetype, dict[PartCategory, CategoryConstraint]] = {
    Archetype.LIGHT: {
        _HEAD: _ONE,
        _TORSO: _ONE,
        _ARM: _c(0, None, 2),
        _LEG: _c(1, 2, 2),
        _ACC: _c(0, 2, 0),
        _EXP: _c(0, None, 1),
        _SOUL: _ONE,
    },
    Archetype.BALANCED: {
        _HEAD: _ONE,
        _TORSO: _ONE,
        _ARM: _c(2, 2, 2),
        _LEG: _c(2, 2, 2),
        _ACC: _c(0, 1, 0),
        _EXP: _c(0, None, 1),
        _SOUL: _ONE,
    },
    Archetype.HEAVY: {
        _HEAD: _c(1, None, 1),
        _TORSO: _ONE,
        _ARM: _c(2, None, 2),
        _LEG: _c(2, None, 2),
        _ACC: _c(0, None, 1),
        _EXP: _c(0, None, 1),
        _SOUL: _ONE,
    },
    Archetype.FLYING: {
        _HEAD: _c(1, None, 1),
        _TORSO: _ONE,
        _ARM: _c(0, None, 2),
        _LEG: _c(1, None, 2),
        _ACC: _c(0, None, 0),
        _EXP: _c(0, None, 1),
        _SOUL: _ONE,
    },
    Archetype.MODULAR: {
        _HEAD: _c(1, None, 1),
        _TORSO: _ONE,
        _ARM: _c(0, None, 2),
        _LEG: _c(0, None, 2),
        _ACC: _c(0, None, 2),
        _EXP: _c(0, None, 2),
        _SOUL: _ONE,
    },
}


# --- Catalog read models ---


class SkeletonSummary(BaseModel):
    """Everything the catalog knows about one archetype, precomputed."""

    model_config = {"frozen": True}

    archetype: Archetype
    slots: tuple[SlotDefinition, ...]
    constraints: dict[PartCategory, CategoryConstraint]
    total_slots: int
    slots_by_category: dict[PartCategory, tuple[SlotDefinition, ...]]


class SlotConfigurationCheck(BaseModel):
    """Catalog-level check of a ``{slot_id: category}`` plan."""

    model_config = {"frozen": True}

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
