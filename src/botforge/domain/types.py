"""Archetypes, item categories, slot identifiers, and command kinds.

Declaration order matters: archetype ranking breaks ties by the order
the members are declared here, and slot lookups across all archetypes
follow the order of :class:`SlotId`.
"""

from __future__ import annotations

from enum import StrEnum


class Archetype(StrEnum):
    """Structural skeleton types."""

    LIGHT = "light"
    BALANCED = "balanced"
    HEAVY = "heavy"
    FLYING = "flying"
    MODULAR = "modular"


class PartCategory(StrEnum):
    """Functional item classes that gate slot compatibility and budgets."""

    HEAD = "head"
    TORSO = "torso"
    ARM = "arm"
    LEG = "leg"
    ACCESSORY = "accessory"
    EXPANSION_CHIP = "expansion-chip"
    SOUL_CHIP = "soul-chip"


STANDARD_CATEGORIES: tuple[PartCategory, ...] = (
    PartCategory.HEAD,
    PartCategory.TORSO,
    PartCategory.ARM,
    PartCategory.LEG,
    PartCategory.ACCESSORY,
)

SPECIAL_CATEGORIES: tuple[PartCategory, ...] = (
    PartCategory.EXPANSION_CHIP,
    PartCategory.SOUL_CHIP,
)

ALL_CATEGORIES: tuple[PartCategory, ...] = STANDARD_CATEGORIES + SPECIAL_CATEGORIES


class SlotId(StrEnum):
    """Every attachment point any archetype may expose."""

    HEAD_1 = "HEAD_1"
    HEAD_2 = "HEAD_2"
    HEAD_3 = "HEAD_3"

    TORSO_1 = "TORSO_1"

    ARM_LEFT = "ARM_LEFT"
    ARM_RIGHT = "ARM_RIGHT"
    ARM_LEFT_2 = "ARM_LEFT_2"
    ARM_RIGHT_2 = "ARM_RIGHT_2"
    ARM_LEFT_3 = "ARM_LEFT_3"
    ARM_RIGHT_3 = "ARM_RIGHT_3"

    LEG_LEFT = "LEG_LEFT"
    LEG_RIGHT = "LEG_RIGHT"
    LEG_LEFT_2 = "LEG_LEFT_2"
    LEG_RIGHT_2 = "LEG_RIGHT_2"
    LEG_CENTER = "LEG_CENTER"

    ACCESSORY_1 = "ACCESSORY_1"
    ACCESSORY_2 = "ACCESSORY_2"
    ACCESSORY_3 = "ACCESSORY_3"
    ACCESSORY_4 = "ACCESSORY_4"

    EXPANSION_1 = "EXPANSION_1"
    EXPANSION_2 = "EXPANSION_2"
    EXPANSION_3 = "EXPANSION_3"
    EXPANSION_4 = "EXPANSION_4"

    SOUL_CHIP = "SOUL_CHIP"


class SlotOperation(StrEnum):
    """Command kinds accepted by the slot assignment service."""

    ASSIGN = "assign"
    UNASSIGN = "unassign"
    SWAP = "swap"
    MOVE = "move"


class ItemTag(StrEnum):
    """Structured item traits used for archetype-level fit checks."""

    HEAVY = "heavy"
    LIGHT = "light"
    FLIGHT_RATED = "flight-rated"
    LANDING_GEAR = "landing-gear"
    SIEGE = "siege"


class CompatibilityTier(StrEnum):
    """Qualitative compatibility grade from the compatible/total ratio."""

    NONE = "none"
    LIMITED = "limited"
    GOOD = "good"
