"""Item lookup boundary.

The item catalog lives outside this package. Services accept any object
satisfying :class:`ItemCatalog`; a missing resolution degrades to a
placeholder name rather than failing.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from botforge.domain.types import ItemTag, PartCategory


class ItemInfo(BaseModel):
    """Display-relevant facts about one equipped item."""

    model_config = {"frozen": True}

    item_id: str
    name: str
    category: PartCategory
    tags: frozenset[ItemTag] = frozenset()


@runtime_checkable
class ItemCatalog(Protocol):
    def resolve(self, item_id: str) -> ItemInfo | None:
        """Return item facts, or None if the id is unknown."""
        ...


class StaticItemCatalog:
    """Dict-backed catalog for fixtures and the CLI."""

    def __init__(self, items: list[ItemInfo] | None = None) -> None:
        self._items: dict[str, ItemInfo] = {i.item_id: i for i in items or []}

    def add(self, item: ItemInfo) -> None:
        self._items[item.item_id] = item

    def resolve(self, item_id: str) -> ItemInfo | None:
        return self._items.get(item_id)
