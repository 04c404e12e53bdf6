"""Keyed item container owned by the editor."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from subtitler.regions.models import Item


class ItemStore:
    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: dict[str, Item] = {}
        for item in items:
            self.set(item)

    def get(self, item_id: str) -> Item | None:
        return self._items.get(item_id)

    def require(self, item_id: str) -> Item:
        item = self._items.get(item_id)
        if item is None:
            raise KeyError(f"Item '{item_id}' not found")
        return item

    def set(self, item: Item) -> None:
        item.validate()
        self._items[item.item_id] = item

    def delete(self, item_id: str) -> Item:
        item = self._items.pop(item_id, None)
        if item is None:
            raise KeyError(f"Item '{item_id}' not found")
        return item

    def clear(self) -> None:
        self._items.clear()

    def view(self) -> Mapping[str, Item]:
        return MappingProxyType(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items.values()))
