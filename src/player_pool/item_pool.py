"""Read-only, ordered collection of draftable players."""

from typing import Dict, Iterable, Iterator, List, Optional

from src.player_pool.models import Category, Item


class ItemPool:
    """Players keyed by id, preserving the order of the source file."""

    def __init__(self, items: Iterable[Item]):
        self._items: Dict[str, Item] = {}
        for item in items:
            if item.item_id in self._items:
                raise ValueError(f"Duplicate player id {item.item_id!r}")
            self._items[item.item_id] = item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def __contains__(self, item_id) -> bool:
        return self.get(item_id) is not None

    def get(self, item_id) -> Optional[Item]:
        if item_id is None:
            return None
        return self._items.get(str(item_id))

    def items(self, category=None) -> List[Item]:
        """All players, optionally limited to one category.

        ``None`` and ``"ALL"`` mean no filter; an unknown category matches
        nothing.
        """
        if category is None or category == "ALL":
            return list(self._items.values())
        parsed = Category.parse(category)
        if parsed is None:
            return []
        return [item for item in self._items.values() if item.category is parsed]
