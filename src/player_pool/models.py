"""Player pool data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Category(str, Enum):
    """Player position as listed in the pool."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"

    @classmethod
    def parse(cls, value) -> Optional["Category"]:
        """Return the matching category, or None for anything unsupported."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class Item:
    """A draftable player. Loaded once and never mutated."""

    item_id: str
    name: str
    category: Category
    group: str = ""
    search_key: str = ""

    def to_dict(self) -> Dict:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "category": self.category.value,
            "group": self.group,
            "search_key": self.search_key,
        }
