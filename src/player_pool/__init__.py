from src.player_pool.item_pool import ItemPool
from src.player_pool.loader import PoolLoadError, load_item_pool
from src.player_pool.models import Category, Item

__all__ = [
    "Category",
    "Item",
    "ItemPool",
    "PoolLoadError",
    "load_item_pool",
]
