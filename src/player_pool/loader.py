"""Player pool loading.

Handles the two shapes the player file comes in:
- A bare JSON list of player records (``id``, ``name``, ``position``,
  ``team``, ``searchText``)
- A ``{"players": [...]}`` wrapper, optionally with snake-case keys
  (``item_id``, ``category``, ``group``, ``search_key``)

CSV files with either set of column names are accepted as well.
"""

import json
import logging
from pathlib import Path
from typing import List

import pandas as pd

from src.player_pool.item_pool import ItemPool
from src.player_pool.models import Category, Item

logger = logging.getLogger(__name__)

COLUMN_ALIASES = {
    "id": "item_id",
    "player_id": "item_id",
    "position": "category",
    "team": "group",
    "searchText": "search_key",
}

REQUIRED_COLUMNS = ["item_id", "name", "category"]


class PoolLoadError(Exception):
    """Raised when the player pool cannot be loaded. Fatal at startup."""


def _read_records(path: Path) -> pd.DataFrame:
    """Read the raw file into a DataFrame without any normalization."""
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("players")
    if not isinstance(data, list):
        raise PoolLoadError(
            f"{path.name} must contain a list of players or a 'players' list"
        )
    return pd.DataFrame.from_records(data)


def _normalize(df: pd.DataFrame) -> pd.DataFrame:
    """Rename columns, coerce types and drop unusable rows."""
    df = df.rename(columns={k: v for k, v in COLUMN_ALIASES.items() if k in df.columns})

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise PoolLoadError(f"Player pool missing required columns: {missing}")

    if "group" not in df.columns:
        df["group"] = ""
    if "search_key" not in df.columns:
        df["search_key"] = ""

    df = df[REQUIRED_COLUMNS + ["group", "search_key"]].copy()
    df = df.fillna("")

    for col in df.columns:
        df[col] = df[col].astype(str).str.strip()

    df["category"] = df["category"].str.upper()

    blank = (df["item_id"] == "") | (df["name"] == "")
    if blank.any():
        logger.warning("Dropping %d players without id or name", int(blank.sum()))
        df = df[~blank].copy()

    supported = df["category"].isin([c.value for c in Category])
    if not supported.all():
        logger.warning(
            "Dropping %d players with unsupported positions: %s",
            int((~supported).sum()),
            sorted(df.loc[~supported, "category"].unique().tolist()),
        )
        df = df[supported].copy()

    no_key = df["search_key"] == ""
    df.loc[no_key, "search_key"] = (
        df.loc[no_key, "name"] + " " + df.loc[no_key, "group"] + " " + df.loc[no_key, "category"]
    )
    df["search_key"] = df["search_key"].str.lower()

    duplicates = df["item_id"].duplicated(keep=False)
    if duplicates.any():
        raise PoolLoadError(
            "Duplicate player ids in pool: "
            f"{sorted(df.loc[duplicates, 'item_id'].unique().tolist())}"
        )

    return df.reset_index(drop=True)


def load_item_pool(path: Path) -> ItemPool:
    """Load and validate the player pool.

    Args:
        path: JSON or CSV file with one record per player.

    Returns:
        ItemPool in file order.

    Raises:
        PoolLoadError: If the file is missing, unreadable, malformed or
            yields no usable players.
    """
    path = Path(path)
    if not path.exists():
        raise PoolLoadError(f"Player pool file not found: {path}")

    try:
        raw = _read_records(path)
    except (ValueError, OSError, pd.errors.ParserError) as e:
        raise PoolLoadError(f"Could not read player pool {path.name}: {e}") from e

    df = _normalize(raw)
    if df.empty:
        raise PoolLoadError(f"Player pool {path.name} contains no usable players")

    items: List[Item] = [
        Item(
            item_id=row["item_id"],
            name=row["name"],
            category=Category(row["category"]),
            group=row["group"],
            search_key=row["search_key"],
        )
        for row in df.to_dict(orient="records")
    ]

    counts = df["category"].value_counts().to_dict()
    logger.info(
        "Loaded %d players from %s (%s)",
        len(items),
        path.name,
        ", ".join(f"{k}={v}" for k, v in sorted(counts.items())),
    )
    return ItemPool(items)
