"""Roster slot mapping and quota checks."""

from typing import Dict, Optional

from src.draft_room.config import ROSTER_QUOTAS
from src.draft_room.draft_state import Slot, Team
from src.player_pool.models import Category

_CATEGORY_SLOTS = {
    Category.QB: Slot.QB,
    Category.RB: Slot.RB,
    Category.WR: Slot.WR_TE,
    Category.TE: Slot.WR_TE,
    Category.K: Slot.K,
}


class RosterPolicy:
    """Maps categories onto roster slots and enforces slot quotas."""

    def __init__(self, quotas: Optional[Dict[str, int]] = None):
        self.quotas = dict(quotas or ROSTER_QUOTAS)

    @staticmethod
    def slot_for(category) -> Optional[Slot]:
        """Slot a category counts against, or None if the category is unknown."""
        parsed = Category.parse(category)
        if parsed is None:
            return None
        return _CATEGORY_SLOTS[parsed]

    def quota(self, slot) -> int:
        """Items allowed in a slot; 0 for anything that is not a slot."""
        try:
            return self.quotas.get(Slot(slot).value, 0)
        except ValueError:
            return 0

    def can_claim(self, team: Team, category) -> bool:
        """Whether the team still has room for an item of this category."""
        slot = self.slot_for(category)
        if slot is None:
            return False
        return team.get_roster_count(slot) < self.quota(slot)

    def total_quota(self) -> int:
        return sum(self.quotas.values())

    def get_roster_summary(self, team: Team) -> Dict[str, Dict]:
        """Generate summary of team's roster status."""
        summary = {}

        for slot in Slot:
            filled = team.get_roster_count(slot)
            required = self.quota(slot)
            summary[slot.value] = {
                "filled": filled,
                "required": required,
                "remaining": max(0, required - filled),
            }

        return summary
