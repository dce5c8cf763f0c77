"""Draft state data models - single source of truth for the draft room."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Set
import time
import uuid


class Phase(str, Enum):
    """Lifecycle of the draft. No transition leaves COMPLETE."""

    SETUP = "setup"
    DRAFTING = "drafting"
    COMPLETE = "complete"


class Slot(str, Enum):
    """Roster bucket a category is counted against."""

    QB = "QB"
    RB = "RB"
    WR_TE = "WR_TE"
    K = "K"


def generate_session_token() -> str:
    """Token identifying this process's draft, used to detect stale clients."""
    return f"draft-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def _short_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:9]}"


@dataclass
class Team:
    """A drafting participant.

    ``connection_id`` is None while the team has no live connection; it is
    not part of the team's identity.
    """

    team_id: str
    name: str
    connection_id: Optional[str] = None
    roster: Dict[Slot, List[str]] = field(
        default_factory=lambda: {slot: [] for slot in Slot}
    )

    @classmethod
    def create(cls, name: str, connection_id: Optional[str] = None) -> "Team":
        return cls(team_id=_short_id("team"), name=name, connection_id=connection_id)

    @property
    def is_connected(self) -> bool:
        return self.connection_id is not None

    def get_roster_count(self, slot: Slot) -> int:
        """Get number of items held in a slot."""
        return len(self.roster.get(slot, []))

    def add_item(self, item_id: str, slot: Slot):
        self.roster.setdefault(slot, []).append(item_id)

    def remove_item(self, item_id: str, slot: Slot):
        """Remove an item from a slot (for undo). Missing items are ignored."""
        items = self.roster.get(slot, [])
        if item_id in items:
            items.remove(item_id)

    def get_total_items(self) -> int:
        return sum(len(items) for items in self.roster.values())


@dataclass
class Spectator:
    """Someone watching the draft without a roster."""

    spectator_id: str
    name: str
    connection_id: Optional[str] = None

    @classmethod
    def create(cls, name: str, connection_id: Optional[str] = None) -> "Spectator":
        return cls(
            spectator_id=_short_id("spectator"),
            name=name,
            connection_id=connection_id,
        )


@dataclass(frozen=True)
class Pick:
    """Represents a single draft pick."""

    team_id: str
    item_id: str
    pick_number: int
    timestamp: str

    @classmethod
    def create(cls, team_id: str, item_id: str, pick_number: int) -> "Pick":
        return cls(
            team_id=team_id,
            item_id=item_id,
            pick_number=pick_number,
            timestamp=datetime.now().isoformat(),
        )

    def to_dict(self) -> Dict:
        return {
            "team_id": self.team_id,
            "item_id": self.item_id,
            "pick_number": self.pick_number,
            "timestamp": self.timestamp,
        }


@dataclass
class DraftState:
    """Complete draft room state - single source of truth.

    Only the draft engine mutates this object.
    """

    session_token: str = field(default_factory=generate_session_token)
    phase: Phase = Phase.SETUP
    paused: bool = False
    teams: List[Team] = field(default_factory=list)
    spectators: List[Spectator] = field(default_factory=list)
    pick_order: List[str] = field(default_factory=list)
    current_pick_index: int = 0
    picks: List[Pick] = field(default_factory=list)
    drafted_item_ids: Set[str] = field(default_factory=set)
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.phase is Phase.COMPLETE

    def get_team(self, team_id: str) -> Optional[Team]:
        """Get specific team by ID."""
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def get_current_team(self) -> Optional[Team]:
        """Get the team currently on the clock, if any."""
        if self.phase is not Phase.DRAFTING:
            return None
        if self.current_pick_index >= len(self.pick_order):
            return None
        return self.get_team(self.pick_order[self.current_pick_index])

    def is_item_available(self, item_id: str) -> bool:
        return item_id not in self.drafted_item_ids

    def find_pick(self, pick_number: int) -> Optional[Pick]:
        for pick in self.picks:
            if pick.pick_number == pick_number:
                return pick
        return None

    def total_picks(self, rounds: int) -> int:
        return len(self.teams) * rounds
