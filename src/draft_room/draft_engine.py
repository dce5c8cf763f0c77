"""Draft engine - the authoritative draft room state machine."""

import logging
import random
import threading
from datetime import datetime
from typing import Callable, Dict, List, Optional

from src.draft_room.draft_order import generate_snake_order
from src.draft_room.draft_rules import DraftRules
from src.draft_room.draft_state import DraftState, Phase, Pick, Slot, Spectator, Team
from src.draft_room.errors import NotComplete
from src.draft_room.participant_registry import ParticipantRegistry
from src.draft_room.roster_policy import RosterPolicy
from src.player_pool.item_pool import ItemPool
from src.player_pool.models import Item

logger = logging.getLogger(__name__)


class DraftEngine:
    """Main controller for the draft room.

    Coordinates between ParticipantRegistry (identities), DraftRules
    (validation), RosterPolicy (slots) and DraftState (state mutation).
    Every public action runs under one session-wide lock, so actions are
    applied one at a time and either fully succeed or leave state untouched.
    """

    def __init__(
        self,
        pool: ItemPool,
        draft_state: Optional[DraftState] = None,
        rng: Optional[random.Random] = None,
        on_complete: Optional[Callable[[Dict], None]] = None,
        rounds: Optional[int] = None,
    ):
        self.pool = pool
        self.draft_state = draft_state or DraftState()
        self.rng = rng
        self.on_complete = on_complete
        self.lock = threading.RLock()
        self.policy = RosterPolicy()
        # One pick per roster spot
        self.rounds = rounds or self.policy.total_quota()
        self.registry = ParticipantRegistry(self.draft_state)
        self.rules = DraftRules(self.draft_state, self.registry, pool, self.policy)

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def join(self, name: str, connection_id: str) -> Team:
        """Join as a new team or reconnect to an existing one by name."""
        with self.lock:
            return self.registry.register_team(name, connection_id)

    def join_as_spectator(self, name: str, connection_id: str) -> Spectator:
        with self.lock:
            return self.registry.register_spectator(name, connection_id)

    def disconnect(self, connection_id: str):
        with self.lock:
            self.registry.unbind(connection_id)

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------
    def start(self) -> List[str]:
        """Generate the pick order and begin drafting.

        Returns:
            The pick order as a list of team IDs.

        Raises:
            NotInSetup, TooFewParticipants
        """
        with self.lock:
            self.rules.validate_start()

            state = self.draft_state
            state.pick_order = generate_snake_order(
                [team.team_id for team in state.teams], self.rounds, self.rng
            )
            state.phase = Phase.DRAFTING
            state.current_pick_index = 0
            state.paused = False
            state.started_at = datetime.now().isoformat()

            logger.info(
                "Draft started! Order: %s",
                [state.get_team(tid).name for tid in state.pick_order[: len(state.teams)]],
            )
            return list(state.pick_order)

    def current_picker(self) -> Optional[Team]:
        """Get the team currently on the clock."""
        with self.lock:
            return self.draft_state.get_current_team()

    @property
    def is_complete(self) -> bool:
        """Whether the draft is finished."""
        return self.draft_state.is_complete

    # ------------------------------------------------------------------
    # Picks
    # ------------------------------------------------------------------
    def pick(self, connection_id: str, item_id) -> Pick:
        """Validate and execute a draft pick.

        Args:
            connection_id: Connection the pick arrived on.
            item_id: ID of the player being drafted.

        Returns:
            The Pick record.

        Raises:
            ValidationError: If the pick is illegal (not drafting, paused,
                wrong turn, unknown or already drafted player, slot full).
        """
        results = None
        with self.lock:
            team, item = self.rules.validate_pick(connection_id, item_id)
            pick = self._apply_pick(team, item)

            if self.rules.is_draft_complete(self.rounds):
                self._complete()
                results = self._build_results()

        if results is not None and self.on_complete is not None:
            self.on_complete(results)

        return pick

    def _apply_pick(self, team: Team, item: Item) -> Pick:
        state = self.draft_state
        slot = self.policy.slot_for(item.category)

        pick = Pick.create(
            team_id=team.team_id,
            item_id=item.item_id,
            pick_number=state.current_pick_index + 1,
        )

        team.add_item(item.item_id, slot)
        state.drafted_item_ids.add(item.item_id)
        state.picks.append(pick)
        state.current_pick_index += 1

        logger.info(
            "Pick #%d: %s drafts %s (%s) -> %s",
            pick.pick_number,
            team.name,
            item.name,
            item.category.value,
            slot.value,
        )
        return pick

    def _complete(self):
        state = self.draft_state
        state.phase = Phase.COMPLETE
        state.paused = False
        state.completed_at = datetime.now().isoformat()
        logger.info("Draft complete! %d picks made", len(state.picks))

    # ------------------------------------------------------------------
    # Commissioner controls
    # ------------------------------------------------------------------
    def pause(self, connection_id: str):
        with self.lock:
            team = self.rules.require_commissioner(connection_id)
            self.rules.require_drafting()
            self.draft_state.paused = True
            logger.info("Draft paused by %s", team.name)

    def resume(self, connection_id: str):
        with self.lock:
            team = self.rules.require_commissioner(connection_id)
            self.rules.require_drafting()
            self.draft_state.paused = False
            logger.info("Draft resumed by %s", team.name)

    def undo(self, connection_id: str, pick_number: int) -> Pick:
        """Roll back the most recent pick while the draft is paused.

        Raises:
            Unauthorized, NotDrafting, NotPaused, PickNotFound, NotLatestPick
        """
        with self.lock:
            commissioner, pick = self.rules.validate_undo(connection_id, pick_number)

            state = self.draft_state
            team = state.get_team(pick.team_id)
            item = self.pool.get(pick.item_id)

            if team is not None and item is not None:
                team.remove_item(item.item_id, self.policy.slot_for(item.category))
            state.drafted_item_ids.discard(pick.item_id)
            state.picks.pop()
            if state.current_pick_index > 0:
                state.current_pick_index -= 1

            logger.info(
                "Pick #%d undone by %s: %s removed from %s",
                pick.pick_number,
                commissioner.name,
                item.name if item else pick.item_id,
                team.name if team else pick.team_id,
            )
            return pick

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_available_items(self, category: Optional[str] = None) -> List[Item]:
        """Undrafted players in pool order.

        Args:
            category: If provided (and not "ALL"), filter to this position.
        """
        with self.lock:
            drafted = set(self.draft_state.drafted_item_ids)
        return [item for item in self.pool.items(category) if item.item_id not in drafted]

    def get_team_roster(self, team: Team) -> Dict[str, List[Dict]]:
        """Get formatted roster for a team.

        Returns:
            Dict mapping slot name to list of player dicts.
        """
        formatted = {}
        for slot in Slot:
            formatted[slot.value] = [
                self.pool.get(item_id).to_dict()
                for item_id in team.roster.get(slot, [])
                if item_id in self.pool
            ]
        return formatted

    def get_results(self) -> Dict:
        """Results payload for a completed draft.

        Raises:
            NotComplete: If the draft is still running.
        """
        with self.lock:
            if not self.draft_state.is_complete:
                raise NotComplete()
            return self._build_results()

    def _build_results(self) -> Dict:
        state = self.draft_state

        def describe(item_id: str, with_category: bool = False) -> Dict:
            item = self.pool.get(item_id)
            entry = {"name": item.name, "group": item.group}
            if with_category:
                entry["category"] = item.category.value
            return entry

        teams = []
        for team in state.teams:
            teams.append(
                {
                    "name": team.name,
                    "roster": {
                        slot.value: [
                            describe(item_id, with_category=slot is Slot.WR_TE)
                            for item_id in team.roster.get(slot, [])
                        ]
                        for slot in Slot
                    },
                }
            )

        pick_history = []
        for pick in state.picks:
            team = state.get_team(pick.team_id)
            item = self.pool.get(pick.item_id)
            pick_history.append(
                {
                    "pick_number": pick.pick_number,
                    "team_name": team.name if team else "Unknown",
                    "item_name": item.name if item else "Unknown",
                    "category": item.category.value if item else "Unknown",
                    "group": item.group if item else "Unknown",
                }
            )

        return {
            "completed_at": state.completed_at,
            "session_token": state.session_token,
            "teams": teams,
            "pick_history": pick_history,
        }
