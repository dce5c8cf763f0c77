"""Draft rule enforcement and action validation."""

from typing import Tuple

from src.draft_room.config import COMMISSIONER_NAME, MIN_TEAMS
from src.draft_room.draft_state import DraftState, Phase, Pick, Team
from src.draft_room.errors import (
    AlreadyDrafted,
    NotDrafting,
    NotInSetup,
    NotLatestPick,
    NotPaused,
    NotRegistered,
    NotYourTurn,
    Paused,
    PickNotFound,
    SlotFull,
    TooFewParticipants,
    Unauthorized,
    UnknownItem,
)
from src.draft_room.participant_registry import ParticipantRegistry
from src.draft_room.roster_policy import RosterPolicy
from src.player_pool.item_pool import ItemPool
from src.player_pool.models import Item


class DraftRules:
    """Enforces all draft rules and validation logic."""

    def __init__(
        self,
        draft_state: DraftState,
        registry: ParticipantRegistry,
        pool: ItemPool,
        policy: RosterPolicy,
    ):
        self.draft_state = draft_state
        self.registry = registry
        self.pool = pool
        self.policy = policy

    def validate_start(self):
        if self.draft_state.phase is not Phase.SETUP:
            raise NotInSetup()
        if len(self.draft_state.teams) < MIN_TEAMS:
            raise TooFewParticipants()

    def validate_pick(self, connection_id: str, item_id: str) -> Tuple[Team, Item]:
        """Validate a pick attempt.

        Checks run in a fixed order and the first failure wins.

        Returns:
            (team, item) for the pick to apply.

        Raises:
            ValidationError: The specific rule that was broken.
        """
        if self.draft_state.phase is not Phase.DRAFTING:
            raise NotDrafting()

        if self.draft_state.paused:
            raise Paused()

        team = self.registry.team_by_connection(connection_id)
        if team is None:
            raise NotRegistered()

        current = self.draft_state.get_current_team()
        if current is None or current.team_id != team.team_id:
            raise NotYourTurn()

        item = self.pool.get(item_id)
        if item is None:
            raise UnknownItem()

        if not self.draft_state.is_item_available(item.item_id):
            raise AlreadyDrafted(f"{item.name} has already been drafted")

        if not self.policy.can_claim(team, item.category):
            raise SlotFull(
                f"You have already filled your {item.category.value} roster slots"
            )

        return team, item

    def require_commissioner(self, connection_id: str) -> Team:
        """The commissioner is the team named exactly COMMISSIONER_NAME."""
        team = self.registry.team_by_connection(connection_id)
        if team is None or team.name != COMMISSIONER_NAME:
            raise Unauthorized()
        return team

    def require_drafting(self):
        if self.draft_state.phase is not Phase.DRAFTING:
            raise NotDrafting()

    def validate_undo(self, connection_id: str, pick_number: int) -> Tuple[Team, Pick]:
        """Checks for undo, in order. Returns (commissioner, pick to remove)."""
        commissioner = self.require_commissioner(connection_id)
        self.require_drafting()
        if not self.draft_state.paused:
            raise NotPaused()

        pick = None
        # True == 1 and 1.0 == 1, so only real ints may match a pick
        if isinstance(pick_number, int) and not isinstance(pick_number, bool):
            pick = self.draft_state.find_pick(pick_number)
        if pick is None:
            raise PickNotFound()

        if pick is not self.draft_state.picks[-1]:
            raise NotLatestPick(
                f"Only the most recent pick (#{self.draft_state.picks[-1].pick_number}) "
                "can be undone"
            )
        return commissioner, pick

    def is_draft_complete(self, rounds: int) -> bool:
        """Check if all rounds are complete."""
        return self.draft_state.current_pick_index >= self.draft_state.total_picks(rounds)
