"""Identity-to-connection bookkeeping for teams and spectators.

A team or spectator is identified by its server-assigned id and its
case-insensitive name. The live connection bound to it is transient: it is
cleared on disconnect and rebound when the same name joins again.
"""

import logging
from typing import Optional, Union

from src.draft_room.config import MAX_TEAMS
from src.draft_room.draft_state import DraftState, Phase, Spectator, Team
from src.draft_room.errors import AlreadyStarted, EmptyName, Full, NameTaken

logger = logging.getLogger(__name__)


def _normalize_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise EmptyName()
    return name.strip()


class ParticipantRegistry:
    """Registers, reconnects and looks up teams and spectators."""

    def __init__(self, draft_state: DraftState):
        self.draft_state = draft_state

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def team_by_name(self, name: str) -> Optional[Team]:
        key = name.strip().lower()
        for team in self.draft_state.teams:
            if team.name.lower() == key:
                return team
        return None

    def spectator_by_name(self, name: str) -> Optional[Spectator]:
        key = name.strip().lower()
        for spectator in self.draft_state.spectators:
            if spectator.name.lower() == key:
                return spectator
        return None

    def team_by_id(self, team_id: str) -> Optional[Team]:
        return self.draft_state.get_team(team_id)

    def team_by_connection(self, connection_id: str) -> Optional[Team]:
        if connection_id is None:
            return None
        for team in self.draft_state.teams:
            if team.connection_id == connection_id:
                return team
        return None

    def spectator_by_connection(self, connection_id: str) -> Optional[Spectator]:
        if connection_id is None:
            return None
        for spectator in self.draft_state.spectators:
            if spectator.connection_id == connection_id:
                return spectator
        return None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_team(self, name: str, connection_id: str) -> Team:
        """Join as a team, or reconnect to the team with this name.

        Reconnecting works in any phase. New teams can only be created during
        setup and while there is room.

        Raises:
            EmptyName, AlreadyStarted, Full
        """
        name = _normalize_name(name)

        existing = self.team_by_name(name)
        if existing is not None:
            self._bind(existing, connection_id)
            logger.info(
                "Team %r reconnected with connection %s", existing.name, connection_id
            )
            return existing

        if self.draft_state.phase is not Phase.SETUP:
            raise AlreadyStarted()

        if len(self.draft_state.teams) >= MAX_TEAMS:
            raise Full()

        team = Team.create(name)
        self.draft_state.teams.append(team)
        self._bind(team, connection_id)
        logger.info("Team %r joined the draft (%s)", team.name, team.team_id)
        return team

    def register_spectator(self, name: str, connection_id: str) -> Spectator:
        """Join as a spectator, or reconnect to the spectator with this name.

        Raises:
            EmptyName, NameTaken
        """
        name = _normalize_name(name)

        if self.team_by_name(name) is not None:
            raise NameTaken()

        existing = self.spectator_by_name(name)
        if existing is not None:
            self._bind(existing, connection_id)
            logger.info(
                "Spectator %r reconnected with connection %s",
                existing.name,
                connection_id,
            )
            return existing

        spectator = Spectator.create(name)
        self.draft_state.spectators.append(spectator)
        self._bind(spectator, connection_id)
        logger.info("Spectator %r joined to watch the draft", spectator.name)
        return spectator

    def unbind(self, connection_id: str):
        """Forget whichever team or spectator holds this connection. Idempotent."""
        team = self.team_by_connection(connection_id)
        if team is not None:
            team.connection_id = None
            logger.info("Team %r disconnected", team.name)

        spectator = self.spectator_by_connection(connection_id)
        if spectator is not None:
            spectator.connection_id = None
            logger.info("Spectator %r disconnected", spectator.name)

    def _bind(self, member: Union[Team, Spectator], connection_id: str):
        """Attach a connection to exactly one team or spectator."""
        for other in (*self.draft_state.teams, *self.draft_state.spectators):
            if other is not member and other.connection_id == connection_id:
                other.connection_id = None
                logger.info("Cleared connection association from %r", other.name)
        member.connection_id = connection_id
