"""Tests for team/spectator registration, reconnect and unbind."""

import pytest

from src.draft_room.draft_state import DraftState, Phase, Slot
from src.draft_room.errors import AlreadyStarted, EmptyName, Full, NameTaken
from src.draft_room.participant_registry import ParticipantRegistry


def _registry(phase=Phase.SETUP):
    state = DraftState()
    state.phase = phase
    return ParticipantRegistry(state), state


# ── Team registration ────────────────────────────────────────────────

class TestRegisterTeam:
    def test_creates_team_with_empty_roster(self):
        registry, state = _registry()
        team = registry.register_team("Alpha", "sid-1")
        assert state.teams == [team]
        assert team.name == "Alpha"
        assert team.connection_id == "sid-1"
        assert team.team_id.startswith("team-")
        assert all(team.roster[slot] == [] for slot in Slot)

    def test_name_is_trimmed(self):
        registry, _ = _registry()
        assert registry.register_team("  Alpha  ", "sid-1").name == "Alpha"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, name):
        registry, state = _registry()
        with pytest.raises(EmptyName):
            registry.register_team(name, "sid-1")
        assert state.teams == []

    def test_ids_are_unique(self):
        registry, _ = _registry()
        a = registry.register_team("Alpha", "sid-1")
        b = registry.register_team("Beta", "sid-2")
        assert a.team_id != b.team_id

    def test_full_at_eight_teams(self):
        registry, state = _registry()
        for i in range(8):
            registry.register_team(f"Team {i}", f"sid-{i}")
        with pytest.raises(Full):
            registry.register_team("Team 9", "sid-9")
        assert len(state.teams) == 8

    @pytest.mark.parametrize("phase", [Phase.DRAFTING, Phase.COMPLETE])
    def test_new_team_rejected_after_setup(self, phase):
        registry, state = _registry(phase)
        with pytest.raises(AlreadyStarted):
            registry.register_team("Late", "sid-1")
        assert state.teams == []


# ── Reconnect ────────────────────────────────────────────────────────

class TestReconnect:
    def test_same_name_rebinds_connection(self):
        registry, state = _registry()
        team = registry.register_team("Alpha", "sid-1")
        again = registry.register_team("Alpha", "sid-2")
        assert again is team
        assert team.connection_id == "sid-2"
        assert len(state.teams) == 1

    def test_case_insensitive_match(self):
        registry, state = _registry()
        team = registry.register_team("Alpha", "sid-1")
        assert registry.register_team("aLPHA", "sid-2") is team
        assert team.name == "Alpha"
        assert len(state.teams) == 1

    @pytest.mark.parametrize("phase", [Phase.SETUP, Phase.DRAFTING, Phase.COMPLETE])
    def test_reconnect_works_in_any_phase(self, phase):
        registry, state = _registry()
        team = registry.register_team("Alpha", "sid-1")
        state.phase = phase
        assert registry.register_team("Alpha", "sid-9") is team
        assert team.connection_id == "sid-9"

    def test_reconnect_when_full(self):
        registry, _ = _registry()
        for i in range(8):
            registry.register_team(f"Team {i}", f"sid-{i}")
        team = registry.register_team("team 3", "sid-new")
        assert team.name == "Team 3"

    def test_reconnect_keeps_roster(self):
        registry, _ = _registry()
        team = registry.register_team("Alpha", "sid-1")
        team.add_item("qb1", Slot.QB)
        registry.register_team("Alpha", "sid-2")
        assert team.roster[Slot.QB] == ["qb1"]

    def test_connection_moves_to_new_team(self):
        registry, _ = _registry()
        alpha = registry.register_team("Alpha", "sid-1")
        beta = registry.register_team("Beta", "sid-1")
        assert alpha.connection_id is None
        assert beta.connection_id == "sid-1"
        assert registry.team_by_connection("sid-1") is beta

    def test_connection_moves_on_reconnect_too(self):
        registry, _ = _registry()
        alpha = registry.register_team("Alpha", "sid-1")
        beta = registry.register_team("Beta", "sid-2")
        registry.register_team("Alpha", "sid-2")
        assert beta.connection_id is None
        assert alpha.connection_id == "sid-2"


# ── Spectators ───────────────────────────────────────────────────────

class TestRegisterSpectator:
    def test_creates_spectator(self):
        registry, state = _registry()
        spectator = registry.register_spectator("Watcher", "sid-1")
        assert state.spectators == [spectator]
        assert spectator.spectator_id.startswith("spectator-")
        assert registry.spectator_by_connection("sid-1") is spectator

    def test_allowed_after_setup(self):
        registry, _ = _registry(Phase.DRAFTING)
        assert registry.register_spectator("Watcher", "sid-1").name == "Watcher"

    @pytest.mark.parametrize("phase", [Phase.SETUP, Phase.DRAFTING])
    def test_team_name_rejected(self, phase):
        registry, state = _registry()
        registry.register_team("Alpha", "sid-1")
        state.phase = phase
        with pytest.raises(NameTaken):
            registry.register_spectator("ALPHA", "sid-2")
        assert state.spectators == []

    def test_empty_name_rejected(self):
        registry, _ = _registry()
        with pytest.raises(EmptyName):
            registry.register_spectator("  ", "sid-1")

    def test_reconnect_by_name(self):
        registry, state = _registry()
        spectator = registry.register_spectator("Watcher", "sid-1")
        assert registry.register_spectator("watcher", "sid-2") is spectator
        assert spectator.connection_id == "sid-2"
        assert len(state.spectators) == 1

    def test_team_join_clears_spectator_binding(self):
        registry, _ = _registry()
        spectator = registry.register_spectator("Watcher", "sid-1")
        registry.register_team("Alpha", "sid-1")
        assert spectator.connection_id is None
        assert registry.spectator_by_connection("sid-1") is None


# ── Unbind ───────────────────────────────────────────────────────────

class TestUnbind:
    def test_unbind_team(self):
        registry, state = _registry()
        team = registry.register_team("Alpha", "sid-1")
        registry.unbind("sid-1")
        assert team.connection_id is None
        assert state.teams == [team]

    def test_unbind_spectator(self):
        registry, _ = _registry()
        spectator = registry.register_spectator("Watcher", "sid-1")
        registry.unbind("sid-1")
        assert spectator.connection_id is None

    def test_unbind_unknown_is_noop(self):
        registry, _ = _registry()
        team = registry.register_team("Alpha", "sid-1")
        registry.unbind("sid-unknown")
        registry.unbind("sid-unknown")
        assert team.connection_id == "sid-1"

    def test_lookup_none_connection(self):
        registry, _ = _registry()
        team = registry.register_team("Alpha", "sid-1")
        registry.unbind("sid-1")
        assert registry.team_by_connection(None) is None
        assert team.connection_id is None
