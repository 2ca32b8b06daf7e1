# ABOUTME: Unit tests for versioned game sessions and the session registry.
# ABOUTME: Covers snapshot isolation, restore semantics, the transition protocol and registry lifecycle.

import threading

import pytest

from battle_guide.models.match_state import BattleSize
from battle_guide.phases import (
    CommandPhase,
    CreateBattlefield,
    EndOfTurnPhase,
    MissionDetails,
    MovementPhase,
    MusterArmies,
    SelectPrimaryMission,
)
from battle_guide.session import GameSession, SessionNotFound, SessionRegistry


@pytest.fixture
def session(mission_catalog) -> GameSession:
    return GameSession(catalog=mission_catalog, session_id="test-session")


class TestGameSessionStart:

    def test_fresh_session(self, session, mission_catalog):
        assert session.version == 0
        assert session.snapshots == {}
        assert session.current_phase == MusterArmies(catalog=mission_catalog)
        assert session.state.current_round == 0


class TestSnapshots:
    """Test suite for save/restore"""

    def test_restore_unknown_version_is_noop(self, session):
        assert session.restore_snapshot(42) is False
        assert session.version == 0
        assert isinstance(session.current_phase, MusterArmies)

    def test_round_trip(self, session):
        session.save_snapshot()
        saved_phase = session.current_phase

        session.state.battle_size = BattleSize.ONSLAUGHT
        session.state.current_round = 3
        session.current_phase = CommandPhase()

        assert session.restore_snapshot(0) is True
        assert session.state.battle_size == BattleSize.STRIKE_FORCE
        assert session.state.current_round == 0
        assert session.current_phase == saved_phase

    def test_snapshot_not_aliased_to_live_state(self, session):
        """Test that mutating live state after a save leaves the snapshot untouched"""
        session.save_snapshot()

        session.state.attacker_player_number = 2

        assert session.snapshots[0].state.attacker_player_number == 1

    def test_restored_state_not_aliased_to_snapshot(self, session):
        """Test that mutating restored state leaves the snapshot untouched"""
        session.save_snapshot()
        session.restore_snapshot(0)

        session.state.first_player_number = 2

        assert session.snapshots[0].state.first_player_number == 1
        session.restore_snapshot(0)
        assert session.state.first_player_number == 1

    def test_restore_sets_version(self, session):
        session.select("1")
        session.select("1")
        assert session.version == 2

        assert session.restore_snapshot(1) is True
        assert session.version == 1
        assert isinstance(session.current_phase, SelectPrimaryMission)


class TestSelect:
    """Test suite for input transitions"""

    def test_valid_choice_advances_version(self, session):
        assert session.select("3") is True

        assert session.version == 1
        assert session.state.battle_size == BattleSize.ONSLAUGHT
        assert isinstance(session.current_phase, SelectPrimaryMission)

    def test_pre_and_post_transition_snapshots(self, session):
        session.select("1")

        assert isinstance(session.snapshots[0].phase, MusterArmies)
        assert session.snapshots[0].state.battle_size == BattleSize.STRIKE_FORCE
        assert isinstance(session.snapshots[1].phase, SelectPrimaryMission)
        assert session.snapshots[1].state.battle_size == BattleSize.INCURSION

    def test_invalid_choice(self, session):
        assert session.select("9") is False
        assert session.version == 0
        assert isinstance(session.current_phase, MusterArmies)

    def test_select_on_guidance_phase_is_ignored(self, session):
        session.select("1")
        session.select("1")
        session.advance()
        assert isinstance(session.current_phase, CreateBattlefield)
        version = session.version

        assert session.select("1") is False
        assert session.version == version

    def test_choice_applied_to_client_version(self, session, primary_mission):
        """Test that a stale client is reconciled before its choice is applied"""
        session.select("2")                 # v1: select primary
        session.select("2")                 # v2: details for Supply Drop
        assert session.version == 2

        # Browser went back to v1 and picks the other mission
        assert session.select("1", client_version=1) is True

        assert session.version == 2
        assert session.state.primary_mission == primary_mission
        assert isinstance(session.current_phase, MissionDetails)
        assert session.current_phase.mission == primary_mission


class TestAdvance:
    """Test suite for guidance-only transitions"""

    def test_advance_refuses_input_phase(self, session):
        assert session.advance() is False
        assert session.version == 0

    def test_advance_through_mission_details(self, session):
        session.select("1")
        session.select("1")

        assert session.advance() is True
        assert isinstance(session.current_phase, CreateBattlefield)
        assert session.version == 3

    def test_end_of_turn_snapshot_keeps_pre_transition_state(self, session):
        """Test that the snapshot before End of Turn is taken before the turn advances"""
        session.state.current_round = 1
        session.current_phase = EndOfTurnPhase()
        session.version = 10

        session.advance()

        assert session.snapshots[10].state.active_player_number == 1
        assert session.snapshots[11].state.active_player_number == 2
        assert session.current_phase == CommandPhase()

    def test_advance_from_client_version(self, session):
        session.state.current_round = 2
        session.current_phase = CommandPhase()
        session.save_snapshot()
        session.advance()
        session.advance()
        assert session.version == 2
        assert isinstance(session.current_phase, MovementPhase)

        assert session.advance(client_version=0) is True

        assert session.version == 1
        assert session.current_phase.name == "VP SCORING"

    def test_branching_drops_abandoned_versions(self, session):
        """Test that versions after the branch point cannot be restored once replaced"""
        session.select("3")                 # v1: select primary
        session.select("1")                 # v2: mission details
        session.advance()                   # v3: create battlefield
        assert set(session.snapshots) == {0, 1, 2, 3}

        assert session.select("1", client_version=0) is True

        assert session.version == 1
        assert set(session.snapshots) == {0, 1}
        assert session.restore_snapshot(3) is False
        assert session.state.battle_size == BattleSize.INCURSION

    def test_unknown_client_version_uses_live_state(self, session):
        session.select("1")

        assert session.select("1", client_version=99) is True
        assert session.version == 2


class TestSessionRegistry:
    """Test suite for the session registry"""

    def test_get_or_create_is_stable(self, mission_catalog):
        registry = SessionRegistry(mission_catalog)

        first = registry.get_or_create("abc")
        second = registry.get_or_create("abc")

        assert first is second
        assert len(registry) == 1
        assert "abc" in registry

    def test_sessions_are_independent(self, mission_catalog):
        registry = SessionRegistry(mission_catalog)

        registry.get_or_create("a").select("1")

        assert registry.get_or_create("b").version == 0
        assert registry.get_or_create("b").state.battle_size == BattleSize.STRIKE_FORCE

    def test_get_unknown_session(self):
        with pytest.raises(SessionNotFound):
            SessionRegistry().get("missing")

    def test_get_known_session(self):
        registry = SessionRegistry()
        session = registry.get_or_create("abc")
        assert registry.get("abc") is session

    def test_reset_replaces_session(self, mission_catalog):
        registry = SessionRegistry(mission_catalog)
        old = registry.get_or_create("abc")
        old.select("1")

        new = registry.reset("abc")

        assert new is not old
        assert new.version == 0
        assert new.snapshots == {}
        assert registry.get("abc") is new
        assert new.session_id == "abc"

    def test_concurrent_get_or_create(self):
        """Test that concurrent creation yields a single session per id"""
        registry = SessionRegistry()
        results = []

        def worker():
            results.append(registry.get_or_create("shared"))

        threads = [threading.Thread(target=worker) for _ in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 1
        assert all(session is results[0] for session in results)
