# ABOUTME: Integration tests walking whole matches through the phase graph.
# ABOUTME: Drives a GameSession from muster to end of game and checks the order of turns and rounds.

from battle_guide.models.match_state import BattleSize
from battle_guide.phases import (
    CommandPhase,
    CreateBattlefield,
    DeclareBattleFormations,
    DeployArmies,
    DetermineAttacker,
    DetermineFirstTurn,
    EndGamePhase,
    EndOfRoundPhase,
    MissionDetails,
    MusterArmies,
    PreBattleRules,
    SelectAttackerSecondary,
    SelectDefenderSecondary,
    SelectPrimaryMission,
    VPScoringPhase,
)
from battle_guide.session import GameSession

SETUP_CHOICES = {
    MusterArmies: "2",
    SelectPrimaryMission: "1",
    DetermineAttacker: "2",
    SelectAttackerSecondary: "1",
    SelectDefenderSecondary: "2",
    DetermineFirstTurn: "1",
}


def step(session: GameSession, choices: dict) -> None:
    phase = session.current_phase
    if phase.requires_input():
        assert session.select(choices[type(phase)]) is True
    else:
        assert session.advance() is True


def play_to_end(session: GameSession, choices: dict = SETUP_CHOICES, limit: int = 200) -> list:
    """Step until the end of game, returning every phase visited"""
    visited = [session.current_phase]
    while not isinstance(session.current_phase, EndGamePhase):
        step(session, choices)
        visited.append(session.current_phase)
        assert len(visited) < limit
    return visited


class TestSetupSequence:
    """Test the order of setup phases"""

    def test_setup_phase_order(self, mission_catalog):
        session = GameSession(catalog=mission_catalog)

        kinds = []
        while not isinstance(session.current_phase, CommandPhase):
            kinds.append(type(session.current_phase))
            step(session, SETUP_CHOICES)

        assert kinds == [
            MusterArmies,
            SelectPrimaryMission,
            MissionDetails,
            CreateBattlefield,
            DetermineAttacker,
            SelectAttackerSecondary,
            MissionDetails,
            SelectDefenderSecondary,
            MissionDetails,
            DeclareBattleFormations,
            DeployArmies,
            PreBattleRules,
            DetermineFirstTurn,
        ]

    def test_setup_choices_recorded(self, mission_catalog, primary_mission, secondary_mission,
                                    fixed_secondary_mission):
        session = GameSession(catalog=mission_catalog)
        while not isinstance(session.current_phase, CommandPhase):
            step(session, SETUP_CHOICES)

        state = session.state
        assert state.battle_size == BattleSize.STRIKE_FORCE
        assert state.primary_mission == primary_mission
        assert state.attacker_player_number == 2
        assert state.defender_player_number == 1
        assert state.attacker_secondary_mission == secondary_mission
        assert state.defender_secondary_mission == fixed_secondary_mission

    def test_second_player_goes_first(self, mission_catalog):
        """Test that choosing player 2 at the first-turn roll off starts their turn in round 1"""
        session = GameSession(catalog=mission_catalog)
        choices = {**SETUP_CHOICES, DetermineFirstTurn: "2"}
        while not isinstance(session.current_phase, DetermineFirstTurn):
            step(session, choices)

        assert session.select("2") is True

        assert session.current_phase == CommandPhase()
        assert session.state.current_round == 1
        assert session.state.active_player_number == 2
        assert session.state.first_player_number == 2


class TestFullMatch:
    """Test a complete match from muster to end of game"""

    def test_ten_turns_then_end_of_game(self, mission_catalog):
        session = GameSession(catalog=mission_catalog)

        visited = play_to_end(session)

        command_phases = [phase for phase in visited if isinstance(phase, CommandPhase)]
        assert len(command_phases) == 10
        assert session.state.is_game_over()
        assert isinstance(visited[-1], EndGamePhase)

    def test_end_of_round_between_rounds(self, mission_catalog):
        session = GameSession(catalog=mission_catalog)

        visited = play_to_end(session)

        completed = [phase.completed_round for phase in visited if isinstance(phase, EndOfRoundPhase)]
        assert completed == [1, 2, 3, 4]

    def test_no_vp_scoring_in_first_round(self, mission_catalog):
        session = GameSession(catalog=mission_catalog)
        scoring_rounds = []

        while not isinstance(session.current_phase, EndGamePhase):
            if isinstance(session.current_phase, VPScoringPhase):
                scoring_rounds.append(session.state.current_round)
            step(session, SETUP_CHOICES)

        assert scoring_rounds == [2, 2, 3, 3, 4, 4, 5, 5]

    def test_versions_count_every_transition(self, mission_catalog):
        session = GameSession(catalog=mission_catalog)

        visited = play_to_end(session)

        assert session.version == len(visited) - 1
        assert set(session.snapshots) == set(range(session.version + 1))

    def test_end_game_is_terminal(self, mission_catalog):
        session = GameSession(catalog=mission_catalog)
        play_to_end(session)
        version = session.version

        session.advance()

        assert isinstance(session.current_phase, EndGamePhase)
        assert session.version == version + 1

    def test_replay_from_middle_of_match(self, mission_catalog):
        """Test that restoring a mid-battle version and replaying reaches the same end"""
        session = GameSession(catalog=mission_catalog)
        visited = play_to_end(session)
        final_version = session.version

        middle = final_version // 2
        assert session.restore_snapshot(middle) is True
        assert session.current_phase == visited[middle]

        play_to_end(session)

        assert session.version == final_version
        assert session.state.is_game_over()
