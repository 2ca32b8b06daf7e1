# ABOUTME: Shared pytest fixtures for all test modules (unit and integration).
# ABOUTME: Provides match states at interesting points of a battle, sample missions and mission file text.

import pytest

from battle_guide.models.match_state import MatchState
from battle_guide.models.mission import MissionCatalog, MissionRecord, MissionType


# --- Mission Fixtures ---

@pytest.fixture
def primary_mission() -> MissionRecord:
    """Standard primary mission scored in the Command phase"""
    return MissionRecord(
        name="Take and Hold",
        type=MissionType.PRIMARY,
        full_text=(
            "Control objective markers to score VP.\n"
            "At the end of your Command phase (from the second battle round onwards),\n"
            "you score VP for each objective marker you control:\n"
            "- Control 1 objective: 1VP\n"
            "- Control 2+ objectives: 3VP"
        ),
    )


@pytest.fixture
def asymmetric_mission() -> MissionRecord:
    """Asymmetric primary mission with an action"""
    return MissionRecord(
        name="Supply Drop",
        type=MissionType.PRIMARY_ASYMMETRIC,
        full_text=(
            "ASYMMETRIC WAR\n"
            "The Attacker must secure supply drops.\n"
            "The Defender must hold the line.\n"
            "\n"
            "ATTACKER:\n"
            "Score 4VP each time you complete the Secure Supplies action.\n"
            "\n"
            "(ACTION) SECURE SUPPLIES\n"
            "One Infantry unit can start this action at the end of your Shooting phase\n"
            "if it is within range of an objective marker.\n"
            "\n"
            "DEFENDER:\n"
            "Score 4VP at the end of your turn if you control 2+ objective markers."
        ),
        has_action=True,
    )


@pytest.fixture
def secondary_mission() -> MissionRecord:
    """Tactical secondary scored at the end of the turn"""
    return MissionRecord(
        name="Engage on All Fronts",
        type=MissionType.SECONDARY,
        full_text=(
            "At the end of your turn, you score VP for having units wholly within\n"
            "different table quarters:\n"
            "- 2 quarters: 2VP\n"
            "- 3 quarters: 3VP\n"
            "- 4 quarters: 4VP"
        ),
    )


@pytest.fixture
def fixed_secondary_mission() -> MissionRecord:
    return MissionRecord(
        name="Assassination",
        type=MissionType.SECONDARY_FIXED,
        full_text=(
            "FIXED - cannot be changed during the battle.\n"
            "Each time an enemy CHARACTER model is destroyed, score 4VP.\n"
            "If the enemy WARLORD is destroyed, score 1 additional VP."
        ),
    )


@pytest.fixture
def mission_with_action() -> MissionRecord:
    """Primary mission whose action runs from the Shooting phase"""
    return MissionRecord(
        name="Cleanse",
        type=MissionType.PRIMARY,
        full_text=(
            "At the end of your Command phase, score VP for objectives controlled.\n"
            "\n"
            "(ACTION) CLEANSE\n"
            "One unit can start this action at the end of your Shooting phase.\n"
            "The action is completed at the end of your turn."
        ),
        has_action=True,
    )


@pytest.fixture
def mission_catalog(
    primary_mission, asymmetric_mission, secondary_mission, fixed_secondary_mission
) -> MissionCatalog:
    """Two primaries and two secondaries to pick from"""
    return MissionCatalog(
        primary_missions=(primary_mission, asymmetric_mission),
        secondary_missions=(secondary_mission, fixed_secondary_mission),
    )


@pytest.fixture
def empty_catalog() -> MissionCatalog:
    return MissionCatalog()


# --- Match State Fixtures ---

@pytest.fixture
def default_state() -> MatchState:
    """Fresh match state (still in setup)"""
    return MatchState()


@pytest.fixture
def battle_state(primary_mission, secondary_mission) -> MatchState:
    """Round 1, player 1 active and going first, missions selected"""
    return MatchState(
        current_round=1,
        active_player_number=1,
        first_player_number=1,
        primary_mission=primary_mission,
        attacker_secondary_mission=secondary_mission,
        defender_secondary_mission=secondary_mission,
    )


@pytest.fixture
def final_turn_state(primary_mission) -> MatchState:
    """Round 5, second player's turn: the last turn of the game"""
    return MatchState(
        current_round=5,
        active_player_number=2,
        first_player_number=1,
        primary_mission=primary_mission,
    )


# --- Mission File Content ---

@pytest.fixture
def primary_file_content() -> str:
    return (
        "PRIMARY MISSION\n"
        "Take and Hold\n"
        "\n"
        "Control objective markers to score VP.\n"
        "At the end of your Command phase, score:\n"
        "- 1 objective: 1VP\n"
        "- 2+ objectives: 3VP\n"
        "\n"
        "PRIMARY MISSION - ASYMMETRIC WAR\n"
        "Supply Drop\n"
        "\n"
        "ASYMMETRIC WAR\n"
        "The Attacker secures supplies.\n"
        "\n"
        "(ACTION) SECURE SUPPLIES\n"
        "Infantry unit can perform this action.\n"
        "\n"
        "PRIMARY MISSION\n"
        "Purge the Foe\n"
        "\n"
        "At the end of the battle round, score VP based on enemy units destroyed.\n"
    )


@pytest.fixture
def secondary_file_content() -> str:
    return (
        "SECONDARY MISSION\n"
        "Engage on All Fronts\n"
        "\n"
        "Score VP for having units in different table quarters.\n"
        "- 2 quarters: 2VP\n"
        "- 3 quarters: 3VP\n"
        "- 4 quarters: 4VP\n"
        "\n"
        "==========\n"
        "\n"
        "FIXED - SECONDARY MISSION\n"
        "Assassination\n"
        "\n"
        "Each time an enemy CHARACTER is destroyed, score 4VP.\n"
        "\n"
        "==========\n"
        "\n"
        "SECONDARY MISSION\n"
        "Behind Enemy Lines\n"
        "\n"
        "Score VP for having units in the enemy deployment zone.\n"
    )
