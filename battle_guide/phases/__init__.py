"""Phase state machine for guiding a battle from muster to the final tally"""

from battle_guide.models.mission import MissionCatalog

from .base import BattlePhase, Phase, SetupPhase, parse_choice
from .battle_phases import (
    ChargePhase,
    CommandPhase,
    EndGamePhase,
    EndOfRoundPhase,
    EndOfTurnPhase,
    FightPhase,
    MovementPhase,
    ShootingPhase,
    VPScoringPhase,
)
from .setup_phases import (
    CreateBattlefield,
    DeclareBattleFormations,
    DeployArmies,
    DetermineAttacker,
    DetermineFirstTurn,
    MissionDetails,
    MissionSlot,
    MusterArmies,
    PreBattleRules,
    SelectAttackerSecondary,
    SelectDefenderSecondary,
    SelectPrimaryMission,
)


def entry_phase(catalog: MissionCatalog | None = None) -> Phase:
    """First phase of a new match, with the missions the session may pick from"""
    return MusterArmies(catalog=catalog or MissionCatalog())


__all__ = [
    # Base
    "Phase",
    "SetupPhase",
    "BattlePhase",
    "parse_choice",
    "entry_phase",
    # Setup
    "MusterArmies",
    "SelectPrimaryMission",
    "MissionDetails",
    "MissionSlot",
    "CreateBattlefield",
    "DetermineAttacker",
    "SelectAttackerSecondary",
    "SelectDefenderSecondary",
    "DeclareBattleFormations",
    "DeployArmies",
    "PreBattleRules",
    "DetermineFirstTurn",
    # Battle
    "CommandPhase",
    "VPScoringPhase",
    "MovementPhase",
    "ShootingPhase",
    "ChargePhase",
    "FightPhase",
    "EndOfTurnPhase",
    "EndOfRoundPhase",
    "EndGamePhase",
]
