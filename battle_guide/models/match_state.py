# ABOUTME: Pydantic model for the minimal match record shared by every phase of a battle.
# ABOUTME: Tracks battle size, round counter, player roles and the selected missions.

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from battle_guide.models.mission import MissionRecord

MAX_BATTLE_ROUNDS = 5


# Points, battlefield dimensions, nominal duration, display label
_BATTLE_SIZE_PROFILES: dict[str, tuple[int, str, str, str]] = {
    "incursion": (1000, '44" x 60"', "~2 hours", "Incursion"),
    "strike_force": (2000, '44" x 60"', "~3 hours", "Strike Force"),
    "onslaught": (3000, '44" x 90"', "~4 hours", "Onslaught"),
}


class BattleSize(str, Enum):
    """Battle size options with their point limits and battlefield dimensions"""
    INCURSION = "incursion"
    STRIKE_FORCE = "strike_force"
    ONSLAUGHT = "onslaught"

    @property
    def points(self) -> int:
        return _BATTLE_SIZE_PROFILES[self.value][0]

    @property
    def battlefield(self) -> str:
        return _BATTLE_SIZE_PROFILES[self.value][1]

    @property
    def duration(self) -> str:
        return _BATTLE_SIZE_PROFILES[self.value][2]

    @property
    def label(self) -> str:
        return _BATTLE_SIZE_PROFILES[self.value][3]

    @classmethod
    def from_choice(cls, choice: int) -> "BattleSize | None":
        """Map a 1-based menu choice onto a battle size (None when out of range)"""
        members = list(cls)
        if 1 <= choice <= len(members):
            return members[choice - 1]
        return None


class MatchState(BaseModel):
    """
    Bookkeeping for one match.

    Victory points and command points are tracked by the players themselves;
    this record only knows whose turn it is and what was chosen during setup.

    A round of 0 means setup is still in progress. Rounds 1-5 are the battle,
    and anything past MAX_BATTLE_ROUNDS means the game is over.
    """

    model_config = ConfigDict(validate_assignment=True)

    battle_size: BattleSize = Field(default=BattleSize.STRIKE_FORCE)
    current_round: int = Field(default=0, ge=0)
    active_player_number: int = Field(default=1, ge=1, le=2)
    first_player_number: int = Field(
        default=1,
        ge=1,
        le=2,
        description="Player who takes the first turn of every round"
    )
    attacker_player_number: int = Field(default=1, ge=1, le=2)

    primary_mission: MissionRecord | None = None
    attacker_secondary_mission: MissionRecord | None = None
    defender_secondary_mission: MissionRecord | None = None

    @property
    def defender_player_number(self) -> int:
        return 2 if self.attacker_player_number == 1 else 1

    @property
    def is_attacker_turn(self) -> bool:
        return self.active_player_number == self.attacker_player_number

    @property
    def battle_started(self) -> bool:
        return self.current_round > 0

    def current_turn_display(self) -> str:
        """Label for the turn in progress, e.g. 'BATTLE ROUND 2 - PLAYER 1 (ATTACKER) TURN'"""
        role = "ATTACKER" if self.is_attacker_turn else "DEFENDER"
        return f"BATTLE ROUND {self.current_round} - PLAYER {self.active_player_number} ({role}) TURN"

    def advance_to_next_turn(self) -> bool:
        """
        Hand the turn to the other player, rolling the round over when needed.

        The first player finishing hands over to the second player. The second
        player finishing starts a new round with the first player active again.

        Returns:
            True if a new round started, False if only the active player changed
        """
        if self.active_player_number == self.first_player_number:
            self.active_player_number = 2 if self.first_player_number == 1 else 1
            return False

        self.current_round += 1
        self.active_player_number = self.first_player_number
        return True

    def start_battle(self) -> None:
        """Begin round 1 with the first player active (end of setup)"""
        self.current_round = 1
        self.active_player_number = self.first_player_number

    def is_game_over(self) -> bool:
        return self.current_round > MAX_BATTLE_ROUNDS
