# ABOUTME: Base classes for the phase state machine that walks players through setup and battle.
# ABOUTME: Phases are immutable values; they read and mutate the MatchState passed into them.

from abc import abstractmethod
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from battle_guide.models.guidance import ContentNode, Paragraph
from battle_guide.models.match_state import MatchState
from battle_guide.models.mission import MissionCatalog


class Phase(BaseModel):
    """
    One node of the guide's state machine.

    Each phase produces guidance for the current moment of the match and
    computes its successor. Phases needing a player decision report
    requires_input() and validate a 1-based choice in process_input(),
    returning None when the choice is invalid so the caller can re-prompt.

    Two phases are equal when they are the same kind of phase carrying the
    same parameters, which is what the snapshot store relies on.
    """

    model_config = ConfigDict(frozen=True)

    display_name: ClassVar[str] = ""

    @property
    def name(self) -> str:
        return self.display_name

    @abstractmethod
    def display_guidance(self, state: MatchState) -> str:
        """Plain-text guidance for this phase (must not mutate state)"""

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        """Structured guidance; phases without rich content wrap the plain text"""
        return [Paragraph(text=self.display_guidance(state))]

    def requires_input(self) -> bool:
        return False

    def choices(self, state: MatchState) -> list[tuple[str, str]]:
        """(value, label) options offered by an input phase"""
        return []

    def process_input(self, raw_input: str, state: MatchState) -> "Phase | None":
        return self.next_phase(state)

    @abstractmethod
    def next_phase(self, state: MatchState) -> "Phase":
        """Successor phase; may mutate state when the transition requires it"""


class SetupPhase(Phase):
    """Pre-battle phase; carries the mission catalog forward to its successors"""

    catalog: MissionCatalog = Field(default_factory=MissionCatalog)

    def _follow(self, phase_cls: type["SetupPhase"], **params) -> "SetupPhase":
        return phase_cls(catalog=self.catalog, **params)


class BattlePhase(Phase):
    """Phase that happens during a battle round"""


def parse_choice(raw_input: str, option_count: int) -> int | None:
    """
    Parse a 1-based menu selection.

    Returns:
        The selected number, or None if the input is not a number in 1..option_count
    """
    text = raw_input.strip()
    # isdigit alone accepts superscripts and other digits int() rejects
    if not (text.isascii() and text.isdigit()):
        return None
    choice = int(text)
    if 1 <= choice <= option_count:
        return choice
    return None
