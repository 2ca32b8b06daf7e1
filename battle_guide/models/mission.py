# ABOUTME: Pydantic models for mission cards and the catalog of missions available to a session.
# ABOUTME: Missions are read-only records; the catalog is injected into the setup phases.

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MissionType(str, Enum):
    """Kind of mission card"""
    PRIMARY = "primary"
    PRIMARY_ASYMMETRIC = "primary_asymmetric"
    SECONDARY = "secondary"
    SECONDARY_FIXED = "secondary_fixed"


MISSION_TYPE_LABELS: dict[MissionType, str] = {
    MissionType.PRIMARY: "PRIMARY MISSION",
    MissionType.PRIMARY_ASYMMETRIC: "PRIMARY MISSION - ASYMMETRIC WAR",
    MissionType.SECONDARY: "SECONDARY MISSION",
    MissionType.SECONDARY_FIXED: "FIXED - SECONDARY MISSION",
}


class MissionRecord(BaseModel):
    """
    A single mission card and its scoring rules.

    Example:
        mission = MissionRecord(
            name="Take and Hold",
            type=MissionType.PRIMARY,
            full_text="Control objective markers to score VP."
        )
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    type: MissionType
    full_text: str = Field(description="Complete rules text shown to the players")
    has_action: bool = Field(
        default=False,
        description="Whether the mission includes an (ACTION) units can perform"
    )

    @property
    def type_label(self) -> str:
        return MISSION_TYPE_LABELS[self.type]

    def display_text(self) -> str:
        """Formatted card text for the terminal"""
        return f"{self.type_label}: {self.name}\n{'═' * 50}\n\n{self.full_text}\n"


class MissionCatalog(BaseModel):
    """Missions a session can choose from during setup"""

    model_config = ConfigDict(frozen=True)

    primary_missions: tuple[MissionRecord, ...] = ()
    secondary_missions: tuple[MissionRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.primary_missions and not self.secondary_missions
