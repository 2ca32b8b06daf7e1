"""Data models for the battle guide"""

from .guidance import (
    BoxVariant,
    BulletList,
    ContentNode,
    Divider,
    FormattedText,
    Header,
    InfoBox,
    KeyValue,
    MissionBlock,
    NumberedList,
    Paragraph,
    Section,
    Spacer,
    Table,
)
from .match_state import (
    MAX_BATTLE_ROUNDS,
    BattleSize,
    MatchState,
)
from .mission import (
    MISSION_TYPE_LABELS,
    MissionCatalog,
    MissionRecord,
    MissionType,
)

__all__ = [
    # Match state
    "BattleSize",
    "MatchState",
    "MAX_BATTLE_ROUNDS",
    # Missions
    "MissionType",
    "MissionRecord",
    "MissionCatalog",
    "MISSION_TYPE_LABELS",
    # Content nodes
    "BoxVariant",
    "ContentNode",
    "Header",
    "Paragraph",
    "FormattedText",
    "BulletList",
    "NumberedList",
    "KeyValue",
    "InfoBox",
    "Table",
    "MissionBlock",
    "Divider",
    "Spacer",
    "Section",
]
