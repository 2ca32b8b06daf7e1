# ABOUTME: Renderer-agnostic content nodes that phases emit instead of raw markup.
# ABOUTME: A closed, discriminated union of immutable pydantic models forming a small tree.

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class BoxVariant(str, Enum):
    """Visual emphasis for an info box"""
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    REMINDER = "reminder"


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Header(_Node):
    """Section heading; level 1 is the most prominent"""
    kind: Literal["header"] = "header"
    text: str
    level: int = Field(default=1, ge=1, le=3)


class Paragraph(_Node):
    kind: Literal["paragraph"] = "paragraph"
    text: str


class FormattedText(_Node):
    """Text with inline **bold** and *italic* markers and blank-line paragraphs"""
    kind: Literal["formatted_text"] = "formatted_text"
    text: str


class BulletList(_Node):
    kind: Literal["bullet_list"] = "bullet_list"
    items: list[str]


class NumberedList(_Node):
    kind: Literal["numbered_list"] = "numbered_list"
    items: list[str]


class KeyValue(_Node):
    """Label/value pairs, kept in display order"""
    kind: Literal["key_value"] = "key_value"
    pairs: list[tuple[str, str]]


class InfoBox(_Node):
    kind: Literal["info_box"] = "info_box"
    title: str | None = None
    children: list["ContentNode"] = Field(default_factory=list)
    variant: BoxVariant = BoxVariant.INFO


class Table(_Node):
    kind: Literal["table"] = "table"
    headers: list[str]
    rows: list[list[str]]


class MissionBlock(_Node):
    """A mission's name, the player it belongs to, and its scoring rules"""
    kind: Literal["mission_block"] = "mission_block"
    mission_name: str
    player: str | None = None
    scoring_rules: list["ContentNode"] = Field(default_factory=list)


class Divider(_Node):
    kind: Literal["divider"] = "divider"


class Spacer(_Node):
    kind: Literal["spacer"] = "spacer"


class Section(_Node):
    kind: Literal["section"] = "section"
    title: str | None = None
    children: list["ContentNode"] = Field(default_factory=list)


ContentNode = Annotated[
    Union[
        Header,
        Paragraph,
        FormattedText,
        BulletList,
        NumberedList,
        KeyValue,
        InfoBox,
        Table,
        MissionBlock,
        Divider,
        Spacer,
        Section,
    ],
    Field(discriminator="kind"),
]

InfoBox.model_rebuild()
MissionBlock.model_rebuild()
Section.model_rebuild()
