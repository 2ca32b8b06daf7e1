"""Terminal driver for the battle guide"""

from .guide_cli import (
    CLIFormatter,
    GuideCommandLineInterface,
    GuideCommandParser,
    GuideCommandType,
    ParsedCommand,
)

__all__ = [
    "CLIFormatter",
    "GuideCommandLineInterface",
    "GuideCommandParser",
    "GuideCommandType",
    "ParsedCommand",
]
