# ABOUTME: Parses primary and secondary mission cards out of plain-text mission files.
# ABOUTME: Builds the MissionCatalog a session picks from, degrading to empty lists on failure.

import re
from pathlib import Path

from loguru import logger

from battle_guide.config.settings import Settings
from battle_guide.missions.exceptions import MissionFileNotFound, MissionLoadError
from battle_guide.models.mission import MissionCatalog, MissionRecord, MissionType

# Split before each primary header line, keeping the header with its section
PRIMARY_HEADER_PATTERN = re.compile(
    r"(?=^[ \t]*PRIMARY MISSION(?:\s*-\s*ASYMMETRIC WAR)?[ \t]*$)",
    re.IGNORECASE | re.MULTILINE,
)
SECONDARY_SEPARATOR_PATTERN = re.compile(r"={10,}")

ACTION_MARKER = "(ACTION)"


def _clean_lines(section: str) -> list[str]:
    return [line.strip() for line in section.splitlines() if line.strip()]


def parse_primary_missions(content: str) -> list[MissionRecord]:
    """
    Parse primary missions from mission file text.

    Each card starts with a "PRIMARY MISSION" or "PRIMARY MISSION - ASYMMETRIC WAR"
    header line (any case), followed by the mission name and its rules text.

    Args:
        content: Raw file contents

    Returns:
        Missions in file order (empty for empty content)
    """
    missions = []

    for section in PRIMARY_HEADER_PATTERN.split(content):
        lines = _clean_lines(section)
        if not lines:
            continue

        header = lines[0].upper()
        name_index = 1 if header.startswith("PRIMARY MISSION") else 0
        if name_index >= len(lines):
            continue

        mission_type = (
            MissionType.PRIMARY_ASYMMETRIC if "ASYMMETRIC WAR" in header else MissionType.PRIMARY
        )
        missions.append(
            MissionRecord(
                name=lines[name_index],
                type=mission_type,
                full_text="\n".join(lines[name_index + 1:]),
                has_action=ACTION_MARKER in section.upper(),
            )
        )

    return missions


def parse_secondary_missions(content: str) -> list[MissionRecord]:
    """
    Parse secondary missions from mission file text.

    Cards are separated by lines of '=' characters. Each card starts with a
    "SECONDARY MISSION" or "FIXED - SECONDARY MISSION" header; sections without
    such a header are skipped.
    """
    missions = []

    for section in SECONDARY_SEPARATOR_PATTERN.split(content):
        lines = _clean_lines(section)
        if len(lines) < 2:
            continue

        header = lines[0].upper()
        if "SECONDARY MISSION" not in header:
            continue

        mission_type = MissionType.SECONDARY_FIXED if header.startswith("FIXED") else MissionType.SECONDARY
        missions.append(
            MissionRecord(
                name=lines[1],
                type=mission_type,
                full_text="\n".join(lines[2:]),
                has_action=ACTION_MARKER in section.upper(),
            )
        )

    return missions


def _read_mission_file(path: str | Path) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise MissionFileNotFound(f"Mission file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise MissionLoadError(f"Could not read mission file {path}: {e}") from e


def load_primary_missions(path: str | Path) -> list[MissionRecord]:
    """
    Load primary missions from a file.

    Raises:
        MissionFileNotFound: If the file does not exist
        MissionLoadError: If the file cannot be read
    """
    return parse_primary_missions(_read_mission_file(path))


def load_secondary_missions(path: str | Path) -> list[MissionRecord]:
    """
    Load secondary missions from a file.

    Raises:
        MissionFileNotFound: If the file does not exist
        MissionLoadError: If the file cannot be read
    """
    return parse_secondary_missions(_read_mission_file(path))


def load_mission_catalog(settings: Settings) -> MissionCatalog:
    """
    Load both mission files into a catalog.

    A file that cannot be loaded is logged and leaves that list empty, so the
    guide still starts; mission selection phases then report no missions.
    """
    primary: list[MissionRecord] = []
    secondary: list[MissionRecord] = []

    try:
        primary = load_primary_missions(settings.primary_missions_path)
        logger.info(f"Loaded {len(primary)} primary missions from {settings.primary_missions_path}")
    except MissionLoadError as e:
        logger.warning(f"Could not load primary missions: {e}")

    try:
        secondary = load_secondary_missions(settings.secondary_missions_path)
        logger.info(f"Loaded {len(secondary)} secondary missions from {settings.secondary_missions_path}")
    except MissionLoadError as e:
        logger.warning(f"Could not load secondary missions: {e}")

    return MissionCatalog(primary_missions=tuple(primary), secondary_missions=tuple(secondary))
