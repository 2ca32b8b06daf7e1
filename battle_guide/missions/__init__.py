"""Mission repository: parses mission card files into MissionRecords"""

from .exceptions import MissionFileNotFound, MissionLoadError
from .loader import (
    load_mission_catalog,
    load_primary_missions,
    load_secondary_missions,
    parse_primary_missions,
    parse_secondary_missions,
)

__all__ = [
    "MissionLoadError",
    "MissionFileNotFound",
    "parse_primary_missions",
    "parse_secondary_missions",
    "load_primary_missions",
    "load_secondary_missions",
    "load_mission_catalog",
]
