# ABOUTME: Exception definitions for mission file loading errors.
# ABOUTME: Raised by the mission loader; callers degrade to an empty mission list.


class MissionLoadError(Exception):
    """Raised when a mission file cannot be read"""

    pass


class MissionFileNotFound(MissionLoadError):
    """Raised when a mission file does not exist"""

    pass
