"""Configuration module for the battle guide"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
