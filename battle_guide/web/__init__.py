"""Browser front end for the battle guide"""

from .app import create_app, parse_version

__all__ = [
    "create_app",
    "parse_version",
]
