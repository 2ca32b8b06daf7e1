# ABOUTME: Exception definitions for the session registry.
# ABOUTME: Unknown snapshot versions are not errors; only unknown session ids raise.


class SessionNotFound(Exception):
    """Raised when a session id has no game session in the registry"""

    pass
