"""
Exception types raised by the layers around the engine.

The engine itself never raises.
"""


class CalcflowError(Exception):
    """Base class for calcflow errors."""
    pass


class SessionNotFoundError(CalcflowError):
    """Raised when a session id is unknown or the session has ended."""

    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class InvalidActionError(CalcflowError):
    """Raised when strict validation of a raw action fails."""
    pass
