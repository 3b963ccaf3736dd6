"""
API Module - In-process interface for calculator hosts.

A host:
1. Creates a session
2. Sends key presses or raw actions
3. Renders the display from the returned snapshot

All state is session-scoped. Nothing is persisted or sent over a network.
"""

from .schemas import (
    # Requests
    ActionRequest,
    KeyRequest,
    # Responses
    StateSnapshot,
    ErrorResponse,
    # Enums
    ErrorCode,
)
from .service import CalculatorService

__all__ = [
    "ActionRequest",
    "KeyRequest",
    "StateSnapshot",
    "ErrorResponse",
    "ErrorCode",
    "CalculatorService",
]
