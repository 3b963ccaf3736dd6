"""
Calculator Service - In-process facade between a host and the engine.

The service:
1. Manages sessions
2. Translates raw requests into engine actions
3. Returns pydantic snapshots

This layer is framework-agnostic and does no I/O.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

import structlog

from .schemas import ActionRequest, KeyRequest, StateSnapshot, ErrorCode, ErrorResponse
from ..config import Settings
from ..errors import CalcflowError, SessionNotFoundError, InvalidActionError
from ..session import SessionManager

logger = structlog.get_logger(__name__)


@dataclass
class CalculatorService:
    """
    Main service for calculator hosts.

    Usage:
        service = CalculatorService()
        snapshot = service.create_session()
        service.press_key(snapshot.session_id, KeyRequest(key="7"))
        service.apply_action(snapshot.session_id, {"type": "OP", "payload": "+"})
    """
    settings: Settings = field(default_factory=Settings.from_env)
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self) -> StateSnapshot:
        """Start a new calculator session."""
        self.session_manager.cleanup_stale_sessions(self.settings.session_ttl)
        session = self.session_manager.create_session()
        return StateSnapshot.from_state(session.state, session.session_id)

    def get_state(self, session_id: str) -> StateSnapshot:
        session = self.session_manager.require_session(session_id)
        return StateSnapshot.from_state(session.state, session_id)

    def apply_action(
        self,
        session_id: str,
        request: ActionRequest | dict[str, Any],
        strict: bool = False,
    ) -> StateSnapshot:
        """
        Apply a raw action to a session.

        Requests that fail validation leave the state unchanged, or
        raise InvalidActionError when strict is set.
        """
        session = self.session_manager.require_session(session_id)
        if not isinstance(request, ActionRequest):
            if strict:
                request = ActionRequest.parse_strict(request)
            else:
                request = ActionRequest.parse_lenient(request)
        if request is None:
            logger.debug("calculator.action_ignored", session_id=session_id)
            return StateSnapshot.from_state(session.state, session_id)
        state = session.dispatch(request.to_action())
        return StateSnapshot.from_state(state, session_id)

    def press_key(self, session_id: str, request: KeyRequest) -> StateSnapshot:
        session = self.session_manager.require_session(session_id)
        state = session.press(request.key)
        return StateSnapshot.from_state(state, session_id)

    def end_session(self, session_id: str) -> None:
        if not self.session_manager.end_session(session_id):
            raise SessionNotFoundError(session_id)

    @staticmethod
    def error_response(error: CalcflowError) -> ErrorResponse:
        """Map an exception from this layer to a structured error."""
        if isinstance(error, SessionNotFoundError):
            return ErrorResponse(
                error_code=ErrorCode.SESSION_NOT_FOUND,
                message=str(error),
                details={"session_id": error.session_id},
            )
        if isinstance(error, InvalidActionError):
            return ErrorResponse(error_code=ErrorCode.INVALID_ACTION, message=str(error))
        return ErrorResponse(error_code=ErrorCode.INTERNAL_ERROR, message=str(error))
