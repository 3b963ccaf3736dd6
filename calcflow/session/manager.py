"""
Session Manager - Owns calculator state on behalf of a host.

The engine holds no state; a session is the host-side owner:
1. Keeps the current CalculatorState
2. Feeds actions (or keys) through reduce()
3. Replaces its state with the result
4. Logs each transition

PERSISTENCE RULES:
- In-memory only
- Ending a session discards its state
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable
import threading
import time
import uuid

import structlog

from ..engine_core import CalculatorState, initial_state, reduce
from ..engine_core.action import coerce_action
from ..errors import SessionNotFoundError
from .keyboard import action_for_key

logger = structlog.get_logger(__name__)


@dataclass
class CalculatorSession:
    """
    A single calculator instance.

    dispatch() is serialized per session, so one session may be shared
    between threads. Separate sessions never share anything.
    """
    session_id: str
    created_at: float
    state: CalculatorState = field(default_factory=initial_state)
    last_activity: float = 0.0
    active: bool = True
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def display(self) -> str:
        return self.state.display

    def dispatch(self, action: Any) -> CalculatorState:
        """Apply one action and return the new state."""
        with self._lock:
            previous = self.state
            new_state = reduce(previous, action)
            self.state = new_state
            self.last_activity = time.time()

        # Log the states captured under the lock
        parsed = coerce_action(action)
        logger.debug(
            "calculator.transition",
            session_id=self.session_id,
            action=parsed.to_dict() if parsed else None,
            state=new_state.to_dict(),
        )
        if new_state.error and not previous.error:
            logger.info(
                "calculator.error_state",
                session_id=self.session_id,
                error=new_state.error.value,
            )
        return new_state

    def press(self, key: str) -> CalculatorState:
        """Apply the action mapped to a key. Unmapped keys are ignored."""
        action = action_for_key(key)
        if action is None:
            logger.debug("calculator.unmapped_key", session_id=self.session_id, key=key)
            return self.state
        return self.dispatch(action)

    def press_many(self, keys: Iterable[str]) -> CalculatorState:
        for key in keys:
            self.press(key)
        return self.state

    def reset(self) -> CalculatorState:
        with self._lock:
            self.state = initial_state()
            self.last_activity = time.time()
        return self.state


class SessionManager:
    """
    Manages calculator sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, CalculatorSession] = {}
        self._lock = threading.Lock()

    def create_session(self) -> CalculatorSession:
        """Create a new session holding the initial state."""
        now = time.time()
        session = CalculatorSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            last_activity=now,
        )
        with self._lock:
            self._sessions[session.session_id] = session
        logger.debug("session.created", session_id=session.session_id)
        return session

    def get_session(self, session_id: str) -> CalculatorSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> CalculatorSession:
        """Get a session by ID or raise SessionNotFoundError."""
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def end_session(self, session_id: str) -> bool:
        """
        End a session and discard its state.

        Returns False if the session did not exist.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.active = False
        session.state = initial_state()
        logger.debug("session.ended", session_id=session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [sid for sid, session in self._sessions.items() if session.active]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        End sessions idle for longer than max_age_seconds.

        Returns the IDs that were removed.
        """
        current_time = time.time()
        stale = [
            sid for sid, session in list(self._sessions.items())
            if current_time - session.last_activity > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        if stale:
            logger.info("session.cleanup", removed=len(stale))
        return stale
