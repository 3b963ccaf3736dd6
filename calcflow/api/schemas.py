"""
Pydantic Schemas - Request/response models for hosts embedding the engine.

These models define the contract between a host (UI, CLI) and the
calculator service.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_ACTION: Raw action failed strict validation
- INTERNAL_ERROR: Anything else
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..engine_core import Action, ActionType, CalculatorState, MAX_DISPLAY_LENGTH
from ..errors import InvalidActionError


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Requests
# =============================================================================

class ActionRequest(BaseModel):
    """A raw engine action: {"type": "DIGIT", "payload": "5"}."""
    type: ActionType
    payload: Optional[str] = None

    @field_validator("payload", mode="before")
    @classmethod
    def _stringify_payload(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @classmethod
    def parse_lenient(cls, data: Any) -> Optional["ActionRequest"]:
        """Validate raw input, returning None instead of raising."""
        try:
            return cls.model_validate(data)
        except ValidationError:
            return None

    @classmethod
    def parse_strict(cls, data: Any) -> "ActionRequest":
        """Validate raw input, raising InvalidActionError on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidActionError(str(e)) from e

    def to_action(self) -> Action:
        return Action(action_type=self.type, payload=self.payload)


class KeyRequest(BaseModel):
    """A single key press, e.g. "7", "+", "Enter"."""
    key: str = Field(min_length=1)


# =============================================================================
# Responses
# =============================================================================

class StateSnapshot(BaseModel):
    """Calculator state as seen by a host."""
    session_id: Optional[str] = None
    display: str = Field(min_length=1, max_length=MAX_DISPLAY_LENGTH)
    accumulator: Optional[float] = None
    operator: Optional[str] = None
    awaiting_next: bool = False
    error: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_state(cls, state: CalculatorState, session_id: Optional[str] = None) -> "StateSnapshot":
        return cls(session_id=session_id, **state.to_dict())

    def to_state(self) -> CalculatorState:
        return CalculatorState.from_mapping(self.model_dump(exclude={"session_id"}))


class ErrorResponse(BaseModel):
    """Structured error payload."""
    error_code: ErrorCode
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
