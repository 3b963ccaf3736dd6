"""
Action System - The discrete user intents the engine understands.

Actions represent:
1. Entry (digits, decimal point)
2. Operations (operator, equals, percent, sign toggle)
3. Commands (clear)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass
from collections.abc import Mapping
from enum import Enum
from typing import Any


class ActionType(str, Enum):
    """Types of actions in the system."""
    # Entry
    DIGIT = "DIGIT"
    DOT = "DOT"

    # Operations
    OP = "OP"
    EQUALS = "EQUALS"
    TOGGLE_SIGN = "TOGGLE_SIGN"
    PERCENT = "PERCENT"

    # Commands
    CLEAR = "CLEAR"  # Only action honoured in the error state


@dataclass(frozen=True)
class Action:
    """
    A single action to be applied to the calculator state.

    The payload is only meaningful for DIGIT (a digit character) and
    OP (an operator glyph). Validation happens in the reducer.
    """
    action_type: ActionType
    payload: Any = None

    @classmethod
    def digit(cls, digit: str | int) -> Action:
        """Factory for digit entry."""
        return cls(action_type=ActionType.DIGIT, payload=digit)

    @classmethod
    def dot(cls) -> Action:
        return cls(action_type=ActionType.DOT)

    @classmethod
    def op(cls, operator: Any) -> Action:
        """Factory for operator selection."""
        return cls(action_type=ActionType.OP, payload=operator)

    @classmethod
    def equals(cls) -> Action:
        return cls(action_type=ActionType.EQUALS)

    @classmethod
    def clear(cls) -> Action:
        return cls(action_type=ActionType.CLEAR)

    @classmethod
    def toggle_sign(cls) -> Action:
        return cls(action_type=ActionType.TOGGLE_SIGN)

    @classmethod
    def percent(cls) -> Action:
        return cls(action_type=ActionType.PERCENT)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.action_type.value}
        if self.payload is not None:
            data["payload"] = str(self.payload.value if isinstance(self.payload, Enum) else self.payload)
        return data


def coerce_action(raw: Any) -> Action | None:
    """
    Turn an Action or a {"type", "payload"} mapping into an Action.

    Returns None for anything unrecognised.
    """
    if isinstance(raw, Action):
        return raw if isinstance(raw.action_type, ActionType) else None
    if not isinstance(raw, Mapping):
        return None

    action_type = raw.get("type")
    if isinstance(action_type, ActionType):
        return Action(action_type=action_type, payload=raw.get("payload"))
    try:
        return Action(action_type=ActionType(str(action_type)), payload=raw.get("payload"))
    except ValueError:
        return None
