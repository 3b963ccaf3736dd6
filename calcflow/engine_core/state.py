"""
Calculator State - The value the engine transitions between.

Design principles:
- Immutable: every transition returns a new state
- Serializable: converts to and from plain mappings
- Self-healing: partial or malformed input is sanitized before use
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from collections.abc import Mapping
from enum import Enum
from typing import Any

MAX_DISPLAY_LENGTH = 18
ERROR_DISPLAY = "Error"


class Operator(str, Enum):
    """Binary operators. Values are the glyphs shown on the keypad."""
    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @classmethod
    def parse(cls, token: Any) -> Operator | None:
        """Return the operator for a token, or None if unrecognised."""
        if isinstance(token, Operator):
            return token
        try:
            return cls(str(token))
        except ValueError:
            return None


class ErrorKind(str, Enum):
    """Kinds of sticky error. Only division by zero exists."""
    DIV_BY_ZERO = "DIV_BY_ZERO"

    @classmethod
    def parse(cls, token: Any) -> ErrorKind | None:
        if isinstance(token, ErrorKind):
            return token
        try:
            return cls(str(token))
        except ValueError:
            return None


@dataclass(frozen=True)
class CalculatorState:
    """
    Complete calculator state at a point in time.

    Implicit modes:
    - entering: no operator pending
    - operator-pending: accumulator and operator set
    - error: error set, only CLEAR is honoured
    """
    display: str = "0"
    accumulator: float | None = None
    operator: Operator | None = None
    awaiting_next: bool = False
    error: ErrorKind | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def has_pending_operation(self) -> bool:
        return self.accumulator is not None and self.operator is not None

    def _copy_with(self, **kwargs) -> CalculatorState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Plain-mapping form with enum members reduced to their values."""
        return {
            "display": self.display,
            "accumulator": self.accumulator,
            "operator": self.operator.value if self.operator else None,
            "awaiting_next": self.awaiting_next,
            "error": self.error.value if self.error else None,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CalculatorState:
        """
        Build a state from a possibly partial mapping.

        Missing fields take their initial values. Both `awaiting_next`
        and `awaitingNext` are accepted.
        """
        awaiting = data.get("awaiting_next", data.get("awaitingNext", False))
        return cls(
            display=_clean_display(data.get("display")),
            accumulator=_clean_number(data.get("accumulator")),
            operator=_clean_operator(data.get("operator")),
            awaiting_next=bool(awaiting),
            error=_clean_error(data.get("error")),
        )


def initial_state() -> CalculatorState:
    """Create the starting state: display "0", nothing pending."""
    return CalculatorState()


def sanitize_state(state: Any) -> CalculatorState:
    """
    Normalize whatever the caller handed in into a usable state.

    - None becomes the initial state
    - Mappings are filled in from the initial state
    - display is forced to "0" unless it is a non-empty string
    - fields of the wrong type are reset, any error stays sticky
    """
    if state is None:
        return initial_state()
    if isinstance(state, CalculatorState):
        return CalculatorState(
            display=_clean_display(state.display),
            accumulator=_clean_number(state.accumulator),
            operator=_clean_operator(state.operator),
            awaiting_next=bool(state.awaiting_next),
            error=_clean_error(state.error),
        )
    if isinstance(state, Mapping):
        return CalculatorState.from_mapping(state)
    return initial_state()


def _clean_display(value: Any) -> str:
    if isinstance(value, str) and len(value) > 0:
        return value
    return "0"


def _clean_number(value: Any) -> float | None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return float(value)
    except (OverflowError, ValueError, TypeError):
        return None


def _clean_operator(value: Any) -> Operator | None:
    if value is None:
        return None
    return Operator.parse(value)


def _clean_error(value: Any) -> ErrorKind | None:
    if not value:
        return None
    # DIV_BY_ZERO is the only kind; unknown errors must not unfreeze the state
    return ErrorKind.parse(value) or ErrorKind.DIV_BY_ZERO
