"""
Engine Core - Deterministic calculator state machine.

The engine is a pure function over an immutable state:
1. initial_state() builds the starting value
2. reduce(state, action) returns the next value
3. Numeric helpers parse, compute and format
"""

from .state import (
    CalculatorState,
    Operator,
    ErrorKind,
    MAX_DISPLAY_LENGTH,
    ERROR_DISPLAY,
    initial_state,
    sanitize_state,
)
from .action import Action, ActionType, coerce_action
from .numeric import Computation, compute, format_number, parse_display
from .reducer import reduce, apply_actions

__all__ = [
    "CalculatorState",
    "Operator",
    "ErrorKind",
    "MAX_DISPLAY_LENGTH",
    "ERROR_DISPLAY",
    "initial_state",
    "sanitize_state",
    "Action",
    "ActionType",
    "coerce_action",
    "Computation",
    "compute",
    "format_number",
    "parse_display",
    "reduce",
    "apply_actions",
]
