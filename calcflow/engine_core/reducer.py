"""
Reducer - Applies actions to calculator state.

The reducer is the single point of state change.
All transitions must go through reduce().

Design principles:
- Pure function: (state, action) -> new_state
- Total: never raises, invalid input is an identity transition
- No logging, no clock, no randomness
"""

from __future__ import annotations
import re
from typing import Any, Callable

from .state import (
    CalculatorState, Operator, MAX_DISPLAY_LENGTH, ERROR_DISPLAY,
    initial_state, sanitize_state,
)
from .action import Action, ActionType, coerce_action
from .numeric import parse_display, format_number, compute

_DIGIT_PATTERN = re.compile(r"[0-9]")

Handler = Callable[[CalculatorState, Any], CalculatorState]


def reduce(state: Any, action: Any) -> CalculatorState:
    """
    Apply a single calculator action and return the next state.

    Args:
        state: a CalculatorState, a partial mapping, or None
        action: an Action or a {"type": ..., "payload": ...} mapping

    Returns:
        The next state. Unknown or malformed actions return the
        sanitized input state.
    """
    safe = sanitize_state(state)
    parsed = coerce_action(action)
    if parsed is None:
        return safe

    # Only CLEAR leaves the error state
    if safe.error and parsed.action_type != ActionType.CLEAR:
        return safe

    handler = _HANDLERS.get(parsed.action_type)
    if handler is None:
        return safe
    return handler(safe, parsed.payload)


def _clear(state: CalculatorState, payload: Any) -> CalculatorState:
    return initial_state()


def _input_digit(state: CalculatorState, payload: Any) -> CalculatorState:
    """Append a digit, or start a fresh entry after an operator or equals."""
    if payload is None:
        return state
    digit = str(payload)
    if not _DIGIT_PATTERN.fullmatch(digit):
        return state

    if state.awaiting_next:
        return state._copy_with(display=digit, awaiting_next=False)
    if state.display == "0":
        return state._copy_with(display=digit)
    if len(state.display) >= MAX_DISPLAY_LENGTH:
        return state
    return state._copy_with(display=state.display + digit)


def _input_dot(state: CalculatorState, payload: Any) -> CalculatorState:
    if state.awaiting_next:
        return state._copy_with(display="0.", awaiting_next=False)
    if "." in state.display:
        return state
    if len(state.display) >= MAX_DISPLAY_LENGTH:
        return state
    return state._copy_with(display=state.display + ".")


def _toggle_sign(state: CalculatorState, payload: Any) -> CalculatorState:
    # "Error" here is the display-only overflow marker, not a number
    if state.display in ("0", ERROR_DISPLAY):
        return state
    if state.display.startswith("-"):
        return state._copy_with(display=state.display[1:])
    if len(state.display) + 1 > MAX_DISPLAY_LENGTH:
        return state
    return state._copy_with(display="-" + state.display)


def _percent(state: CalculatorState, payload: Any) -> CalculatorState:
    current = parse_display(state.display)
    return state._copy_with(display=format_number(current / 100))


def _input_operator(state: CalculatorState, payload: Any) -> CalculatorState:
    """
    Select an operator, chaining any pending operation left to right.

    - Pressed again before a new operand: only the operator changes
    - Pending operation plus new operand: fold into the accumulator
    - Otherwise: the display becomes the accumulator
    """
    operator = Operator.parse(payload)
    if operator is None:
        return state

    current = parse_display(state.display)

    if state.awaiting_next and state.accumulator is not None:
        return state._copy_with(operator=operator)

    if state.accumulator is not None and state.operator:
        computed = compute(state.accumulator, current, state.operator)
        if computed.error:
            # accumulator and operator are kept here, unlike _equals
            return state._copy_with(error=computed.error, display=ERROR_DISPLAY)
        return state._copy_with(
            accumulator=computed.value,
            operator=operator,
            display=format_number(computed.value),
            awaiting_next=True,
        )

    return state._copy_with(
        accumulator=current,
        operator=operator,
        awaiting_next=True,
    )


def _equals(state: CalculatorState, payload: Any) -> CalculatorState:
    """Finalize the pending operation."""
    if state.accumulator is None or not state.operator:
        return state

    current = parse_display(state.display)
    computed = compute(state.accumulator, current, state.operator)

    if computed.error:
        return state._copy_with(
            error=computed.error,
            display=ERROR_DISPLAY,
            accumulator=None,
            operator=None,
            awaiting_next=False,
        )

    return state._copy_with(
        display=format_number(computed.value),
        accumulator=None,
        operator=None,
        awaiting_next=True,
    )


_HANDLERS: dict[ActionType, Handler] = {
    ActionType.DIGIT: _input_digit,
    ActionType.DOT: _input_dot,
    ActionType.OP: _input_operator,
    ActionType.EQUALS: _equals,
    ActionType.CLEAR: _clear,
    ActionType.TOGGLE_SIGN: _toggle_sign,
    ActionType.PERCENT: _percent,
}


def apply_actions(state: Any, actions: list[Action]) -> CalculatorState:
    """
    Convenience function to fold a sequence of actions.

    Starts from the given state (None for the initial state).
    """
    result = sanitize_state(state)
    for action in actions:
        result = reduce(result, action)
    return result
