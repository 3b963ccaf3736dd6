"""
Keyboard map - translates key names into engine actions.

Covers the physical keyboard keys and the on-screen button labels.
Backspace clears everything (there is no partial delete).
"""

from __future__ import annotations

from ..engine_core.action import Action
from ..engine_core.state import Operator

OPERATOR_KEYS: dict[str, Operator] = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "x": Operator.MULTIPLY,
    "X": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
    # Keypad glyphs
    "−": Operator.SUBTRACT,
    "×": Operator.MULTIPLY,
    "÷": Operator.DIVIDE,
}

COMMAND_KEYS: dict[str, Action] = {
    ".": Action.dot(),
    "Enter": Action.equals(),
    "=": Action.equals(),
    "Backspace": Action.clear(),
    "%": Action.percent(),
    # Button labels
    "AC": Action.clear(),
    "+/−": Action.toggle_sign(),
    "+/-": Action.toggle_sign(),
}

# Multi-character keys that tokenize_keys must not split
NAMED_KEYS = frozenset(k for k in COMMAND_KEYS if len(k) > 1)


def action_for_key(key: str) -> Action | None:
    """Return the action for a key, or None if the key is not mapped."""
    if len(key) == 1 and "0" <= key <= "9":
        return Action.digit(key)
    if key in OPERATOR_KEYS:
        return Action.op(OPERATOR_KEYS[key])
    return COMMAND_KEYS.get(key)


def tokenize_keys(text: str) -> list[str]:
    """
    Split a typed key string into individual keys.

    Whitespace separates words. A word that is a named key (Enter, AC,
    +/-) stays whole, any other word is split into single characters.
    This does not evaluate anything.
    """
    keys: list[str] = []
    for word in text.split():
        if word in NAMED_KEYS:
            keys.append(word)
        else:
            keys.extend(word)
    return keys


def describe_keymap() -> list[tuple[str, str]]:
    """(key, action) pairs for help output."""
    rows = [("0-9", "DIGIT")]
    for key, operator in OPERATOR_KEYS.items():
        rows.append((key, f"OP {operator.value}"))
    for key, action in COMMAND_KEYS.items():
        rows.append((key, action.action_type.value))
    return rows
