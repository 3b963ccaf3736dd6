"""
Session Module - Host-side ownership of calculator state.
"""

from .manager import CalculatorSession, SessionManager
from .keyboard import action_for_key, tokenize_keys, describe_keymap

__all__ = [
    "CalculatorSession",
    "SessionManager",
    "action_for_key",
    "tokenize_keys",
    "describe_keymap",
]
