"""
Pytest fixtures for Calcflow tests.
"""

import pytest

from ..engine_core import Action, CalculatorState, Operator, initial_state, reduce
from ..session import SessionManager
from ..api import CalculatorService
from ..config import Settings


def run_actions(*actions, state=None) -> CalculatorState:
    """Fold actions over a state, starting from the initial state."""
    state = state if state is not None else initial_state()
    for action in actions:
        state = reduce(state, action)
    return state


def digits(text: str) -> list[Action]:
    """Digit (and dot) actions for a literal such as "12.5"."""
    return [Action.dot() if ch == "." else Action.digit(ch) for ch in text]


@pytest.fixture
def fresh_state() -> CalculatorState:
    """The initial calculator state."""
    return initial_state()


@pytest.fixture
def pending_addition() -> CalculatorState:
    """State after typing 5 +."""
    return run_actions(Action.digit("5"), Action.op(Operator.ADD))


@pytest.fixture
def error_state() -> CalculatorState:
    """State after 5 ÷ 0 =."""
    return run_actions(
        Action.digit("5"),
        Action.op(Operator.DIVIDE),
        Action.digit("0"),
        Action.equals(),
    )


@pytest.fixture
def reachable_states(fresh_state, pending_addition, error_state) -> list[CalculatorState]:
    """A spread of states reachable from the initial state."""
    return [
        fresh_state,
        pending_addition,
        error_state,
        run_actions(*digits("12.5")),
        run_actions(*digits("7"), Action.toggle_sign()),
        run_actions(*digits("2"), Action.op("×"), *digits("3"), Action.equals()),
        run_actions(*digits("9" * 18)),
        run_actions(*digits("50"), Action.percent()),
    ]


@pytest.fixture
def manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def service() -> CalculatorService:
    """A service with default settings, independent of the environment."""
    return CalculatorService(settings=Settings())
