"""
Tests for the host layer: keyboard map, sessions, session manager.
"""

import threading
import time

import pytest
from structlog.testing import capture_logs

from ..engine_core import Action, ActionType, Operator, initial_state
from ..config import Settings
from ..errors import SessionNotFoundError
from ..logging_config import setup_logging
from ..session import action_for_key, tokenize_keys, describe_keymap


class TestKeyboardMap:
    """Tests for key -> action mapping."""

    @pytest.mark.parametrize("key", list("0123456789"))
    def test_digits(self, key):
        assert action_for_key(key) == Action.digit(key)

    @pytest.mark.parametrize("key, operator", [
        ("+", Operator.ADD),
        ("-", Operator.SUBTRACT),
        ("*", Operator.MULTIPLY),
        ("x", Operator.MULTIPLY),
        ("X", Operator.MULTIPLY),
        ("/", Operator.DIVIDE),
        ("÷", Operator.DIVIDE),
    ])
    def test_operators(self, key, operator):
        assert action_for_key(key) == Action.op(operator)

    @pytest.mark.parametrize("key, action_type", [
        (".", ActionType.DOT),
        ("Enter", ActionType.EQUALS),
        ("=", ActionType.EQUALS),
        ("Backspace", ActionType.CLEAR),
        ("%", ActionType.PERCENT),
        ("AC", ActionType.CLEAR),
        ("+/-", ActionType.TOGGLE_SIGN),
    ])
    def test_commands(self, key, action_type):
        assert action_for_key(key).action_type is action_type

    @pytest.mark.parametrize("key", ["a", "Escape", "", "12", "^"])
    def test_unmapped(self, key):
        assert action_for_key(key) is None

    def test_tokenize_splits_characters(self):
        assert tokenize_keys("12+3=") == ["1", "2", "+", "3", "="]

    def test_tokenize_keeps_named_keys(self):
        assert tokenize_keys("7 +/- Enter AC") == ["7", "+/-", "Enter", "AC"]

    def test_keymap_description(self):
        rows = dict(describe_keymap())
        assert rows["0-9"] == "DIGIT"
        assert rows["*"] == "OP ×"
        assert rows["Backspace"] == "CLEAR"


class TestCalculatorSession:
    """Tests for a single session."""

    def test_press_sequence(self, manager):
        session = manager.create_session()
        session.press_many(tokenize_keys("2 + 3 * 4 Enter"))
        assert session.display == "20"

    def test_dispatch_raw_action(self, manager):
        session = manager.create_session()
        session.dispatch({"type": "DIGIT", "payload": "9"})
        session.dispatch(Action.toggle_sign())
        assert session.display == "-9"

    def test_unmapped_key_ignored(self, manager):
        session = manager.create_session()
        session.press("7")
        before = session.state
        session.press("q")
        assert session.state == before

    def test_backspace_clears_everything(self, manager):
        session = manager.create_session()
        session.press_many(tokenize_keys("12+3"))
        session.press("Backspace")
        assert session.state == initial_state()

    def test_error_then_clear(self, manager):
        session = manager.create_session()
        session.press_many(tokenize_keys("5/0="))
        assert session.display == "Error"
        session.press("1")
        assert session.display == "Error"
        session.press("AC")
        assert session.state == initial_state()

    def test_reset(self, manager):
        session = manager.create_session()
        session.press_many(["4", "+"])
        assert session.reset() == initial_state()

    def test_concurrent_dispatch_is_serialized(self, manager):
        """Each thread's digits all land; none are lost."""
        session = manager.create_session()
        session.press(".")

        def worker():
            for _ in range(4):
                session.press("1")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert session.display == "0." + "1" * 16


class TestTransitionLogging:
    """Tests for the structlog events emitted by dispatch."""

    @pytest.fixture(autouse=True)
    def debug_logging(self):
        setup_logging(Settings(log_level="DEBUG"))
        yield
        setup_logging(Settings())

    def test_error_state_logged_once(self, manager):
        session = manager.create_session()
        with capture_logs() as logs:
            session.press_many(tokenize_keys("5/0=1+"))

        errors = [entry for entry in logs if entry["event"] == "calculator.error_state"]
        assert len(errors) == 1
        assert errors[0]["error"] == "DIV_BY_ZERO"

    def test_concurrent_transitions_log_their_own_state(self, manager):
        """Every logged state is the one its dispatch produced."""
        session = manager.create_session()
        session.press(".")

        def worker():
            for _ in range(4):
                session.press("1")

        with capture_logs() as logs:
            threads = [threading.Thread(target=worker) for _ in range(4)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        displays = sorted(
            entry["state"]["display"] for entry in logs
            if entry["event"] == "calculator.transition"
        )
        assert displays == sorted("0." + "1" * n for n in range(1, 17))


class TestSessionManager:
    """Tests for the session registry."""

    def test_sessions_are_independent(self, manager):
        a = manager.create_session()
        b = manager.create_session()
        a.press("7")
        assert b.display == "0"
        assert a.session_id != b.session_id

    def test_get_and_end(self, manager):
        session = manager.create_session()
        assert manager.get_session(session.session_id) is session
        assert manager.end_session(session.session_id) is True
        assert manager.get_session(session.session_id) is None
        assert session.active is False
        assert manager.end_session(session.session_id) is False

    def test_require_session_raises(self, manager):
        with pytest.raises(SessionNotFoundError):
            manager.require_session("missing")

    def test_list_active(self, manager):
        ids = {manager.create_session().session_id for _ in range(3)}
        assert set(manager.list_active_sessions()) == ids

    def test_cleanup_stale_sessions(self, manager):
        stale = manager.create_session()
        fresh = manager.create_session()
        stale.last_activity = time.time() - 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == [stale.session_id]
        assert manager.list_active_sessions() == [fresh.session_id]
