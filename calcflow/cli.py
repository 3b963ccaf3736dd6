"""
Calcflow CLI - Command-line front end for the engine.

Usage:
    calcflow eval <keys>...        Press keys on a fresh calculator
    calcflow repl                  Interactive calculator on stdin
    calcflow keys                  Show the keyboard map

Keys are the same as on a keyboard: digits, . + - * x / % = Enter,
Backspace (clear everything), AC and +/- for the sign toggle.
"""

import argparse
import json
import sys

from .config import Settings
from .errors import CalcflowError
from .logging_config import setup_logging
from .session import SessionManager, tokenize_keys, describe_keymap
from .api.schemas import StateSnapshot

QUIT_WORDS = {"q", "quit", "exit"}


def main(argv=None):
    """Main CLI entry point. Returns the exit status."""
    parser = argparse.ArgumentParser(
        description="Calcflow - Deterministic calculator engine",
        prog="calcflow",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Eval command
    eval_parser = subparsers.add_parser("eval", help="Press keys and print the display")
    eval_parser.add_argument("keys", nargs="+", help="Keys to press, e.g. 1 + 2 =")
    eval_parser.add_argument("--json", action="store_true", help="Print the full state as JSON")
    eval_parser.add_argument("--trace", action="store_true", help="Print the display after every key")

    # Repl command
    subparsers.add_parser("repl", help="Interactive calculator")

    # Keys command
    subparsers.add_parser("keys", help="Show the keyboard map")

    args = parser.parse_args(argv)
    setup_logging(Settings.from_env())

    try:
        if args.command == "eval":
            return cmd_eval(args)
        if args.command == "repl":
            return cmd_repl(args)
        if args.command == "keys":
            return cmd_keys(args)
    except CalcflowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def cmd_eval(args):
    """Press the given keys on a fresh session."""
    manager = SessionManager()
    session = manager.create_session()

    for key in tokenize_keys(" ".join(args.keys)):
        session.press(key)
        if args.trace:
            print(f"{key:>9}  {session.display}")

    if args.json:
        snapshot = StateSnapshot.from_state(session.state)
        print(json.dumps(snapshot.model_dump(exclude={"session_id"}), ensure_ascii=False))
    elif not args.trace:
        print(session.display)

    manager.end_session(session.session_id)
    return 0


def cmd_repl(args):
    """Read keys line by line and print the display after each line."""
    manager = SessionManager()
    session = manager.create_session()

    print(session.display)
    for line in sys.stdin:
        if line.strip().lower() in QUIT_WORDS:
            break
        session.press_many(tokenize_keys(line))
        print(session.display)

    manager.end_session(session.session_id)
    return 0


def cmd_keys(args):
    """Print the keyboard map."""
    for key, action in describe_keymap():
        print(f"{key:>9}  {action}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
