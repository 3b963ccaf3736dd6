"""
Calcflow - Deterministic calculator engine

A basic arithmetic calculator whose logic is a pure state machine.
The package provides:
- The engine (initial_state, reduce)
- A host session that owns state and maps keys to actions
- An in-process service with pydantic snapshots
- A command-line front end
"""

__version__ = "0.1.0"
