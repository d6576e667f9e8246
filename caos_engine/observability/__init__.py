"""
Observability for the Caos rules engine.

Caller-owned roll history; the engine keeps no log of its own.
"""

from caos_engine.observability.roll_history import RollHistory, HistoryEntry

__all__ = [
    "RollHistory",
    "HistoryEntry",
]
