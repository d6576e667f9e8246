"""
Roll history for display and player review.

The history is owned by whoever creates it (usually one play session) and
passed explicitly to the resolvers that should record into it. Nothing in
the engine reads it back, so it cannot influence a result.
"""

from collections import deque
from typing import Any, Optional, Union
import logging

from caos_engine.config import HISTORY_SIZE, RulesConfig
from caos_engine.data_models import DamageRollResult, DicePoolResult

logger = logging.getLogger(__name__)

HistoryEntry = Union[DicePoolResult, DamageRollResult]


class RollHistory:
    """
    Append-only, newest-first list of roll results.

    Bounded: once `max_size` entries are held, each new roll drops the oldest.
    """

    def __init__(self, max_size: int = HISTORY_SIZE):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self._entries: deque[HistoryEntry] = deque(maxlen=max_size)

    @classmethod
    def from_config(cls, config: Optional[RulesConfig] = None) -> "RollHistory":
        """History bounded by the config's history_size."""
        config = config or RulesConfig()
        return cls(max_size=config.history_size)

    @property
    def max_size(self) -> int:
        return self._entries.maxlen or 0

    def add(self, result: HistoryEntry) -> None:
        """Record a roll at the front of the history."""
        if len(self._entries) == self._entries.maxlen:
            logger.debug("Roll history full; dropping oldest entry")
        self._entries.appendleft(result)

    def get_all(self) -> list[HistoryEntry]:
        """All entries, newest first."""
        return list(self._entries)

    def get_last(self, count: int) -> list[HistoryEntry]:
        """The `count` most recent entries, newest first."""
        if count <= 0:
            return []
        return list(self._entries)[:count]

    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[0] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> list[dict[str, Any]]:
        """Plain representation for the storage collaborator."""
        return [_entry_to_dict(entry) for entry in self._entries]


def _entry_to_dict(entry: HistoryEntry) -> dict[str, Any]:
    if isinstance(entry, DicePoolResult):
        return {
            "kind": "pool",
            "die_size": entry.die_size.value,
            "dice_count": entry.dice_count,
            "rolls": list(entry.rolls),
            "kept": list(entry.kept),
            "successes": entry.successes,
            "cancellations": entry.cancellations,
            "net_successes": entry.net_successes,
            "is_penalty_roll": entry.is_penalty_roll,
            "context": entry.context,
            "timestamp": entry.timestamp.isoformat(),
        }
    return {
        "kind": "damage",
        "notation": entry.notation,
        "rolls": list(entry.rolls),
        "modifier": entry.modifier,
        "total": entry.total,
        "is_critical": entry.is_critical,
        "context": entry.context,
    }
