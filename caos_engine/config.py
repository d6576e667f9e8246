"""
Rule constants for the Caos rules engine.

Every tunable number the engine uses lives on RulesConfig so callers can
run house rules without patching module constants.
"""

from dataclasses import dataclass, fields
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULTS (book v0.1.7)
# =============================================================================

MAX_POOL_DICE = 8
PENALTY_DICE = 2
VITALITY_CRITICAL_THRESHOLD = 1
PV_RECOVERY_COST = 5
HISTORY_SIZE = 50


@dataclass
class RulesConfig:
    """Configuration for rule resolution."""

    # Dice pool
    max_pool_dice: int = MAX_POOL_DICE
    penalty_dice: int = PENALTY_DICE
    success_threshold: Optional[int] = None  # None = top face of the die

    # Guard / Vitality
    vitality_critical_threshold: int = VITALITY_CRITICAL_THRESHOLD
    recovery_cost: int = PV_RECOVERY_COST

    # Roll history kept by the caller
    history_size: int = HISTORY_SIZE

    def __post_init__(self):
        if self.max_pool_dice < 1:
            raise ValueError(f"max_pool_dice must be >= 1, got {self.max_pool_dice}")
        if self.penalty_dice < 1:
            raise ValueError(f"penalty_dice must be >= 1, got {self.penalty_dice}")
        if self.success_threshold is not None and self.success_threshold < 2:
            # A threshold of 1 would make every cancellation a success too
            raise ValueError(
                f"success_threshold must be >= 2, got {self.success_threshold}"
            )
        if self.recovery_cost < 1:
            raise ValueError(f"recovery_cost must be >= 1, got {self.recovery_cost}")
        if self.history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {self.history_size}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RulesConfig":
        """Create from a plain mapping, ignoring keys that are not settings."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown rule settings: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


