"""
Character advancement: XP thresholds and level-up gains per track.
"""

from caos_engine.advancement.level_calculator import (
    LevelProgressionCalculator,
    LevelUpGains,
    LevelUpResult,
)
from caos_engine.advancement.progression_tables import (
    CLASS_UNLOCK_LEVEL,
    COMPETENCE_LEVELS,
    EXTENDED_MAX_LEVEL,
    GUARD_PER_LEVEL,
    POWER_OR_TALENT_LEVELS,
    POWER_PER_LEVEL,
    STANDARD_MAX_LEVEL,
    TRAIT_LEVELS,
    XP_TABLE,
    calculate_remaining_xp,
    can_level_up,
    get_xp_for_next_level,
    required_gain_types,
)

__all__ = [
    "LevelProgressionCalculator",
    "LevelUpGains",
    "LevelUpResult",
    "CLASS_UNLOCK_LEVEL",
    "COMPETENCE_LEVELS",
    "EXTENDED_MAX_LEVEL",
    "GUARD_PER_LEVEL",
    "POWER_OR_TALENT_LEVELS",
    "POWER_PER_LEVEL",
    "STANDARD_MAX_LEVEL",
    "TRAIT_LEVELS",
    "XP_TABLE",
    "calculate_remaining_xp",
    "can_level_up",
    "get_xp_for_next_level",
    "required_gain_types",
]
