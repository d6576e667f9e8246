"""Action resolution module.

Provides the dice-pool test and damage rolls.
"""

from caos_engine.resolution.dice_pool import (
    DicePoolResolver,
    FaceCounts,
    resolve_pool,
    signature_ability_bonus,
    suggest_hit_type,
)
from caos_engine.resolution.damage_roll import graze_damage, roll_damage

__all__ = [
    "DicePoolResolver",
    "FaceCounts",
    "resolve_pool",
    "signature_ability_bonus",
    "suggest_hit_type",
    "graze_damage",
    "roll_damage",
]
