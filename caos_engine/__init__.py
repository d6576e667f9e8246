"""
Caos Engine - rules resolution for the Tabuleiro do Caos character sheet.

Side-effect-free calculations over plain records:
- Dice-pool tests and damage rolls (resolution)
- Usage dice for consumables (resources)
- Guard/Vitality damage and healing, Power Points, rest (combat)
- XP thresholds and level-up gains (advancement)
"""

from caos_engine.advancement import LevelProgressionCalculator, LevelUpGains, LevelUpResult
from caos_engine.combat import GuardVitalityModel, effective_guard_max
from caos_engine.config import RulesConfig
from caos_engine.data_models import (
    CharacterSnapshot,
    DiceRoller,
    DieSize,
    GuardPoints,
    PowerPoints,
    ResourceDie,
    ScriptedDice,
    Track,
    VitalityPoints,
)
from caos_engine.observability import RollHistory
from caos_engine.resolution import DicePoolResolver, resolve_pool
from caos_engine.resources import DepletedResourceError, ResourceDieEngine

__version__ = "0.1.0"

__all__ = [
    "LevelProgressionCalculator",
    "LevelUpGains",
    "LevelUpResult",
    "GuardVitalityModel",
    "effective_guard_max",
    "RulesConfig",
    "CharacterSnapshot",
    "DiceRoller",
    "DieSize",
    "GuardPoints",
    "PowerPoints",
    "ResourceDie",
    "ScriptedDice",
    "Track",
    "VitalityPoints",
    "RollHistory",
    "DicePoolResolver",
    "resolve_pool",
    "DepletedResourceError",
    "ResourceDieEngine",
]
