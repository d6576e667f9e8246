"""
Rest recovery.

- Sleeping: level x Constituição + modifiers, restores Vitality (through
  recovery points)
- Relaxing (meditating): level x Presença + modifiers, restores PP
- Both are multiplied by the quality of the rest, then rounded down
"""

from dataclasses import dataclass
from enum import Enum
from math import floor

from caos_engine.data_models import ValidationResult


class RestQuality(str, Enum):
    """Quality of the place and conditions of a rest."""
    PRECARIOUS = "precario"
    NORMAL = "normal"
    COMFORTABLE = "confortavel"
    WEALTHY_1 = "abastado1"
    WEALTHY_2 = "abastado2"
    WEALTHY_3 = "abastado3"
    WEALTHY_4 = "abastado4"
    WEALTHY_5 = "abastado5"

    @property
    def multiplier(self) -> float:
        return REST_QUALITY_MULTIPLIERS[self]


REST_QUALITY_MULTIPLIERS: dict[RestQuality, float] = {
    RestQuality.PRECARIOUS: 0.5,
    RestQuality.NORMAL: 1.0,
    RestQuality.COMFORTABLE: 1.5,
    RestQuality.WEALTHY_1: 2.5,
    RestQuality.WEALTHY_2: 3.0,
    RestQuality.WEALTHY_3: 3.5,
    RestQuality.WEALTHY_4: 4.0,
    RestQuality.WEALTHY_5: 4.5,
}


@dataclass(frozen=True)
class RestRecovery:
    """Recovery earned by one rest."""
    vitality_recovery: int  # recovery points, spent via heal_vitality
    power_recovery: int
    sleep_base: int
    meditate_base: int
    multiplier: float


def calculate_rest_recovery(
    level: int,
    constitution: int,
    presence: int,
    quality: RestQuality = RestQuality.NORMAL,
    sleep: bool = True,
    meditate: bool = True,
    sleep_modifiers: int = 0,
    meditate_modifiers: int = 0,
) -> RestRecovery:
    """
    Recovery from a rest.

    Args:
        level: Character level
        constitution: Constituição value
        presence: Presença value
        quality: Quality of the rest
        sleep: Whether the character slept
        meditate: Whether the character relaxed/meditated
        sleep_modifiers: Flat bonus to sleep recovery
        meditate_modifiers: Flat bonus to meditation recovery
    """
    sleep_base = level * constitution + sleep_modifiers if sleep else 0
    meditate_base = level * presence + meditate_modifiers if meditate else 0
    multiplier = quality.multiplier

    return RestRecovery(
        vitality_recovery=floor(sleep_base * multiplier),
        power_recovery=floor(meditate_base * multiplier),
        sleep_base=sleep_base,
        meditate_base=meditate_base,
        multiplier=multiplier,
    )


def validate_rest_inputs(level: int, constitution: int, presence: int) -> ValidationResult:
    errors = []
    if level < 1:
        errors.append("Level must be at least 1")
    if constitution < 0:
        errors.append("Constituição cannot be negative")
    if presence < 0:
        errors.append("Presença cannot be negative")
    return ValidationResult(valid=not errors, errors=errors)
