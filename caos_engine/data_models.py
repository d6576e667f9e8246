"""
Shared data structures for the Caos rules engine.

Every record here is a plain value owned by the character sheet that holds
it. Records are frozen: the engine builds new ones with
dataclasses.replace() and never mutates what it was given.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence
import random


# =============================================================================
# ENUMS
# =============================================================================


class DieSize(str, Enum):
    """Die sizes on the resource scale, smallest to largest."""
    D2 = "d2"
    D4 = "d4"
    D6 = "d6"
    D8 = "d8"
    D10 = "d10"
    D12 = "d12"

    @property
    def sides(self) -> int:
        """Number of faces on the die."""
        return int(self.value[1:])

    @property
    def position(self) -> int:
        """Index on the scale (d2 = 0)."""
        return list(DieSize).index(self)

    @classmethod
    def from_notation(cls, notation: str) -> "DieSize":
        """Parse 'd8', 'D8' or '1d8'."""
        normalized = notation.strip().lower()
        if normalized.startswith("1d"):
            normalized = normalized[1:]
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown die size: {notation!r}") from None


# Dice that may form a skill/defense pool
POOL_DIE_SIZES: frozenset[DieSize] = frozenset(
    {DieSize.D6, DieSize.D8, DieSize.D10, DieSize.D12}
)


class ModifierCategory(str, Enum):
    """What a modifier affects. Closed set; filter on this, nothing else."""
    DICE_COUNT = "dice_count"
    GUARD_MAX = "guard_max"


class HitType(str, Enum):
    """Attack result suggested by net successes."""
    GRAZE = "graze"        # raspão
    NORMAL = "normal"
    SOLID = "solid"        # em cheio
    CRITICAL = "critical"


class ResourceDieState(str, Enum):
    """Whether a usage die can still be rolled."""
    ACTIVE = "active"
    DEPLETED = "depleted"


class CombatState(str, Enum):
    """Combat condition derived from Vitality."""
    NORMAL = "normal"
    DIRECT_WOUND = "direct_wound"      # ferimento direto
    CRITICAL_WOUND = "critical_wound"  # ferimento crítico


class Track(str, Enum):
    """Advancement tracks (archetypes). Values match stored sheets."""
    SCHOLAR = "academico"
    ACOLYTE = "acolito"
    COMBATANT = "combatente"
    SORCERER = "feiticeiro"
    ROGUE = "ladino"
    NATURAL = "natural"


class SpecialGainType(str, Enum):
    """Special reward categories granted at track milestones."""
    TRAIT = "caracteristica"
    COMPETENCE = "competencia"
    POWER_OR_TALENT = "poder_ou_talento"


# =============================================================================
# MODIFIERS
# =============================================================================


@dataclass(frozen=True)
class Modifier:
    """An additive bonus or penalty from an ability, item or condition."""
    name: str
    value: int
    category: ModifierCategory


def filter_modifiers(
    modifiers: Iterable[Modifier],
    category: ModifierCategory,
) -> list[Modifier]:
    """Modifiers of one category."""
    return [m for m in modifiers if m.category == category]


def sum_modifiers(modifiers: Iterable[Modifier], category: ModifierCategory) -> int:
    """Total value of the modifiers of one category."""
    return sum(m.value for m in filter_modifiers(modifiers, category))


# =============================================================================
# DICE AND RANDOMIZATION
# =============================================================================


DiceSource = Callable[[int], int]


class DiceRoller:
    """
    Injectable source of die faces.

    Call it with a number of sides to get a uniform face in [1, sides].
    Each instance owns its own generator; seeding one never affects another.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def __call__(self, sides: int) -> int:
        if sides < 1:
            raise ValueError(f"A die needs at least one side, got {sides}")
        return self._rng.randint(1, sides)

    def roll_many(self, count: int, sides: int) -> list[int]:
        """Roll several dice of the same size."""
        return [self(sides) for _ in range(count)]


class ScriptedDiceExhausted(Exception):
    """Raised when a ScriptedDice has no faces left."""


class ScriptedDice:
    """
    Dice source that replays a fixed sequence of faces.

    Used by tests and replays. A scripted face that cannot appear on the
    requested die is an error in the script.
    """

    def __init__(self, faces: Sequence[int]):
        self._faces = list(faces)
        self._index = 0

    def __call__(self, sides: int) -> int:
        if self._index >= len(self._faces):
            raise ScriptedDiceExhausted(
                f"Scripted dice exhausted after {len(self._faces)} rolls"
            )
        face = self._faces[self._index]
        if not 1 <= face <= sides:
            raise ValueError(
                f"Scripted face {face} cannot be rolled on a d{sides}"
            )
        self._index += 1
        return face

    @property
    def remaining(self) -> int:
        """Faces not yet consumed."""
        return len(self._faces) - self._index


@dataclass(frozen=True)
class DicePoolResult:
    """Outcome of a dice-pool test."""
    die_size: DieSize
    dice_count: int        # dice actually rolled
    requested_count: int   # dice count + modifiers, before clamping
    rolls: tuple[int, ...]
    kept: tuple[int, ...]  # faces that were classified
    successes: int
    cancellations: int
    net_successes: int
    is_penalty_roll: bool = False
    context: str = ""
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    def __str__(self) -> str:
        notation = f"{self.dice_count}{self.die_size.value}"
        if self.is_penalty_roll:
            notation += " (penalty, lowest)"
        return (
            f"{notation}: {list(self.rolls)} -> {self.net_successes} net "
            f"({self.successes} successes, {self.cancellations} cancelled)"
        )


@dataclass(frozen=True)
class DamageRollResult:
    """Outcome of a damage roll (all dice summed)."""
    dice_count: int
    sides: int
    rolls: tuple[int, ...]
    modifier: int
    total: int
    is_critical: bool = False
    context: str = ""

    @property
    def notation(self) -> str:
        sign = "+" if self.modifier >= 0 else "-"
        return f"{self.dice_count}d{self.sides}{sign}{abs(self.modifier)}"

    def __str__(self) -> str:
        return f"{self.notation}: {list(self.rolls)} = {self.total}"


# =============================================================================
# RESOURCE DICE
# =============================================================================


@dataclass(frozen=True)
class ResourceDie:
    """A usage die tracking a consumable (water, torches, arrows...)."""
    resource_id: str
    name: str
    current_die: Optional[DieSize]  # None when depleted
    min_die: DieSize = DieSize.D2
    max_die: DieSize = DieSize.D12
    is_custom: bool = False

    @property
    def is_depleted(self) -> bool:
        return self.current_die is None

    @property
    def state(self) -> ResourceDieState:
        return ResourceDieState.DEPLETED if self.is_depleted else ResourceDieState.ACTIVE


@dataclass(frozen=True)
class ResourceUseResult:
    """Outcome of rolling a usage die."""
    resource_id: str
    resource_name: str
    die_rolled: DieSize
    value: int
    new_die: Optional[DieSize]
    is_depleted: bool
    is_stepped_down: bool
    resource: ResourceDie


# =============================================================================
# COMBAT POOLS
# =============================================================================


@dataclass(frozen=True)
class GuardPoints:
    """
    Guard (GA): the regenerating first layer of protection.

    `max` is the base maximum; `max_modifiers` add to it. Temporary Guard is
    spent before current Guard and is not part of the Vitality derivation.
    """
    current: int
    max: int
    max_modifiers: tuple[Modifier, ...] = ()
    temporary: int = 0

    @property
    def nominal_max(self) -> int:
        """Base maximum plus Guard modifiers, before any Vitality penalty."""
        return self.max + sum_modifiers(self.max_modifiers, ModifierCategory.GUARD_MAX)


@dataclass(frozen=True)
class VitalityPoints:
    """Vitality (PV): the character's real health."""
    current: int
    max: int


@dataclass(frozen=True)
class PowerPoints:
    """Power Points (PP) spent on special actions."""
    current: int
    max: int
    temporary: int = 0


# =============================================================================
# CHARACTER AND ADVANCEMENT
# =============================================================================


@dataclass(frozen=True)
class SpecialGain:
    """A special reward named by the player during level-up."""
    gain_type: SpecialGainType
    name: str
    description: str = ""


@dataclass(frozen=True)
class LevelHistoryEntry:
    """One committed level-up."""
    level: int
    track: Track
    gain_type: SpecialGainType
    gain_name: Optional[str] = None


@dataclass(frozen=True)
class CharacterSnapshot:
    """
    The numeric slice of a character record the engine works on.

    A consistent snapshot goes in, a new snapshot comes out; the caller
    commits it.
    """
    character_id: str
    name: str
    level: int
    experience: int
    guard: GuardPoints
    vitality: VitalityPoints
    power: PowerPoints
    attributes: dict[str, int] = field(default_factory=dict, hash=False)
    track_levels: dict[Track, int] = field(default_factory=dict, hash=False)
    special_abilities: tuple[SpecialGain, ...] = ()
    level_history: tuple[LevelHistoryEntry, ...] = ()

    def get_attribute(self, attribute: str) -> int:
        """Attribute value, 0 if the sheet does not have it."""
        return self.attributes.get(attribute.lower(), 0)

    def get_track_level(self, track: Track) -> int:
        """Levels taken in a track, 0 if never chosen."""
        return self.track_levels.get(track, 0)


@dataclass
class ValidationResult:
    """Outcome of a precondition check, shown to the player when invalid."""
    valid: bool
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid
