"""
Progression tables: XP per level, track milestones and per-level gains.

Official table from book v0.1.7.
"""

from typing import Optional, Sequence

from caos_engine.data_models import SpecialGainType, Track


# =============================================================================
# EXPERIENCE
# =============================================================================


# XP needed to advance from each level to the next.
# Index 0 = level 0 -> 1, index 1 = level 1 -> 2, ...
XP_TABLE: tuple[int, ...] = (
    15,     # 0 -> 1
    50,     # 1 -> 2
    125,    # 2 -> 3
    250,    # 3 -> 4
    425,    # 4 -> 5
    650,    # 5 -> 6
    925,    # 6 -> 7
    1250,   # 7 -> 8
    1625,   # 8 -> 9
    2050,   # 9 -> 10
    2500,   # 10 -> 11
    3050,   # 11 -> 12
    3625,   # 12 -> 13
    4250,   # 13 -> 14
    4925,   # 14 -> 15
    5650,   # 15 -> 16
    7710,   # 16 -> 17
    8700,   # 17 -> 18
    9750,   # 18 -> 19
    10860,  # 19 -> 20
    12030,  # 20 -> 21
    13260,  # 21 -> 22
    14550,  # 22 -> 23
    15900,  # 23 -> 24
    17310,  # 24 -> 25
    18780,  # 25 -> 26
    20310,  # 26 -> 27
    21900,  # 27 -> 28
    23550,  # 28 -> 29
    25260,  # 29 -> 30
    30000,  # 30 -> 31
)

# Past the table each level costs the previous one x 1.07 (rounded down)
XP_OVERFLOW_MULTIPLIER = 1.07

STANDARD_MAX_LEVEL = 15
EXTENDED_MAX_LEVEL = 30


def get_xp_for_next_level(current_level: int, table: Optional[Sequence[int]] = None) -> int:
    """
    XP needed to advance from current_level to the next.

    Args:
        current_level: The character's level before advancing
        table: XP table to use (defaults to XP_TABLE)

    Returns:
        XP threshold for the next level
    """
    table = table if table is not None else XP_TABLE
    if current_level < 0:
        return table[0]
    if current_level < len(table):
        return table[current_level]

    xp = table[-1]
    for _ in range(current_level - (len(table) - 1)):
        xp = int(xp * XP_OVERFLOW_MULTIPLIER)
    return xp


def can_level_up(current_xp: int, current_level: int, table: Optional[Sequence[int]] = None) -> bool:
    return current_xp >= get_xp_for_next_level(current_level, table)


def calculate_remaining_xp(
    current_xp: int,
    current_level: int,
    table: Optional[Sequence[int]] = None,
) -> int:
    """XP carried over after advancing (the excess is kept)."""
    return max(0, current_xp - get_xp_for_next_level(current_level, table))


# =============================================================================
# MILESTONES (by level in the chosen track, not character level)
# =============================================================================


# Character level at which multi-track classes unlock
CLASS_UNLOCK_LEVEL = 3

# Archetype power or talent on every track level that is not a trait or
# competence level
POWER_OR_TALENT_LEVELS: frozenset[int] = frozenset({2, 3, 4, 6, 7, 8, 9, 11, 12, 13, 14})

# Competence instead of a power on multiples of 5
COMPETENCE_LEVELS: frozenset[int] = frozenset({5, 10, 15})

# Archetype traits (características)
TRAIT_LEVELS: frozenset[int] = frozenset({1, 5, 10, 15})


def required_gain_types(track_level: int) -> list[SpecialGainType]:
    """Special reward categories granted on reaching a track level."""
    required = []
    if track_level in TRAIT_LEVELS:
        required.append(SpecialGainType.TRAIT)
    if track_level in COMPETENCE_LEVELS:
        required.append(SpecialGainType.COMPETENCE)
    if track_level in POWER_OR_TALENT_LEVELS:
        required.append(SpecialGainType.POWER_OR_TALENT)
    return required


def primary_gain_type(track_level: int) -> SpecialGainType:
    """The category a track level is recorded under in the level history."""
    if track_level in TRAIT_LEVELS:
        return SpecialGainType.TRAIT
    if track_level in COMPETENCE_LEVELS:
        return SpecialGainType.COMPETENCE
    return SpecialGainType.POWER_OR_TALENT


# =============================================================================
# POOL GAINS PER TRACK LEVEL
# =============================================================================


# Guard (GA) gained per level taken in a track
GUARD_PER_LEVEL: dict[Track, int] = {
    Track.COMBATANT: 5,
    Track.ROGUE: 4,
    Track.NATURAL: 3,
    Track.ACOLYTE: 3,
    Track.SCHOLAR: 2,
    Track.SORCERER: 1,
}

# Power Points (PP) gained per level taken in a track, before Essência
POWER_PER_LEVEL: dict[Track, int] = {
    Track.SORCERER: 5,
    Track.SCHOLAR: 4,
    Track.ACOLYTE: 3,
    Track.NATURAL: 3,
    Track.ROGUE: 2,
    Track.COMBATANT: 1,
}

# Attribute added to the PP gain of every level
POWER_ATTRIBUTE = "essencia"
