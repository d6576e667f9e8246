"""
Pytest fixtures for the Caos Engine test suite.

Provides reusable dice sources, combat pools and character snapshots.
"""

import pytest

from caos_engine.config import RulesConfig
from caos_engine.data_models import (
    CharacterSnapshot,
    DiceRoller,
    GuardPoints,
    PowerPoints,
    ScriptedDice,
    Track,
    VitalityPoints,
)


# =============================================================================
# DICE FIXTURES
# =============================================================================


@pytest.fixture
def seeded_dice():
    """Provide a seeded DiceRoller for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def scripted():
    """Factory for ScriptedDice replaying the given faces."""
    def _make(*faces: int) -> ScriptedDice:
        return ScriptedDice(faces)
    return _make


@pytest.fixture
def rules_config():
    """Default rule configuration."""
    return RulesConfig()


# =============================================================================
# COMBAT POOL FIXTURES
# =============================================================================


@pytest.fixture
def guard():
    """Guard at 10 of 20."""
    return GuardPoints(current=10, max=20)


@pytest.fixture
def vitality():
    """Vitality at 3 of 5."""
    return VitalityPoints(current=3, max=5)


@pytest.fixture
def full_vitality():
    """Vitality at 5 of 5."""
    return VitalityPoints(current=5, max=5)


@pytest.fixture
def power():
    """Power Points at 4 of 6."""
    return PowerPoints(current=4, max=6)


# =============================================================================
# CHARACTER FIXTURES
# =============================================================================


@pytest.fixture
def level_one_character():
    """A level 1 combatant with enough XP for level 2."""
    return CharacterSnapshot(
        character_id="char_001",
        name="Aldric",
        level=1,
        experience=60,
        guard=GuardPoints(current=15, max=15),
        vitality=VitalityPoints(current=5, max=5),
        power=PowerPoints(current=2, max=2),
        attributes={
            "agilidade": 2,
            "corpo": 2,
            "influencia": 1,
            "mente": 1,
            "essencia": 1,
            "instinto": 1,
        },
        track_levels={Track.COMBATANT: 1},
    )


@pytest.fixture
def level_four_character():
    """A level 4 scholar with 999 XP, all four levels in academico."""
    return CharacterSnapshot(
        character_id="char_002",
        name="Mirela",
        level=4,
        experience=999,
        guard=GuardPoints(current=20, max=21),
        vitality=VitalityPoints(current=7, max=7),
        power=PowerPoints(current=10, max=14),
        attributes={"essencia": 2, "mente": 3},
        track_levels={Track.SCHOLAR: 4},
    )
