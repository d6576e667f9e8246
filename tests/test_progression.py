"""
Unit tests for the progression tables.
"""

import pytest

from caos_engine.advancement import (
    COMPETENCE_LEVELS,
    GUARD_PER_LEVEL,
    POWER_OR_TALENT_LEVELS,
    POWER_PER_LEVEL,
    TRAIT_LEVELS,
    XP_TABLE,
    calculate_remaining_xp,
    can_level_up,
    get_xp_for_next_level,
    required_gain_types,
)
from caos_engine.data_models import SpecialGainType, Track


class TestXPTable:
    """Tests for XP thresholds."""

    def test_table_is_increasing(self):
        """Test that each level costs more than the last."""
        assert all(a < b for a, b in zip(XP_TABLE, XP_TABLE[1:]))

    def test_lookup(self):
        """Test thresholds read from the table."""
        assert get_xp_for_next_level(0) == 15
        assert get_xp_for_next_level(1) == 50
        assert get_xp_for_next_level(30) == 30000

    def test_negative_level_uses_first_entry(self):
        """Test that a level below 0 reads the first threshold."""
        assert get_xp_for_next_level(-1) == 15

    def test_beyond_table(self):
        """Test that past the table each level costs 7% more."""
        assert get_xp_for_next_level(31) == 32100
        assert get_xp_for_next_level(32) == 34347

    def test_custom_table(self):
        """Test lookups against an injected table."""
        table = [10, 100, 400, 700, 1000]
        assert get_xp_for_next_level(4, table) == 1000
        assert not can_level_up(999, 4, table)
        assert can_level_up(1000, 4, table)

    def test_remaining_xp(self):
        """Test that the excess is carried over."""
        assert calculate_remaining_xp(60, 1) == 10
        assert calculate_remaining_xp(40, 1) == 0


class TestMilestones:
    """Tests for special reward levels."""

    def test_every_track_level_grants_something(self):
        """Test that track levels 1-15 all grant at least one reward."""
        for level in range(1, 16):
            assert required_gain_types(level)

    def test_competence_levels_also_grant_trait(self):
        """Test that levels 5, 10 and 15 grant a trait and a competence."""
        for level in COMPETENCE_LEVELS:
            assert required_gain_types(level) == [
                SpecialGainType.TRAIT,
                SpecialGainType.COMPETENCE,
            ]

    def test_power_levels_exclude_trait_levels(self):
        """Test that power and trait levels never overlap."""
        assert not POWER_OR_TALENT_LEVELS & TRAIT_LEVELS

    @pytest.mark.parametrize("level", [1, 16])
    def test_levels_without_power(self, level):
        """Test levels that grant no power or talent."""
        assert SpecialGainType.POWER_OR_TALENT not in required_gain_types(level)


class TestTrackGains:
    """Tests for per-track pool gains."""

    def test_every_track_has_gains(self):
        """Test that all tracks appear in both tables."""
        assert set(GUARD_PER_LEVEL) == set(Track)
        assert set(POWER_PER_LEVEL) == set(Track)

    def test_combatant_and_sorcerer(self):
        """Test the two extremes of the tables."""
        assert GUARD_PER_LEVEL[Track.COMBATANT] == 5
        assert POWER_PER_LEVEL[Track.COMBATANT] == 1
        assert GUARD_PER_LEVEL[Track.SORCERER] == 1
        assert POWER_PER_LEVEL[Track.SORCERER] == 5
