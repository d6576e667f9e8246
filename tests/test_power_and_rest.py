"""
Unit tests for Power Points and rest recovery.
"""

import pytest

from caos_engine.combat import (
    RestQuality,
    apply_power_delta,
    calculate_rest_recovery,
    can_spend_power,
    power_per_round,
    recover_power,
    spend_power,
    validate_rest_inputs,
)
from caos_engine.data_models import PowerPoints


class TestPowerPoints:
    """Tests for spending and recovering PP."""

    def test_spend_temporary_first(self):
        """Test that temporary PP is drained before current PP."""
        result = spend_power(PowerPoints(current=4, max=6, temporary=2), 3)
        assert result.temporary == 0
        assert result.current == 3

    def test_spend_floors_at_zero(self, power):
        """Test that overspending leaves 0 PP."""
        assert spend_power(power, 10).current == 0

    def test_recover_capped(self, power):
        """Test that recovery stops at max."""
        assert recover_power(power, 10).current == 6

    def test_apply_delta(self, power):
        """Test that the sign of the delta picks the operation."""
        assert apply_power_delta(power, -3).current == 1
        assert apply_power_delta(power, 1).current == 5

    def test_negative_amounts_rejected(self, power):
        """Test that negative spend or recovery raises ValueError."""
        with pytest.raises(ValueError):
            spend_power(power, -1)
        with pytest.raises(ValueError):
            recover_power(power, -1)

    def test_can_spend(self):
        """Test affordability including temporary PP."""
        power = PowerPoints(current=2, max=6, temporary=1)
        assert can_spend_power(power, 3)
        assert not can_spend_power(power, 4)

    def test_power_per_round(self):
        """Test the per-round cap of level + Essência + bonus."""
        assert power_per_round(3, 2) == 5
        assert power_per_round(3, 2, bonus=1) == 6


class TestRestRecovery:
    """Tests for rest recovery."""

    def test_normal_rest(self):
        """Test level x attribute at normal quality."""
        recovery = calculate_rest_recovery(level=3, constitution=2, presence=1)
        assert recovery.vitality_recovery == 6
        assert recovery.power_recovery == 3
        assert recovery.multiplier == 1.0

    def test_quality_multiplier_rounds_down(self):
        """Test that the multiplier applies before rounding down."""
        recovery = calculate_rest_recovery(3, 1, 1, quality=RestQuality.PRECARIOUS)
        assert recovery.vitality_recovery == 1
        comfortable = calculate_rest_recovery(3, 1, 1, quality=RestQuality.COMFORTABLE)
        assert comfortable.vitality_recovery == 4

    def test_modifiers_and_skipped_activities(self):
        """Test flat modifiers and resting without meditating."""
        recovery = calculate_rest_recovery(
            2, 2, 3, sleep_modifiers=1, meditate=False
        )
        assert recovery.sleep_base == 5
        assert recovery.power_recovery == 0

    def test_wealthy_multipliers_increase(self):
        """Test that better quality never recovers less."""
        multipliers = [q.multiplier for q in RestQuality]
        assert multipliers == sorted(multipliers)
        assert RestQuality.WEALTHY_5.multiplier == 4.5

    def test_validate_inputs(self):
        """Test rest input validation."""
        assert validate_rest_inputs(1, 0, 0)
        result = validate_rest_inputs(0, -1, 2)
        assert not result
        assert len(result.errors) == 2
