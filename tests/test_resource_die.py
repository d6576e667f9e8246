"""
Unit tests for usage dice.

Tests step functions, ResourceDieEngine and presets from
caos_engine/resources/.
"""

import pytest

from caos_engine.data_models import DieSize, ResourceDie
from caos_engine.resources import (
    DEFAULT_RESOURCE_NAMES,
    PRESET_RESOURCES,
    DepletedResourceError,
    ResourceDieEngine,
    ResourceDieError,
    create_default_resources,
    create_from_preset,
    create_resource,
    get_preset,
    step_down,
    step_up,
)


def _resource(current, min_die=DieSize.D2, max_die=DieSize.D12):
    return ResourceDie("r1", "Tocha", current, min_die=min_die, max_die=max_die)


class TestStepFunctions:
    """Tests for step_up and step_down."""

    def test_step_down_one_size(self):
        """Test that d8 steps down to d6."""
        assert step_down(DieSize.D8, DieSize.D2) == DieSize.D6

    def test_step_down_from_min_depletes(self):
        """Test that stepping below the minimum returns None."""
        assert step_down(DieSize.D2, DieSize.D2) is None
        assert step_down(DieSize.D6, DieSize.D6) is None

    def test_step_up_one_size(self):
        """Test that d6 steps up to d8."""
        assert step_up(DieSize.D6, DieSize.D12) == DieSize.D8

    def test_step_up_clamped_at_max(self):
        """Test that step_up never passes the maximum."""
        assert step_up(DieSize.D10, DieSize.D10) == DieSize.D10

    def test_step_up_from_depleted(self):
        """Test that a depleted die comes back at the minimum."""
        assert step_up(None, DieSize.D12, DieSize.D4) == DieSize.D4


class TestResolveUse:
    """Tests for ResourceDieEngine.resolve_use."""

    def test_roll_of_four_then_one(self):
        """Test d6 stepped to d4 by a 4, then depleted by a 1."""
        engine = ResourceDieEngine()
        first = engine.resolve_use(_resource(DieSize.D6), 4)
        assert first.new_die == DieSize.D4
        assert first.is_stepped_down
        assert not first.is_depleted

        second = engine.resolve_use(first.resource, 1)
        assert second.new_die is None
        assert second.is_depleted
        assert not second.is_stepped_down
        assert second.resource.is_depleted

    def test_one_depletes_from_any_size(self):
        """Test that a 1 on a full d12 depletes outright."""
        result = ResourceDieEngine().resolve_use(_resource(DieSize.D12), 1)
        assert result.is_depleted

    def test_step_below_min_depletes(self):
        """Test that a step down from the minimum depletes."""
        resource = _resource(DieSize.D4, min_die=DieSize.D4)
        result = ResourceDieEngine().resolve_use(resource, 3)
        assert result.is_depleted
        assert result.is_stepped_down

    def test_input_not_mutated(self):
        """Test that the input record keeps its die."""
        resource = _resource(DieSize.D8)
        ResourceDieEngine().resolve_use(resource, 5)
        assert resource.current_die == DieSize.D8

    def test_depleted_resource_raises(self):
        """Test that using a depleted resource is an error."""
        with pytest.raises(DepletedResourceError):
            ResourceDieEngine().resolve_use(_resource(None), 2)

    def test_depleted_error_is_resource_error(self):
        """Test the exception hierarchy."""
        assert issubclass(DepletedResourceError, ResourceDieError)

    @pytest.mark.parametrize("roll", [0, 7])
    def test_impossible_roll_raises(self, roll):
        """Test that a face the die cannot show raises ValueError."""
        with pytest.raises(ValueError):
            ResourceDieEngine().resolve_use(_resource(DieSize.D6), roll)


class TestEngineOperations:
    """Tests for rolling, stepping, resetting and reconfiguring."""

    def test_use_rolls_current_die(self, scripted):
        """Test that use() rolls the injected dice."""
        engine = ResourceDieEngine(scripted(7))
        result = engine.use(_resource(DieSize.D8))
        assert result.value == 7
        assert result.die_rolled == DieSize.D8
        assert result.new_die == DieSize.D6

    def test_use_depleted_raises(self, scripted):
        """Test that use() refuses a depleted resource without rolling."""
        dice = scripted(3)
        with pytest.raises(DepletedResourceError):
            ResourceDieEngine(dice).use(_resource(None))
        assert dice.remaining == 1

    def test_seeded_use_until_depleted(self, seeded_dice):
        """Test that repeated use always ends depleted within six uses."""
        engine = ResourceDieEngine(seeded_dice)
        resource = create_resource("Água")
        for _ in range(6):
            resource = engine.use(resource).resource
            if resource.is_depleted:
                break
        assert resource.is_depleted

    def test_step_resource_up_and_down(self):
        """Test manual stepping of a record."""
        engine = ResourceDieEngine()
        resource = _resource(DieSize.D6)
        assert engine.step_resource_up(resource).current_die == DieSize.D8
        assert engine.step_resource_down(resource).current_die == DieSize.D4
        assert engine.step_resource_down(_resource(None)).current_die is None

    def test_reset(self):
        """Test that reset refills to the maximum."""
        resource = _resource(None, max_die=DieSize.D10)
        assert ResourceDieEngine().reset(resource).current_die == DieSize.D10

    def test_reconfigure_clamps_current(self):
        """Test that the current die is clamped into the new range."""
        engine = ResourceDieEngine()
        lowered = engine.reconfigure(_resource(DieSize.D12), DieSize.D2, DieSize.D8)
        raised = engine.reconfigure(_resource(DieSize.D2), DieSize.D6, DieSize.D12)
        assert lowered.current_die == DieSize.D8
        assert raised.current_die == DieSize.D6

    def test_reconfigure_swaps_reversed_bounds(self):
        """Test that min > max is swapped, not rejected."""
        result = ResourceDieEngine().reconfigure(
            _resource(DieSize.D12), DieSize.D10, DieSize.D4
        )
        assert result.min_die == DieSize.D4
        assert result.max_die == DieSize.D10
        assert result.current_die == DieSize.D10

    def test_reconfigure_keeps_depleted(self):
        """Test that a depleted die stays depleted."""
        result = ResourceDieEngine().reconfigure(_resource(None), DieSize.D4, DieSize.D8)
        assert result.current_die is None


class TestPresets:
    """Tests for preset resources."""

    def test_create_resource_starts_full(self):
        """Test that a new resource starts at its maximum."""
        resource = create_resource("Corda", max_die=DieSize.D8, min_die=DieSize.D12)
        assert resource.min_die == DieSize.D8
        assert resource.max_die == DieSize.D12
        assert resource.current_die == DieSize.D12
        assert resource.is_custom

    def test_get_preset_case_insensitive(self):
        """Test preset lookup by name."""
        assert get_preset("tocha").max_die == DieSize.D8
        assert get_preset("Lanterna") is None

    def test_create_from_preset(self):
        """Test that preset resources are not custom."""
        resource = create_from_preset(get_preset("Pólvora"), resource_id="p1")
        assert resource.resource_id == "p1"
        assert resource.current_die == DieSize.D10
        assert not resource.is_custom

    def test_default_resources(self):
        """Test that every character starts with water and food."""
        ids = iter(["a", "b"])
        resources = create_default_resources(lambda: next(ids))
        assert [r.name for r in resources] == list(DEFAULT_RESOURCE_NAMES)
        assert [r.resource_id for r in resources] == ["a", "b"]

    def test_presets_fit_the_scale(self):
        """Test that every preset uses a die on the scale."""
        assert len(PRESET_RESOURCES) == 8
        for preset in PRESET_RESOURCES:
            assert preset.min_die.position <= preset.max_die.position
