"""
Usage dice for consumable resources.

Resources (water, food, torches, arrows...) are tracked by a die that
shrinks as the resource is used:
- Roll 1: the resource runs out
- Roll 2 or more: the die steps down one size
- Stepping down from the minimum die also runs the resource out

Scale: d2 -> d4 -> d6 -> d8 -> d10 -> d12
"""

from dataclasses import replace
from typing import Optional
import logging
import uuid

from caos_engine.data_models import (
    DiceRoller,
    DiceSource,
    DieSize,
    ResourceDie,
    ResourceUseResult,
)

logger = logging.getLogger(__name__)


RESOURCE_DIE_SCALE: tuple[DieSize, ...] = (
    DieSize.D2,
    DieSize.D4,
    DieSize.D6,
    DieSize.D8,
    DieSize.D10,
    DieSize.D12,
)


class ResourceDieError(Exception):
    """Base class for usage die errors."""


class DepletedResourceError(ResourceDieError):
    """Raised when a depleted resource is used; check is_depleted first."""


def _index(die: DieSize) -> int:
    return RESOURCE_DIE_SCALE.index(die)


def normalize_bounds(min_die: DieSize, max_die: DieSize) -> tuple[DieSize, DieSize]:
    """Return (min, max) in scale order, swapping them if given reversed."""
    if _index(min_die) > _index(max_die):
        logger.debug(f"Swapping reversed die bounds {min_die.value}/{max_die.value}")
        return max_die, min_die
    return min_die, max_die


def step_up(
    current: Optional[DieSize],
    max_die: DieSize,
    min_die: DieSize = DieSize.D2,
) -> DieSize:
    """
    Move a die one size up, never past max_die.

    A depleted die (None) comes back at min_die.
    """
    if current is None:
        return min_die
    if _index(current) >= _index(max_die):
        return max_die
    return RESOURCE_DIE_SCALE[_index(current) + 1]


def step_down(current: DieSize, min_die: DieSize) -> Optional[DieSize]:
    """
    Move a die one size down.

    At (or below) min_die the resource is depleted and None is returned.
    """
    if _index(current) <= _index(min_die):
        return None
    return RESOURCE_DIE_SCALE[_index(current) - 1]


def create_resource(
    name: str,
    max_die: DieSize = DieSize.D12,
    min_die: DieSize = DieSize.D2,
    resource_id: Optional[str] = None,
    is_custom: bool = True,
) -> ResourceDie:
    """Create a full resource (current die = max die)."""
    min_die, max_die = normalize_bounds(min_die, max_die)
    return ResourceDie(
        resource_id=resource_id or str(uuid.uuid4()),
        name=name,
        current_die=max_die,
        min_die=min_die,
        max_die=max_die,
        is_custom=is_custom,
    )


class ResourceDieEngine:
    """
    Applies usage-die rules to ResourceDie records.

    Only use() touches the dice source; every other method is pure.
    """

    def __init__(self, roller: Optional[DiceSource] = None):
        self._roll = roller if roller is not None else DiceRoller()

    def resolve_use(self, resource: ResourceDie, roll_value: int) -> ResourceUseResult:
        """
        Apply a usage roll to a resource.

        Args:
            resource: The resource being used
            roll_value: The face rolled on its current die

        Returns:
            ResourceUseResult with the updated resource

        Raises:
            DepletedResourceError: If the resource is already depleted
            ValueError: If roll_value cannot appear on the current die
        """
        die = resource.current_die
        if die is None:
            logger.warning(f"Attempted to use depleted resource: {resource.name}")
            raise DepletedResourceError(
                f"Resource '{resource.name}' is depleted and cannot be used"
            )
        if not 1 <= roll_value <= die.sides:
            raise ValueError(f"Roll {roll_value} is impossible on a {die.value}")

        if roll_value == 1:
            new_die = None
            stepped_down = False
        else:
            new_die = step_down(die, resource.min_die)
            stepped_down = True

        updated = replace(resource, current_die=new_die)
        if new_die is None:
            logger.info(f"{resource.name} depleted (rolled {roll_value} on {die.value})")
        else:
            logger.debug(f"{resource.name}: {die.value} -> {new_die.value}")

        return ResourceUseResult(
            resource_id=resource.resource_id,
            resource_name=resource.name,
            die_rolled=die,
            value=roll_value,
            new_die=new_die,
            is_depleted=new_die is None,
            is_stepped_down=stepped_down,
            resource=updated,
        )

    def use(self, resource: ResourceDie) -> ResourceUseResult:
        """Roll the resource's current die and apply the result."""
        if resource.current_die is None:
            logger.warning(f"Attempted to use depleted resource: {resource.name}")
            raise DepletedResourceError(
                f"Resource '{resource.name}' is depleted and cannot be used"
            )
        return self.resolve_use(resource, self._roll(resource.current_die.sides))

    def step_resource_up(self, resource: ResourceDie) -> ResourceDie:
        """Step the current die up (restocking, found supplies...)."""
        return replace(
            resource,
            current_die=step_up(resource.current_die, resource.max_die, resource.min_die),
        )

    def step_resource_down(self, resource: ResourceDie) -> ResourceDie:
        """Step the current die down without rolling. Depleted stays depleted."""
        if resource.current_die is None:
            return resource
        return replace(resource, current_die=step_down(resource.current_die, resource.min_die))

    def reset(self, resource: ResourceDie) -> ResourceDie:
        """Refill the resource to its maximum die."""
        return replace(resource, current_die=resource.max_die)

    def reconfigure(
        self,
        resource: ResourceDie,
        min_die: DieSize,
        max_die: DieSize,
    ) -> ResourceDie:
        """
        Change a resource's die range.

        Reversed bounds are swapped. The current die is clamped into the new
        range; a depleted resource stays depleted.
        """
        min_die, max_die = normalize_bounds(min_die, max_die)
        current = resource.current_die
        if current is not None:
            if _index(current) > _index(max_die):
                current = max_die
            elif _index(current) < _index(min_die):
                current = min_die
        return replace(resource, current_die=current, min_die=min_die, max_die=max_die)
