"""
Damage rolls: every die is summed, then the modifier is added.
"""

from typing import TYPE_CHECKING, Optional
import logging

from caos_engine.data_models import DamageRollResult, DiceRoller, DiceSource

if TYPE_CHECKING:
    from caos_engine.observability.roll_history import RollHistory

logger = logging.getLogger(__name__)


def roll_damage(
    dice_count: int,
    sides: int,
    modifier: int = 0,
    critical: bool = False,
    context: str = "",
    roller: Optional[DiceSource] = None,
    history: Optional["RollHistory"] = None,
) -> DamageRollResult:
    """
    Roll damage dice.

    A critical doubles the dice, not the modifier. Damage is never negative.

    Args:
        dice_count: Number of damage dice (0 or less rolls nothing)
        sides: Faces per die
        modifier: Flat bonus or penalty to the total
        critical: Whether the attack was a critical hit
        context: Free text for display
        roller: Dice source (defaults to an unseeded DiceRoller)
        history: Optional caller-owned history to record into
    """
    if sides < 1:
        raise ValueError(f"A die needs at least one side, got {sides}")

    roll = roller if roller is not None else DiceRoller()
    count = max(0, dice_count) * (2 if critical else 1)
    rolls = tuple(roll(sides) for _ in range(count))
    total = max(0, sum(rolls) + modifier)

    result = DamageRollResult(
        dice_count=count,
        sides=sides,
        rolls=rolls,
        modifier=modifier,
        total=total,
        is_critical=critical,
        context=context,
    )
    logger.debug(f"Damage {context or 'roll'}: {result}")

    if history is not None:
        history.add(result)
    return result


def graze_damage(max_damage: int) -> int:
    """Damage of a graze: half the dice maximum, at least 1."""
    return max(1, max_damage // 2)
