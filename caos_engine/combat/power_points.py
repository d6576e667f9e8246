"""
Power Points (PP): spending and recovery.

Spending drains temporary PP first, then current PP; recovery raises current
PP only and never past the maximum.
"""

from dataclasses import replace
import logging

from caos_engine.data_models import PowerPoints

logger = logging.getLogger(__name__)


def spend_power(power: PowerPoints, amount: int) -> PowerPoints:
    """
    Spend PP, temporary first.

    Spending more than is available leaves both at 0; whether the action
    was affordable is the caller's check (see can_spend_power).
    """
    if amount < 0:
        raise ValueError(f"Cannot spend a negative amount of PP: {amount}")
    if amount == 0:
        return power

    from_temporary = min(power.temporary, amount)
    remaining = amount - from_temporary
    return replace(
        power,
        temporary=power.temporary - from_temporary,
        current=max(0, power.current - remaining),
    )


def recover_power(power: PowerPoints, amount: int) -> PowerPoints:
    """Recover PP up to the maximum. Temporary PP is not restored."""
    if amount < 0:
        raise ValueError(f"Cannot recover a negative amount of PP: {amount}")
    return replace(power, current=min(power.current + amount, power.max))


def apply_power_delta(power: PowerPoints, delta: int) -> PowerPoints:
    """Negative delta spends, positive delta recovers."""
    if delta < 0:
        return spend_power(power, -delta)
    return recover_power(power, delta)


def can_spend_power(power: PowerPoints, amount: int) -> bool:
    return power.current + power.temporary >= amount


def power_per_round(level: int, essence: int, bonus: int = 0) -> int:
    """Most PP a character may spend in one round: level + Essência + bonus."""
    return level + essence + bonus
