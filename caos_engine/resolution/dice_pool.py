"""
Dice pool resolution for skill and defense tests.

Pool mechanics:
- Roll one die per point of attribute + modifiers, up to 8 dice
- Each die showing its top face is a success
- Each die showing 1 cancels one success
- Net successes = successes - cancellations, never below 0
- A pool of zero or fewer dice is a penalty roll: roll 2 dice and keep
  only the lower one
"""

from dataclasses import dataclass
from math import ceil
from typing import TYPE_CHECKING, Iterable, Optional
import logging

from caos_engine.config import RulesConfig
from caos_engine.data_models import (
    DicePoolResult,
    DiceRoller,
    DiceSource,
    DieSize,
    HitType,
    Modifier,
    ModifierCategory,
    POOL_DIE_SIZES,
    sum_modifiers,
)

if TYPE_CHECKING:
    from caos_engine.observability.roll_history import RollHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaceCounts:
    """Classification of a set of kept faces."""
    successes: int
    cancellations: int

    @property
    def net(self) -> int:
        return max(0, self.successes - self.cancellations)


class DicePoolResolver:
    """
    Resolves dice-pool tests.

    All randomness comes from the injected roller, so a resolver built with
    ScriptedDice or a seeded DiceRoller is fully deterministic.
    """

    def __init__(
        self,
        roller: Optional[DiceSource] = None,
        config: Optional[RulesConfig] = None,
    ):
        self._roll = roller if roller is not None else DiceRoller()
        self.config = config or RulesConfig()

    def success_threshold(self, die_size: DieSize) -> int:
        """Lowest face that counts as a success on this die."""
        if self.config.success_threshold is not None:
            return self.config.success_threshold
        return die_size.sides

    def effective_dice_count(
        self,
        dice_count: int,
        modifier: int = 0,
        modifiers: Iterable[Modifier] = (),
    ) -> int:
        """Dice count after all modifiers, before the cap or penalty rule."""
        return dice_count + modifier + sum_modifiers(modifiers, ModifierCategory.DICE_COUNT)

    def classify(self, faces: Iterable[int], die_size: DieSize) -> FaceCounts:
        """Count successes and cancellations among faces."""
        threshold = self.success_threshold(die_size)
        successes = 0
        cancellations = 0
        for face in faces:
            if face == 1:
                cancellations += 1
            elif face >= threshold:
                successes += 1
        return FaceCounts(successes=successes, cancellations=cancellations)

    def resolve_pool(
        self,
        dice_count: int,
        die_size: DieSize,
        modifier: int = 0,
        context: str = "",
        modifiers: Iterable[Modifier] = (),
        history: Optional["RollHistory"] = None,
    ) -> DicePoolResult:
        """
        Resolve a dice-pool test.

        Args:
            dice_count: Base dice, usually the attribute value
            die_size: d6, d8, d10 or d12
            modifier: Flat change to the number of dice
            context: Free text describing the test (for display)
            modifiers: Typed modifiers; only dice_count ones apply
            history: Optional caller-owned history to record into

        Returns:
            DicePoolResult with every face and the net successes

        Raises:
            ValueError: If die_size cannot form a pool
        """
        if die_size not in POOL_DIE_SIZES:
            raise ValueError(f"{die_size.value} cannot be used for a dice pool")

        requested = self.effective_dice_count(dice_count, modifier, modifiers)
        is_penalty = requested <= 0

        if is_penalty:
            rolled = self.config.penalty_dice
            rolls = tuple(self._roll(die_size.sides) for _ in range(rolled))
            kept: tuple[int, ...] = (min(rolls),)
        else:
            rolled = min(requested, self.config.max_pool_dice)
            rolls = tuple(self._roll(die_size.sides) for _ in range(rolled))
            kept = rolls

        counts = self.classify(kept, die_size)

        result = DicePoolResult(
            die_size=die_size,
            dice_count=rolled,
            requested_count=requested,
            rolls=rolls,
            kept=kept,
            successes=counts.successes,
            cancellations=counts.cancellations,
            net_successes=counts.net,
            is_penalty_roll=is_penalty,
            context=context,
        )

        logger.debug(f"Pool {context or 'test'}: {result}")

        if history is not None:
            history.add(result)

        return result


def resolve_pool(
    dice_count: int,
    die_size: DieSize,
    modifier: int = 0,
    context: str = "",
    roller: Optional[DiceSource] = None,
    config: Optional[RulesConfig] = None,
    modifiers: Iterable[Modifier] = (),
    history: Optional["RollHistory"] = None,
) -> DicePoolResult:
    """
    Resolve a dice-pool test with a throwaway resolver.

    Convenience wrapper; hold a DicePoolResolver to reuse a roller.
    """
    return DicePoolResolver(roller, config).resolve_pool(
        dice_count,
        die_size,
        modifier,
        context=context,
        modifiers=modifiers,
        history=history,
    )


def suggest_hit_type(net_successes: int) -> HitType:
    """Attack result suggested by the net successes of an attack test."""
    if net_successes <= 0:
        return HitType.GRAZE
    if net_successes == 1:
        return HitType.NORMAL
    if net_successes == 2:
        return HitType.SOLID
    return HitType.CRITICAL


def signature_ability_bonus(level: int) -> int:
    """
    Extra pool dice for a signature ability.

    +1d at levels 1-5, +2d at 6-10, +3d from 11 on.
    """
    if level <= 0:
        return 0
    return min(3, ceil(level / 5))
