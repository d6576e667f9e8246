"""
Guard (GA) and Vitality (PV): the two-tier damage model.

Rules:
- Damage hits temporary Guard, then Guard; the overflow goes 1:1 to Vitality
- Neither pool drops below 0
- While Vitality is at or below 1, Guard's maximum is halved (rounded down)
- When Vitality climbs back from 0, Guard returns to at least half its max
- Vitality 0 is a critical wound; below max is a direct wound
- A critically wounded character survives 2 + Corpo rounds
- Guard heals directly, up to its effective maximum
- Vitality heals with recovery points: 5 points restore 1 PV
- Vitality max = floor(Guard max / 3)

Guard's ceiling is always read through effective_guard_max(); nothing else
in the package checks the Vitality threshold.
"""

from dataclasses import dataclass, replace
from typing import Optional
import logging

from caos_engine.config import RulesConfig, VITALITY_CRITICAL_THRESHOLD
from caos_engine.data_models import (
    CombatState,
    GuardPoints,
    ValidationResult,
    VitalityPoints,
)

logger = logging.getLogger(__name__)


def effective_guard_max(
    nominal_max: int,
    vitality_current: int,
    threshold: int = VITALITY_CRITICAL_THRESHOLD,
) -> int:
    """
    Guard's maximum after the low-Vitality penalty.

    Args:
        nominal_max: Guard max including its modifiers
        vitality_current: Current Vitality
        threshold: Vitality at or below which Guard max is halved

    Returns:
        floor(nominal_max / 2) while Vitality <= threshold, else nominal_max
    """
    if vitality_current <= threshold:
        return nominal_max // 2
    return nominal_max


def guard_after_vitality_change(
    guard_current: int,
    nominal_max: int,
    vitality_before: int,
    vitality_after: int,
    threshold: int = VITALITY_CRITICAL_THRESHOLD,
) -> int:
    """
    Guard current after Vitality moves from vitality_before to vitality_after.

    Climbing back from 0 Vitality restores Guard to at least half its max.
    The result is always within [0, effective max] for the new Vitality, so
    dropping to the threshold clamps Guard down.
    """
    current = guard_current
    if vitality_before <= 0 < vitality_after:
        current = max(current, nominal_max // 2)
    ceiling = effective_guard_max(nominal_max, vitality_after, threshold)
    return min(max(current, 0), max(ceiling, 0))


def max_dying_rounds(body: int, bonus: int = 0) -> int:
    """
    Rounds a character can stay dying (critical wound) before death.

    2 + Corpo + any bonus from abilities or equipment.
    """
    return 2 + body + bonus


def derive_vitality_max(guard_max: int) -> int:
    """Vitality max derived from Guard max: floor(GA / 3)."""
    return max(0, guard_max // 3)


@dataclass(frozen=True)
class DamageOutcome:
    """Pools after damage and where the damage went."""
    guard: GuardPoints
    vitality: VitalityPoints
    absorbed_by_temporary: int = 0
    absorbed_by_guard: int = 0
    absorbed_by_vitality: int = 0
    overflow: int = 0  # damage with no pool left to absorb it

    @property
    def total_absorbed(self) -> int:
        return self.absorbed_by_temporary + self.absorbed_by_guard + self.absorbed_by_vitality


@dataclass(frozen=True)
class VitalityRecovery:
    """Pools after spending recovery points on Vitality."""
    guard: GuardPoints
    vitality: VitalityPoints
    vitality_healed: int
    recovery_spent: int
    remaining_recovery: int


@dataclass(frozen=True)
class GuardVitalityStatus:
    """Everything derived from the four pool numbers, read at once."""
    effective_guard_max: int
    combat_state: CombatState
    is_battered: bool
    guard_max_reduced: bool


class GuardVitalityModel:
    """
    Applies the Guard/Vitality rules to pool records.

    Methods take the current pools and return new ones; inputs are never
    modified. After every operation Guard is clamped to the effective max.
    """

    def __init__(self, config: Optional[RulesConfig] = None):
        self.config = config or RulesConfig()

    # =========================================================================
    # DERIVED STATE
    # =========================================================================

    def effective_max(self, guard: GuardPoints, vitality: VitalityPoints) -> int:
        """Guard's current ceiling."""
        return effective_guard_max(
            guard.nominal_max,
            vitality.current,
            self.config.vitality_critical_threshold,
        )

    def clamp_guard(self, guard: GuardPoints, vitality: VitalityPoints) -> GuardPoints:
        """Bring Guard current into [0, effective max]."""
        ceiling = self.effective_max(guard, vitality)
        clamped = min(max(guard.current, 0), max(ceiling, 0))
        if clamped == guard.current:
            return guard
        logger.debug(f"Guard clamped {guard.current} -> {clamped} (ceiling {ceiling})")
        return replace(guard, current=clamped)

    def guard_for_vitality_change(
        self,
        guard: GuardPoints,
        vitality_before: VitalityPoints,
        vitality_after: VitalityPoints,
    ) -> GuardPoints:
        """Guard after a Vitality change; every path that moves Vitality calls this."""
        adjusted = guard_after_vitality_change(
            guard.current,
            guard.nominal_max,
            vitality_before.current,
            vitality_after.current,
            self.config.vitality_critical_threshold,
        )
        if adjusted == guard.current:
            return guard
        if adjusted > guard.current:
            logger.info(
                f"Vitality recovered from 0: Guard restored {guard.current} -> {adjusted}"
            )
        return replace(guard, current=adjusted)

    def combat_state(self, vitality: VitalityPoints) -> CombatState:
        """normal at full Vitality, direct wound below it, critical at 0."""
        if vitality.current <= 0:
            return CombatState.CRITICAL_WOUND
        if vitality.current < vitality.max:
            return CombatState.DIRECT_WOUND
        return CombatState.NORMAL

    def is_battered(self, guard: GuardPoints, vitality: VitalityPoints) -> bool:
        """Avariado: Guard above 0 but at or below half its effective max."""
        ceiling = self.effective_max(guard, vitality)
        return 0 < guard.current <= ceiling / 2

    def status(self, guard: GuardPoints, vitality: VitalityPoints) -> GuardVitalityStatus:
        ceiling = self.effective_max(guard, vitality)
        return GuardVitalityStatus(
            effective_guard_max=ceiling,
            combat_state=self.combat_state(vitality),
            is_battered=self.is_battered(guard, vitality),
            guard_max_reduced=ceiling < guard.nominal_max,
        )

    # =========================================================================
    # DAMAGE
    # =========================================================================

    def apply_damage(
        self,
        guard: GuardPoints,
        vitality: VitalityPoints,
        amount: int,
    ) -> DamageOutcome:
        """
        Apply damage: temporary Guard, then Guard, then Vitality.

        Args:
            guard: Current Guard
            vitality: Current Vitality
            amount: Raw damage (0 does nothing)

        Returns:
            DamageOutcome with the new pools

        Raises:
            ValueError: If amount is negative
        """
        _check_amount(amount, "Damage")
        if amount == 0:
            return DamageOutcome(guard=guard, vitality=vitality)

        remaining = amount

        from_temporary = min(max(guard.temporary, 0), remaining)
        remaining -= from_temporary

        from_guard = min(max(guard.current, 0), remaining)
        remaining -= from_guard

        from_vitality = min(max(vitality.current, 0), remaining)
        remaining -= from_vitality

        new_vitality = replace(vitality, current=vitality.current - from_vitality)
        new_guard = replace(
            guard,
            current=guard.current - from_guard,
            temporary=guard.temporary - from_temporary,
        )
        new_guard = self.guard_for_vitality_change(new_guard, vitality, new_vitality)

        if from_vitality:
            logger.info(
                f"Damage {amount} overflowed Guard: Vitality "
                f"{vitality.current} -> {new_vitality.current}"
            )

        return DamageOutcome(
            guard=new_guard,
            vitality=new_vitality,
            absorbed_by_temporary=from_temporary,
            absorbed_by_guard=from_guard,
            absorbed_by_vitality=from_vitality,
            overflow=remaining,
        )

    def damage_vitality(
        self,
        guard: GuardPoints,
        vitality: VitalityPoints,
        amount: int,
    ) -> tuple[GuardPoints, VitalityPoints]:
        """Damage Vitality directly, bypassing Guard."""
        _check_amount(amount, "Damage")
        new_vitality = replace(vitality, current=max(0, vitality.current - amount))
        return self.guard_for_vitality_change(guard, vitality, new_vitality), new_vitality

    # =========================================================================
    # HEALING
    # =========================================================================

    def heal_guard(
        self,
        guard: GuardPoints,
        vitality: VitalityPoints,
        amount: int,
    ) -> GuardPoints:
        """Heal Guard, up to its effective (possibly halved) maximum."""
        _check_amount(amount, "Healing")
        ceiling = self.effective_max(guard, vitality)
        healed = replace(guard, current=min(guard.current + amount, ceiling))
        return self.clamp_guard(healed, vitality)

    def restore_vitality(
        self,
        guard: GuardPoints,
        vitality: VitalityPoints,
        amount: int,
    ) -> tuple[GuardPoints, VitalityPoints]:
        """Heal Vitality points directly (effects that target Vitality)."""
        _check_amount(amount, "Healing")
        new_vitality = replace(vitality, current=min(vitality.current + amount, vitality.max))
        return self.guard_for_vitality_change(guard, vitality, new_vitality), new_vitality

    def can_recover_vitality(
        self,
        vitality: VitalityPoints,
        recovery_points: int,
    ) -> ValidationResult:
        """Whether spending recovery points on Vitality would have any effect."""
        errors = []
        if vitality.current >= vitality.max:
            errors.append("Vitality is already full")
        if recovery_points < self.config.recovery_cost:
            errors.append(
                f"At least {self.config.recovery_cost} recovery points are "
                f"needed to restore 1 Vitality (got {recovery_points})"
            )
        return ValidationResult(valid=not errors, errors=errors)

    def heal_vitality(
        self,
        guard: GuardPoints,
        vitality: VitalityPoints,
        recovery_points: int,
    ) -> VitalityRecovery:
        """
        Convert recovery points into Vitality.

        Each `recovery_cost` points (5 by default) restore 1 Vitality, up to
        max. Points that do not complete a Vitality point are returned in
        remaining_recovery.
        """
        _check_amount(recovery_points, "Recovery")
        cost = self.config.recovery_cost

        missing = max(0, vitality.max - vitality.current)
        healed = min(missing, recovery_points // cost)
        spent = healed * cost

        if healed == 0:
            logger.warning(
                f"Recovery of {recovery_points} points restored no Vitality "
                f"(cost {cost}, missing {missing})"
            )

        new_vitality = replace(vitality, current=vitality.current + healed)
        return VitalityRecovery(
            guard=self.guard_for_vitality_change(guard, vitality, new_vitality),
            vitality=new_vitality,
            vitality_healed=healed,
            recovery_spent=spent,
            remaining_recovery=recovery_points - spent,
        )


def _check_amount(amount: int, what: str) -> None:
    if amount < 0:
        raise ValueError(f"{what} amount cannot be negative: {amount}")
