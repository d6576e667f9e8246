"""
Combat pools: Guard/Vitality damage model, Power Points and rest recovery.
"""

from caos_engine.combat.guard_vitality import (
    DamageOutcome,
    GuardVitalityModel,
    GuardVitalityStatus,
    VitalityRecovery,
    derive_vitality_max,
    effective_guard_max,
    guard_after_vitality_change,
    max_dying_rounds,
)
from caos_engine.combat.power_points import (
    apply_power_delta,
    can_spend_power,
    power_per_round,
    recover_power,
    spend_power,
)
from caos_engine.combat.rest import (
    REST_QUALITY_MULTIPLIERS,
    RestQuality,
    RestRecovery,
    calculate_rest_recovery,
    validate_rest_inputs,
)

__all__ = [
    "DamageOutcome",
    "GuardVitalityModel",
    "GuardVitalityStatus",
    "VitalityRecovery",
    "derive_vitality_max",
    "effective_guard_max",
    "guard_after_vitality_change",
    "max_dying_rounds",
    "apply_power_delta",
    "can_spend_power",
    "power_per_round",
    "recover_power",
    "spend_power",
    "REST_QUALITY_MULTIPLIERS",
    "RestQuality",
    "RestRecovery",
    "calculate_rest_recovery",
    "validate_rest_inputs",
]
