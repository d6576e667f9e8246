"""
Usage dice for consumable resources.
"""

from caos_engine.resources.resource_die import (
    RESOURCE_DIE_SCALE,
    DepletedResourceError,
    ResourceDieEngine,
    ResourceDieError,
    create_resource,
    normalize_bounds,
    step_down,
    step_up,
)
from caos_engine.resources.presets import (
    DEFAULT_RESOURCE_NAMES,
    PRESET_RESOURCES,
    PresetResource,
    create_default_resources,
    create_from_preset,
    get_preset,
)

__all__ = [
    "RESOURCE_DIE_SCALE",
    "DepletedResourceError",
    "ResourceDieEngine",
    "ResourceDieError",
    "create_resource",
    "normalize_bounds",
    "step_down",
    "step_up",
    "DEFAULT_RESOURCE_NAMES",
    "PRESET_RESOURCES",
    "PresetResource",
    "create_default_resources",
    "create_from_preset",
    "get_preset",
]
