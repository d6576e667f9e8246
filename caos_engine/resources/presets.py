"""
Preset resources available for quick addition to a character.
"""

from dataclasses import dataclass
from typing import Callable, Optional
import uuid

from caos_engine.data_models import DieSize, ResourceDie
from caos_engine.resources.resource_die import create_resource


@dataclass(frozen=True)
class PresetResource:
    """Template for a common resource."""
    name: str
    max_die: DieSize
    description: str
    min_die: DieSize = DieSize.D2


PRESET_RESOURCES: tuple[PresetResource, ...] = (
    PresetResource("Água", DieSize.D12, "Suprimento de água do personagem"),
    PresetResource("Comida", DieSize.D12, "Suprimento de comida do personagem"),
    PresetResource("Tocha", DieSize.D8, "Tochas para iluminação"),
    PresetResource("Flechas", DieSize.D12, "Munição de flechas para arcos"),
    PresetResource("Pólvora", DieSize.D10, "Suprimento de pólvora para armas de fogo"),
    PresetResource("Balas de Chumbo", DieSize.D12, "Munição de balas de chumbo"),
    PresetResource("Virotes", DieSize.D12, "Munição de virotes para bestas"),
    PresetResource("Agulhas", DieSize.D8, "Agulhas para uso diverso"),
)

# Every character starts with these
DEFAULT_RESOURCE_NAMES: tuple[str, ...] = ("Água", "Comida")


def get_preset(name: str) -> Optional[PresetResource]:
    """Look up a preset by name (case-insensitive)."""
    wanted = name.strip().lower()
    for preset in PRESET_RESOURCES:
        if preset.name.lower() == wanted:
            return preset
    return None


def create_from_preset(
    preset: PresetResource,
    resource_id: Optional[str] = None,
) -> ResourceDie:
    """Create a full resource from a preset."""
    return create_resource(
        preset.name,
        max_die=preset.max_die,
        min_die=preset.min_die,
        resource_id=resource_id,
        is_custom=False,
    )


def create_default_resources(
    generate_id: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> list[ResourceDie]:
    """The resources every new character starts with."""
    resources = []
    for name in DEFAULT_RESOURCE_NAMES:
        preset = get_preset(name)
        if preset is None:
            raise LookupError(f"Resource preset not found: {name}")
        resources.append(create_from_preset(preset, generate_id()))
    return resources
