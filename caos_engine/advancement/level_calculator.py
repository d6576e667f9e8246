"""
Level-up calculator for the Caos rules.

Leveling up happens in one chosen track (archetype). The character level and
the track level both rise by one; the track decides the Guard and Power
gains, and the new *track* level decides which special rewards the player
must name:

- Trait (característica) at track levels 1, 5, 10 and 15
- Competence at track levels 5, 10 and 15
- Power or talent at every other track level from 2 to 14

Vitality max is never gained directly; it is re-derived from the new Guard
max (floor(GA / 3)).
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence
import logging

from caos_engine.advancement.progression_tables import (
    CLASS_UNLOCK_LEVEL,
    GUARD_PER_LEVEL,
    POWER_ATTRIBUTE,
    POWER_PER_LEVEL,
    XP_TABLE,
    calculate_remaining_xp,
    get_xp_for_next_level,
    primary_gain_type,
    required_gain_types,
)
from caos_engine.combat.guard_vitality import GuardVitalityModel, derive_vitality_max
from caos_engine.config import RulesConfig
from caos_engine.data_models import (
    CharacterSnapshot,
    LevelHistoryEntry,
    SpecialGain,
    SpecialGainType,
    Track,
    ValidationResult,
)

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class LevelUpGains:
    """What a level-up in one track would grant. Derived, never stored."""
    track: Track
    new_level: int
    new_track_level: int
    guard_gain: int
    power_gain: int
    new_guard_max: int
    new_power_max: int
    new_vitality_max: int
    xp_required: int
    can_level_up: bool
    remaining_experience: int
    grants_trait: bool
    grants_competence: bool
    grants_power_or_talent: bool
    unlocks_classes: bool

    @property
    def required_gains(self) -> list[SpecialGainType]:
        """Special reward categories the player must fill in."""
        required = []
        if self.grants_trait:
            required.append(SpecialGainType.TRAIT)
        if self.grants_competence:
            required.append(SpecialGainType.COMPETENCE)
        if self.grants_power_or_talent:
            required.append(SpecialGainType.POWER_OR_TALENT)
        return required


@dataclass
class LevelUpResult:
    """Result of a level-up commit."""
    success: bool
    character: CharacterSnapshot      # the updated snapshot, or the input on failure
    gains: LevelUpGains
    missing_gains: list[SpecialGainType] = field(default_factory=list)
    message: str = ""


# =============================================================================
# CALCULATOR
# =============================================================================


class LevelProgressionCalculator:
    """
    Computes and applies level-ups.

    The XP table is injectable so house rules (or tests) can use their own
    thresholds; it defaults to the book's table.
    """

    def __init__(
        self,
        xp_table: Optional[Sequence[int]] = None,
        config: Optional[RulesConfig] = None,
    ):
        self.xp_table: Sequence[int] = tuple(xp_table) if xp_table is not None else XP_TABLE
        if not self.xp_table:
            raise ValueError("XP table cannot be empty")
        self.pools = GuardVitalityModel(config)

    # =========================================================================
    # XP QUERIES
    # =========================================================================

    def xp_for_next_level(self, level: int) -> int:
        return get_xp_for_next_level(level, self.xp_table)

    def can_level_up(self, character: CharacterSnapshot) -> bool:
        """Whether the character has the experience for the next level."""
        return character.experience >= self.xp_for_next_level(character.level)

    # =========================================================================
    # PREVIEW
    # =========================================================================

    def preview_level_up(self, character: CharacterSnapshot, track: Track) -> LevelUpGains:
        """
        Preview the gains of leveling up in a track.

        Args:
            character: Current character snapshot
            track: Track chosen for this level

        Returns:
            LevelUpGains (computed even when the XP is not there yet)
        """
        new_level = character.level + 1
        new_track_level = character.get_track_level(track) + 1

        guard_gain = GUARD_PER_LEVEL[track]
        power_gain = POWER_PER_LEVEL[track] + character.get_attribute(POWER_ATTRIBUTE)
        new_guard_max = character.guard.max + guard_gain

        required = required_gain_types(new_track_level)

        return LevelUpGains(
            track=track,
            new_level=new_level,
            new_track_level=new_track_level,
            guard_gain=guard_gain,
            power_gain=power_gain,
            new_guard_max=new_guard_max,
            new_power_max=character.power.max + power_gain,
            new_vitality_max=derive_vitality_max(new_guard_max),
            xp_required=self.xp_for_next_level(character.level),
            can_level_up=self.can_level_up(character),
            remaining_experience=calculate_remaining_xp(
                character.experience, character.level, self.xp_table
            ),
            grants_trait=SpecialGainType.TRAIT in required,
            grants_competence=SpecialGainType.COMPETENCE in required,
            grants_power_or_talent=SpecialGainType.POWER_OR_TALENT in required,
            unlocks_classes=character.level < CLASS_UNLOCK_LEVEL <= new_level,
        )

    def validate_special_gains(
        self,
        gains: LevelUpGains,
        special_gains: Sequence[SpecialGain],
    ) -> ValidationResult:
        """
        Check the player's named rewards against what the level grants.

        Every required category needs at least one gain with a non-blank
        name. Gains of a category this level does not grant are rejected.
        """
        errors = []
        provided = {g.gain_type for g in special_gains if g.name.strip()}

        for gain_type in gains.required_gains:
            if gain_type not in provided:
                errors.append(f"Missing required {gain_type.value}")

        for gain in special_gains:
            if gain.gain_type not in gains.required_gains:
                errors.append(
                    f"{gain.gain_type.value} '{gain.name}' is not granted at "
                    f"{gains.track.value} level {gains.new_track_level}"
                )
            elif not gain.name.strip():
                errors.append(f"{gain.gain_type.value} needs a name")

        return ValidationResult(valid=not errors, errors=errors)

    # =========================================================================
    # COMMIT
    # =========================================================================

    def commit_level_up(
        self,
        character: CharacterSnapshot,
        track: Track,
        special_gains: Sequence[SpecialGain] = (),
    ) -> LevelUpResult:
        """
        Apply a level-up, returning a new snapshot.

        Rejected (input returned untouched) when the experience is short or
        a required special gain is missing.

        Args:
            character: Current character snapshot
            track: Track chosen for this level
            special_gains: Rewards named by the player

        Returns:
            LevelUpResult with the updated character on success
        """
        gains = self.preview_level_up(character, track)

        if not gains.can_level_up:
            message = (
                f"{character.name} needs {gains.xp_required} XP to reach level "
                f"{gains.new_level} (has {character.experience})"
            )
            logger.warning(f"Level-up rejected: {message}")
            return LevelUpResult(
                success=False, character=character, gains=gains, message=message
            )

        validation = self.validate_special_gains(gains, special_gains)
        if not validation:
            provided = {g.gain_type for g in special_gains if g.name.strip()}
            missing = [t for t in gains.required_gains if t not in provided]
            message = "; ".join(validation.errors)
            logger.warning(f"Level-up rejected for {character.name}: {message}")
            return LevelUpResult(
                success=False,
                character=character,
                gains=gains,
                missing_gains=missing,
                message=message,
            )

        updated = self._apply_gains(character, gains, special_gains)
        logger.info(
            f"{character.name} reached level {gains.new_level} "
            f"({track.value} {gains.new_track_level}): "
            f"+{gains.guard_gain} GA, +{gains.power_gain} PP"
        )
        if gains.unlocks_classes:
            logger.info(f"{character.name} can now choose a class")

        return LevelUpResult(
            success=True,
            character=updated,
            gains=gains,
            message=f"Level {gains.new_level} reached",
        )

    def _apply_gains(
        self,
        character: CharacterSnapshot,
        gains: LevelUpGains,
        special_gains: Sequence[SpecialGain],
    ) -> CharacterSnapshot:
        # Current GA and PP rise with their maxima
        guard = replace(
            character.guard,
            max=gains.new_guard_max,
            current=character.guard.current + gains.guard_gain,
        )
        power = replace(
            character.power,
            max=gains.new_power_max,
            current=character.power.current + gains.power_gain,
        )

        vitality_gain = gains.new_vitality_max - character.vitality.max
        vitality = replace(
            character.vitality,
            max=gains.new_vitality_max,
            current=min(
                character.vitality.current + max(vitality_gain, 0),
                gains.new_vitality_max,
            ),
        )
        guard = self.pools.guard_for_vitality_change(guard, character.vitality, vitality)

        track_levels = dict(character.track_levels)
        track_levels[gains.track] = gains.new_track_level

        named = [g for g in special_gains if g.name.strip()]
        history_entry = LevelHistoryEntry(
            level=gains.new_level,
            track=gains.track,
            gain_type=primary_gain_type(gains.new_track_level),
            gain_name=named[0].name if named else None,
        )

        return replace(
            character,
            level=gains.new_level,
            experience=gains.remaining_experience,
            guard=guard,
            vitality=vitality,
            power=power,
            track_levels=track_levels,
            special_abilities=character.special_abilities + tuple(named),
            level_history=character.level_history + (history_entry,),
        )
