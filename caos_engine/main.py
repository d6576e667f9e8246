"""
Caos Engine - Command Line Entry Point

Exercises the rules engine from a terminal: dice-pool tests, damage rolls,
usage dice and the XP table.

Examples:
  caos-engine roll 3 --die d8
  caos-engine damage 2d6+3 --critical
  caos-engine resource Tocha --uses 5 --seed 7
  caos-engine xp --level 4 --experience 300
"""

import argparse
import logging
import re
import sys
from typing import Optional

from caos_engine.advancement import (
    EXTENDED_MAX_LEVEL,
    STANDARD_MAX_LEVEL,
    LevelProgressionCalculator,
)
from caos_engine.config import RulesConfig
from caos_engine.data_models import DiceRoller, DieSize
from caos_engine.observability import RollHistory
from caos_engine.resolution import DicePoolResolver, roll_damage, suggest_hit_type
from caos_engine.resources import (
    PRESET_RESOURCES,
    DepletedResourceError,
    ResourceDieEngine,
    create_from_preset,
    get_preset,
)


# Configure logging
def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


_DAMAGE_NOTATION = re.compile(r"^(\d*)d(\d+)([+-]\d+)?$")


def parse_damage_notation(notation: str) -> tuple[int, int, int]:
    """
    Parse damage notation like '2d6+3', 'd8' or '1d10-1'.

    Returns:
        (dice_count, sides, modifier)

    Raises:
        ValueError: If the notation is malformed
    """
    match = _DAMAGE_NOTATION.match(notation.strip().lower())
    if not match:
        raise ValueError(f"Invalid damage notation: {notation!r}")
    count = int(match.group(1)) if match.group(1) else 1
    sides = int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0
    return count, sides, modifier


# =============================================================================
# COMMANDS
# =============================================================================


def cmd_roll(args: argparse.Namespace, roller: DiceRoller) -> int:
    """Roll a dice-pool test."""
    config = RulesConfig()
    resolver = DicePoolResolver(roller, config)
    history = RollHistory.from_config(config)
    die_size = DieSize.from_notation(args.die)

    total = 0
    for _ in range(args.times):
        result = resolver.resolve_pool(
            args.dice, die_size, args.modifier, context=args.context, history=history
        )
        total += result.net_successes
        print(f"{result}  [{suggest_hit_type(result.net_successes).value}]")

    if args.times > 1:
        print(f"Total net successes over {args.times} rolls: {total}")
        logger.debug(f"Roll history holds {history.size} of {args.times} rolls")
    return 0


def cmd_damage(args: argparse.Namespace, roller: DiceRoller) -> int:
    """Roll damage dice."""
    count, sides, modifier = parse_damage_notation(args.notation)
    result = roll_damage(
        count, sides, modifier, critical=args.critical, context=args.context, roller=roller
    )
    label = " (critical)" if result.is_critical else ""
    print(f"{result}{label}")
    return 0


def cmd_resource(args: argparse.Namespace, roller: DiceRoller) -> int:
    """Roll a preset usage die until it runs out or the uses are spent."""
    preset = get_preset(args.name)
    if preset is None:
        names = ", ".join(p.name for p in PRESET_RESOURCES)
        print(f"Unknown resource '{args.name}'. Presets: {names}")
        return 1

    engine = ResourceDieEngine(roller)
    resource = create_from_preset(preset)
    print(f"{resource.name}: {resource.current_die.value}")

    for use in range(1, args.uses + 1):
        try:
            result = engine.use(resource)
        except DepletedResourceError as e:
            logger.warning(str(e))
            print(f"  {resource.name} is depleted")
            break
        resource = result.resource
        after = result.new_die.value if result.new_die else "depleted"
        print(f"  use {use}: rolled {result.value} on {result.die_rolled.value} -> {after}")

    return 0


def cmd_xp(args: argparse.Namespace, roller: DiceRoller) -> int:
    """Show XP thresholds."""
    calculator = LevelProgressionCalculator()

    if args.level is not None:
        required = calculator.xp_for_next_level(args.level)
        print(f"Level {args.level} -> {args.level + 1}: {required} XP")
        if args.experience is not None:
            if args.experience >= required:
                print(f"Can level up ({args.experience - required} XP carried over)")
            else:
                print(f"Needs {required - args.experience} more XP")
        return 0

    last_level = EXTENDED_MAX_LEVEL if args.extended else STANDARD_MAX_LEVEL
    for level in range(last_level):
        print(f"{level:>2} -> {level + 1:>2}: {calculator.xp_for_next_level(level):>6}")
    return 0


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="caos-engine",
        description="Caos Engine - rules resolution for Tabuleiro do Caos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  caos-engine roll 3 --die d8                  # Roll 3d8 pool
  caos-engine roll 0                           # Penalty roll (2d6, lowest)
  caos-engine damage 2d6+3 --critical          # Critical damage
  caos-engine resource Tocha --uses 5 --seed 7 # Burn a torch
  caos-engine xp --level 4 --experience 300    # Check a threshold
        """
    )

    # General options
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the dice for repeatable rolls",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    roll_parser = subparsers.add_parser("roll", help="Roll a dice-pool test")
    roll_parser.add_argument("dice", type=int, help="Number of dice in the pool")
    roll_parser.add_argument(
        "--die",
        type=str,
        default="d6",
        choices=["d6", "d8", "d10", "d12"],
        help="Die size of the pool (default: d6)",
    )
    roll_parser.add_argument(
        "--modifier",
        type=int,
        default=0,
        help="Dice added to or removed from the pool",
    )
    roll_parser.add_argument("--context", type=str, default="", help="Label for the roll")
    roll_parser.add_argument("--times", type=int, default=1, help="Repeat the test")

    damage_parser = subparsers.add_parser("damage", help="Roll damage dice")
    damage_parser.add_argument("notation", type=str, help="Damage notation, e.g. 2d6+3")
    damage_parser.add_argument("--critical", action="store_true", help="Double the dice")
    damage_parser.add_argument("--context", type=str, default="", help="Label for the roll")

    resource_parser = subparsers.add_parser("resource", help="Roll a preset usage die")
    resource_parser.add_argument("name", type=str, help="Preset name, e.g. Tocha")
    resource_parser.add_argument(
        "--uses",
        type=int,
        default=1,
        help="Number of uses to roll (stops when depleted)",
    )

    xp_parser = subparsers.add_parser("xp", help="Show XP thresholds")
    xp_parser.add_argument("--level", type=int, help="Current level to look up")
    xp_parser.add_argument("--experience", type=int, help="Current experience")
    xp_parser.add_argument(
        "--extended",
        action="store_true",
        help=f"Show the table up to level {EXTENDED_MAX_LEVEL}",
    )

    return parser.parse_args(argv)


COMMANDS = {
    "roll": cmd_roll,
    "damage": cmd_damage,
    "resource": cmd_resource,
    "xp": cmd_xp,
}


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    roller = DiceRoller(seed=args.seed)
    try:
        return COMMANDS[args.command](args, roller)
    except ValueError as e:
        logger.error(str(e))
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
