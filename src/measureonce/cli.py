"""
Command-line interface for Measure Once.

Generates and inspects levels, renders them to images, exports level sets
for analysis and starts the interactive text game.
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml

from measureonce.core.config import Config, load_config, validate_config
from measureonce.core.registry import LEVEL_SET_REGISTRY, get_level_set_builder
from measureonce.game.coordset import CoordSet
from measureonce.game.level import LevelDef
from measureonce.utils.display import StatusDisplay, LiveLogger


def get_available_level_sets() -> List[str]:
    """Registered level set names."""
    # importing the level module registers the builders
    import measureonce.game.level  # noqa: F401
    return sorted(LEVEL_SET_REGISTRY.keys())


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    level_sets = get_available_level_sets()

    parser = argparse.ArgumentParser(
        prog="measureonce",
        description="Measure Once: saw planks into pieces that fill every hole",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Generate one level and print its holes and plank
  measureonce generate --holes 3 --blocks 15 --seed 61

  # List the easy set, ranked by difficulty
  measureonce levels easy

  # Export today's daily set for a spreadsheet
  measureonce levels daily --export daily.xlsx

  # Render a level to an image
  measureonce render --holes 2 --blocks 10 --seed 20 --output level.png

  # Play in the terminal
  measureonce play --set classic

Level sets: {', '.join(level_sets)}
        """
    )
    parser.add_argument("--config", "-c", help="Path to configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_level_args(p):
        p.add_argument("--holes", type=int, required=True, help="Number of holes")
        p.add_argument("--blocks", type=int, required=True, help="Total number of cells over all holes")
        p.add_argument("--seed", type=int, required=True, help="Generator seed")

    gen_parser = subparsers.add_parser("generate", help="Generate a single level")
    add_level_args(gen_parser)

    levels_parser = subparsers.add_parser("levels", help="List the levels of a level set")
    levels_parser.add_argument("set", choices=level_sets, help="Level set")
    levels_parser.add_argument("--date", help="Day for the daily set (YYYY-MM-DD)")
    levels_parser.add_argument("--export", help="Write the table to a .csv or .xlsx file")

    render_parser = subparsers.add_parser("render", help="Render a level to an image file")
    add_level_args(render_parser)
    render_parser.add_argument("--output", "-o", default="level.png", help="Output image file")
    render_parser.add_argument("--dpi", type=int, default=150, help="Image resolution")
    render_parser.add_argument("--mask", help="Also save the plank's mask image to this file")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--set", default="classic", choices=level_sets, help="Level set to start with")

    config_parser = subparsers.add_parser("create-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", default="config.yaml", help="Output configuration file")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    validate_parser = subparsers.add_parser("validate-config", help="Validate configuration file")
    validate_parser.add_argument("config_file", help="Configuration file to validate")
    validate_parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")

    return parser


def _load_config(args, logger: LiveLogger) -> Optional[Config]:
    """Load the --config file if one was given, defaults otherwise."""
    if not getattr(args, "config", None):
        return Config(verbose=getattr(args, "verbose", False))

    try:
        logger.log_action("Loading configuration", args.config)
        config = load_config(args.config)
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        logger.log_info("Use 'measureonce create-config' to create a default configuration")
        return None
    except (yaml.YAMLError, ValueError) as e:
        logger.log_error(f"Configuration error: {e}")
        return None

    for issue in validate_config(config):
        if issue.startswith("ERROR"):
            logger.log_error(issue.replace("ERROR: ", ""))
            return None
        logger.log_warning(issue.replace("WARNING: ", ""))

    config.verbose = config.verbose or getattr(args, "verbose", False)
    return config


def _level_def(args, logger: LiveLogger) -> Optional[LevelDef]:
    if args.holes < 1:
        logger.log_error("A level needs at least one hole")
        return None
    if args.blocks < args.holes:
        logger.log_error("A level needs at least one block per hole")
        return None
    return LevelDef(num_holes=args.holes, total_blocks=args.blocks, seed=args.seed)


def generate_command(args) -> int:
    """Execute generate command."""
    logger = LiveLogger(verbose=True, debug=args.verbose)
    config = _load_config(args, logger)
    if config is None:
        return 1
    level_def = _level_def(args, logger)
    if level_def is None:
        return 1

    StatusDisplay.print_header("Measure Once Level")
    level = level_def.build(logger=logger, sample_limit=config.generator.hole_sample_limit)

    StatusDisplay.print_section("Holes")
    print(CoordSet.merge(level.holes))

    for i, (plank, pos) in enumerate(level.planks):
        StatusDisplay.print_section(f"Plank {i} at {pos.to_tuple()}")
        print(plank)

    StatusDisplay.print_results({
        "Holes": len(level.holes),
        "Hole sizes": ", ".join(str(h.count()) for h in level.holes),
        "Board": f"{level.extents.x} x {level.extents.y}",
        "Difficulty": level.difficulty(),
    }, "Summary")
    return 0


def _parse_day(text: Optional[str]) -> date:
    if text is None:
        return date.today()
    return date.fromisoformat(text)


def level_rows(level_defs: List[LevelDef], config: Config) -> List[Dict[str, Any]]:
    """One summary row per level definition."""
    rows = []
    for i, level_def in enumerate(level_defs, 1):
        level = level_def.build(sample_limit=config.generator.hole_sample_limit)
        rows.append({
            "level": i,
            "holes": level_def.num_holes,
            "blocks": level_def.total_blocks,
            "seed": level_def.seed,
            "difficulty": level.difficulty(),
        })
    return rows


def levels_command(args) -> int:
    """Execute levels command."""
    logger = LiveLogger(verbose=True, debug=args.verbose)
    config = _load_config(args, logger)
    if config is None:
        return 1

    try:
        today = _parse_day(args.date)
    except ValueError:
        logger.log_error(f"Invalid date: {args.date}")
        return 1

    logger.log_action("Building level set", args.set)
    level_set = get_level_set_builder(args.set)(config, today)
    rows = level_rows(level_set.levels, config)

    StatusDisplay.print_header(level_set.title)
    StatusDisplay.print_table(rows, ["level", "holes", "blocks", "seed", "difficulty"])

    if args.export:
        df = pd.DataFrame(rows)
        suffix = Path(args.export).suffix.lower()
        if suffix == ".csv":
            df.to_csv(args.export, index=False)
        elif suffix in (".xlsx", ".xls"):
            df.to_excel(args.export, index=False, sheet_name=level_set.settings_key or "Levels")
        else:
            logger.log_error(f"Unsupported export format: {suffix or args.export}")
            return 1
        logger.log_result(f"Exported {len(df)} levels to {args.export}")
    return 0


def render_command(args) -> int:
    """Execute render command."""
    logger = LiveLogger(verbose=True, debug=args.verbose)
    config = _load_config(args, logger)
    if config is None:
        return 1
    level_def = _level_def(args, logger)
    if level_def is None:
        return 1

    from measureonce.utils.visualizer import save_level_visualization, use_headless_backend
    use_headless_backend()

    level = level_def.build(logger=logger, sample_limit=config.generator.hole_sample_limit)
    title = f"{level_def.num_holes} holes, {level_def.total_blocks} blocks (seed {level_def.seed})"
    logger.log_action("Rendering", args.output)
    save_level_visualization(level, args.output, title=title, dpi=args.dpi)
    logger.log_result(f"Saved {args.output}")

    if args.mask:
        from measureonce.utils.image import coordset_image
        coordset_image([level.planks[0][0]]).save(args.mask)
        logger.log_result(f"Saved {args.mask}")
    return 0


def play_command(args) -> int:
    """Execute play command."""
    logger = LiveLogger(verbose=True, debug=args.verbose)
    config = _load_config(args, logger)
    if config is None:
        return 1

    from measureonce.game_cli import MeasureOnceGame
    game = MeasureOnceGame(config, verbose=config.verbose)
    if not game.load_set(args.set):
        return 1
    game.run_cli()
    return 0


def create_config_command(args) -> int:
    """Execute create-config command."""
    logger = LiveLogger(verbose=True)

    if Path(args.output).exists() and not args.force:
        logger.log_error(f"Configuration file already exists: {args.output}")
        logger.log_info("Pass --force to overwrite it")
        return 1

    config = Config()
    with open(args.output, 'w', encoding='utf-8') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)
    logger.log_result(f"Configuration created: {args.output}")

    logger.log_info("Next steps:")
    logger.log_info("1. Validate the configuration: measureonce validate-config " + args.output)
    logger.log_info("2. Play: measureonce --config " + args.output + " play")
    return 0


def validate_config_command(args) -> int:
    """Execute validate-config command."""
    logger = LiveLogger(verbose=True)
    StatusDisplay.print_header("Configuration Validation")

    try:
        config = load_config(args.config_file)
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config_file}")
        return 1
    except (yaml.YAMLError, ValueError) as e:
        logger.log_error(f"Failed to load config: {e}")
        return 1

    StatusDisplay.print_config(config.to_dict())

    issues = validate_config(config)
    errors = [issue for issue in issues if issue.startswith("ERROR")]
    warnings = [issue for issue in issues if not issue.startswith("ERROR")]

    if args.strict and warnings:
        errors.extend(warnings)
        warnings = []

    for i, error in enumerate(errors, 1):
        logger.log_error(f"{i}. {error.replace('ERROR: ', '')}")
    for i, warning in enumerate(warnings, 1):
        logger.log_warning(f"{i}. {warning.replace('WARNING: ', '')}")

    StatusDisplay.print_results({
        "Status": "FAILED" if errors else "VALID",
        "Errors Found": len(errors),
        "Warnings Found": len(warnings),
    }, "Validation Summary")
    return 1 if errors else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    command_handlers = {
        "generate": generate_command,
        "levels": levels_command,
        "render": render_command,
        "play": play_command,
        "create-config": create_config_command,
        "validate-config": validate_config_command,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
