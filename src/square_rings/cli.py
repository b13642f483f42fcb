"""CLI for square-rings."""

import argparse
import sys
from pathlib import Path

from .output import generate_csv, generate_json, generate_summary, load_placement
from .placement import (
    DEFAULT_SCATTER_COEFFICIENT,
    ConfigurationError,
    arrange_pois,
    verify_ring_set,
)
from .pois import load_pois, sort_by_distance

DEFAULT_POI_WIDTH = 30.0


def _config_int(value) -> int:
    """Convert a config value to int, rejecting fractional numbers."""
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


# Config key -> (argument dest, converter)
CONFIG_KEYS = {
    "input": ("input", Path),
    "output": ("output", Path),
    "poi-width": ("poi_width", float),
    "scatter-coefficient": ("scatter", float),
    "max-rings": ("max_rings", _config_int),
}


def load_config(config_path: Path) -> dict:
    """Load placement settings from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Mapping of config keys (see CONFIG_KEYS); empty for an empty file.

    Raises:
        ImportError: If PyYAML is not installed.
        ValueError: If the file is not valid YAML, not a mapping, or has
            keys outside CONFIG_KEYS.
    """
    try:
        import yaml
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err

    with open(config_path) as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as err:
            raise ValueError(f"Invalid YAML in {config_path}: {err}") from err

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"{config_path} must contain a mapping of settings")
    unknown = sorted(str(k) for k in config if k not in CONFIG_KEYS)
    if unknown:
        raise ValueError(f"Unknown config key(s) in {config_path}: {', '.join(unknown)}")
    return config


def resolve_place_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Merge config file values into args, fill defaults and validate."""
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as e:
            parser.error(str(e))
        # Flags given on the command line win over the config file
        for key, (dest, convert) in CONFIG_KEYS.items():
            if getattr(args, dest) is not None or key not in config:
                continue
            try:
                setattr(args, dest, convert(config[key]))
            except (TypeError, ValueError) as e:
                parser.error(f"Invalid value in {args.config} for '{key}': {e}")

    if not args.input:
        parser.error("--input is required")

    if args.output is None:
        args.output = Path("results")
    if args.poi_width is None:
        args.poi_width = DEFAULT_POI_WIDTH
    if args.scatter is None:
        args.scatter = DEFAULT_SCATTER_COEFFICIENT

    args.input = args.input.resolve()
    args.output = args.output.resolve()


def cmd_place(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Arrange POIs from an input file onto rings and write the results."""
    resolve_place_args(args, parser)

    try:
        pois = load_pois(args.input)
    except (OSError, ValueError) as e:
        parser.error(str(e))
    print(f"Loaded {len(pois)} POIs from {args.input}")

    # Nearest POIs get first pick of the inner rings
    pois = sort_by_distance(pois)

    try:
        ring_set = arrange_pois(
            pois,
            poi_width=args.poi_width,
            scatter_coefficient=args.scatter,
            max_rings=args.max_rings,
            verbose=args.verbose,
        )
    except ConfigurationError as e:
        parser.error(str(e))

    print(
        f"Placed {ring_set.placed_count} POIs on {len(ring_set)} rings "
        f"(poi_width={args.poi_width:g}, scatter={args.scatter:g})"
    )
    if ring_set.unplaced:
        print(f"{len(ring_set.unplaced)} POIs did not fit within {args.max_rings} rings")

    args.output.mkdir(parents=True, exist_ok=True)

    generate_json(ring_set, args.output / "placement.json")
    print("Wrote placement.json")
    generate_csv(ring_set, args.output / "placement.csv")
    print("Wrote placement.csv")
    generate_summary(ring_set, args.output / "summary.txt")
    print("Wrote summary.txt")
    print(f"\nAll outputs written to {args.output}/")


def cmd_check(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Verify a placement file. Returns the process exit status."""
    try:
        ring_set = load_placement(args.placement)
        expected_ids = None
        if args.input:
            expected_ids = [poi.id for poi in load_pois(args.input)]
    except (OSError, ValueError) as e:
        parser.error(str(e))

    problems = verify_ring_set(ring_set, expected_ids)
    if not problems:
        print(
            f"OK: {ring_set.placed_count} POIs on {len(ring_set)} rings, "
            f"{len(ring_set.unplaced)} unplaced"
        )
        return 0

    print(f"Found {len(problems)} problem(s):")
    for problem in problems:
        print(f"  {problem}")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for square-rings CLI."""
    parser = argparse.ArgumentParser(
        description="Place labeled points of interest on non-overlapping concentric rings"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    place_parser = subparsers.add_parser(
        "place",
        help="Arrange POIs onto rings and write placement.json/csv and summary.txt",
    )
    place_parser.add_argument("--input", type=Path, help="POI file (.json or .csv)")
    place_parser.add_argument(
        "--output",
        type=Path,
        help="Output directory (default: results)",
    )
    place_parser.add_argument(
        "--poi-width",
        type=float,
        help=f"Side length of the square labels (default: {DEFAULT_POI_WIDTH:g})",
    )
    place_parser.add_argument(
        "--scatter",
        type=float,
        help=f"Scatter coefficient >= 1 (default: {DEFAULT_SCATTER_COEFFICIENT})",
    )
    place_parser.add_argument(
        "--max-rings",
        type=int,
        metavar="N",
        help="Give up on POIs that do not fit within N rings (default: unlimited)",
    )
    place_parser.add_argument("--config", type=Path, help="Path to YAML config file")
    place_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print the placement trace for every POI",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Verify a placement.json for overlaps and lost POIs",
    )
    check_parser.add_argument(
        "--placement",
        type=Path,
        required=True,
        help="Placement JSON written by 'place'",
    )
    check_parser.add_argument(
        "--input",
        type=Path,
        help="Original POI file; every POI in it must be accounted for",
    )

    args = parser.parse_args(argv)

    if args.command == "place":
        cmd_place(args, place_parser)
    elif args.command == "check":
        return cmd_check(args, check_parser)
    else:
        # No subcommand provided - show help
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
