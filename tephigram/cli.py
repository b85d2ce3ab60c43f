"""
Command-line interface for the tephigram package.

Provides an argparse-based CLI with subcommands for opening the interactive
viewer and for reading the thermodynamic state at a screen point.

Usage:
    tephigram view --config diagram.yaml
    tephigram view --angle 0.6 --temperature-divisions 10
    tephigram query --x 300 --y 300
"""

import argparse
import math
import sys
from dataclasses import replace
from typing import List, Optional

from .api import read_cursor
from .config import Config
from .constants import MAX_SHEAR_ANGLE
from .exceptions import TephigramError
from .logging_config import get_logger, setup_logging
from .rendering import TephigramViewer

logger = get_logger("tephigram.cli")


def setup_logging_from_args(args: argparse.Namespace) -> None:
    """
    Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments with verbose, quiet, log_file
    """
    if getattr(args, 'quiet', False):
        verbosity = -1  # WARNING
    elif getattr(args, 'verbose', False):
        verbosity = 1  # DEBUG
    else:
        verbosity = 0  # INFO

    setup_logging(verbosity=verbosity, log_file=getattr(args, 'log_file', None))


def parse_angle(angle_str: str) -> float:
    """
    Parse a shear angle in radians.

    Accepts plain numbers (``0.6``) or multiples of pi (``0.25pi``).

    Raises:
        argparse.ArgumentTypeError: If the value is not a number or out of range
    """
    text = angle_str.strip().lower()
    try:
        if text.endswith("pi"):
            factor = text[:-2].strip() or "1"
            angle = float(factor) * math.pi
        else:
            angle = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid angle: {angle_str}")

    if not 0.0 <= angle <= MAX_SHEAR_ANGLE:
        raise argparse.ArgumentTypeError(
            f"Angle {angle_str} out of range [0, {MAX_SHEAR_ANGLE:.4f}] rad"
        )
    return angle


def load_config(args: argparse.Namespace) -> Config:
    """
    Build the configuration from an optional file and command-line overrides.

    Args:
        args: Parsed arguments with config, angle, temperature_divisions,
            phi_divisions and background_color

    Returns:
        Validated Config object
    """
    config = Config.load_from_file(args.config) if args.config else Config()

    grid_overrides = {}
    if getattr(args, "angle", None) is not None:
        grid_overrides["angle"] = args.angle
    if getattr(args, "temperature_divisions", None) is not None:
        grid_overrides["temperature_divisions"] = args.temperature_divisions
    if getattr(args, "phi_divisions", None) is not None:
        grid_overrides["phi_divisions"] = args.phi_divisions
    if grid_overrides:
        config.grid = replace(config.grid, **grid_overrides)

    if getattr(args, "background_color", None):
        config.background_color = args.background_color

    config.validate()
    logger.debug(
        f"Using grid: angle={config.grid.angle:.3f} rad, "
        f"divisions={config.grid.temperature_divisions}x{config.grid.phi_divisions}"
    )
    return config


def cmd_view(args: argparse.Namespace) -> int:
    """Handle 'view' subcommand."""
    try:
        config = load_config(args)
        TephigramViewer(config).show()
        return 0

    except (TephigramError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_query(args: argparse.Namespace) -> int:
    """Handle 'query' subcommand."""
    try:
        config = load_config(args)
        reading = read_cursor(config, (args.x, args.y))
        print(reading.format())
        return 0

    except (TephigramError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable DEBUG logging"
    )
    p.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress INFO logging (WARNING+ only)"
    )
    p.add_argument(
        "--log-file",
        type=str,
        help="Write logs to file"
    )
    p.add_argument(
        "--config",
        type=str,
        help="Config file path (YAML/JSON)"
    )
    p.add_argument(
        "--angle",
        type=parse_angle,
        help="Shear angle in radians, or a multiple of pi such as 0.25pi"
    )
    p.add_argument(
        "--temperature-divisions",
        type=int,
        help="Override the number of temperature subdivisions"
    )
    p.add_argument(
        "--phi-divisions",
        type=int,
        help="Override the number of phi subdivisions"
    )
    p.add_argument(
        "--background-color",
        type=str,
        default=None,
        help="Figure background color (Matplotlib color spec, e.g. '#1f2328' or 'white')",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tephigram",
        description="Draw and query a tephigram",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ========================================================================
    # view subcommand
    # ========================================================================
    parser_view = subparsers.add_parser(
        "view",
        help="Open the interactive diagram"
    )
    _add_common_args(parser_view)
    parser_view.set_defaults(func=cmd_view)

    # ========================================================================
    # query subcommand
    # ========================================================================
    parser_query = subparsers.add_parser(
        "query",
        help="Print temperature, phi, pressure and mixing ratio at a screen point"
    )
    _add_common_args(parser_query)
    parser_query.add_argument(
        "--x",
        type=float,
        required=True,
        help="Screen X (canvas units)"
    )
    parser_query.add_argument(
        "--y",
        type=float,
        required=True,
        help="Screen Y (canvas units, growing downward)"
    )
    parser_query.set_defaults(func=cmd_query)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    setup_logging_from_args(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
