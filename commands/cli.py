"""CLI for geodesic calculations.

Usage:
    geocalc dist 59.91,10.75 60.39,5.32
    geocalc --karney bear 59.91,10.75 60.39,5.32
    geocalc -F gpx course 59.91,10.75 60.39,5.32 10
    geocalc --seed 1 -n 5 randpos 59.91,10.75 1000
"""

import argparse
import sys
from typing import List, Optional

from common.logging_config import get_logger, set_verbosity
from common.types import DistanceFormula
from reporting.render import OutputFormat
from commands import __version__
from commands.handlers import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    cmd_bear_dist,
    cmd_bpos,
    cmd_course,
    cmd_lpos,
    cmd_randpos,
)
from commands.options import CommandOptions

logger = get_logger(__name__)

LICENSE_TEXT = """\
This program is free software; you can redistribute it and/or modify it
under the terms of the GNU General Public License as published by the
Free Software Foundation; either version 2 of the License, or (at your
option) any later version.

This program is distributed in the hope that it will be useful, but
WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
See the GNU General Public License for more details.
"""

COMMANDS_HELP = """\
commands:
  bear <coor1> <coor2>               initial compass bearing (0-360)
  dist <coor1> <coor2>               distance between two points
  bpos <coor> <bearing> <length>     position after moving <length> along
                                     <bearing>; negative lengths go backwards
  course <coor1> <coor2> <numpoints> <numpoints> intermediate points on the
                                     line between two positions
  lpos <coor1> <coor2> <fracdist>    point at fraction <fracdist> of the way,
                                     values outside 0..1 extrapolate
  randpos [<coor> [<maxdist> [<mindist>]]]
                                     random positions, optionally limited to
                                     an area around <coor>

Coordinates are "lat,lon" in decimal degrees, lat in -90..90 and lon in
-180..180, using "." as the decimal separator.
"""

# command -> (minimum, maximum) number of arguments
ARG_COUNTS = {
    "bear": (2, 2),
    "dist": (2, 2),
    "bpos": (3, 3),
    "course": (3, 3),
    "lpos": (3, 3),
    "randpos": (0, 3),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geocalc",
        description="Geodesic calculations: distances, bearings and positions",
        epilog=COMMANDS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-F", "--format", type=str, default=None,
                        help="output format: default, gpx or sql")
    parser.add_argument("-K", "--karney", action="store_true",
                        help="use the WGS84 ellipsoid instead of a sphere for bear and dist")
    parser.add_argument("--km", action="store_true",
                        help="use kilometers instead of meters for input and output")
    parser.add_argument("-n", "--count", type=int, default=1,
                        help="number of positions generated by randpos")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed for randpos (default: time and process id)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="increase verbosity, can be repeated")
    parser.add_argument("-q", "--quiet", action="count", default=0,
                        help="decrease verbosity, can be repeated")
    parser.add_argument("--license", action="store_true", help="print the software license")
    parser.add_argument("--version", action="store_true", help="print version information")
    parser.add_argument("command", nargs="?", choices=sorted(ARG_COUNTS))
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def options_from_args(args: argparse.Namespace) -> CommandOptions:
    """Build `CommandOptions` from parsed arguments.

    Raises
    ------
    ValueError
        For an unknown output format.
    """
    return CommandOptions(
        count=args.count,
        formula=DistanceFormula.ELLIPSOIDAL if args.karney else DistanceFormula.SPHERICAL,
        output_format=OutputFormat.from_name(args.format),
        km=args.km,
        seed=args.seed,
        verbose=args.verbose - args.quiet,
    )


def wrong_argcount(command: str, got: int) -> bool:
    """Log and return True if `command` cannot take `got` arguments."""
    low, high = ARG_COUNTS[command]
    if got < low:
        logger.error("Missing arguments")
        return True
    if got > high:
        logger.error("Too many arguments")
        return True
    return False


def run_command(command: str, opts: CommandOptions, cmd_args: List[str]) -> int:
    """Dispatch a validated command to its handler."""
    if wrong_argcount(command, len(cmd_args)):
        return EXIT_FAILURE
    if command in ("bear", "dist"):
        return cmd_bear_dist(command, opts, *cmd_args)
    if command == "bpos":
        return cmd_bpos(opts, *cmd_args)
    if command == "course":
        return cmd_course(opts, *cmd_args)
    if command == "lpos":
        return cmd_lpos(opts, *cmd_args)
    return cmd_randpos(opts, *cmd_args)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        opts = options_from_args(args)
    except ValueError as err:
        logger.error(str(err))
        return EXIT_FAILURE
    set_verbosity(opts.verbose)
    logger.debug(f"Options: {opts}")

    if args.version:
        print(__version__ if opts.verbose < 0 else f"geocalc {__version__}")
        return EXIT_SUCCESS
    if args.license:
        print(LICENSE_TEXT, end="")
        return EXIT_SUCCESS
    if args.command is None:
        logger.error("No arguments specified")
        parser.print_usage(sys.stderr)
        return EXIT_FAILURE

    return run_command(args.command, opts, args.args)


if __name__ == "__main__":
    sys.exit(main())
