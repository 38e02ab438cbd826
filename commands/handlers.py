"""
Command handlers.

Each handler parses its string arguments, calls the engine, renders the
result in the selected format and returns a process exit status. Failures
are logged at ERROR with the same wording for every command:

- unparsable input: "Invalid number specified"
- `GeoErrorKind` failures: the kind's message, e.g. "Value out of range"
"""

from typing import Optional, TextIO
import sys

from common.constants import HAVERSINE_DECIMALS, KARNEY_DECIMALS
from common.logging_config import get_logger
from common.types import Coordinate, DistanceFormula, GeodesyError, GeoErrorKind
from geospatial.formula_dispatch import bearing, distance
from geospatial.route import course_points, route_point
from geospatial.spherical import forward_position
from reporting.render import UnsupportedFormat, render_points, render_value
from sampling.random_positions import RandomPositionSampler, SamplerConfig
from commands.options import CommandOptions, parse_coordinate, string_to_float

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _emit(text: str, out: Optional[TextIO]) -> None:
    (out or sys.stdout).write(text)


def _invalid_number(err: ValueError) -> int:
    logger.debug(f"Parse error: {err}")
    logger.error("Invalid number specified")
    return EXIT_FAILURE


def _engine_failure(err: GeodesyError) -> int:
    logger.debug(f"Engine error: {err}")
    logger.error(err.kind.value)
    return EXIT_FAILURE


def cmd_bear_dist(
    cmd: str,
    opts: CommandOptions,
    coor1: str,
    coor2: str,
    out: Optional[TextIO] = None
) -> int:
    """Execute `bear` or `dist`, as selected by `cmd`."""
    logger.debug(f"cmd_bear_dist({cmd!r}, {coor1!r}, {coor2!r})")
    try:
        p1 = parse_coordinate(coor1)
        p2 = parse_coordinate(coor2)
    except ValueError as err:
        return _invalid_number(err)

    decimals = KARNEY_DECIMALS if opts.formula is DistanceFormula.ELLIPSOIDAL \
        else HAVERSINE_DECIMALS
    try:
        if cmd == "bear":
            value = bearing(opts.formula, p1.lat, p1.lon, p2.lat, p2.lon).unwrap()
        else:
            meters = distance(opts.formula, p1.lat, p1.lon, p2.lat, p2.lon).unwrap()
            value = opts.distance_out(meters)
        _emit(render_value(value, opts.output_format, cmd, decimals), out)
    except GeodesyError as err:
        return _engine_failure(err)
    except UnsupportedFormat as err:
        logger.error(str(err))
        return EXIT_FAILURE

    return EXIT_SUCCESS


def cmd_bpos(
    opts: CommandOptions,
    coor: str,
    bearing_s: str,
    dist_s: str,
    out: Optional[TextIO] = None
) -> int:
    """Execute `bpos`: position after moving a distance along a bearing."""
    logger.debug(f"cmd_bpos({coor!r}, {bearing_s!r}, {dist_s!r})")
    try:
        start = parse_coordinate(coor)
        bearing_deg = string_to_float(bearing_s)
        dist_m = opts.distance_in(string_to_float(dist_s))
    except ValueError as err:
        return _invalid_number(err)

    try:
        dest = forward_position(start.lat, start.lon, bearing_deg, dist_m).unwrap()
    except GeodesyError as err:
        return _engine_failure(err)

    _emit(render_points([dest], opts.output_format, "bpos"), out)
    return EXIT_SUCCESS


def cmd_course(
    opts: CommandOptions,
    coor1: str,
    coor2: str,
    numpoints_s: str,
    out: Optional[TextIO] = None
) -> int:
    """Execute `course`: intermediate points on the line between two points."""
    logger.debug(f"cmd_course({coor1!r}, {coor2!r}, {numpoints_s!r})")
    try:
        p1 = parse_coordinate(coor1)
        p2 = parse_coordinate(coor2)
        numpoints = string_to_float(numpoints_s)
    except ValueError as err:
        return _invalid_number(err)
    if numpoints != int(numpoints):
        logger.error("Invalid number specified")
        return EXIT_FAILURE

    try:
        points = course_points(p1.lat, p1.lon, p2.lat, p2.lon, int(numpoints)).unwrap()
    except GeodesyError as err:
        return _engine_failure(err)

    _emit(render_points(points, opts.output_format, "course", as_route=True), out)
    return EXIT_SUCCESS


def cmd_lpos(
    opts: CommandOptions,
    coor1: str,
    coor2: str,
    fracdist_s: str,
    out: Optional[TextIO] = None
) -> int:
    """Execute `lpos`: point a fraction of the way between two points."""
    logger.debug(f"cmd_lpos({coor1!r}, {coor2!r}, {fracdist_s!r})")
    try:
        p1 = parse_coordinate(coor1)
        p2 = parse_coordinate(coor2)
        fraction = string_to_float(fracdist_s)
    except ValueError as err:
        return _invalid_number(err)

    try:
        point = route_point(p1.lat, p1.lon, p2.lat, p2.lon, fraction).unwrap()
    except GeodesyError as err:
        return _engine_failure(err)

    _emit(render_points([point], opts.output_format, "lpos"), out)
    return EXIT_SUCCESS


def cmd_randpos(
    opts: CommandOptions,
    coor: Optional[str] = None,
    maxdist_s: Optional[str] = None,
    mindist_s: Optional[str] = None,
    out: Optional[TextIO] = None
) -> int:
    """Execute `randpos`: `opts.count` random positions.

    Without a coordinate the positions cover the whole Earth; with one they
    fall within `maxdist` (and beyond `mindist`) of it.
    """
    logger.debug(f"cmd_randpos({coor!r}, {maxdist_s!r}, {mindist_s!r})")
    if opts.count < 0:
        logger.error(GeoErrorKind.RANGE.value)
        return EXIT_FAILURE

    center: Optional[Coordinate] = None
    max_dist = min_dist = 0.0
    try:
        if coor is not None:
            center = parse_coordinate(coor)
        if maxdist_s is not None:
            max_dist = opts.distance_in(string_to_float(maxdist_s))
        if mindist_s is not None:
            min_dist = opts.distance_in(string_to_float(mindist_s))
    except ValueError as err:
        return _invalid_number(err)

    sampler = RandomPositionSampler(SamplerConfig(random_seed=opts.seed))
    logger.debug(f"Random seed: {sampler.seed}")
    try:
        points = [
            result.unwrap()
            for result in sampler.sample_many(center, max_dist, min_dist, opts.count)
        ]
    except GeodesyError as err:
        return _engine_failure(err)

    _emit(render_points(points, opts.output_format, "randpos"), out)
    return EXIT_SUCCESS
