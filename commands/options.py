"""
Command options and input parsing.

`CommandOptions` carries everything a command handler needs to know about
the invocation. The parsers turn command line strings into the floats and
`Coordinate` values the engine works with.
"""

from dataclasses import dataclass
from typing import Optional
import re

from common.types import Coordinate, DistanceFormula
from common.units import from_meters, to_meters
from reporting.render import OutputFormat

# Decimal number, optionally followed by whitespace or commas left over from
# copy and paste. No nan, inf, hex or digit separators.
_NUMBER_RE = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)[\s,]*")


@dataclass
class CommandOptions:
    """Options shared by all commands.

    Attributes
    ----------
    count : int
        Number of positions generated by `randpos`.
    formula : DistanceFormula
        Earth model for `bear` and `dist`.
    output_format : OutputFormat
        Output format.
    km : bool
        Distances are read and written in kilometers instead of meters.
    seed : Optional[int]
        Random seed for `randpos`. None derives one from time and pid.
    verbose : int
        Verbosity counter, -q decrements and -v increments it.
    """
    count: int = 1
    formula: DistanceFormula = DistanceFormula.SPHERICAL
    output_format: OutputFormat = OutputFormat.DEFAULT
    km: bool = False
    seed: Optional[int] = None
    verbose: int = 0

    @property
    def distance_unit(self) -> str:
        return "km" if self.km else "m"

    def distance_in(self, value: float) -> float:
        """User distance to meters."""
        return to_meters(value, self.distance_unit)

    def distance_out(self, meters: float) -> float:
        """Meters to user distance."""
        return from_meters(meters, self.distance_unit)


def string_to_float(s: str) -> float:
    """Parse a decimal number.

    Raises
    ------
    ValueError
        If `s` is not a decimal number, or is too large to represent.
    """
    match = _NUMBER_RE.fullmatch(s)
    if match is None:
        raise ValueError(f"Invalid number: {s!r}")
    value = float(match.group(1))
    if value in (float("inf"), float("-inf")):
        raise ValueError(f"Number out of range: {s!r}")
    return value


def parse_coordinate(s: str) -> Coordinate:
    """Parse ``lat,lon`` in decimal degrees.

    Parameters
    ----------
    s : str
        Coordinate string, e.g. ``"59.91,10.75"``.

    Raises
    ------
    ValueError
        If the string is malformed. Range checks are left to the engine.
    """
    lat_s, sep, lon_s = s.partition(",")
    if not sep:
        raise ValueError(f"Missing longitude in coordinate: {s!r}")
    return Coordinate(string_to_float(lat_s), string_to_float(lon_s))
