"""Plain decimal output."""

from common.constants import HAVERSINE_DECIMALS
from common.types import Coordinate


def format_number(value: float, decimals: int = HAVERSINE_DECIMALS) -> str:
    """Fixed-point representation, e.g. ``format_number(1.5) == '1.500000'``."""
    return f"{value:.{decimals}f}"


def format_coordinate(coord: Coordinate, decimals: int = HAVERSINE_DECIMALS) -> str:
    """``lat,lon`` with `decimals` decimals each."""
    return f"{format_number(coord.lat, decimals)},{format_number(coord.lon, decimals)}"


def trim_zeros(number: str) -> str:
    """Remove trailing zeros after the decimal point, and a bare point.

    ``'12.340000'`` becomes ``'12.34'``, ``'90.000000'`` becomes ``'90'``.
    Strings without a decimal point are returned unchanged.
    """
    if "." not in number:
        return number
    trimmed = number.rstrip("0").rstrip(".")
    if trimmed in ("", "-", "-0"):
        return "0"
    return trimmed
