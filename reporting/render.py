"""
Output format selection.

Command handlers produce either one scalar (bearing, distance) or a sequence
of points; `render_value` and `render_points` turn those into text in the
format the user asked for.
"""

from enum import Enum
from typing import List, Optional

from common.constants import HAVERSINE_DECIMALS
from common.types import Coordinate
from reporting.gpx import gpx_document, gpx_route, gpx_wpt
from reporting.sql import sql_insert_point, sql_insert_value, sql_transaction
from reporting.text import format_coordinate, format_number


class OutputFormat(Enum):
    """Output formats selectable with -F/--format."""
    DEFAULT = "default"
    GPX = "gpx"
    SQL = "sql"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "OutputFormat":
        """Parse a --format argument. None and "" select DEFAULT.

        Raises
        ------
        ValueError
            For an unknown format name.
        """
        if not name:
            return cls.DEFAULT
        for member in cls:
            if member.value == name:
                return member
        raise ValueError(f"{name}: Unknown output format")


class UnsupportedFormat(ValueError):
    """The selected format cannot represent this kind of result."""


def render_value(
    value: float,
    fmt: OutputFormat,
    table: str,
    decimals: int = HAVERSINE_DECIMALS
) -> str:
    """Render a scalar result (bearing or distance).

    Raises
    ------
    UnsupportedFormat
        For GPX, which has no representation for a bare number.
    """
    if fmt is OutputFormat.DEFAULT:
        return format_number(value, decimals) + "\n"
    if fmt is OutputFormat.SQL:
        return sql_insert_value(table, value, decimals)
    raise UnsupportedFormat(f"Output format {fmt.value} is not supported for {table}")


def render_points(
    points: List[Coordinate],
    fmt: OutputFormat,
    table: str,
    as_route: bool = False
) -> str:
    """Render a list of points.

    Parameters
    ----------
    points : list of Coordinate
        Points in output order.
    fmt : OutputFormat
        Selected format.
    table : str
        Command name, used as SQL table and GPX route name.
    as_route : bool
        In GPX, emit one ``<rte>`` instead of numbered waypoints.
    """
    if fmt is OutputFormat.DEFAULT:
        return "".join(format_coordinate(p) + "\n" for p in points)
    if fmt is OutputFormat.SQL:
        return sql_transaction(sql_insert_point(table, p) for p in points)
    if as_route:
        return gpx_document(gpx_route(points, name=table))
    return gpx_document(*(gpx_wpt(p, str(i)) for i, p in enumerate(points, start=1)))
