"""
GPX 1.1 Output.

Waypoints and routes are rendered as text fragments and wrapped in a single
document by `gpx_document`. Coordinates are printed with six decimals and
trailing zeros removed; names and comments are XML-escaped.
"""

from typing import Iterable, Optional
from xml.sax.saxutils import escape

from common.types import Coordinate
from reporting.text import format_number, trim_zeros

GPX_CREATOR = "geocalc"

GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1" '
    f'creator="{GPX_CREATOR}">\n'
)
GPX_FOOTER = "</gpx>\n"


def xml_escape_string(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for use in XML text content."""
    return escape(text)


def _lat_lon_attrs(coord: Coordinate) -> str:
    lat = trim_zeros(format_number(coord.lat))
    lon = trim_zeros(format_number(coord.lon))
    return f'lat="{lat}" lon="{lon}"'


def gpx_wpt(coord: Coordinate, name: str, cmt: Optional[str] = None) -> str:
    """A ``<wpt>`` element.

    Parameters
    ----------
    coord : Coordinate
        Waypoint position.
    name : str
        Label shown on the map.
    cmt : str, optional
        Short description. Omitted from the output when None.
    """
    cmt_elem = f"    <cmt>{xml_escape_string(cmt)}</cmt>\n" if cmt is not None else ""
    return (
        f"  <wpt {_lat_lon_attrs(coord)}>\n"
        f"    <name>{xml_escape_string(name)}</name>\n"
        f"{cmt_elem}"
        f"  </wpt>\n"
    )


def gpx_route(points: Iterable[Coordinate], name: Optional[str] = None) -> str:
    """A ``<rte>`` element with one ``<rtept>`` per point."""
    lines = ["  <rte>\n"]
    if name is not None:
        lines.append(f"    <name>{xml_escape_string(name)}</name>\n")
    for coord in points:
        lines.append(f"    <rtept {_lat_lon_attrs(coord)}>\n    </rtept>\n")
    lines.append("  </rte>\n")
    return "".join(lines)


def gpx_document(*fragments: str) -> str:
    """Wrap waypoint and route fragments in a GPX document."""
    return GPX_HEADER + "".join(fragments) + GPX_FOOTER
