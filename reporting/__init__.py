"""
Output formatting for geocalc results.

Formats:
- default: plain decimal numbers and ``lat,lon`` pairs
- gpx: GPX 1.1 waypoints and routes
- sql: ``INSERT`` statements
"""

from reporting.render import OutputFormat, UnsupportedFormat, render_points, render_value
from reporting.gpx import gpx_document, gpx_route, gpx_wpt, xml_escape_string
from reporting.sql import sql_insert_point, sql_insert_value, sql_transaction
from reporting.text import format_coordinate, format_number, trim_zeros

__all__ = [
    "OutputFormat",
    "UnsupportedFormat",
    "render_points",
    "render_value",
    "gpx_document",
    "gpx_route",
    "gpx_wpt",
    "xml_escape_string",
    "sql_insert_point",
    "sql_insert_value",
    "sql_transaction",
    "format_coordinate",
    "format_number",
    "trim_zeros",
]
