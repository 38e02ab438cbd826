"""
SQL Output.

Results are emitted as ``INSERT`` statements for a table named after the
command that produced them. Points go into a ``coor`` column as a
PostgreSQL ``point`` literal, scalar results into a ``value`` column.
"""

from typing import Iterable

from common.types import Coordinate
from reporting.text import format_coordinate, format_number


def sql_escape(text: str) -> str:
    """Escape a string for use inside single quotes."""
    return text.replace("'", "''")


def sql_insert_point(table: str, coord: Coordinate) -> str:
    """``INSERT INTO <table> (coor) VALUES ('(lat,lon)');``"""
    value = sql_escape(f"({format_coordinate(coord)})")
    return f"INSERT INTO {table} (coor) VALUES ('{value}');\n"


def sql_insert_value(table: str, value: float, decimals: int) -> str:
    """``INSERT INTO <table> (value) VALUES (<number>);``"""
    return f"INSERT INTO {table} (value) VALUES ({format_number(value, decimals)});\n"


def sql_transaction(statements: Iterable[str]) -> str:
    """Wrap statements in ``BEGIN;`` / ``COMMIT;``."""
    return "BEGIN;\n" + "".join(statements) + "COMMIT;\n"
