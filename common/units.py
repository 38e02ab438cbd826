"""
Unit Registry for Distance Conversions.

The engine works in meters and degrees only. Conversions happen at the edges
(the command layer, when the user asks for kilometers) through a single
`pint` registry, so a unit mix-up fails loudly instead of producing a number
that is off by a factor of 1000.

Example Usage
-------------
>>> from common.units import to_meters, from_meters
>>> to_meters(12.5, 'km')
12500.0
>>> from_meters(12500.0, 'km')
12.5
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

ENGINE_DISTANCE_UNIT = "meter"


def ensure_quantity(value: Union[float, pint.Quantity], default_unit: str) -> pint.Quantity:
    """Ensure a value is a pint Quantity, applying default unit if necessary.

    Parameters
    ----------
    value : float or pint.Quantity
        The value to convert.
    default_unit : str
        The unit to apply if value is a bare number.

    Returns
    -------
    pint.Quantity
        The value with units.

    Raises
    ------
    ValueError
        If `value` is a quantity that is not a length.
    """
    if isinstance(value, pint.Quantity):
        if value.dimensionality != ureg.meter.dimensionality:
            raise ValueError(f"Expected a length, got {value.units}")
        return value
    return Q_(value, default_unit)


def to_meters(value: Union[float, pint.Quantity], unit: str = ENGINE_DISTANCE_UNIT) -> float:
    """Convert a distance to a bare float in meters.

    Parameters
    ----------
    value : float or pint.Quantity
        Distance. Bare numbers are interpreted in `unit`.
    unit : str
        Unit of bare numbers, e.g. 'm' or 'km'.

    Returns
    -------
    float
        Distance in meters.
    """
    return float(ensure_quantity(value, unit).to(ENGINE_DISTANCE_UNIT).magnitude)


def from_meters(meters: float, unit: str = ENGINE_DISTANCE_UNIT) -> float:
    """Convert a distance in meters to a bare float in `unit`."""
    return float(Q_(meters, ENGINE_DISTANCE_UNIT).to(unit).magnitude)
