"""
Formula selection for distance and bearing queries.

Callers pick an Earth model with `DistanceFormula` and call `distance` or
`bearing`; this module routes the call to `geospatial.spherical` or
`geospatial.ellipsoidal`.
"""

from common.types import DistanceFormula, GeoResult, GeodesyDefect
from geospatial.ellipsoidal import ellipsoidal_bearing, ellipsoidal_distance
from geospatial.spherical import haversine_distance, initial_bearing


def distance(
    formula: DistanceFormula,
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> GeoResult[float]:
    """Distance in meters between two points using `formula`.

    Raises
    ------
    GeodesyDefect
        If `formula` is not a `DistanceFormula` member.
    """
    if formula is DistanceFormula.SPHERICAL:
        return haversine_distance(lat1, lon1, lat2, lon2)
    if formula is DistanceFormula.ELLIPSOIDAL:
        return ellipsoidal_distance(lat1, lon1, lat2, lon2)
    raise GeodesyDefect(f"Unknown distance formula: {formula!r}")


def bearing(
    formula: DistanceFormula,
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> GeoResult[float]:
    """Initial bearing in degrees from point 1 to point 2 using `formula`.

    Raises
    ------
    GeodesyDefect
        If `formula` is not a `DistanceFormula` member.
    """
    if formula is DistanceFormula.SPHERICAL:
        return initial_bearing(lat1, lon1, lat2, lon2)
    if formula is DistanceFormula.ELLIPSOIDAL:
        return ellipsoidal_bearing(lat1, lon1, lat2, lon2)
    raise GeodesyDefect(f"Unknown distance formula: {formula!r}")
