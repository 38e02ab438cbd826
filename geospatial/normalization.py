"""
Coordinate Normalization and Degeneracy Detection.

Every pairwise operation in the engine has to recognise the configurations in
which the usual formulas break down:

- coincident points, where no direction exists;
- antipodal points, where every direction is a shortest path;
- poles, where longitude carries no information.

The helpers here are the single place where those cases are decided, so the
spherical and ellipsoidal models agree on them.
"""

import numpy as np

from common.constants import ANTIPODAL_TOLERANCE_DEG
from common.types import Coordinate


def normalize_longitude(lon: float) -> float:
    """Map a finite longitude into (-180, 180].

    Parameters
    ----------
    lon : float
        Longitude in degrees.

    Returns
    -------
    float
        Equivalent longitude in (-180, 180].

    Notes
    -----
    Values already inside the range are returned untouched, which makes the
    function idempotent bit for bit. -180 maps to 180.
    """
    if -180.0 < lon <= 180.0:
        return float(lon)
    wrapped = float(np.fmod(lon + 180.0, 360.0))
    if wrapped <= 0.0:
        wrapped += 360.0
    return wrapped - 180.0


def is_polar(lat: float, tolerance: float = ANTIPODAL_TOLERANCE_DEG) -> bool:
    """True if `lat` is within `tolerance` degrees of either pole."""
    return abs(abs(lat) - 90.0) < tolerance


def are_antipodal(lat1: float, lon1: float, lat2: float, lon2: float) -> bool:
    """Check whether two points are diametrically opposite.

    Parameters
    ----------
    lat1, lon1 : float
        First point in degrees.
    lat2, lon2 : float
        Second point in degrees.

    Returns
    -------
    bool
        True if the points are antipodal within `ANTIPODAL_TOLERANCE_DEG`.
    """
    tol = ANTIPODAL_TOLERANCE_DEG

    # Exactly opposite poles
    if abs(lat1) == 90.0 and lat2 == -lat1:
        return True

    # One point near a pole and the other near the opposite pole
    if (abs(lat1 - 90.0) < tol and abs(lat2 + 90.0) < tol) or \
            (abs(lat1 + 90.0) < tol and abs(lat2 - 90.0) < tol):
        return True

    # Mirrored latitude, longitudes half a turn apart
    dlon = abs(normalize_longitude(lon1 - lon2))
    return abs(lat1 + lat2) < tol and abs(dlon - 180.0) < tol


def are_coincident(lat1: float, lon1: float, lat2: float, lon2: float) -> bool:
    """Check whether two coordinates name the same point.

    All longitudes at a pole are the same point, and 180 and -180 are the
    same meridian.
    """
    if lat1 != lat2:
        return False
    if abs(lat1) == 90.0:
        return True
    return normalize_longitude(lon1) == normalize_longitude(lon2)


def antipode_of(lat: float, lon: float) -> Coordinate:
    """Return the point diametrically opposite (`lat`, `lon`).

    Parameters
    ----------
    lat, lon : float
        Point in degrees.

    Returns
    -------
    Coordinate
        The antipode, longitude normalized.

    Notes
    -----
    The antipode of a pole is the other pole with longitude 0. The input
    longitude is discarded there, so `antipode_of` is its own inverse only
    for non-polar points. This loss is intentional: a pole has no longitude.
    """
    new_lat = -lat
    if abs(new_lat) == 90.0:
        return Coordinate(new_lat, 0.0)
    return Coordinate(new_lat, normalize_longitude(lon + 180.0))
