"""
Great-Circle Calculations on a Spherical Earth.

This module implements the spherical (haversine) model: distance, initial
bearing and the forward problem (destination from start, bearing, distance)
on a sphere of radius `GeodeticConstants.EARTH_SPHERE_RADIUS`.

Scientific Context
------------------
Domain: Spherical trigonometry
Model: Sphere, R = 6 371 000 m

The spherical model is within about 0.5% of the ellipsoidal geodesic
everywhere and is cheap to evaluate. Use `geospatial.ellipsoidal` when the
difference matters.

Degenerate Cases
----------------
- Antipodal points: the haversine arc argument can round past 1, making the
  arc NaN. The distance is then reported as `MAX_EARTH_DISTANCE`, which is the
  exact answer for antipodes.
- Antipodal and coincident points have no unique bearing; `initial_bearing`
  reports `GeoErrorKind.UNDEFINED`.
- A start exactly on a pole is moved by `POLE_NUDGE_FACTOR` before forward
  positioning, since a compass bearing from the pole itself is meaningless.

References
----------
- Sinnott, R.W. (1984). Virtues of the Haversine. Sky and Telescope 68(2).
"""

import numpy as np

from common.constants import (
    GeodeticConstants,
    POLE_NUDGE_FACTOR,
)
from common.types import Coordinate, GeoErrorKind, GeoResult
from geospatial.normalization import (
    are_antipodal,
    are_coincident,
    is_polar,
    normalize_longitude,
)

EARTH_RADIUS = GeodeticConstants.EARTH_SPHERE_RADIUS.value
MAX_EARTH_DISTANCE = GeodeticConstants.MAX_EARTH_DISTANCE.value


def coordinates_in_range(*coords: float) -> bool:
    """Check alternating (lat, lon, lat, lon, ...) values against ±90/±180.

    NaN fails every comparison and is therefore rejected too.
    """
    lats = coords[0::2]
    lons = coords[1::2]
    return all(abs(lat) <= 90.0 for lat in lats) and \
        all(abs(lon) <= 180.0 for lon in lons)


def haversine_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> GeoResult[float]:
    """Great-circle distance between two points.

    Parameters
    ----------
    lat1, lon1 : float
        First point in degrees.
    lat2, lon2 : float
        Second point in degrees.

    Returns
    -------
    GeoResult[float]
        Distance in meters, or `GeoErrorKind.RANGE` if any latitude exceeds
        ±90° or any longitude exceeds ±180°.

    Examples
    --------
    >>> round(haversine_distance(90, 0, -90, 0).unwrap(), 3)
    20015086.796
    """
    if not coordinates_in_range(lat1, lon1, lat2, lon2):
        return GeoResult.failure(
            GeoErrorKind.RANGE,
            f"Coordinates out of range: ({lat1}, {lon1}), ({lat2}, {lon2})"
        )

    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    delta_phi = np.radians(lat2 - lat1)
    delta_lambda = np.radians(lon2 - lon1)

    sin_delta_phi = np.sin(delta_phi / 2.0)
    sin_delta_lambda = np.sin(delta_lambda / 2.0)

    hav = sin_delta_phi**2 + \
        np.cos(lat1_rad) * np.cos(lat2_rad) * sin_delta_lambda**2

    # sqrt(1 - hav) is NaN when rounding pushes hav past 1 (antipodes)
    with np.errstate(invalid="ignore"):
        arc = 2.0 * np.arctan2(np.sqrt(hav), np.sqrt(1.0 - hav))

    if np.isnan(arc):
        return GeoResult.success(MAX_EARTH_DISTANCE)

    return GeoResult.success(float(EARTH_RADIUS * arc))


def initial_bearing(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> GeoResult[float]:
    """Initial compass bearing from point 1 towards point 2.

    Parameters
    ----------
    lat1, lon1 : float
        Start point in degrees.
    lat2, lon2 : float
        Target point in degrees.

    Returns
    -------
    GeoResult[float]
        Bearing in degrees [0, 360), clockwise from north.
        `GeoErrorKind.RANGE` for out-of-range coordinates,
        `GeoErrorKind.UNDEFINED` for antipodal or coincident points.
    """
    if not coordinates_in_range(lat1, lon1, lat2, lon2):
        return GeoResult.failure(
            GeoErrorKind.RANGE,
            f"Coordinates out of range: ({lat1}, {lon1}), ({lat2}, {lon2})"
        )
    if are_antipodal(lat1, lon1, lat2, lon2):
        return GeoResult.failure(
            GeoErrorKind.UNDEFINED, "Bearing between antipodal points is undefined"
        )
    if are_coincident(lat1, lon1, lat2, lon2):
        return GeoResult.failure(
            GeoErrorKind.UNDEFINED, "Bearing between identical points is undefined"
        )

    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    delta_lambda = np.radians(lon2 - lon1)

    x = np.sin(delta_lambda) * np.cos(lat2_rad)
    y = np.cos(lat1_rad) * np.sin(lat2_rad) - \
        np.sin(lat1_rad) * np.cos(lat2_rad) * np.cos(delta_lambda)
    theta = np.arctan2(x, y)

    return GeoResult.success(float((np.degrees(theta) + 360.0) % 360.0))


def forward_position(
    lat: float,
    lon: float,
    bearing_deg: float,
    distance_m: float
) -> GeoResult[Coordinate]:
    """Destination after travelling `distance_m` along `bearing_deg`.

    Parameters
    ----------
    lat, lon : float
        Start point in degrees.
    bearing_deg : float
        Initial bearing in degrees, [0, 360].
    distance_m : float
        Distance in meters. Negative values travel the opposite way.

    Returns
    -------
    GeoResult[Coordinate]
        Destination with normalized longitude, or `GeoErrorKind.RANGE` for an
        invalid start, bearing or distance.

    Notes
    -----
    The destination latitude is computed as atan2(sin φ2, cos φ2) with cos φ2
    built from its two horizontal components. Unlike asin(sin φ2) this stays
    accurate within a few ulps of the poles. A destination on a pole (within
    `ANTIPODAL_TOLERANCE_DEG`) gets longitude 0.

    Examples
    --------
    >>> # Travel 1000 km due east from the equator
    >>> p = forward_position(0.0, 0.0, 90.0, 1_000_000).unwrap()
    >>> print(f"{p.lat:.4f}, {p.lon:.4f}")
    0.0000, 8.9932
    """
    if not 0.0 <= bearing_deg <= 360.0:
        return GeoResult.failure(
            GeoErrorKind.RANGE, f"Bearing {bearing_deg} outside [0, 360]"
        )
    if not coordinates_in_range(lat, lon):
        return GeoResult.failure(
            GeoErrorKind.RANGE, f"Coordinate out of range: ({lat}, {lon})"
        )
    if not np.isfinite(distance_m):
        return GeoResult.failure(
            GeoErrorKind.RANGE, f"Distance {distance_m} is not finite"
        )

    if abs(lat) == 90.0:
        lat = lat * (1.0 - POLE_NUDGE_FACTOR)

    phi1 = np.radians(lat)
    lambda1 = np.radians(lon)
    theta = np.radians(bearing_deg)
    delta = distance_m / EARTH_RADIUS

    sin_phi1, cos_phi1 = np.sin(phi1), np.cos(phi1)
    sin_delta, cos_delta = np.sin(delta), np.cos(delta)

    # Destination split into up, meridian-plane and east components
    up = sin_phi1 * cos_delta + cos_phi1 * sin_delta * np.cos(theta)
    north = cos_phi1 * cos_delta - sin_phi1 * sin_delta * np.cos(theta)
    east = sin_delta * np.sin(theta)

    phi2 = np.arctan2(up, np.hypot(north, east))
    lambda2 = lambda1 + np.arctan2(east, north)

    new_lat = float(np.degrees(phi2))
    if is_polar(new_lat):
        return GeoResult.success(Coordinate(new_lat, 0.0))
    return GeoResult.success(
        Coordinate(new_lat, normalize_longitude(float(np.degrees(lambda2))))
    )
