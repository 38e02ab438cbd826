"""
Points Along a Great-Circle Route.

A route point is found by walking from the start along the initial bearing
towards the end, for a fraction of the total great-circle distance. The
composition (bearing, then scaled distance, then forward position) uses the
spherical model throughout, so every point lies on the same great circle.
"""

from typing import List

from common.types import Coordinate, GeoErrorKind, GeoResult
from geospatial.normalization import are_coincident, normalize_longitude
from geospatial.spherical import forward_position, haversine_distance, initial_bearing


def route_point(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    fraction: float
) -> GeoResult[Coordinate]:
    """Point a given fraction of the way from point 1 to point 2.

    Parameters
    ----------
    lat1, lon1 : float
        Start point in degrees.
    lat2, lon2 : float
        End point in degrees.
    fraction : float
        0 is the start, 1 the end. Values below 0 or above 1 extrapolate
        behind the start or beyond the end.

    Returns
    -------
    GeoResult[Coordinate]
        The point, `GeoErrorKind.RANGE` for out-of-range input or
        `GeoErrorKind.UNDEFINED` for antipodal endpoints (every great circle
        through them is a shortest path).

    Examples
    --------
    >>> p = route_point(45, 0, 45, 180, 0.5).unwrap()
    >>> round(p.lat, 6), p.lon
    (90.0, 0.0)
    """
    dist = haversine_distance(lat1, lon1, lat2, lon2)
    if not dist.ok:
        return GeoResult.failure(dist.error, dist.message)

    if are_coincident(lat1, lon1, lat2, lon2):
        return GeoResult.success(Coordinate(lat1, normalize_longitude(lon1)))

    bearing = initial_bearing(lat1, lon1, lat2, lon2)
    if not bearing.ok:
        return GeoResult.failure(bearing.error, bearing.message)

    return forward_position(lat1, lon1, bearing.value, dist.value * fraction)


def course_points(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    num_points: int
) -> GeoResult[List[Coordinate]]:
    """Evenly spaced points on the great circle between two endpoints.

    Parameters
    ----------
    lat1, lon1 : float
        Start point in degrees.
    lat2, lon2 : float
        End point in degrees.
    num_points : int
        Number of intermediate points. 0 returns just the endpoints.

    Returns
    -------
    GeoResult[List[Coordinate]]
        ``num_points + 2`` coordinates from start to end, or the first
        failure encountered.
    """
    if num_points < 0:
        return GeoResult.failure(
            GeoErrorKind.RANGE, f"Number of points {num_points} is negative"
        )

    segments = num_points + 1
    points = []
    for i in range(segments + 1):
        result = route_point(lat1, lon1, lat2, lon2, i / segments)
        if not result.ok:
            return GeoResult.failure(result.error, result.message)
        points.append(result.value)

    return GeoResult.success(points)
