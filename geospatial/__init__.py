"""
Geospatial Module for geocalc.

All Earth-surface calculations in the project originate from this package.
The command layer and the random sampler only compose its functions.

This module provides:
- Longitude normalization and antipodal/coincidence detection
- Spherical (haversine) distance, bearing and forward position
- Ellipsoidal (WGS84) inverse geodesic by iteration
- Formula dispatch between the two Earth models
- Route interpolation along great circles
"""

from geospatial.normalization import (
    normalize_longitude,
    are_antipodal,
    are_coincident,
    antipode_of,
    is_polar,
)

from geospatial.spherical import (
    haversine_distance,
    initial_bearing,
    forward_position,
    MAX_EARTH_DISTANCE,
)

from geospatial.ellipsoidal import (
    EllipsoidParameters,
    WGS84Ellipsoid,
    InverseSolution,
    inverse_geodesic,
    ellipsoidal_distance,
    ellipsoidal_bearing,
)

from geospatial.formula_dispatch import distance, bearing

from geospatial.route import route_point, course_points

__all__ = [
    # Normalization
    "normalize_longitude",
    "are_antipodal",
    "are_coincident",
    "antipode_of",
    "is_polar",
    # Spherical model
    "haversine_distance",
    "initial_bearing",
    "forward_position",
    "MAX_EARTH_DISTANCE",
    # Ellipsoidal model
    "EllipsoidParameters",
    "WGS84Ellipsoid",
    "InverseSolution",
    "inverse_geodesic",
    "ellipsoidal_distance",
    "ellipsoidal_bearing",
    # Dispatch
    "distance",
    "bearing",
    # Routes
    "route_point",
    "course_points",
]
