"""
Inverse Geodesic on the WGS84 Ellipsoid.

This module solves the inverse problem (distance and initial azimuth between
two points) on the reference ellipsoid with the classic reduced-latitude
iteration of Vincenty (1975).

Scientific Context
------------------
Domain: Geodesy, geodesics on an oblate ellipsoid of revolution
Model: WGS84 (a = 6 378 137 m, f = 1/298.257223563)

Method
------
1. Replace geodetic latitudes φ by reduced latitudes U = atan((1 - f) tan φ).
2. Start with λ = L, the longitude difference, and iterate

       λ ← L + (1 - C) f sin α [σ + C sin σ (cos 2σm + C cos σ (2 cos² 2σm - 1))]

   until λ changes by less than the convergence threshold.
3. Evaluate the series for the geodesic length s = b A (σ - Δσ).

Known Limitations
-----------------
The iteration does not converge for nearly antipodal points. That outcome is
reported as `GeoErrorKind.NO_CONVERGENCE`; no fallback value is substituted.

References
----------
- Vincenty, T. (1975). Survey Review 23(176), 88-93.
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1).
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from common.constants import (
    BEARING_CONVERGENCE,
    DISTANCE_CONVERGENCE,
    GeodeticConstants,
    MAX_ITERATIONS,
)
from common.types import GeoErrorKind, GeoResult
from geospatial.normalization import are_antipodal, are_coincident, normalize_longitude
from geospatial.spherical import coordinates_in_range


@dataclass(frozen=True)
class EllipsoidParameters:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    f : float
        Flattening: f = (a - b) / a
    name : str
        Identifier for the ellipsoid.

    Derived Parameters
    ------------------
    b : float
        Semi-minor axis (polar radius) in meters.
    e2 : float
        First eccentricity squared: e² = (a² - b²) / a²
    ep2 : float
        Second eccentricity squared: e'² = (a² - b²) / b²
    """
    a: float
    f: float
    name: str

    @property
    def b(self) -> float:
        """Semi-minor axis in meters."""
        return self.a * (1 - self.f)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return self.f * (2 - self.f)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1 - self.e2)


# WGS84 ellipsoid - the reference for every ellipsoidal calculation
WGS84Ellipsoid = EllipsoidParameters(
    a=GeodeticConstants.EARTH_SEMI_MAJOR_AXIS.value,
    f=GeodeticConstants.EARTH_FLATTENING.value,
    name="WGS84"
)


@dataclass
class InverseSolution:
    """Converged state of the inverse iteration.

    Attributes
    ----------
    distance_m : float
        Geodesic length in meters.
    azimuth_deg : float
        Forward azimuth at point 1, degrees [0, 360).
    iterations : int
        Number of λ updates performed.
    """
    distance_m: float
    azimuth_deg: float
    iterations: int


def inverse_geodesic(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    tolerance: float = DISTANCE_CONVERGENCE,
    max_iterations: int = MAX_ITERATIONS,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> GeoResult[InverseSolution]:
    """Solve the inverse geodesic problem by fixed-point iteration on λ.

    Parameters
    ----------
    lat1, lon1 : float
        First point in degrees.
    lat2, lon2 : float
        Second point in degrees.
    tolerance : float
        Convergence threshold on successive λ values, in radians.
    max_iterations : int
        Iteration cap.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    GeoResult[InverseSolution]
        The solution, `GeoErrorKind.RANGE` for out-of-range input or
        `GeoErrorKind.NO_CONVERGENCE` when the cap is reached. Coincident
        points return a zero-length solution with a NaN azimuth; callers
        that need a bearing must screen them first.
    """
    if not coordinates_in_range(lat1, lon1, lat2, lon2):
        return GeoResult.failure(
            GeoErrorKind.RANGE,
            f"Coordinates out of range: ({lat1}, {lon1}), ({lat2}, {lon2})"
        )

    if are_coincident(lat1, lon1, lat2, lon2):
        return GeoResult.success(
            InverseSolution(distance_m=0.0, azimuth_deg=float("nan"), iterations=0)
        )

    f = ellipsoid.f
    b = ellipsoid.b

    L = np.radians(normalize_longitude(lon2 - lon1))
    U1 = np.arctan((1.0 - f) * np.tan(np.radians(lat1)))
    U2 = np.arctan((1.0 - f) * np.tan(np.radians(lat2)))
    sin_U1, cos_U1 = np.sin(U1), np.cos(U1)
    sin_U2, cos_U2 = np.sin(U2), np.cos(U2)

    lam = L
    converged = False
    iterations = 0
    sin_lam = cos_lam = 0.0
    sin_sigma = cos_sigma = sigma = cos2_alpha = cos_2sigma_m = 0.0

    for iterations in range(1, max_iterations + 1):
        sin_lam, cos_lam = np.sin(lam), np.cos(lam)
        sin_sigma = np.hypot(
            cos_U2 * sin_lam,
            cos_U1 * sin_U2 - sin_U1 * cos_U2 * cos_lam
        )
        if sin_sigma == 0.0:
            return GeoResult.success(
                InverseSolution(distance_m=0.0, azimuth_deg=float("nan"),
                                iterations=iterations)
            )

        cos_sigma = sin_U1 * sin_U2 + cos_U1 * cos_U2 * cos_lam
        sigma = np.arctan2(sin_sigma, cos_sigma)
        sin_alpha = cos_U1 * cos_U2 * sin_lam / sin_sigma
        cos2_alpha = 1.0 - sin_alpha**2

        if cos2_alpha != 0.0:
            cos_2sigma_m = cos_sigma - 2.0 * sin_U1 * sin_U2 / cos2_alpha
        else:
            cos_2sigma_m = 0.0  # equatorial line

        C = f / 16.0 * cos2_alpha * (4.0 + f * (4.0 - 3.0 * cos2_alpha))
        lam_prev = lam
        lam = L + (1.0 - C) * f * sin_alpha * (
            sigma + C * sin_sigma * (
                cos_2sigma_m + C * cos_sigma * (-1.0 + 2.0 * cos_2sigma_m**2)
            )
        )
        if abs(lam - lam_prev) < tolerance:
            converged = True
            break

    if not converged:
        return GeoResult.failure(
            GeoErrorKind.NO_CONVERGENCE,
            f"No convergence after {max_iterations} iterations for "
            f"({lat1}, {lon1}), ({lat2}, {lon2})"
        )

    u2 = cos2_alpha * ellipsoid.ep2
    A = 1.0 + u2 / 16384.0 * (4096.0 + u2 * (-768.0 + u2 * (320.0 - 175.0 * u2)))
    B = u2 / 1024.0 * (256.0 + u2 * (-128.0 + u2 * (74.0 - 47.0 * u2)))
    delta_sigma = B * sin_sigma * (
        cos_2sigma_m + B / 4.0 * (
            cos_sigma * (-1.0 + 2.0 * cos_2sigma_m**2)
            - B / 6.0 * cos_2sigma_m * (-3.0 + 4.0 * sin_sigma**2)
            * (-3.0 + 4.0 * cos_2sigma_m**2)
        )
    )
    distance_m = b * A * (sigma - delta_sigma)

    # Azimuth from the final λ
    alpha1 = np.arctan2(
        cos_U2 * np.sin(lam),
        cos_U1 * sin_U2 - sin_U1 * cos_U2 * np.cos(lam)
    )

    return GeoResult.success(
        InverseSolution(
            distance_m=float(distance_m),
            azimuth_deg=float((np.degrees(alpha1) + 360.0) % 360.0),
            iterations=iterations
        )
    )


def ellipsoidal_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> GeoResult[float]:
    """Geodesic distance on the WGS84 ellipsoid.

    Parameters
    ----------
    lat1, lon1 : float
        First point in degrees.
    lat2, lon2 : float
        Second point in degrees.

    Returns
    -------
    GeoResult[float]
        Distance in meters. Fails with `GeoErrorKind.RANGE` or
        `GeoErrorKind.NO_CONVERGENCE`.

    Examples
    --------
    >>> round(ellipsoidal_distance(90, 0, -90, 0).unwrap(), 3)
    20003931.459
    """
    result = inverse_geodesic(lat1, lon1, lat2, lon2, tolerance=DISTANCE_CONVERGENCE)
    if not result.ok:
        return GeoResult.failure(result.error, result.message)
    return GeoResult.success(result.value.distance_m)


def ellipsoidal_bearing(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> GeoResult[float]:
    """Initial azimuth of the geodesic from point 1 to point 2.

    Parameters
    ----------
    lat1, lon1 : float
        Start point in degrees.
    lat2, lon2 : float
        Target point in degrees.

    Returns
    -------
    GeoResult[float]
        Azimuth in degrees [0, 360). `GeoErrorKind.UNDEFINED` for antipodal,
        coincident or same-pole pairs, `GeoErrorKind.RANGE` for out-of-range
        input and `GeoErrorKind.NO_CONVERGENCE` if the iteration fails.

    Notes
    -----
    The degenerate pairs are rejected before iterating. For them the
    iteration may well converge, but the azimuth it yields is arbitrary.
    """
    if not coordinates_in_range(lat1, lon1, lat2, lon2):
        return GeoResult.failure(
            GeoErrorKind.RANGE,
            f"Coordinates out of range: ({lat1}, {lon1}), ({lat2}, {lon2})"
        )
    undefined = _undefined_bearing_reason(lat1, lon1, lat2, lon2)
    if undefined is not None:
        return GeoResult.failure(GeoErrorKind.UNDEFINED, undefined)

    result = inverse_geodesic(lat1, lon1, lat2, lon2, tolerance=BEARING_CONVERGENCE)
    if not result.ok:
        return GeoResult.failure(result.error, result.message)
    if np.isnan(result.value.azimuth_deg):
        return GeoResult.failure(
            GeoErrorKind.UNDEFINED, "Bearing between identical points is undefined"
        )
    return GeoResult.success(result.value.azimuth_deg)


def _undefined_bearing_reason(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> Optional[str]:
    if are_antipodal(lat1, lon1, lat2, lon2):
        return "Bearing between antipodal points is undefined"
    if abs(lat1) == 90.0 and lat1 == lat2:
        return "Bearing between points on the same pole is undefined"
    if are_coincident(lat1, lon1, lat2, lon2):
        return "Bearing between identical points is undefined"
    return None
