"""
Geodetic Constants for the Geodesic Calculation Engine.

This module provides the Earth-model constants with their uncertainty bounds
and sources, together with the numerical tolerances that define the precision
contract of every function in `geospatial` and `sampling`.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- Haversine sphere radius: the 6371 km convention used by most navigation
  software (rounded IUGG mean radius)
- Vincenty, T. (1975). Direct and inverse solutions of geodesics on the
  ellipsoid with application of nested equations. Survey Review 23(176).
"""

from dataclasses import dataclass
from typing import Final
import numpy as np


@dataclass(frozen=True)
class Constant:
    """A physical constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of Earth-model constants used throughout the engine.

    Sphere
    ------
    The spherical (haversine) model uses a fixed radius. Results from it are
    only comparable with other haversine results using the same radius.

    Ellipsoid (WGS84)
    -----------------
    These constants define the reference ellipsoid used for the iterative
    inverse geodesic.
    """

    # =========================================================================
    # Spherical model
    # =========================================================================

    EARTH_SPHERE_RADIUS: Final[Constant] = Constant(
        value=6_371_000.0,
        uncertainty=0.0,  # Convention, not a measurement
        unit="m",
        source="Rounded IUGG mean radius",
        description="Radius of the sphere used by the haversine model"
    )

    MAX_EARTH_DISTANCE: Final[Constant] = Constant(
        value=np.pi * 6_371_000.0,
        uncertainty=0.0,
        unit="m",
        source="Derived: half the great-circle circumference",
        description="Longest possible great-circle distance on the sphere"
    )

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    EARTH_FLATTENING: Final[Constant] = Constant(
        value=1.0 / 298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening of WGS84 ellipsoid: f = (a - b) / a"
    )


# =============================================================================
# Precision contract
#
# These are the tolerances every caller can rely on. Changing one of them
# changes observable results of the public functions.
# =============================================================================

ANTIPODAL_TOLERANCE_DEG: Final[float] = 1e-10
"""Absolute tolerance in degrees when deciding that two points are antipodal,
or that a computed latitude sits on a pole. 1e-10° is about 11 µm on the
ground, well below anything a decimal-degree input can express."""

POLE_NUDGE_FACTOR: Final[float] = 1e-9
"""Relative amount an exact polar start latitude is moved towards the equator
before forward positioning. At 90° this is 9e-8°, roughly 1 cm. Bearings
measured from an exact pole are otherwise degenerate."""

DISTANCE_CONVERGENCE: Final[float] = 1e-12
"""Stop the ellipsoidal distance iteration when λ changes by less than this
(radians). 1e-12 rad is about 6 µm at the equator."""

BEARING_CONVERGENCE: Final[float] = 1e-11
"""Stop the ellipsoidal bearing iteration when λ changes by less than this
(radians). Bearings are reported with fewer decimals than distances."""

MAX_ITERATIONS: Final[int] = 100
"""Iteration cap for the ellipsoidal solver. Well-conditioned inputs converge
in fewer than ten iterations; hitting the cap means the pair is nearly
antipodal and the method does not apply."""

MAX_SAMPLING_ATTEMPTS: Final[int] = 10_000
"""Cap on rejection-sampling rounds for a single random position. The
expected number of rounds is close to one for any non-degenerate annulus."""

SAMPLER_DISTANCE_TOLERANCE_M: Final[float] = 0.01
"""Slack in meters when checking a sampled point against its annulus. Covers
floating-point rounding of the round trip and the 1 cm pole nudge."""

HAVERSINE_DECIMALS: Final[int] = 6
"""Decimals printed for spherical results."""

KARNEY_DECIMALS: Final[int] = 8
"""Decimals printed for ellipsoidal results."""
