"""
Random Geographic Positions.

This module draws random points on the sphere, either uniformly over the
whole surface or uniformly (by area) inside an annulus around a center.

Purpose
-------
Random positions are used for test fixtures and for exercising the engine
with realistic spreads of input. Runs must be reproducible, so every sampler
owns its own seeded generator:

1. One `RandomPositionSampler` is one reproducible stream.
2. Two samplers built with the same seed produce the same points.
3. Streams never interfere with each other, unlike a process-wide generator.
"""

from dataclasses import dataclass
from typing import Iterator, Optional
import os
import time

import numpy as np

from common.constants import MAX_SAMPLING_ATTEMPTS, SAMPLER_DISTANCE_TOLERANCE_M
from common.types import Coordinate, GeoErrorKind, GeoResult
from geospatial.normalization import antipode_of
from geospatial.spherical import MAX_EARTH_DISTANCE, forward_position, haversine_distance


def default_seed() -> int:
    """Seed derived from the wall clock and the process id.

    Two processes started in the same second still get different seeds.
    """
    return (int(time.time()) ^ (os.getpid() << 16)) & 0xFFFFFFFF


@dataclass
class SamplerConfig:
    """Configuration for random position sampling.

    Attributes
    ----------
    random_seed : Optional[int]
        Seed for the generator. None derives one with `default_seed`.
    max_attempts : int
        Rejection-sampling rounds allowed per point.
    distance_tolerance_m : float
        Slack when checking a candidate against its annulus, in meters.
    """
    random_seed: Optional[int] = None
    max_attempts: int = MAX_SAMPLING_ATTEMPTS
    distance_tolerance_m: float = SAMPLER_DISTANCE_TOLERANCE_M

    def resolve_seed(self) -> int:
        """Return the configured seed, or derive one if unset."""
        if self.random_seed is not None:
            return self.random_seed
        return default_seed()


class RandomPositionSampler:
    """Seeded source of random geographic positions.

    Examples
    --------
    >>> sampler = RandomPositionSampler(SamplerConfig(random_seed=1))
    >>> p = sampler.sample_annulus(Coordinate(12.0, 34.0), 1000.0).unwrap()
    >>> -90.0 <= p.lat <= 90.0
    True
    """

    def __init__(self, config: Optional[SamplerConfig] = None):
        """Initialize the sampler.

        Parameters
        ----------
        config : SamplerConfig, optional
            Sampling configuration. Defaults to an unseeded configuration.
        """
        self.config = config or SamplerConfig()
        self.seed = self.config.resolve_seed()
        self.rng = np.random.default_rng(self.seed)

    def uniform_global_point(self) -> Coordinate:
        """Point uniformly distributed over the whole sphere.

        Latitude is asin(v) for v uniform in [-1, 1), which spreads points
        evenly by area rather than by angle. Longitude is uniform in
        [-180, 180).
        """
        lat = np.degrees(np.arcsin(2.0 * self.rng.random() - 1.0))
        lon = self.rng.uniform(-180.0, 180.0)
        return Coordinate(float(lat), float(lon))

    def sample_annulus(
        self,
        center: Coordinate,
        max_dist: float,
        min_dist: float = 0.0
    ) -> GeoResult[Coordinate]:
        """Point whose great-circle distance from `center` is in [min, max].

        Parameters
        ----------
        center : Coordinate
            Center of the annulus.
        max_dist : float
            Outer radius in meters. 0 means no outer limit.
        min_dist : float
            Inner radius in meters.

        Returns
        -------
        GeoResult[Coordinate]
            The point, `GeoErrorKind.RANGE` for an invalid center or
            negative distances, or `GeoErrorKind.SAMPLING_EXHAUSTED` if no
            candidate was accepted within `max_attempts` rounds.

        Notes
        -----
        - Both radii 0: the whole sphere.
        - Only a minimum: everything at least `min_dist` away is the disk of
          radius MAX_EARTH_DISTANCE - min_dist around the antipode, which is
          sampled instead.
        - Radii are swapped if given in the wrong order. A minimum beyond
          MAX_EARTH_DISTANCE is a range error; a larger maximum is clamped
          to it.
        - The candidate radius is sqrt(u (max² - min²) + min²), which keeps
          the density uniform by area instead of crowding the inner edge.
        - With min == max every candidate lies on the ring and is accepted
          without the distance check.
        """
        if not center.in_range:
            return GeoResult.failure(
                GeoErrorKind.RANGE, f"Center out of range: {center.as_tuple()}"
            )
        if not (np.isfinite(max_dist) and np.isfinite(min_dist)) \
                or max_dist < 0.0 or min_dist < 0.0:
            return GeoResult.failure(
                GeoErrorKind.RANGE,
                f"Invalid distances: max={max_dist}, min={min_dist}"
            )

        if max_dist == 0.0 and min_dist == 0.0:
            return GeoResult.success(self.uniform_global_point())

        if max_dist == 0.0:
            if min_dist > MAX_EARTH_DISTANCE:
                return GeoResult.failure(
                    GeoErrorKind.RANGE,
                    f"Minimum distance {min_dist} exceeds {MAX_EARTH_DISTANCE}"
                )
            center = antipode_of(center.lat, center.lon)
            max_dist = MAX_EARTH_DISTANCE - min_dist
            min_dist = 0.0

        if min_dist > max_dist:
            min_dist, max_dist = max_dist, min_dist
        if min_dist > MAX_EARTH_DISTANCE:
            return GeoResult.failure(
                GeoErrorKind.RANGE,
                f"Minimum distance {min_dist} exceeds {MAX_EARTH_DISTANCE}"
            )
        max_dist = min(max_dist, MAX_EARTH_DISTANCE)

        tol = self.config.distance_tolerance_m
        for _ in range(self.config.max_attempts):
            bearing = self.rng.uniform(0.0, 360.0)
            u = self.rng.random()
            dist = np.sqrt(u * (max_dist**2 - min_dist**2) + min_dist**2)

            candidate = forward_position(center.lat, center.lon, bearing, float(dist))
            if not candidate.ok or min_dist == max_dist:
                return candidate

            realized = haversine_distance(
                center.lat, center.lon, candidate.value.lat, candidate.value.lon
            )
            if realized.ok and min_dist - tol <= realized.value <= max_dist + tol:
                return candidate

        return GeoResult.failure(
            GeoErrorKind.SAMPLING_EXHAUSTED,
            f"No position between {min_dist} and {max_dist} m from "
            f"{center.as_tuple()} after {self.config.max_attempts} attempts"
        )

    def sample_many(
        self,
        center: Optional[Coordinate],
        max_dist: float = 0.0,
        min_dist: float = 0.0,
        count: int = 1
    ) -> Iterator[GeoResult[Coordinate]]:
        """Yield `count` samples from the same stream.

        A `center` of None samples the whole sphere.
        """
        for _ in range(count):
            if center is None:
                yield GeoResult.success(self.uniform_global_point())
            else:
                yield self.sample_annulus(center, max_dist, min_dist)
