import numpy as np
import pytest

from common.types import Coordinate, GeoErrorKind
from geospatial.spherical import MAX_EARTH_DISTANCE, haversine_distance
from sampling.random_positions import RandomPositionSampler, SamplerConfig, default_seed


def _dist(a, b):
    return haversine_distance(a.lat, a.lon, b.lat, b.lon).unwrap()


def _draw(sampler, center, max_dist, min_dist=0.0, count=200):
    return [r.unwrap() for r in sampler.sample_many(center, max_dist, min_dist, count)]


def test_default_seed_fits_32_bits():
    seed = default_seed()
    assert 0 <= seed < 2**32


def test_configured_seed_is_used():
    sampler = RandomPositionSampler(SamplerConfig(random_seed=99))
    assert sampler.seed == 99
    assert SamplerConfig(random_seed=5).resolve_seed() == 5


def test_unseeded_sampler_resolves_a_seed():
    sampler = RandomPositionSampler()
    assert isinstance(sampler.seed, int)


def test_same_seed_same_stream(oslo):
    a = RandomPositionSampler(SamplerConfig(random_seed=42))
    b = RandomPositionSampler(SamplerConfig(random_seed=42))
    assert _draw(a, None, 0.0, count=5) == _draw(b, None, 0.0, count=5)
    assert _draw(a, oslo, 5000.0, count=5) == _draw(b, oslo, 5000.0, count=5)


def test_samplers_do_not_share_state():
    a = RandomPositionSampler(SamplerConfig(random_seed=42))
    b = RandomPositionSampler(SamplerConfig(random_seed=42))
    first = a.uniform_global_point()
    RandomPositionSampler(SamplerConfig(random_seed=42)).uniform_global_point()
    assert b.uniform_global_point() == first


def test_different_seeds_differ():
    a = RandomPositionSampler(SamplerConfig(random_seed=1))
    b = RandomPositionSampler(SamplerConfig(random_seed=2))
    assert _draw(a, None, 0.0, count=3) != _draw(b, None, 0.0, count=3)


def test_uniform_global_points_in_range(sampler):
    points = [sampler.uniform_global_point() for _ in range(2000)]
    assert all(-90.0 <= p.lat <= 90.0 for p in points)
    assert all(-180.0 <= p.lon < 180.0 for p in points)
    # Uniform by area: sin(lat) is uniform on [-1, 1]
    sin_lat = np.sin(np.radians([p.lat for p in points]))
    assert abs(sin_lat.mean()) < 0.06
    assert abs(np.mean(np.abs(sin_lat)) - 0.5) < 0.06


def test_both_radii_zero_samples_whole_sphere(sampler, oslo):
    points = _draw(sampler, oslo, 0.0, 0.0, count=100)
    assert max(_dist(oslo, p) for p in points) > 10_000_000


def test_disk_stays_within_max(sampler, oslo):
    for p in _draw(sampler, oslo, 1000.0):
        assert _dist(oslo, p) <= 1000.0 + 0.01


def test_one_meter_disk(sampler):
    center = Coordinate(12.0, 34.0)
    for p in _draw(sampler, center, 1.0, 0.0, count=2000):
        assert _dist(center, p) <= 1.0 + 1e-6


def test_annulus_bounds(sampler, oslo):
    for p in _draw(sampler, oslo, 100_000.0, 50_000.0):
        assert 50_000.0 - 0.01 <= _dist(oslo, p) <= 100_000.0 + 0.01


def test_swapped_radii_are_reordered(sampler, oslo):
    for p in _draw(sampler, oslo, 500.0, 1000.0):
        assert 500.0 - 0.01 <= _dist(oslo, p) <= 1000.0 + 0.01


def test_equal_radii_sample_the_ring(sampler, oslo):
    for p in _draw(sampler, oslo, 2500.0, 2500.0, count=50):
        assert _dist(oslo, p) == pytest.approx(2500.0, abs=1e-3)


def test_annulus_is_uniform_by_area(sampler):
    center = Coordinate(0.0, 0.0)
    dists = np.array([_dist(center, p) for p in _draw(sampler, center, 10_000.0, count=2000)])
    # Half of the disk's area lies beyond radius max / sqrt(2)
    outer_share = np.mean(dists > 10_000.0 / np.sqrt(2.0))
    assert abs(outer_share - 0.5) < 0.05


def test_minimum_only_samples_far_side(sampler, oslo):
    for p in _draw(sampler, oslo, 0.0, 19_000_000.0):
        assert _dist(oslo, p) >= 19_000_000.0 - 1.0


def test_minimum_only_near_a_pole(sampler):
    center = Coordinate(89.9999, 0.0)
    for p in _draw(sampler, center, 0.0, 20_000_000.0):
        assert -90.0 <= p.lat <= 90.0
        assert -180.0 < p.lon <= 180.0
        assert _dist(center, p) >= 20_000_000.0 - 1.0


def test_minimum_only_from_the_pole(sampler):
    center = Coordinate(90.0, 0.0)
    for p in _draw(sampler, center, 0.0, 19_900_000.0, count=50):
        assert p.lat < -88.9


def test_minimum_beyond_half_circumference_is_range_error(sampler, oslo):
    result = sampler.sample_annulus(oslo, 0.0, MAX_EARTH_DISTANCE + 1.0)
    assert result.error is GeoErrorKind.RANGE


@pytest.mark.parametrize(
    ("max_dist", "min_dist"),
    [
        (25_000_000.0, 25_000_000.0),
        (25_000_000.0, 20_100_000.0),
        (20_100_000.0, 25_000_000.0),
    ],
)
def test_ring_beyond_half_circumference_is_range_error(max_dist, min_dist):
    config = SamplerConfig(random_seed=3, max_attempts=5)
    result = RandomPositionSampler(config).sample_annulus(Coordinate(12.0, 34.0), max_dist, min_dist)
    assert result.error is GeoErrorKind.RANGE


def test_maximum_beyond_half_circumference_is_clamped(sampler):
    center = Coordinate(12.0, 34.0)
    for p in _draw(sampler, center, 25_000_000.0, 19_000_000.0, count=50):
        assert _dist(center, p) >= 19_000_000.0 - 1.0


@pytest.mark.parametrize(
    ("center", "max_dist", "min_dist"),
    [
        (Coordinate(91.0, 0.0), 1000.0, 0.0),
        (Coordinate(0.0, 200.0), 1000.0, 0.0),
        (Coordinate(0.0, 0.0), -1.0, 0.0),
        (Coordinate(0.0, 0.0), 1000.0, -5.0),
        (Coordinate(0.0, 0.0), float("inf"), 0.0),
        (Coordinate(0.0, 0.0), float("nan"), 0.0),
    ],
)
def test_invalid_input_is_range_error(sampler, center, max_dist, min_dist):
    assert sampler.sample_annulus(center, max_dist, min_dist).error is GeoErrorKind.RANGE


def test_attempt_cap_reports_exhaustion(oslo):
    sampler = RandomPositionSampler(SamplerConfig(random_seed=3, max_attempts=0))
    result = sampler.sample_annulus(oslo, 1000.0, 10.0)
    assert result.error is GeoErrorKind.SAMPLING_EXHAUSTED


def test_impossible_tolerance_reports_exhaustion(oslo):
    config = SamplerConfig(random_seed=3, max_attempts=25, distance_tolerance_m=-1e6)
    result = RandomPositionSampler(config).sample_annulus(oslo, 1000.0, 10.0)
    assert result.error is GeoErrorKind.SAMPLING_EXHAUSTED


def test_sample_many_yields_count(sampler, oslo):
    assert len(list(sampler.sample_many(oslo, 1000.0, count=7))) == 7
    assert list(sampler.sample_many(None, count=0)) == []
