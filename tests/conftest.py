import pytest
from pyproj import Geod

from common.types import Coordinate
from sampling.random_positions import RandomPositionSampler, SamplerConfig


@pytest.fixture
def wgs84_geod():
    """Reference geodesic solver for the WGS84 ellipsoid."""
    return Geod(ellps="WGS84")


@pytest.fixture
def sampler():
    return RandomPositionSampler(SamplerConfig(random_seed=1234))


@pytest.fixture
def oslo():
    return Coordinate(59.9139, 10.7522)


@pytest.fixture
def bergen():
    return Coordinate(60.3913, 5.3221)
