"""
Random Position Sampling for geocalc.

This module provides seeded, reproducible random positions.
"""

from sampling.random_positions import (
    RandomPositionSampler,
    SamplerConfig,
    default_seed,
)

__all__ = [
    "RandomPositionSampler",
    "SamplerConfig",
    "default_seed",
]
