"""
Random sampling helpers.

Every helper takes the generator explicitly so that each pixel can own an
independent, reproducible stream. The module level generator only exists for
interactive use and quick experiments.
"""

import random

import numpy as np

from util.vec3 import vec3, unit_vector

_default_rng = random.Random()


def random_double(rng: random.Random = _default_rng, lo: float = 0.0, hi: float = 1.0) -> float:
    """Uniform float in [lo, hi)"""
    return lo + (hi - lo) * rng.random()


def random_in_unit_sphere(rng: random.Random = _default_rng) -> vec3:
    while True:
        p = vec3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1))
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: random.Random = _default_rng) -> vec3:
    """Uniformly distributed direction on the unit sphere surface"""
    while True:
        p = vec3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1))
        lensq = p.length_squared()
        # Reject the tiny core where normalizing would blow up
        if 1e-160 < lensq <= 1.0:
            return unit_vector(p)


def random_in_unit_disk(rng: random.Random = _default_rng) -> vec3:
    """Random point in the z=0 unit disk (for defocus blur)"""
    while True:
        p = vec3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.length_squared() < 1.0:
            return p


def pixel_seeds(seed, count: int):
    """
    Derive one independent integer seed per pixel.

    Args:
        seed: int entropy, or None to draw fresh entropy from the OS
        count: number of seeds to produce

    Returns:
        (entropy, seeds) where entropy reproduces the same seeds when passed back in
    """
    seq = np.random.SeedSequence(seed)
    seeds = seq.generate_state(count, dtype=np.uint64) if count > 0 else np.zeros(0, dtype=np.uint64)
    return seq.entropy, [int(s) for s in seeds]
