"""Spiral galaxy point-cloud generation."""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from galaxy_gen.errors import ConfigurationError
from galaxy_gen.parameters import GalaxyParameters

logger = logging.getLogger(__name__)


@dataclass
class GalaxyBuffers:
    """Per-particle positions and colors, index-aligned.

    Attributes:
        positions: (n, 3) float32 array of x, y, z
        colors: (n, 3) float32 array of r, g, b in [0, 1]
    """
    positions: np.ndarray
    colors: np.ndarray

    def __post_init__(self):
        if self.positions.shape != self.colors.shape:
            raise ValueError(
                f"positions {self.positions.shape} and colors {self.colors.shape} must match"
            )

    @property
    def count(self) -> int:
        return self.positions.shape[0]

    @property
    def nbytes(self) -> int:
        return self.positions.nbytes + self.colors.nbytes


def branch_angles(count: int, branches: int) -> np.ndarray:
    """Angle of the arm each particle belongs to.

    Particle i sits on arm ``i % branches``; arms are evenly spaced.
    """
    return (np.arange(count) % branches) / branches * (2 * np.pi)


def spiral_positions(radii: np.ndarray, angles: np.ndarray, spin: float) -> np.ndarray:
    """Place particles on their arms in the XZ plane, before jitter.

    Args:
        radii: Radial distance of each particle (n,)
        angles: Branch angle of each particle (n,)
        spin: Twist in radians per unit radius

    Returns:
        (n, 3) positions with y = 0
    """
    theta = angles + radii * spin
    positions = np.zeros((radii.shape[0], 3))
    positions[:, 0] = np.sin(theta) * radii
    positions[:, 2] = np.cos(theta) * radii
    return positions


def jitter_offsets(rng, count: int, power: float) -> np.ndarray:
    """Random per-axis offsets with magnitude ``u ** power`` and random sign.

    Higher ``power`` concentrates the offsets near zero. Magnitudes are drawn
    before signs.
    """
    magnitudes = np.power(np.asarray(rng.random((count, 3)), dtype=np.float64), power)
    signs = np.where(np.asarray(rng.random((count, 3))) < 0.5, 1.0, -1.0)
    return signs * magnitudes


def mix_colors(inside: Sequence[float], outside: Sequence[float], t: np.ndarray) -> np.ndarray:
    """Linear interpolation from ``inside`` (t=0) to ``outside`` (t=1), per channel."""
    inside = np.asarray(inside, dtype=np.float64)
    outside = np.asarray(outside, dtype=np.float64)
    return inside + (outside - inside) * t[:, np.newaxis]


def generate(params: GalaxyParameters, rng: Optional[np.random.Generator] = None) -> GalaxyBuffers:
    """Generate galaxy buffers for ``params``.

    Each particle draws a radial fraction once; that single draw sets both its
    distance along the arm and its color mix. ``params.randomness`` is not
    applied to the jitter offsets, only ``randomness_power`` shapes them.

    Args:
        params: Generation parameters (validated here)
        rng: Random source with a numpy-style ``random(size)`` method.
            Defaults to a fresh unseeded ``numpy.random.default_rng()``.

    Returns:
        GalaxyBuffers with exactly ``params.count`` rows

    Raises:
        ConfigurationError: If the parameters are invalid or the random
            source yields radial fractions outside [0, 1]
    """
    params.validate()
    if rng is None:
        rng = np.random.default_rng()

    start = time.perf_counter()
    n = params.count

    fractions = np.asarray(rng.random(n), dtype=np.float64)
    if n > 0 and (fractions.min() < 0.0 or fractions.max() > 1.0):
        raise ConfigurationError("Random source produced radial fractions outside [0, 1]")
    radii = fractions * params.radius

    positions = spiral_positions(radii, branch_angles(n, params.branches), params.spin)
    positions += jitter_offsets(rng, n, params.randomness_power)
    colors = mix_colors(params.inside_rgb, params.outside_rgb, fractions)

    buffers = GalaxyBuffers(
        positions=positions.astype(np.float32),
        colors=colors.astype(np.float32),
    )
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.debug(
        f"Generated {n} particles on {params.branches} branches "
        f"({buffers.nbytes / 1e6:.1f} MB) in {elapsed_ms:.1f} ms"
    )
    return buffers
