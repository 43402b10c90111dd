"""Basic example of generating a galaxy."""

import numpy as np
from galaxy_gen import GalaxyParameters, generate


def main():
    """Generate a spiral galaxy and print a few statistics."""
    params = GalaxyParameters(
        count=50000,
        radius=5.0,
        branches=4,
        spin=1.2,
        randomness_power=3.0,
        inside_color="#ff6030",
        outside_color="#1b3984"
    )
    
    buffers = generate(params, np.random.default_rng(42))
    
    radii = np.hypot(buffers.positions[:, 0], buffers.positions[:, 2])
    print(f"Particles: {buffers.count}")
    print(f"Median distance from center: {np.median(radii):.3f}")
    print(f"Disk thickness (std of y): {buffers.positions[:, 1].std():.3f}")
    print(f"Mean color: {buffers.colors.mean(axis=0)}")


if __name__ == "__main__":
    main()
