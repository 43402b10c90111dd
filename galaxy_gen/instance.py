"""Live galaxy instance and its regeneration lifecycle."""

import logging
from typing import Optional

import numpy as np

from galaxy_gen.generator import GalaxyBuffers, generate
from galaxy_gen.parameters import GalaxyParameters
from galaxy_gen.render.scene import Points, Scene

logger = logging.getLogger(__name__)


class GalaxyInstance:
    """Owns the currently installed galaxy point cloud in a scene.

    ``regenerate`` builds the replacement completely, swaps it into the
    scene slot in one step and only then releases the old point cloud, so
    the scene always holds exactly one complete galaxy once the first
    regeneration has run.
    """

    def __init__(self, scene: Scene):
        self.scene = scene
        self.points: Optional[Points] = None
        self.params: Optional[GalaxyParameters] = None
        self.generation = 0

    @property
    def buffers(self) -> Optional[GalaxyBuffers]:
        return self.points.buffers if self.points is not None else None

    def regenerate(self, params: GalaxyParameters, rng: Optional[np.random.Generator] = None) -> Points:
        """Replace the installed galaxy with one generated from ``params``.

        If generation fails the previous galaxy stays installed and the error
        propagates.

        Args:
            params: Parameter snapshot
            rng: Optional random source passed through to ``generate``

        Returns:
            The newly installed Points
        """
        buffers = generate(params, rng)
        new_points = Points(buffers, size=params.size)

        old_points = self.points
        if old_points is None:
            self.scene.add(new_points)
        else:
            self.scene.replace(old_points, new_points)
        self.points = new_points
        self.params = params
        self.generation += 1

        if old_points is not None:
            old_points.dispose()

        logger.info(
            f"Galaxy regenerated (#{self.generation}): {params.count} particles, "
            f"{params.branches} branches, radius {params.radius}"
        )
        return new_points

    def dispose(self):
        """Detach and release the installed galaxy, if any."""
        if self.points is None:
            return
        self.scene.remove(self.points)
        self.points.dispose()
        self.points = None
        logger.debug("Galaxy instance disposed")
