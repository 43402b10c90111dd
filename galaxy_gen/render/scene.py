"""Minimal scene graph: renderable point clouds, a scene container and a camera."""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from galaxy_gen.generator import GalaxyBuffers


class Points:
    """Renderable point cloud built from galaxy buffers.

    Holds the buffers until disposed. ``rotation_y`` is applied at render
    time, the buffers themselves are never modified.
    """

    def __init__(
        self,
        buffers: GalaxyBuffers,
        size: float,
        blending: str = "additive",
        vertex_colors: bool = True,
        name: str = "galaxy"
    ):
        self.buffers: Optional[GalaxyBuffers] = buffers
        self.size = size
        self.blending = blending
        self.vertex_colors = vertex_colors
        self.name = name
        self.rotation_y = 0.0
        self.visible = True
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def world_positions(self) -> np.ndarray:
        """Positions with the y rotation applied, (n, 3)."""
        if self._disposed:
            raise RuntimeError(f"Points '{self.name}' has been disposed")
        positions = self.buffers.positions
        c, s = np.cos(self.rotation_y), np.sin(self.rotation_y)
        rotation = np.array([
            [c, 0.0, s],
            [0.0, 1.0, 0.0],
            [-s, 0.0, c],
        ], dtype=positions.dtype)
        return positions @ rotation.T

    def dispose(self):
        """Release the buffers. Disposing twice is a programming error."""
        if self._disposed:
            raise RuntimeError(f"Points '{self.name}' already disposed")
        self.buffers = None
        self._disposed = True

    def __repr__(self) -> str:
        count = self.buffers.count if self.buffers is not None else 0
        return f"Points(name={self.name!r}, count={count}, disposed={self._disposed})"


class Scene:
    """Ordered collection of renderables."""

    def __init__(self):
        self.children: List[Points] = []

    def add(self, obj: Points):
        if obj in self.children:
            raise ValueError(f"{obj!r} is already in the scene")
        self.children.append(obj)

    def remove(self, obj: Points):
        self.children.remove(obj)

    def replace(self, old: Points, new: Points):
        """Swap ``old`` for ``new`` in the same slot in one step."""
        index = self.children.index(old)
        if new in self.children:
            raise ValueError(f"{new!r} is already in the scene")
        self.children[index] = new

    def __contains__(self, obj) -> bool:
        return obj in self.children

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self):
        return iter(self.children)


@dataclass
class Camera:
    """View angles in degrees; ``extent`` fixes the half-width of the view box.

    The defaults look at the origin from (3, 3, 3).
    """
    elevation: float = 35.26
    azimuth: float = 45.0
    extent: Optional[float] = None
