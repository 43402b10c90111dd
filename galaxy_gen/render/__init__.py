"""Scene graph and rendering."""

from galaxy_gen.render.scene import Camera, Points, Scene
from galaxy_gen.render.renderer_3d import Renderer3D

__all__ = ["Camera", "Points", "Scene", "Renderer3D"]
