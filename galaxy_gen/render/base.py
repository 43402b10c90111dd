"""Base renderer interface."""

from abc import ABC, abstractmethod
import numpy as np

from galaxy_gen.render.scene import Camera, Scene


class Renderer(ABC):
    """Abstract base class for renderers."""
    
    @abstractmethod
    def render(self, scene: Scene, camera: Camera):
        """Render every visible point cloud in ``scene`` as seen from ``camera``."""
        pass
    
    @abstractmethod
    def capture_frame(self) -> np.ndarray:
        """Capture current frame as image array.
        
        Returns:
            Image array (H, W, 3) uint8
        """
        pass
    
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the output surface still exists."""
        pass
    
    @abstractmethod
    def clear(self):
        """Clear the renderer."""
        pass
    
    @abstractmethod
    def close(self):
        """Close the renderer."""
        pass
