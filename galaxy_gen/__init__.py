"""
Galaxy Generator - procedural spiral galaxy point clouds.

Features:
- Vectorized NumPy generation of positions and radial color mix
- Safe regeneration of the live point cloud on parameter changes
- Control surface with declared bounds and commit/immediate triggers
- Animated matplotlib 3D rendering
- Export to GIF, buffer snapshots to NPZ/JSON
- CLI and GUI interfaces
"""

__version__ = "0.1.0"

from galaxy_gen.errors import ConfigurationError
from galaxy_gen.parameters import GalaxyParameters
from galaxy_gen.generator import GalaxyBuffers, generate
from galaxy_gen.instance import GalaxyInstance

__all__ = [
    "ConfigurationError",
    "GalaxyParameters",
    "GalaxyBuffers",
    "generate",
    "GalaxyInstance",
]
