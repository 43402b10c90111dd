"""3D renderer using matplotlib."""

import logging
import math
import time
from typing import List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D

from galaxy_gen.render.base import Renderer
from galaxy_gen.render.scene import Camera, Points, Scene

logger = logging.getLogger(__name__)


class Renderer3D(Renderer):
    """3D point-cloud renderer using matplotlib 3D.

    The scene uses a y-up frame; matplotlib's 3D axes are z-up, so scene
    (x, y, z) is drawn at axes (x, z, y). Mouse rotation of the axes acts as
    the orbit control: the camera angles are applied once, when the axes are
    created, and never reset afterwards.
    """

    def __init__(
        self,
        figsize: Tuple[int, int] = (8, 8),
        dpi: int = 100,
        figure: Optional[Figure] = None,
        interactive: bool = True,
        point_scale: float = 150.0,
        alpha: float = 0.6,
        max_points: Optional[int] = 20000,
        fps_overlay: bool = True
    ):
        """Initialize 3D renderer.

        Args:
            figsize: Figure size
            dpi: Dots per inch
            figure: Externally managed figure (e.g. embedded in a GUI); the
                owner is responsible for showing it
            interactive: Open a pyplot window when no figure is given. If
                False, draw offscreen with the Agg canvas.
            point_scale: Multiplier from scene point size to marker diameter
            alpha: Point opacity; low values approximate additive blending
                on the black background
            max_points: Draw at most this many points per cloud (evenly
                strided); None draws every point
            fps_overlay: Show frames per second in the corner
        """
        self.initialized = False
        self.figsize = figsize
        self.dpi = dpi
        self.external_figure = figure is not None
        self.interactive = interactive and figure is None
        self.point_scale = point_scale
        self.alpha = alpha
        self.max_points = max_points
        self.fps_overlay = fps_overlay
        self._last_fps_time = time.time()
        self._fps = 0.0
        self._limits_for: List[Points] = []
        self.fig: Optional[Figure] = figure
        self.ax: Optional[Axes3D] = None
        self.scatters = []
        self.fps_text = None

    def _initialize(self, camera: Camera):
        """Create figure and axes if not already done."""
        if self.initialized:
            return
        if self.fig is None:
            if self.interactive:
                self.fig = plt.figure(figsize=self.figsize, dpi=self.dpi)
            else:
                self.fig = Figure(figsize=self.figsize, dpi=self.dpi)
                FigureCanvasAgg(self.fig)

        self.fig.patch.set_facecolor('black')
        self.ax = self.fig.add_subplot(111, projection='3d')
        self.ax.set_facecolor('black')
        self.ax.set_axis_off()
        self.ax.set_autoscale_on(False)
        self.ax.view_init(elev=camera.elevation, azim=camera.azimuth)
        if self.fps_overlay:
            self.fps_text = self.ax.text2D(0.02, 0.95, "", transform=self.ax.transAxes, color='white')

        if self.interactive:
            # Show the window (non-blocking)
            plt.show(block=False)
            plt.pause(0.1)

        self.initialized = True
        logger.debug("3D renderer initialized")

    def _is_figure_open(self) -> bool:
        """Check if the figure window is still open."""
        if self.fig is None:
            return False
        if not self.interactive:
            return True
        try:
            if not plt.fignum_exists(self.fig.number):
                self.initialized = False
                self.fig = None
                self.ax = None
                return False
            return True
        except (AttributeError, ValueError, RuntimeError):
            self.initialized = False
            self.fig = None
            self.ax = None
            return False

    def is_open(self) -> bool:
        if not self.initialized:
            return True
        return self._is_figure_open()

    def _fit_limits(self, clouds: List[Points], camera: Camera):
        """Set a cubic view box around the origin."""
        extent = camera.extent
        if extent is None:
            extent = 0.0
            for points in clouds:
                if points.buffers.count > 0:
                    extent = max(extent, float(np.abs(points.buffers.positions).max()))
            extent = extent * 1.1 if extent > 0 else 1.0
        self.ax.set_xlim(-extent, extent)
        self.ax.set_ylim(-extent, extent)
        self.ax.set_zlim(-extent, extent)

    def _decimate(self, array: np.ndarray) -> np.ndarray:
        if self.max_points is None or array.shape[0] <= self.max_points:
            return array
        stride = math.ceil(array.shape[0] / self.max_points)
        return array[::stride]

    def render(self, scene: Scene, camera: Camera):
        """Render current frame."""
        if self.initialized and not self._is_figure_open():
            return
        self._initialize(camera)

        clouds = [p for p in scene if p.visible and not p.disposed]

        # Refit the view box only when a different galaxy is installed
        if len(clouds) != len(self._limits_for) or any(
            a is not b for a, b in zip(clouds, self._limits_for)
        ):
            self._fit_limits(clouds, camera)
            self._limits_for = clouds

        for scatter in self.scatters:
            scatter.remove()
        self.scatters = []

        for points in clouds:
            positions = self._decimate(points.world_positions())
            if points.vertex_colors:
                colors = self._decimate(points.buffers.colors)
            else:
                colors = 'white'
            self.scatters.append(self.ax.scatter(
                positions[:, 0], positions[:, 2], positions[:, 1],
                c=colors,
                s=(points.size * self.point_scale) ** 2,
                alpha=self.alpha if points.blending == "additive" else 1.0,
                edgecolors='none',
                depthshade=False
            ))

        if self.fps_text is not None:
            now = time.time()
            dt = now - self._last_fps_time
            if dt > 0:
                self._fps = 1.0 / dt
            self._last_fps_time = now
            self.fps_text.set_text(f"{self._fps:.1f} FPS")

        if self.interactive:
            plt.draw()
            plt.pause(0.001)
        elif self.external_figure:
            self.fig.canvas.draw_idle()

    def capture_frame(self) -> np.ndarray:
        """Capture current frame as image array."""
        if self.fig is None:
            raise RuntimeError("Renderer not initialized. Call render() first.")

        self.fig.canvas.draw()
        buf = np.asarray(self.fig.canvas.buffer_rgba())
        return buf[:, :, :3].copy()

    def clear(self):
        """Clear the renderer."""
        for scatter in self.scatters:
            scatter.remove()
        self.scatters = []
        self._limits_for = []

    def close(self):
        """Close the renderer."""
        if self.fig is not None:
            if self.interactive:
                plt.close(self.fig)
            self.fig = None
            self.ax = None
            self.scatters = []
            self.fps_text = None
            self.initialized = False
