"""Per-frame animation loop."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from galaxy_gen.instance import GalaxyInstance
from galaxy_gen.render.base import Renderer
from galaxy_gen.render.scene import Camera, Scene

logger = logging.getLogger(__name__)

ROTATION_SPEED = 0.02  # radians per second around the y axis


class Clock:
    """Elapsed wall time since construction (or the last ``reset``)."""

    def __init__(self, time_fn: Callable[[], float] = time.perf_counter):
        self._time_fn = time_fn
        self._start = time_fn()

    def elapsed(self) -> float:
        return self._time_fn() - self._start

    def reset(self):
        self._start = self._time_fn()


@dataclass
class FrameContext:
    """Everything a frame needs, passed explicitly to ``tick``."""
    renderer: Renderer
    scene: Scene
    camera: Camera
    instance: GalaxyInstance
    clock: Clock


def tick(context: FrameContext) -> float:
    """Rotate the installed galaxy and render one frame.

    Rotation depends only on total elapsed time, so a frame is reproducible
    from its timestamp.

    Returns:
        Elapsed time used for this frame
    """
    elapsed = context.clock.elapsed()
    points = context.instance.points
    if points is not None:
        points.rotation_y = elapsed * ROTATION_SPEED
    context.renderer.render(context.scene, context.camera)
    return elapsed


class AnimationDriver:
    """Runs ``tick`` at a target frame rate on the calling thread."""

    def __init__(self, context: FrameContext, fps: float = 30.0):
        self.context = context
        self.fps = fps
        self.frame_count = 0
        self.on_frame: Optional[Callable[[FrameContext], None]] = None

    def step(self) -> float:
        """Render a single frame."""
        elapsed = tick(self.context)
        self.frame_count += 1
        if self.on_frame is not None:
            self.on_frame(self.context)
        return elapsed

    def run(self, frames: Optional[int] = None):
        """Render ``frames`` frames, or until the renderer is closed when ``None``."""
        frame_time = 1.0 / self.fps if self.fps > 0 else 0.0
        logger.info(f"Animation started ({'unbounded' if frames is None else frames} frames at {self.fps} fps)")
        rendered = 0
        while frames is None or rendered < frames:
            start = time.perf_counter()
            self.step()
            rendered += 1
            if not self.context.renderer.is_open():
                logger.info("Renderer closed, stopping animation")
                break
            remaining = frame_time - (time.perf_counter() - start)
            if remaining > 0:
                time.sleep(remaining)
        logger.info(f"Animation stopped after {rendered} frames")
