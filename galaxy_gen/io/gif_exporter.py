"""Turntable GIF export."""

import logging
import numpy as np
from typing import List, Optional

logger = logging.getLogger(__name__)


class GIFExporter:
    """Collect captured frames and write them as a looping GIF."""

    def __init__(self, output_path: str, fps: float = 10, duration: Optional[float] = None):
        """Initialize GIF exporter.

        Args:
            output_path: Output file path (.gif)
            fps: Frames per second (used if duration is None)
            duration: Frame duration in seconds (overrides fps)
        """
        if duration is None and fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.output_path = output_path
        self.fps = fps
        self.duration = duration if duration is not None else (1.0 / fps)
        self.frames: List[np.ndarray] = []

    @property
    def frame_duration_ms(self) -> float:
        """Per-frame delay as written to the file; GIF timing is in milliseconds."""
        return self.duration * 1000.0

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def add_frame(self, frame: np.ndarray):
        """Add a captured frame.

        Args:
            frame: Image array (H, W, 3) or (H, W, 4), uint8 or float in [0, 1].
                An alpha channel is dropped.
        """
        if frame.ndim != 3 or frame.shape[2] not in (3, 4):
            raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) image, got shape {frame.shape}")
        frame = frame[:, :, :3]
        if frame.dtype != np.uint8:
            frame = (np.clip(frame, 0.0, 1.0) * 255).astype(np.uint8)
        if self.frames and frame.shape != self.frames[0].shape:
            raise ValueError(
                f"Frame size {frame.shape[:2]} differs from the first frame {self.frames[0].shape[:2]}"
            )
        self.frames.append(frame.copy())

    def export(self):
        """Write all frames to the GIF file, looping forever."""
        if not self.frames:
            raise ValueError("No frames to export")

        try:
            import imageio
        except ImportError:
            raise ImportError(
                "GIF export requires imageio. Install with: pip install galaxy-generator[export]"
            )

        imageio.mimsave(
            self.output_path,
            self.frames,
            duration=self.frame_duration_ms,
            loop=0
        )
        logger.info(
            f"Wrote {self.frame_count} frames to {self.output_path} "
            f"({self.frame_duration_ms:.0f} ms per frame)"
        )
