"""GUI application using tkinter."""

import logging
import time
import tkinter as tk
from tkinter import ttk, messagebox, colorchooser
from typing import Dict, Optional

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.colors import to_hex
from matplotlib.figure import Figure

from galaxy_gen.animation import Clock, FrameContext, tick
from galaxy_gen.controls import CONTROLS, ControlPanel
from galaxy_gen.errors import ConfigurationError
from galaxy_gen.instance import GalaxyInstance
from galaxy_gen.parameters import GalaxyParameters, parse_color
from galaxy_gen.render.renderer_3d import Renderer3D
from galaxy_gen.render.scene import Camera, Scene
from galaxy_gen.utils.logging_config import setup_logging
from galaxy_gen.utils.reproducibility import make_rng

logger = logging.getLogger(__name__)


class GalaxyGUI:
    """Main GUI application.

    Everything runs on the Tk thread: frames are scheduled with ``after``
    and regeneration happens synchronously inside control callbacks.
    """

    def __init__(
        self,
        root,
        params: Optional[GalaxyParameters] = None,
        seed: Optional[int] = None,
        fps: int = 30,
        max_points: Optional[int] = 20000
    ):
        self.root = root
        self.root.title("Galaxy Generator")
        self.root.geometry("1200x800")

        self.frame_interval_ms = max(1, int(1000 / fps))
        self.rng = make_rng(seed)
        self.scene = Scene()
        self.instance = GalaxyInstance(self.scene)
        self.panel = ControlPanel(params or GalaxyParameters(), self.regenerate)

        self.figure = Figure(figsize=(8, 8), dpi=100)
        self.renderer = Renderer3D(figure=self.figure, max_points=max_points)
        self.context = FrameContext(
            renderer=self.renderer,
            scene=self.scene,
            camera=Camera(),
            instance=self.instance,
            clock=Clock(),
        )
        self._after_id: Optional[str] = None
        self.slider_vars: Dict[str, tk.Variable] = {}
        self.scales: Dict[str, tk.Scale] = {}
        self.swatches: Dict[str, tk.Label] = {}

        self._create_widgets()
        self._setup_layout()
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        self.regenerate(self.panel.params)
        self._schedule_frame()

    def _create_widgets(self):
        """Create GUI widgets."""
        # Control panel (left)
        self.control_frame = ttk.LabelFrame(self.root, text="Galaxy", padding=10)

        row = 0
        for spec in CONTROLS:
            ttk.Label(self.control_frame, text=f"{spec.label}:").grid(row=row, column=0, sticky='w', pady=5)
            if spec.is_color:
                self._create_color_control(spec, row)
            else:
                self._create_slider(spec, row)
            row += 1

        # Status
        self.status_label = ttk.Label(self.control_frame, text="Ready", foreground="green")
        self.status_label.grid(row=row, column=0, columnspan=2, pady=10)

        # Render area (right)
        self.canvas = FigureCanvasTkAgg(self.figure, master=self.root)

    def _create_slider(self, spec, row: int):
        value = getattr(self.panel.params, spec.name)
        var = tk.IntVar(value=value) if spec.integer else tk.DoubleVar(value=value)
        self.slider_vars[spec.name] = var
        scale = tk.Scale(
            self.control_frame,
            from_=spec.minimum,
            to=spec.maximum,
            resolution=spec.step,
            digits=spec.decimals + 2 if spec.decimals else 0,
            variable=var,
            orient='horizontal',
            length=200,
            command=lambda v, name=spec.name: self._on_slide(name, v)
        )
        scale.grid(row=row, column=1, pady=5)
        self.scales[spec.name] = scale
        # Regenerate only once the slider is released, by mouse or keyboard
        scale.bind("<ButtonRelease-1>", lambda event, name=spec.name: self._on_commit(name))
        scale.bind("<KeyRelease>", lambda event, name=spec.name: self._on_commit(name))

    def _create_color_control(self, spec, row: int):
        current = self._current_hex(spec.name)
        swatch = tk.Label(self.control_frame, width=4, background=current, relief='groove')
        swatch.grid(row=row, column=1, sticky='w', pady=5)
        self.swatches[spec.name] = swatch
        ttk.Button(
            self.control_frame, text="Pick...",
            command=lambda name=spec.name, label=spec.label: self._pick_color(name, label)
        ).grid(row=row, column=1, sticky='e', pady=5)

    def _current_hex(self, name: str) -> str:
        return to_hex(parse_color(getattr(self.panel.params, name), name))

    def _setup_layout(self):
        """Setup window layout."""
        self.control_frame.pack(side='left', fill='y', padx=10, pady=10)
        self.canvas.get_tk_widget().pack(side='right', fill='both', expand=True)

    def _on_slide(self, name: str, value):
        try:
            self.panel.set_value(name, value)
        except ConfigurationError as e:
            self.status_label.config(text=str(e), foreground="red")

    def _on_commit(self, name: str):
        self.panel.finish_change(name)

    def _pick_color(self, name: str, label: str):
        current = self._current_hex(name)
        _, hex_color = colorchooser.askcolor(color=current, title=label, parent=self.root)
        if hex_color is None:
            return
        self.swatches[name].config(background=hex_color)
        self.panel.set_color(name, hex_color)

    def regenerate(self, params: GalaxyParameters):
        """Rebuild the galaxy; on failure the current one stays installed."""
        start = time.perf_counter()
        try:
            self.instance.regenerate(params, self.rng)
        except ConfigurationError as e:
            logger.warning(f"Regeneration rejected: {e}")
            self.status_label.config(text=f"Rejected: {e}", foreground="red")
            messagebox.showerror("Error", f"Invalid parameters: {e}")
            return
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.status_label.config(
            text=f"{params.count:,} stars in {elapsed_ms:.0f} ms", foreground="green"
        )

    def _schedule_frame(self):
        self._after_id = self.root.after(self.frame_interval_ms, self._frame)

    def _frame(self):
        tick(self.context)
        self._schedule_frame()

    def close(self):
        """Stop the frame loop and tear down the scene."""
        if self._after_id is not None:
            self.root.after_cancel(self._after_id)
            self._after_id = None
        self.instance.dispose()
        self.renderer.close()
        self.root.destroy()


def run_gui():
    """Run GUI application."""
    setup_logging()
    root = tk.Tk()
    app = GalaxyGUI(root)
    root.mainloop()


if __name__ == '__main__':
    run_gui()
