"""I/O utilities for export and buffer snapshots."""

from galaxy_gen.io.gif_exporter import GIFExporter
from galaxy_gen.io.buffers_io import save_buffers, load_buffers

__all__ = ["GIFExporter", "save_buffers", "load_buffers"]
