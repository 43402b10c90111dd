"""Utility functions for configuration, logging and reproducibility."""

from galaxy_gen.utils.reproducibility import make_rng, set_all_seeds
from galaxy_gen.utils.config import load_config, save_config, Config
from galaxy_gen.utils.logging_config import setup_logging

__all__ = [
    "make_rng", "set_all_seeds",
    "load_config", "save_config", "Config",
    "setup_logging",
]
