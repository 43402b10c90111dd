"""Configuration management."""

import json
import logging
import math
import numbers
import yaml
from typing import Any, Dict, Optional
from pathlib import Path
from dataclasses import dataclass, asdict, field, fields

from galaxy_gen.errors import ConfigurationError
from galaxy_gen.parameters import GalaxyParameters


@dataclass
class Config:
    """Application configuration."""
    # Generation parameters
    parameters: GalaxyParameters = field(default_factory=GalaxyParameters)
    
    # Rendering parameters
    fps: int = 30
    frames: Optional[int] = None
    elevation: float = 35.26
    azimuth: float = 45.0
    max_points: Optional[int] = 20000
    
    # Export parameters
    output_path: str = "galaxy"
    
    # Logging
    log_level: str = "INFO"
    
    # Reproducibility
    seed: Optional[int] = None
    
    def __post_init__(self):
        if isinstance(self.parameters, dict):
            self.parameters = GalaxyParameters.from_dict(self.parameters)
        self.validate()

    def validate(self) -> "Config":
        """Check the non-generation settings.

        Raises:
            ConfigurationError: On the first invalid field
        """
        if not isinstance(self.parameters, GalaxyParameters):
            raise ConfigurationError(f"parameters must be a mapping, got {self.parameters!r}")
        if not _is_number(self.fps) or not self.fps > 0:
            raise ConfigurationError(f"fps must be a positive number, got {self.fps!r}")
        if self.frames is not None and (not _is_int(self.frames) or self.frames < 0):
            raise ConfigurationError(f"frames must be a non-negative integer, got {self.frames!r}")
        if self.max_points is not None and (not _is_int(self.max_points) or self.max_points < 1):
            raise ConfigurationError(f"max_points must be a positive integer, got {self.max_points!r}")
        for name in ('elevation', 'azimuth'):
            if not _is_number(getattr(self, name)):
                raise ConfigurationError(f"{name} must be a finite number, got {getattr(self, name)!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigurationError(f"seed must be an integer, got {self.seed!r}")
        if not isinstance(self.output_path, str) or not self.output_path:
            raise ConfigurationError(f"output_path must be a non-empty string, got {self.output_path!r}")
        if not isinstance(self.log_level, str) or not isinstance(
            logging.getLevelName(self.log_level.upper()), int
        ):
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["parameters"] = self.parameters.to_dict()
        return data


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _is_yaml(path: Path) -> bool:
    return path.suffix in ('.yaml', '.yml')


def load_config(config_path: str) -> Config:
    """Load configuration from file.
    
    Args:
        config_path: Path to config file (.json or .yaml)
        
    Returns:
        Config object
        
    Raises:
        ConfigurationError: If the file cannot be read or parsed, or holds
            unknown keys or invalid values
    """
    config_path = Path(config_path)
    
    try:
        with open(config_path, 'r') as f:
            if _is_yaml(config_path):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Could not read {config_path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not parse {config_path}: {e}") from e
    
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path}: expected a mapping at the top level")
    
    unknown = set(data) - {f.name for f in fields(Config)}
    if unknown:
        raise ConfigurationError(f"{config_path}: unknown keys {sorted(unknown)}")
    
    return Config(**data)


def save_config(config: Config, output_path: str):
    """Save configuration to file.
    
    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = config.to_dict()
    
    with open(output_path, 'w') as f:
        if _is_yaml(output_path):
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
