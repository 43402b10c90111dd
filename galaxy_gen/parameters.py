"""Galaxy generation parameters."""

import math
import numbers
from dataclasses import dataclass, asdict, fields, replace as dc_replace
from typing import Any, Dict, Tuple, Union

from matplotlib.colors import to_hex, to_rgb

from galaxy_gen.errors import ConfigurationError

ColorLike = Union[str, Tuple[float, float, float]]
RGB = Tuple[float, float, float]


@dataclass(frozen=True)
class GalaxyParameters:
    """Immutable snapshot of the galaxy configuration.

    The control surface owns the authoritative copy and hands snapshots to
    the generator; nothing mutates a snapshot after it is created.

    Attributes:
        count: Number of particles
        size: Rendered point size (not used by the generation math)
        radius: Maximum galaxy radius
        branches: Number of spiral arms
        spin: Angular twist in radians per unit radius
        randomness: Jitter scale exposed to the controls (unused by generation)
        randomness_power: Exponent shaping the jitter distribution
        inside_color: Color at the center
        outside_color: Color at ``radius``
    """
    count: int = 100000
    size: float = 0.01
    radius: float = 5.0
    branches: int = 3
    spin: float = 1.0
    randomness: float = 0.2
    randomness_power: float = 3.0
    inside_color: ColorLike = "#ff6030"
    outside_color: ColorLike = "#1b3984"

    def validate(self) -> "GalaxyParameters":
        """Check every constraint.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: If any field is out of range
        """
        for name in ("count", "branches"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")

        for name in ("size", "radius", "spin", "randomness", "randomness_power"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value!r}")

        if self.count < 0:
            raise ConfigurationError(f"count must be >= 0, got {self.count}")
        if self.branches < 1:
            raise ConfigurationError(f"branches must be >= 1, got {self.branches}")
        if self.radius <= 0:
            raise ConfigurationError(f"radius must be > 0, got {self.radius}")
        if self.size <= 0:
            raise ConfigurationError(f"size must be > 0, got {self.size}")
        if self.randomness_power < 1:
            raise ConfigurationError(
                f"randomness_power must be >= 1, got {self.randomness_power}"
            )

        parse_color(self.inside_color, "inside_color")
        parse_color(self.outside_color, "outside_color")
        return self

    @property
    def inside_rgb(self) -> RGB:
        return parse_color(self.inside_color, "inside_color")

    @property
    def outside_rgb(self) -> RGB:
        return parse_color(self.outside_color, "outside_color")

    def replace(self, **changes) -> "GalaxyParameters":
        """Return a new validated snapshot with ``changes`` applied."""
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationError(f"Unknown parameters: {sorted(unknown)}")
        return dc_replace(self, **changes).validate()

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for config files.

        Named and hex colors are written as hex strings. RGB tuples are
        written as float lists so they survive a save and load unchanged
        (hex would round them to 8 bits per channel).
        """
        data = asdict(self)
        for name in ("inside_color", "outside_color"):
            rgb = parse_color(getattr(self, name), name)
            if isinstance(getattr(self, name), str):
                data[name] = to_hex(rgb)
            else:
                data[name] = [float(c) for c in rgb]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GalaxyParameters":
        """Build validated parameters from a dict (e.g. a loaded config)."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown parameters: {sorted(unknown)}")

        values = dict(data)
        for name in ("inside_color", "outside_color"):
            if isinstance(values.get(name), list):
                values[name] = tuple(values[name])
        return cls(**values).validate()


def parse_color(value: ColorLike, name: str = "color") -> RGB:
    """Convert any matplotlib color value to an ``(r, g, b)`` tuple in [0, 1].

    Raises:
        ConfigurationError: If matplotlib cannot interpret the value
    """
    try:
        return tuple(float(c) for c in to_rgb(value))
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"{name}: invalid color {value!r}") from e
