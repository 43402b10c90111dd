"""Control surface: declared bounds for each parameter and regeneration triggers."""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from galaxy_gen.errors import ConfigurationError
from galaxy_gen.parameters import ColorLike, GalaxyParameters, parse_color

logger = logging.getLogger(__name__)

COMMIT = "commit"
IMMEDIATE = "immediate"


@dataclass(frozen=True)
class ControlSpec:
    """One labeled control bound to a parameter field."""
    name: str
    label: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    step: Optional[float] = None
    trigger: str = COMMIT
    integer: bool = False

    @property
    def is_color(self) -> bool:
        return self.step is None

    @property
    def decimals(self) -> int:
        if self.step is None or self.step >= 1:
            return 0
        return max(0, -int(math.floor(math.log10(self.step))))

    def snap(self, value) -> float:
        """Clamp ``value`` to the bounds and round it onto the step grid."""
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{self.name}: expected a number, got {value!r}") from e
        if not math.isfinite(value):
            raise ConfigurationError(f"{self.name}: value must be finite, got {value!r}")

        value = min(max(value, self.minimum), self.maximum)
        steps = round((value - self.minimum) / self.step)
        value = round(self.minimum + steps * self.step, self.decimals)
        value = min(max(value, self.minimum), self.maximum)
        return int(value) if self.integer else value


CONTROLS = (
    ControlSpec("count", "Star count", 100, 1000000, 100, integer=True),
    ControlSpec("size", "Star size", 0.01, 0.1, 0.01),
    ControlSpec("radius", "Galaxy radius", 0.01, 20, 0.01),
    ControlSpec("branches", "Branches", 3, 20, 1, integer=True),
    ControlSpec("spin", "Spin", -5, 5, 0.001),
    ControlSpec("randomness", "Randomness", -2, 2, 0.001),
    ControlSpec("randomness_power", "Randomness power", 1, 10, 0.001),
    ControlSpec("inside_color", "Inside color", trigger=IMMEDIATE),
    ControlSpec("outside_color", "Outside color", trigger=IMMEDIATE),
)

CONTROLS_BY_NAME: Dict[str, ControlSpec] = {spec.name: spec for spec in CONTROLS}


class ControlPanel:
    """Authoritative parameter state behind the tweak panel.

    Numeric controls update the state while they are being dragged and only
    regenerate when the interaction is committed. Color controls regenerate
    on every change.
    """

    def __init__(
        self,
        params: GalaxyParameters,
        on_regenerate: Callable[[GalaxyParameters], None]
    ):
        self._params = params.validate()
        self.on_regenerate = on_regenerate

    @property
    def params(self) -> GalaxyParameters:
        return self._params

    def spec(self, name: str) -> ControlSpec:
        try:
            return CONTROLS_BY_NAME[name]
        except KeyError:
            raise KeyError(f"Unknown control: {name}") from None

    def set_value(self, name: str, value) -> float:
        """Move a numeric control. Does not regenerate.

        Returns:
            The clamped, snapped value that was stored
        """
        spec = self.spec(name)
        if spec.is_color:
            raise ConfigurationError(f"{name} is a color control, use set_color")
        snapped = spec.snap(value)
        self._params = self._params.replace(**{name: snapped})
        return snapped

    def finish_change(self, name: str):
        """Commit a numeric control and regenerate with the current snapshot."""
        spec = self.spec(name)
        logger.debug(f"Control '{name}' committed at {getattr(self._params, name)!r}")
        if spec.trigger == COMMIT:
            self.on_regenerate(self._params)

    def set_color(self, name: str, value: ColorLike):
        """Change a color control and regenerate immediately."""
        spec = self.spec(name)
        if not spec.is_color:
            raise ConfigurationError(f"{name} is not a color control")
        parse_color(value, name)
        self._params = self._params.replace(**{name: value})
        self.on_regenerate(self._params)
