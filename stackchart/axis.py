from __future__ import annotations

from dataclasses import dataclass, field
import math

from stackchart.geometry import EMPTY_BOUNDS, Bounds, Size
from stackchart.scaler import AxisOrientation
from stackchart.ticks import Tick, nice_tick


@dataclass
class Axis:
    """Chart-owned axis; its data bounds are rewritten by every bounds phase."""

    orientation: AxisOrientation
    inverted: bool = False
    major_step: float | None = None
    name: str | None = None
    data_bounds: Bounds = field(default=EMPTY_BOUNDS)

    def __post_init__(self) -> None:
        if self.orientation not in ("x", "y"):
            raise ValueError(f"unknown axis orientation: {self.orientation}")
        if self.major_step is not None and (not math.isfinite(self.major_step) or self.major_step <= 0):
            raise ValueError("major_step must be > 0")

    def set_major_step(self, step: float | None) -> "Axis":
        if step is not None and (not math.isfinite(step) or step <= 0):
            raise ValueError("major_step must be > 0")
        self.major_step = step
        return self

    def reset_bounds(self) -> None:
        self.data_bounds = EMPTY_BOUNDS

    def append_bounds(self, bounds: Bounds) -> None:
        self.data_bounds = self.data_bounds.merged(bounds)

    def get_tick(self, control_size: Size, bounds: Bounds) -> Tick:
        if self.major_step is not None:
            step = float(self.major_step)
            return Tick(value=step, magnitude=10.0 ** math.floor(math.log10(step)))
        if self.orientation == "x":
            target = max(5, int(control_size.width // 120))
        else:
            target = max(4, int(control_size.height // 140))
        return nice_tick(bounds.delta, target)
