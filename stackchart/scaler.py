from __future__ import annotations

import math
from typing import TYPE_CHECKING, Literal

from stackchart.geometry import Bounds, Point, Size

if TYPE_CHECKING:
    from stackchart.axis import Axis


AxisOrientation = Literal["x", "y"]


class Scaler:
    """Affine data-to-pixel mapping along one axis of the draw margin.

    The ``"x"`` axis maps ``bounds.min`` to the left edge of the draw margin.
    The ``"y"`` axis follows screen coordinates, so ``bounds.min`` lands on the
    bottom edge and larger values sit higher. ``inverted`` swaps the ends.
    """

    def __init__(
        self,
        draw_location: Point,
        draw_size: Size,
        orientation: AxisOrientation,
        bounds: Bounds,
        inverted: bool = False,
    ) -> None:
        if orientation not in ("x", "y"):
            raise ValueError(f"unknown axis orientation: {orientation}")
        if orientation == "x":
            origin, length = float(draw_location.x), float(draw_size.width)
        else:
            origin, length = float(draw_location.y), float(draw_size.height)
        self._orientation: AxisOrientation = orientation
        self._inverted = bool(inverted)
        self._bounds = bounds
        self._origin = origin
        self._length = length

        span = bounds.delta
        self._degenerate = bounds.is_empty or span <= 0 or not math.isfinite(span)
        if self._degenerate:
            self._sx = 0.0
            self._tx = origin + length * 0.5
            return
        flip = (orientation == "y") != self._inverted
        if flip:
            self._sx = -length / span
            self._tx = origin + length - bounds.min * self._sx
        else:
            self._sx = length / span
            self._tx = origin - bounds.min * self._sx

    @classmethod
    def from_axis(cls, axis: "Axis", draw_location: Point, draw_size: Size) -> "Scaler":
        return cls(draw_location, draw_size, axis.orientation, axis.data_bounds, axis.inverted)

    @property
    def orientation(self) -> AxisOrientation:
        return self._orientation

    @property
    def inverted(self) -> bool:
        return self._inverted

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def is_degenerate(self) -> bool:
        return self._degenerate

    def to_pixels(self, value: float) -> float:
        if self._degenerate:
            return self._tx
        return self._tx + float(value) * self._sx

    def to_data(self, pixel: float) -> float:
        if self._degenerate:
            return 0.0 if self._bounds.is_empty else self._bounds.min
        return (float(pixel) - self._tx) / self._sx

    def measure_unit(self) -> float:
        return abs(self.to_pixels(1.0) - self.to_pixels(0.0))
