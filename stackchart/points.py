from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable

from stackchart.geometry import Geometry
from stackchart.visuals import LabelGeometry, RectangleGeometry

if TYPE_CHECKING:
    from stackchart.series import StackedColumnSeries


class RectangleHoverArea:
    def __init__(self) -> None:
        self.geometry: Geometry | None = None

    def set_dimensions(self, x: float, y: float, width: float, height: float) -> "RectangleHoverArea":
        self.geometry = Geometry(x=x, y=y, width=abs(width), height=abs(height))
        return self

    def contains(self, x: float, y: float) -> bool:
        return self.geometry is not None and self.geometry.contains(x, y)


@dataclass(eq=False)
class PointContext:
    """Persistent visual state of one point, kept across redraws."""

    key: Hashable
    visual: RectangleGeometry | None = None
    label: LabelGeometry | None = None
    hover_area: RectangleHoverArea | None = None


@dataclass(frozen=True)
class ChartPoint:
    secondary_value: float
    primary_value: float
    is_null: bool
    series: "StackedColumnSeries"
    context: PointContext

    @property
    def key(self) -> Hashable:
        return self.context.key
