from stackchart.animation import Animator, PropertyTransition, TransitionBatch
from stackchart.axis import Axis
from stackchart.canvas import ChartCanvas, PaintTask
from stackchart.chart import CartesianChart
from stackchart.config import AnimationProfile, ChartSettings, Padding
from stackchart.errors import ChartContractError, ChartDataError
from stackchart.geometry import Bounds, DimensionalBounds, Geometry, Point, Size, StackInterval
from stackchart.points import ChartPoint, PointContext, RectangleHoverArea
from stackchart.scaler import Scaler
from stackchart.series import StackedColumnSeries
from stackchart.stacker import SeriesContext, Stacker
from stackchart.visuals import LabelGeometry, RectangleGeometry

__all__ = [
    "AnimationProfile",
    "Animator",
    "Axis",
    "Bounds",
    "CartesianChart",
    "ChartCanvas",
    "ChartContractError",
    "ChartDataError",
    "ChartPoint",
    "ChartSettings",
    "DimensionalBounds",
    "Geometry",
    "LabelGeometry",
    "Padding",
    "PaintTask",
    "Point",
    "PointContext",
    "PropertyTransition",
    "RectangleGeometry",
    "RectangleHoverArea",
    "Scaler",
    "SeriesContext",
    "Size",
    "StackInterval",
    "StackedColumnSeries",
    "Stacker",
    "TransitionBatch",
]
