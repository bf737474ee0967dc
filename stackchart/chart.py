from __future__ import annotations

import logging
import threading
from typing import Iterable

from stackchart.animation import Animator, TransitionBatch
from stackchart.axis import Axis
from stackchart.canvas import ChartCanvas
from stackchart.config import ChartSettings
from stackchart.errors import ChartContractError, ChartDataError
from stackchart.geometry import Point, Size
from stackchart.series import StackedColumnSeries
from stackchart.stacker import SeriesContext
from stackchart.visuals import VisualElement


LOGGER = logging.getLogger(__name__)


class CartesianChart:
    """Owns axes, series and paint tasks, and runs serialized update passes.

    An update pass is a bounds phase (every series reports its stacked bounds,
    axes aggregate them) followed by a measure phase (every series lays out
    its points). Transitions produced by the pass are committed to the
    animator only when the whole pass succeeds.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        series: Iterable[StackedColumnSeries] = (),
        x_axis: Axis | None = None,
        y_axis: Axis | None = None,
        settings: ChartSettings | None = None,
        animator: Animator | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.control_size = Size(width=float(width), height=float(height))
        self.settings = settings or ChartSettings()
        self.x_axis = x_axis or Axis(orientation="x")
        self.y_axis = y_axis or Axis(orientation="y")
        if self.x_axis.orientation != "x" or self.y_axis.orientation != "y":
            raise ValueError("x_axis must be horizontal and y_axis vertical")
        self.canvas = ChartCanvas()
        self.animator = animator or Animator()
        self.measured_drawables: set[VisualElement] = set()
        self._series: list[StackedColumnSeries] = []
        self._series_context = SeriesContext(())
        self._next_series_id = 1
        self._pass_lock = threading.Lock()
        self._batch: TransitionBatch | None = None
        self.set_series(series)

    @property
    def series(self) -> tuple[StackedColumnSeries, ...]:
        return tuple(self._series)

    @property
    def series_context(self) -> SeriesContext:
        return self._series_context

    @property
    def draw_margin_location(self) -> Point:
        x0, y0, _, _ = self._draw_margin()
        return Point(x0, y0)

    @property
    def draw_margin_size(self) -> Size:
        _, _, w, h = self._draw_margin()
        return Size(w, h)

    def _draw_margin(self) -> tuple[float, float, float, float]:
        width = int(self.control_size.width)
        height = int(self.control_size.height)
        s = self.settings
        left = min(s.gutter_left, max(8, width // 4))
        right = min(s.gutter_right, max(8, width // 8))
        top = min(s.gutter_top, max(8, height // 5))
        bottom = min(s.gutter_bottom, max(8, height // 4))
        plot_w = width - left - right
        plot_h = height - top - bottom
        if plot_w <= 1 or plot_h <= 1:
            raise ChartDataError("chart too small for plotting area")
        return float(left), float(top), float(plot_w), float(plot_h)

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        with self._pass_lock:
            self.control_size = Size(width=float(width), height=float(height))

    def set_series(self, series: Iterable[StackedColumnSeries]) -> None:
        incoming = list(series)
        if len({id(s) for s in incoming}) != len(incoming):
            raise ValueError("a series can only be added to a chart once")
        with self._pass_lock:
            keep = {id(s) for s in incoming}
            for old in self._series:
                if id(old) not in keep:
                    old._release(self)
            for item in incoming:
                if item.series_id is None:
                    item._attach(self, self._next_series_id)
                    self._next_series_id += 1
                else:
                    item._attach(self, item.series_id)
            self._series = incoming
            self._series_context = SeriesContext(incoming)

    def add_series(self, series: StackedColumnSeries) -> None:
        self.set_series([*self._series, series])

    def remove_series(self, series: StackedColumnSeries) -> None:
        self.set_series([s for s in self._series if s is not series])

    def current_batch(self) -> TransitionBatch:
        if self._batch is None:
            raise ChartContractError("series can only be measured inside CartesianChart.update()")
        return self._batch

    def update(self) -> TransitionBatch:
        """Run one full update pass; concurrent callers queue on the pass lock."""
        with self._pass_lock:
            self.measured_drawables = set()
            self._batch = TransitionBatch()
            try:
                self._measure_bounds()
                self._series_context.begin_phase()
                for item in self._series:
                    item.measure(self, self.x_axis, self.y_axis)
                batch = self._batch
            except Exception:
                LOGGER.exception("CartesianChart update pass aborted; previous frame kept")
                raise
            finally:
                self._batch = None
            batch.commit()
            self.animator.submit(batch)
            stale = self.canvas.mark_stale(self.measured_drawables)
            LOGGER.debug(
                "CartesianChart pass: %d series, %d drawables measured, %d transitions, %d stale",
                len(self._series),
                len(self.measured_drawables),
                len(batch),
                stale,
            )
            return batch

    def _measure_bounds(self) -> None:
        self._series_context.begin_phase()
        self.x_axis.reset_bounds()
        self.y_axis.reset_bounds()
        for item in self._series:
            bounds = item.get_bounds(self, self.x_axis, self.y_axis)
            self.x_axis.append_bounds(bounds.secondary)
            self.y_axis.append_bounds(bounds.primary)
        LOGGER.debug("CartesianChart bounds: x=%s y=%s", self.x_axis.data_bounds, self.y_axis.data_bounds)

    def advance(self, now: float | None = None) -> int:
        with self._pass_lock:
            running = self.animator.advance(now)
            removed = self.canvas.collect_garbage(self.animator)
            if removed:
                LOGGER.debug("CartesianChart removed %d finished drawables", removed)
            return running
