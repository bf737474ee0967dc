from __future__ import annotations

from dataclasses import dataclass
from functools import partial
import logging
import math
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterator

from stackchart.adapters import SeriesValues, normalize_values
from stackchart.animation import TransitionBatch
from stackchart.axis import Axis
from stackchart.canvas import RGBA, PaintTask
from stackchart.config import DEFAULT_DATA_LABELS_PADDING, DEFAULT_DATA_LABELS_SIZE, DEFAULT_MAX_BAR_WIDTH, Padding
from stackchart.errors import ChartContractError
from stackchart.geometry import EMPTY_BOUNDS, Bounds, DimensionalBounds
from stackchart.labels import DATA_LABELS_POSITIONS, DataLabelsPosition, get_label_position
from stackchart.points import ChartPoint, PointContext, RectangleHoverArea
from stackchart.scaler import Scaler
from stackchart.ticks import format_value
from stackchart.visuals import HasPosition, HasSize, LabelGeometry, RectangleGeometry, VisualElement

if TYPE_CHECKING:
    from stackchart.chart import CartesianChart


LOGGER = logging.getLogger(__name__)

DEFAULT_FILL_COLOR: RGBA = (110, 169, 255, 255)
# paint order inside one series: fill < stroke < labels
FILL_Z_OFFSET = 0.1
STROKE_Z_OFFSET = 0.2
LABELS_Z_OFFSET = 0.3

PointHook = Callable[[ChartPoint], None]
DataLabelFormatter = Callable[[ChartPoint], str]
VisualFactory = Callable[[], VisualElement]

_UNSET: Any = object()


def default_label_formatter(point: ChartPoint) -> str:
    return format_value(point.primary_value)


@dataclass(frozen=True)
class _OwnStackGroup:
    series_id: int


@dataclass(frozen=True)
class ColumnLayout:
    unit_width: float
    half_width: float
    offset: float


def compute_column_layout(unit_px: float, count: int, position: int, max_bar_width: float) -> ColumnLayout:
    uw = abs(unit_px)
    uwm = 0.5 * uw
    cp = 0.0
    if count > 1:
        uw = uw / count
        uwm = 0.5 * uw
        cp = (position - count / 2.0) * uw + uwm
    if uw > max_bar_width:
        uw = float(max_bar_width)
        uwm = uw / 2.0
    return ColumnLayout(unit_width=uw, half_width=uwm, offset=cp)


def pad_stacked_bounds(base: DimensionalBounds, tick: float) -> DimensionalBounds:
    """Half a category on each side of x; one tick of headroom on y, keeping zero in view."""
    secondary = base.secondary
    if not secondary.is_empty:
        secondary = Bounds(min=secondary.min - 0.5, max=secondary.max + 0.5)
    primary = base.primary
    if not primary.is_empty:
        primary = Bounds(
            min=primary.min - tick if primary.min < 0 else 0.0,
            max=primary.max + tick,
        )
    return DimensionalBounds(secondary=secondary, primary=primary)


class StackedColumnSeries:
    def __init__(
        self,
        values: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        name: str | None = None,
        stack_group: Hashable | None = None,
        fill: PaintTask | None = _UNSET,
        stroke: PaintTask | None = None,
        data_labels: PaintTask | None = None,
        data_labels_size: float = DEFAULT_DATA_LABELS_SIZE,
        data_labels_padding: Padding = Padding.uniform(DEFAULT_DATA_LABELS_PADDING),
        data_labels_position: DataLabelsPosition = "middle",
        data_label_formatter: DataLabelFormatter = default_label_formatter,
        pivot: float = 0.0,
        max_bar_width: float = DEFAULT_MAX_BAR_WIDTH,
        z_index: float | None = None,
        point_created: PointHook | None = None,
        point_measured: PointHook | None = None,
        visual_factory: VisualFactory = RectangleGeometry,
    ) -> None:
        if max_bar_width <= 0:
            raise ValueError("max_bar_width must be > 0")
        if data_labels_size <= 0:
            raise ValueError("data_labels_size must be > 0")
        if data_labels_position not in DATA_LABELS_POSITIONS:
            raise ValueError(f"unknown data labels position: {data_labels_position}")
        self.name = name
        self.stack_group = stack_group
        self.fill: PaintTask | None = PaintTask(color=DEFAULT_FILL_COLOR) if fill is _UNSET else fill
        self.stroke = stroke
        self.data_labels_paint = data_labels
        self.data_labels_size = float(data_labels_size)
        self.data_labels_padding = data_labels_padding
        self.data_labels_position: DataLabelsPosition = data_labels_position
        self.data_label_formatter = data_label_formatter
        self.pivot = float(pivot)
        self.max_bar_width = float(max_bar_width)
        self.z_index = z_index
        self.point_created = point_created
        self.point_measured = point_measured
        self.visual_factory = visual_factory
        self._values: SeriesValues = normalize_values(values, x=x, data=data)
        self._contexts: dict[Hashable, PointContext] = {}
        self._chart: CartesianChart | None = None
        self._series_id: int | None = None

    def __repr__(self) -> str:
        return f"StackedColumnSeries(name={self.name!r}, points={len(self._values)}, stack_group={self.stack_group!r})"

    @property
    def series_id(self) -> int | None:
        return self._series_id

    @property
    def values(self) -> SeriesValues:
        return self._values

    @property
    def point_contexts(self) -> dict[Hashable, PointContext]:
        return dict(self._contexts)

    def set_values(self, values: Any = None, *, x: Any = None, data: Any = None) -> "StackedColumnSeries":
        self._values = normalize_values(values, x=x, data=data)
        return self

    def set_data_labels(
        self,
        paint: PaintTask | None,
        *,
        size: float | None = None,
        position: DataLabelsPosition | None = None,
        padding: Padding | None = None,
    ) -> "StackedColumnSeries":
        if size is not None:
            if size <= 0:
                raise ValueError("data_labels_size must be > 0")
            self.data_labels_size = float(size)
        if position is not None:
            if position not in DATA_LABELS_POSITIONS:
                raise ValueError(f"unknown data labels position: {position}")
            self.data_labels_position = position
        if padding is not None:
            self.data_labels_padding = padding
        previous = self.data_labels_paint
        self.data_labels_paint = paint
        if previous is not None and previous is not paint:
            self._move_labels(previous, paint)
        return self

    def _move_labels(self, previous: PaintTask, paint: PaintTask | None) -> None:
        if self._chart is not None:
            self._chart.canvas.remove_drawable_task(previous)
        for state in self._contexts.values():
            label = state.label
            if label is None:
                continue
            previous.remove_geometry(label)
            if paint is None:
                label.remove_on_completed = True
                state.label = None
            else:
                paint.add_geometry(label)

    def set_max_bar_width(self, width: float) -> "StackedColumnSeries":
        if width <= 0:
            raise ValueError("max_bar_width must be > 0")
        self.max_bar_width = float(width)
        return self

    def resolved_stack_group(self) -> Hashable:
        if self.stack_group is not None:
            return self.stack_group
        if self._series_id is None:
            raise ChartContractError(f"series {self.name!r} has no stack group until it joins a chart")
        return _OwnStackGroup(self._series_id)

    def _attach(self, chart: "CartesianChart", series_id: int) -> None:
        if self._chart is not None and self._chart is not chart:
            raise ChartContractError(f"series {self.name!r} already belongs to another chart")
        self._chart = chart
        if self._series_id is None:
            self._series_id = series_id

    def _release(self, chart: "CartesianChart") -> None:
        for paint in (self.fill, self.stroke, self.data_labels_paint):
            if paint is not None:
                chart.canvas.remove_drawable_task(paint)
        self._contexts.clear()
        self._chart = None

    def fetch(self, chart: "CartesianChart") -> Iterator[ChartPoint]:
        """Snapshot the bound values as points; restartable, in index order."""
        _ = chart
        values = self._values
        for index in range(len(values)):
            context = self._contexts.get(index)
            if context is None:
                context = PointContext(key=index)
                self._contexts[index] = context
            yield ChartPoint(
                secondary_value=float(values.x[index]),
                primary_value=float(values.y[index]),
                is_null=not bool(values.mask[index]),
                series=self,
                context=context,
            )

    def get_bounds(self, chart: "CartesianChart", secondary_axis: Axis, primary_axis: Axis) -> DimensionalBounds:
        stacker = chart.series_context.get_stacker(self)
        secondary = EMPTY_BOUNDS
        primary = EMPTY_BOUNDS
        for point in self.fetch(chart):
            if point.is_null:
                continue
            interval = stacker.get_stack(point)
            secondary = secondary.include(point.secondary_value)
            primary = primary.include(interval.start).include(interval.end)
        if primary.is_empty:
            return DimensionalBounds()
        tick = primary_axis.get_tick(chart.control_size, primary)
        return pad_stacked_bounds(DimensionalBounds(secondary=secondary, primary=primary), tick.value)

    def measure(self, chart: "CartesianChart", secondary_axis: Axis, primary_axis: Axis) -> None:
        if self._chart is not chart:
            raise ChartContractError(f"series {self.name!r} is not attached to this chart")
        batch = chart.current_batch()
        location = chart.draw_margin_location
        size = chart.draw_margin_size
        secondary_scale = Scaler.from_axis(secondary_axis, location, size)
        primary_scale = Scaler.from_axis(primary_axis, location, size)

        series_context = chart.series_context
        layout = compute_column_layout(
            secondary_scale.measure_unit(),
            series_context.get_stacked_column_series_count(),
            series_context.get_stacked_column_position(self),
            self.max_bar_width,
        )
        uw, uwm, cp = layout.unit_width, layout.half_width, layout.offset
        pivot_px = primary_scale.to_pixels(self.pivot)

        self._register_paint_tasks(chart)
        stacker = series_context.get_stacker(self)

        fetched: set[Hashable] = set()
        for point in self.fetch(chart):
            fetched.add(point.key)
            state = point.context
            x = secondary_scale.to_pixels(point.secondary_value) - uwm + cp

            if point.is_null:
                if state.visual is not None:
                    exit_x = x if math.isfinite(x) else state.visual.x
                    self._retire(state, batch, x=exit_x, pivot_px=pivot_px, width=uw)
                continue

            visual = state.visual
            if visual is None:
                visual = self._create_visual(chart, point, x=x, pivot_px=pivot_px, width=uw)

            interval = stacker.get_stack(point)
            primary_i = primary_scale.to_pixels(interval.start)
            primary_j = primary_scale.to_pixels(interval.end)
            top = min(primary_i, primary_j)
            height = abs(primary_i - primary_j)

            batch.extend(visual.transition_to(x=x, y=top, width=uw, height=height))
            batch.on_commit(partial(_commit_measured, state, visual, (x, top, uw, height)))

            if self.point_measured is not None:
                self.point_measured(point)
            chart.measured_drawables.add(visual)

            if self.data_labels_paint is not None:
                self._measure_label(
                    chart, point, batch, self.data_labels_paint, x=x, top=top, width=uw, height=height, pivot_px=pivot_px
                )

        self._retire_unfetched(fetched, batch, pivot_px=pivot_px)

    def _register_paint_tasks(self, chart: "CartesianChart") -> None:
        # Unset z-index falls back to the order series joined the chart.
        base_z = float(self.z_index) if self.z_index is not None else float(self._series_id or 0)
        for paint, offset in (
            (self.fill, FILL_Z_OFFSET),
            (self.stroke, STROKE_Z_OFFSET),
            (self.data_labels_paint, LABELS_Z_OFFSET),
        ):
            if paint is None:
                continue
            paint.z_index = base_z + offset
            chart.canvas.add_drawable_task(paint)

    def _create_visual(self, chart: "CartesianChart", point: ChartPoint, *, x: float, pivot_px: float, width: float) -> VisualElement:
        # Entering shapes are registered at once; at zero height on the pivot they
        # do not change the displayed frame even if the pass is discarded.
        visual = self.visual_factory()
        if not isinstance(visual, HasPosition) or not isinstance(visual, HasSize):
            raise ChartContractError(f"{type(visual).__name__} has no position and size to lay out")
        visual.x, visual.y = x, pivot_px
        visual.width, visual.height = width, 0.0
        point.context.visual = visual
        visual.set_transitions("x", "width", animation=chart.settings.default_animation)
        visual.set_transitions("y", "height", animation=chart.settings.vertical_animation)
        if self.point_created is not None:
            self.point_created(point)
        chart.animator.complete_all(visual)
        if self.fill is not None:
            self.fill.add_geometry(visual)
        if self.stroke is not None:
            self.stroke.add_geometry(visual)
        return visual

    def _measure_label(
        self,
        chart: "CartesianChart",
        point: ChartPoint,
        batch: TransitionBatch,
        paint: PaintTask,
        *,
        x: float,
        top: float,
        width: float,
        height: float,
        pivot_px: float,
    ) -> None:
        state = point.context
        label = state.label
        if label is None:
            label = LabelGeometry(x=x, y=pivot_px)
            label.set_transitions("x", "y", animation=chart.settings.default_animation)
            chart.animator.complete_all(label)
            state.label = label
            paint.add_geometry(label)

        text = self.data_label_formatter(point)
        size_px = self.data_labels_size
        padding = self.data_labels_padding
        position = get_label_position(
            x,
            top,
            width,
            height,
            label.measure(paint.font_family, text=text, size_px=size_px, padding=padding),
            self.data_labels_position,
            above_pivot=point.primary_value > self.pivot,
        )
        batch.extend(label.transition_to(x=position.x, y=position.y))
        batch.on_commit(partial(_commit_label, label, text, size_px, padding))
        chart.measured_drawables.add(label)

    def _retire(self, state: PointContext, batch: TransitionBatch, *, x: float, pivot_px: float, width: float) -> None:
        visual = state.visual
        if visual is None:
            raise ChartContractError(f"point {state.key!r} has no visual to remove")
        batch.extend(visual.transition_to(x=x, y=pivot_px, width=width, height=0.0))
        batch.on_commit(partial(_commit_retired, state, visual))

    def _retire_unfetched(self, fetched: set[Hashable], batch: TransitionBatch, *, pivot_px: float) -> None:
        stale = [key for key in self._contexts if key not in fetched]
        for key in stale:
            state = self._contexts[key]
            if state.visual is not None:
                self._retire(state, batch, x=state.visual.x, pivot_px=pivot_px, width=state.visual.width)
            elif state.label is not None:
                batch.on_commit(partial(_commit_retired, state, None))
            batch.on_commit(partial(self._contexts.pop, key, None))
        if stale:
            LOGGER.debug("Series %r dropping %d points that are no longer fetched", self.name, len(stale))


def _commit_measured(state: PointContext, visual: VisualElement, rect: tuple[float, float, float, float]) -> None:
    visual.remove_on_completed = False
    if state.hover_area is None:
        state.hover_area = RectangleHoverArea()
    state.hover_area.set_dimensions(*rect)


def _commit_label(label: LabelGeometry, text: str, size_px: float, padding: Padding) -> None:
    label.text = text
    label.text_size = size_px
    label.padding = padding
    label.remove_on_completed = False


def _commit_retired(state: PointContext, visual: VisualElement | None) -> None:
    if visual is not None:
        visual.remove_on_completed = True
        if state.visual is visual:
            state.visual = None
    if state.label is not None:
        state.label.remove_on_completed = True
        state.label = None
