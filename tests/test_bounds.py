from __future__ import annotations

import unittest

from stackchart.axis import Axis
from stackchart.chart import CartesianChart
from stackchart.config import ChartSettings
from stackchart.geometry import Bounds, DimensionalBounds, Size
from stackchart.series import StackedColumnSeries, pad_stacked_bounds


class PadStackedBoundsTests(unittest.TestCase):
    def test_secondary_gets_half_a_category(self) -> None:
        out = pad_stacked_bounds(DimensionalBounds(secondary=Bounds(0.0, 4.0), primary=Bounds(0.0, 1.0)), 1.0)
        self.assertEqual((out.secondary.min, out.secondary.max), (-0.5, 4.5))

    def test_non_negative_primary_is_clamped_to_zero(self) -> None:
        out = pad_stacked_bounds(DimensionalBounds(secondary=Bounds(0.0, 1.0), primary=Bounds(0.0, 10.0)), 2.0)
        self.assertEqual((out.primary.min, out.primary.max), (0.0, 12.0))
        out = pad_stacked_bounds(DimensionalBounds(secondary=Bounds(0.0, 1.0), primary=Bounds(4.0, 10.0)), 2.0)
        self.assertEqual(out.primary.min, 0.0)

    def test_negative_primary_gets_a_tick_below(self) -> None:
        out = pad_stacked_bounds(DimensionalBounds(secondary=Bounds(0.0, 1.0), primary=Bounds(-3.0, 10.0)), 2.0)
        self.assertEqual((out.primary.min, out.primary.max), (-5.0, 12.0))

    def test_empty_bounds_stay_empty(self) -> None:
        out = pad_stacked_bounds(DimensionalBounds(), 2.0)
        self.assertTrue(out.secondary.is_empty)
        self.assertTrue(out.primary.is_empty)


class SeriesBoundsTests(unittest.TestCase):
    def _chart(self, *series: StackedColumnSeries) -> CartesianChart:
        return CartesianChart(
            400,
            300,
            series=series,
            y_axis=Axis(orientation="y", major_step=2.0),
            settings=ChartSettings(gutter_left=0, gutter_right=0, gutter_top=0, gutter_bottom=0),
        )

    def test_bounds_cover_the_stacked_extent(self) -> None:
        a = StackedColumnSeries([4.0, 6.0], stack_group="g")
        b = StackedColumnSeries([-3.0, 3.0], stack_group="g")
        chart = self._chart(a, b)
        chart.update()
        self.assertEqual((chart.x_axis.data_bounds.min, chart.x_axis.data_bounds.max), (-0.5, 1.5))
        # b stacks on a: category 1 reaches 9, category 0 goes down to -3
        self.assertEqual((chart.y_axis.data_bounds.min, chart.y_axis.data_bounds.max), (-5.0, 11.0))

    def test_separate_groups_do_not_stack(self) -> None:
        a = StackedColumnSeries([4.0], stack_group="a")
        b = StackedColumnSeries([3.0], stack_group="b")
        chart = self._chart(a, b)
        chart.update()
        self.assertEqual((chart.y_axis.data_bounds.min, chart.y_axis.data_bounds.max), (0.0, 6.0))

    def test_null_points_are_ignored(self) -> None:
        a = StackedColumnSeries([None, 2.0, float("nan")], x=[10.0, 11.0, 12.0], stack_group="g")
        chart = self._chart(a)
        chart.update()
        self.assertEqual((chart.x_axis.data_bounds.min, chart.x_axis.data_bounds.max), (10.5, 11.5))

    def test_all_null_series_contributes_nothing(self) -> None:
        empty = StackedColumnSeries([None, None], stack_group="e")
        full = StackedColumnSeries([1.0], stack_group="f")
        chart = self._chart(empty, full)
        bounds = empty.get_bounds(chart, chart.x_axis, chart.y_axis)
        self.assertTrue(bounds.primary.is_empty)
        chart.update()
        self.assertEqual((chart.y_axis.data_bounds.min, chart.y_axis.data_bounds.max), (0.0, 3.0))

    def test_bounds_are_stable_across_passes(self) -> None:
        a = StackedColumnSeries([1.0, 2.0], stack_group="g")
        b = StackedColumnSeries([1.0, 2.0], stack_group="g")
        chart = self._chart(a, b)
        chart.update()
        first = chart.y_axis.data_bounds
        chart.update()
        self.assertEqual(chart.y_axis.data_bounds, first)

    def test_automatic_tick_uses_control_size(self) -> None:
        axis = Axis(orientation="y")
        tick = axis.get_tick(Size(400, 600), Bounds(0.0, 5.0))
        self.assertEqual(tick.value, 2.0)


if __name__ == "__main__":
    unittest.main()
