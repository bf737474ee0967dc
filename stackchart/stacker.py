from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Hashable, Sequence

from stackchart.errors import ChartContractError
from stackchart.geometry import StackInterval

if TYPE_CHECKING:
    from stackchart.points import ChartPoint
    from stackchart.series import StackedColumnSeries


LOGGER = logging.getLogger(__name__)


class Stacker:
    """Running positive and negative totals per category for one stack group.

    Values >= 0 extend the positive side and report ``[total, total + v]``.
    Negative values extend the negative side and report the interval lower
    edge first, ``[total + v, total]``. Totals only grow during one pass and
    must be fed in the same series order on every pass.
    """

    def __init__(self, group: Hashable) -> None:
        self.group = group
        self._positive: dict[float, float] = {}
        self._negative: dict[float, float] = {}

    def reset(self) -> None:
        self._positive.clear()
        self._negative.clear()

    def get_stack(self, point: "ChartPoint") -> StackInterval:
        if point.is_null:
            raise ChartContractError("null points do not take part in stacking")
        category = float(point.secondary_value)
        value = float(point.primary_value)
        if value >= 0:
            start = self._positive.get(category, 0.0)
            end = start + value
            self._positive[category] = end
            return StackInterval(start=start, end=end)
        total = self._negative.get(category, 0.0)
        lower = total + value
        self._negative[category] = lower
        return StackInterval(start=lower, end=total)

    def totals(self, category: float) -> tuple[float, float]:
        key = float(category)
        return (self._positive.get(key, 0.0), self._negative.get(key, 0.0))


class SeriesContext:
    """Chart-scoped stacking state, rebuilt whenever the chart's series change.

    Owns one ``Stacker`` per stack group and the side-by-side position of each
    group inside a category slot.
    """

    def __init__(self, series: Sequence["StackedColumnSeries"]) -> None:
        self._stackers: dict[Hashable, Stacker] = {}
        self._column_positions: dict[Hashable, int] = {}
        self._membership: dict[int, Hashable] = {}
        for item in series:
            group = item.resolved_stack_group()
            if group not in self._stackers:
                self._stackers[group] = Stacker(group)
                self._column_positions[group] = len(self._column_positions)
            self._membership[id(item)] = group
        LOGGER.debug("SeriesContext built: %d series in %d stack groups", len(self._membership), len(self._stackers))

    @property
    def groups(self) -> tuple[Hashable, ...]:
        return tuple(self._stackers)

    def begin_phase(self) -> None:
        for stacker in self._stackers.values():
            stacker.reset()

    def _group_of(self, series: "StackedColumnSeries") -> Hashable:
        try:
            return self._membership[id(series)]
        except KeyError:
            raise ChartContractError(f"series {series.name!r} is not registered with this chart") from None

    def get_stacker(self, series: "StackedColumnSeries") -> Stacker:
        group = self._group_of(series)
        stacker = self._stackers.get(group)
        if stacker is None:
            raise ChartContractError(f"unexpected missing stacker for stack group {group!r}")
        return stacker

    def get_stacked_column_position(self, series: "StackedColumnSeries") -> int:
        return self._column_positions[self._group_of(series)]

    def get_stacked_column_series_count(self) -> int:
        return len(self._column_positions)
