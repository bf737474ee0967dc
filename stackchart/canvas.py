from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Iterable, Iterator

from stackchart.visuals import VisualElement

if TYPE_CHECKING:
    from stackchart.animation import Animator


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]


@dataclass(eq=False)
class PaintTask:
    color: RGBA = (110, 169, 255, 255)
    z_index: float = 0.0
    stroke_thickness: float = 0.0
    font_family: str | None = None
    _geometries: dict[int, VisualElement] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if len(self.color) != 4 or any(c < 0 or c > 255 for c in self.color):
            raise ValueError("PaintTask color must be RGBA in [0, 255]")
        if self.stroke_thickness < 0:
            raise ValueError("stroke_thickness must be >= 0")

    def add_geometry(self, element: VisualElement) -> None:
        self._geometries[id(element)] = element

    def remove_geometry(self, element: VisualElement) -> None:
        self._geometries.pop(id(element), None)

    def contains(self, element: VisualElement) -> bool:
        return id(element) in self._geometries

    @property
    def geometries(self) -> tuple[VisualElement, ...]:
        return tuple(self._geometries.values())


class ChartCanvas:
    def __init__(self) -> None:
        self._tasks: list[PaintTask] = []

    def add_drawable_task(self, task: PaintTask) -> None:
        if not any(t is task for t in self._tasks):
            self._tasks.append(task)

    def remove_drawable_task(self, task: PaintTask) -> None:
        self._tasks = [t for t in self._tasks if t is not task]

    def ordered_tasks(self) -> list[PaintTask]:
        return sorted(self._tasks, key=lambda t: t.z_index)

    def drawables(self) -> Iterator[VisualElement]:
        seen: set[int] = set()
        for task in self.ordered_tasks():
            for element in task.geometries:
                if id(element) not in seen:
                    seen.add(id(element))
                    yield element

    def mark_stale(self, measured: Iterable[VisualElement]) -> int:
        """Flag every painted element missing from ``measured`` for removal."""
        keep = {id(e) for e in measured}
        flagged = 0
        for element in self.drawables():
            if id(element) not in keep and not element.remove_on_completed:
                element.remove_on_completed = True
                flagged += 1
        if flagged:
            LOGGER.debug("ChartCanvas flagged %d stale drawables", flagged)
        return flagged

    def collect_garbage(self, animator: "Animator") -> int:
        removed = 0
        for task in self._tasks:
            for element in task.geometries:
                if element.remove_on_completed and not animator.is_animating(element):
                    task.remove_geometry(element)
                    removed += 1
        return removed
