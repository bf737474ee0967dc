from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Any, Callable

from stackchart.config import AnimationProfile
from stackchart.easing import EasingFunction


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyTransition:
    """Command: move ``element.prop`` to ``target``; snap when ``animation`` is None."""

    element: Any
    prop: str
    target: float
    animation: AnimationProfile | None = None


@dataclass
class TransitionBatch:
    """Transitions and state changes of one update pass.

    Nothing in the batch touches displayed state until the pass commits, so
    a discarded batch leaves the previous frame as it was.
    """

    commands: list[PropertyTransition] = field(default_factory=list)
    _on_commit: list[Callable[[], None]] = field(default_factory=list, repr=False)

    def extend(self, commands: list[PropertyTransition]) -> None:
        self.commands.extend(commands)

    def on_commit(self, action: Callable[[], None]) -> None:
        self._on_commit.append(action)

    def commit(self) -> None:
        for action in self._on_commit:
            action()
        self._on_commit.clear()

    def __len__(self) -> int:
        return len(self.commands)


@dataclass
class _Motion:
    element: Any
    prop: str
    start: float
    end: float
    started_at: float
    duration_s: float
    easing: EasingFunction

    def value_at(self, now: float) -> tuple[float, bool]:
        progress = (now - self.started_at) / self.duration_s
        if progress >= 1.0:
            return self.end, True
        progress = max(0.0, progress)
        return self.start + (self.end - self.start) * self.easing(progress), False


class Animator:
    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._motions: dict[tuple[int, str], _Motion] = {}

    def submit(self, batch: TransitionBatch) -> None:
        now = self._clock()
        for command in batch.commands:
            self._start(command, now)
        LOGGER.debug("Animator accepted %d transitions; %d motions running", len(batch), len(self._motions))

    def _start(self, command: PropertyTransition, now: float) -> None:
        key = (id(command.element), command.prop)
        current = float(getattr(command.element, command.prop))
        target = float(command.target)
        profile = command.animation
        if profile is None or profile.duration_ms <= 0 or current == target:
            self._motions.pop(key, None)
            setattr(command.element, command.prop, target)
            return
        running = self._motions.get(key)
        if running is not None and running.end == target:
            return
        self._motions[key] = _Motion(
            element=command.element,
            prop=command.prop,
            start=current,
            end=target,
            started_at=now,
            duration_s=profile.duration_ms / 1000.0,
            easing=profile.easing,
        )

    def complete_all(self, element: Any) -> None:
        for key in [k for k in self._motions if k[0] == id(element)]:
            motion = self._motions.pop(key)
            setattr(motion.element, motion.prop, motion.end)

    def is_animating(self, element: Any) -> bool:
        target = id(element)
        return any(k[0] == target for k in self._motions)

    def advance(self, now: float | None = None) -> int:
        """Interpolate every running motion; returns how many are still running."""
        at = self._clock() if now is None else now
        finished: list[tuple[int, str]] = []
        for key, motion in self._motions.items():
            value, done = motion.value_at(at)
            setattr(motion.element, motion.prop, value)
            if done:
                finished.append(key)
        for key in finished:
            del self._motions[key]
        return len(self._motions)

    def running_count(self) -> int:
        return len(self._motions)
