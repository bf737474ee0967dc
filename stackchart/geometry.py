from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Size width/height must be >= 0")


@dataclass(frozen=True)
class Geometry:
    """Pixel-space rectangle; height may be 0 for entering/exiting shapes."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Geometry width/height must be >= 0")

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


@dataclass(frozen=True)
class Bounds:
    """Closed data range; the default instance is empty and merges as identity."""

    min: float = math.inf
    max: float = -math.inf

    @property
    def is_empty(self) -> bool:
        return self.min > self.max

    @property
    def delta(self) -> float:
        if self.is_empty:
            return 0.0
        return self.max - self.min

    def include(self, value: float) -> Bounds:
        return Bounds(min=min(self.min, value), max=max(self.max, value))

    def merged(self, other: Bounds) -> Bounds:
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return Bounds(min=min(self.min, other.min), max=max(self.max, other.max))


EMPTY_BOUNDS = Bounds()


@dataclass(frozen=True)
class DimensionalBounds:
    secondary: Bounds = EMPTY_BOUNDS
    primary: Bounds = EMPTY_BOUNDS


@dataclass(frozen=True)
class StackInterval:
    start: float
    end: float

    @property
    def lower(self) -> float:
        return min(self.start, self.end)

    @property
    def upper(self) -> float:
        return max(self.start, self.end)
