from __future__ import annotations

from dataclasses import dataclass
import math

from stackchart.easing import EasingFunction, elastic_out, exponential_out


DEFAULT_ANIMATIONS_SPEED_MS = 800.0
DEFAULT_MAX_BAR_WIDTH = 50.0
DEFAULT_DATA_LABELS_SIZE = 16.0
DEFAULT_DATA_LABELS_PADDING = 6.0
# y/height motions run this much longer than x/width motions.
VERTICAL_DURATION_FACTOR = 1.5


@dataclass(frozen=True)
class AnimationProfile:
    duration_ms: float
    easing: EasingFunction = exponential_out

    def __post_init__(self) -> None:
        if not math.isfinite(self.duration_ms) or self.duration_ms < 0:
            raise ValueError("AnimationProfile duration_ms must be >= 0")

    def scaled(self, factor: float, easing: EasingFunction | None = None) -> AnimationProfile:
        return AnimationProfile(duration_ms=self.duration_ms * factor, easing=easing or self.easing)


@dataclass(frozen=True)
class Padding:
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def __post_init__(self) -> None:
        if min(self.left, self.top, self.right, self.bottom) < 0:
            raise ValueError("Padding values must be >= 0")

    @classmethod
    def uniform(cls, value: float) -> Padding:
        return cls(left=value, top=value, right=value, bottom=value)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass(frozen=True)
class ChartSettings:
    animations_speed_ms: float = DEFAULT_ANIMATIONS_SPEED_MS
    easing_function: EasingFunction = exponential_out
    elastic_function: EasingFunction = elastic_out
    # plot region gutters, in pixels
    gutter_left: int = 64
    gutter_right: int = 16
    gutter_top: int = 24
    gutter_bottom: int = 40

    def __post_init__(self) -> None:
        if not math.isfinite(self.animations_speed_ms) or self.animations_speed_ms < 0:
            raise ValueError("animations_speed_ms must be >= 0")
        if min(self.gutter_left, self.gutter_right, self.gutter_top, self.gutter_bottom) < 0:
            raise ValueError("gutters must be >= 0")

    @property
    def default_animation(self) -> AnimationProfile:
        return AnimationProfile(duration_ms=self.animations_speed_ms, easing=self.easing_function)

    @property
    def vertical_animation(self) -> AnimationProfile:
        return self.default_animation.scaled(VERTICAL_DURATION_FACTOR, easing=self.elastic_function)
