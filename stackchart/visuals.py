from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from stackchart.animation import PropertyTransition
from stackchart.config import AnimationProfile, Padding
from stackchart.geometry import Size
from stackchart.text import DEFAULT_FONT_FAMILY, text_size


@runtime_checkable
class HasPosition(Protocol):
    x: float
    y: float


@runtime_checkable
class HasSize(Protocol):
    width: float
    height: float


@dataclass(eq=False)
class VisualElement:
    x: float = 0.0
    y: float = 0.0
    remove_on_completed: bool = False
    transitions: dict[str, AnimationProfile] = field(default_factory=dict, repr=False)

    def set_transitions(self, *props: str, animation: AnimationProfile) -> None:
        for prop in props:
            if not hasattr(self, prop):
                raise ValueError(f"{type(self).__name__} has no animatable property `{prop}`")
            self.transitions[prop] = animation

    def transition_to(self, **targets: float) -> list[PropertyTransition]:
        return [
            PropertyTransition(element=self, prop=prop, target=float(value), animation=self.transitions.get(prop))
            for prop, value in targets.items()
        ]


@dataclass(eq=False)
class RectangleGeometry(VisualElement):
    width: float = 0.0
    height: float = 0.0


@dataclass(eq=False)
class LabelGeometry(VisualElement):
    """Data label; (x, y) is the centre of the padded text box."""

    text: str = ""
    text_size: float = 16.0
    padding: Padding = field(default_factory=Padding)

    def measure(
        self,
        font_family: str | None = None,
        *,
        text: str | None = None,
        size_px: float | None = None,
        padding: Padding | None = None,
    ) -> Size:
        # keyword overrides measure a pending text without touching the label
        pad = self.padding if padding is None else padding
        w, h = text_size(
            self.text if text is None else text,
            font_family=font_family or DEFAULT_FONT_FAMILY,
            font_size_px=self.text_size if size_px is None else size_px,
        )
        return Size(width=w + pad.horizontal, height=h + pad.vertical)
