from __future__ import annotations

from typing import Literal

from stackchart.geometry import Point, Size


DataLabelsPosition = Literal["top", "bottom", "left", "right", "middle", "start", "end"]
DATA_LABELS_POSITIONS = ("top", "bottom", "left", "right", "middle", "start", "end")


def get_label_position(
    x: float,
    y: float,
    width: float,
    height: float,
    label_size: Size,
    position: DataLabelsPosition,
    *,
    above_pivot: bool,
) -> Point:
    """Centre point of a data label placed around a column.

    ``end`` is the edge the column grows towards, so for a column below the
    pivot it is the bottom edge; ``start`` is the opposite edge.
    """
    if position == "end":
        position = "top" if above_pivot else "bottom"
    elif position == "start":
        position = "bottom" if above_pivot else "top"

    middle_x = x + width * 0.5
    middle_y = y + height * 0.5
    if position == "top":
        return Point(middle_x, y - label_size.height * 0.5)
    if position == "bottom":
        return Point(middle_x, y + height + label_size.height * 0.5)
    if position == "left":
        return Point(x - label_size.width * 0.5, middle_y)
    if position == "right":
        return Point(x + width + label_size.width * 0.5, middle_y)
    if position == "middle":
        return Point(middle_x, middle_y)
    raise ValueError(f"unknown data labels position: {position}")
