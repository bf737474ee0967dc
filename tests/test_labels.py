from __future__ import annotations

import unittest
from unittest import mock

from stackchart.config import Padding
from stackchart.geometry import Size
from stackchart.labels import get_label_position
from stackchart.text import text_size
from stackchart.visuals import LabelGeometry


LABEL = Size(20.0, 10.0)


class LabelPositionTests(unittest.TestCase):
    def _at(self, position: str, *, above_pivot: bool = True) -> tuple[float, float]:
        p = get_label_position(100.0, 50.0, 40.0, 80.0, LABEL, position, above_pivot=above_pivot)  # type: ignore[arg-type]
        return (p.x, p.y)

    def test_fixed_positions(self) -> None:
        self.assertEqual(self._at("top"), (120.0, 45.0))
        self.assertEqual(self._at("bottom"), (120.0, 135.0))
        self.assertEqual(self._at("left"), (90.0, 90.0))
        self.assertEqual(self._at("right"), (150.0, 90.0))
        self.assertEqual(self._at("middle"), (120.0, 90.0))

    def test_end_and_start_follow_growth_direction(self) -> None:
        self.assertEqual(self._at("end"), self._at("top"))
        self.assertEqual(self._at("start"), self._at("bottom"))
        self.assertEqual(self._at("end", above_pivot=False), self._at("bottom"))
        self.assertEqual(self._at("start", above_pivot=False), self._at("top"))

    def test_unknown_position_raises(self) -> None:
        with self.assertRaises(ValueError):
            self._at("outside")


class LabelMeasureTests(unittest.TestCase):
    def test_measure_adds_padding(self) -> None:
        label = LabelGeometry(text="42", padding=Padding(left=1, top=2, right=3, bottom=4))
        with mock.patch("stackchart.visuals.text_size", return_value=(30, 12)):
            size = label.measure()
        self.assertEqual((size.width, size.height), (34.0, 18.0))

    def test_text_size_with_installed_fonts(self) -> None:
        w, h = text_size("value", font_size_px=18.0)
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)
        self.assertGreaterEqual(text_size("", font_size_px=18.0)[1], 1)


if __name__ == "__main__":
    unittest.main()
