from __future__ import annotations

from decimal import Decimal
import importlib.util
import unittest

import numpy as np

from stackchart.adapters.normalize import normalize_values
from stackchart.errors import ChartDataError


HAS_PANDAS = importlib.util.find_spec("pandas") is not None
HAS_TORCH = importlib.util.find_spec("torch") is not None


class NormalizeValuesTests(unittest.TestCase):
    def test_missing_values_become_null_points(self) -> None:
        values = normalize_values([1, None, 3.0, float("nan"), float("inf")])
        self.assertEqual(values.mask.tolist(), [True, False, True, False, False])
        self.assertEqual(values.x.tolist(), [0.0, 1.0, 2.0, 3.0, 4.0])
        self.assertEqual(values.y.dtype, np.float64)

    def test_explicit_categories(self) -> None:
        values = normalize_values([1.0, 2.0], x=[10, 20])
        self.assertEqual(values.x.tolist(), [10.0, 20.0])

    def test_null_category_masks_the_point(self) -> None:
        values = normalize_values([1.0, 2.0], x=[0.0, None])
        self.assertEqual(values.mask.tolist(), [True, False])

    def test_decimal_values(self) -> None:
        values = normalize_values([Decimal("1.5"), Decimal("2")])
        self.assertEqual(values.y.tolist(), [1.5, 2.0])

    def test_empty_input_is_allowed(self) -> None:
        self.assertEqual(len(normalize_values()), 0)
        self.assertEqual(len(normalize_values([])), 0)

    def test_length_mismatch_raises(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_values([1.0, 2.0], x=[0.0])

    def test_non_numeric_raises(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_values([1.0, "two"])

    def test_two_dimensional_input_raises(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_values(np.ones((2, 2)))
        with self.assertRaises(ChartDataError):
            normalize_values([[1.0], [2.0]])

    def test_scalar_input_raises(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_values(3.0)

    @unittest.skipUnless(HAS_PANDAS, "pandas not installed")
    def test_dataframe_columns(self) -> None:
        import pandas as pd

        frame = pd.DataFrame({"month": [1, 2, 3], "sales": [4.0, None, 6.0]})
        values = normalize_values("sales", x="month", data=frame)
        self.assertEqual(values.x.tolist(), [1.0, 2.0, 3.0])
        self.assertEqual(values.mask.tolist(), [True, False, True])
        with self.assertRaises(ChartDataError):
            normalize_values("missing", data=frame)

    @unittest.skipUnless(HAS_TORCH, "torch not installed")
    def test_torch_tensor(self) -> None:
        import torch

        values = normalize_values(torch.tensor([1.0, float("nan"), 2.0]))
        self.assertEqual(values.mask.tolist(), [True, False, True])


if __name__ == "__main__":
    unittest.main()
