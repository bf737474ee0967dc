from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from stackchart.errors import ChartDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


NUMERIC_KINDS = frozenset("iufb")


@dataclass(frozen=True)
class SeriesValues:
    """Category positions, values and a mask that is False for null points."""

    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray

    def __len__(self) -> int:
        return int(self.y.size)


def normalize_values(
    values: Any = None,
    *,
    x: Any = None,
    data: Any = None,
) -> SeriesValues:
    """Coerce bound values to float arrays; None/NaN/inf become null points.

    ``values`` and ``x`` may be sequences, numpy arrays, pandas Series, torch
    tensors, or column names of the DataFrame passed as ``data``. Empty input
    is valid and yields an empty series.
    """
    frame = _check_frame(data)
    raw_values = _pick_column(values, frame, allow_default=True)
    y_arr = np.empty(0, dtype=np.float64) if raw_values is None else _as_float_array(raw_values, "values")
    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _as_float_array(_pick_column(x, frame, allow_default=False), "x")
    if x_arr.size != y_arr.size:
        raise ChartDataError(f"x and values length mismatch: {x_arr.size} != {y_arr.size}")
    return SeriesValues(x=x_arr, y=y_arr, mask=np.isfinite(x_arr) & np.isfinite(y_arr))


def _check_frame(data: Any) -> Any:
    if data is None:
        return None
    if pd is None:
        raise ChartDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise ChartDataError("`data` must be a pandas DataFrame")
    return data


def _pick_column(value: Any, frame: Any, *, allow_default: bool) -> Any:
    if frame is not None:
        if isinstance(value, str):
            if value not in frame.columns:
                raise ChartDataError(f"column not found: {value}")
            return frame[value]
        if value is None and allow_default:
            return _single_numeric_column(frame, "when values are omitted, data must have exactly one numeric column")
        return value
    if pd is not None and isinstance(value, pd.DataFrame):
        return _single_numeric_column(value, "DataFrame input must contain exactly one numeric column")
    return value


def _single_numeric_column(frame: Any, message: str) -> Any:
    numeric = [name for name in frame.columns if pd.api.types.is_numeric_dtype(frame[name])]
    if len(numeric) != 1:
        raise ChartDataError(message)
    return frame[numeric[0]]


def _as_float_array(value: Any, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return value.detach().cpu().to(torch.float64).numpy()
    if pd is not None and isinstance(value, pd.Series):
        arr = value.to_numpy()
    elif isinstance(value, np.ndarray):
        arr = value
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
    else:
        raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")
    if arr.ndim != 1:
        raise ChartDataError(f"{label} must be 1-D")
    if arr.dtype.kind in NUMERIC_KINDS:
        return arr.astype(np.float64, copy=False)
    return np.fromiter((_as_float(raw, label, i) for i, raw in enumerate(arr.tolist())), dtype=np.float64, count=arr.size)


def _as_float(raw: Any, label: str, index: int) -> float:
    if raw is None:
        return float("nan")
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ChartDataError(f"{label} contains non-numeric value at index {index}: {raw!r}") from exc
