from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import numpy as np


NICE_FRACTIONS = (1.0, 2.0, 5.0, 10.0)
# upper limits for picking 1, 2 or 5 when rounding to the nearest nice fraction
ROUNDING_LIMITS = (1.5, 3.0, 7.0)


@dataclass(frozen=True)
class Tick:
    value: float
    magnitude: float


def nice_tick(span: float, target: int) -> Tick:
    if target <= 0:
        raise ValueError("target must be > 0")
    if not np.isfinite(span) or span <= 0:
        span = 1.0
    rough = _nice_number(span, round_result=False)
    step = _nice_number(rough / max(target - 1, 1), round_result=True)
    magnitude = float(10 ** np.floor(np.log10(step)))
    return Tick(value=step, magnitude=magnitude)


def format_value(value: float, *, decimals: int = 6) -> str:
    if not np.isfinite(value):
        return str(value)
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 10.0**-decimals):
        return f"{value:.4e}"
    out = format(Decimal(str(value)).quantize(Decimal("1").scaleb(-decimals)), "f")
    # Trim only fractional zeros so 30 stays "30".
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)
    if round_result:
        index = next((i for i, limit in enumerate(ROUNDING_LIMITS) if frac < limit), 3)
    else:
        index = next((i for i, nice in enumerate(NICE_FRACTIONS) if frac <= nice), 3)
    return float(NICE_FRACTIONS[index] * (10**exp))
