from __future__ import annotations

import math
from typing import Callable


EasingFunction = Callable[[float], float]

TAU = 2.0 * math.pi


def linear(t: float) -> float:
    return t


def cubic_out(t: float) -> float:
    t -= 1.0
    return t * t * t + 1.0


def exponential_out(t: float) -> float:
    return 1.0 - _tpmt(t)


def build_elastic_out(amplitude: float = 1.0, period: float = 0.3) -> EasingFunction:
    if period <= 0:
        raise ValueError("period must be > 0")
    a = max(1.0, float(amplitude))
    p = float(period) / TAU
    s = math.asin(1.0 / a) * p

    def elastic_out(t: float) -> float:
        return 1.0 - a * _tpmt(t) * math.sin((t + s) / p)

    return elastic_out


def _tpmt(x: float) -> float:
    # 2^(-10x) rescaled so that 0 -> 1 and 1 -> 0 exactly.
    return (2.0 ** (-10.0 * x) - 0.0009765625) * 1.0009775171065494


elastic_out = build_elastic_out(amplitude=1.5, period=0.6)
