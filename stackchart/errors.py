from __future__ import annotations


class ChartDataError(ValueError):
    pass


class ChartContractError(RuntimeError):
    """Raised when a caller breaks a sequencing contract of the layout engine.

    These indicate a bug in the caller (for example measuring a series whose
    stack group was never registered) and are never recovered from silently.
    """
