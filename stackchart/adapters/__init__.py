from .normalize import SeriesValues, normalize_values

__all__ = ["SeriesValues", "normalize_values"]
