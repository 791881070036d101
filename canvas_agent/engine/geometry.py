"""Geometry helpers: clamping, rounding, medians. No engine imports."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

MIN_SIZE = 8.0


def round_px(value: float) -> int:
    """Round half up to a whole pixel (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def clamp_size(
    container_w: float,
    container_h: float,
    w: float,
    h: float,
    min_size: float = MIN_SIZE,
) -> tuple[float, float]:
    """Force (w, h) into [min_size, container] independently per axis.

    NaN collapses to ``min_size``. When a container side is smaller than
    ``min_size`` the minimum wins.
    """
    dims = np.nan_to_num(np.array([w, h], dtype=np.float64), nan=min_size)
    limits = np.array([container_w, container_h], dtype=np.float64)
    clamped = np.maximum(np.minimum(dims, limits), min_size)
    return float(clamped[0]), float(clamped[1])


def clamp_range(value: float, low: float, high: float) -> float:
    """Clamp to [low, high]; ``low`` wins when the range is inverted."""
    return max(low, min(value, high))


def median(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(np.median(np.asarray(values, dtype=np.float64)))
