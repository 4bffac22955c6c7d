"""Numeric primitives shared by the envelope builder, peak detector and burst statistics.

This module provides small, pure functions over 1-D sequences:
- mean / std / median / minimum / maximum: summary statistics with fixed
  sentinel values for empty input
- absolute / first_difference: elementwise helpers
- convolve / box_kernel: "same"-aligned convolution used for envelope smoothing

Callers must treat the empty-input results (0, +inf, -inf) as sentinels rather
than data.
"""
from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np

from .errors import UnsupportedMode

ArrayLike = Union[np.ndarray, Sequence[float]]


def _as_1d(values: ArrayLike) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"expected a 1D sequence, got {arr.ndim}D")
    return arr


def mean(values: ArrayLike) -> float:
    arr = _as_1d(values)
    if arr.size == 0:
        return 0.0
    return float(np.mean(arr))


def std(values: ArrayLike) -> float:
    """Population standard deviation (divisor n)."""
    arr = _as_1d(values)
    if arr.size == 0:
        return 0.0
    return float(np.std(arr, ddof=0))


def median(values: ArrayLike) -> float:
    arr = _as_1d(values)
    if arr.size == 0:
        return 0.0
    return float(np.median(arr))


def maximum(values: ArrayLike) -> float:
    arr = _as_1d(values)
    if arr.size == 0:
        return -math.inf
    return float(np.max(arr))


def minimum(values: ArrayLike) -> float:
    arr = _as_1d(values)
    if arr.size == 0:
        return math.inf
    return float(np.min(arr))


def absolute(values: ArrayLike) -> np.ndarray:
    return np.abs(_as_1d(values))


def first_difference(values: ArrayLike) -> np.ndarray:
    arr = _as_1d(values)
    if arr.size <= 1:
        return np.zeros(0, dtype=np.float64)
    return arr[1:] - arr[:-1]


def box_kernel(n: int) -> np.ndarray:
    """Return an ``n``-tap averaging kernel whose taps sum to one."""
    if n < 1:
        raise ValueError("box kernel length must be at least 1")
    return np.ones(int(n), dtype=np.float64) / float(n)


def convolve(signal: ArrayLike, kernel: ArrayLike, mode: str = "same") -> np.ndarray:
    """Slide ``kernel`` over ``signal`` and return an output of the signal's length.

    ``out[i] = sum_j signal[i - k // 2 + j] * kernel[j]`` where only terms whose
    signal index falls inside the sequence contribute. Near the edges fewer taps
    are summed, so a normalized kernel averages over less than its full length
    there.
    """
    if mode != "same":
        raise UnsupportedMode(f"Only 'same' mode is supported, got {mode!r}")
    x = _as_1d(signal)
    k = _as_1d(kernel)
    if k.size == 0:
        raise ValueError("kernel must not be empty")

    n = x.size
    out = np.zeros(n, dtype=np.float64)
    half = k.size // 2
    for j, tap in enumerate(k):
        offset = j - half
        # Output positions whose shifted signal index stays in bounds.
        lo = max(0, -offset)
        hi = min(n, n - offset)
        if lo >= hi:
            continue
        out[lo:hi] += x[lo + offset : hi + offset] * tap
    return out


__all__ = [
    "mean",
    "std",
    "median",
    "minimum",
    "maximum",
    "absolute",
    "first_difference",
    "box_kernel",
    "convolve",
]
