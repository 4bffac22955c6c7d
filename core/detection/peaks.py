"""Local-maximum peak detection with height, prominence and distance constraints.

The stages run in a fixed order: strict local maxima, absolute height, relative
prominence, then height-first distance suppression. The order matters: it
decides which of two closely spaced peaks survives.
"""
from __future__ import annotations

import logging
import math

import numpy as np

from shared.models import PeakSet

from ..numeric import ArrayLike, maximum

logger = logging.getLogger(__name__)


def local_maxima(data: np.ndarray) -> np.ndarray:
    """Indices strictly greater than both neighbours. Plateaus and endpoints never qualify."""
    if data.size < 3:
        return np.zeros(0, dtype=np.int64)
    centre = data[1:-1]
    mask = (centre > data[:-2]) & (centre > data[2:])
    return np.flatnonzero(mask).astype(np.int64) + 1


# Samples examined per step of an outward scan; doubles after each miss.
_SCAN_BLOCK = 256


def _min_before_higher(side: np.ndarray, h: float) -> float:
    """Lowest value of ``side`` before its first sample >= ``h`` (``h`` if none).

    ``side`` runs outward from the peak. It is read in growing blocks so the
    work is proportional to how far the scan actually goes.
    """
    lowest = h
    start, width = 0, _SCAN_BLOCK
    while start < side.size:
        block = side[start : start + width]
        hits = np.flatnonzero(block >= h)
        if hits.size:
            block = block[: hits[0]]
        if block.size:
            lowest = min(lowest, float(block.min()))
        if hits.size:
            break
        start += width
        width *= 2
    return lowest


def peak_prominences(data: ArrayLike, indices: ArrayLike) -> np.ndarray:
    """Return how far each peak rises above its surrounding baseline.

    From each peak, scan outward until the sequence edge or the first sample at
    least as high as the peak, keeping the lowest value seen on each side. The
    prominence is the peak height minus the higher of the two minima. This only
    looks as far as the nearest higher sample on each side; it does not search
    for the key saddle to a higher peak.
    """
    x = np.asarray(data, dtype=np.float64)
    idx = np.asarray(indices, dtype=np.int64)
    out = np.zeros(idx.size, dtype=np.float64)
    for k, i in enumerate(idx):
        h = float(x[i])
        left_min = _min_before_higher(x[:i][::-1], h)
        right_min = _min_before_higher(x[i + 1 :], h)
        out[k] = h - max(left_min, right_min)
    return out


def select_by_distance(indices: np.ndarray, heights: np.ndarray, distance: float) -> np.ndarray:
    """Greedy height-first suppression of peaks closer than ``distance`` samples.

    Candidates are visited tallest first; ties keep their left-to-right order.
    A candidate is accepted unless an already-accepted peak lies strictly
    within ``distance`` of it. Returns the accepted indices in ascending order.
    """
    n = indices.size
    if n == 0:
        return indices
    keep = np.ones(n, dtype=bool)
    order = np.argsort(-heights, kind="stable")
    for pos in order:
        if not keep[pos]:
            continue
        # `indices` is ascending, so neighbours within range are contiguous.
        j = pos - 1
        while j >= 0 and indices[pos] - indices[j] < distance:
            keep[j] = False
            j -= 1
        j = pos + 1
        while j < n and indices[j] - indices[pos] < distance:
            keep[j] = False
            j += 1
    return indices[keep]


def find_peaks(
    data: ArrayLike,
    *,
    height: float = -math.inf,
    distance: float = 1,
    prominence: float = 0.0,
) -> PeakSet:
    """Find well-separated, prominent local maxima in ``data``.

    Args:
        data: 1D envelope values.
        height: Minimum absolute peak value (inclusive).
        distance: Minimum index separation between accepted peaks; peaks with
            ``abs(a - b) < distance`` compete and only the taller survives.
        prominence: Minimum prominence as a fraction of ``max(data)``; 0 disables
            the prominence stage.

    Returns:
        PeakSet with ascending indices and their heights. Empty when nothing
        qualifies.
    """
    x = np.asarray(data, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"expected a 1D sequence, got {x.ndim}D")

    candidates = local_maxima(x)
    candidates = candidates[x[candidates] >= height]

    if prominence > 0 and candidates.size:
        min_prominence = prominence * maximum(x)
        candidates = candidates[peak_prominences(x, candidates) >= min_prominence]

    if candidates.size == 0:
        logger.debug("No peaks survived height/prominence filtering")
        return PeakSet.empty()

    accepted = select_by_distance(candidates, x[candidates], distance)
    logger.debug("find_peaks: %d candidates -> %d peaks", candidates.size, accepted.size)
    return PeakSet(indices=accepted, heights=x[accepted])


__all__ = ["find_peaks", "local_maxima", "peak_prominences", "select_by_distance"]
