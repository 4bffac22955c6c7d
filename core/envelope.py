"""Amplitude envelope used to locate transient peaks."""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from .errors import NotReady
from .numeric import ArrayLike, absolute, box_kernel, convolve, mean, std

logger = logging.getLogger(__name__)


def window_samples(window_seconds: float, sample_rate: float) -> int:
    return max(1, int(math.floor(window_seconds * sample_rate)))


def build_envelope(
    samples: Optional[ArrayLike],
    sample_rate: Optional[float],
    window_seconds: float,
) -> np.ndarray:
    """Rectify ``samples`` and smooth them with a short box filter.

    The window is kept short (a few milliseconds) so individual shots in
    high-rate automatic fire stay separate peaks. A window shorter than two
    samples leaves the rectified signal unchanged.
    """
    if samples is None or not sample_rate or sample_rate <= 0:
        raise NotReady("Audio samples and sample rate must be set before building the envelope")

    n_window = window_samples(window_seconds, sample_rate)
    rectified = absolute(samples)
    if n_window > 1:
        envelope = convolve(rectified, box_kernel(n_window), "same")
    else:
        envelope = rectified
    logger.debug("Envelope calculated (%d samples, window=%d)", envelope.size, n_window)
    return envelope


def adaptive_threshold(envelope: ArrayLike, k_sigma: float) -> float:
    """Return ``mean + k_sigma * std`` of the envelope."""
    return mean(envelope) + k_sigma * std(envelope)


__all__ = ["build_envelope", "adaptive_threshold", "window_samples"]
