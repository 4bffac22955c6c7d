"""
Scaling tests for the detection stages on long recordings.

Each prominence scan must stop at the first sample at least as high as its
peak, so detection time grows with the recording length rather than with
length times candidate count.

Marked with @pytest.mark.slow as they build recordings of a minute or more.
"""
from __future__ import annotations

import time

import numpy as np
import pytest

from core.detection import find_peaks
from core.envelope import adaptive_threshold, build_envelope
from test.fixtures.signal_generators import add_gaussian_noise, burst_times, make_shot_train

SR = 44100


def _long_envelope(duration_sec: float, seed: int = 5) -> np.ndarray:
    times = []
    start = 0.5
    while start + 1.0 < duration_sec:
        times.extend(burst_times(start, 8, 700.0))
        start += 1.5
    signal, _ = make_shot_train(times, duration_sec, SR)
    signal = add_gaussian_noise(signal, 0.01, seed=seed)
    return build_envelope(signal, SR, 0.002)


def _detect(envelope: np.ndarray):
    return find_peaks(
        envelope,
        height=adaptive_threshold(envelope, 1.2),
        distance=int(0.05 * SR),
        prominence=0.1,
    )


def _best_time(envelope: np.ndarray, repeats: int = 3) -> float:
    best = float("inf")
    for _ in range(repeats):
        t0 = time.perf_counter()
        _detect(envelope)
        best = min(best, time.perf_counter() - t0)
    return best


@pytest.mark.slow
class TestPeakDetectionScaling:
    """Detection cost on long recordings."""

    def test_one_minute_recording_is_fast(self):
        """A minute at 44.1 kHz must not take seconds to scan."""
        envelope = _long_envelope(60.0)
        t0 = time.perf_counter()
        peaks = _detect(envelope)
        elapsed = time.perf_counter() - t0

        assert len(peaks) > 0
        assert elapsed < 3.0, f"find_peaks took {elapsed:.2f}s on {envelope.size} samples"

    def test_time_grows_roughly_linearly(self):
        """Quadrupling the recording should not cost anywhere near 16x."""
        short = _long_envelope(10.0)
        long_env = _long_envelope(40.0)
        # Floor the short time so timer noise on a fast run does not inflate the ratio
        t_short = max(_best_time(short), 0.02)
        t_long = _best_time(long_env)

        assert t_long / t_short < 10.0, f"10s: {t_short:.3f}s, 40s: {t_long:.3f}s"
