"""
Synthetic signal generation utilities for testing.

These generators produce deterministic, reproducible gunfire-like recordings
with known shot times so detection output can be compared against ground truth.

All generators follow a consistent API:
- duration_sec: Signal duration in seconds
- sample_rate: Sample rate in Hz
- Returns: numpy array of float64 samples in [-1, 1]
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np


def make_shot(
    amplitude: float,
    sample_rate: float,
    *,
    carrier_hz: float = 1000.0,
    decay_ms: float = 4.0,
    length_ms: float = 30.0,
) -> np.ndarray:
    """Generate one impulsive shot: an instant onset followed by exponential decay.

    Args:
        amplitude: Peak amplitude at the onset.
        sample_rate: Sample rate in Hz.
        carrier_hz: Frequency of the decaying oscillation.
        decay_ms: Exponential time constant of the decay.
        length_ms: Template length; the tail beyond this is truncated.

    Returns:
        1D float64 array containing the shot template.
    """
    n_samples = max(4, int(length_ms * sample_rate / 1000.0))
    t = np.arange(n_samples, dtype=np.float64) / sample_rate
    decay = np.exp(-t / (decay_ms / 1000.0))
    # Cosine so the first sample carries the full onset amplitude
    return amplitude * decay * np.cos(2.0 * math.pi * carrier_hz * t)


def burst_times(start_sec: float, n_shots: int, rpm: float) -> List[float]:
    """Evenly spaced shot times for a burst fired at ``rpm`` rounds per minute."""
    interval = 60.0 / rpm
    return [start_sec + i * interval for i in range(n_shots)]


def make_shot_train(
    shot_times_sec: Sequence[float],
    duration_sec: float,
    sample_rate: float,
    *,
    amplitude: float = 0.8,
    amplitudes: Optional[Sequence[float]] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Generate a recording with shots starting at known times.

    Returns:
        Tuple of (signal, onset_samples) where:
        - signal: 1D float64 array clipped to [-1, 1]
        - onset_samples: 1D int64 array of the onset sample of each inserted shot
    """
    n_samples = int(duration_sec * sample_rate)
    signal = np.zeros(n_samples, dtype=np.float64)
    onsets = []

    for i, t_sec in enumerate(shot_times_sec):
        amp = amplitudes[i] if amplitudes is not None else amplitude
        template = make_shot(amp, sample_rate)
        start = int(round(t_sec * sample_rate))
        end = min(n_samples, start + template.size)
        if start < 0 or start >= n_samples:
            continue
        signal[start:end] += template[: end - start]
        onsets.append(start)

    return np.clip(signal, -1.0, 1.0), np.array(onsets, dtype=np.int64)


def add_gaussian_noise(
    signal: np.ndarray,
    noise_std: float,
    *,
    seed: Optional[int] = None,
) -> np.ndarray:
    """Add Gaussian white noise with standard deviation ``noise_std``.

    Example:
        >>> sig, _ = make_shot_train([0.1], 0.5, 8000)
        >>> noisy = add_gaussian_noise(sig, 0.002, seed=42)
        >>> noisy.shape == sig.shape
        True
    """
    rng = np.random.default_rng(seed)
    signal = np.asarray(signal, dtype=np.float64)
    noise = rng.normal(0.0, noise_std, signal.shape)
    return np.clip(signal + noise, -1.0, 1.0)


def make_pcm16(samples: np.ndarray) -> bytes:
    """Encode float samples in [-1, 1] as little-endian 16-bit PCM bytes."""
    clipped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 32767.0 / 32768.0)
    return (clipped * 32768.0).round().astype("<i2").tobytes()
