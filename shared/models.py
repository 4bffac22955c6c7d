from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np


def _freeze_array(array, *, dtype, ndim: int | None = None) -> np.ndarray:
    """Return a read-only, C-contiguous copy of `array`, validating dimensions."""
    arr = np.array(array, dtype=dtype, copy=True, order="C")
    if ndim is not None and arr.ndim != ndim:
        raise ValueError(f"array must be {ndim}D, got {arr.ndim}D")
    arr.setflags(write=False)
    return arr


# ----------------------------
# Input signal
# ----------------------------

@dataclass(frozen=True)
class SampleSequence:
    """Mono amplitude samples normalized to [-1, 1], tagged with their sample rate."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        if int(self.sample_rate) != self.sample_rate or self.sample_rate <= 0:
            raise ValueError("sample_rate must be a positive integer")
        object.__setattr__(self, "sample_rate", int(self.sample_rate))
        object.__setattr__(self, "samples", _freeze_array(self.samples, dtype=np.float64, ndim=1))

    @property
    def n_samples(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration(self) -> float:
        return self.n_samples / float(self.sample_rate)


# ----------------------------
# Detection outputs
# ----------------------------

@dataclass(frozen=True)
class PeakSet:
    """Peak indices into an envelope, strictly increasing, with the envelope value at each."""

    indices: np.ndarray
    heights: np.ndarray

    def __post_init__(self) -> None:
        indices = _freeze_array(self.indices, dtype=np.int64, ndim=1)
        heights = _freeze_array(self.heights, dtype=np.float64, ndim=1)
        if indices.shape != heights.shape:
            raise ValueError("indices and heights must have the same length")
        if indices.size > 1 and np.any(np.diff(indices) <= 0):
            raise ValueError("peak indices must be strictly increasing")
        object.__setattr__(self, "indices", indices)
        object.__setattr__(self, "heights", heights)

    @classmethod
    def empty(cls) -> "PeakSet":
        return cls(indices=np.zeros(0, dtype=np.int64), heights=np.zeros(0, dtype=np.float64))

    def __len__(self) -> int:
        return int(self.indices.shape[0])

    def times(self, sample_rate: float) -> np.ndarray:
        """Convert peak indices to shot times in seconds."""
        if sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        return self.indices.astype(np.float64) / float(sample_rate)


@dataclass(frozen=True)
class Burst:
    """Ordered shot times (seconds) that belong to one group of closely spaced shots."""

    shot_times: Tuple[float, ...]

    def __post_init__(self) -> None:
        times = tuple(float(t) for t in self.shot_times)
        if not times:
            raise ValueError("a burst must contain at least one shot")
        if any(b < a for a, b in zip(times, times[1:])):
            raise ValueError("burst shot times must be non-decreasing")
        object.__setattr__(self, "shot_times", times)

    @classmethod
    def from_times(cls, times: Sequence[float]) -> "Burst":
        return cls(shot_times=tuple(times))

    def __len__(self) -> int:
        return len(self.shot_times)

    def __iter__(self) -> Iterator[float]:
        return iter(self.shot_times)

    @property
    def start_time(self) -> float:
        return self.shot_times[0]

    @property
    def end_time(self) -> float:
        return self.shot_times[-1]


__all__ = [
    "SampleSequence",
    "PeakSet",
    "Burst",
]
