# analysis/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .settings import AnalysisSettings


@dataclass(frozen=True)
class BurstStatistics:
    """
    Timing summary of one retained burst. Interval fields describe the gaps
    between consecutive shots; on a single-shot burst they hold the empty-input
    sentinels (0 for mean/std, +inf for min, -inf for max).
    """
    burst_number: int             # 1-based, in time order
    start_time: float             # seconds
    end_time: float               # seconds
    duration: float               # end_time - start_time
    num_shots: int
    rate_rpm: float               # rounds per minute, 0 for a zero-length burst
    mean_interval: float
    std_interval: float
    min_interval: float
    max_interval: float
    shot_times: Tuple[float, ...] = field(repr=False)


@dataclass(frozen=True)
class Summary:
    """Aggregate statistics across every retained burst."""

    total_shots: int = 0
    total_bursts: int = 0
    overall_rate_rpm: float = 0.0
    mean_burst_rate_rpm: float = 0.0
    median_burst_rate_rpm: float = 0.0
    min_burst_rate_rpm: float = 0.0
    max_burst_rate_rpm: float = 0.0
    std_burst_rate_rpm: float = 0.0


@dataclass(frozen=True)
class AnalysisResult:
    """Final, serializable output of one pipeline run."""

    audio_duration: float
    sample_rate: int
    parameters: AnalysisSettings
    summary: Summary
    bursts: Tuple[BurstStatistics, ...]
    peaks: Tuple[int, ...]
    input_file: Optional[str] = None


__all__ = ["BurstStatistics", "Summary", "AnalysisResult"]
