"""Burst grouping and rate-of-fire statistics.

Shots are grouped by the gap to their predecessor; groups smaller than the
minimum count are dropped. Rates are reported in rounds per minute (RPM) using
``(shots - 1) / duration``, since n shots span n - 1 intervals.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from core import numeric
from shared.models import Burst

from .models import BurstStatistics, Summary

logger = logging.getLogger(__name__)


def group_bursts(
    shot_times: Sequence[float],
    gap_threshold: float,
    min_count: int,
) -> Tuple[Burst, ...]:
    """Split ordered shot times wherever the gap exceeds ``gap_threshold``.

    A gap exactly equal to the threshold keeps the shot in the current burst.
    Groups with fewer than ``min_count`` shots are discarded along with their
    shots.
    """
    times = [float(t) for t in shot_times]
    if not times:
        return ()

    bursts: List[Burst] = []
    current = [times[0]]
    for prev, t in zip(times, times[1:]):
        if t - prev <= gap_threshold:
            current.append(t)
            continue
        if len(current) >= min_count:
            bursts.append(Burst.from_times(current))
        else:
            logger.debug("Discarding %d-shot group at %.3fs", len(current), current[0])
        current = [t]

    if len(current) >= min_count:
        bursts.append(Burst.from_times(current))
    else:
        logger.debug("Discarding %d-shot group at %.3fs", len(current), current[0])
    return tuple(bursts)


def rate_rpm(num_shots: int, duration: float) -> float:
    if duration > 0:
        return (num_shots - 1) / duration * 60.0
    return 0.0


def burst_statistics(burst: Burst, burst_number: int) -> BurstStatistics:
    times = np.asarray(burst.shot_times, dtype=np.float64)
    duration = burst.end_time - burst.start_time
    intervals = numeric.first_difference(times)
    return BurstStatistics(
        burst_number=burst_number,
        start_time=burst.start_time,
        end_time=burst.end_time,
        duration=duration,
        num_shots=len(burst),
        rate_rpm=rate_rpm(len(burst), duration),
        mean_interval=numeric.mean(intervals),
        std_interval=numeric.std(intervals),
        min_interval=numeric.minimum(intervals),
        max_interval=numeric.maximum(intervals),
        shot_times=burst.shot_times,
    )


def calculate_rates(bursts: Sequence[Burst]) -> Tuple[BurstStatistics, ...]:
    stats = tuple(burst_statistics(burst, number) for number, burst in enumerate(bursts, start=1))
    for s in stats:
        logger.info(
            "Burst %d: %d shots, %.1f RPM (%.2fs - %.2fs)",
            s.burst_number,
            s.num_shots,
            s.rate_rpm,
            s.start_time,
            s.end_time,
        )
    return stats


def summarize(stats: Sequence[BurstStatistics]) -> Summary:
    """Aggregate per-burst statistics.

    ``overall_rate_rpm`` pools every shot from every burst and measures the
    end-to-end cadence, idle gaps between bursts included. It is not the mean
    of the per-burst rates.
    """
    if not stats:
        return Summary()

    rates = [s.rate_rpm for s in stats]
    pooled = [t for s in stats for t in s.shot_times]

    overall = 0.0
    if len(pooled) >= 2:
        overall = rate_rpm(len(pooled), numeric.maximum(pooled) - numeric.minimum(pooled))

    return Summary(
        total_shots=sum(s.num_shots for s in stats),
        total_bursts=len(stats),
        overall_rate_rpm=overall,
        mean_burst_rate_rpm=numeric.mean(rates),
        median_burst_rate_rpm=numeric.median(rates),
        min_burst_rate_rpm=numeric.minimum(rates),
        max_burst_rate_rpm=numeric.maximum(rates),
        std_burst_rate_rpm=numeric.std(rates),
    )


__all__ = ["group_bursts", "rate_rpm", "burst_statistics", "calculate_rates", "summarize"]
