"""JSON export of analysis results.

The document layout uses camelCase keys (``audioDuration``, ``rateRpm``...) so
existing consumers of exported results can read it unchanged. Non-finite
floats, such as the +/-inf interval sentinels of a one-shot burst, are written
as ``null`` to keep the output valid JSON.
"""
from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Union

from .models import AnalysisResult, BurstStatistics, Summary

logger = logging.getLogger(__name__)


def _finite(value: float) -> float | None:
    value = float(value)
    return value if math.isfinite(value) else None


def summary_to_dict(summary: Summary) -> Dict[str, Any]:
    return {
        "totalShots": summary.total_shots,
        "totalBursts": summary.total_bursts,
        "overallRateRpm": _finite(summary.overall_rate_rpm),
        "meanBurstRateRpm": _finite(summary.mean_burst_rate_rpm),
        "medianBurstRateRpm": _finite(summary.median_burst_rate_rpm),
        "minBurstRateRpm": _finite(summary.min_burst_rate_rpm),
        "maxBurstRateRpm": _finite(summary.max_burst_rate_rpm),
        "stdBurstRateRpm": _finite(summary.std_burst_rate_rpm),
    }


def burst_to_dict(stats: BurstStatistics) -> Dict[str, Any]:
    return {
        "burstNumber": stats.burst_number,
        "startTime": stats.start_time,
        "endTime": stats.end_time,
        "duration": stats.duration,
        "numShots": stats.num_shots,
        "rateRpm": _finite(stats.rate_rpm),
        "meanInterval": _finite(stats.mean_interval),
        "stdInterval": _finite(stats.std_interval),
        "minInterval": _finite(stats.min_interval),
        "maxInterval": _finite(stats.max_interval),
        "shotTimes": list(stats.shot_times),
    }


def result_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    return {
        "inputFile": result.input_file,
        "audioDuration": result.audio_duration,
        "sampleRate": result.sample_rate,
        "parameters": result.parameters.to_dict(),
        "summary": summary_to_dict(result.summary),
        "bursts": [burst_to_dict(b) for b in result.bursts],
        "peaks": list(result.peaks),
    }


def dumps(result: AnalysisResult, *, indent: int = 2) -> str:
    return json.dumps(result_to_dict(result), indent=indent, allow_nan=False)


def write_json(result: AnalysisResult, path: Union[str, Path]) -> Path:
    target = Path(path)
    target.write_text(dumps(result) + "\n", encoding="utf-8")
    logger.info("Wrote analysis results to %s", target)
    return target


__all__ = ["result_to_dict", "summary_to_dict", "burst_to_dict", "dumps", "write_json"]
