from __future__ import annotations

import dataclasses
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from core.detection.base import DetectorParameter


SETTINGS_PARAMETERS: Dict[str, DetectorParameter] = {
    "peak_threshold_std": DetectorParameter(
        name="peak_threshold_std",
        option="peakThresholdStd",
        default=1.2,
        help="Peak height threshold in standard deviations above the mean envelope",
    ),
    "min_shot_spacing": DetectorParameter(
        name="min_shot_spacing",
        option="minShotSpacing",
        default=0.05,
        min=0.0,
        help="Minimum time between shots (s)",
    ),
    "burst_gap_threshold": DetectorParameter(
        name="burst_gap_threshold",
        option="burstGapThreshold",
        default=0.2,
        min=0.0,
        help="Largest gap between consecutive shots of one burst (s)",
    ),
    "window_size": DetectorParameter(
        name="window_size",
        option="windowSize",
        default=0.002,
        min=0.0,
        help="Envelope smoothing window (s)",
    ),
    "min_peak_prominence": DetectorParameter(
        name="min_peak_prominence",
        option="minPeakProminence",
        default=0.1,
        min=0.0,
        max=1.0,
        help="Minimum peak prominence as a fraction of the envelope maximum",
    ),
    "min_burst_count": DetectorParameter(
        name="min_burst_count",
        option="minBurstCount",
        default=5,
        min=1,
        integer=True,
        help="Minimum number of shots for a group to count as a burst",
    ),
}

_OPTION_TO_FIELD = {param.option: name for name, param in SETTINGS_PARAMETERS.items()}


@dataclass(frozen=True)
class AnalysisSettings:
    """Detection and burst-grouping parameters for one analysis run."""

    peak_threshold_std: float = 1.2
    min_shot_spacing: float = 0.05    # seconds
    burst_gap_threshold: float = 0.2  # seconds
    window_size: float = 0.002        # seconds; keep short so transients survive smoothing
    min_peak_prominence: float = 0.1  # fraction of envelope max
    min_burst_count: int = 5

    def __post_init__(self) -> None:
        self.validate()
        object.__setattr__(self, "min_burst_count", int(self.min_burst_count))

    def validate(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{SETTINGS_PARAMETERS[field.name].option} must be a number, got {value!r}")
            SETTINGS_PARAMETERS[field.name].check(value)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AnalysisSettings":
        """Build settings from camelCase option names or field names."""
        kwargs: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = _OPTION_TO_FIELD.get(key, key)
            if name not in SETTINGS_PARAMETERS:
                raise ValueError(f"Unknown analysis option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def replace(self, **kwargs: Any) -> "AnalysisSettings":
        return dataclasses.replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {SETTINGS_PARAMETERS[name].option: value for name, value in dataclasses.asdict(self).items()}


__all__ = ["AnalysisSettings", "SETTINGS_PARAMETERS"]
