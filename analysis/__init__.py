"""Burst grouping, rate statistics and the staged analysis pipeline."""

from .models import AnalysisResult, BurstStatistics, Summary
from .pipeline import PipelineState, RateOfFireDetector, Stage
from .settings import SETTINGS_PARAMETERS, AnalysisSettings

__all__ = [
    "AnalysisSettings",
    "SETTINGS_PARAMETERS",
    "AnalysisResult",
    "BurstStatistics",
    "Summary",
    "PipelineState",
    "RateOfFireDetector",
    "Stage",
]
