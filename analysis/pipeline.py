"""Staged rate-of-fire analysis.

A run moves through fixed stages::

    IDLE -> ENVELOPE_READY -> PEAKS_DETECTED -> BURSTS_GROUPED -> RATES_COMPUTED

Each stage function takes a frozen :class:`PipelineState` and returns a new
one; results of later stages are cleared whenever an earlier stage is re-run.
Calling a stage before its prerequisite raises :class:`PipelineOutOfOrder`
(or :class:`NotReady` when no audio has been supplied).
"""
from __future__ import annotations

import dataclasses
import enum
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from core.detection import find_peaks
from core.envelope import adaptive_threshold, build_envelope
from core.errors import NotReady, PipelineOutOfOrder
from core import numeric
from shared.models import Burst, PeakSet, SampleSequence

from . import bursts as burst_ops
from .models import AnalysisResult, BurstStatistics, Summary
from .settings import AnalysisSettings

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


class Stage(enum.IntEnum):
    IDLE = 0
    ENVELOPE_READY = 1
    PEAKS_DETECTED = 2
    BURSTS_GROUPED = 3
    RATES_COMPUTED = 4


@dataclass(frozen=True)
class PipelineState:
    """Snapshot of one analysis run. Fields after the current stage are None."""

    stage: Stage
    settings: AnalysisSettings
    audio: Optional[SampleSequence] = None
    envelope: Optional[np.ndarray] = dataclasses.field(default=None, repr=False)
    threshold: Optional[float] = None
    peaks: Optional[PeakSet] = None
    shot_times: Optional[np.ndarray] = dataclasses.field(default=None, repr=False)
    bursts: Optional[Tuple[Burst, ...]] = None
    burst_stats: Optional[Tuple[BurstStatistics, ...]] = None
    summary: Optional[Summary] = None

    @classmethod
    def start(
        cls,
        settings: Optional[AnalysisSettings] = None,
        audio: Optional[SampleSequence] = None,
    ) -> "PipelineState":
        return cls(stage=Stage.IDLE, settings=settings or AnalysisSettings(), audio=audio)

    def with_audio(self, audio: SampleSequence) -> "PipelineState":
        return PipelineState.start(self.settings, audio)

    def require(self, stage: Stage, action: str) -> None:
        if self.stage < stage:
            raise PipelineOutOfOrder(
                f"Cannot {action} at stage {self.stage.name}; {stage.name} must be reached first"
            )

    def _advance(self, stage: Stage, **results) -> "PipelineState":
        cleared = {}
        if stage < Stage.RATES_COMPUTED:
            cleared.update(burst_stats=None, summary=None)
        if stage < Stage.BURSTS_GROUPED:
            cleared["bursts"] = None
        if stage < Stage.PEAKS_DETECTED:
            cleared.update(threshold=None, peaks=None, shot_times=None)
        cleared.update(results)
        return dataclasses.replace(self, stage=stage, **cleared)


def _report(on_progress: Optional[ProgressCallback], message: str) -> None:
    if on_progress is not None:
        on_progress(message)


def calculate_envelope(state: PipelineState, on_progress: Optional[ProgressCallback] = None) -> PipelineState:
    _report(on_progress, "Calculating audio envelope...")
    if state.audio is None:
        raise NotReady("No audio loaded; supply a SampleSequence before calculating the envelope")
    envelope = build_envelope(state.audio.samples, state.audio.sample_rate, state.settings.window_size)
    envelope.setflags(write=False)
    logger.info("Envelope calculated")
    _report(on_progress, "Envelope calculated")
    return state._advance(Stage.ENVELOPE_READY, envelope=envelope)


def detect_peaks(state: PipelineState, on_progress: Optional[ProgressCallback] = None) -> PipelineState:
    _report(on_progress, "Detecting gunshot peaks...")
    state.require(Stage.ENVELOPE_READY, "detect peaks")
    settings = state.settings
    sample_rate = state.audio.sample_rate
    envelope = state.envelope

    threshold = adaptive_threshold(envelope, settings.peak_threshold_std)
    logger.info("Mean level: %.4f, Std: %.4f", numeric.mean(envelope), numeric.std(envelope))
    logger.info("Threshold: %.4f", threshold)

    min_distance = int(math.floor(settings.min_shot_spacing * sample_rate))
    peaks = find_peaks(
        envelope,
        height=threshold,
        distance=min_distance,
        prominence=settings.min_peak_prominence,
    )
    shot_times = peaks.times(sample_rate)
    shot_times.setflags(write=False)

    logger.info("Detected %d potential shots", len(peaks))
    _report(on_progress, f"Detected {len(peaks)} shots")
    return state._advance(Stage.PEAKS_DETECTED, threshold=threshold, peaks=peaks, shot_times=shot_times)


def group_into_bursts(state: PipelineState, on_progress: Optional[ProgressCallback] = None) -> PipelineState:
    _report(on_progress, "Grouping shots into bursts...")
    state.require(Stage.PEAKS_DETECTED, "group shots into bursts")
    if state.shot_times.size == 0:
        logger.info("No shots detected")
        _report(on_progress, "No shots detected")
        return state._advance(Stage.BURSTS_GROUPED, bursts=())

    grouped = burst_ops.group_bursts(
        state.shot_times,
        state.settings.burst_gap_threshold,
        state.settings.min_burst_count,
    )
    logger.info("Found %d bursts", len(grouped))
    _report(on_progress, f"Found {len(grouped)} bursts")
    return state._advance(Stage.BURSTS_GROUPED, bursts=grouped)


def calculate_rates(state: PipelineState, on_progress: Optional[ProgressCallback] = None) -> PipelineState:
    state.require(Stage.BURSTS_GROUPED, "calculate rates")
    stats = burst_ops.calculate_rates(state.bursts)
    summary = burst_ops.summarize(stats)
    _report(on_progress, f"Analysis complete: {summary.total_shots} shots in {summary.total_bursts} bursts")
    return state._advance(Stage.RATES_COMPUTED, burst_stats=stats, summary=summary)


def to_result(state: PipelineState, input_file: Optional[str] = None) -> AnalysisResult:
    state.require(Stage.RATES_COMPUTED, "build a result")
    return AnalysisResult(
        audio_duration=state.audio.duration,
        sample_rate=state.audio.sample_rate,
        parameters=state.settings,
        summary=state.summary,
        bursts=state.burst_stats,
        peaks=tuple(int(i) for i in state.peaks.indices),
        input_file=input_file,
    )


class RateOfFireDetector:
    """Runs every stage over a sample sequence.

    The detector only holds its immutable settings, so one instance can analyse
    independent recordings from several threads at once.
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None) -> None:
        self.settings = settings or AnalysisSettings()

    def run(self, audio: SampleSequence, on_progress: Optional[ProgressCallback] = None) -> PipelineState:
        logger.info("Audio loaded: %.2f seconds, %dHz", audio.duration, audio.sample_rate)
        _report(on_progress, f"Audio loaded: {audio.duration:.2f}s at {audio.sample_rate}Hz")
        state = PipelineState.start(self.settings, audio)
        state = calculate_envelope(state, on_progress)
        state = detect_peaks(state, on_progress)
        state = group_into_bursts(state, on_progress)
        return calculate_rates(state, on_progress)

    def analyze(
        self,
        audio: SampleSequence,
        *,
        input_file: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AnalysisResult:
        return to_result(self.run(audio, on_progress), input_file=input_file)


__all__ = [
    "Stage",
    "PipelineState",
    "ProgressCallback",
    "calculate_envelope",
    "detect_peaks",
    "group_into_bursts",
    "calculate_rates",
    "to_result",
    "RateOfFireDetector",
]
