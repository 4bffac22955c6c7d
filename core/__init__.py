"""Signal-processing core: numeric primitives, envelope and peak detection."""

from .envelope import adaptive_threshold, build_envelope
from .errors import NotReady, PipelineOutOfOrder, RateOfFireError, UnsupportedMode
from .detection import DetectorParameter, find_peaks
from shared.models import Burst, PeakSet, SampleSequence

__all__ = [
    "SampleSequence",
    "PeakSet",
    "Burst",
    "DetectorParameter",
    "build_envelope",
    "adaptive_threshold",
    "find_peaks",
    "RateOfFireError",
    "NotReady",
    "PipelineOutOfOrder",
    "UnsupportedMode",
]
