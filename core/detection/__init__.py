from .base import DetectorParameter
from .peaks import find_peaks, local_maxima, peak_prominences, select_by_distance

__all__ = [
    "DetectorParameter",
    "find_peaks",
    "local_maxima",
    "peak_prominences",
    "select_by_distance",
]
