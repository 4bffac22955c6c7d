"""
Value types shared by the detection core, the analysis layer and exporters.
"""

from .models import Burst, PeakSet, SampleSequence

__all__ = ["Burst", "PeakSet", "SampleSequence"]
