"""Error taxonomy for the detection pipeline.

All of these signal caller misuse (a stage run out of order, an unsupported
option) and are raised synchronously. None of them are retryable. A run that
finds no shots is a successful, empty result and never raises.
"""
from __future__ import annotations


class RateOfFireError(Exception):
    """Base class for every error raised by the detection core."""


class NotReady(RateOfFireError, RuntimeError):
    """A stage was invoked before its input data was supplied."""


class PipelineOutOfOrder(RateOfFireError, RuntimeError):
    """A stage was invoked before the stage it depends on completed."""


class UnsupportedMode(RateOfFireError, ValueError):
    """Convolution was requested with an alignment mode other than ``"same"``."""


__all__ = ["RateOfFireError", "NotReady", "PipelineOutOfOrder", "UnsupportedMode"]
