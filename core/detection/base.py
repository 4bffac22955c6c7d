from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class DetectorParameter:
    """Describes one tunable detection option: its default, bounds and help text."""

    name: str
    option: str
    default: float | int
    min: float | None = None
    max: float | None = None
    help: str = ""
    integer: bool = False

    def check(self, value: float | int) -> None:
        if not math.isfinite(value):
            raise ValueError(f"{self.option} must be finite, got {value!r}")
        if self.integer and not float(value).is_integer():
            raise ValueError(f"{self.option} must be an integer, got {value!r}")
        if self.min is not None and value < self.min:
            raise ValueError(f"{self.option} must be >= {self.min}, got {value!r}")
        if self.max is not None and value > self.max:
            raise ValueError(f"{self.option} must be <= {self.max}, got {value!r}")
