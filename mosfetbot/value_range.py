"""A closed interval of floating-point values."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Range:
    lower_bound: float = 0.0
    upper_bound: float = 0.0

    def contains(self, value: "float | Range") -> bool:
        """True if a value, or a whole other range, lies inside this one (inclusive)."""
        if isinstance(value, Range):
            return value.lower_bound >= self.lower_bound and value.upper_bound <= self.upper_bound
        return self.lower_bound <= value <= self.upper_bound

    def width(self) -> float:
        return self.upper_bound - self.lower_bound

    def is_point(self, epsilon: float = 1e-4) -> bool:
        """True if the bounds are closer than ``epsilon``."""
        return abs(self.upper_bound - self.lower_bound) < epsilon

    def __str__(self) -> str:
        return f"[{self.lower_bound:g}, {self.upper_bound:g}]"