"""Coverage percentage and band classification.

Band boundaries are inclusive on their lower bound:

    high:   high <= coverage <= 100
    medium: medium <= coverage < high
    low:    0 <= coverage < medium

Comparisons use the full-precision percentage; rounding to two decimals is
for display only (``format_percent``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from covtree.core.errors import ConfigError


class Band(str, Enum):
    """Coverage band of a node."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CoverageStats(Protocol):
    """Anything with line totals: FileRecord, Tracefile, tree nodes."""

    @property
    def lines_found(self) -> int: ...

    @property
    def lines_hit(self) -> int: ...


def coverage_percent(lines_found: int, lines_hit: int) -> float:
    """Percentage of hit lines. A node without lines counts as fully covered."""
    if lines_found == 0:
        return 100.0
    # hit * 100 is exact; only the division rounds
    return lines_hit * 100 / lines_found


def format_percent(value: float) -> str:
    return f"{value:.2f}"


def validate_percent(field: str, value: float) -> float:
    """Reject percentages outside [0, 100]."""
    if not (0.0 <= value <= 100.0):
        raise ConfigError.invalid_value(field, value, "must be within 0-100")
    return value


@dataclass(frozen=True, slots=True)
class Thresholds:
    """Lower bounds (percent) of the medium and high bands."""

    medium: float = 75.0
    high: float = 90.0

    def __post_init__(self) -> None:
        validate_percent("medium", self.medium)
        validate_percent("high", self.high)
        if self.medium > self.high:
            raise ConfigError.invalid_value(
                "medium", self.medium, f"must not exceed the high threshold ({self.high})"
            )


def percent_of(target: CoverageStats | float) -> float:
    if isinstance(target, (int, float)):
        return float(target)
    return coverage_percent(target.lines_found, target.lines_hit)


def classify(target: CoverageStats | float, thresholds: Thresholds) -> Band:
    """Band of a node (or of a raw percentage) for the given thresholds."""
    percent = percent_of(target)
    if percent >= thresholds.high:
        return Band.HIGH
    if percent >= thresholds.medium:
        return Band.MEDIUM
    return Band.LOW
