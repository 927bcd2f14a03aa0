"""Minimum coverage gate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from covtree.core.errors import CoverageCheckError
from covtree.coverage.classify import CoverageStats, percent_of, validate_percent

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of comparing observed coverage with a minimum."""

    passed: bool
    observed_percent: float
    minimum_percent: float

    def raise_for_status(self) -> None:
        """Raise CoverageCheckError if the check failed."""
        if not self.passed:
            raise CoverageCheckError.below_minimum(self.observed_percent, self.minimum_percent)

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "observed_percent": self.observed_percent,
            "minimum_percent": self.minimum_percent,
        }


def check(target: CoverageStats | float, minimum: float) -> CheckResult:
    """Check that coverage reaches ``minimum`` percent (inclusive).

    Args:
        target: Tree root (or any node, record or tracefile), or a percentage.
        minimum: Required coverage percentage, within 0-100.

    Raises:
        ConfigError: If ``minimum`` is outside 0-100.
    """
    validate_percent("minimum", minimum)
    observed = percent_of(target)
    result = CheckResult(
        passed=observed >= minimum,
        observed_percent=observed,
        minimum_percent=minimum,
    )
    log.debug("check.completed", **result.to_dict())
    return result
