"""Coverage target evaluation."""

from __future__ import annotations

from dataclasses import dataclass

from localcov.core.config import DEFAULT_TARGET_COVERAGE
from localcov.core.types import CoveragePercent, GateOutcome

EXIT_MET = 0
EXIT_NOT_MET = 1


def evaluate(coverage: CoveragePercent, target: float = DEFAULT_TARGET_COVERAGE) -> GateOutcome:
    """Return whether *coverage* reaches *target*.

    Undefined coverage never meets a target, not even ``0``. Any target is
    accepted; one above 100 simply cannot be met.
    """
    if coverage is None or coverage < target:
        return GateOutcome.NOT_MET
    return GateOutcome.MET


@dataclass(frozen=True, slots=True)
class ThresholdResult:
    """Outcome of checking a package against its target coverage."""

    coverage: CoveragePercent
    target: float
    outcome: GateOutcome

    @property
    def met(self) -> bool:
        return self.outcome is GateOutcome.MET

    @property
    def exit_code(self) -> int:
        return EXIT_MET if self.met else EXIT_NOT_MET


def check_target(coverage: CoveragePercent, target: float = DEFAULT_TARGET_COVERAGE) -> ThresholdResult:
    """Evaluate *coverage* against *target* and keep both alongside the outcome."""
    outcome = evaluate(coverage, target)
    return ThresholdResult(coverage=coverage, target=float(target), outcome=outcome)


__all__ = ["EXIT_MET", "EXIT_NOT_MET", "ThresholdResult", "check_target", "evaluate"]
