"""Shared type aliases and enumerations used across localcov."""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Common type aliases
# ---------------------------------------------------------------------------

LineCount: TypeAlias = int | None
"""Hit count of one source line; ``None`` when the line is not trackable."""

LineCounts: TypeAlias = Sequence[LineCount]
"""One :data:`LineCount` per physical source line, first line first."""

CoveragePercent: TypeAlias = float | None
"""Percentage in ``[0, 100]``; ``None`` when nothing was tracked."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Severity(StrEnum):
    """Highlighting bucket for a coverage percentage."""

    CRITICAL = "critical"
    WARNING = "warning"
    NEUTRAL = "neutral"
    GOOD = "good"


class GateOutcome(StrEnum):
    """Result of comparing package coverage against the target."""

    MET = "met"
    NOT_MET = "not_met"


__all__ = [
    "CoveragePercent",
    "GateOutcome",
    "LineCount",
    "LineCounts",
    "Severity",
]
