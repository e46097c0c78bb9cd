"""Detection of uncovered line ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from more_itertools import consecutive_groups

from localcov.errors import InvalidCoverageDataError

if TYPE_CHECKING:
    from localcov.core.types import LineCounts


@dataclass(frozen=True, slots=True, order=True)
class CoverageGap:
    """Inclusive range of 1-based line numbers that were tracked but never executed."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < self.start:
            msg = f"invalid coverage gap {self.start}..{self.end}"
            raise InvalidCoverageDataError(msg)

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, line: object) -> bool:
        return isinstance(line, int) and self.start <= line <= self.end


def validate_counts(counts: LineCounts) -> None:
    """Raise :class:`InvalidCoverageDataError` unless every entry is ``None`` or an int ``>= 0``."""
    for lineno, count in enumerate(counts, start=1):
        if count is None:
            continue
        if not isinstance(count, int) or isinstance(count, bool):
            msg = f"line {lineno}: hit count must be an integer or None, got {count!r}"
            raise InvalidCoverageDataError(msg)
        if count < 0:
            msg = f"line {lineno}: negative hit count {count}"
            raise InvalidCoverageDataError(msg)


def find_gaps(counts: LineCounts) -> list[CoverageGap]:
    """Evaluate the ranges of lines without coverage.

    *counts* holds one entry per source line. A gap is a maximal run of lines
    whose count is exactly zero; untrackable (``None``) lines end a gap and are
    never part of one.
    """
    validate_counts(counts)
    zero_lines = (lineno for lineno, count in enumerate(counts, start=1) if count == 0)
    gaps: list[CoverageGap] = []
    for group in consecutive_groups(zero_lines):
        lines = list(group)
        gaps.append(CoverageGap(lines[0], lines[-1]))
    return gaps


def format_gap(gap: CoverageGap) -> str:
    """Return ``"7"`` for a single-line gap and ``"3 - 5"`` otherwise."""
    if len(gap) == 1:
        return str(gap.start)
    return f"{gap.start} - {gap.end}"


__all__ = ["CoverageGap", "find_gaps", "format_gap", "validate_counts"]
