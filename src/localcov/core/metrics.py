"""Per-file and package-level coverage metrics (pure core, no UI)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from localcov.core.gaps import CoverageGap, find_gaps
from localcov.errors import InvalidCoverageDataError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from localcov.core.types import CoveragePercent, LineCount


_FULL_PERCENT = 100.0


# --------------------------- Models ------------------------------------------
@dataclass(frozen=True, slots=True)
class FileCoverage:
    """Raw per-line hit counts of a single file."""

    filename: str
    counts: tuple[LineCount, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # accept any sequence but store an immutable copy
        object.__setattr__(self, "counts", tuple(self.counts))


@dataclass(frozen=True, slots=True)
class FileCoverageSummary:
    """Summarized coverage data about a single file.

    Parameters
    ----------
    filename:
        File path relative to the package root.
    lines_hit:
        Number of lines covered by tests.
    lines_tracked:
        Number of lines with content to be tested.
    coverage:
        Percentage of lines covered, ``None`` when nothing is tracked.
    coverage_gaps:
        Line ranges without coverage, in ascending order.
    """

    filename: str
    lines_hit: int
    lines_tracked: int
    coverage: CoveragePercent
    coverage_gaps: tuple[CoverageGap, ...] = ()

    @property
    def lines_missed(self) -> int:
        return self.lines_tracked - self.lines_hit


@dataclass(frozen=True, slots=True)
class PackageCoverage:
    """Summarized coverage data about a package.

    ``lines_hit`` and ``lines_tracked`` are sums over ``files``; ``coverage``
    is computed from those sums.
    """

    package_dir: Path
    files: tuple[FileCoverageSummary, ...]
    lines_hit: int
    lines_tracked: int
    coverage: CoveragePercent

    @property
    def lines_missed(self) -> int:
        return self.lines_tracked - self.lines_hit

    def get(self, filename: str) -> FileCoverageSummary | None:
        """Return the summary for *filename*, if present."""
        for summary in self.files:
            if summary.filename == filename:
                return summary
        return None


# --------------------------- Computation -------------------------------------
def coverage_percent(hit: int, tracked: int) -> CoveragePercent:
    """Return ``100 * hit / tracked``, or ``None`` when *tracked* is zero."""
    if tracked == 0:
        return None
    return _FULL_PERCENT * hit / tracked


def summarize_file(file: FileCoverage) -> FileCoverageSummary:
    """Compute the coverage summary of a single file."""
    gaps = find_gaps(file.counts)
    tracked = sum(1 for count in file.counts if count is not None)
    hit = tracked - sum(len(gap) for gap in gaps)
    return FileCoverageSummary(
        filename=file.filename,
        lines_hit=hit,
        lines_tracked=tracked,
        coverage=coverage_percent(hit, tracked),
        coverage_gaps=tuple(gaps),
    )


def aggregate(package_dir: Path, summaries: Iterable[FileCoverageSummary]) -> PackageCoverage:
    """Roll already computed file summaries up into a :class:`PackageCoverage`."""
    files = tuple(summaries)
    seen: set[str] = set()
    for summary in files:
        if summary.filename in seen:
            msg = f"duplicate file in coverage data: {summary.filename}"
            raise InvalidCoverageDataError(msg)
        seen.add(summary.filename)

    total_hit = sum(s.lines_hit for s in files)
    total_tracked = sum(s.lines_tracked for s in files)
    return PackageCoverage(
        package_dir=Path(package_dir).resolve(),
        files=files,
        lines_hit=total_hit,
        lines_tracked=total_tracked,
        coverage=coverage_percent(total_hit, total_tracked),
    )


def eval_coverage_metrics(files: Iterable[FileCoverage], package_dir: Path) -> PackageCoverage:
    """Evaluate the coverage metrics for the files of the package at *package_dir*."""
    return aggregate(package_dir, (summarize_file(f) for f in files))


__all__ = [
    "FileCoverage",
    "FileCoverageSummary",
    "PackageCoverage",
    "aggregate",
    "coverage_percent",
    "eval_coverage_metrics",
    "summarize_file",
]
