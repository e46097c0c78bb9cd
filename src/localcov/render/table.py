"""Terminal table for a :class:`~localcov.core.metrics.PackageCoverage`."""

from __future__ import annotations

import sys
from io import StringIO
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from localcov.core.config import CRITICAL_MAX, GOOD_MIN, WARNING_MAX
from localcov.core.gaps import format_gap
from localcov.core.types import CoveragePercent, Severity

if TYPE_CHECKING:
    from localcov.core.metrics import FileCoverageSummary, PackageCoverage

Row = tuple[str, str, str, str]

HEADERS: Row = ("File name", "Lines hit", "Coverage", "Missing")
TOTAL_LABEL = "TOTAL"
UNDEFINED_COVERAGE = "-"

_FILE_COLUMN_MAX = 30
_MISSING_COLUMN_MAX = 35

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.WARNING: "yellow",
    Severity.NEUTRAL: "",
    Severity.GOOD: "green",
}


# --------------------------- Formatting --------------------------------------
def severity(coverage: CoveragePercent) -> Severity:
    """Return the highlighting bucket for *coverage*; undefined coverage is neutral."""
    if coverage is None:
        return Severity.NEUTRAL
    if coverage <= CRITICAL_MAX:
        return Severity.CRITICAL
    if coverage <= WARNING_MAX:
        return Severity.WARNING
    if coverage >= GOOD_MIN:
        return Severity.GOOD
    return Severity.NEUTRAL


def format_hits(hit: int, tracked: int) -> str:
    return f"{hit:3d} / {tracked:3d}"


def format_coverage(coverage: CoveragePercent) -> str:
    if coverage is None:
        return UNDEFINED_COVERAGE
    return f"{coverage:3.0f}%"


def format_file_row(summary: FileCoverageSummary) -> Row:
    """Table row for a single file."""
    return (
        summary.filename,
        format_hits(summary.lines_hit, summary.lines_tracked),
        format_coverage(summary.coverage),
        ", ".join(format_gap(gap) for gap in summary.coverage_gaps),
    )


def format_total_row(package: PackageCoverage) -> Row:
    """Summary row for the whole package; it has no gap list."""
    return (
        TOTAL_LABEL,
        format_hits(package.lines_hit, package.lines_tracked),
        format_coverage(package.coverage),
        "",
    )


# --------------------------- Table -------------------------------------------
def _cells(row: Row, coverage: CoveragePercent) -> list[Text]:
    name, hits, pct, missing = row
    return [
        Text(name),
        Text(hits),
        Text(pct, style=SEVERITY_STYLES[severity(coverage)]),
        Text(missing),
    ]


def build_table(package: PackageCoverage) -> Table:
    """Return a Rich table with one row per file followed by the total row."""
    table = Table(box=box.SQUARE, header_style="bold")
    table.add_column(HEADERS[0], justify="left", overflow="fold", max_width=_FILE_COLUMN_MAX)
    table.add_column(HEADERS[1], justify="right", no_wrap=True)
    table.add_column(HEADERS[2], justify="right", no_wrap=True)
    table.add_column(HEADERS[3], justify="right", overflow="fold", max_width=_MISSING_COLUMN_MAX)

    for summary in package.files:
        table.add_row(*_cells(format_file_row(summary), summary.coverage))

    table.add_section()
    table.add_row(*_cells(format_total_row(package), package.coverage))
    return table


def render_package_coverage(package: PackageCoverage, *, color: bool = True, width: int | None = None) -> str:
    """Render *package* as a table and return the captured text.

    ANSI styling is emitted only when *color* is set.
    """
    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        width=width or sys.maxsize,
        color_system="standard" if color else None,
        no_color=not color,
    )
    console.print(build_table(package))
    return buf.getvalue().rstrip()


def print_package_coverage(package: PackageCoverage, console: Console | None = None) -> None:
    """Print the coverage table of *package* to *console* (stdout by default)."""
    (console or Console()).print(build_table(package))


__all__ = [
    "HEADERS",
    "SEVERITY_STYLES",
    "TOTAL_LABEL",
    "UNDEFINED_COVERAGE",
    "build_table",
    "format_coverage",
    "format_file_row",
    "format_hits",
    "format_total_row",
    "print_package_coverage",
    "render_package_coverage",
    "severity",
]
