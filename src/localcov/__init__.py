from localcov._meta import __version__, logger
from localcov.core import (
    CoverageGap,
    FileCoverage,
    FileCoverageSummary,
    GateOutcome,
    PackageCoverage,
    ThresholdResult,
    eval_coverage_metrics,
    evaluate,
    find_gaps,
)
from localcov.errors import LocalCoverageError
from localcov.pipeline import (
    clean_coverage,
    coverage_from_file,
    generate_coverage,
    generate_xml,
    html_coverage,
    report_coverage,
)
from localcov.render import print_package_coverage, render_package_coverage

__all__ = [
    "CoverageGap",
    "FileCoverage",
    "FileCoverageSummary",
    "GateOutcome",
    "LocalCoverageError",
    "PackageCoverage",
    "ThresholdResult",
    "__version__",
    "clean_coverage",
    "coverage_from_file",
    "eval_coverage_metrics",
    "evaluate",
    "find_gaps",
    "generate_coverage",
    "generate_xml",
    "html_coverage",
    "logger",
    "print_package_coverage",
    "render_package_coverage",
    "report_coverage",
]
