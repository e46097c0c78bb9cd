from localcov.core.config import (
    COVDIR,
    DEFAULT_TARGET_COVERAGE,
    LCOVINFO,
    LOG_FORMAT,
    LocalCovConfig,
    load_config,
)
from localcov.core.gaps import CoverageGap, find_gaps, format_gap
from localcov.core.metrics import (
    FileCoverage,
    FileCoverageSummary,
    PackageCoverage,
    aggregate,
    coverage_percent,
    eval_coverage_metrics,
    summarize_file,
)
from localcov.core.thresholds import ThresholdResult, check_target, evaluate
from localcov.core.types import CoveragePercent, GateOutcome, LineCount, LineCounts, Severity

__all__ = [
    "COVDIR",
    "DEFAULT_TARGET_COVERAGE",
    "LCOVINFO",
    "LOG_FORMAT",
    "CoverageGap",
    "CoveragePercent",
    "FileCoverage",
    "FileCoverageSummary",
    "GateOutcome",
    "LineCount",
    "LineCounts",
    "LocalCovConfig",
    "PackageCoverage",
    "Severity",
    "ThresholdResult",
    "aggregate",
    "check_target",
    "coverage_percent",
    "eval_coverage_metrics",
    "evaluate",
    "find_gaps",
    "format_gap",
    "load_config",
    "summarize_file",
]
