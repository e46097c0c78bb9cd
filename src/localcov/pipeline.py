"""End-to-end coverage workflow: test run, tracefile, reports.

The functions here glue the pure core (:mod:`localcov.core`) to the file
system and to the external programs wrapped by :mod:`localcov.external`.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from localcov import external
from localcov._meta import logger
from localcov.core.config import COVDIR, COVERAGE_DATA_FILE, DEFAULT_TARGET_COVERAGE, DEFAULT_XML_FILENAME, LCOVINFO
from localcov.core.metrics import eval_coverage_metrics
from localcov.core.thresholds import check_target
from localcov.errors import CoverageDataNotFoundError
from localcov.inputs.cobertura import read_cobertura
from localcov.inputs.coveragepy import read_coverage_data
from localcov.inputs.lcov import read_tracefile, write_tracefile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from localcov.core.metrics import FileCoverage, PackageCoverage
    from localcov.core.thresholds import ThresholdResult

_PROJECT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg")


# --------------------------- Locations ---------------------------------------
def find_package_dir(start: Path | None = None) -> Path:
    """Return the nearest directory at or above *start* that holds a project file.

    Falls back to *start* itself (the current directory by default).
    """
    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).is_file() for marker in _PROJECT_MARKERS):
            return candidate
    return origin


def tracefile_path(package_dir: Path) -> Path:
    return package_dir / COVDIR / LCOVINFO


def source_dir(package_dir: Path) -> Path:
    """Directory whose files are measured: ``src/`` when present, else the package root."""
    src = package_dir / "src"
    return src if src.is_dir() else package_dir


def _remove_data_files(data_file: Path) -> None:
    for path in (data_file, *data_file.parent.glob(f"{data_file.name}.*")):
        if path.is_file():
            logger.debug("removing %s", path)
            path.unlink()


# --------------------------- Generation --------------------------------------
def load_coverage(source: Path, package_dir: Path) -> list[FileCoverage]:
    """Read per-file counters from a tracefile (``.info``), Cobertura ``.xml`` or coverage.py data file."""
    suffix = source.suffix.lower()
    if suffix == ".info":
        return read_tracefile(source, base=package_dir)
    if suffix == ".xml":
        return read_cobertura(source, base=package_dir)
    return read_coverage_data(source, package_dir)


def generate_coverage(
    package_dir: Path | None = None,
    *,
    run_test: bool = True,
    test_args: Sequence[str] = (),
    data_file: Path | None = None,
) -> PackageCoverage:
    """Generate a :class:`PackageCoverage` for the package at *package_dir*.

    Without *package_dir* the project containing the current directory is
    used. The tests run under coverage.py unless *run_test* is false, in which
    case an existing data file is read. A tracefile is written to
    ``<package_dir>/coverage/lcov.info`` either way.
    """
    package_dir = package_dir.resolve() if package_dir else find_package_dir()
    data_file = data_file or package_dir / COVERAGE_DATA_FILE

    if run_test:
        external.run_tests(package_dir, data_file=data_file, source=source_dir(package_dir), test_args=test_args)

    try:
        files = read_coverage_data(data_file, package_dir)
        write_tracefile(tracefile_path(package_dir), files)
    finally:
        if run_test:
            _remove_data_files(data_file)
    return eval_coverage_metrics(files, package_dir)


def coverage_from_file(source: Path, package_dir: Path | None = None) -> PackageCoverage:
    """Build a :class:`PackageCoverage` from existing coverage output at *source*.

    The package tracefile is (re)written unless *source* is that tracefile.
    """
    package_dir = package_dir.resolve() if package_dir else find_package_dir()
    files = load_coverage(source, package_dir)
    tracefile = tracefile_path(package_dir)
    if source.resolve() != tracefile.resolve():
        write_tracefile(tracefile, files)
    return eval_coverage_metrics(files, package_dir)


def clean_coverage(package_dir: Path | None = None, *, rm_directory: bool = True) -> None:
    """Clean up after :func:`generate_coverage`.

    With *rm_directory* the whole coverage directory is deleted, otherwise only
    the tracefile.
    """
    package_dir = package_dir.resolve() if package_dir else find_package_dir()
    covdir = package_dir / COVDIR
    if rm_directory:
        shutil.rmtree(covdir, ignore_errors=True)
    else:
        tracefile_path(package_dir).unlink(missing_ok=True)


# --------------------------- Reports -----------------------------------------
def _require_tracefile(coverage: PackageCoverage) -> Path:
    tracefile = tracefile_path(coverage.package_dir)
    if not tracefile.is_file():
        msg = f"Coverage tracefile not found: {tracefile}"
        raise CoverageDataNotFoundError(msg)
    return tracefile


def html_coverage(
    coverage: PackageCoverage,
    *,
    open_report: bool = False,
    output_dir: Path | None = None,
) -> Path:
    """Generate, and optionally open, the HTML coverage report.

    The report title names the current git branch when it can be detected.
    Returns the path of the report's ``index.html``.
    """
    _require_tracefile(coverage)
    branch = external.detect_branch(coverage.package_dir)
    title = f"on branch {branch}" if branch else None
    if output_dir is None:
        output_dir = Path(tempfile.mkdtemp(prefix="localcov-html-"))

    index = external.run_genhtml(
        Path(COVDIR) / LCOVINFO,
        output_dir.resolve(),
        cwd=coverage.package_dir,
        title=title,
    )
    logger.info("generated coverage HTML %s", index)
    if open_report:
        external.open_in_viewer(index)
    return index


def generate_xml(coverage: PackageCoverage, filename: str = DEFAULT_XML_FILENAME) -> Path:
    """Generate a Cobertura XML report in the package ``coverage`` directory."""
    tracefile = _require_tracefile(coverage)
    out = external.run_lcov_cobertura(LCOVINFO, filename, cwd=tracefile.parent)
    logger.info("generated cobertura XML %s", filename)
    return out


def report_coverage(coverage: PackageCoverage, target: float = DEFAULT_TARGET_COVERAGE) -> ThresholdResult:
    """Check *coverage* against *target*; ``result.exit_code`` is the process status to use."""
    return check_target(coverage.coverage, target)


__all__ = [
    "clean_coverage",
    "coverage_from_file",
    "find_package_dir",
    "generate_coverage",
    "generate_xml",
    "html_coverage",
    "load_coverage",
    "report_coverage",
    "source_dir",
    "tracefile_path",
]
