"""Per-line counters from a coverage.py data file.

coverage.py records whether a line ran, not how often, so executed statements
get a count of ``1``.
"""

from __future__ import annotations

from contextlib import chdir
from pathlib import Path

from coverage import Coverage
from coverage.exceptions import DataError, NoSource, NotPython

from localcov._meta import logger
from localcov.core.metrics import FileCoverage
from localcov.errors import CoverageDataNotFoundError, InvalidCoverageDataError
from localcov.files import read_file_lines


def _line_counts(path: Path, statements: list[int], missing: list[int]) -> tuple[int | None, ...]:
    executable = set(statements)
    unexecuted = set(missing)
    n_lines = max(len(read_file_lines(path)), max(executable, default=0))
    return tuple(
        (0 if lineno in unexecuted else 1) if lineno in executable else None
        for lineno in range(1, n_lines + 1)
    )


def read_coverage_data(data_file: Path, package_dir: Path) -> list[FileCoverage]:
    """Return the coverage of every measured file below *package_dir*.

    The data file is read from inside *package_dir*, so coverage.py picks up
    the package's own configuration (``relative_files`` in particular) and
    relative file names resolve against the package root. Files are listed
    in sorted path order; measured files outside the package (site-packages,
    the test runner itself) are skipped.
    """
    if not data_file.is_file():
        msg = f"Coverage data file not found: {data_file}"
        raise CoverageDataNotFoundError(msg)

    root = package_dir.resolve()
    data_file = data_file.resolve()
    with chdir(root):
        cov = Coverage(data_file=str(data_file))
        try:
            cov.load()
            measured = sorted(cov.get_data().measured_files())
        except DataError as exc:
            msg = f"{data_file}: unreadable coverage data: {exc}"
            raise InvalidCoverageDataError(msg) from exc

        out: list[FileCoverage] = []
        for filename in measured:
            path = Path(filename)
            path = (path if path.is_absolute() else root / path).resolve()
            try:
                rel = path.relative_to(root)
            except ValueError:
                logger.debug("skipping %s: outside of %s", filename, root)
                continue
            try:
                _, statements, _excluded, missing, _ = cov.analysis2(str(path))
            except (NoSource, NotPython) as exc:
                logger.warning("Skipping %s: %s", rel.as_posix(), exc)
                continue
            out.append(FileCoverage(rel.as_posix(), _line_counts(path, statements, missing)))
    return out


__all__ = ["read_coverage_data"]
