"""Utilities and helper functions for implementing CLI-specific functionality."""

from __future__ import annotations

import dataclasses
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click

from localcov._meta import logger
from localcov.cli.errors import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_NOINPUT,
    EXIT_SOFTWARE,
    EXIT_UNAVAILABLE,
)
from localcov.core.config import LOG_FORMAT
from localcov.errors import (
    ConfigError,
    CoverageDataNotFoundError,
    ExternalToolError,
    InvalidCoverageDataError,
    TestRunError,
)
from localcov.pipeline import coverage_from_file, find_package_dir, generate_coverage

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterator, Sequence

    from localcov.core.config import LocalCovConfig
    from localcov.core.metrics import PackageCoverage


@dataclasses.dataclass(slots=True)
class LocalCovOptions:
    """Global flags collected by the root command."""

    debug: bool = False
    quiet: bool = False
    verbose: bool = False


# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #


def _configure_runtime(*, quiet: bool, verbose: bool, debug: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)

    if debug:
        logger.debug("debug mode active")


def resolve_use_color(color: bool | None) -> bool:
    # explicit --color/--no-color wins over terminal detection
    if color is not None:
        return color
    return bool(getattr(sys.stdout, "isatty", lambda: False)())


_ERROR_EXIT_CODES: tuple[tuple[type[Exception], int], ...] = (
    (CoverageDataNotFoundError, EXIT_NOINPUT),
    (InvalidCoverageDataError, EXIT_DATAERR),
    (ExternalToolError, EXIT_UNAVAILABLE),
    (TestRunError, EXIT_SOFTWARE),
    (ConfigError, EXIT_CONFIG),
)


@contextmanager
def cli_errors(*, debug: bool) -> Iterator[None]:
    """Report known localcov errors on stderr and exit with the matching status."""
    try:
        yield
    except (CoverageDataNotFoundError, InvalidCoverageDataError, ExternalToolError, TestRunError, ConfigError) as e:
        click.echo(f"ERROR: {e}", err=True)
        if debug:
            raise
        code = next(code for exc_type, code in _ERROR_EXIT_CODES if isinstance(e, exc_type))
        sys.exit(code)


def collect_coverage(
    package_dir: Path | None,
    config: LocalCovConfig,
    *,
    run_tests: bool,
    source: Path | None,
    pytest_args: Sequence[str],
) -> PackageCoverage:
    """Produce the package coverage either from *source* or from a (fresh) coverage.py run."""
    root = package_dir.resolve() if package_dir else find_package_dir()
    if source is not None:
        return coverage_from_file(source, root)
    test_args = tuple(pytest_args) or config.test_args
    return generate_coverage(root, run_test=run_tests, test_args=test_args)


def package_options(func: Callable[..., object]) -> Callable[..., object]:
    """Options shared by every command that needs coverage data."""
    decorators = [
        click.option(
            "-C",
            "--package-dir",
            type=click.Path(path_type=Path, exists=True, file_okay=False),
            help="Package root (default: the project containing the current directory)",
        ),
        click.option(
            "--run-tests/--no-run-tests",
            default=True,
            show_default=True,
            help="Run the test suite under coverage.py before reporting",
        ),
        click.option(
            "--from",
            "source",
            type=click.Path(path_type=Path, exists=True, dir_okay=False),
            help="Use an existing lcov tracefile (.info), Cobertura XML (.xml) or coverage.py data file",
        ),
        click.argument("pytest_args", nargs=-1, type=click.UNPROCESSED),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func
