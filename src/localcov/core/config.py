"""Central configuration and constants for ``localcov``."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from localcov._meta import logger
from localcov.errors import ConfigError

# Directory for coverage results, relative to the package root.
COVDIR = "coverage"

# Coverage tracefile inside COVDIR.
LCOVINFO = "lcov.info"

# Default Cobertura XML filename inside COVDIR.
DEFAULT_XML_FILENAME = "cov.xml"

# Data file written by ``coverage run``.
COVERAGE_DATA_FILE = ".coverage"

DEFAULT_TARGET_COVERAGE = 80.0

# Severity bounds for the coverage column (inclusive).
CRITICAL_MAX = 50.0
WARNING_MAX = 70.0
GOOD_MIN = 90.0

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

_FULL_PERCENT = 100.0


@dataclass(frozen=True, slots=True)
class LocalCovConfig:
    """Settings read from ``[tool.localcov]`` in ``pyproject.toml``."""

    target_coverage: float = DEFAULT_TARGET_COVERAGE
    xml_filename: str = DEFAULT_XML_FILENAME
    html_dir: Path | None = None
    test_args: tuple[str, ...] = ()


def validate_target(target: float) -> float:
    """Return *target* as a float, rejecting values outside ``[0, 100]``."""
    value = float(target)
    if not 0.0 <= value <= _FULL_PERCENT:
        msg = f"target coverage must be between 0 and 100, got {target!r}"
        raise ValueError(msg)
    return value


def _read_table(pyproject: Path) -> dict[str, object]:
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", pyproject, e)
        return {}
    table = data.get("tool", {}).get("localcov", {})
    if not isinstance(table, dict):
        msg = f"{pyproject}: [tool.localcov] must be a table"
        raise ConfigError(msg)
    return table


def load_config(package_dir: Path) -> LocalCovConfig:
    """Load the configuration for the package rooted at *package_dir*.

    A missing ``pyproject.toml`` or ``[tool.localcov]`` table yields the
    defaults. Values of the wrong type raise :class:`ConfigError`.
    """
    pyproject = package_dir / "pyproject.toml"
    if not pyproject.is_file():
        return LocalCovConfig()
    table = _read_table(pyproject)
    if not table:
        return LocalCovConfig()

    unknown = sorted(set(table) - {"target_coverage", "xml_filename", "html_dir", "test_args"})
    if unknown:
        logger.warning("Ignoring unknown [tool.localcov] keys: %s", ", ".join(unknown))

    target = table.get("target_coverage", DEFAULT_TARGET_COVERAGE)
    if isinstance(target, bool) or not isinstance(target, int | float):
        msg = f"target_coverage must be a number, got {target!r}"
        raise ConfigError(msg)
    try:
        target = validate_target(target)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    xml_filename = table.get("xml_filename", DEFAULT_XML_FILENAME)
    if not isinstance(xml_filename, str) or not xml_filename.strip():
        msg = f"xml_filename must be a non-empty string, got {xml_filename!r}"
        raise ConfigError(msg)

    html_dir = table.get("html_dir")
    if html_dir is not None and not isinstance(html_dir, str):
        msg = f"html_dir must be a string, got {html_dir!r}"
        raise ConfigError(msg)

    test_args = table.get("test_args", [])
    if not isinstance(test_args, list) or not all(isinstance(a, str) for a in test_args):
        msg = f"test_args must be a list of strings, got {test_args!r}"
        raise ConfigError(msg)

    return LocalCovConfig(
        target_coverage=target,
        xml_filename=xml_filename,
        html_dir=(package_dir / html_dir) if html_dir else None,
        test_args=tuple(test_args),
    )


__all__ = [
    "COVDIR",
    "COVERAGE_DATA_FILE",
    "CRITICAL_MAX",
    "DEFAULT_TARGET_COVERAGE",
    "DEFAULT_XML_FILENAME",
    "GOOD_MIN",
    "LCOVINFO",
    "LOG_FORMAT",
    "WARNING_MAX",
    "LocalCovConfig",
    "load_config",
    "validate_target",
]
