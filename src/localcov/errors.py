"""Centralised exception hierarchy for localcov."""

from __future__ import annotations


class LocalCoverageError(Exception):
    """Base class for all custom localcov exceptions."""


class InvalidCoverageDataError(LocalCoverageError, ValueError):
    """Coverage counters, tracefile or XML do not satisfy the input contract."""


class CoverageDataNotFoundError(LocalCoverageError):
    """Coverage data file, tracefile or XML report could not be located on disk."""


class ConfigError(LocalCoverageError):
    """The ``[tool.localcov]`` configuration contains invalid values."""


class TestRunError(LocalCoverageError):
    """The test suite failed while collecting coverage."""

    __test__ = False

    def __init__(self, returncode: int) -> None:
        super().__init__(f"tests failed while collecting coverage (exit status {returncode})")
        self.returncode = returncode


class ExternalToolError(LocalCoverageError):
    """An external program is missing or exited with an error."""

    def __init__(self, tool: str, detail: str, *, hint: str | None = None) -> None:
        message = f"Failed to run {tool}."
        if hint:
            message += f" {hint}"
        message += f"\nError message: {detail}"
        super().__init__(message)
        self.tool = tool
        self.detail = detail


__all__ = [
    "ConfigError",
    "CoverageDataNotFoundError",
    "ExternalToolError",
    "InvalidCoverageDataError",
    "LocalCoverageError",
    "TestRunError",
]
