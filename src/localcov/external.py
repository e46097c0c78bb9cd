"""Invocation of the external programs localcov depends on.

Every function here is a thin wrapper around one process so the rest of the
package (and its tests) never needs a real binary or git checkout.
"""

from __future__ import annotations

import subprocess
import sys
from typing import TYPE_CHECKING

import click

from localcov._meta import logger
from localcov.errors import ExternalToolError, TestRunError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

GENHTML_HINT = "Check that lcov is installed (it provides genhtml)."
LCOV_COBERTURA_HINT = "Install it with `pip install lcov_cobertura` (>= 2.0.1)."
COVERAGE_HINT = "Check that coverage and pytest are installed in the current environment."


def _run_tool(cmd: Sequence[str], *, cwd: Path, tool: str, hint: str) -> subprocess.CompletedProcess[str]:
    logger.debug("running %s in %s", " ".join(cmd), cwd)
    try:
        proc = subprocess.run(list(cmd), cwd=cwd, check=False, capture_output=True, text=True)
    except OSError as exc:
        raise ExternalToolError(tool, str(exc), hint=hint) from exc
    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip() or f"exit status {proc.returncode}"
        raise ExternalToolError(tool, detail, hint=hint)
    return proc


def detect_branch(path: Path) -> str | None:
    """Return the name of the checked out git branch, or ``None`` when unavailable."""
    try:
        proc = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=path,
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        logger.warning("git branch could not be detected")
        return None
    return proc.stdout.strip() or None


def run_tests(package_dir: Path, *, data_file: Path, source: Path, test_args: Sequence[str] = ()) -> None:
    """Run pytest under ``coverage run`` inside *package_dir*.

    Test output goes straight to the terminal. A failing test run raises
    :class:`TestRunError`.
    """
    cmd = [
        sys.executable,
        "-m",
        "coverage",
        "run",
        f"--data-file={data_file}",
        f"--source={source}",
        "-m",
        "pytest",
        *test_args,
    ]
    logger.info("running tests: %s", " ".join(cmd[1:]))
    try:
        proc = subprocess.run(cmd, cwd=package_dir, check=False)
    except OSError as exc:
        raise ExternalToolError("coverage", str(exc), hint=COVERAGE_HINT) from exc
    if proc.returncode != 0:
        raise TestRunError(proc.returncode)


def run_genhtml(tracefile: Path, output_dir: Path, *, cwd: Path, title: str | None = None) -> Path:
    """Generate the HTML report for *tracefile* and return the path of its index page."""
    cmd = ["genhtml"]
    if title:
        cmd += ["-t", title]
    cmd += ["-o", str(output_dir), str(tracefile)]
    _run_tool(cmd, cwd=cwd, tool="genhtml", hint=GENHTML_HINT)
    return output_dir / "index.html"


def run_lcov_cobertura(tracefile: str, output: str, *, cwd: Path) -> Path:
    """Convert *tracefile* into a Cobertura XML file named *output*, both relative to *cwd*."""
    _run_tool(["lcov_cobertura", tracefile, "-o", output], cwd=cwd, tool="lcov_cobertura", hint=LCOV_COBERTURA_HINT)
    return cwd / output


def open_in_viewer(path: Path) -> None:
    click.launch(str(path))


__all__ = [
    "detect_branch",
    "open_in_viewer",
    "run_genhtml",
    "run_lcov_cobertura",
    "run_tests",
]
