from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from localcov import __version__, external, pipeline
from localcov.cli import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_NOINPUT,
    EXIT_SOFTWARE,
    EXIT_UNAVAILABLE,
    cli,
)
from localcov.errors import ExternalToolError, TestRunError

# --------------------------------------------------------------------------- #
# helpers                                                                     #
# --------------------------------------------------------------------------- #


def _run(runner: CliRunner, args: list[str]) -> tuple[int, str]:
    """Invoke the CLI and return *(exit_code, output)* for convenience."""
    result = runner.invoke(cli, args)
    return result.exit_code, result.output


@pytest.fixture
def sample_tracefile(tracefile: Callable[..., Path]) -> Path:
    # 3/5 + 3/3 -> 75%
    return tracefile({"src/pkg/a.py": [1, 0, 0, None, 2, 1], "src/pkg/b.py": [1, 1, 1]})


# --------------------------------------------------------------------------- #
# tests                                                                       #
# --------------------------------------------------------------------------- #


def test_version(cli_runner: CliRunner) -> None:
    assert _run(cli_runner, ["--version"]) == (0, f"{__version__}\n")
    assert _run(cli_runner, ["version"]) == (0, f"{__version__}\n")


def test_report_target_met(cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path) -> None:
    code, out = _run(
        cli_runner,
        ["report", "-C", str(package_dir), "--from", str(sample_tracefile), "--target", "70", "--no-color"],
    )
    assert code == 0
    assert "src/pkg/a.py" in out
    assert "2 - 3" in out
    assert "TOTAL" in out
    assert "75%" in out
    assert out.rstrip().endswith("Target coverage was met (70%)")
    assert "\x1b" not in out


def test_report_target_not_met(cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path) -> None:
    code, out = _run(cli_runner, ["report", "-C", str(package_dir), "--from", str(sample_tracefile)])
    assert code == 1
    assert "Target coverage wasn't met (80%)" in out


def test_report_target_from_config(cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path) -> None:
    with (package_dir / "pyproject.toml").open("a", encoding="utf-8") as f:
        f.write("\n[tool.localcov]\ntarget_coverage = 75\n")
    code, out = _run(cli_runner, ["report", "-C", str(package_dir), "--from", str(sample_tracefile)])
    assert code == 0
    assert "(75%)" in out


def test_report_color(cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path) -> None:
    _, out = _run(cli_runner, ["report", "-C", str(package_dir), "--from", str(sample_tracefile), "--color"])
    assert "\x1b[" in out


def test_report_empty_package_never_meets_target(
    cli_runner: CliRunner, package_dir: Path, tracefile: Callable[..., Path]
) -> None:
    empty = tracefile({})
    code, out = _run(cli_runner, ["report", "-C", str(package_dir), "--from", str(empty), "--target", "0"])
    assert code == 1
    assert "wasn't met (0%)" in out


def test_report_rejects_invalid_target(cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path) -> None:
    code, out = _run(cli_runner, ["report", "-C", str(package_dir), "--from", str(sample_tracefile), "--target", "101"])
    assert code == 2
    assert "--target" in out


def test_report_runs_tests_with_forwarded_args(
    cli_runner: CliRunner, package_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    seen: dict[str, Any] = {}

    def fake_generate(package_dir: Path, *, run_test: bool, test_args: tuple[str, ...]):
        seen.update(package_dir=package_dir, run_test=run_test, test_args=test_args)
        from localcov.core.metrics import FileCoverage, eval_coverage_metrics

        return eval_coverage_metrics([FileCoverage("a.py", (1,))], package_dir)

    monkeypatch.setattr("localcov.cli.util.generate_coverage", fake_generate)
    code, _ = _run(cli_runner, ["report", "-C", str(package_dir), "--", "-k", "smoke"])
    assert code == 0
    assert seen == {"package_dir": package_dir.resolve(), "run_test": True, "test_args": ("-k", "smoke")}


def test_default_command_is_report(
    cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(package_dir)
    monkeypatch.setattr(
        "localcov.cli.util.generate_coverage",
        lambda root, **_: pipeline.coverage_from_file(sample_tracefile, root),
    )
    code, out = _run(cli_runner, [])
    assert code == 1
    assert "TOTAL" in out
    assert "Target coverage" in out


def test_report_missing_coverage_data(cli_runner: CliRunner, package_dir: Path) -> None:
    code, out = _run(cli_runner, ["report", "-C", str(package_dir), "--no-run-tests"])
    assert code == EXIT_NOINPUT
    assert "ERROR: Coverage data file not found" in out


def test_report_malformed_tracefile(cli_runner: CliRunner, package_dir: Path, tmp_path: Path) -> None:
    bad = tmp_path / "bad.info"
    bad.write_text("DA:1,1\n", encoding="utf-8")
    code, out = _run(cli_runner, ["report", "-C", str(package_dir), "--from", str(bad)])
    assert code == EXIT_DATAERR
    assert "outside of a file record" in out


@pytest.mark.parametrize(
    ("filename", "content"),
    [
        ("bad.info", b"TN:\nSF:\xff\xfe.py\nDA:1,1\nend_of_record\n"),
        ("bad.xml", b'<!DOCTYPE coverage [<!ENTITY x "y">]><coverage>&x;</coverage>'),
    ],
)
def test_report_unreadable_input_is_a_data_error(
    cli_runner: CliRunner, package_dir: Path, tmp_path: Path, filename: str, content: bytes
) -> None:
    bad = tmp_path / filename
    bad.write_bytes(content)
    code, out = _run(cli_runner, ["report", "-C", str(package_dir), "--from", str(bad)])
    assert code == EXIT_DATAERR
    assert "ERROR:" in out


def test_report_bad_config(cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path) -> None:
    with (package_dir / "pyproject.toml").open("a", encoding="utf-8") as f:
        f.write('\n[tool.localcov]\ntarget_coverage = "all"\n')
    code, out = _run(cli_runner, ["report", "-C", str(package_dir), "--from", str(sample_tracefile)])
    assert code == EXIT_CONFIG
    assert "target_coverage" in out


def test_report_failing_tests(cli_runner: CliRunner, package_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing(*_: object, **__: object) -> None:
        raise TestRunError(2)

    monkeypatch.setattr(external, "run_tests", failing)
    code, out = _run(cli_runner, ["report", "-C", str(package_dir)])
    assert code == EXIT_SOFTWARE
    assert "tests failed" in out


def test_report_with_html_and_xml(
    cli_runner: CliRunner,
    package_dir: Path,
    sample_tracefile: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: list[str] = []
    monkeypatch.setattr(external, "detect_branch", lambda path: None)
    monkeypatch.setattr(external, "run_genhtml", lambda *a, **k: calls.append("html") or Path("index.html"))
    monkeypatch.setattr(external, "run_lcov_cobertura", lambda *a, **k: calls.append("xml") or Path("cov.xml"))
    code, _ = _run(
        cli_runner,
        ["report", "-C", str(package_dir), "--from", str(sample_tracefile), "--target", "50", "--html", "--xml"],
    )
    assert code == 0
    assert calls == ["html", "xml"]


def test_html_missing_genhtml(
    cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def missing(*_: object, **__: object) -> Path:
        raise ExternalToolError("genhtml", "No such file or directory", hint=external.GENHTML_HINT)

    monkeypatch.setattr(external, "detect_branch", lambda path: None)
    monkeypatch.setattr(external, "run_genhtml", missing)
    code, out = _run(cli_runner, ["html", "-C", str(package_dir), "--from", str(sample_tracefile)])
    assert code == EXIT_UNAVAILABLE
    assert "Failed to run genhtml" in out
    assert "No such file or directory" in out


def test_html_prints_index(
    cli_runner: CliRunner,
    package_dir: Path,
    sample_tracefile: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(external, "detect_branch", lambda path: "main")
    monkeypatch.setattr(external, "run_genhtml", lambda tracefile, out, **_: out / "index.html")
    out_dir = tmp_path / "html"
    code, out = _run(
        cli_runner, ["html", "-C", str(package_dir), "--from", str(sample_tracefile), "--dir", str(out_dir)]
    )
    assert code == 0
    assert out.strip().splitlines()[-1] == str(out_dir.resolve() / "index.html")


def test_xml_filename(
    cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    seen: list[str] = []
    monkeypatch.setattr(external, "run_lcov_cobertura", lambda tracefile, output, *, cwd: seen.append(output) or cwd / output)
    code, out = _run(
        cli_runner, ["xml", "-C", str(package_dir), "--from", str(sample_tracefile), "--filename", "out.xml"]
    )
    assert code == 0
    assert seen == ["out.xml"]
    assert out.strip().splitlines()[-1].endswith("out.xml")


def test_clean(cli_runner: CliRunner, package_dir: Path, sample_tracefile: Path) -> None:
    pipeline.coverage_from_file(sample_tracefile, package_dir)
    tracefile = pipeline.tracefile_path(package_dir)
    assert tracefile.exists()

    code, _ = _run(cli_runner, ["clean", "-C", str(package_dir), "--keep-directory"])
    assert code == 0
    assert not tracefile.exists()
    assert tracefile.parent.exists()

    code, _ = _run(cli_runner, ["clean", "-C", str(package_dir)])
    assert code == 0
    assert not tracefile.parent.exists()
