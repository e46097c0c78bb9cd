from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner

Counts = Sequence[int | None]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    """A minimal project root with a ``pyproject.toml``."""
    root = tmp_path / "pkg"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "pyproject.toml").write_text('[project]\nname = "pkg"\nversion = "0.0.1"\n', encoding="utf-8")
    return root


@pytest.fixture
def tracefile_content() -> Callable[[Mapping[str, Counts]], str]:
    def build(mapping: Mapping[str, Counts]) -> str:
        records: list[str] = []
        for file, counts in mapping.items():
            records.append(f"TN:\nSF:{file}\n")
            for lineno, count in enumerate(counts, start=1):
                if count is not None:
                    records.append(f"DA:{lineno},{count}\n")
            records.append("end_of_record\n")
        return "".join(records)

    return build


@pytest.fixture
def tracefile(
    tmp_path: Path,
    tracefile_content: Callable[[Mapping[str, Counts]], str],
) -> Callable[..., Path]:
    def write(mapping: Mapping[str, Counts], *, filename: str = "lcov.info") -> Path:
        path = tmp_path / filename
        path.write_text(tracefile_content(mapping), encoding="utf-8")
        return path

    return write


@pytest.fixture
def coverage_xml_content() -> Callable[..., str]:
    def build(mapping: Mapping[Path | str, Mapping[int, int]], *, sources: Path | None = None) -> str:
        classes: list[str] = []
        for file, lines in mapping.items():
            lines_xml = "".join(f'<line number="{ln}" hits="{hits}"/>' for ln, hits in lines.items())
            classes.append(f'<class filename="{file}"><lines>{lines_xml}</lines></class>')
        classes_xml = "".join(classes)
        sources_xml = f"<sources><source>{sources}</source></sources>" if sources else ""
        return (
            "<coverage>"
            f"{sources_xml}"
            f"<packages><package><classes>{classes_xml}</classes></package></packages>"
            "</coverage>"
        )

    return build


@pytest.fixture
def coverage_xml_file(
    tmp_path: Path,
    coverage_xml_content: Callable[..., str],
) -> Callable[..., Path]:
    def write(
        mapping: Mapping[Path | str, Mapping[int, int]],
        *,
        sources: Path | None = None,
        filename: str = "coverage.xml",
    ) -> Path:
        xml_file = tmp_path / filename
        xml_file.write_text(coverage_xml_content(mapping, sources=sources), encoding="utf-8")
        return xml_file

    return write
