from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from defusedxml import DefusedXmlException, ElementTree

from localcov.core.metrics import FileCoverage
from localcov.errors import CoverageDataNotFoundError, InvalidCoverageDataError
from localcov.files import display_name

if TYPE_CHECKING:
    from collections.abc import Iterable
    from xml.etree.ElementTree import Element


def read_root(path: Path) -> Element:
    """Parse coverage XML and return the root element.

    Accepts Cobertura-style reports, which use ``<coverage>`` as root.
    """
    try:
        root = ElementTree.parse(path).getroot()
    except (ElementTree.ParseError, DefusedXmlException) as exc:
        msg = f"{path}: failed to parse coverage XML: {exc}"
        raise InvalidCoverageDataError(msg) from exc
    tag = (root.tag or "").split("}")[-1]  # tolerate namespaces
    if tag.lower() != "coverage":
        msg = f"unexpected root tag {root.tag!r} in {path}"
        raise InvalidCoverageDataError(msg)
    return root


def _sources(root: Element) -> list[Path]:
    return [Path(s.text.strip()) for s in root.findall("./sources/source") if s.text and s.text.strip()]


def _resolve_filename(filename: str, sources: list[Path]) -> Path:
    path = Path(filename)
    if path.is_absolute() or not sources:
        return path
    for source in sources:
        if (source / path).exists():
            return source / path
    return sources[0] / path


def iter_line_hits(root: Element) -> Iterable[tuple[str, int, int]]:
    """Yield ``(filename, lineno, hits)`` for every ``<line>`` of every ``<class>``."""
    for cls in root.findall(".//class"):
        filename = cls.get("filename")
        if not filename:
            continue
        for line_elem in cls.findall("./lines/line"):
            n_raw = line_elem.get("number")
            hits_raw = line_elem.get("hits")
            if not n_raw or hits_raw is None:
                continue
            try:
                n = int(n_raw)
                hits = int(hits_raw)
            except ValueError as exc:
                msg = f"{filename}: malformed line record number={n_raw!r} hits={hits_raw!r}"
                raise InvalidCoverageDataError(msg) from exc
            if n < 1 or hits < 0:
                msg = f"{filename}: invalid line record number={n} hits={hits}"
                raise InvalidCoverageDataError(msg)
            yield filename, n, hits


def read_cobertura(path: Path, base: Path | None = None) -> list[FileCoverage]:
    """Read per-line hit counts from the Cobertura XML report at *path*.

    When a file appears in several ``<class>`` elements the maximum hit count
    per line is kept. Lines without a ``<line>`` element are untrackable.
    """
    if not path.is_file():
        msg = f"Coverage XML file not found: {path}"
        raise CoverageDataNotFoundError(msg)
    root = read_root(path)
    sources = _sources(root)

    acc: dict[str, dict[int, int]] = {}
    for filename, lineno, hits in iter_line_hits(root):
        name = display_name(_resolve_filename(filename, sources), base)
        lines = acc.setdefault(name, {})
        lines[lineno] = max(lines.get(lineno, 0), hits)

    out: list[FileCoverage] = []
    for name, lines in acc.items():
        last = max(lines, default=0)
        out.append(FileCoverage(name, tuple(lines.get(n) for n in range(1, last + 1))))
    return out


__all__ = ["iter_line_hits", "read_cobertura", "read_root"]
