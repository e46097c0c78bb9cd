"""Reading and writing LCOV tracefiles (``lcov.info``).

Only line records are handled; function and branch records are skipped when
reading and never written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from localcov._meta import logger
from localcov.core.gaps import validate_counts
from localcov.core.metrics import FileCoverage
from localcov.errors import CoverageDataNotFoundError, InvalidCoverageDataError
from localcov.files import display_name

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

END_OF_RECORD = "end_of_record"


# --------------------------- Writing -----------------------------------------
def format_record(file: FileCoverage) -> Iterator[str]:
    """Yield the lines of the tracefile record for *file*."""
    validate_counts(file.counts)
    yield "TN:"
    yield f"SF:{file.filename}"
    found = hit = 0
    for lineno, count in enumerate(file.counts, start=1):
        if count is None:
            continue
        yield f"DA:{lineno},{count}"
        found += 1
        hit += count > 0
    yield f"LH:{hit}"
    yield f"LF:{found}"
    yield END_OF_RECORD


def write_tracefile(path: Path, files: Iterable[FileCoverage]) -> Path:
    """Write *files* as an LCOV tracefile at *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [line for file in files for line in format_record(file)]
    path.write_text("\n".join(lines) + "\n" if lines else "", encoding="utf-8")
    logger.debug("wrote tracefile %s", path)
    return path


# --------------------------- Reading -----------------------------------------
def _parse_da(payload: str, *, path: Path, lineno: int) -> tuple[int, int]:
    parts = payload.split(",")
    try:
        line, count = int(parts[0]), int(parts[1])
    except (IndexError, ValueError) as exc:
        msg = f"{path}:{lineno}: malformed DA record: {payload!r}"
        raise InvalidCoverageDataError(msg) from exc
    if line < 1 or count < 0:
        msg = f"{path}:{lineno}: invalid DA record: {payload!r}"
        raise InvalidCoverageDataError(msg)
    return line, count


def _to_counts(hits: dict[int, int]) -> tuple[int | None, ...]:
    last = max(hits, default=0)
    return tuple(hits.get(line) for line in range(1, last + 1))


def parse_tracefile(text: str, *, path: Path, base: Path | None = None) -> list[FileCoverage]:
    """Parse tracefile *text*; *path* is only used in error messages."""
    acc: dict[str, dict[int, int]] = {}
    current: dict[int, int] | None = None
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        if line.startswith("SF:"):
            if current is not None:
                msg = f"{path}:{lineno}: record not terminated before new SF"
                raise InvalidCoverageDataError(msg)
            current = acc.setdefault(display_name(line[3:], base), {})
        elif line == END_OF_RECORD:
            current = None
        elif line.startswith("DA:"):
            if current is None:
                msg = f"{path}:{lineno}: DA record outside of a file record"
                raise InvalidCoverageDataError(msg)
            number, count = _parse_da(line[3:], path=path, lineno=lineno)
            current[number] = current.get(number, 0) + count
    if current is not None:
        msg = f"{path}: last record is missing {END_OF_RECORD}"
        raise InvalidCoverageDataError(msg)
    return [FileCoverage(name, _to_counts(hits)) for name, hits in acc.items()]


def read_tracefile(path: Path, base: Path | None = None) -> list[FileCoverage]:
    """Read the per-line hit counts stored in the tracefile at *path*.

    Lines without a ``DA`` record are untrackable. Records of the same source
    file are merged by adding their counts. File names are made relative to
    *base* when they lie inside it.
    """
    if not path.is_file():
        msg = f"Coverage tracefile not found: {path}"
        raise CoverageDataNotFoundError(msg)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{path}: not valid UTF-8: {exc}"
        raise InvalidCoverageDataError(msg) from exc
    return parse_tracefile(text, path=path, base=base)


__all__ = ["format_record", "parse_tracefile", "read_tracefile", "write_tracefile"]
