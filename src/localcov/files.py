"""Common file and path utilities for localcov."""

from __future__ import annotations

from pathlib import Path


def read_file_lines(path: Path) -> list[str]:
    """Return the lines of *path* without trailing newlines.

    If the file cannot be read or contains invalid UTF-8 sequences an empty
    list is returned instead.
    """
    try:
        with path.open(encoding="utf-8") as f:
            return [ln.rstrip("\n") for ln in f.readlines()]
    except (OSError, UnicodeDecodeError):
        return []


def normalize_path(path: Path, base: Path | None = None) -> Path:
    """Return *path* normalised relative to *base* if possible.

    When ``base`` is provided and ``path`` is within it the returned path will
    be relative to ``base``.  Otherwise an absolute path is returned.
    """
    resolved = path.resolve() if base is None else (base / path).resolve()
    if base is not None:
        try:
            return resolved.relative_to(base.resolve())
        except ValueError:
            pass
    return resolved


def display_name(path: str | Path, base: Path | None) -> str:
    """Return the POSIX form of *path* relative to *base* when it lies inside it."""
    if base is None:
        return Path(path).as_posix()
    return normalize_path(Path(path), base=base).as_posix()


__all__ = ["display_name", "normalize_path", "read_file_lines"]
