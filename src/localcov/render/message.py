"""One-line target coverage message."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from localcov.core.thresholds import ThresholdResult


def format_threshold_message(result: ThresholdResult) -> str:
    """Return Rich markup stating the target and whether it was met."""
    verdict = "was met" if result.met else "wasn't met"
    style = "bold green" if result.met else "bold red"
    return f" Target coverage {verdict} ([{style}]{result.target:g}%[/{style}])"


def render_threshold_message(result: ThresholdResult, *, color: bool = True) -> str:
    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        highlight=False,
    )
    console.print(format_threshold_message(result))
    return buf.getvalue().rstrip("\n")


__all__ = ["format_threshold_message", "render_threshold_message"]
