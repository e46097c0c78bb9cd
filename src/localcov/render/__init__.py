from localcov.render.message import format_threshold_message, render_threshold_message
from localcov.render.table import (
    build_table,
    format_file_row,
    format_total_row,
    print_package_coverage,
    render_package_coverage,
    severity,
)

__all__ = [
    "build_table",
    "format_file_row",
    "format_threshold_message",
    "format_total_row",
    "print_package_coverage",
    "render_package_coverage",
    "render_threshold_message",
    "severity",
]
