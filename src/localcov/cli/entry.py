"""Definition of the command line interface."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from localcov._meta import __version__
from localcov.cli.errors import EXIT_OK
from localcov.cli.util import (
    LocalCovOptions,
    _configure_runtime,
    cli_errors,
    collect_coverage,
    package_options,
    resolve_use_color,
)
from localcov.core.config import load_config
from localcov.pipeline import (
    clean_coverage,
    find_package_dir,
    generate_xml,
    html_coverage,
    report_coverage,
)
from localcov.render import render_package_coverage, render_threshold_message

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence


# --------------------------------------------------------------------------- #
# CLI - root command group                                                    #
# --------------------------------------------------------------------------- #
@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
@click.option("--version", is_flag=True, is_eager=True, help="Show the version and exit")
@click.option("--debug", is_flag=True, help="Show full tracebacks for errors")
@click.option("-q", "--quiet", is_flag=True, help="Suppress INFO logs, emit only errors")
@click.option("-v", "--verbose", is_flag=True, help="Emit diagnostic logging")
@click.pass_context
def cli(ctx: click.Context, *, version: bool, debug: bool, quiet: bool, verbose: bool) -> None:
    """localcov - line coverage summary and target check for a Python package."""
    ctx.obj = LocalCovOptions(debug=debug, quiet=quiet, verbose=verbose)
    _configure_runtime(quiet=quiet, verbose=verbose, debug=debug)

    if version:
        click.echo(__version__)
        ctx.exit(EXIT_OK)

    if ctx.invoked_subcommand is None:
        # no sub-command given → behave as if `report`
        ctx.invoke(report)


# --------------------------------------------------------------------------- #
# Sub-command: version                                                        #
# --------------------------------------------------------------------------- #
@cli.command()
def version() -> None:
    """Print the version and exit."""
    click.echo(__version__)


# --------------------------------------------------------------------------- #
# Sub-command: report (default)                                               #
# --------------------------------------------------------------------------- #
@cli.command()
@package_options
@click.option(
    "--target",
    type=click.FloatRange(0, 100),
    help="Target coverage percentage [default: [tool.localcov] target_coverage or 80]",
)
@click.option("--html/--no-html", default=False, help="Also generate the HTML report (requires genhtml)")
@click.option("--open", "open_report", is_flag=True, help="Open the HTML report in the default viewer")
@click.option("--xml/--no-xml", default=False, help="Also generate a Cobertura XML (requires lcov_cobertura)")
@click.option("--color/--no-color", default=None, help="Force or disable ANSI colors")
@click.pass_obj
def report(
    opts: LocalCovOptions,
    *,
    package_dir: Path | None = None,
    run_tests: bool = True,
    source: Path | None = None,
    pytest_args: Sequence[str] = (),
    target: float | None = None,
    html: bool = False,
    open_report: bool = False,
    xml: bool = False,
    color: bool | None = None,
) -> None:
    """Print the coverage table and exit with 1 unless the target is met."""
    use_color = resolve_use_color(color)
    with cli_errors(debug=opts.debug):
        root = package_dir.resolve() if package_dir else find_package_dir()
        config = load_config(root)
        coverage = collect_coverage(root, config, run_tests=run_tests, source=source, pytest_args=pytest_args)
        result = report_coverage(coverage, config.target_coverage if target is None else target)

        click.echo(render_package_coverage(coverage, color=use_color), color=use_color)
        if html or open_report:
            html_coverage(coverage, open_report=open_report, output_dir=config.html_dir)
        if xml:
            generate_xml(coverage, config.xml_filename)

    click.echo(render_threshold_message(result, color=use_color), color=use_color)
    sys.exit(result.exit_code)


# --------------------------------------------------------------------------- #
# Sub-command: html                                                           #
# --------------------------------------------------------------------------- #
@cli.command()
@package_options
@click.option("--dir", "output_dir", type=click.Path(path_type=Path, file_okay=False), help="Output directory")
@click.option("--open", "open_report", is_flag=True, help="Open the report in the default viewer")
@click.pass_obj
def html(
    opts: LocalCovOptions,
    *,
    package_dir: Path | None,
    run_tests: bool,
    source: Path | None,
    pytest_args: Sequence[str],
    output_dir: Path | None,
    open_report: bool,
) -> None:
    """Generate the HTML coverage report with genhtml."""
    with cli_errors(debug=opts.debug):
        root = package_dir.resolve() if package_dir else find_package_dir()
        config = load_config(root)
        coverage = collect_coverage(root, config, run_tests=run_tests, source=source, pytest_args=pytest_args)
        index = html_coverage(coverage, open_report=open_report, output_dir=output_dir or config.html_dir)
    click.echo(str(index))


# --------------------------------------------------------------------------- #
# Sub-command: xml                                                            #
# --------------------------------------------------------------------------- #
@cli.command()
@package_options
@click.option("--filename", help="Name of the XML file inside the coverage directory [default: cov.xml]")
@click.pass_obj
def xml(
    opts: LocalCovOptions,
    *,
    package_dir: Path | None,
    run_tests: bool,
    source: Path | None,
    pytest_args: Sequence[str],
    filename: str | None,
) -> None:
    """Generate a Cobertura XML report with lcov_cobertura."""
    with cli_errors(debug=opts.debug):
        root = package_dir.resolve() if package_dir else find_package_dir()
        config = load_config(root)
        coverage = collect_coverage(root, config, run_tests=run_tests, source=source, pytest_args=pytest_args)
        out = generate_xml(coverage, filename or config.xml_filename)
    click.echo(str(out))


# --------------------------------------------------------------------------- #
# Sub-command: clean                                                          #
# --------------------------------------------------------------------------- #
@cli.command()
@click.option(
    "-C",
    "--package-dir",
    type=click.Path(path_type=Path, exists=True, file_okay=False),
    help="Package root (default: the project containing the current directory)",
)
@click.option("--keep-directory", is_flag=True, help="Only delete the tracefile, keep the coverage directory")
def clean(*, package_dir: Path | None, keep_directory: bool) -> None:
    """Delete the coverage directory (or only the tracefile)."""
    clean_coverage(package_dir, rm_directory=not keep_directory)


def main() -> None:
    cli()


__all__ = ["cli", "main"]
