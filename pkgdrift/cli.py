"""CLI entry point: pkgdrift.

Subcommands:
    pkgdrift check ./project --components components.json   # report drift
    pkgdrift check ./project -c components.json --json      # JSON report
    pkgdrift classify ^1.2.0 1.2.3 latest                   # semver kind per specifier
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from pkgdrift.core.logging import setup_logging
from pkgdrift.engines.reconciler import check_project, classify
from pkgdrift.engines.reconciler.models import (
    NOT_IN_BOTH,
    NOT_IN_NODE_MODULES,
    NOT_IN_PACKAGE_JSON,
    WarningReport,
)
from pkgdrift.exceptions import PkgDriftError
from pkgdrift.schemas.component import load_components

EXIT_DRIFT = 2

_HEADINGS = {
    NOT_IN_PACKAGE_JSON: "installed in node_modules but missing from package.json",
    NOT_IN_NODE_MODULES: "declared in package.json but not installed in node_modules",
    NOT_IN_BOTH: "missing from both package.json and node_modules",
}


def _print_report(report: WarningReport, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(report.to_dict(with_messages=True), indent=2))
        return

    if report.is_empty:
        click.echo("All package dependencies are satisfied.")
        return

    click.echo(f"Found {report.total} package dependency warning(s)\n")
    for bucket, warnings in report:
        if not warnings:
            continue
        click.echo(click.style(f"  {_HEADINGS[bucket]}  ({len(warnings)})", fg="yellow"))
        for w in warnings:
            click.echo(f"    {w.message}")
        click.echo()


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """pkgdrift: check component npm dependencies against a project."""
    setup_logging("DEBUG" if verbose else None)


@main.command("check")
@click.argument(
    "project_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "-c",
    "--components",
    "components_file",
    required=True,
    type=click.Path(path_type=Path),
    help="JSON file listing components and their packageDependencies",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--strict", is_flag=True, help=f"Exit {EXIT_DRIFT} when any drift is found")
def check(project_dir: Path, components_file: Path, as_json: bool, strict: bool) -> None:
    """Report package dependencies missing from package.json or node_modules."""
    try:
        components = load_components(components_file)
    except PkgDriftError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    report = check_project(project_dir, components)
    _print_report(report, as_json)

    if strict and not report.is_empty:
        sys.exit(EXIT_DRIFT)


@main.command("classify")
@click.argument("specifiers", nargs=-1, required=True)
def classify_cmd(specifiers: tuple[str, ...]) -> None:
    """Print whether each specifier is an exact version, a range, or invalid."""
    for spec in specifiers:
        click.echo(f"{spec}\t{classify(spec).value}")


if __name__ == "__main__":
    main()
