"""Drift reporter — bucket each declared package dependency by where it is missing."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from pkgdrift.engines.reconciler.compat import is_compatible
from pkgdrift.engines.reconciler.models import (
    NOT_IN_BOTH,
    NOT_IN_NODE_MODULES,
    NOT_IN_PACKAGE_JSON,
    Component,
    DriftWarning,
    VersionSource,
    WarningReport,
)
from pkgdrift.engines.reconciler.sources import load_sources

log = structlog.get_logger("pkgdrift.engine")


def _bucket_for(in_manifest: bool, in_installed: bool) -> str | None:
    if not in_manifest and not in_installed:
        return NOT_IN_BOTH
    if not in_manifest:
        return NOT_IN_PACKAGE_JSON
    if not in_installed:
        return NOT_IN_NODE_MODULES
    return None


def reconcile(
    components: Iterable[Component],
    manifest_source: VersionSource,
    installed_source: VersionSource,
) -> WarningReport:
    """Compare every component's package dependencies against both sources.

    Warnings keep component order, then dependency order within a component.
    """
    report = WarningReport()
    checked = 0

    for component in components:
        if not component.package_dependencies:
            continue

        for dep in component.package_dependencies:
            checked += 1
            in_manifest = is_compatible(dep.name, dep.version, manifest_source)
            in_installed = is_compatible(dep.name, dep.version, installed_source)

            bucket = _bucket_for(in_manifest, in_installed)
            if bucket is None:
                continue

            warning = DriftWarning(dependency=dep, component_id=component.id)
            report.bucket(bucket).append(warning)
            log.debug(
                "reconciler.drift",
                bucket=bucket,
                package=dep.name,
                version=dep.version,
                component=component.id,
            )

    log.info(
        "reconciler.done",
        checked=checked,
        not_in_package_json=len(report.not_in_package_json),
        not_in_node_modules=len(report.not_in_node_modules),
        not_in_both=len(report.not_in_both),
    )
    return report


def check_project(project_dir: Path, components: Iterable[Component]) -> WarningReport:
    """Load package.json and node_modules from *project_dir*, then reconcile."""
    manifest, installed = load_sources(project_dir)
    return reconcile(components, manifest, installed)
