"""Package drift reconciler — check component npm dependencies against a project."""

from pkgdrift.engines.reconciler.compat import is_compatible
from pkgdrift.engines.reconciler.models import (
    Component,
    DriftWarning,
    PackageDependency,
    SemverKind,
    WarningReport,
)
from pkgdrift.engines.reconciler.reporter import check_project, reconcile
from pkgdrift.engines.reconciler.versions import classify

__all__ = [
    "Component",
    "DriftWarning",
    "PackageDependency",
    "SemverKind",
    "WarningReport",
    "check_project",
    "classify",
    "is_compatible",
    "reconcile",
]
