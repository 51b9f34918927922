"""Compatibility test between a declared specifier and a version source."""

from __future__ import annotations

import nodesemver

from pkgdrift.engines.reconciler.models import SemverKind, VersionSource
from pkgdrift.engines.reconciler.versions import classify


def _same_caret_major(a: str, b: str) -> bool:
    # Only the first character after "^" is compared, so ^10.x matches ^1.x.
    if not (a.startswith("^") and b.startswith("^")):
        return False
    a_major, b_major = a[1:2], b[1:2]
    return a_major.isdigit() and a_major == b_major


def is_compatible(dep_name: str, spec_a: str, source_b: VersionSource) -> bool:
    """Return True if *spec_a* for *dep_name* agrees with *source_b*'s entry.

    Rules:
      - a missing entry or an INVALID specifier on either side -> False
      - exact vs exact -> semver equality
      - exact vs range (either order) -> the exact version satisfies the range
      - range vs range -> both caret ranges with the same leading major digit

    Overlapping non-caret ranges are never considered compatible.
    """
    spec_b = source_b.get(dep_name)
    if spec_b is None:
        return False

    kind_a = classify(spec_a)
    kind_b = classify(spec_b)
    if SemverKind.INVALID in (kind_a, kind_b):
        return False

    if kind_a is SemverKind.EXACT and kind_b is SemverKind.EXACT:
        return nodesemver.eq(spec_a, spec_b, False)
    if kind_a is SemverKind.EXACT and kind_b is SemverKind.RANGE:
        return nodesemver.satisfies(spec_a, spec_b, False)
    if kind_a is SemverKind.RANGE and kind_b is SemverKind.EXACT:
        return nodesemver.satisfies(spec_b, spec_a, False)
    return _same_caret_major(spec_a, spec_b)
