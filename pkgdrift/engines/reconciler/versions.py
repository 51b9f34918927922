"""Semver classification of npm version specifiers."""

from __future__ import annotations

import re

import nodesemver

from pkgdrift.engines.reconciler.models import SemverKind

# npm semver limits: longer strings and larger numeric parts are rejected.
MAX_LENGTH = 256
MAX_SAFE_INTEGER = 2**53 - 1

_MAIN_VERSION_RE = re.compile(r"^\s*v?(\d+)\.(\d+)\.(\d+)")


def _within_integer_limit(version: str) -> bool:
    m = _MAIN_VERSION_RE.match(version)
    return m is None or all(int(part) <= MAX_SAFE_INTEGER for part in m.groups())


def classify(specifier: object) -> SemverKind:
    """Tell whether *specifier* is an exact version, a range, or neither.

    Exact versions are checked first: the npm range grammar also accepts a
    bare ``1.2.3``, but that is reported as EXACT.  Empty or blank strings
    are INVALID even though npm reads them as ``*``.  Anything longer than
    ``MAX_LENGTH`` is INVALID without being parsed.
    """
    if not isinstance(specifier, str) or not specifier.strip():
        return SemverKind.INVALID
    if len(specifier) > MAX_LENGTH:
        return SemverKind.INVALID
    try:
        if nodesemver.valid(specifier, False):
            if not _within_integer_limit(specifier):
                return SemverKind.INVALID
            return SemverKind.EXACT
        if nodesemver.valid_range(specifier, False) is not None:
            return SemverKind.RANGE
    except ValueError:
        pass
    return SemverKind.INVALID
