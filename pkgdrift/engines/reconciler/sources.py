"""Version source loaders — package.json and node_modules.

Both loaders follow the same policy: anything unreadable is treated as
"nothing declared / nothing installed".  They never raise.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

log = structlog.get_logger("pkgdrift.engine")

PACKAGE_JSON = "package.json"
NODE_MODULES = "node_modules"

_MANIFEST_SECTIONS = ("dependencies", "devDependencies")


@runtime_checkable
class VersionSourceLoader(Protocol):
    """Interface that every version source loader must satisfy."""

    source_name: str

    def load(self, project_dir: Path) -> dict[str, str]: ...


def read_json_or_empty(path: Path, source: str | None = None) -> dict:
    """Read a JSON object from *path*; on any failure return ``{}``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        log.debug("sources.unreadable", source=source, path=str(path), error=repr(exc))
        return {}
    if not isinstance(data, dict):
        log.debug("sources.not_an_object", source=source, path=str(path))
        return {}
    return data


def _string_items(section: object) -> dict[str, str]:
    if not isinstance(section, dict):
        return {}
    return {k: v for k, v in section.items() if isinstance(k, str) and isinstance(v, str)}


class ManifestSourceLoader:
    """Declared dependencies from the project's package.json.

    ``dependencies`` and ``devDependencies`` are merged; a devDependencies
    entry overrides a dependencies entry of the same name.
    """

    source_name = "package.json"

    def __init__(self, manifest_name: str = PACKAGE_JSON) -> None:
        self._manifest_name = manifest_name

    def load(self, project_dir: Path) -> dict[str, str]:
        data = read_json_or_empty(Path(project_dir) / self._manifest_name, self.source_name)
        merged: dict[str, str] = {}
        for section in _MANIFEST_SECTIONS:
            merged.update(_string_items(data.get(section)))
        log.debug("sources.loaded", source=self.source_name, count=len(merged))
        return merged


class InstalledSourceLoader:
    """Installed packages from the first level of node_modules.

    Entries are visited in sorted name order and keyed by the ``name`` found
    in each entry's own package.json, so a later entry declaring the same
    name replaces an earlier one.  Hidden entries (``.bin``, ``.cache``) and
    entries without a string name and version are skipped.
    """

    source_name = "node_modules"

    def __init__(
        self,
        store_name: str = NODE_MODULES,
        manifest_name: str = PACKAGE_JSON,
    ) -> None:
        self._store_name = store_name
        self._manifest_name = manifest_name

    def load(self, project_dir: Path) -> dict[str, str]:
        store = Path(project_dir) / self._store_name
        try:
            entries = sorted(store.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            log.debug(
                "sources.store_unreadable",
                source=self.source_name,
                path=str(store),
                error=str(exc),
            )
            return {}

        installed: dict[str, str] = {}
        for entry in entries:
            if entry.name.startswith("."):
                continue
            meta = read_json_or_empty(entry / self._manifest_name, self.source_name)
            name, version = meta.get("name"), meta.get("version")
            if not (isinstance(name, str) and name and isinstance(version, str) and version):
                continue
            prev = installed.get(name)
            if prev is not None:
                log.debug(
                    "sources.duplicate_package",
                    package=name,
                    old_version=prev,
                    new_version=version,
                    entry=entry.name,
                )
            installed[name] = version
        log.debug("sources.loaded", source=self.source_name, count=len(installed))
        return installed


def load_sources(project_dir: Path) -> tuple[dict[str, str], dict[str, str]]:
    """Load (manifest_source, installed_source) for *project_dir*."""
    loaders: tuple[VersionSourceLoader, VersionSourceLoader] = (
        ManifestSourceLoader(),
        InstalledSourceLoader(),
    )
    manifest, installed = [loader.load(project_dir) for loader in loaders]
    return manifest, installed
