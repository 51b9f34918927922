"""Data models for the package drift reconciler."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

# name -> version specifier, either from package.json or node_modules
VersionSource = Mapping[str, str]

NOT_IN_PACKAGE_JSON = "notInPackageJson"
NOT_IN_NODE_MODULES = "notInNodeModules"
NOT_IN_BOTH = "notInBoth"

BUCKETS = (NOT_IN_PACKAGE_JSON, NOT_IN_NODE_MODULES, NOT_IN_BOTH)

MESSAGE_TEMPLATE = "the npm package {{ {name}:{version} }} is a package dependency of {component_id}"


class SemverKind(Enum):
    EXACT = "exact"
    RANGE = "range"
    INVALID = "invalid"


@dataclass(frozen=True)
class PackageDependency:
    """A single npm package a component expects to find in the project."""

    name: str
    version: str


@dataclass
class Component:
    """A fetched component and the npm packages it declares."""

    id: str
    package_dependencies: list[PackageDependency] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, component_id: str, deps: Mapping[str, str] | None) -> Component:
        return cls(
            id=component_id,
            package_dependencies=[
                PackageDependency(name, version) for name, version in (deps or {}).items()
            ],
        )


@dataclass(frozen=True)
class DriftWarning:
    """A package dependency that could not be matched, plus who declared it."""

    dependency: PackageDependency
    component_id: str

    @property
    def name(self) -> str:
        return self.dependency.name

    @property
    def version(self) -> str:
        return self.dependency.version

    @property
    def message(self) -> str:
        return MESSAGE_TEMPLATE.format(
            name=self.name, version=self.version, component_id=self.component_id
        )


@dataclass
class WarningReport:
    """Drift warnings partitioned by which source failed to match."""

    not_in_package_json: list[DriftWarning] = field(default_factory=list)
    not_in_node_modules: list[DriftWarning] = field(default_factory=list)
    not_in_both: list[DriftWarning] = field(default_factory=list)

    def bucket(self, key: str) -> list[DriftWarning]:
        if key == NOT_IN_PACKAGE_JSON:
            return self.not_in_package_json
        if key == NOT_IN_NODE_MODULES:
            return self.not_in_node_modules
        if key == NOT_IN_BOTH:
            return self.not_in_both
        raise KeyError(key)

    def __iter__(self) -> Iterator[tuple[str, list[DriftWarning]]]:
        for key in BUCKETS:
            yield key, self.bucket(key)

    @property
    def total(self) -> int:
        return sum(len(warnings) for _, warnings in self)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self, with_messages: bool = False) -> dict:
        """Serialize to ``{bucket: [{name: version}, ...]}``.

        With *with_messages*, every entry becomes
        ``{"name", "version", "component_id", "message"}`` instead.
        """
        out: dict[str, list[dict]] = {}
        for key, warnings in self:
            if with_messages:
                out[key] = [
                    {
                        "name": w.name,
                        "version": w.version,
                        "component_id": w.component_id,
                        "message": w.message,
                    }
                    for w in warnings
                ]
            else:
                out[key] = [{w.name: w.version} for w in warnings]
        return out
