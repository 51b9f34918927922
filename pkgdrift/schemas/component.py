"""Components file schema."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from pkgdrift.engines.reconciler.models import Component
from pkgdrift.exceptions import ComponentFileError


class ComponentSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    package_dependencies: dict[str, str] = Field(
        default_factory=dict, alias="packageDependencies"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator("package_dependencies", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return {} if v is None else v

    def to_component(self) -> Component:
        return Component.from_mapping(self.id, self.package_dependencies)


_COMPONENT_LIST = TypeAdapter(list[ComponentSchema])


def load_components(path: Path) -> list[Component]:
    """Read a JSON array of components from *path*.

    Raises :class:`ComponentFileError` if the file is unreadable, is not
    JSON, or does not match the schema.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise ComponentFileError(str(path), exc.strerror or str(exc)) from exc

    try:
        parsed = _COMPONENT_LIST.validate_json(raw)
    except ValidationError as exc:
        raise ComponentFileError(str(path), str(exc)) from exc

    return [c.to_component() for c in parsed]
