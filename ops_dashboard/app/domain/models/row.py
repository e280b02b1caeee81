from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Row:
    """One record of a table view: a stable id plus read-only scalar fields."""

    id: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not str(self.id):
            raise ValueError("row id is required")
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, key: str, default: Any = None) -> Any:
        if key == "id":
            return self.id
        return self.fields.get(key, default)

    def with_fields(self, **changes: Any) -> "Row":
        changes.pop("id", None)
        return Row(id=self.id, fields={**self.fields, **changes})

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.fields}
