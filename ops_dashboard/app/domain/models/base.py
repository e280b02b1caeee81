from __future__ import annotations

from typing import Any, ClassVar, Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from ops_dashboard.app.domain.models.row import Row


class EntityRecord(BaseModel):
    """Backend record of one entity; converted to a generic Row at ingestion."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    kind: ClassVar[str] = "record"

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        return str(value) if value is not None else value

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "EntityRecord":
        return cls.model_validate(dict(record))

    def to_row(self) -> Row:
        data = self.model_dump(mode="json", by_alias=False)
        row_id = data.pop("id")
        return Row(id=row_id, fields=data)


class EntityForm(BaseModel):
    """Editable fields of one entity, validated before any backend call."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
