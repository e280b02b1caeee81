from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ops_dashboard.app.domain.models.base import EntityForm, EntityRecord
from ops_dashboard.app.domain.models.document import Document
from ops_dashboard.app.domain.models.employee import Employee, EmployeeForm
from ops_dashboard.app.domain.models.inventory_item import InventoryItem, InventoryItemForm
from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.domain.models.student import Student, StudentForm
from ops_dashboard.app.ui.listing_view import ColumnDef


@dataclass(frozen=True)
class EntityDescriptor:
    """Everything the dashboard needs to list and edit one kind of record."""

    name: str
    collection: str
    model: type[EntityRecord]
    columns: tuple[ColumnDef, ...]
    search_fields: tuple[str, ...]
    type_field: str | None = None
    copy_field: str = "id"
    form: type[EntityForm] | None = None
    order_by: str | None = None
    descending: bool = False

    def to_row(self, record: Mapping[str, Any]) -> Row:
        return self.model.from_record(record).to_row()

    def column(self, key: str) -> ColumnDef | None:
        for column in self.columns:
            if column.key == key:
                return column
        return None


EMPLOYEES = EntityDescriptor(
    name="employees",
    collection="employees",
    model=Employee,
    form=EmployeeForm,
    columns=(
        ColumnDef("name", "Employee Name"),
        ColumnDef("position", "Position"),
        ColumnDef("arrangement", "Arrangement", filterable=True),
        ColumnDef("status", "Status"),
        ColumnDef("start_date", "Start Date"),
    ),
    search_fields=("name",),
    type_field="arrangement",
    copy_field="number",
    order_by="start_date",
    descending=True,
)

STUDENTS = EntityDescriptor(
    name="students",
    collection="students",
    model=Student,
    form=StudentForm,
    columns=(
        ColumnDef("name", "Student Name"),
        ColumnDef("number", "Student Number"),
        ColumnDef("position", "Position"),
        ColumnDef("arrangement", "Arrangement"),
        ColumnDef("seta_type", "SETA", filterable=True),
        ColumnDef("status", "Status"),
        ColumnDef("start_date", "Start Date"),
    ),
    search_fields=("name", "number"),
    type_field="seta_type",
    copy_field="number",
)

INVENTORY = EntityDescriptor(
    name="inventory",
    collection="inventory",
    model=InventoryItem,
    form=InventoryItemForm,
    columns=(
        ColumnDef("item_name", "Item Name"),
        ColumnDef("model_num", "Model Number"),
        ColumnDef("operator", "Operator"),
        ColumnDef("date", "Date"),
        ColumnDef("quantity", "Quantity"),
        ColumnDef("status", "Status", filterable=True),
    ),
    search_fields=("item_name", "model_num"),
    type_field="status",
    copy_field="model_num",
    order_by="created_at",
    descending=True,
)

DOCUMENTS = EntityDescriptor(
    name="documents",
    collection="uploads",
    model=Document,
    columns=(
        ColumnDef("file_name", "File Name"),
        ColumnDef("file_size", "Size", accessor=lambda row: row.get("size_bytes"), render=lambda _, row: row.get("file_size")),
        ColumnDef("file_type", "Type", filterable=True),
        ColumnDef("last_modified", "Last Modified"),
        ColumnDef("public_url", "URL", sortable=False),
    ),
    search_fields=("file_name",),
    type_field="file_type",
    copy_field="public_url",
)

ENTITIES: dict[str, EntityDescriptor] = {
    descriptor.name: descriptor for descriptor in (EMPLOYEES, STUDENTS, INVENTORY, DOCUMENTS)
}


def get_entity(name: str) -> EntityDescriptor:
    try:
        return ENTITIES[name]
    except KeyError as exc:
        raise ValueError(f"unknown entity '{name}'") from exc
