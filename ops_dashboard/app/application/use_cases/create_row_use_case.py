from typing import Any, Mapping

from ops_dashboard.app.domain.contracts import RecordStore
from ops_dashboard.app.domain.entities import EntityDescriptor
from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.ui.forms import parse_form


class CreateRowUseCase:
    def __init__(self, store: RecordStore, entity: EntityDescriptor) -> None:
        if entity.form is None:
            raise ValueError(f"{entity.name} has no editable form")
        self.store = store
        self.entity = entity

    def execute(self, fields: Mapping[str, Any]) -> Row:
        form = parse_form(self.entity.form, fields)
        record = self.store.insert(form.to_record())
        return self.entity.to_row(record)
