import logging

from pydantic import ValidationError as PydanticValidationError

from ops_dashboard.app.domain.contracts import RecordStore
from ops_dashboard.app.domain.entities import EntityDescriptor
from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.infrastructure.logging.logger import get_logger


class LoadRowsUseCase:
    def __init__(self, store: RecordStore, entity: EntityDescriptor, logger: logging.Logger | None = None) -> None:
        self.store = store
        self.entity = entity
        self.logger = logger or get_logger(__name__)

    def execute(self) -> list[Row]:
        records = self.store.list(order_by=self.entity.order_by, descending=self.entity.descending)
        rows: list[Row] = []
        for record in records:
            try:
                rows.append(self.entity.to_row(record))
            except (PydanticValidationError, ValueError) as error:
                self.logger.warning("skipping malformed %s record id=%s: %s", self.entity.name, record.get("id"), error)
        return rows
