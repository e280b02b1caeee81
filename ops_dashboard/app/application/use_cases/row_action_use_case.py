from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ops_dashboard.app.application.mutation_attempts import MutationState, begin_mutation, end_mutation, mutation_key
from ops_dashboard.app.domain.contracts import Clipboard, RowDeleter
from ops_dashboard.app.domain.errors import NotFoundError, PersistenceError
from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.infrastructure.errors.error_mapper import ErrorMapper
from ops_dashboard.app.infrastructure.logging.logger import get_logger, log_action
from ops_dashboard.app.table_engine import TableEngine


class RowActionKind(str, Enum):
    EDIT = "edit"
    DELETE = "delete"
    COPY = "copy"


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    kind: str
    row_id: str | None
    message: str = ""
    row: Row | None = None
    trace_id: str | None = None


class RowActionUseCase:
    """Runs edit, delete and copy for a single row against the engine.

    Deletes remove the row only once the deleter returns. Nothing is retried;
    every outcome comes back as an ActionResult and is logged.
    """

    def __init__(
        self,
        engine: TableEngine,
        *,
        deleter: RowDeleter,
        clipboard: Clipboard,
        copy_field: str = "id",
        module: str = "table",
        logger: logging.Logger | None = None,
    ) -> None:
        self.engine = engine
        self.deleter = deleter
        self.clipboard = clipboard
        self.copy_field = copy_field
        self.module = module
        self.logger = logger or get_logger(__name__)
        self.mutations = MutationState()
        self.actor_role: str | None = None

    def dispatch(self, kind: RowActionKind | str, row: Row) -> ActionResult:
        action = RowActionKind(kind)
        if action is RowActionKind.DELETE:
            return self._delete(row)
        if action is RowActionKind.COPY:
            return self._copy(row)
        return self._edit(row)

    def _log(self, action: RowActionKind, row_id: str, outcome: str, trace_id: str | None = None) -> None:
        level = logging.INFO if outcome == "ok" else logging.WARNING
        log_action(self.logger, self.module, action.value, self.actor_role, row_id, trace_id, outcome, level)

    def _delete(self, row: Row) -> ActionResult:
        kind = RowActionKind.DELETE
        if not self.engine.contains(row.id):
            self._log(kind, row.id, "already_removed")
            return ActionResult(ok=True, kind=kind.value, row_id=row.id, message="Row was already removed")

        operation = mutation_key(kind.value, row.id)
        if not begin_mutation(self.mutations, operation):
            self._log(kind, row.id, "refused_in_flight")
            return ActionResult(
                ok=False,
                kind=kind.value,
                row_id=row.id,
                message="A delete for this row is already in progress",
            )
        try:
            self.deleter(row.id)
        except PersistenceError as error:
            self._log(kind, row.id, "failed", error.trace_id)
            return ActionResult(
                ok=False,
                kind=kind.value,
                row_id=row.id,
                message=ErrorMapper.to_display_message(error),
                row=row,
                trace_id=error.trace_id,
            )
        finally:
            end_mutation(self.mutations, operation)

        # The engine may have been reloaded or closed meanwhile; both make this a no-op
        self.engine.remove_row(row.id)
        self._log(kind, row.id, "ok")
        return ActionResult(ok=True, kind=kind.value, row_id=row.id, message="Deleted")

    def _copy(self, row: Row) -> ActionResult:
        kind = RowActionKind.COPY
        value = row.get(self.copy_field)
        if value is None or str(value) == "":
            self._log(kind, row.id, "missing_value")
            return ActionResult(
                ok=False,
                kind=kind.value,
                row_id=row.id,
                message=f"Row has no {self.copy_field} to copy",
            )
        if not self.clipboard.copy_text(str(value)):
            self._log(kind, row.id, "failed")
            return ActionResult(
                ok=False,
                kind=kind.value,
                row_id=row.id,
                message="Could not copy to the clipboard",
            )
        self._log(kind, row.id, "ok")
        return ActionResult(ok=True, kind=kind.value, row_id=row.id, message=f"Copied {self.copy_field}")

    def _edit(self, row: Row) -> ActionResult:
        kind = RowActionKind.EDIT
        current = self.engine.get_row(row.id)
        if current is None:
            self._log(kind, row.id, "not_found")
            return ActionResult(
                ok=False,
                kind=kind.value,
                row_id=row.id,
                message=ErrorMapper.to_display_message(NotFoundError(row.id)),
            )
        self._log(kind, row.id, "ok")
        return ActionResult(ok=True, kind=kind.value, row_id=row.id, row=current)
