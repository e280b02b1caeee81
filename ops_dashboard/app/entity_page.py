from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from ops_dashboard.app.application.use_cases.create_row_use_case import CreateRowUseCase
from ops_dashboard.app.application.use_cases.load_rows_use_case import LoadRowsUseCase
from ops_dashboard.app.application.use_cases.row_action_use_case import ActionResult, RowActionKind, RowActionUseCase
from ops_dashboard.app.application.use_cases.update_row_use_case import UpdateRowUseCase
from ops_dashboard.app.domain.contracts import Clipboard, RecordStore, Session, SessionProvider
from ops_dashboard.app.domain.entities import EntityDescriptor
from ops_dashboard.app.domain.errors import NotFoundError, PersistenceError
from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.export.csv_exporter import export_current_view
from ops_dashboard.app.infrastructure.errors.error_mapper import ErrorMapper
from ops_dashboard.app.infrastructure.logging.logger import get_logger, log_action
from ops_dashboard.app.session_guard import SessionGuard
from ops_dashboard.app.table_engine import TableEngine
from ops_dashboard.app.ui.forms import FormState, build_form_state, validate_form
from ops_dashboard.app.ui.pagination import DEFAULT_PAGE_SIZE


class ListingPage:
    """Shared wiring of one listing: session guard, engine, row actions and export."""

    def __init__(
        self,
        entity: EntityDescriptor,
        engine: TableEngine,
        dispatcher: RowActionUseCase,
        session_guard: SessionGuard,
        sessions: SessionProvider,
        logger: logging.Logger | None = None,
    ) -> None:
        self.entity = entity
        self.engine = engine
        self.dispatcher = dispatcher
        self.session_guard = session_guard
        self.sessions = sessions
        self.logger = logger or get_logger(__name__)
        self.session: Session | None = None

    @property
    def actor_role(self) -> str | None:
        return self.session.role if self.session else None

    def _log(self, action: str, outcome: str, row_id: str | None = None, trace_id: str | None = None) -> None:
        level = logging.INFO if outcome == "ok" else logging.WARNING
        log_action(self.logger, self.entity.name, action, self.actor_role, row_id, trace_id, outcome, level)

    def _failure(self, action: str, error: Exception, row_id: str | None = None) -> ActionResult:
        payload = ErrorMapper.to_payload(error)
        self._log(action, "failed", row_id, payload["trace_id"])
        return ActionResult(
            ok=False,
            kind=action,
            row_id=row_id,
            message=ErrorMapper.to_display_message(error),
            trace_id=payload["trace_id"],
        )

    def _require_session(self) -> bool:
        try:
            self.session = self.session_guard.require_session(self.sessions, self.entity.name)
        except PersistenceError as error:
            self.session = None
            self._failure("session", error)
            return False
        self.dispatcher.actor_role = self.actor_role
        return self.session is not None

    def _denied(self, action: str) -> ActionResult:
        self._log(action, "denied")
        return ActionResult(ok=False, kind=action, row_id=None, message="Sign in with an allowed role to continue")

    def delete(self, row: Row) -> ActionResult:
        return self.dispatcher.dispatch(RowActionKind.DELETE, row)

    def copy(self, row: Row) -> ActionResult:
        return self.dispatcher.dispatch(RowActionKind.COPY, row)

    def edit(self, row: Row) -> ActionResult:
        return self.dispatcher.dispatch(RowActionKind.EDIT, row)

    def delete_selected(self) -> list[ActionResult]:
        selected = self.engine.snapshot().selected_ids
        results: list[ActionResult] = []
        for row in self.engine.rows():
            if row.id in selected:
                results.append(self.delete(row))
        return results

    def export_csv(self, output_dir: str | Path) -> Path:
        snapshot = self.engine.snapshot()
        filters = {"search": snapshot.search_text, "type": ",".join(sorted(snapshot.type_filter))}
        if snapshot.sort is not None:
            filters["sort"] = f"{snapshot.sort.column}.{snapshot.sort.direction}"
        path = export_current_view(
            module=self.entity.name,
            rows=self.engine.visible_rows(),
            columns=self.entity.columns,
            output_dir=str(output_dir),
            filters=filters,
        )
        self._log("export_csv", "ok")
        return path


class EntityPage(ListingPage):
    """Listing page of one record-store backed entity."""

    def __init__(
        self,
        entity: EntityDescriptor,
        store: RecordStore,
        engine: TableEngine,
        dispatcher: RowActionUseCase,
        session_guard: SessionGuard,
        sessions: SessionProvider,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(entity, engine, dispatcher, session_guard, sessions, logger)
        self.store = store

    def load(self) -> ActionResult:
        if not self._require_session():
            return self._denied("load")
        try:
            rows = LoadRowsUseCase(self.store, self.entity, self.logger).execute()
        except PersistenceError as error:
            return self._failure("load", error)
        self.engine.set_rows(rows)
        self._log("load", "ok")
        return ActionResult(ok=True, kind="load", row_id=None, message=f"Loaded {len(rows)} {self.entity.name}")

    def preview_form(self, fields: Mapping[str, Any]) -> FormState:
        if self.entity.form is None:
            raise ValueError(f"{self.entity.name} has no editable form")
        return build_form_state(validate_form(self.entity.form, fields))

    def create(self, fields: Mapping[str, Any]) -> ActionResult:
        """Validate, insert and append the new row; invalid fields raise ValidationError."""
        try:
            row = CreateRowUseCase(self.store, self.entity).execute(fields)
        except PersistenceError as error:
            return self._failure("create", error)
        if self.engine.contains(row.id):
            self.engine.replace_row(row)
        else:
            self.engine.append_row(row)
        self._log("create", "ok", row.id)
        return ActionResult(ok=True, kind="create", row_id=row.id, message="Created", row=row)

    def update(self, row_id: str, fields: Mapping[str, Any]) -> ActionResult:
        """Validate and persist changes to a row still listed; raises NotFoundError otherwise."""
        if not self.engine.contains(row_id):
            raise NotFoundError(row_id)
        try:
            row = UpdateRowUseCase(self.store, self.entity).execute(row_id, fields)
        except PersistenceError as error:
            return self._failure("update", error, row_id)
        if self.engine.contains(row.id):
            self.engine.replace_row(row)
        self._log("update", "ok", row.id)
        return ActionResult(ok=True, kind="update", row_id=row.id, message="Updated", row=row)


def build_entity_page(
    entity: EntityDescriptor,
    store: RecordStore,
    *,
    sessions: SessionProvider,
    clipboard: Clipboard,
    session_guard: SessionGuard,
    page_size: int = DEFAULT_PAGE_SIZE,
    logger: logging.Logger | None = None,
) -> EntityPage:
    engine = TableEngine(
        entity.columns,
        search_fields=entity.search_fields,
        type_field=entity.type_field,
        page_size=page_size,
        module=entity.name,
        logger=logger,
    )
    dispatcher = RowActionUseCase(
        engine,
        deleter=store.delete,
        clipboard=clipboard,
        copy_field=entity.copy_field,
        module=entity.name,
        logger=logger,
    )
    return EntityPage(entity, store, engine, dispatcher, session_guard, sessions, logger)
