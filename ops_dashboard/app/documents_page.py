from __future__ import annotations

import logging

from ops_dashboard.app.application.use_cases.row_action_use_case import ActionResult, RowActionUseCase
from ops_dashboard.app.domain.contracts import BlobStore, Clipboard, SessionProvider
from ops_dashboard.app.domain.entities import DOCUMENTS, EntityDescriptor
from ops_dashboard.app.domain.errors import PersistenceError
from ops_dashboard.app.domain.models.document import Document, object_path
from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.entity_page import ListingPage
from ops_dashboard.app.session_guard import SessionGuard
from ops_dashboard.app.table_engine import TableEngine
from ops_dashboard.app.ui.pagination import DEFAULT_PAGE_SIZE


def build_document_rows(store: BlobStore, prefix: str = "") -> list[Row]:
    rows: list[Row] = []
    for meta in store.list(prefix):
        # Folder placeholders come back without a size
        if meta.size is None:
            continue
        public_url = store.public_url(object_path(meta.name, prefix))
        rows.append(Document.from_blob(meta, public_url, prefix=prefix).to_row())
    return rows


class DocumentsPage(ListingPage):
    """Files of the storage bucket listed as rows; the object path is the row id."""

    def __init__(
        self,
        store: BlobStore,
        engine: TableEngine,
        dispatcher: RowActionUseCase,
        session_guard: SessionGuard,
        sessions: SessionProvider,
        *,
        prefix: str = "",
        entity: EntityDescriptor = DOCUMENTS,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(entity, engine, dispatcher, session_guard, sessions, logger)
        self.store = store
        self.prefix = prefix

    def load(self, prefix: str | None = None) -> ActionResult:
        if prefix is not None:
            self.prefix = prefix
        if not self._require_session():
            return self._denied("load")
        try:
            rows = build_document_rows(self.store, self.prefix)
        except PersistenceError as error:
            return self._failure("load", error)
        self.engine.set_rows(rows)
        self._log("load", "ok")
        return ActionResult(ok=True, kind="load", row_id=None, message=f"Loaded {len(rows)} documents")

    def upload(self, path: str, content: bytes, content_type: str | None = None) -> ActionResult:
        try:
            stored_path = self.store.upload(path, content, content_type)
        except PersistenceError as error:
            return self._failure("upload", error, path)
        self._log("upload", "ok", stored_path)
        reloaded = self.load()
        if not reloaded.ok:
            return reloaded
        return ActionResult(ok=True, kind="upload", row_id=stored_path, message=f"Uploaded {stored_path}")


def build_documents_page(
    store: BlobStore,
    *,
    sessions: SessionProvider,
    clipboard: Clipboard,
    session_guard: SessionGuard,
    prefix: str = "",
    page_size: int = DEFAULT_PAGE_SIZE,
    logger: logging.Logger | None = None,
) -> DocumentsPage:
    entity = DOCUMENTS
    engine = TableEngine(
        entity.columns,
        search_fields=entity.search_fields,
        type_field=entity.type_field,
        page_size=page_size,
        module=entity.name,
        logger=logger,
    )

    def _remove(row_id: str) -> None:
        store.remove([row_id])

    dispatcher = RowActionUseCase(
        engine,
        deleter=_remove,
        clipboard=clipboard,
        copy_field=entity.copy_field,
        module=entity.name,
        logger=logger,
    )
    return DocumentsPage(store, engine, dispatcher, session_guard, sessions, prefix=prefix, logger=logger)
