from __future__ import annotations

import getpass
import shlex
from pathlib import Path

from ops_backend_sdk.auth_store import AuthStore
from ops_backend_sdk.config import load_config
from ops_backend_sdk.http_client import HttpClient

from ops_dashboard.app.application.use_cases.row_action_use_case import ActionResult
from ops_dashboard.app.config import AppConfig
from ops_dashboard.app.documents_page import DocumentsPage, build_documents_page
from ops_dashboard.app.domain.entities import ENTITIES, get_entity
from ops_dashboard.app.domain.errors import NotFoundError, PersistenceError, ValidationError
from ops_dashboard.app.entity_page import EntityPage, ListingPage, build_entity_page
from ops_dashboard.app.infrastructure.clipboard import TkClipboard
from ops_dashboard.app.infrastructure.errors.error_mapper import ErrorMapper
from ops_dashboard.app.infrastructure.logging.logger import get_logger
from ops_dashboard.app.infrastructure.sdk_adapter.blob_store_adapter import BlobStoreAdapter
from ops_dashboard.app.infrastructure.sdk_adapter.record_store_adapter import RecordStoreAdapter
from ops_dashboard.app.infrastructure.sdk_adapter.session_adapter import SessionAdapter
from ops_dashboard.app.overview import collect_counts, render_overview
from ops_dashboard.app.session_guard import SessionGuard
from ops_dashboard.app.ui.table_printer import print_snapshot

HELP = """Commands:
  / <text>            search            t [a,b]         type filter (empty clears)
  o [col] [desc]      sort (empty clears)
  n | p | g <page>    next / previous / go to page     size <n>   page size
  m <from> <to>       move row          s <id> | sa     select row / page
  e <id>              edit              d <id> | ds     delete row / selected
  c <id>              copy              + k=v ...       create
  u <id> k=v ...      update            up <file> [path] upload (documents)
  x                   export CSV        r               reload
  q                   back"""


def _print_result(result: ActionResult) -> None:
    status = "ok" if result.ok else "error"
    print(f"[{status}] {result.kind} {result.row_id or ''} {result.message}".rstrip())


def _parse_fields(tokens: list[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for token in tokens:
        if "=" not in token:
            raise ValueError(f"expected key=value, got '{token}'")
        key, value = token.split("=", 1)
        fields[key.strip()] = value.strip()
    return fields


def _row_or_none(page: ListingPage, row_id: str):
    row = page.engine.get_row(row_id)
    if row is None:
        print(ErrorMapper.to_display_message(NotFoundError(row_id)))
    return row


def _run_command(page: ListingPage, command: str, args: list[str], app_config: AppConfig) -> None:
    engine = page.engine
    if command == "/":
        engine.set_search_text(" ".join(args))
    elif command == "t":
        engine.set_type_filter([value for value in ",".join(args).split(",") if value])
    elif command == "o":
        if args:
            engine.set_sort(args[0], "desc" if args[1:2] == ["desc"] else "asc")
        else:
            engine.clear_sort()
    elif command == "n":
        engine.next_page()
    elif command == "p":
        engine.previous_page()
    elif command == "g" and args:
        engine.go_to_page(int(args[0]) - 1)
    elif command == "size" and args:
        engine.set_page_size(int(args[0]))
    elif command == "m" and len(args) == 2:
        engine.reorder(args[0], args[1])
    elif command == "s" and args:
        engine.toggle_row_selection(args[0])
    elif command == "sa":
        engine.toggle_select_all_on_page()
    elif command in {"e", "d", "c"} and args:
        row = _row_or_none(page, args[0])
        if row is not None:
            action = {"e": page.edit, "d": page.delete, "c": page.copy}[command]
            result = action(row)
            _print_result(result)
            if result.row is not None and command == "e":
                print(result.row.to_dict())
    elif command == "ds":
        for result in page.delete_selected():
            _print_result(result)
    elif command == "+" and isinstance(page, EntityPage):
        _print_result(page.create(_parse_fields(args)))
    elif command == "u" and args and isinstance(page, EntityPage):
        _print_result(page.update(args[0], _parse_fields(args[1:])))
    elif command == "up" and args and isinstance(page, DocumentsPage):
        source = Path(args[0])
        _print_result(page.upload(args[1] if len(args) > 1 else source.name, source.read_bytes()))
    elif command == "x":
        print(f"Exported: {page.export_csv(app_config.export_dir)}")
    elif command == "r":
        _print_result(page.load())
    else:
        print(HELP)


def run_page(page: ListingPage, app_config: AppConfig) -> None:
    _print_result(page.load())
    while True:
        print_snapshot(page.entity.name, page.engine.snapshot(), page.entity.columns)
        raw = input(f"{page.entity.name}> ").strip()
        if not raw:
            continue
        command, *args = shlex.split(raw)
        if command == "q":
            page.engine.close()
            return
        try:
            _run_command(page, command, args, app_config)
        except ValidationError as error:
            print(ErrorMapper.to_display_message(error))
            for field, reason in error.field_errors.items():
                print(f"  {field}: {reason}")
        except (NotFoundError, PersistenceError) as error:
            print(ErrorMapper.to_display_message(error))
        except (ValueError, OSError) as error:
            print(f"Invalid command: {error}")


def _sign_in(sessions: SessionAdapter) -> bool:
    """Prompt until a sign-in succeeds; an empty email gives up."""
    while True:
        email = input("Email (empty to quit): ").strip()
        if not email:
            return False
        password = getpass.getpass("Password: ")
        try:
            session = sessions.sign_in(email, password)
        except PersistenceError as error:
            print(ErrorMapper.to_display_message(error))
            continue
        print(f"Signed in as {session.email} ({session.role or 'no role'})")
        return True


def _restore_session(sessions: SessionAdapter) -> bool:
    try:
        return sessions.current_session() is not None
    except PersistenceError as error:
        print(ErrorMapper.to_display_message(error))
        return False


def run_cli(auth_store: AuthStore | None = None) -> None:
    app_config = AppConfig.from_env()
    logger = get_logger("ops_dashboard", app_config.log_level)
    client_config = load_config()
    http = HttpClient(config=client_config)
    auth_store = auth_store or AuthStore()
    sessions = SessionAdapter(http, auth_store)
    clipboard = TkClipboard()

    def _handle_invalid_session(reason: str) -> None:
        print(f"[session] {reason}: sign in again.")

    session_guard = SessionGuard(on_invalid_session=_handle_invalid_session, allowed_roles=app_config.allowed_roles)

    if not _restore_session(sessions) and not _sign_in(sessions):
        return

    while True:
        print("\nEntities: " + ", ".join(ENTITIES) + " | overview | logout | quit")
        choice = input("open> ").strip().lower()
        if choice in {"quit", "q"}:
            return
        if choice == "logout":
            try:
                sessions.sign_out()
            except PersistenceError as error:
                print(ErrorMapper.to_display_message(error))
            return
        if choice == "overview":
            stores = {
                name: RecordStoreAdapter(http, entity.collection, auth_store=auth_store)
                for name, entity in ENTITIES.items()
            }
            try:
                print(render_overview(collect_counts(stores)))
            except PersistenceError as error:
                print(ErrorMapper.to_display_message(error))
            continue
        if choice not in ENTITIES:
            continue
        entity = get_entity(choice)
        if entity.name == "documents":
            page: ListingPage = build_documents_page(
                BlobStoreAdapter(http, auth_store=auth_store),
                sessions=sessions,
                clipboard=clipboard,
                session_guard=session_guard,
                page_size=app_config.page_size,
                logger=logger,
            )
        else:
            page = build_entity_page(
                entity,
                RecordStoreAdapter(http, entity.collection, auth_store=auth_store),
                sessions=sessions,
                clipboard=clipboard,
                session_guard=session_guard,
                page_size=app_config.page_size,
                logger=logger,
            )
        run_page(page, app_config)


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
