from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from ops_dashboard.app.domain.errors import NotFoundError
from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.infrastructure.logging.logger import get_logger, log_action
from ops_dashboard.app.state import ViewState
from ops_dashboard.app.ui import pagination, selection
from ops_dashboard.app.ui.filters import filter_rows
from ops_dashboard.app.ui.listing_view import ColumnDef, SortKey, sort_rows
from ops_dashboard.app.ui.pagination import DEFAULT_PAGE_SIZE
from ops_dashboard.app.ui.reorder import index_of, move_row


@dataclass(frozen=True)
class TableSnapshot:
    rows: tuple[Row, ...]
    visible_rows: tuple[Row, ...]
    page_rows: tuple[Row, ...]
    page_index: int
    page_size: int
    page_count: int
    search_text: str
    type_filter: frozenset[str]
    sort: SortKey | None
    selected_ids: frozenset[str]

    @property
    def total_count(self) -> int:
        return len(self.rows)

    @property
    def filtered_count(self) -> int:
        return len(self.visible_rows)

    @property
    def page_ids(self) -> list[str]:
        return [row.id for row in self.page_rows]

    @property
    def all_page_selected(self) -> bool:
        return bool(self.page_rows) and all(row.id in self.selected_ids for row in self.page_rows)


Listener = Callable[[TableSnapshot], None]


class TableEngine:
    """In-memory table view: search, type filter, stable sort, pages, reorder and selection.

    Stored order only changes through set_rows, reorder, append_row, replace_row
    and remove_row. Filtering and sorting are derived views over it.
    Every mutating call returns the new snapshot and notifies subscribers; once
    closed, mutations are ignored and the last snapshot is returned.
    """

    def __init__(
        self,
        columns: Sequence[ColumnDef],
        *,
        search_fields: Sequence[str],
        type_field: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        module: str = "table",
        logger: logging.Logger | None = None,
    ) -> None:
        keys = [column.key for column in columns]
        if len(set(keys)) != len(keys):
            raise ValueError(f"duplicate column keys: {keys}")
        self._columns = list(columns)
        self._column_index = {column.key: column for column in columns}
        self._search_fields = tuple(search_fields)
        self._type_field = type_field
        self._module = module
        self._logger = logger or get_logger(__name__)
        self._rows: list[Row] = []
        self._state = ViewState.with_page_size(page_size)
        self._listeners: list[Listener] = []
        self._closed = False
        self._last_snapshot = self._build_snapshot()

    @property
    def columns(self) -> list[ColumnDef]:
        return list(self._columns)

    @property
    def type_field(self) -> str | None:
        return self._type_field

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def page_count(self) -> int:
        return self._last_snapshot.page_count

    @property
    def filtered_count(self) -> int:
        return self._last_snapshot.filtered_count

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()

    def snapshot(self) -> TableSnapshot:
        return self._last_snapshot

    def rows(self) -> list[Row]:
        return list(self._rows)

    def get_row(self, row_id: str) -> Row | None:
        index = index_of(self._rows, row_id)
        return self._rows[index] if index is not None else None

    def contains(self, row_id: str) -> bool:
        return index_of(self._rows, row_id) is not None

    def visible_rows(self) -> list[Row]:
        return list(self._last_snapshot.visible_rows)

    def page_rows(self) -> list[Row]:
        return list(self._last_snapshot.page_rows)

    def type_values(self) -> list[str]:
        if self._type_field is None:
            return []
        seen: dict[str, None] = {}
        for row in self._rows:
            value = row.get(self._type_field)
            if value is not None and str(value) not in seen:
                seen[str(value)] = None
        return list(seen)

    # Mutations

    def set_rows(self, rows: Iterable[Row]) -> TableSnapshot:
        if self._ignored("set_rows"):
            return self._last_snapshot
        self._rows = list(rows)
        self._state.reset_for_reload({row.id for row in self._rows})
        return self._publish()

    def set_search_text(self, text: str | None) -> TableSnapshot:
        if self._ignored("set_search_text"):
            return self._last_snapshot
        self._state.search_text = text or ""
        self._state.pagination.page_index = 0
        return self._publish()

    def set_type_filter(self, values: Iterable[str] | str) -> TableSnapshot:
        if self._ignored("set_type_filter"):
            return self._last_snapshot
        if isinstance(values, str):
            values = [values] if values else []
        self._state.type_filter = frozenset(str(value) for value in values)
        self._state.pagination.page_index = 0
        return self._publish()

    def set_sort(self, column: str, direction: str = "asc") -> TableSnapshot:
        if self._ignored("set_sort"):
            return self._last_snapshot
        definition = self._column_index.get(column)
        if definition is None:
            raise ValueError(f"unknown column '{column}'")
        if not definition.sortable:
            raise ValueError(f"column '{column}' is not sortable")
        self._state.sort = SortKey(column=column, direction=direction)
        return self._publish()

    def clear_sort(self) -> TableSnapshot:
        if self._ignored("clear_sort"):
            return self._last_snapshot
        self._state.sort = None
        return self._publish()

    def next_page(self) -> TableSnapshot:
        if self._ignored("next_page"):
            return self._last_snapshot
        pagination.next_page(self._state.pagination, self._last_snapshot.filtered_count)
        return self._publish()

    def previous_page(self) -> TableSnapshot:
        if self._ignored("previous_page"):
            return self._last_snapshot
        pagination.prev_page(self._state.pagination)
        return self._publish()

    def go_to_page(self, page_index: int) -> TableSnapshot:
        if self._ignored("go_to_page"):
            return self._last_snapshot
        pagination.goto_page(self._state.pagination, page_index, self._last_snapshot.filtered_count)
        return self._publish()

    def set_page_size(self, page_size: int) -> TableSnapshot:
        if self._ignored("set_page_size"):
            return self._last_snapshot
        pagination.resize(self._state.pagination, page_size, self._last_snapshot.filtered_count)
        return self._publish()

    def reorder(self, from_id: str, to_id: str) -> TableSnapshot:
        if self._ignored("reorder"):
            return self._last_snapshot
        moved = move_row(self._rows, from_id, to_id)
        if moved is None:
            return self._last_snapshot
        self._rows = moved
        return self._publish()

    def toggle_row_selection(self, row_id: str) -> TableSnapshot:
        if self._ignored("toggle_row_selection"):
            return self._last_snapshot
        selection.toggle(self._state.selected_ids, row_id, self._known_ids())
        return self._publish()

    def toggle_select_all_on_page(self, page_ids: Iterable[str] | None = None) -> TableSnapshot:
        if self._ignored("toggle_select_all_on_page"):
            return self._last_snapshot
        ids = self._last_snapshot.page_ids if page_ids is None else page_ids
        selection.toggle_all(self._state.selected_ids, ids, self._known_ids())
        return self._publish()

    def append_row(self, row: Row) -> TableSnapshot:
        if self._ignored("append_row"):
            return self._last_snapshot
        if self.contains(row.id):
            raise ValueError(f"row {row.id} is already present")
        self._rows.append(row)
        return self._publish()

    def replace_row(self, row: Row) -> TableSnapshot:
        if self._ignored("replace_row"):
            return self._last_snapshot
        index = index_of(self._rows, row.id)
        if index is None:
            raise NotFoundError(row.id)
        self._rows[index] = row
        return self._publish()

    def remove_row(self, row_id: str) -> TableSnapshot:
        if self._ignored("remove_row"):
            return self._last_snapshot
        index = index_of(self._rows, row_id)
        if index is None:
            return self._last_snapshot
        del self._rows[index]
        selection.prune(self._state.selected_ids, self._known_ids())
        return self._publish()

    # Internals

    def _known_ids(self) -> set[str]:
        return {row.id for row in self._rows}

    def _ignored(self, action: str) -> bool:
        if not self._closed:
            return False
        log_action(self._logger, self._module, action, None, None, None, "ignored_after_close", logging.DEBUG)
        return True

    def _visible(self) -> list[Row]:
        filtered = filter_rows(
            self._rows,
            search_text=self._state.search_text,
            search_fields=self._search_fields,
            type_field=self._type_field,
            type_filter=self._state.type_filter,
        )
        sort = self._state.sort
        if sort is None:
            return filtered
        return sort_rows(filtered, self._column_index[sort.column], sort.direction)

    def _build_snapshot(self) -> TableSnapshot:
        visible = self._visible()
        state = self._state
        # Shrinking the filtered set may leave the page index past the end
        pagination.goto_page(state.pagination, state.page_index, len(visible))
        return TableSnapshot(
            rows=tuple(self._rows),
            visible_rows=tuple(visible),
            page_rows=tuple(pagination.page_slice(visible, state.pagination)),
            page_index=state.page_index,
            page_size=state.page_size,
            page_count=pagination.page_count(len(visible), state.page_size),
            search_text=state.search_text,
            type_filter=state.type_filter,
            sort=state.sort,
            selected_ids=frozenset(state.selected_ids),
        )

    def _publish(self) -> TableSnapshot:
        self._last_snapshot = self._build_snapshot()
        for listener in list(self._listeners):
            listener(self._last_snapshot)
        return self._last_snapshot
