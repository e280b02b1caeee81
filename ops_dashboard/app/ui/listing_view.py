from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Sequence

from ops_dashboard.app.domain.models.row import Row

EMPTY_VALUE = "—"
SENSITIVE_KEYS = {"token", "refresh_token", "secret", "password", "access_token"}
SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    accessor: Callable[[Row], Any] | None = None
    render: Callable[[Any, Row], str] | None = None
    sortable: bool = True
    filterable: bool = False

    def value(self, row: Row) -> Any:
        if self.accessor is not None:
            return self.accessor(row)
        return row.get(self.key)

    def display(self, row: Row) -> str:
        value = self.value(row)
        if self.render is not None:
            return self.render(value, row)
        return normalize_value(value)


@dataclass(frozen=True)
class SortKey:
    column: str
    direction: str = "asc"

    def __post_init__(self) -> None:
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"sort direction must be one of {SORT_DIRECTIONS}, got {self.direction!r}")

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


def sort_rows(rows: Sequence[Row], column: ColumnDef, direction: str = "asc") -> list[Row]:
    """Stable sort by the column value; rows without a value always go last.

    Equal keys keep their input order in both directions, so descending is the
    exact reverse of ascending only for distinct keys.
    """
    present: list[Row] = []
    missing: list[Row] = []
    for row in rows:
        (missing if _is_empty(column.value(row)) else present).append(row)

    ordered = sorted(present, key=lambda row: _sort_key(column.value(row)), reverse=direction == "desc")
    return ordered + missing


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, (datetime, date)):
        return (1, value.isoformat())
    return (1, str(value).strip().lower())


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, datetime):
        return value.astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def sanitize_row(row: Row, columns: Sequence[ColumnDef]) -> dict[str, str]:
    sanitized: dict[str, str] = {}
    for column in columns:
        if any(token in column.key.lower() for token in SENSITIVE_KEYS):
            sanitized[column.key] = EMPTY_VALUE
            continue
        sanitized[column.key] = column.display(row)
    return sanitized
