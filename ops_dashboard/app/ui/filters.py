from __future__ import annotations

from typing import Collection, Iterable, Sequence

from ops_dashboard.app.domain.models.row import Row


def normalize_search(text: str | None) -> str:
    return (text or "").strip().lower()


def matches_search(row: Row, needle: str, fields: Sequence[str]) -> bool:
    if not needle:
        return True
    for field in fields:
        value = row.get(field)
        if value is not None and needle in str(value).lower():
            return True
    return False


def matches_type_filter(row: Row, type_field: str | None, allowed: Collection[str]) -> bool:
    if not allowed or type_field is None:
        return True
    value = row.get(type_field)
    return value is not None and str(value) in allowed


def filter_rows(
    rows: Iterable[Row],
    *,
    search_text: str | None,
    search_fields: Sequence[str],
    type_field: str | None = None,
    type_filter: Collection[str] = (),
) -> list[Row]:
    needle = normalize_search(search_text)
    return [
        row
        for row in rows
        if matches_search(row, needle, search_fields) and matches_type_filter(row, type_field, type_filter)
    ]
