from __future__ import annotations

from typing import Collection, Iterable


def toggle(selected: set[str], row_id: str, known_ids: Collection[str]) -> set[str]:
    if row_id not in known_ids:
        return selected
    if row_id in selected:
        selected.discard(row_id)
    else:
        selected.add(row_id)
    return selected


def toggle_all(selected: set[str], page_ids: Iterable[str], known_ids: Collection[str]) -> set[str]:
    ids = [row_id for row_id in page_ids if row_id in known_ids]
    if not ids:
        return selected
    if all(row_id in selected for row_id in ids):
        selected.difference_update(ids)
    else:
        selected.update(ids)
    return selected


def prune(selected: set[str], known_ids: Collection[str]) -> set[str]:
    selected.intersection_update(known_ids)
    return selected
