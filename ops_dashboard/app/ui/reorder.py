from __future__ import annotations

from typing import Sequence

from ops_dashboard.app.domain.models.row import Row


def index_of(rows: Sequence[Row], row_id: str) -> int | None:
    for index, row in enumerate(rows):
        if row.id == row_id:
            return index
    return None


def move_row(rows: Sequence[Row], from_id: str, to_id: str) -> list[Row] | None:
    """Move the dragged row to the drop target's index.

    The row lands before the target when moving up and after it when moving
    down. Returns None when nothing moves.
    """
    if from_id == to_id:
        return None
    source = index_of(rows, from_id)
    target = index_of(rows, to_id)
    if source is None or target is None:
        return None
    moved = list(rows)
    row = moved.pop(source)
    moved.insert(target, row)
    return moved
