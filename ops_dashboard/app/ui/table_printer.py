from __future__ import annotations

from typing import Sequence

from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.table_engine import TableSnapshot
from ops_dashboard.app.ui.listing_view import ColumnDef


def render_table(title: str, rows: Sequence[Row], columns: Sequence[ColumnDef], selected: frozenset[str] = frozenset()) -> str:
    lines = [f"\n{title}"]
    if not rows:
        lines.append("(no results)")
        return "\n".join(lines)

    headers = ["", "id", *(column.label for column in columns)]
    cells = [
        ["*" if row.id in selected else "", row.id, *(column.display(row) for column in columns)] for row in rows
    ]
    widths = [max(len(header), *(len(line[idx]) for line in cells)) for idx, header in enumerate(headers)]

    lines.append(" | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers)))
    lines.append("-+-".join("-" * width for width in widths))
    for line in cells:
        lines.append(" | ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(line)))
    return "\n".join(lines)


def render_footer(snapshot: TableSnapshot) -> str:
    page_label = f"{snapshot.page_index + 1}/{snapshot.page_count}" if snapshot.page_count else "0/0"
    sort = f"{snapshot.sort.column} {snapshot.sort.direction}" if snapshot.sort else "stored order"
    return (
        f"page {page_label} | {snapshot.filtered_count} of {snapshot.total_count} rows | "
        f"search='{snapshot.search_text}' | types={sorted(snapshot.type_filter)} | sort={sort} | "
        f"selected={len(snapshot.selected_ids)}"
    )


def print_snapshot(title: str, snapshot: TableSnapshot, columns: Sequence[ColumnDef]) -> None:
    print(render_table(title, snapshot.page_rows, columns, snapshot.selected_ids))
    print(render_footer(snapshot))
