from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import Sequence

from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.ui.listing_view import ColumnDef, sanitize_row


def export_current_view(
    *,
    module: str,
    rows: Sequence[Row],
    columns: Sequence[ColumnDef],
    output_dir: str = "out/exports",
    filters: dict[str, str] | None = None,
) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)

    now = datetime.now().astimezone()
    timestamp = now.strftime("%Y%m%d_%H%M%S")
    path = destination / f"{module}_{timestamp}.csv"

    headers = [column.key for column in columns]
    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        handle.write(f"# timestamp_local: {now.isoformat()}\n")
        handle.write(f"# module: {module}\n")
        handle.write(f"# filters: {filters or {}}\n")
        writer = csv.DictWriter(handle, fieldnames=headers, extrasaction="ignore")
        writer.writerow({column.key: column.label for column in columns})
        for row in rows:
            writer.writerow(sanitize_row(row, columns))

    return path
