from ops_dashboard.app.domain.models.row import Row
from ops_dashboard.app.export.csv_exporter import export_current_view
from ops_dashboard.app.ui.listing_view import ColumnDef


def test_csv_exporter_writes_header_labels_and_sanitizes(tmp_path) -> None:
    out_dir = tmp_path / "exports"
    rows = [Row(id="1", fields={"name": "Alice", "access_token": "secret-1", "position": None})]
    columns = [ColumnDef("name", "Name"), ColumnDef("position", "Position"), ColumnDef("access_token", "Token")]

    path = export_current_view(module="employees", rows=rows, columns=columns, output_dir=str(out_dir), filters={"search": "ali"})

    content = path.read_text(encoding="utf-8-sig")
    assert path.name.startswith("employees_")
    assert "# module: employees" in content
    assert "# filters: {'search': 'ali'}" in content
    assert "Name,Position,Token" in content
    assert "Alice,—,—" in content
    assert "secret-1" not in content


def test_csv_exporter_uses_column_render(tmp_path) -> None:
    rows = [Row(id="1", fields={"size_bytes": 2048, "file_size": "2.0 KB"})]
    columns = [ColumnDef("file_size", "Size", accessor=lambda row: row.get("size_bytes"), render=lambda _, row: row.get("file_size"))]

    path = export_current_view(module="documents", rows=rows, columns=columns, output_dir=str(tmp_path))

    assert "2.0 KB" in path.read_text(encoding="utf-8-sig")
