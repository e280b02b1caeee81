from datetime import datetime, timezone

from ops_dashboard.app.documents_page import build_document_rows
from ops_dashboard.app.domain.contracts import BlobMeta
from ops_dashboard.app.domain.models.document import file_extension, format_bytes


class FakeBlobStore:
    def __init__(self, items):
        self.items = items

    def upload(self, path, content, content_type=None):
        return path

    def list(self, prefix=""):
        return list(self.items)

    def remove(self, paths):
        return None

    def public_url(self, path):
        return f"https://cdn.example.com/{path}"


def test_format_bytes() -> None:
    assert format_bytes(0) == "0 B"
    assert format_bytes(None) == "0 B"
    assert format_bytes(512) == "512.0 B"
    assert format_bytes(2048) == "2.0 KB"
    assert format_bytes(5 * 1024 * 1024) == "5.0 MB"


def test_file_extension() -> None:
    assert file_extension("Report.PDF") == "pdf"
    assert file_extension("archive.tar.gz") == "gz"
    assert file_extension("README") == "unknown"


def test_document_rows_skip_folders_and_carry_public_url() -> None:
    modified = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    store = FakeBlobStore(
        [
            BlobMeta(name="contracts", size=None, last_modified=None),
            BlobMeta(name="offer.pdf", size=2048, last_modified=modified, id="obj-1"),
        ]
    )

    rows = build_document_rows(store, prefix="hr/")

    assert len(rows) == 1
    row = rows[0]
    assert row.id == "hr/offer.pdf"
    assert row.get("file_size") == "2.0 KB"
    assert row.get("file_type") == "pdf"
    assert row.get("public_url") == "https://cdn.example.com/hr/offer.pdf"
    assert row.get("last_modified") == modified.isoformat()
