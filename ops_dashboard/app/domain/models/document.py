from __future__ import annotations

import math
from typing import ClassVar

from ops_dashboard.app.domain.contracts import BlobMeta
from ops_dashboard.app.domain.models.base import EntityRecord

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_bytes(size: int | None) -> str:
    if not size:
        return "0 B"
    index = min(int(math.floor(math.log(size, 1024))), len(_SIZE_UNITS) - 1)
    return f"{size / 1024 ** index:.1f} {_SIZE_UNITS[index]}"


def object_path(name: str, prefix: str = "") -> str:
    folder = prefix.strip("/")
    return f"{folder}/{name}" if folder else name


def file_extension(name: str) -> str:
    if "." not in name:
        return "unknown"
    return name.rsplit(".", 1)[-1].lower()


class Document(EntityRecord):
    """A stored file listed as a table row; the object path doubles as id."""

    kind: ClassVar[str] = "document"

    file_name: str
    file_size: str
    size_bytes: int
    file_type: str
    last_modified: str | None = None
    public_url: str

    @classmethod
    def from_blob(cls, meta: BlobMeta, public_url: str, *, prefix: str = "") -> "Document":
        return cls(
            id=object_path(meta.name, prefix),
            file_name=meta.name,
            file_size=format_bytes(meta.size),
            size_bytes=meta.size or 0,
            file_type=file_extension(meta.name),
            last_modified=meta.last_modified.isoformat() if meta.last_modified else None,
            public_url=public_url,
        )
