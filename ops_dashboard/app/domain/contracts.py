from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol


@dataclass(frozen=True)
class BlobMeta:
    name: str
    size: int | None
    last_modified: datetime | None
    id: str | None = None


@dataclass(frozen=True)
class Session:
    user_id: str
    email: str | None
    role: str | None
    access_token: str


class RecordStore(Protocol):
    def list(self, order_by: str | None = None, descending: bool = False) -> list[dict[str, Any]]: ...

    def insert(self, fields: dict[str, Any]) -> dict[str, Any]: ...

    def update(self, record_id: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    def delete(self, record_id: str) -> None: ...

    def count(self) -> int: ...


class BlobStore(Protocol):
    def upload(self, path: str, content: bytes, content_type: str | None = None) -> str: ...

    def list(self, prefix: str = "") -> list[BlobMeta]: ...

    def remove(self, paths: list[str]) -> None: ...

    def public_url(self, path: str) -> str: ...


class SessionProvider(Protocol):
    def current_session(self) -> Session | None: ...


class Clipboard(Protocol):
    def copy_text(self, text: str) -> bool: ...


class RowDeleter(Protocol):
    """Persistence hook the row-action dispatcher calls for deletes."""

    def __call__(self, row_id: str) -> None: ...
