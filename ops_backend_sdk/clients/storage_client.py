from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from ..models import StorageObject
from .base import BaseClient

DEFAULT_LIST_LIMIT = 100


@dataclass
class StorageClient(BaseClient):
    """Object storage client bound to a single bucket."""

    bucket: str = ""

    def __post_init__(self) -> None:
        if not self.bucket:
            raise ValueError("bucket is required")

    def upload(self, path: str, content: bytes, content_type: str | None = None, *, upsert: bool = False) -> str:
        object_path = _clean_path(path)
        resolved_type = content_type or mimetypes.guess_type(object_path)[0] or "application/octet-stream"
        payload = self._request(
            "POST",
            f"/storage/v1/object/{self.bucket}/{quote(object_path)}",
            data=content,
            headers={"Content-Type": resolved_type, "x-upsert": "true" if upsert else "false"},
            module="storage",
            operation="upload",
        )
        key = payload.get("Key") if isinstance(payload, dict) else None
        # The returned key is bucket-qualified; callers work with bucket-relative paths
        if isinstance(key, str) and key.startswith(f"{self.bucket}/"):
            return key[len(self.bucket) + 1 :]
        return object_path

    def list(
        self,
        prefix: str = "",
        *,
        limit: int = DEFAULT_LIST_LIMIT,
        sort_column: str = "updated_at",
        sort_order: str = "desc",
    ) -> list[StorageObject]:
        body: dict[str, Any] = {
            "prefix": _clean_path(prefix),
            "limit": limit,
            "offset": 0,
            "sortBy": {"column": sort_column, "order": sort_order},
        }
        payload = self._request(
            "POST",
            f"/storage/v1/object/list/{self.bucket}",
            json_body=body,
            retry_mutation=True,
            module="storage",
            operation="list",
        )
        if not isinstance(payload, list):
            return []
        return [StorageObject.model_validate(item) for item in payload if isinstance(item, dict)]

    def remove(self, paths: list[str]) -> None:
        if not paths:
            return
        self._request(
            "DELETE",
            f"/storage/v1/object/{self.bucket}",
            json_body={"prefixes": [_clean_path(path) for path in paths]},
            module="storage",
            operation="remove",
        )

    def public_url(self, path: str) -> str:
        base = self.http.config.api_base_url.rstrip("/")
        return f"{base}/storage/v1/object/public/{self.bucket}/{quote(_clean_path(path))}"


def _clean_path(path: str) -> str:
    return path.strip().strip("/")
