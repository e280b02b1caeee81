from __future__ import annotations

from datetime import datetime

from ops_backend_sdk.auth_store import AuthStore
from ops_backend_sdk.clients.storage_client import StorageClient
from ops_backend_sdk.exceptions import ApiError
from ops_backend_sdk.http_client import HttpClient
from ops_backend_sdk.models import StorageObject

from ops_dashboard.app.domain.contracts import BlobMeta
from ops_dashboard.app.infrastructure.errors.error_mapper import ErrorMapper
from ops_dashboard.app.infrastructure.sdk_adapter._tokens import stored_access_token


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def to_blob_meta(item: StorageObject) -> BlobMeta:
    return BlobMeta(
        name=item.name,
        size=item.size,
        last_modified=_parse_timestamp(item.updated_at or item.created_at),
        id=item.id,
    )


class BlobStoreAdapter:
    def __init__(self, http: HttpClient, bucket: str | None = None, auth_store: AuthStore | None = None) -> None:
        self.http = http
        self.bucket = bucket or http.config.storage_bucket
        self.auth_store = auth_store

    def _client(self) -> StorageClient:
        return StorageClient(http=self.http, access_token=stored_access_token(self.auth_store), bucket=self.bucket)

    def upload(self, path: str, content: bytes, content_type: str | None = None) -> str:
        try:
            return self._client().upload(path, content, content_type)
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error

    def list(self, prefix: str = "") -> list[BlobMeta]:
        try:
            return [to_blob_meta(item) for item in self._client().list(prefix)]
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error

    def remove(self, paths: list[str]) -> None:
        try:
            self._client().remove(paths)
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error

    def public_url(self, path: str) -> str:
        return self._client().public_url(path)
