from __future__ import annotations

from typing import Any

from ops_backend_sdk.auth_store import AuthStore
from ops_backend_sdk.clients.records_client import RecordsClient
from ops_backend_sdk.exceptions import ApiError
from ops_backend_sdk.http_client import HttpClient

from ops_dashboard.app.infrastructure.errors.error_mapper import ErrorMapper
from ops_dashboard.app.infrastructure.sdk_adapter._tokens import stored_access_token


class RecordStoreAdapter:
    """RecordStore over one backend table; SDK failures surface as PersistenceError."""

    def __init__(self, http: HttpClient, table: str, auth_store: AuthStore | None = None) -> None:
        self.http = http
        self.table = table
        self.auth_store = auth_store

    def _client(self) -> RecordsClient:
        return RecordsClient(http=self.http, access_token=stored_access_token(self.auth_store), table=self.table)

    def list(self, order_by: str | None = None, descending: bool = False) -> list[dict[str, Any]]:
        try:
            return self._client().list(order_by=order_by, descending=descending)
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error

    def insert(self, fields: dict[str, Any]) -> dict[str, Any]:
        try:
            return self._client().insert(fields)
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error

    def update(self, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        try:
            return self._client().update(record_id, fields)
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error

    def delete(self, record_id: str) -> None:
        try:
            self._client().delete(record_id)
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error

    def count(self) -> int:
        try:
            return self._client().count()
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error
