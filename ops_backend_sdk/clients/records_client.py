from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import requests

from ..exceptions import NotFoundError
from .base import BaseClient

_CONTENT_RANGE_RE = re.compile(r"^(?:\d+-\d+|\*)/(\d+|\*)$")


@dataclass
class RecordsClient(BaseClient):
    """REST client for one table exposed by the hosted record API."""

    table: str = ""

    def __post_init__(self) -> None:
        if not self.table:
            raise ValueError("table is required")

    @property
    def _path(self) -> str:
        return f"/rest/v1/{self.table}"

    def list(
        self,
        *,
        order_by: str | None = None,
        descending: bool = False,
        columns: str = "*",
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"select": columns}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = limit
        payload = self._request(
            "GET",
            self._path,
            params=params,
            module=self.table,
            operation="list",
        )
        if isinstance(payload, list):
            return [row for row in payload if isinstance(row, dict)]
        return []

    def insert(self, fields: dict[str, Any]) -> dict[str, Any]:
        payload = self._request(
            "POST",
            self._path,
            json_body=fields,
            headers={"Prefer": "return=representation"},
            module=self.table,
            operation="insert",
        )
        return self._single(payload, operation="insert")

    def update(self, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        payload = self._request(
            "PATCH",
            self._path,
            params={"id": f"eq.{record_id}"},
            json_body=fields,
            headers={"Prefer": "return=representation"},
            module=self.table,
            operation="update",
        )
        return self._single(payload, operation="update", record_id=record_id)

    def delete(self, record_id: str) -> None:
        self._request(
            "DELETE",
            self._path,
            params={"id": f"eq.{record_id}"},
            module=self.table,
            operation="delete",
        )

    def count(self) -> int:
        captured: dict[str, str] = {}

        def _capture(response: requests.Response) -> None:
            captured["content_range"] = response.headers.get("Content-Range", "")

        self._request(
            "HEAD",
            self._path,
            params={"select": "id"},
            headers={"Prefer": "count=exact"},
            response_hook=_capture,
            module=self.table,
            operation="count",
        )
        return parse_content_range_total(captured.get("content_range", ""))

    def _single(self, payload: Any, *, operation: str, record_id: str | None = None) -> dict[str, Any]:
        if isinstance(payload, list) and payload and isinstance(payload[0], dict):
            return payload[0]
        if isinstance(payload, dict):
            return payload
        # An update matching no rows comes back as an empty representation
        raise NotFoundError(
            code="RECORD_NOT_FOUND",
            message=f"{operation} on {self.table} returned no record",
            details={"id": record_id} if record_id else None,
            trace_id=None,
            status_code=404,
            raw_payload=payload,
        )


def parse_content_range_total(header: str) -> int:
    match = _CONTENT_RANGE_RE.match(header.strip())
    if not match or match.group(1) == "*":
        return 0
    return int(match.group(1))
