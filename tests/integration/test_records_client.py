from __future__ import annotations

import json
import logging

import pytest
import responses
from responses import matchers

from ops_backend_sdk.clients.records_client import RecordsClient, parse_content_range_total
from ops_backend_sdk.config import ClientConfig
from ops_backend_sdk.exceptions import AuthError, NotFoundError, ServerError, TransportError
from ops_backend_sdk.http_client import HttpClient
from ops_backend_sdk.tracing import TRACE_HEADER, TraceContext

BASE = "https://project.example.com"


def _cfg(**overrides) -> ClientConfig:
    values = {"env_name": "test", "api_base_url": BASE, "api_key": "anon-key", "retries": 2, "retry_backoff_seconds": 0}
    values.update(overrides)
    return ClientConfig(**values)


def _client(token: str | None = "user-token", **overrides) -> RecordsClient:
    return RecordsClient(http=HttpClient(_cfg(**overrides), trace=TraceContext()), access_token=token, table="employees")


@responses.activate
def test_list_sends_order_and_auth_headers() -> None:
    responses.add(
        responses.GET,
        f"{BASE}/rest/v1/employees",
        json=[{"id": 1, "name": "Alice"}],
        match=[matchers.query_param_matcher({"select": "*", "order": "start_date.desc"})],
    )

    rows = _client().list(order_by="start_date", descending=True)

    assert rows == [{"id": 1, "name": "Alice"}]
    sent = responses.calls[0].request.headers
    assert sent["apikey"] == "anon-key"
    assert sent["Authorization"] == "Bearer user-token"
    assert sent[TRACE_HEADER]


@responses.activate
def test_anon_key_is_bearer_without_user_token() -> None:
    responses.add(responses.GET, f"{BASE}/rest/v1/employees", json=[])

    _client(token=None).list()

    assert responses.calls[0].request.headers["Authorization"] == "Bearer anon-key"


@responses.activate
def test_insert_returns_representation() -> None:
    responses.add(responses.POST, f"{BASE}/rest/v1/employees", status=201, json=[{"id": 7, "name": "Dan"}])

    created = _client().insert({"name": "Dan"})

    assert created == {"id": 7, "name": "Dan"}
    request = responses.calls[0].request
    assert request.headers["Prefer"] == "return=representation"
    assert json.loads(request.body) == {"name": "Dan"}


@responses.activate
def test_update_filters_by_id_and_raises_when_nothing_matches() -> None:
    responses.add(
        responses.PATCH,
        f"{BASE}/rest/v1/employees",
        json=[],
        match=[matchers.query_param_matcher({"id": "eq.99"})],
    )

    with pytest.raises(NotFoundError) as excinfo:
        _client().update("99", {"name": "Nobody"})

    assert excinfo.value.code == "RECORD_NOT_FOUND"


@responses.activate
def test_delete_uses_id_filter() -> None:
    responses.add(
        responses.DELETE,
        f"{BASE}/rest/v1/employees",
        status=204,
        match=[matchers.query_param_matcher({"id": "eq.3"})],
    )

    _client().delete("3")

    assert len(responses.calls) == 1


@responses.activate
def test_count_reads_content_range() -> None:
    responses.add(responses.HEAD, f"{BASE}/rest/v1/employees", headers={"Content-Range": "0-9/57"})

    assert _client().count() == 57
    assert responses.calls[0].request.headers["Prefer"] == "count=exact"


def test_parse_content_range_total() -> None:
    assert parse_content_range_total("*/0") == 0
    assert parse_content_range_total("0-24/3573") == 3573
    assert parse_content_range_total("0-24/*") == 0
    assert parse_content_range_total("garbage") == 0


@responses.activate
def test_get_is_retried_on_5xx_but_mutations_are_not() -> None:
    responses.add(responses.GET, f"{BASE}/rest/v1/employees", status=503, json={"message": "busy"})
    responses.add(responses.GET, f"{BASE}/rest/v1/employees", json=[{"id": 1}])
    responses.add(responses.DELETE, f"{BASE}/rest/v1/employees", status=503, json={"message": "busy"})

    client = _client()
    assert client.list() == [{"id": 1}]
    with pytest.raises(ServerError):
        client.delete("1")

    methods = [call.request.method for call in responses.calls]
    assert methods == ["GET", "GET", "DELETE"]


@responses.activate
def test_401_maps_to_auth_error_with_trace_id() -> None:
    responses.add(
        responses.GET,
        f"{BASE}/rest/v1/employees",
        status=401,
        json={"message": "JWT expired", "code": "PGRST301"},
        headers={"sb-request-id": "req-123"},
    )

    with pytest.raises(AuthError) as excinfo:
        _client().list()

    assert excinfo.value.trace_id == "req-123"
    assert excinfo.value.message == "JWT expired"


def test_transport_errors_are_retried_then_raised(monkeypatch) -> None:
    import requests

    attempts = []

    def _boom(self, **kwargs):
        attempts.append(kwargs["method"])
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests.Session, "request", _boom)

    with pytest.raises(TransportError) as excinfo:
        _client(retries=1).list()

    assert excinfo.value.status_code == 0
    assert attempts == ["GET", "GET"]


def test_empty_table_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        RecordsClient(http=HttpClient(_cfg()), table="")


class CaptureHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@responses.activate
def test_each_call_logs_module_operation_and_result() -> None:
    logger = logging.getLogger("ops_backend_sdk.http_client")
    previous_level = logger.level
    handler = CaptureHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    responses.add(responses.GET, f"{BASE}/rest/v1/employees", json=[], headers={TRACE_HEADER: "trace-5"})
    responses.add(responses.DELETE, f"{BASE}/rest/v1/employees", json={"message": "gone"}, status=404)

    try:
        client = _client()
        client.list()
        with pytest.raises(NotFoundError):
            client.delete("9")
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)

    assert handler.messages[0].startswith("employees.list success in ")
    assert handler.messages[0].endswith("trace_id=trace-5")
    assert handler.messages[1].startswith("employees.delete error in ")
