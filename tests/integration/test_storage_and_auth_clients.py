from __future__ import annotations

import json

import pytest
import responses

from ops_backend_sdk.auth_store import AuthStore
from ops_backend_sdk.clients.auth import AuthClient
from ops_backend_sdk.clients.storage_client import StorageClient
from ops_backend_sdk.config import ClientConfig
from ops_backend_sdk.exceptions import AuthError
from ops_backend_sdk.http_client import HttpClient
from ops_backend_sdk.models import SessionData

BASE = "https://project.example.com"


def _http() -> HttpClient:
    return HttpClient(ClientConfig(env_name="test", api_base_url=BASE, api_key="anon-key", retries=0, retry_backoff_seconds=0))


@responses.activate
def test_upload_posts_bytes_and_returns_relative_path() -> None:
    responses.add(responses.POST, f"{BASE}/storage/v1/object/uploads/hr/offer.pdf", json={"Key": "uploads/hr/offer.pdf"})

    path = StorageClient(http=_http(), bucket="uploads").upload("/hr/offer.pdf", b"%PDF")

    request = responses.calls[0].request
    assert path == "hr/offer.pdf"
    assert request.body == b"%PDF"
    assert request.headers["Content-Type"] == "application/pdf"
    assert request.headers["x-upsert"] == "false"


@responses.activate
def test_list_objects_parses_metadata() -> None:
    responses.add(
        responses.POST,
        f"{BASE}/storage/v1/object/list/uploads",
        json=[
            {"name": "hr", "id": None, "metadata": None},
            {"name": "a.txt", "id": "obj-1", "updated_at": "2024-05-01T10:00:00Z", "metadata": {"size": 10, "mimetype": "text/plain"}},
        ],
    )

    objects = StorageClient(http=_http(), bucket="uploads").list("hr")

    body = json.loads(responses.calls[0].request.body)
    assert body["prefix"] == "hr"
    assert body["sortBy"] == {"column": "updated_at", "order": "desc"}
    assert [item.size for item in objects] == [None, 10]


@responses.activate
def test_remove_sends_prefixes() -> None:
    responses.add(responses.DELETE, f"{BASE}/storage/v1/object/uploads", json=[])

    StorageClient(http=_http(), bucket="uploads").remove(["/hr/a.txt"])

    assert json.loads(responses.calls[0].request.body) == {"prefixes": ["hr/a.txt"]}


def test_public_url() -> None:
    url = StorageClient(http=_http(), bucket="uploads").public_url("hr/my file.pdf")

    assert url == f"{BASE}/storage/v1/object/public/uploads/hr/my%20file.pdf"


@responses.activate
def test_sign_in_and_get_user_read_app_role() -> None:
    responses.add(
        responses.POST,
        f"{BASE}/auth/v1/token?grant_type=password",
        json={
            "access_token": "jwt-1",
            "refresh_token": "r-1",
            "user": {"id": "u-1", "email": "a@example.com", "role": "authenticated", "user_metadata": {"role": "admin"}},
        },
    )
    responses.add(
        responses.GET,
        f"{BASE}/auth/v1/user",
        json={"id": "u-1", "email": "a@example.com", "user_metadata": {"role": "admin"}},
    )

    token = AuthClient(http=_http()).sign_in("a@example.com", "secret")
    user = AuthClient(http=_http(), access_token=token.access_token).get_user()

    assert token.user.app_role == "admin"
    assert user.app_role == "admin"
    assert responses.calls[1].request.headers["Authorization"] == "Bearer jwt-1"


def test_get_user_without_token_raises() -> None:
    with pytest.raises(AuthError) as excinfo:
        AuthClient(http=_http()).get_user()

    assert excinfo.value.code == "SESSION_MISSING"


def test_auth_store_roundtrip_and_corrupt_file(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(access_token="jwt-1", env_name="test"))

    assert store.load().access_token == "jwt-1"

    (tmp_path / "session.json").write_text("{not json")
    assert store.load() is None
    assert not (tmp_path / "session.json").exists()
