import pytest

from ops_backend_sdk.error_mapper import map_error
from ops_backend_sdk.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (401, AuthError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (406, NotFoundError),
        (400, ValidationError),
        (422, ValidationError),
        (409, ConflictError),
        (429, RateLimitError),
        (500, ServerError),
        (502, ServerError),
        (418, ApiError),
    ],
)
def test_map_error_by_status(status_code: int, expected: type) -> None:
    error = map_error(status_code, {}, "trace-x")

    assert isinstance(error, expected)
    assert error.status_code == status_code
    assert error.trace_id == "trace-x"


def test_map_error_reads_each_backend_message_shape() -> None:
    assert map_error(400, {"message": "rest"}, None).message == "rest"
    assert map_error(400, {"error_description": "auth"}, None).message == "auth"
    assert map_error(400, {"msg": "gotrue"}, None).message == "gotrue"
    assert map_error(400, {"error": "storage"}, None).message == "storage"
    assert map_error(400, {}, None).message == "Request failed"


def test_map_error_prefers_payload_trace_and_reads_hint() -> None:
    error = map_error(409, {"code": "23505", "hint": "duplicate key", "trace_id": "payload-trace"}, "header-trace")

    assert error.code == "23505"
    assert error.details == "duplicate key"
    assert error.trace_id == "payload-trace"
