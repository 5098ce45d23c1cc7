from __future__ import annotations

from goldpos_client_sdk.error_mapper import map_command_failure, map_error
from goldpos_client_sdk.exceptions import (
    ApiError,
    AuthError,
    CommandError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)


def test_error_mapper_classes() -> None:
    err = map_error(401, {"code": "INVALID_TOKEN", "message": "bad"}, "trace")
    assert isinstance(err, AuthError)
    assert isinstance(err, UnauthorizedError)
    assert err.trace_id == "trace"
    assert isinstance(map_error(403, {"code": "PERMISSION_DENIED"}, None), ForbiddenError)
    assert isinstance(map_error(400, {"code": "VALIDATION_ERROR"}, None), ValidationError)
    assert isinstance(map_error(422, {}, None), ValidationError)
    assert isinstance(map_error(404, {}, None), NotFoundError)
    assert isinstance(map_error(429, {}, None), RateLimitError)


def test_error_mapper_common_failures() -> None:
    conflict = map_error(409, {"code": "CONFLICT", "message": "duplicate"}, "trace-409")
    assert isinstance(conflict, ConflictError)
    assert conflict.status_code == 409
    server = map_error(502, {"code": "SERVER_ERROR", "message": "oops"}, "trace-500")
    assert isinstance(server, ServerError)
    assert "trace_id=trace-500" in str(server)
    teapot = map_error(418, None, None)
    assert type(teapot) is ApiError
    assert teapot.code == "HTTP_ERROR"
    assert teapot.message == "Request failed"


def test_error_mapper_prefers_payload_trace_and_error_text() -> None:
    err = map_error(400, {"error": "Harga emas belum diatur", "trace_id": "srv"}, "local")
    assert err.message == "Harga emas belum diatur"
    assert err.trace_id == "srv"


def test_command_failure_keeps_backend_text() -> None:
    err = map_command_failure("process_payment", {"success": False, "error": "Saldo tidak cukup"}, "t-1")
    assert isinstance(err, CommandError)
    assert err.message == "Saldo tidak cukup"
    assert err.trace_id == "t-1"
    assert err.raw_payload == {"success": False, "error": "Saldo tidak cukup"}
    fallback = map_command_failure("process_payment", {"success": False}, None)
    assert fallback.message == "Command process_payment failed"
