from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    CommandError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

_STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthError,
    403: PermissionError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or "HTTP_ERROR")
    # Command envelopes carry the text under "error", plain HTTP errors under "message".
    message = str(payload.get("message") or payload.get("error") or "Request failed")
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped = _STATUS_ERRORS.get(status_code)
    if mapped is None:
        mapped = ServerError if status_code >= 500 else ApiError
    return mapped(
        code=code,
        message=message,
        details=payload.get("details"),
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )


def map_command_failure(command: str, payload: Mapping[str, object], trace_id: str | None) -> CommandError:
    error = payload.get("error")
    message = str(error) if error else f"Command {command} failed"
    return CommandError(
        code="COMMAND_FAILED",
        message=message,
        details={"command": command},
        trace_id=trace_id,
        status_code=200,
        raw_payload=dict(payload),
    )
