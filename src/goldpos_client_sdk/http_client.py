from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_command_failure, map_error
from .exceptions import TransportError

logger = logging.getLogger(__name__)

TRACE_HEADER = "X-Trace-ID"
TRACE_HEADER_ALIASES = (TRACE_HEADER, "X-Trace-Id", "x-trace-id")
COMMAND_PREFIX = "/commands/"


@dataclass
class TraceContext:
    trace_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = str(uuid.uuid4())
        return self.trace_id

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        for key in TRACE_HEADER_ALIASES:
            trace_id = headers.get(key)
            if trace_id:
                self.trace_id = trace_id
                return

    def update_from_payload(self, payload: Mapping[str, object]) -> None:
        trace_id = payload.get("trace_id")
        if isinstance(trace_id, str) and trace_id:
            self.trace_id = trace_id


def _error_type_from_status(status_code: int) -> str:
    if status_code in {401, 403}:
        return "auth"
    if status_code in {400, 404, 422}:
        return "validation"
    if status_code == 409:
        return "conflict"
    if status_code <= 0:
        return "network"
    if status_code == 200:
        return "command"
    return "internal"


@dataclass(frozen=True)
class NormalizedError:
    code: str
    message: str
    trace_id: str | None
    type: str


@dataclass
class LastOperation:
    command: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def invoke(
        self,
        command: str,
        args: Mapping[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
        idempotent: bool = False,
    ) -> Any:
        """Run a backend command and return the ``data`` of its envelope.

        Commands answer ``{"success": bool, "data": ..., "error": str | None}``.
        A ``success`` of false raises :class:`CommandError` carrying the backend
        error text unchanged. Only idempotent commands are retried.
        """
        envelope = self._post(
            f"{COMMAND_PREFIX}{command}",
            dict(args or {}),
            headers=headers,
            retry=idempotent,
            command=command,
        )
        if not isinstance(envelope, dict) or "success" not in envelope:
            raise ValueError(f"Expected {command} response to be a command envelope")
        trace_id = self.trace.trace_id if self.trace else None
        if not envelope.get("success"):
            logger.warning("command_failed", extra={"command": command, "error": envelope.get("error")})
            raise map_command_failure(command, envelope, trace_id)
        return envelope.get("data")

    def _post(
        self,
        path: str,
        body: dict[str, Any],
        *,
        headers: dict[str, str] | None,
        retry: bool,
        command: str,
    ) -> Any:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        if self.trace is None:
            self.trace = TraceContext()
        trace_context = self.trace
        request_headers = {"Accept": "application/json", **(headers or {})}
        request_headers[TRACE_HEADER] = trace_context.ensure()
        url = self._build_url(path)

        attempts = self.config.retries + 1 if retry else 1
        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            last_attempt = attempt >= attempts - 1
            try:
                response = self.session.post(
                    url,
                    headers=request_headers,
                    json=body,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if last_attempt:
                    self._record_operation(command, started, "error", trace_context.trace_id)
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=trace_context.trace_id,
                        status_code=0,
                        raw_payload=None,
                    ) from exc
                reason: object = type(exc).__name__
            else:
                if response.status_code < 500 or last_attempt:
                    break
                reason = response.status_code
            logger.warning("request_retry", extra={"command": command, "attempt": attempt + 1, "reason": reason})
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError(f"Command {command} finished without a response")

        trace_context.update_from_headers(response.headers)
        if response.ok:
            self._record_operation(command, started, "success", trace_context.trace_id)
            if not response.content:
                return None
            return response.json()

        try:
            payload = response.json()
        except json.JSONDecodeError:
            payload = {"message": response.text}
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        trace_context.update_from_payload(payload)
        self._record_operation(command, started, "error", trace_context.trace_id)
        raise map_error(response.status_code, payload, trace_context.trace_id)

    def normalize_error(self, error: Exception) -> NormalizedError:
        if isinstance(error, TransportError):
            return NormalizedError(
                code=error.code,
                message=error.message,
                trace_id=error.trace_id,
                type="network",
            )
        status_code = int(getattr(error, "status_code", 0) or 0)
        return NormalizedError(
            code=str(getattr(error, "code", "UNKNOWN_ERROR")),
            message=str(getattr(error, "message", str(error))),
            trace_id=getattr(error, "trace_id", None),
            type=_error_type_from_status(status_code),
        )

    def _record_operation(self, command: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            command=command,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )
