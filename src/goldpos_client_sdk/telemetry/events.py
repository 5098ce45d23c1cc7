from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

TELEMETRY_CATEGORIES = frozenset({"checkout", "pricing", "api_call_result", "error"})

# Customer identity and payment references never leave the till.
PII_CONTEXT_KEYS = frozenset(
    {
        "customer_name",
        "name",
        "phone",
        "nik",
        "address",
        "password",
        "token",
        "authorization",
        "reference_no",
    }
)


@dataclass(frozen=True)
class TelemetryEvent:
    category: str
    name: str
    action: str
    timestamp_utc: str
    trace_id: str | None = None
    duration_ms: int | None = None
    success: bool | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def pii_keys(context: Mapping[str, Any] | None) -> list[str]:
    return sorted(key for key in (context or {}) if key.lower() in PII_CONTEXT_KEYS)


def build_event(
    *,
    category: str,
    name: str,
    action: str,
    trace_id: str | None = None,
    duration_ms: int | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    context: Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    """Validate and stamp one event; raises ``ValueError`` for an unknown category or PII keys."""
    if category not in TELEMETRY_CATEGORIES:
        raise ValueError(f"Unsupported telemetry category: {category}")
    blocked = pii_keys(context)
    if blocked:
        raise ValueError(f"PII-like keys are forbidden in telemetry context: {blocked}")
    stamp = now or datetime.now(timezone.utc)
    return TelemetryEvent(
        category=category,
        name=name,
        action=action,
        timestamp_utc=stamp.isoformat(),
        trace_id=trace_id,
        duration_ms=duration_ms,
        success=success,
        error_code=error_code,
        context=dict(context) if context else None,
    )
