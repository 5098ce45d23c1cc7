from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

from ..config import DEFAULT_TELEMETRY_FILE, ClientConfig, env_flag
from .events import TelemetryEvent


class TelemetryLogger:
    """Appends telemetry events to a local JSON-lines file.

    Disabled unless switched on explicitly or by ``GOLDPOS_TELEMETRY_ENABLED``.
    Write errors propagate as ``OSError``; callers decide whether an event
    matters more than the operation it describes.
    """

    def __init__(
        self,
        *,
        app_name: str = "goldpos",
        enabled: bool | None = None,
        log_file: str | Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.app_name = app_name
        self.enabled = env_flag("GOLDPOS_TELEMETRY_ENABLED", False) if enabled is None else enabled
        self.log_file = Path(log_file) if log_file else DEFAULT_TELEMETRY_FILE
        self.stream = stream

    @classmethod
    def from_config(cls, config: ClientConfig, *, app_name: str = "goldpos") -> "TelemetryLogger":
        return cls(app_name=app_name, enabled=config.telemetry_enabled, log_file=config.telemetry_file)

    def _line(self, event: TelemetryEvent) -> str:
        return json.dumps({**event.to_dict(), "app_name": self.app_name}, sort_keys=True, default=str)

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False
        line = self._line(event)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with self.log_file.open("a", encoding="utf-8") as fp:
            print(line, file=fp)
        if self.stream is not None:
            print(line, file=self.stream, flush=True)
        return True
