from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel

from ..http_client import HttpClient

M = TypeVar("M", bound=BaseModel)


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None
    branch_id: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if self.branch_id:
            headers["X-Branch-ID"] = self.branch_id
        return headers

    def _invoke(
        self,
        command: str,
        args: Mapping[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
        idempotent: bool = False,
    ) -> Any:
        merged = {**self._auth_headers(), **(headers or {})}
        return self.http.invoke(command, args, headers=merged, idempotent=idempotent)


def coerce_model(value: M | Mapping[str, Any], model_type: type[M]) -> M:
    if isinstance(value, model_type):
        return value
    return model_type.model_validate(value)


def expect_list(data: Any, command: str) -> list[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Expected {command} data to be a JSON array")
    return data


def expect_object(data: Any, command: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"Expected {command} data to be a JSON object")
    return data
