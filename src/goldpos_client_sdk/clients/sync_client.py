from __future__ import annotations

from dataclasses import dataclass

from ..models import SyncStatus
from .base import BaseClient, expect_object


@dataclass
class SyncClient(BaseClient):
    # Status only; running a sync belongs to the backend.
    def get_sync_status(self) -> SyncStatus:
        data = self._invoke("get_sync_status", idempotent=True)
        return SyncStatus.model_validate(expect_object(data, "get_sync_status"))
