from __future__ import annotations

from dataclasses import dataclass

from .clients.customers_client import CustomersClient
from .clients.gold_prices_client import GoldPricesClient
from .clients.inventory_client import InventoryClient
from .clients.reports_client import ReportsClient
from .clients.sync_client import SyncClient
from .clients.transactions_client import TransactionsClient
from .config import ClientConfig
from .http_client import HttpClient, TraceContext


@dataclass
class ApiSession:
    """Hands out command clients that share one HTTP pool, token and branch.

    The token is obtained elsewhere; this session only forwards it.
    """

    config: ClientConfig
    token: str | None = None
    branch_id: str | None = None
    trace: TraceContext | None = None
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        self.trace = self.trace or TraceContext()
        self.branch_id = self.branch_id or self.config.branch_id
        if self.http is None:
            self.http = HttpClient(config=self.config, trace=self.trace)

    def transactions_client(self) -> TransactionsClient:
        return TransactionsClient(http=self.http, access_token=self.token, branch_id=self.branch_id)

    def gold_prices_client(self) -> GoldPricesClient:
        return GoldPricesClient(http=self.http, access_token=self.token, branch_id=self.branch_id)

    def inventory_client(self) -> InventoryClient:
        return InventoryClient(http=self.http, access_token=self.token, branch_id=self.branch_id)

    def customers_client(self) -> CustomersClient:
        return CustomersClient(http=self.http, access_token=self.token, branch_id=self.branch_id)

    def reports_client(self) -> ReportsClient:
        return ReportsClient(http=self.http, access_token=self.token, branch_id=self.branch_id)

    def sync_client(self) -> SyncClient:
        return SyncClient(http=self.http, access_token=self.token, branch_id=self.branch_id)

    def clear(self) -> None:
        self.token = None
