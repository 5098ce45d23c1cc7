from .customers_client import CustomersClient
from .gold_prices_client import GoldPricesClient
from .inventory_client import InventoryClient
from .reports_client import ReportsClient
from .sync_client import SyncClient
from .transactions_client import TransactionsClient

__all__ = [
    "CustomersClient",
    "GoldPricesClient",
    "InventoryClient",
    "ReportsClient",
    "SyncClient",
    "TransactionsClient",
]
