from __future__ import annotations

from dataclasses import dataclass

from ..catalog import validate_barcode
from ..models import Category, InventoryItem, InventoryStatus, Product
from .base import BaseClient, expect_list, expect_object


@dataclass
class InventoryClient(BaseClient):
    def get_categories(self) -> list[Category]:
        data = self._invoke("get_categories", idempotent=True)
        return [Category.model_validate(row) for row in expect_list(data, "get_categories")]

    def get_products(self) -> list[Product]:
        data = self._invoke("get_products", idempotent=True)
        return [Product.model_validate(row) for row in expect_list(data, "get_products")]

    def get_inventory(self, status: InventoryStatus | str | None = None) -> list[InventoryItem]:
        args = {"status": InventoryStatus(status).value} if status is not None else {}
        data = self._invoke("get_inventory", args, idempotent=True)
        return [InventoryItem.model_validate(row) for row in expect_list(data, "get_inventory")]

    def scan_barcode(self, barcode: str) -> InventoryItem | None:
        """Look up one inventory unit by barcode; None when nothing matches.

        Malformed barcodes raise :class:`InvalidBarcodeError` without a request.
        """
        data = self._invoke("scan_barcode", {"barcode": validate_barcode(barcode)}, idempotent=True)
        if data is None:
            return None
        return InventoryItem.model_validate(expect_object(data, "scan_barcode"))
