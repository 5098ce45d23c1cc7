from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .cart import AddItemOutcome, Cart
from .checkout import (
    CheckoutOrchestrator,
    CheckoutRequest,
    CheckoutResult,
    ReceiptData,
    build_sale_request,
    compute_change_due,
    resolve_payment_amount,
)
from .clients.gold_prices_client import GoldPricesClient
from .clients.inventory_client import InventoryClient
from .clients.transactions_client import TransactionsClient
from .exceptions import CheckoutInProgressError
from .models import InventoryItem, InventoryStatus, PaymentMethod
from .pricing import PriceSnapshot, price_inventory_item
from .session import ApiSession
from .telemetry import TelemetryLogger

logger = logging.getLogger(__name__)


class AddToCartStatus(str, Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    UNPRICEABLE = "unpriceable"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class AddToCartResult:
    status: AddToCartStatus
    unit_price: int | None = None


@dataclass(frozen=True)
class PosCheckoutOutcome:
    result: CheckoutResult
    receipt: ReceiptData


class PosService:
    """Drives one POS screen: its cart, today's prices and checkout."""

    def __init__(
        self,
        cart: Cart,
        transactions: TransactionsClient,
        *,
        gold_prices: GoldPricesClient | None = None,
        inventory: InventoryClient | None = None,
        prices: PriceSnapshot | None = None,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.cart = cart
        self.gold_prices = gold_prices
        self.inventory = inventory
        self.prices = prices or PriceSnapshot()
        self.orchestrator = CheckoutOrchestrator(transactions, telemetry=telemetry)
        self._checkout_in_flight = False

    @classmethod
    def from_session(cls, session: ApiSession, cart: Cart | None = None) -> "PosService":
        return cls(
            cart or Cart(max_line_quantity=session.config.max_line_quantity),
            session.transactions_client(),
            gold_prices=session.gold_prices_client(),
            inventory=session.inventory_client(),
            telemetry=TelemetryLogger.from_config(session.config),
        )

    def refresh_prices(self) -> PriceSnapshot:
        if self.gold_prices is None:
            raise RuntimeError("PosService has no gold prices client")
        self.prices = self.gold_prices.today_snapshot()
        logger.info("prices_refreshed", extra={"quote_count": len(self.prices)})
        return self.prices

    def quote_item(self, item: InventoryItem) -> int | None:
        return price_inventory_item(item, self.prices)

    def add_inventory_item(self, item: InventoryItem) -> AddToCartResult:
        if item.status is not None and item.status is not InventoryStatus.AVAILABLE:
            return AddToCartResult(status=AddToCartStatus.UNAVAILABLE)
        unit_price = self.quote_item(item)
        if unit_price is None:
            logger.info("add_to_cart_unpriceable", extra={"inventory_id": item.id})
            return AddToCartResult(status=AddToCartStatus.UNPRICEABLE)
        outcome = self.cart.add_item(item, unit_price)
        if outcome is AddItemOutcome.ALREADY_PRESENT:
            existing = self.cart.get_line(item.id)
            return AddToCartResult(
                status=AddToCartStatus.ALREADY_PRESENT,
                unit_price=existing.unit_price if existing else None,
            )
        return AddToCartResult(status=AddToCartStatus.ADDED, unit_price=unit_price)

    def scan_and_add(self, barcode: str) -> AddToCartResult | None:
        if self.inventory is None:
            raise RuntimeError("PosService has no inventory client")
        item = self.inventory.scan_barcode(barcode)
        if item is None:
            return None
        return self.add_inventory_item(item)

    def cancel_sale(self) -> None:
        self.cart.clear()

    def checkout(
        self,
        *,
        method: PaymentMethod | str,
        operator_id: str,
        branch_id: str,
        cash_tendered: int | None = None,
        reference_no: str | None = None,
        tax: int = 0,
        notes: str | None = None,
        idempotency_key: str | None = None,
    ) -> PosCheckoutOutcome:
        """Check out the cart; the cart is cleared only when both stages succeed."""
        if self._checkout_in_flight:
            raise CheckoutInProgressError("a checkout for this cart is already running")
        method = PaymentMethod(method)
        request = build_sale_request(self.cart, tax=tax, notes=notes)
        amount = resolve_payment_amount(method, request.total, cash_tendered)
        snapshot = self.cart.snapshot()

        self._checkout_in_flight = True
        try:
            result = self.orchestrator.checkout(
                CheckoutRequest(
                    transaction_request=request,
                    payment_method=method,
                    payment_amount=amount,
                    operator_id=operator_id,
                    branch_id=branch_id,
                    reference_no=reference_no,
                    idempotency_key=idempotency_key,
                )
            )
        finally:
            self._checkout_in_flight = False

        tendered = cash_tendered if method is PaymentMethod.CASH else None
        receipt = ReceiptData(
            invoice_no=result.transaction.invoice_no,
            cart=snapshot,
            payment_method=method,
            cash_tendered=tendered,
            change_due=compute_change_due(request.total, tendered) if tendered is not None else 0,
        )
        self.cart.clear()
        return PosCheckoutOutcome(result=result, receipt=receipt)
