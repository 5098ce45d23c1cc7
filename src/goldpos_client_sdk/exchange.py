from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Sequence

from .models import (
    BuybackItemRequest,
    CreateTransactionRequest,
    GoldType,
    InventoryItem,
    TransactionLineRequest,
    TransactionType,
)
from .pricing import PriceSnapshot, compute_buyback_price, price_inventory_item, to_decimal


class ExchangeDirection(str, Enum):
    CUSTOMER_PAYS = "customer_pays"
    STORE_PAYS = "store_pays"
    EVEN = "even"


@dataclass(frozen=True)
class ExchangeSummary:
    old_gold_total: int
    new_gold_total: int
    difference: int

    @property
    def direction(self) -> ExchangeDirection:
        if self.difference > 0:
            return ExchangeDirection.CUSTOMER_PAYS
        if self.difference < 0:
            return ExchangeDirection.STORE_PAYS
        return ExchangeDirection.EVEN

    @property
    def amount_due(self) -> int:
        return abs(self.difference)


def compute_exchange_difference(old_gold_total: int, new_gold_total: int) -> int:
    """Positive: the customer pays the difference. Negative: the store gives change."""
    return new_gold_total - old_gold_total


def summarize_exchange(old_gold_total: int, new_gold_total: int) -> ExchangeSummary:
    return ExchangeSummary(
        old_gold_total=old_gold_total,
        new_gold_total=new_gold_total,
        difference=compute_exchange_difference(old_gold_total, new_gold_total),
    )


@dataclass(frozen=True)
class BuybackLine:
    gold_type: GoldType
    purity: int
    weight_gram: Decimal
    price_per_gram: int
    total: int


@dataclass
class BuybackBasket:
    """Gold bought from a customer, priced at the buy-side quote without labor."""

    lines: list[BuybackLine] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(line.total for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def add(
        self,
        gold_type: GoldType | str,
        purity: int,
        weight_gram: Decimal | float | str,
        snapshot: PriceSnapshot,
    ) -> BuybackLine | None:
        weight = to_decimal(weight_gram, "weight_gram")
        if weight <= 0:
            return None
        price_per_gram = snapshot.get_buy_price_per_gram(gold_type, purity)
        total = compute_buyback_price(weight, price_per_gram)
        if price_per_gram is None or total is None:
            return None
        line = BuybackLine(
            gold_type=GoldType(gold_type),
            purity=purity,
            weight_gram=weight,
            price_per_gram=price_per_gram,
            total=total,
        )
        self.lines.append(line)
        return line

    def remove(self, index: int) -> BuybackLine | None:
        if 0 <= index < len(self.lines):
            return self.lines.pop(index)
        return None

    def clear(self) -> None:
        self.lines.clear()

    def to_request_items(self) -> list[BuybackItemRequest]:
        return [
            BuybackItemRequest(
                gold_type=line.gold_type,
                gold_purity=line.purity,
                weight_gram=line.weight_gram,
                unit_price=line.total,
            )
            for line in self.lines
        ]


def _reject_repeated_items(items: Sequence[InventoryItem]) -> None:
    # One inventory id is one physical piece; it cannot be sold twice in one exchange.
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"inventory item {item.id} is listed more than once")
        seen.add(item.id)


def compute_new_gold_total(items: Sequence[InventoryItem], snapshot: PriceSnapshot) -> int | None:
    _reject_repeated_items(items)
    total = 0
    for item in items:
        price = price_inventory_item(item, snapshot)
        if price is None:
            return None
        total += price
    return total


def build_buyback_request(
    basket: BuybackBasket,
    *,
    customer_id: str | None = None,
    notes: str | None = None,
) -> CreateTransactionRequest:
    if basket.is_empty:
        raise ValueError("buyback basket is empty")
    return CreateTransactionRequest(
        type=TransactionType.BUYBACK,
        customer_id=customer_id,
        items=[],
        buyback_items=basket.to_request_items(),
        subtotal=basket.total,
        total=basket.total,
        notes=notes,
    )


def build_exchange_request(
    basket: BuybackBasket,
    new_items: Sequence[InventoryItem],
    snapshot: PriceSnapshot,
    *,
    customer_id: str | None = None,
    notes: str | None = None,
) -> tuple[CreateTransactionRequest, ExchangeSummary]:
    """Build the exchange transaction and its summary.

    ``total`` on the request is the signed difference, so a negative total
    means the store pays the customer. The payment recorded for it is
    ``summary.amount_due``. Each inventory id may appear only once.
    """
    if basket.is_empty or not new_items:
        raise ValueError("an exchange needs both old gold and new items")
    _reject_repeated_items(new_items)
    lines: list[TransactionLineRequest] = []
    for item in new_items:
        price = price_inventory_item(item, snapshot)
        if price is None:
            raise ValueError(f"inventory item {item.id} has no sell price today")
        lines.append(TransactionLineRequest(inventory_id=item.id, unit_price=price))
    summary = summarize_exchange(basket.total, sum(line.unit_price for line in lines))
    request = CreateTransactionRequest(
        type=TransactionType.EXCHANGE,
        customer_id=customer_id,
        items=lines,
        buyback_items=basket.to_request_items(),
        subtotal=summary.new_gold_total,
        total=summary.difference,
        notes=notes,
    )
    return request, summary
