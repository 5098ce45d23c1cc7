from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Mapping

from .models import GoldPrice, GoldType, InventoryItem

logger = logging.getLogger(__name__)

_ONE = Decimal("1")


class QuoteSide(str, Enum):
    SELL = "sell"
    BUY = "buy"


@dataclass(frozen=True)
class PriceQuote:
    gold_type: GoldType
    purity: int
    side: QuoteSide
    price_per_gram: int


def to_decimal(value: Decimal | float | int | str, name: str) -> Decimal:
    try:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be numeric, got {value!r}") from exc


def round_currency(value: Decimal | float | int | str) -> int:
    """Round half-up to whole currency units."""
    return int(to_decimal(value, "value").quantize(_ONE, rounding=ROUND_HALF_UP))


def _price_key(gold_type: GoldType | str, purity: int) -> tuple[GoldType, int] | None:
    try:
        return GoldType(gold_type), int(purity)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class PriceSnapshot:
    """Read-only view over one fetch of the gold price table.

    Lookups are exact on (gold type, purity); when the table has several rows
    for the same pair the first one wins.
    """

    prices: tuple[GoldPrice, ...] = ()
    _index: dict[tuple[GoldType, int], GoldPrice] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[tuple[GoldType, int], GoldPrice] = {}
        for price in self.prices:
            index.setdefault((price.gold_type, price.purity), price)
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_rows(cls, rows: Iterable[GoldPrice | Mapping[str, Any]] | None) -> "PriceSnapshot":
        if not rows:
            return cls()
        return cls(prices=tuple(row if isinstance(row, GoldPrice) else GoldPrice.model_validate(row) for row in rows))

    def __len__(self) -> int:
        return len(self.prices)

    def quote(self, gold_type: GoldType | str, purity: int, side: QuoteSide) -> PriceQuote | None:
        key = _price_key(gold_type, purity)
        row = self._index.get(key) if key else None
        if row is None:
            logger.debug("price_quote_missing", extra={"gold_type": str(gold_type), "purity": purity})
            return None
        value = row.sell_price if side is QuoteSide.SELL else row.buy_price
        return PriceQuote(gold_type=row.gold_type, purity=row.purity, side=side, price_per_gram=value)

    def get_sell_price_per_gram(self, gold_type: GoldType | str, purity: int) -> int | None:
        quote = self.quote(gold_type, purity, QuoteSide.SELL)
        return quote.price_per_gram if quote else None

    def get_buy_price_per_gram(self, gold_type: GoldType | str, purity: int) -> int | None:
        quote = self.quote(gold_type, purity, QuoteSide.BUY)
        return quote.price_per_gram if quote else None


def _material_value(weight_grams: Decimal | float | int | str, price_per_gram: Decimal | float | int | str) -> int:
    weight = to_decimal(weight_grams, "weight_grams")
    if weight < 0:
        raise ValueError("weight_grams must be >= 0")
    return round_currency(weight * to_decimal(price_per_gram, "price_per_gram"))


def _is_priceable(price_per_gram: Decimal | float | int | str | None) -> bool:
    return price_per_gram is not None and to_decimal(price_per_gram, "price_per_gram") > 0


def compute_sale_price(
    weight_grams: Decimal | float | int | str,
    price_per_gram: Decimal | float | int | str | None,
    labor_cost: int = 0,
) -> int | None:
    """Return round(weight * price per gram) + labor cost.

    ``None`` means the item cannot be priced today (no quote, or a zero quote);
    it is never folded into a price of 0.
    """
    if not _is_priceable(price_per_gram):
        return None
    if labor_cost < 0:
        raise ValueError("labor_cost must be >= 0")
    return _material_value(weight_grams, price_per_gram) + int(labor_cost)


def compute_buyback_price(
    weight_grams: Decimal | float | int | str,
    price_per_gram: Decimal | float | int | str | None,
) -> int | None:
    if not _is_priceable(price_per_gram):
        return None
    return _material_value(weight_grams, price_per_gram)


def price_inventory_item(item: InventoryItem, snapshot: PriceSnapshot | None) -> int | None:
    product = item.product
    if product is None or snapshot is None:
        return None
    price_per_gram = snapshot.get_sell_price_per_gram(product.gold_type, product.gold_purity)
    return compute_sale_price(product.weight_gram, price_per_gram, product.labor_cost)
