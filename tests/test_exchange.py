from __future__ import annotations

from decimal import Decimal

import pytest

from fakes import make_item
from goldpos_client_sdk.exchange import (
    BuybackBasket,
    ExchangeDirection,
    build_buyback_request,
    build_exchange_request,
    compute_exchange_difference,
    compute_new_gold_total,
    summarize_exchange,
)
from goldpos_client_sdk.models import GoldType, TransactionType
from goldpos_client_sdk.pricing import PriceSnapshot


def test_difference_sign_convention() -> None:
    assert compute_exchange_difference(3_000_000, 5_450_000) == 2_450_000
    assert compute_exchange_difference(5_450_000, 3_000_000) == -2_450_000
    assert compute_exchange_difference(4_000_000, 4_000_000) == 0


@pytest.mark.parametrize(
    ("old", "new", "direction", "amount_due"),
    [
        (3_000_000, 5_450_000, ExchangeDirection.CUSTOMER_PAYS, 2_450_000),
        (5_450_000, 3_000_000, ExchangeDirection.STORE_PAYS, 2_450_000),
        (1_000, 1_000, ExchangeDirection.EVEN, 0),
    ],
)
def test_summary_direction(old: int, new: int, direction: ExchangeDirection, amount_due: int) -> None:
    summary = summarize_exchange(old, new)
    assert summary.direction is direction
    assert summary.amount_due == amount_due


def test_buyback_basket_prices_with_buy_quote(snapshot: PriceSnapshot) -> None:
    basket = BuybackBasket()
    line = basket.add("LM", 999, "10.0", snapshot)
    assert line is not None
    assert line.total == 9_500_000
    assert line.price_per_gram == 950_000
    assert line.gold_type is GoldType.LM
    assert basket.add(GoldType.UBS, 750, "1.0", snapshot) is None
    assert basket.add(GoldType.LM, 999, "0", snapshot) is None
    assert basket.total == 9_500_000
    removed = basket.remove(0)
    assert removed == line
    assert basket.remove(5) is None
    assert basket.is_empty


def test_new_gold_total_requires_every_item_priced(snapshot: PriceSnapshot) -> None:
    priced = [make_item("inv-1"), make_item("inv-2", weight="1.0", labor_cost=0)]
    assert compute_new_gold_total(priced, snapshot) == 5_450_000 + 1_050_000
    unpriced = priced + [make_item("inv-3", gold_type=GoldType.UBS, purity=750)]
    assert compute_new_gold_total(unpriced, snapshot) is None


def test_build_buyback_request(snapshot: PriceSnapshot) -> None:
    basket = BuybackBasket()
    basket.add("LM", 750, "2.5", snapshot)
    request = build_buyback_request(basket, customer_id="cust-1")
    assert request.type is TransactionType.BUYBACK
    assert request.items == []
    assert request.total == request.subtotal == 1_900_000
    assert request.buyback_items[0].weight_gram == Decimal("2.5")
    assert request.buyback_items[0].unit_price == 1_900_000
    with pytest.raises(ValueError):
        build_buyback_request(BuybackBasket())


def test_build_exchange_request(snapshot: PriceSnapshot) -> None:
    basket = BuybackBasket()
    basket.add("LM", 999, "2", snapshot)
    request, summary = build_exchange_request(basket, [make_item("inv-1")], snapshot)
    assert request.type is TransactionType.EXCHANGE
    assert summary.old_gold_total == 1_900_000
    assert summary.new_gold_total == 5_450_000
    assert request.total == summary.difference == 3_550_000
    assert request.items[0].inventory_id == "inv-1"
    assert summary.direction is ExchangeDirection.CUSTOMER_PAYS


def test_build_exchange_request_rejects_unpriced_new_item(snapshot: PriceSnapshot) -> None:
    basket = BuybackBasket()
    basket.add("LM", 999, "2", snapshot)
    with pytest.raises(ValueError):
        build_exchange_request(basket, [make_item("inv-9", gold_type=GoldType.LOKAL, purity=375)], snapshot)


def test_exchange_rejects_the_same_piece_twice(snapshot: PriceSnapshot) -> None:
    basket = BuybackBasket()
    basket.add("LM", 999, "2", snapshot)
    item = make_item("inv-1")
    with pytest.raises(ValueError, match="inv-1"):
        build_exchange_request(basket, [item, make_item("inv-2"), item], snapshot)
    with pytest.raises(ValueError, match="inv-1"):
        compute_new_gold_total([item, item], snapshot)


def test_basket_rejects_non_numeric_weight(snapshot: PriceSnapshot) -> None:
    basket = BuybackBasket()
    with pytest.raises(ValueError, match="weight_gram"):
        basket.add("LM", 999, "two grams", snapshot)
    assert basket.is_empty
