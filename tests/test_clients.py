from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest
import responses

from fakes import BASE_URL, payment_payload, transaction_payload
from goldpos_client_sdk import load_config
from goldpos_client_sdk.catalog import InvalidBarcodeError
from goldpos_client_sdk.models import (
    CreateTransactionRequest,
    GoldType,
    PaymentMethod,
    ProcessPaymentRequest,
    TransactionLineRequest,
    TransactionType,
)
from goldpos_client_sdk.session import ApiSession


def _session() -> ApiSession:
    return ApiSession(load_config(), token="token-1", branch_id="branch-1")


def _ok(command: str, data: object) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/commands/{command}",
        json={"success": True, "data": data, "error": None},
    )


def _body(index: int = 0) -> dict:
    return json.loads(responses.calls[index].request.body)


@responses.activate
def test_create_transaction_sends_idempotency_and_auth_headers() -> None:
    _ok("create_transaction", transaction_payload(total_amount=5_450_000))
    client = _session().transactions_client()
    request = CreateTransactionRequest(
        type=TransactionType.SALE,
        items=[TransactionLineRequest(inventory_id="inv-1", unit_price=5_450_000)],
        subtotal=5_450_000,
        total=5_450_000,
    )
    transaction = client.create_transaction(request, user_id="user-1", branch_id="branch-1", idempotency_key="idem-1")

    assert transaction.invoice_no == "INV-20260101-001"
    assert transaction.total == 5_450_000
    headers = responses.calls[0].request.headers
    assert headers["Idempotency-Key"] == "idem-1"
    assert headers["Authorization"] == "Bearer token-1"
    assert headers["X-Branch-ID"] == "branch-1"
    body = _body()
    assert body["user_id"] == "user-1"
    assert body["request"]["type"] == "sale"
    assert body["request"]["items"] == [{"inventory_id": "inv-1", "unit_price": 5_450_000, "discount": 0}]


@responses.activate
def test_create_transaction_generates_idempotency_key() -> None:
    _ok("create_transaction", transaction_payload())
    _session().transactions_client().create_transaction(
        {"type": "sale", "items": [], "subtotal": 0, "total": 0},
        user_id="user-1",
        branch_id="branch-1",
    )
    assert responses.calls[0].request.headers["Idempotency-Key"]


@responses.activate
def test_process_payment() -> None:
    _ok("process_payment", payment_payload(method="qris", amount=5_450_000))
    payment = _session().transactions_client().process_payment(
        ProcessPaymentRequest(transaction_id="trx-1", method=PaymentMethod.QRIS, amount=5_450_000)
    )
    assert payment.method is PaymentMethod.QRIS
    assert _body()["request"] == {"transaction_id": "trx-1", "method": "qris", "amount": 5_450_000}


@responses.activate
def test_void_transaction_requires_reason() -> None:
    _ok("void_transaction", True)
    client = _session().transactions_client()
    with pytest.raises(ValueError):
        client.void_transaction("trx-1", "  ")
    assert client.void_transaction("trx-1", "wrong item") is True
    assert _body() == {"transaction_id": "trx-1", "reason": "wrong item"}


@responses.activate
def test_get_transactions_with_filters() -> None:
    _ok("get_transactions", [transaction_payload(), transaction_payload("trx-2", total=100)])
    rows = _session().transactions_client().get_transactions(
        {"date_from": date(2026, 1, 1), "transaction_type": "buyback"}
    )
    assert [row.id for row in rows] == ["trx-1", "trx-2"]
    assert rows[1].total == 100
    assert _body() == {"date_from": "2026-01-01", "transaction_type": "buyback"}


@responses.activate
def test_today_snapshot_accepts_date_field() -> None:
    _ok(
        "get_today_prices",
        [{"date": "2026-01-01", "gold_type": "LM", "purity": 999, "buy_price": 950_000, "sell_price": 1_050_000}],
    )
    snapshot = _session().gold_prices_client().today_snapshot()
    assert snapshot.get_sell_price_per_gram(GoldType.LM, 999) == 1_050_000
    assert snapshot.prices[0].price_date == date(2026, 1, 1)


@responses.activate
def test_price_history_and_calculation_lookup() -> None:
    _ok("get_price_history", [])
    _ok("get_price_for_calculation", None)
    client = _session().gold_prices_client()
    with pytest.raises(ValueError):
        client.get_price_history("LM", 999, days=0)
    assert client.get_price_history("LM", 999, days=7) == []
    assert _body(0) == {"gold_type": "LM", "purity": 999, "days": 7}
    assert client.get_price_for_calculation(GoldType.UBS, 750) is None


@responses.activate
def test_set_gold_price() -> None:
    _ok("set_gold_price", {"gold_type": "UBS", "purity": 750, "buy_price": 700_000, "sell_price": 800_000})
    price = _session().gold_prices_client().set_gold_price(
        {"gold_type": "UBS", "purity": 750, "buy_price": 700_000, "sell_price": 800_000}
    )
    assert price.gold_type is GoldType.UBS
    assert _body()["request"]["sell_price"] == 800_000


@responses.activate
def test_scan_barcode() -> None:
    _ok(
        "scan_barcode",
        {
            "id": "inv-1",
            "barcode": "EM-CN-000001-9",
            "status": "available",
            "product": {"name": "Cincin", "gold_type": "LM", "gold_purity": 999, "weight_gram": "5.0"},
        },
    )
    item = _session().inventory_client().scan_barcode(" em-cn-000001-9 ")
    assert item is not None
    assert item.product.weight_gram == Decimal("5.0")
    assert _body() == {"barcode": "EM-CN-000001-9"}


@responses.activate
def test_scan_barcode_not_found() -> None:
    _ok("scan_barcode", None)
    assert _session().inventory_client().scan_barcode("EM-KL-000123-2") is None


@responses.activate
def test_scan_barcode_rejects_malformed_input_locally() -> None:
    with pytest.raises(InvalidBarcodeError):
        _session().inventory_client().scan_barcode("12345")
    assert len(responses.calls) == 0


@responses.activate
def test_get_inventory_filters_status() -> None:
    _ok("get_inventory", [{"id": "inv-1"}])
    rows = _session().inventory_client().get_inventory("available")
    assert rows[0].id == "inv-1"
    assert _body() == {"status": "available"}


@responses.activate
def test_search_customer() -> None:
    _ok("search_customer", [{"id": "cust-1", "name": "Siti"}])
    client = _session().customers_client()
    assert client.search_customer("   ") == []
    assert len(responses.calls) == 0
    assert client.search_customer(" Siti ")[0].id == "cust-1"
    assert _body() == {"query": "Siti"}


@responses.activate
def test_create_customer_drops_empty_fields() -> None:
    _ok("create_customer", {"id": "cust-9", "name": "Budi"})
    customer = _session().customers_client().create_customer({"name": "Budi", "phone": "0812"})
    assert customer.id == "cust-9"
    assert _body() == {"name": "Budi", "phone": "0812"}


def test_session_shares_one_http_client() -> None:
    session = _session()
    assert session.transactions_client().http is session.inventory_client().http
    session.clear()
    assert session.customers_client().access_token is None


@responses.activate
def test_list_commands() -> None:
    _ok("get_all_prices_for_date", [])
    _ok("get_categories", [{"id": "cat-1", "name": "Cincin"}])
    _ok("get_products", None)
    _ok("get_customers", [{"id": "cust-1", "name": "Siti", "total_transactions": 3}])
    session = _session()

    assert session.gold_prices_client().get_all_prices_for_date(date(2026, 1, 2)) == []
    assert _body(0) == {"date": "2026-01-02"}
    assert session.inventory_client().get_categories()[0].name == "Cincin"
    assert session.inventory_client().get_products() == []
    assert session.customers_client().get_customers()[0].total_transactions == 3
