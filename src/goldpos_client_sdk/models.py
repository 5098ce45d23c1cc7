from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class GoldType(str, Enum):
    LM = "LM"
    UBS = "UBS"
    LOKAL = "Lokal"


class TransactionType(str, Enum):
    SALE = "sale"
    BUYBACK = "buyback"
    EXCHANGE = "exchange"


class PaymentMethod(str, Enum):
    CASH = "cash"
    QRIS = "qris"
    BANK_TRANSFER = "bank_transfer"


class InventoryStatus(str, Enum):
    AVAILABLE = "available"
    SOLD = "sold"
    RESERVED = "reserved"


class Category(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str | None = None


class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    category_id: str | None = None
    sku: str | None = None
    name: str
    gold_type: GoldType
    gold_purity: int
    weight_gram: Decimal
    labor_cost: int = 0
    is_active: bool | None = None
    category: Category | None = None


class InventoryItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    product_id: str | None = None
    branch_id: str | None = None
    barcode: str | None = None
    status: InventoryStatus | None = None
    location: str | None = None
    purchase_price: int | None = None
    sold_at: datetime | None = None
    product: Product | None = None


class Customer(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    phone: str | None = None
    nik: str | None = None
    address: str | None = None
    notes: str | None = None
    total_transactions: int = 0


class CreateCustomerRequest(BaseModel):
    name: str = Field(min_length=1)
    phone: str | None = None
    nik: str | None = None
    address: str | None = None
    notes: str | None = None


class GoldPrice(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    price_date: Optional[date] = Field(default=None, validation_alias=AliasChoices("date", "price_date"))
    gold_type: GoldType
    purity: int
    buy_price: int
    sell_price: int
    source: str | None = None


class SetGoldPriceRequest(BaseModel):
    gold_type: GoldType
    purity: int = Field(gt=0, le=1000)
    buy_price: int = Field(ge=0)
    sell_price: int = Field(ge=0)


class TransactionLineRequest(BaseModel):
    inventory_id: str
    unit_price: int = Field(ge=0)
    discount: int = Field(default=0, ge=0)


class BuybackItemRequest(BaseModel):
    gold_type: GoldType
    gold_purity: int
    weight_gram: Decimal = Field(gt=0)
    unit_price: int = Field(ge=0)


class CreateTransactionRequest(BaseModel):
    type: TransactionType
    customer_id: str | None = None
    items: List[TransactionLineRequest] = Field(default_factory=list)
    buyback_items: List[BuybackItemRequest] | None = None
    subtotal: int
    discount: int = Field(default=0, ge=0)
    tax: int = Field(default=0, ge=0)
    total: int
    notes: str | None = None


class ProcessPaymentRequest(BaseModel):
    transaction_id: str
    method: PaymentMethod
    amount: int = Field(ge=0)
    reference_no: str | None = None


class TransactionItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    transaction_id: str | None = None
    inventory_id: str | None = None
    quantity: int = 1
    unit_price: int | None = None
    subtotal: int | None = None
    gold_price_ref: int | None = None


class Payment(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    transaction_id: str
    method: PaymentMethod
    amount: int
    reference_no: str | None = None
    bank_name: str | None = None
    status: str | None = None
    paid_at: datetime | None = None
    created_at: datetime | None = None


class Transaction(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    invoice_no: str
    created_at: datetime
    type: TransactionType | None = None
    branch_id: str | None = None
    user_id: str | None = None
    customer_id: str | None = None
    subtotal: int | None = None
    discount: int | None = None
    tax: int | None = None
    total: int | None = Field(default=None, validation_alias=AliasChoices("total", "total_amount"))
    notes: str | None = None
    status: str | None = None
    customer: Customer | None = None
    items: List[TransactionItem] | None = None
    payments: List[Payment] | None = None


class TransactionFilters(BaseModel):
    date_from: date | None = None
    date_to: date | None = None
    transaction_type: TransactionType | None = None


class DashboardSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    today_sales: int = 0
    today_transactions: int = 0
    total_stock: int = Field(default=0, validation_alias=AliasChoices("total_stock", "available_stock"))
    total_weight: Decimal = Decimal("0")
    sales_change: float | None = None
    transactions_change: float | None = None


class SalesReportRow(BaseModel):
    model_config = ConfigDict(extra="allow")

    report_date: date = Field(validation_alias=AliasChoices("date", "report_date"))
    total_transactions: int = Field(
        default=0, validation_alias=AliasChoices("total_transactions", "transaction_count")
    )
    total_sales: int = 0
    total_buyback: int = 0
    total_exchange: int = 0
    net_sales: int | None = None


class DailySummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    report_date: date = Field(validation_alias=AliasChoices("date", "report_date"))
    sales_count: int = 0
    sales_amount: int = 0
    buyback_count: int = 0
    buyback_amount: int = 0
    exchange_count: int = 0
    exchange_amount: int = 0
    cash_received: int = 0
    qris_received: int = 0
    bank_transfer_received: int = 0
    payment_breakdown: dict[str, int] | None = None

    @property
    def total_received(self) -> int:
        return self.cash_received + self.qris_received + self.bank_transfer_received


class StockReportRow(BaseModel):
    model_config = ConfigDict(extra="allow")

    category: str
    total_items: int = 0
    available_items: int = Field(default=0, validation_alias=AliasChoices("available_items", "available"))
    sold_items: int = Field(default=0, validation_alias=AliasChoices("sold_items", "sold"))
    total_weight: Decimal = Decimal("0")
    total_value: int = 0


class SyncStatus(BaseModel):
    model_config = ConfigDict(extra="allow")

    is_connected: bool = False
    sync_enabled: bool = False
    last_sync_at: datetime | None = None
    pending_changes: int = 0
    error_message: str | None = None
