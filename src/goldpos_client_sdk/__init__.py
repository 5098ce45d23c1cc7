from .cart import AddItemOutcome, Cart, CartLine, CartSnapshot
from .catalog import InvalidBarcodeError, generate_barcode, gold_type_label, is_valid_barcode, purity_label
from .checkout import (
    CheckoutOrchestrator,
    CheckoutRequest,
    CheckoutResult,
    ReceiptData,
    build_sale_request,
    compute_change_due,
    resolve_payment_amount,
)
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    CartError,
    CheckoutError,
    CheckoutInProgressError,
    CheckoutStage,
    CommandError,
    EmptyCartError,
    ForbiddenError,
    NotFoundError,
    PaymentValidationError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .exchange import (
    BuybackBasket,
    BuybackLine,
    ExchangeDirection,
    ExchangeSummary,
    build_buyback_request,
    build_exchange_request,
    compute_exchange_difference,
    compute_new_gold_total,
    summarize_exchange,
)
from .http_client import HttpClient, TraceContext
from .models import (
    CreateTransactionRequest,
    DailySummary,
    DashboardSummary,
    Customer,
    GoldPrice,
    GoldType,
    InventoryItem,
    Payment,
    PaymentMethod,
    ProcessPaymentRequest,
    Product,
    SalesReportRow,
    StockReportRow,
    SyncStatus,
    Transaction,
    TransactionType,
)
from .pos_service import AddToCartResult, AddToCartStatus, PosCheckoutOutcome, PosService
from .pricing import (
    PriceQuote,
    PriceSnapshot,
    QuoteSide,
    compute_buyback_price,
    compute_sale_price,
    price_inventory_item,
    round_currency,
)
from .session import ApiSession
from .ui_errors import UserFacingError, to_user_facing_error

__version__ = "0.1.0"

__all__ = [
    "AddItemOutcome",
    "AddToCartResult",
    "AddToCartStatus",
    "ApiError",
    "ApiSession",
    "BuybackBasket",
    "BuybackLine",
    "Cart",
    "CartError",
    "CartLine",
    "CartSnapshot",
    "CheckoutError",
    "CheckoutInProgressError",
    "CheckoutOrchestrator",
    "CheckoutRequest",
    "CheckoutResult",
    "CheckoutStage",
    "ClientConfig",
    "CommandError",
    "ConfigError",
    "CreateTransactionRequest",
    "DailySummary",
    "DashboardSummary",
    "Customer",
    "EmptyCartError",
    "ExchangeDirection",
    "ExchangeSummary",
    "ForbiddenError",
    "GoldPrice",
    "GoldType",
    "HttpClient",
    "InvalidBarcodeError",
    "InventoryItem",
    "NotFoundError",
    "Payment",
    "PaymentMethod",
    "PaymentValidationError",
    "PosCheckoutOutcome",
    "PosService",
    "PriceQuote",
    "PriceSnapshot",
    "ProcessPaymentRequest",
    "Product",
    "QuoteSide",
    "ReceiptData",
    "SalesReportRow",
    "StockReportRow",
    "SyncStatus",
    "TraceContext",
    "Transaction",
    "TransactionType",
    "TransportError",
    "UnauthorizedError",
    "UserFacingError",
    "ValidationError",
    "build_buyback_request",
    "build_exchange_request",
    "build_sale_request",
    "compute_buyback_price",
    "compute_change_due",
    "compute_exchange_difference",
    "compute_new_gold_total",
    "compute_sale_price",
    "generate_barcode",
    "gold_type_label",
    "is_valid_barcode",
    "load_config",
    "price_inventory_item",
    "purity_label",
    "resolve_payment_amount",
    "round_currency",
    "summarize_exchange",
    "to_user_facing_error",
]
