from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter

from .cart import Cart, CartSnapshot
from .clients.transactions_client import TransactionsClient
from .exceptions import ApiError, CheckoutError, CheckoutStage, EmptyCartError, PaymentValidationError
from .idempotency import new_idempotency_key
from .models import (
    CreateTransactionRequest,
    Payment,
    PaymentMethod,
    ProcessPaymentRequest,
    Transaction,
    TransactionLineRequest,
    TransactionType,
)
from .telemetry import TelemetryLogger, build_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutRequest:
    """One checkout attempt.

    ``payment_amount`` is never negative. For an exchange where the store pays
    the customer, pay ``ExchangeSummary.amount_due``, not the signed
    ``difference``.
    """

    transaction_request: CreateTransactionRequest
    payment_method: PaymentMethod | str
    payment_amount: int
    operator_id: str
    branch_id: str
    reference_no: str | None = None
    idempotency_key: str | None = None

    def __post_init__(self) -> None:
        try:
            method = PaymentMethod(self.payment_method)
        except ValueError as exc:
            raise PaymentValidationError(f"unsupported payment method {self.payment_method!r}") from exc
        object.__setattr__(self, "payment_method", method)
        amount = self.payment_amount
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise PaymentValidationError(f"payment_amount must be a whole currency amount, got {amount!r}")
        if amount < 0:
            raise PaymentValidationError(f"payment_amount must be >= 0, got {amount}")


@dataclass(frozen=True)
class CheckoutResult:
    transaction: Transaction
    payment: Payment
    idempotency_key: str


@dataclass(frozen=True)
class ReceiptData:
    """What the receipt printer gets, exactly as the sale was rung up."""

    invoice_no: str
    cart: CartSnapshot
    payment_method: PaymentMethod
    cash_tendered: int | None
    change_due: int


def compute_change_due(total: int, tendered: int) -> int:
    return max(tendered - total, 0)


def resolve_payment_amount(method: PaymentMethod | str, total: int, cash_tendered: int | None = None) -> int:
    """Cash records what the customer handed over; other methods record the total."""
    method = PaymentMethod(method)
    if method is not PaymentMethod.CASH:
        return total
    if cash_tendered is None:
        raise PaymentValidationError("cash_tendered is required for cash payments")
    if cash_tendered < total:
        raise PaymentValidationError(f"cash_tendered {cash_tendered} does not cover total {total}")
    return cash_tendered


def build_sale_request(
    cart: Cart,
    *,
    tax: int = 0,
    notes: str | None = None,
) -> CreateTransactionRequest:
    if cart.is_empty:
        raise EmptyCartError("cannot check out an empty cart")
    return CreateTransactionRequest(
        type=TransactionType.SALE,
        customer_id=cart.customer.id if cart.customer else None,
        items=[
            TransactionLineRequest(inventory_id=line.inventory_id, unit_price=line.unit_price, discount=0)
            for line in cart.lines
        ],
        subtotal=cart.subtotal,
        discount=cart.discount,
        tax=tax,
        total=cart.total + tax,
        notes=notes,
    )


class CheckoutOrchestrator:
    """Create the transaction, then record its payment.

    The two backend writes are not atomic. A failure is raised as
    :class:`CheckoutError` naming the stage; when payment recording fails the
    error carries the id of the transaction that was already created. Nothing
    is retried or compensated here.
    """

    def __init__(self, transactions: TransactionsClient, telemetry: TelemetryLogger | None = None) -> None:
        self.transactions = transactions
        self.telemetry = telemetry

    def checkout(self, request: CheckoutRequest) -> CheckoutResult:
        idempotency_key = request.idempotency_key or new_idempotency_key()
        started = perf_counter()
        logger.info(
            "checkout_started",
            extra={
                "transaction_type": request.transaction_request.type.value,
                "payment_method": request.payment_method.value,
                "line_count": len(request.transaction_request.items),
                "idempotency_key": idempotency_key,
            },
        )

        try:
            transaction = self.transactions.create_transaction(
                request.transaction_request,
                user_id=request.operator_id,
                branch_id=request.branch_id,
                idempotency_key=idempotency_key,
            )
        except Exception as exc:
            raise self._failure(CheckoutStage.CREATE_TRANSACTION, exc, None, idempotency_key, started) from exc
        logger.info(
            "checkout_transaction_created",
            extra={"transaction_id": transaction.id, "invoice_no": transaction.invoice_no},
        )

        try:
            payment = self.transactions.process_payment(
                ProcessPaymentRequest(
                    transaction_id=transaction.id,
                    method=request.payment_method,
                    amount=request.payment_amount,
                    reference_no=request.reference_no,
                )
            )
        except Exception as exc:
            raise self._failure(CheckoutStage.PROCESS_PAYMENT, exc, transaction.id, idempotency_key, started) from exc

        duration_ms = int((perf_counter() - started) * 1000)
        logger.info(
            "checkout_completed",
            extra={"transaction_id": transaction.id, "payment_id": payment.id, "duration_ms": duration_ms},
        )
        self._emit(name="checkout_completed", success=True, duration_ms=duration_ms, transaction_id=transaction.id)
        return CheckoutResult(transaction=transaction, payment=payment, idempotency_key=idempotency_key)

    def _failure(
        self,
        stage: CheckoutStage,
        exc: Exception,
        transaction_id: str | None,
        idempotency_key: str,
        started: float,
    ) -> CheckoutError:
        message = exc.message if isinstance(exc, ApiError) else (str(exc) or type(exc).__name__)
        trace_id = exc.trace_id if isinstance(exc, ApiError) else None
        error_code = exc.code if isinstance(exc, ApiError) else type(exc).__name__
        logger.error(
            "checkout_failed",
            extra={
                "stage": stage.value,
                "transaction_id": transaction_id,
                "error_code": error_code,
                "trace_id": trace_id,
            },
        )
        self._emit(
            name="checkout_failed",
            success=False,
            duration_ms=int((perf_counter() - started) * 1000),
            transaction_id=transaction_id,
            error_code=error_code,
            trace_id=trace_id,
            stage=stage.value,
        )
        return CheckoutError(
            stage=stage,
            message=message,
            transaction_id=transaction_id,
            idempotency_key=idempotency_key,
            trace_id=trace_id,
        )

    def _emit(
        self,
        *,
        name: str,
        success: bool,
        duration_ms: int,
        transaction_id: str | None,
        error_code: str | None = None,
        trace_id: str | None = None,
        stage: str | None = None,
    ) -> None:
        if self.telemetry is None:
            return
        context = {"transaction_id": transaction_id}
        if stage:
            context["stage"] = stage
        event = build_event(
            category="checkout",
            name=name,
            action="checkout",
            trace_id=trace_id,
            duration_ms=duration_ms,
            success=success,
            error_code=error_code,
            context=context,
        )
        # The sale outcome stands even when the local event file cannot be written.
        try:
            self.telemetry.emit(event)
        except OSError as exc:
            logger.warning("telemetry_emit_failed", extra={"event": name, "reason": type(exc).__name__})
