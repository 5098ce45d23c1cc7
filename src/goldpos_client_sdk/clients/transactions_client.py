from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..idempotency import idempotency_headers
from ..models import (
    CreateTransactionRequest,
    Payment,
    ProcessPaymentRequest,
    Transaction,
    TransactionFilters,
)
from .base import BaseClient, coerce_model, expect_list, expect_object


@dataclass
class TransactionsClient(BaseClient):
    def create_transaction(
        self,
        request: CreateTransactionRequest | Mapping[str, Any],
        user_id: str,
        branch_id: str,
        idempotency_key: str | None = None,
    ) -> Transaction:
        payload = coerce_model(request, CreateTransactionRequest)
        data = self._invoke(
            "create_transaction",
            {
                "request": payload.model_dump(mode="json", exclude_none=True),
                "user_id": user_id,
                "branch_id": branch_id,
            },
            headers=idempotency_headers(idempotency_key),
        )
        return Transaction.model_validate(expect_object(data, "create_transaction"))

    def process_payment(self, request: ProcessPaymentRequest | Mapping[str, Any]) -> Payment:
        payload = coerce_model(request, ProcessPaymentRequest)
        data = self._invoke("process_payment", {"request": payload.model_dump(mode="json", exclude_none=True)})
        return Payment.model_validate(expect_object(data, "process_payment"))

    def void_transaction(self, transaction_id: str, reason: str) -> bool:
        if not reason.strip():
            raise ValueError("reason is required to void a transaction")
        data = self._invoke("void_transaction", {"transaction_id": transaction_id, "reason": reason})
        return bool(data)

    def get_transactions(self, filters: TransactionFilters | Mapping[str, Any] | None = None) -> list[Transaction]:
        args: dict[str, Any] = {}
        if filters is not None:
            args = coerce_model(filters, TransactionFilters).model_dump(mode="json", exclude_none=True)
        data = self._invoke("get_transactions", args, idempotent=True)
        return [Transaction.model_validate(row) for row in expect_list(data, "get_transactions")]
