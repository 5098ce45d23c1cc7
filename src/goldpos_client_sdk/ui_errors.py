from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ApiError, CheckoutError, CheckoutStage

CHECKOUT_RETRY_MESSAGE = "Payment could not be completed. Please try again."

_STAGE_LABELS = {
    CheckoutStage.CREATE_TRANSACTION: "creating the transaction",
    CheckoutStage.PROCESS_PAYMENT: "recording the payment",
}


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None

    @property
    def technical_details(self) -> str | None:
        return self.details or None


def to_user_facing_error(exc: Exception) -> UserFacingError:
    if isinstance(exc, CheckoutError):
        details = f"Failed while {_STAGE_LABELS[exc.stage]}: {exc.message}"
        if exc.transaction_id:
            details = f"{details} (transaction {exc.transaction_id})"
        return UserFacingError(message=CHECKOUT_RETRY_MESSAGE, details=details, trace_id=exc.trace_id)
    if isinstance(exc, ApiError):
        details = f"{exc.code} (HTTP {exc.status_code})"
        if exc.details:
            details = f"{details}: {exc.details}"
        return UserFacingError(message=exc.message.strip() or "Request failed", details=details, trace_id=exc.trace_id)
    return UserFacingError(message=str(exc) or "Unexpected error")
