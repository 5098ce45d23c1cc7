from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class AuthError(UnauthorizedError):
    """Authentication failed or session is invalid."""


class PermissionError(ForbiddenError):
    """Operator role is not allowed to run the command."""


class ConflictError(ApiError):
    """409 or conflict-style errors, e.g. an item that is no longer available."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class CommandError(ApiError):
    """The backend answered with success=false; message is its error text."""


class CartError(ValueError):
    pass


class EmptyCartError(CartError):
    pass


class PaymentValidationError(ValueError):
    pass


class CheckoutStage(str, Enum):
    CREATE_TRANSACTION = "create_transaction"
    PROCESS_PAYMENT = "process_payment"


@dataclass
class CheckoutError(RuntimeError):
    stage: CheckoutStage
    message: str
    transaction_id: str | None = None
    idempotency_key: str | None = None
    trace_id: str | None = None

    def __str__(self) -> str:
        if self.transaction_id:
            return f"{self.stage.value} failed (transaction_id={self.transaction_id}): {self.message}"
        return f"{self.stage.value} failed: {self.message}"


class CheckoutInProgressError(RuntimeError):
    pass
