from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import CartError
from .models import Customer, InventoryItem

logger = logging.getLogger(__name__)


def _require_whole(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CartError(f"{name} must be a whole number, got {value!r}")
    return value


class AddItemOutcome(str, Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"


@dataclass
class CartLine:
    inventory: InventoryItem
    unit_price: int
    quantity: int = 1
    subtotal: int = 0

    def __post_init__(self) -> None:
        self.subtotal = self.unit_price * self.quantity

    @property
    def inventory_id(self) -> str:
        return self.inventory.id


@dataclass(frozen=True)
class CartSnapshot:
    lines: tuple[CartLine, ...]
    subtotal: int
    discount: int
    total: int
    customer: Customer | None = None


@dataclass
class Cart:
    """In-progress sale owned by one POS screen.

    ``subtotal`` and ``total`` are derived and recomputed after every
    mutation: ``subtotal`` is the sum of line subtotals and ``total`` is
    ``max(0, subtotal - discount)``. The discount is stored as entered even
    when it exceeds the subtotal.
    """

    max_line_quantity: int | None = None
    lines: list[CartLine] = field(default_factory=list)
    discount: int = 0
    subtotal: int = 0
    total: int = 0
    customer: Customer | None = None

    def __post_init__(self) -> None:
        self.calculate_totals()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def get_line(self, inventory_id: str) -> CartLine | None:
        for line in self.lines:
            if line.inventory_id == inventory_id:
                return line
        return None

    def contains(self, inventory_id: str) -> bool:
        return self.get_line(inventory_id) is not None

    def add_item(self, inventory: InventoryItem, unit_price: int) -> AddItemOutcome:
        if not inventory.id:
            raise CartError("inventory item must carry an id")
        unit_price = _require_whole(unit_price, "unit_price")
        if unit_price < 0:
            raise CartError(f"unit_price must be >= 0, got {unit_price}")
        # Each inventory id is one physical piece, so a second add changes nothing.
        if self.contains(inventory.id):
            logger.debug("cart_add_duplicate", extra={"inventory_id": inventory.id})
            return AddItemOutcome.ALREADY_PRESENT
        self.lines.append(CartLine(inventory=inventory, unit_price=unit_price))
        self.calculate_totals()
        return AddItemOutcome.ADDED

    def remove_item(self, inventory_id: str) -> bool:
        remaining = [line for line in self.lines if line.inventory_id != inventory_id]
        removed = len(remaining) != len(self.lines)
        self.lines = remaining
        self.calculate_totals()
        return removed

    def update_item_quantity(self, inventory_id: str, quantity: int) -> bool:
        quantity = _require_whole(quantity, "quantity")
        if quantity < 1:
            raise CartError(f"quantity must be >= 1, got {quantity}; use remove_item to drop a line")
        if self.max_line_quantity is not None and quantity > self.max_line_quantity:
            raise CartError(f"quantity must be <= {self.max_line_quantity}, got {quantity}")
        line = self.get_line(inventory_id)
        if line is None:
            return False
        line.quantity = quantity
        line.subtotal = line.unit_price * quantity
        self.calculate_totals()
        return True

    def set_discount(self, amount: int) -> None:
        amount = _require_whole(amount, "discount")
        if amount < 0:
            raise CartError(f"discount must be >= 0, got {amount}")
        self.discount = amount
        self.calculate_totals()

    def set_customer(self, customer: Customer | None) -> None:
        self.customer = customer

    def clear(self) -> None:
        self.lines = []
        self.discount = 0
        self.customer = None
        self.calculate_totals()

    def calculate_totals(self) -> None:
        self.subtotal = sum(line.subtotal for line in self.lines)
        self.total = max(0, self.subtotal - self.discount)

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(
            lines=tuple(
                CartLine(inventory=line.inventory, unit_price=line.unit_price, quantity=line.quantity)
                for line in self.lines
            ),
            subtotal=self.subtotal,
            discount=self.discount,
            total=self.total,
            customer=self.customer,
        )
