"""
Order types and the status state machine.

    Pending   -> Shipped, Cancelled
    Shipped   -> Delivered
    Delivered -> (terminal)
    Cancelled -> (terminal)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from kungfu import Error, Ok, Result

from storefront._errors import Errors, ShopError
from storefront._types import EntityId
from storefront.catalog import Reservation
from storefront.db import OrderTable


# ═══════════════════════════════════════════════════════════════════════════════
# Status
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"


TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def check_transition(
    current: OrderStatus, target: OrderStatus
) -> Result[OrderStatus, ShopError]:
    """Every status mutation passes through here first."""
    if target in TRANSITIONS[current]:
        return Ok(target)
    return Error(Errors.invalid_transition(current.value, target.value))


# ═══════════════════════════════════════════════════════════════════════════════
# Order
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OrderItem:
    """Line item snapshot. Never re-derived from the live product."""

    product_id: EntityId
    name: str
    price: int
    quantity: int

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    @classmethod
    def from_reservation(cls, r: Reservation) -> OrderItem:
        return cls(product_id=r.product_id, name=r.title, price=r.price, quantity=r.quantity)

    def to_document(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> OrderItem:
        return cls(
            product_id=doc["product_id"],
            name=doc["name"],
            price=int(doc["price"]),
            quantity=int(doc["quantity"]),
        )


def order_total(items: Iterable[OrderItem]) -> int:
    return sum(item.line_total for item in items)


@dataclass(frozen=True, slots=True)
class Order:
    id: EntityId
    user_id: EntityId
    items: tuple[OrderItem, ...]
    status: OrderStatus
    payment_status: PaymentStatus
    created_at: datetime
    updated_at: datetime

    @property
    def total_amount(self) -> int:
        return order_total(self.items)

    @classmethod
    def from_row(cls, row: OrderTable) -> Order:
        return cls(
            id=row.id,
            user_id=row.user_id,
            items=tuple(OrderItem.from_document(doc) for doc in row.items),
            status=OrderStatus(row.status),
            payment_status=PaymentStatus(row.payment_status),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


@dataclass(frozen=True, slots=True)
class CancelOutcome:
    order: Order
    account_suspended: bool

    @property
    def message(self) -> str:
        if self.account_suspended:
            return "Order cancelled. Account suspended due to excessive cancellations."
        return "Order cancelled successfully"


__all__ = (
    "OrderStatus",
    "PaymentStatus",
    "TRANSITIONS",
    "check_transition",
    "OrderItem",
    "order_total",
    "Order",
    "CancelOutcome",
)
