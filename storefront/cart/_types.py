"""
Cart types.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from storefront._types import EntityId


@dataclass(frozen=True, slots=True)
class CartItem:
    id: EntityId
    product_id: EntityId
    quantity: int
    price: int  # snapshot at add time
    name: str  # snapshot at add time

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price": self.price,
            "name": self.name,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> CartItem:
        return cls(
            id=doc["id"],
            product_id=doc["product_id"],
            quantity=int(doc["quantity"]),
            price=int(doc["price"]),
            name=doc["name"],
        )


def cart_total(items: Iterable[CartItem]) -> int:
    return sum(item.line_total for item in items)


@dataclass(frozen=True, slots=True)
class Cart:
    user_id: EntityId
    items: tuple[CartItem, ...] = ()

    @property
    def total_price(self) -> int:
        return cart_total(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items


__all__ = ("CartItem", "Cart", "cart_total")
