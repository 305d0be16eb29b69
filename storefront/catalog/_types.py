"""
Catalog types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront._types import EntityId
from storefront.db import ProductTable


@dataclass(frozen=True, slots=True)
class Product:
    id: EntityId
    title: str
    description: str
    price: int  # cents
    stock: int
    category: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: ProductTable) -> Product:
        return cls(
            id=row.id,
            title=row.title,
            description=row.description,
            price=row.price,
            stock=row.stock,
            category=row.category,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


@dataclass(frozen=True, slots=True)
class ProductDraft:
    """Fields for a new product."""

    title: str
    description: str
    price: int
    stock: int
    category: str


@dataclass(frozen=True, slots=True)
class ProductPatch:
    """Partial update; None leaves a field untouched."""

    title: str | None = None
    description: str | None = None
    price: int | None = None
    stock: int | None = None
    category: str | None = None

    def changes(self) -> dict[str, str | int]:
        return {
            name: value
            for name in ("title", "description", "price", "stock", "category")
            if (value := getattr(self, name)) is not None
        }


@dataclass(frozen=True, slots=True)
class Reservation:
    """
    Stock taken from one product by a conditional decrement.

    title and price are read in the same transaction as the decrement and are
    what the order line item freezes.
    """

    product_id: EntityId
    title: str
    price: int
    quantity: int


__all__ = (
    "Product",
    "ProductDraft",
    "ProductPatch",
    "Reservation",
)
