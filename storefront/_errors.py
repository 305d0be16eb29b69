"""
Errors: the operational failure taxonomy shared by every service.

Services never raise for expected failures. They return Error(ShopError)
and the HTTP layer maps ErrorKind to a status code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ═══════════════════════════════════════════════════════════════════════════════
# Error Kind
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorKind(Enum):
    """Closed set of expected, user-facing failures."""

    VALIDATION = "ValidationError"
    DUPLICATE_VALUE = "DuplicateValue"
    UNAUTHENTICATED = "Unauthenticated"
    ACCOUNT_BLOCKED = "AccountBlocked"
    NOT_AUTHORIZED = "NotAuthorized"

    PRODUCT_NOT_FOUND = "ProductNotFound"
    INSUFFICIENT_STOCK = "InsufficientStock"

    CART_NOT_FOUND = "CartNotFound"
    CART_ITEM_NOT_FOUND = "CartItemNotFound"
    EMPTY_CART = "EmptyCart"

    ORDER_NOT_FOUND = "OrderNotFound"
    INVALID_TRANSITION = "InvalidTransition"
    ALREADY_CANCELLED = "AlreadyCancelled"
    NOT_CANCELLABLE = "NotCancellable"
    CANCELLATION_WINDOW_EXPIRED = "CancellationWindowExpired"


@dataclass(frozen=True, slots=True)
class ShopError:
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


# ═══════════════════════════════════════════════════════════════════════════════
# Factory
# ═══════════════════════════════════════════════════════════════════════════════


class Errors:
    @staticmethod
    def validation(msg: str) -> ShopError:
        return ShopError(ErrorKind.VALIDATION, msg)

    @staticmethod
    def duplicate(field: str) -> ShopError:
        return ShopError(ErrorKind.DUPLICATE_VALUE, f"Duplicate value for: {field}")

    @staticmethod
    def unauthenticated(msg: str = "Not authorized to access this route") -> ShopError:
        return ShopError(ErrorKind.UNAUTHENTICATED, msg)

    @staticmethod
    def account_blocked(msg: str = "Account suspended due to suspicious activity") -> ShopError:
        return ShopError(ErrorKind.ACCOUNT_BLOCKED, msg)

    @staticmethod
    def not_authorized(msg: str = "Not authorized") -> ShopError:
        return ShopError(ErrorKind.NOT_AUTHORIZED, msg)

    @staticmethod
    def product_not_found(name: str | None = None) -> ShopError:
        msg = f"Product {name} not found" if name else "Product not found"
        return ShopError(ErrorKind.PRODUCT_NOT_FOUND, msg)

    @staticmethod
    def insufficient_stock(title: str, available: int) -> ShopError:
        return ShopError(
            ErrorKind.INSUFFICIENT_STOCK,
            f"Insufficient stock for {title}. Available: {available}",
        )

    @staticmethod
    def cart_exceeds_stock(in_cart: int, available: int) -> ShopError:
        if in_cart == 0:
            msg = f"Not enough stock. Only {available} left."
        else:
            msg = (
                f"Cannot add more. You already have {in_cart} in cart "
                f"and stock is {available}."
            )
        return ShopError(ErrorKind.INSUFFICIENT_STOCK, msg)

    @staticmethod
    def cart_not_found() -> ShopError:
        return ShopError(ErrorKind.CART_NOT_FOUND, "Cart not found")

    @staticmethod
    def cart_item_not_found(item_id: str) -> ShopError:
        return ShopError(ErrorKind.CART_ITEM_NOT_FOUND, f"Cart item {item_id} not found")

    @staticmethod
    def empty_cart() -> ShopError:
        return ShopError(ErrorKind.EMPTY_CART, "Cart is empty")

    @staticmethod
    def order_not_found() -> ShopError:
        return ShopError(ErrorKind.ORDER_NOT_FOUND, "Order not found")

    @staticmethod
    def invalid_transition(current: str, target: str) -> ShopError:
        return ShopError(
            ErrorKind.INVALID_TRANSITION, f"Invalid status transition: {current} -> {target}"
        )

    @staticmethod
    def already_cancelled() -> ShopError:
        return ShopError(ErrorKind.ALREADY_CANCELLED, "Order is already cancelled")

    @staticmethod
    def not_cancellable(msg: str = "Cannot cancel shipped or delivered orders") -> ShopError:
        return ShopError(ErrorKind.NOT_CANCELLABLE, msg)

    @staticmethod
    def cancellation_window_expired(minutes: int) -> ShopError:
        return ShopError(
            ErrorKind.CANCELLATION_WINDOW_EXPIRED,
            f"Orders can only be cancelled within {minutes} minutes of placement",
        )


__all__ = (
    "ErrorKind",
    "ShopError",
    "Errors",
)
