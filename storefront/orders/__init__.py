"""
Orders: checkout and the order lifecycle.

    from storefront import orders

    checkout = orders.Checkout(session_factory)
    placed = await checkout.place_order(user_id)

    lifecycle = orders.OrderLifecycle(session_factory)
    outcome = await lifecycle.cancel_order(order_id, actor)
"""

from storefront.orders._types import (
    OrderStatus,
    PaymentStatus,
    TRANSITIONS,
    check_transition,
    OrderItem,
    order_total,
    Order,
    CancelOutcome,
)
from storefront.orders._checkout import Checkout
from storefront.orders._lifecycle import OrderLifecycle, CANCELLATION_WINDOW

__all__ = (
    # Types
    "OrderStatus",
    "PaymentStatus",
    "TRANSITIONS",
    "check_transition",
    "OrderItem",
    "order_total",
    "Order",
    "CancelOutcome",
    # Checkout
    "Checkout",
    # Lifecycle
    "OrderLifecycle",
    "CANCELLATION_WINDOW",
)
