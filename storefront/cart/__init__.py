"""
Cart: one mutable cart per user, cleared by checkout.

    from storefront import cart

    svc = cart.CartService(session_factory)
    result = await svc.add_item(user_id, product_id, quantity=2)
"""

from storefront.cart._types import Cart, CartItem, cart_total
from storefront.cart._service import CartService
from storefront.cart import _store as store

__all__ = (
    "Cart",
    "CartItem",
    "cart_total",
    "CartService",
    "store",
)
