"""Cart routes. Every route acts on the caller's own cart."""

from __future__ import annotations

from fastapi import APIRouter

from storefront.api._deps import AppServices, CurrentUser
from storefront.api._errors import unwrap
from storefront.api._schemas import CartEnvelope, CartItemIn, CartQuantityIn

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartEnvelope)
async def get_cart(actor: CurrentUser, svc: AppServices) -> CartEnvelope:
    return CartEnvelope.from_domain(await unwrap(svc.cart.get_cart(actor.user_id)))


@router.post("", response_model=CartEnvelope)
async def add_item(body: CartItemIn, actor: CurrentUser, svc: AppServices) -> CartEnvelope:
    cart = await unwrap(svc.cart.add_item(actor.user_id, body.product_id, body.quantity))
    return CartEnvelope.from_domain(cart)


@router.patch("/{item_id}", response_model=CartEnvelope)
async def set_quantity(
    item_id: str, body: CartQuantityIn, actor: CurrentUser, svc: AppServices
) -> CartEnvelope:
    cart = await unwrap(svc.cart.set_quantity(actor.user_id, item_id, body.quantity))
    return CartEnvelope.from_domain(cart)


@router.delete("/{item_id}", response_model=CartEnvelope)
async def remove_item(item_id: str, actor: CurrentUser, svc: AppServices) -> CartEnvelope:
    return CartEnvelope.from_domain(await unwrap(svc.cart.remove_item(actor.user_id, item_id)))


__all__ = ("router",)
