"""
Order routes.

    POST /orders               customer checkout
    GET  /orders               caller's orders, newest first
    GET  /orders/{id}          owner or admin
    PUT  /orders/{id}/cancel   owner or admin
    PUT  /orders/{id}/status   admin
"""

from __future__ import annotations

from fastapi import APIRouter

from storefront.api._deps import AdminUser, AppServices, CurrentUser, CustomerUser
from storefront.api._errors import unwrap
from storefront.api._schemas import (
    CancelEnvelope,
    OrderEnvelope,
    OrderListEnvelope,
    OrderStatusIn,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderEnvelope, status_code=201)
async def place_order(actor: CustomerUser, svc: AppServices) -> OrderEnvelope:
    return OrderEnvelope.from_domain(await unwrap(svc.checkout.place_order(actor.user_id)))


@router.get("", response_model=OrderListEnvelope)
async def list_orders(actor: CurrentUser, svc: AppServices) -> OrderListEnvelope:
    return OrderListEnvelope.from_domain(await unwrap(svc.orders.list_orders(actor.user_id)))


@router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(order_id: str, actor: CurrentUser, svc: AppServices) -> OrderEnvelope:
    return OrderEnvelope.from_domain(await unwrap(svc.orders.get_order(order_id, actor)))


@router.put("/{order_id}/cancel", response_model=CancelEnvelope)
async def cancel_order(order_id: str, actor: CurrentUser, svc: AppServices) -> CancelEnvelope:
    return CancelEnvelope.from_domain(await unwrap(svc.orders.cancel_order(order_id, actor)))


@router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_status(
    order_id: str, body: OrderStatusIn, actor: AdminUser, svc: AppServices
) -> OrderEnvelope:
    order = await unwrap(svc.orders.update_status(order_id, body.status, actor))
    return OrderEnvelope.from_domain(order)


__all__ = ("router",)
