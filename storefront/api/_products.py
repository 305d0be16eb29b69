"""Product routes: public reads, admin writes."""

from __future__ import annotations

from fastapi import APIRouter, Response

from storefront.api._deps import AdminUser, AppServices
from storefront.api._errors import unwrap
from storefront.api._schemas import (
    ProductEnvelope,
    ProductIn,
    ProductListEnvelope,
    ProductPatchIn,
)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListEnvelope)
async def list_products(svc: AppServices) -> ProductListEnvelope:
    return ProductListEnvelope.from_domain(await unwrap(svc.catalog.list_products()))


@router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(product_id: str, svc: AppServices) -> ProductEnvelope:
    return ProductEnvelope.from_domain(await unwrap(svc.catalog.get_product(product_id)))


@router.post("", response_model=ProductEnvelope, status_code=201)
async def create_product(body: ProductIn, _admin: AdminUser, svc: AppServices) -> ProductEnvelope:
    return ProductEnvelope.from_domain(await unwrap(svc.catalog.create_product(body.to_domain())))


@router.put("/{product_id}", response_model=ProductEnvelope)
async def update_product(
    product_id: str, body: ProductPatchIn, _admin: AdminUser, svc: AppServices
) -> ProductEnvelope:
    product = await unwrap(svc.catalog.update_product(product_id, body.to_domain()))
    return ProductEnvelope.from_domain(product)


@router.delete("/{product_id}", status_code=204, response_class=Response)
async def delete_product(product_id: str, _admin: AdminUser, svc: AppServices) -> Response:
    await unwrap(svc.catalog.delete_product(product_id))
    return Response(status_code=204)


__all__ = ("router",)
