"""
Request dependencies: the service container and the verified actor.

    @router.get("/orders")
    async def list_orders(actor: CurrentUser, svc: AppServices): ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront._errors import Errors
from storefront.accounts import AccountService, Identity, Role
from storefront.api._errors import ApiError, unwrap
from storefront.cart import CartService
from storefront.catalog import CatalogService
from storefront.orders import Checkout, OrderLifecycle


@dataclass(frozen=True, slots=True)
class Services:
    accounts: AccountService
    catalog: CatalogService
    cart: CartService
    checkout: Checkout
    orders: OrderLifecycle


def get_services(request: Request) -> Services:
    return request.app.state.services


AppServices = Annotated[Services, Depends(get_services)]

bearer = HTTPBearer(auto_error=False)


async def current_identity(
    svc: AppServices,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> Identity:
    """401 without a valid token; 403 for blocked accounts."""
    if credentials is None:
        raise ApiError(Errors.unauthenticated())
    return await unwrap(svc.accounts.identify(credentials.credentials))


CurrentUser = Annotated[Identity, Depends(current_identity)]


def require_role(*roles: Role):
    allowed = frozenset(roles)

    async def dependency(actor: CurrentUser) -> Identity:
        if actor.role not in allowed:
            raise ApiError(
                Errors.not_authorized("You do not have permission to perform this action")
            )
        return actor

    return dependency


AdminUser = Annotated[Identity, Depends(require_role(Role.ADMIN))]
CustomerUser = Annotated[Identity, Depends(require_role(Role.CUSTOMER))]


__all__ = (
    "Services",
    "get_services",
    "AppServices",
    "current_identity",
    "CurrentUser",
    "require_role",
    "AdminUser",
    "CustomerUser",
)
