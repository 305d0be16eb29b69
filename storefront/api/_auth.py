"""
Auth routes: registration, login and the current user.

Admin registration needs the X-Admin-Signup-Key header to match the
configured key; without a configured key nobody can register as admin.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Header

from storefront.api._deps import AppServices, CurrentUser
from storefront.api._errors import unwrap
from storefront.api._schemas import LoginIn, RegisterIn, SessionOut, UserEnvelope

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=SessionOut, status_code=201)
async def register(
    body: RegisterIn,
    svc: AppServices,
    x_admin_signup_key: Annotated[str | None, Header()] = None,
) -> SessionOut:
    session = await unwrap(
        svc.accounts.register(body.to_domain(), signup_key=x_admin_signup_key)
    )
    return SessionOut.from_domain(session)


@router.post("/login", response_model=SessionOut)
async def login(body: LoginIn, svc: AppServices) -> SessionOut:
    return SessionOut.from_domain(await unwrap(svc.accounts.login(body.email, body.password)))


@router.get("/me", response_model=UserEnvelope)
async def me(actor: CurrentUser, svc: AppServices) -> UserEnvelope:
    return UserEnvelope.from_domain(await unwrap(svc.accounts.get_user(actor.user_id)))


__all__ = ("router",)
