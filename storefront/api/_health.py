"""Health check."""

from __future__ import annotations

from fastapi import APIRouter

from storefront.api._schemas import MessageOut

router = APIRouter(tags=["health"])


@router.get("/", response_model=MessageOut)
async def health() -> MessageOut:
    return MessageOut(message="Storefront API is running")


__all__ = ("router",)
