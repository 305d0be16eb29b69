"""
Catalog service: public product reads and admin product edits.
"""

from __future__ import annotations

import logging

from combinators import lift as L
from kungfu import Error, LazyCoroResult, Ok, Result
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront import db
from storefront._errors import Errors, ShopError
from storefront._types import EntityId
from storefront.catalog._types import Product, ProductDraft, ProductPatch
from storefront.db import ProductTable, live_products

logger = logging.getLogger(__name__)


def _validate(fields: dict[str, str | int]) -> ShopError | None:
    for name in ("price", "stock"):
        value = fields.get(name)
        if isinstance(value, int) and value < 0:
            return Errors.validation(f"{name}: must be non-negative")
    for name in ("title", "description", "category"):
        value = fields.get(name)
        if isinstance(value, str) and not value.strip():
            return Errors.validation(f"{name}: must not be empty")
    return None


async def load_live(session: AsyncSession, product_id: EntityId) -> ProductTable | None:
    return (
        await session.execute(
            select(ProductTable).where(ProductTable.id == product_id, live_products())
        )
    ).scalar_one_or_none()


class CatalogService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session = session_factory

    # ───────────────────────────────────────────────────────────────────────────
    # Reads
    # ───────────────────────────────────────────────────────────────────────────

    def list_products(self) -> LazyCoroResult[list[Product], ShopError]:
        async def work(session: AsyncSession) -> Result[list[Product], ShopError]:
            rows = (
                await session.execute(
                    select(ProductTable).where(live_products()).order_by(ProductTable.created_at)
                )
            ).scalars()
            return Ok([Product.from_row(r) for r in rows])

        return db.read(self._session, work)

    def get_product(self, product_id: EntityId) -> LazyCoroResult[Product, ShopError]:
        async def work(session: AsyncSession) -> Result[Product, ShopError]:
            row = await load_live(session, product_id)
            if row is None:
                return Error(Errors.product_not_found())
            return Ok(Product.from_row(row))

        return db.read(self._session, work)

    # ───────────────────────────────────────────────────────────────────────────
    # Admin edits
    # ───────────────────────────────────────────────────────────────────────────

    def create_product(self, draft: ProductDraft) -> LazyCoroResult[Product, ShopError]:
        fields: dict[str, str | int] = {
            "title": draft.title,
            "description": draft.description,
            "price": draft.price,
            "stock": draft.stock,
            "category": draft.category,
        }
        if (problem := _validate(fields)) is not None:
            return L.fail(problem)

        async def work(session: AsyncSession) -> Result[Product, ShopError]:
            row = ProductTable(**fields)
            session.add(row)
            await session.flush()
            logger.info("Product %s created: %s", row.id, row.title)
            return Ok(Product.from_row(row))

        return db.transaction(self._session, work)

    def update_product(
        self, product_id: EntityId, patch: ProductPatch
    ) -> LazyCoroResult[Product, ShopError]:
        changes = patch.changes()
        if (problem := _validate(changes)) is not None:
            return L.fail(problem)

        async def work(session: AsyncSession) -> Result[Product, ShopError]:
            row = await load_live(session, product_id)
            if row is None:
                return Error(Errors.product_not_found())
            for name, value in changes.items():
                setattr(row, name, value)
            await session.flush()
            await session.refresh(row)
            return Ok(Product.from_row(row))

        return db.transaction(self._session, work)

    def delete_product(self, product_id: EntityId) -> LazyCoroResult[None, ShopError]:
        """Soft delete: the row stays for order history, every lookup skips it."""

        async def work(session: AsyncSession) -> Result[None, ShopError]:
            row = await load_live(session, product_id)
            if row is None:
                return Error(Errors.product_not_found())
            row.is_deleted = True
            logger.info("Product %s soft-deleted", product_id)
            return Ok(None)

        return db.transaction(self._session, work)


__all__ = ("CatalogService", "load_live")
