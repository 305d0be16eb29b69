"""
Order lifecycle: status transitions, cancellation policy, fraud penalty.

Two ways into Cancelled:

    cancel_order   owner or admin; customers limited to Pending orders inside
                   the cancellation window; owner cancellations feed FraudState
    update_status  admin only; Pending -> Cancelled restocks, never penalizes

Both restock every line item in the same transaction as the status change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from kungfu import Error, LazyCoroResult, Ok, Result
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront import db
from storefront._errors import Errors, ShopError
from storefront._types import EntityId, utcnow
from storefront.accounts import CANCELLATION_LIMIT, FraudState, Identity, load_user
from storefront.catalog import StockLedger
from storefront.db import OrderTable
from storefront.orders._types import (
    CancelOutcome,
    Order,
    OrderStatus,
    check_transition,
)

logger = logging.getLogger(__name__)

CANCELLATION_WINDOW = timedelta(hours=1)


async def load_order(
    session: AsyncSession, order_id: EntityId, *, for_update: bool = False
) -> OrderTable | None:
    stmt = select(OrderTable).where(OrderTable.id == order_id)
    if for_update:
        stmt = stmt.with_for_update()
    return (await session.execute(stmt)).scalar_one_or_none()


class OrderLifecycle:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        ledger: StockLedger | None = None,
        *,
        cancellation_window: timedelta = CANCELLATION_WINDOW,
        cancellation_limit: int = CANCELLATION_LIMIT,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session = session_factory
        self._ledger = ledger or StockLedger()
        self._window = cancellation_window
        self._limit = cancellation_limit
        self._clock = clock

    # ───────────────────────────────────────────────────────────────────────────
    # Reads
    # ───────────────────────────────────────────────────────────────────────────

    def list_orders(self, user_id: EntityId) -> LazyCoroResult[list[Order], ShopError]:
        """The user's orders, newest first."""

        async def work(session: AsyncSession) -> Result[list[Order], ShopError]:
            rows = (
                await session.execute(
                    select(OrderTable)
                    .where(OrderTable.user_id == user_id)
                    .order_by(OrderTable.created_at.desc(), OrderTable.id.desc())
                )
            ).scalars()
            return Ok([Order.from_row(r) for r in rows])

        return db.read(self._session, work)

    def get_order(self, order_id: EntityId, actor: Identity) -> LazyCoroResult[Order, ShopError]:
        async def work(session: AsyncSession) -> Result[Order, ShopError]:
            row = await load_order(session, order_id)
            if row is None:
                return Error(Errors.order_not_found())
            if row.user_id != actor.user_id and not actor.is_admin:
                return Error(Errors.not_authorized())
            return Ok(Order.from_row(row))

        return db.read(self._session, work)

    # ───────────────────────────────────────────────────────────────────────────
    # Cancellation
    # ───────────────────────────────────────────────────────────────────────────

    def cancel_order(
        self, order_id: EntityId, actor: Identity
    ) -> LazyCoroResult[CancelOutcome, ShopError]:
        return db.transaction(self._session, lambda session: self._cancel(session, order_id, actor))

    async def _cancel(
        self, session: AsyncSession, order_id: EntityId, actor: Identity
    ) -> Result[CancelOutcome, ShopError]:
        row = await load_order(session, order_id, for_update=True)
        if row is None:
            return Error(Errors.order_not_found())

        is_owner = row.user_id == actor.user_id
        if not is_owner and not actor.is_admin:
            return Error(Errors.not_authorized())

        status = OrderStatus(row.status)
        if status is OrderStatus.CANCELLED:
            return Error(Errors.already_cancelled())
        if status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            return Error(Errors.not_cancellable())

        # only Pending remains at this point; admins skip the window
        now = self._clock()
        if not actor.is_admin and now - row.created_at > self._window:
            return Error(
                Errors.cancellation_window_expired(int(self._window.total_seconds() // 60))
            )

        match check_transition(status, OrderStatus.CANCELLED):
            case Error(e):
                return Error(e)
            case Ok(_):
                pass

        await self._restock(session, row)
        row.status = OrderStatus.CANCELLED.value

        suspended = False
        if is_owner:
            suspended = await self._penalize(session, row.user_id, now)

        await session.flush()
        logger.info(
            "Order %s cancelled by %s %s", order_id, actor.role.value, actor.user_id
        )
        return Ok(CancelOutcome(order=Order.from_row(row), account_suspended=suspended))

    async def _penalize(self, session: AsyncSession, user_id: EntityId, at: datetime) -> bool:
        """Record an owner cancellation. Returns whether the account is now blocked."""
        user = await load_user(session, user_id, for_update=True)
        if user is None:
            return False
        before = FraudState.of(user)
        after = before.record_cancellation(at, limit=self._limit)
        after.apply_to(user)
        if after.is_blocked and not before.is_blocked:
            logger.warning(
                "User %s suspended after %d cancellations", user_id, after.cancellation_count
            )
        return after.is_blocked

    # ───────────────────────────────────────────────────────────────────────────
    # Admin status changes
    # ───────────────────────────────────────────────────────────────────────────

    def update_status(
        self, order_id: EntityId, target: OrderStatus, actor: Identity
    ) -> LazyCoroResult[Order, ShopError]:
        return db.transaction(
            self._session, lambda session: self._update(session, order_id, target, actor)
        )

    async def _update(
        self,
        session: AsyncSession,
        order_id: EntityId,
        target: OrderStatus,
        actor: Identity,
    ) -> Result[Order, ShopError]:
        if not actor.is_admin:
            return Error(Errors.not_authorized("You do not have permission to perform this action"))

        row = await load_order(session, order_id, for_update=True)
        if row is None:
            return Error(Errors.order_not_found())

        current = OrderStatus(row.status)
        match check_transition(current, target):
            case Error(e):
                return Error(e)
            case Ok(_):
                pass

        if target is OrderStatus.CANCELLED:
            await self._restock(session, row)
        row.status = target.value
        await session.flush()

        logger.info("Order %s: %s -> %s", order_id, current.value, target.value)
        return Ok(Order.from_row(row))

    # ───────────────────────────────────────────────────────────────────────────
    # Helpers
    # ───────────────────────────────────────────────────────────────────────────

    async def _restock(self, session: AsyncSession, row: OrderTable) -> None:
        for item in Order.from_row(row).items:
            await self._ledger.restock(session, item.product_id, item.quantity)


__all__ = ("OrderLifecycle", "CANCELLATION_WINDOW")
