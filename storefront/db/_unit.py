"""
Unit of work: run a Result-returning function inside one transaction.

    placed = await transaction(session_factory, lambda s: place(s, user_id))

Ok commits. Error rolls back. An exception or task cancellation closes the
session without committing, which rolls back as well.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from kungfu import Error, LazyCoroResult, Ok, Result
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

type Work[T, E] = Callable[[AsyncSession], Awaitable[Result[T, E]]]


def transaction[T, E](
    session_factory: async_sessionmaker[AsyncSession],
    work: Work[T, E],
) -> LazyCoroResult[T, E]:
    async def _run() -> Result[T, E]:
        async with session_factory() as session:
            result = await work(session)
            match result:
                case Ok(_):
                    await session.commit()
                case Error(_):
                    await session.rollback()
            return result

    return LazyCoroResult(_run)


def read[T, E](
    session_factory: async_sessionmaker[AsyncSession],
    work: Work[T, E],
) -> LazyCoroResult[T, E]:
    """Read-only variant: never commits."""

    async def _run() -> Result[T, E]:
        async with session_factory() as session:
            return await work(session)

    return LazyCoroResult(_run)


__all__ = ("Work", "transaction", "read")
