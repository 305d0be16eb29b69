"""
Database setup: engine, session factory, schema creation.
"""

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from storefront.db._tables import Base

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# SQLite transaction control
# ═══════════════════════════════════════════════════════════════════════════════

def _use_immediate_transactions(engine: AsyncEngine) -> None:
    """
    Open every SQLite transaction with BEGIN IMMEDIATE.

    The write lock is taken up front, so two checkouts never both hold a read
    lock and then deadlock on the upgrade; the second one waits on the busy
    timeout instead.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, _record: Any) -> None:
        # stop the driver from emitting its own deferred BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


# ═══════════════════════════════════════════════════════════════════════════════
# Database Setup
# ═══════════════════════════════════════════════════════════════════════════════

def create_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(url, echo=echo)
    if engine.dialect.name == "sqlite":
        _use_immediate_transactions(engine)
    return engine


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready on %s", engine.url.render_as_string(hide_password=True))


async def create_database(
    url: str = "sqlite+aiosqlite:///./storefront.db",
    *,
    echo: bool = False,
) -> tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """Create schema and return (session_factory, engine)."""
    engine = create_engine(url, echo=echo)
    await create_schema(engine)
    return async_sessionmaker(engine, expire_on_commit=False), engine


__all__ = (
    "create_engine",
    "create_schema",
    "create_database",
)
