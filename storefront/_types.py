"""
Core types for storefront.

Re-exports from kungfu + shared aliases used by every service.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail."""

# ═══════════════════════════════════════════════════════════════════════════════
# Identity & Time
# ═══════════════════════════════════════════════════════════════════════════════

type EntityId = str
"""32-char hex identifier shared by users, products, carts, orders."""


def new_id() -> EntityId:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Naive UTC timestamp, the only form stored in the database."""
    return datetime.now(UTC).replace(tzinfo=None)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Aliases
    "Lazy",
    "EntityId",
    # Helpers
    "new_id",
    "utcnow",
)
