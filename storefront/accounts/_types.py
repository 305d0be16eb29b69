"""
Account types: roles, the fraud-tracking value object, users and identities.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from storefront._types import EntityId
from storefront.db import UserTable


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


# ═══════════════════════════════════════════════════════════════════════════════
# Fraud State: value object owned by the user aggregate
# ═══════════════════════════════════════════════════════════════════════════════

CANCELLATION_LIMIT = 3
"""More owner cancellations than this suspends the account."""


@dataclass(frozen=True, slots=True)
class FraudState:
    """
    Cancellation counter and suspension flag.

    Only derived and persisted inside the cancellation transaction, after the
    user row has been loaded for update.
    """

    cancellation_count: int = 0
    last_cancellation_at: datetime | None = None
    is_blocked: bool = False

    def record_cancellation(
        self, at: datetime, *, limit: int = CANCELLATION_LIMIT
    ) -> FraudState:
        count = self.cancellation_count + 1
        return replace(
            self,
            cancellation_count=count,
            last_cancellation_at=at,
            is_blocked=self.is_blocked or count > limit,
        )

    @classmethod
    def of(cls, row: UserTable) -> FraudState:
        return cls(
            cancellation_count=row.cancellation_count,
            last_cancellation_at=row.last_cancellation_at,
            is_blocked=row.is_blocked,
        )

    def apply_to(self, row: UserTable) -> None:
        row.cancellation_count = self.cancellation_count
        row.last_cancellation_at = self.last_cancellation_at
        row.is_blocked = self.is_blocked


# ═══════════════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class User:
    id: EntityId
    name: str
    email: str
    role: Role
    fraud: FraudState
    created_at: datetime

    @classmethod
    def from_row(cls, row: UserTable) -> User:
        return cls(
            id=row.id,
            name=row.name,
            email=row.email,
            role=Role(row.role),
            fraud=FraudState.of(row),
            created_at=row.created_at,
        )


@dataclass(frozen=True, slots=True)
class Identity:
    """The verified actor attached to a request."""

    user_id: EntityId
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True, slots=True)
class Registration:
    name: str
    email: str
    password: str
    role: Role = Role.CUSTOMER


@dataclass(frozen=True, slots=True)
class Session:
    """A login result: the bearer token plus the user it belongs to."""

    token: str
    user: User


__all__ = (
    "Role",
    "CANCELLATION_LIMIT",
    "FraudState",
    "User",
    "Identity",
    "Registration",
    "Session",
)
