"""
Account service: registration, login and request identity.
"""

from __future__ import annotations

import hmac
import logging

from kungfu import Error, LazyCoroResult, Ok, Result
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront import db
from storefront._errors import Errors, ShopError
from storefront._types import EntityId
from storefront.accounts._credentials import (
    BCRYPT_ROUNDS,
    MAX_PASSWORD_BYTES,
    TokenCodec,
    hash_password,
    verify_password,
)
from storefront.accounts._types import Identity, Registration, Role, Session, User
from storefront.db import UserTable

logger = logging.getLogger(__name__)

SUSPENDED_AT_LOGIN = (
    "Your account has been suspended due to suspicious activity. Please contact support."
)


async def load_user(
    session: AsyncSession, user_id: EntityId, *, for_update: bool = False
) -> UserTable | None:
    stmt = select(UserTable).where(UserTable.id == user_id)
    if for_update:
        stmt = stmt.with_for_update()
    return (await session.execute(stmt)).scalar_one_or_none()


class AccountService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        tokens: TokenCodec,
        *,
        admin_signup_key: str | None = None,
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ) -> None:
        self._session = session_factory
        self._tokens = tokens
        self._admin_signup_key = admin_signup_key
        self._bcrypt_rounds = bcrypt_rounds

    def _admin_key_ok(self, presented: str | None) -> bool:
        if not self._admin_signup_key or presented is None:
            return False
        return hmac.compare_digest(presented, self._admin_signup_key)

    def register(
        self, reg: Registration, *, signup_key: str | None = None
    ) -> LazyCoroResult[Session, ShopError]:
        async def work(session: AsyncSession) -> Result[Session, ShopError]:
            if reg.role is Role.ADMIN and not self._admin_key_ok(signup_key):
                return Error(Errors.not_authorized("Admin registration requires a valid signup key"))
            if len(reg.password.encode()) > MAX_PASSWORD_BYTES:
                return Error(
                    Errors.validation(f"password: must be at most {MAX_PASSWORD_BYTES} bytes")
                )

            email = reg.email.strip().lower()
            taken = (
                await session.execute(select(UserTable.id).where(UserTable.email == email))
            ).scalar_one_or_none()
            if taken is not None:
                return Error(Errors.duplicate("email"))

            row = UserTable(
                name=reg.name.strip(),
                email=email,
                password_hash=await hash_password(reg.password, rounds=self._bcrypt_rounds),
                role=reg.role.value,
            )
            session.add(row)
            try:
                await session.flush()
            except IntegrityError:
                # lost a race with a concurrent registration of the same email
                return Error(Errors.duplicate("email"))

            logger.info("Registered %s user %s", reg.role.value, row.id)
            return Ok(Session(token=self._tokens.issue(row.id), user=User.from_row(row)))

        return db.transaction(self._session, work)

    def login(self, email: str, password: str) -> LazyCoroResult[Session, ShopError]:
        async def work(session: AsyncSession) -> Result[Session, ShopError]:
            row = (
                await session.execute(
                    select(UserTable).where(UserTable.email == email.strip().lower())
                )
            ).scalar_one_or_none()
            if row is None or not await verify_password(password, row.password_hash):
                return Error(Errors.unauthenticated("Incorrect email or password"))
            if row.is_blocked:
                logger.warning("Blocked user %s attempted login", row.id)
                return Error(Errors.account_blocked(SUSPENDED_AT_LOGIN))
            return Ok(Session(token=self._tokens.issue(row.id), user=User.from_row(row)))

        return db.read(self._session, work)

    def identify(self, token: str) -> LazyCoroResult[Identity, ShopError]:
        """Resolve a bearer token. Blocked accounts are refused on every request."""

        async def work(session: AsyncSession) -> Result[Identity, ShopError]:
            user_id = self._tokens.subject(token)
            if user_id is None:
                return Error(Errors.unauthenticated())
            row = await load_user(session, user_id)
            if row is None:
                return Error(Errors.unauthenticated())
            if row.is_blocked:
                return Error(Errors.account_blocked())
            return Ok(Identity(user_id=row.id, role=Role(row.role)))

        return db.read(self._session, work)

    def get_user(self, user_id: EntityId) -> LazyCoroResult[User, ShopError]:
        async def work(session: AsyncSession) -> Result[User, ShopError]:
            row = await load_user(session, user_id)
            if row is None:
                return Error(Errors.unauthenticated())
            return Ok(User.from_row(row))

        return db.read(self._session, work)


__all__ = ("AccountService", "load_user", "SUSPENDED_AT_LOGIN")
