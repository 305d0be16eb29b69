"""
Credentials: bcrypt password hashes and HS256 bearer tokens.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from storefront._types import EntityId


# ═══════════════════════════════════════════════════════════════════════════════
# Passwords
# ═══════════════════════════════════════════════════════════════════════════════

BCRYPT_ROUNDS = 12
# bcrypt only reads this many bytes and refuses anything longer
MAX_PASSWORD_BYTES = 72


async def hash_password(password: str, *, rounds: int = BCRYPT_ROUNDS) -> str:
    # bcrypt is CPU-bound; keep it off the event loop
    digest = await asyncio.to_thread(
        bcrypt.hashpw, password.encode(), bcrypt.gensalt(rounds=rounds)
    )
    return digest.decode()


async def verify_password(password: str, password_hash: str) -> bool:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return False
    return await asyncio.to_thread(
        bcrypt.checkpw, password.encode(), password_hash.encode()
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Tokens
# ═══════════════════════════════════════════════════════════════════════════════

ALGORITHM = "HS256"


@dataclass(frozen=True, slots=True)
class TokenCodec:
    secret: str
    lifetime: timedelta

    def issue(self, user_id: EntityId) -> str:
        now = datetime.now(UTC)
        return jwt.encode(
            {"sub": user_id, "iat": now, "exp": now + self.lifetime},
            self.secret,
            algorithm=ALGORITHM,
        )

    def subject(self, token: str) -> EntityId | None:
        """User id from a valid token, None for anything invalid or expired."""
        try:
            claims = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except jwt.PyJWTError:
            return None
        sub = claims.get("sub")
        return sub if isinstance(sub, str) else None


__all__ = (
    "BCRYPT_ROUNDS",
    "MAX_PASSWORD_BYTES",
    "hash_password",
    "verify_password",
    "TokenCodec",
)
