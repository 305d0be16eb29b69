"""
Accounts: users, roles, credentials and fraud state.

    from storefront import accounts

    svc = accounts.AccountService(session_factory, accounts.TokenCodec(secret, lifetime))
    identity = await svc.identify(token)
"""

from storefront.accounts._types import (
    Role,
    CANCELLATION_LIMIT,
    FraudState,
    User,
    Identity,
    Registration,
    Session,
)
from storefront.accounts._credentials import (
    BCRYPT_ROUNDS,
    MAX_PASSWORD_BYTES,
    hash_password,
    verify_password,
    TokenCodec,
)
from storefront.accounts._service import AccountService, load_user, SUSPENDED_AT_LOGIN

__all__ = (
    # Types
    "Role",
    "CANCELLATION_LIMIT",
    "FraudState",
    "User",
    "Identity",
    "Registration",
    "Session",
    # Credentials
    "BCRYPT_ROUNDS",
    "MAX_PASSWORD_BYTES",
    "hash_password",
    "verify_password",
    "TokenCodec",
    # Service
    "AccountService",
    "load_user",
    "SUSPENDED_AT_LOGIN",
)
