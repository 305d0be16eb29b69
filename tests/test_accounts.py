"""Tests for registration, login, tokens and identity."""

from datetime import timedelta

import pytest

from storefront import ErrorKind
from storefront.accounts import (
    MAX_PASSWORD_BYTES,
    Registration,
    Role,
    TokenCodec,
    hash_password,
    verify_password,
)

from support import ADMIN_KEY, TEST_SECRET, err, ok


def reg(email="ada@example.com", role=Role.CUSTOMER):
    return Registration(name="Ada", email=email, password="secret123", role=role)


@pytest.mark.asyncio
async def test_register_and_login(accounts):
    session = ok(await accounts.register(reg(email="Ada@Example.com")))
    assert session.user.email == "ada@example.com"
    assert session.user.role is Role.CUSTOMER
    assert session.token

    again = ok(await accounts.login("ADA@example.com", "secret123"))
    assert again.user.id == session.user.id


@pytest.mark.asyncio
async def test_duplicate_email(accounts):
    ok(await accounts.register(reg()))
    e = err(await accounts.register(reg()), ErrorKind.DUPLICATE_VALUE)
    assert e.message == "Duplicate value for: email"


@pytest.mark.asyncio
async def test_bad_credentials(accounts):
    ok(await accounts.register(reg()))
    err(await accounts.login("ada@example.com", "wrong-pass"), ErrorKind.UNAUTHENTICATED)
    err(await accounts.login("nobody@example.com", "secret123"), ErrorKind.UNAUTHENTICATED)


@pytest.mark.asyncio
async def test_password_limit_is_in_bytes(accounts):
    long_reg = Registration(
        name="Ada", email="ada@example.com", password="\u00e9" * 40, role=Role.CUSTOMER
    )
    e = err(await accounts.register(long_reg), ErrorKind.VALIDATION)
    assert "password" in e.message

    ok(await accounts.register(reg()))
    err(await accounts.login("ada@example.com", "x" * 100), ErrorKind.UNAUTHENTICATED)


@pytest.mark.asyncio
async def test_verify_password_refuses_overlong_input():
    digest = await hash_password("a" * MAX_PASSWORD_BYTES, rounds=4)
    assert await verify_password("a" * MAX_PASSWORD_BYTES, digest)
    assert not await verify_password("a" * (MAX_PASSWORD_BYTES + 1), digest)


@pytest.mark.asyncio
async def test_get_user(accounts):
    session = ok(await accounts.register(reg()))
    user = ok(await accounts.get_user(session.user.id))
    assert user.email == "ada@example.com"
    err(await accounts.get_user("f" * 32), ErrorKind.UNAUTHENTICATED)


@pytest.mark.asyncio
async def test_admin_registration_needs_key(accounts):
    err(await accounts.register(reg(role=Role.ADMIN)), ErrorKind.NOT_AUTHORIZED)
    err(
        await accounts.register(reg(role=Role.ADMIN), signup_key="guess"),
        ErrorKind.NOT_AUTHORIZED,
    )
    session = ok(await accounts.register(reg(role=Role.ADMIN), signup_key=ADMIN_KEY))
    assert session.user.role is Role.ADMIN


@pytest.mark.asyncio
async def test_identify(accounts):
    session = ok(await accounts.register(reg()))
    identity = ok(await accounts.identify(session.token))
    assert identity.user_id == session.user.id
    assert not identity.is_admin

    err(await accounts.identify("not-a-token"), ErrorKind.UNAUTHENTICATED)


@pytest.mark.asyncio
async def test_identify_rejects_foreign_and_expired_tokens(accounts):
    session = ok(await accounts.register(reg()))

    foreign = TokenCodec("another-secret-that-is-long-enough-too", timedelta(hours=1)).issue(session.user.id)
    err(await accounts.identify(foreign), ErrorKind.UNAUTHENTICATED)

    expired = TokenCodec(TEST_SECRET, timedelta(seconds=-10)).issue(session.user.id)
    err(await accounts.identify(expired), ErrorKind.UNAUTHENTICATED)


def test_token_roundtrip():
    codec = TokenCodec(TEST_SECRET, timedelta(minutes=5))
    assert codec.subject(codec.issue("abc123")) == "abc123"
    assert codec.subject("garbage") is None
