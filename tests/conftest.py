"""Pytest fixtures for storefront tests."""

from datetime import timedelta

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from storefront import db
from storefront.accounts import AccountService, Identity, Registration, Role, TokenCodec
from storefront.api import create_app
from storefront.cart import CartService
from storefront.catalog import CatalogService, ProductDraft, StockLedger
from storefront.config import Settings
from storefront.orders import Checkout, OrderLifecycle

from support import ADMIN_KEY, TEST_SECRET, Shop, ok


@pytest.fixture
def db_url(tmp_path):
    """A fresh file-backed SQLite database per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}"


# ═══════════════════════════════════════════════════════════════════════════════
# Service level
# ═══════════════════════════════════════════════════════════════════════════════


@pytest_asyncio.fixture
async def session_factory(db_url):
    factory, engine = await db.create_database(db_url)
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest.fixture
def accounts(session_factory):
    return AccountService(
        session_factory,
        TokenCodec(TEST_SECRET, timedelta(hours=1)),
        admin_signup_key=ADMIN_KEY,
        bcrypt_rounds=4,
    )


@pytest.fixture
def catalog(session_factory):
    return CatalogService(session_factory)


@pytest.fixture
def carts(session_factory):
    return CartService(session_factory)


@pytest.fixture
def ledger():
    return StockLedger()


@pytest.fixture
def checkout(session_factory, ledger):
    return Checkout(session_factory, ledger)


@pytest.fixture
def lifecycle(session_factory, ledger):
    return OrderLifecycle(session_factory, ledger)


@pytest.fixture
def make_user(accounts):
    """Register a user and return its Identity."""
    counter = iter(range(1_000_000))

    async def _make(role: Role = Role.CUSTOMER) -> Identity:
        n = next(counter)
        reg = Registration(
            name=f"User {n}", email=f"user{n}@example.com", password="secret123", role=role
        )
        key = ADMIN_KEY if role is Role.ADMIN else None
        session = ok(await accounts.register(reg, signup_key=key))
        return Identity(user_id=session.user.id, role=session.user.role)

    return _make


@pytest.fixture
def make_product(catalog):
    async def _make(title: str = "Widget", price: int = 1000, stock: int = 5):
        draft = ProductDraft(
            title=title, description=f"{title} description", price=price, stock=stock,
            category="general",
        )
        return ok(await catalog.create_product(draft))

    return _make


# ═══════════════════════════════════════════════════════════════════════════════
# HTTP level
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def settings(db_url):
    return Settings(
        database_url=db_url,
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        admin_signup_key=ADMIN_KEY,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def shop(client):
    return Shop(client)
