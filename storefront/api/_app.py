"""
Application factory.

    settings = Settings(database_url="sqlite+aiosqlite:///./shop.db", jwt_secret="a-long-random-secret")
    app = create_app(settings)

The lifespan opens the database, builds the services on app.state and
disposes of the engine on shutdown. Every route lives under /api.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__, db
from storefront.accounts import AccountService, TokenCodec
from storefront.api import _auth, _cart, _health, _orders, _products
from storefront.api._deps import Services
from storefront.api._errors import install_error_handlers
from storefront.cart import CartService
from storefront.catalog import CatalogService, StockLedger
from storefront.config import Settings, get_settings
from storefront.orders import Checkout, OrderLifecycle

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("storefront.access")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def build_services(session_factory, settings: Settings) -> Services:
    ledger = StockLedger()
    return Services(
        accounts=AccountService(
            session_factory,
            TokenCodec(settings.jwt_secret, settings.jwt_lifetime),
            admin_signup_key=settings.admin_signup_key,
            bcrypt_rounds=settings.bcrypt_rounds,
        ),
        catalog=CatalogService(session_factory),
        cart=CartService(session_factory),
        checkout=Checkout(session_factory, ledger),
        orders=OrderLifecycle(
            session_factory,
            ledger,
            cancellation_window=settings.cancellation_window,
            cancellation_limit=settings.cancellation_limit,
        ),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        session_factory, engine = await db.create_database(
            settings.database_url, echo=settings.debug
        )
        app.state.session_factory = session_factory
        app.state.services = build_services(session_factory, settings)
        logger.info("Storefront %s started", __version__)
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="storefront",
        description="E-commerce backend: catalog, cart, checkout and order lifecycle",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            access_logger.info(
                "%s %s 500 %.1fms",
                request.method,
                request.url.path,
                (time.perf_counter() - started) * 1000,
            )
            raise
        access_logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    @app.middleware("http")
    async def security_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    install_error_handlers(app)

    api = APIRouter(prefix="/api")
    for module in (_health, _auth, _products, _cart, _orders):
        api.include_router(module.router)
    app.include_router(api)

    return app


__all__ = ("create_app", "build_services", "SECURITY_HEADERS")
