"""
Error mapping: ShopError -> HTTP status + failure envelope.

    {"status": "fail", "message": "...", "error_type": "EmptyCart"}

4xx answers use status "fail", 5xx use "error". Unexpected exceptions are
logged with their traceback and answered without internal detail.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from kungfu import Error, Ok, Result
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront._errors import ErrorKind, ShopError

logger = logging.getLogger(__name__)


ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.DUPLICATE_VALUE: 400,
    ErrorKind.EMPTY_CART: 400,
    ErrorKind.INSUFFICIENT_STOCK: 400,
    ErrorKind.INVALID_TRANSITION: 400,
    ErrorKind.NOT_CANCELLABLE: 400,
    ErrorKind.CANCELLATION_WINDOW_EXPIRED: 400,
    ErrorKind.ALREADY_CANCELLED: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_AUTHORIZED: 403,
    ErrorKind.ACCOUNT_BLOCKED: 403,
    ErrorKind.PRODUCT_NOT_FOUND: 404,
    ErrorKind.ORDER_NOT_FOUND: 404,
    ErrorKind.CART_NOT_FOUND: 404,
    ErrorKind.CART_ITEM_NOT_FOUND: 404,
}


class ApiError(Exception):
    """An operational failure on its way out of a route."""

    def __init__(self, error: ShopError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES.get(self.error.kind, 500)


async def unwrap[T](pending: Awaitable[Result[T, ShopError]]) -> T:
    """Await a service call; Ok yields its value, Error raises ApiError."""
    match await pending:
        case Ok(value):
            return value
        case Error(e):
            raise ApiError(e)


def failure(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "fail" if status_code < 500 else "error",
            "message": message,
            "error_type": error_type,
        },
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Handlers
# ═══════════════════════════════════════════════════════════════════════════════


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return failure(exc.status_code, exc.error.message, exc.error.kind.value)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        parts.append(f"{'.'.join(loc) or 'body'}: {err.get('msg', 'invalid')}")
    message = ", ".join(parts) or "Invalid input data"
    return failure(400, message, ErrorKind.VALIDATION.value)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return failure(404, f"Can't find {request.url.path} on this server!", "RouteNotFound")
    return failure(exc.status_code, str(exc.detail), "HTTPError")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unexpected error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return failure(500, "Something went wrong.", "InternalError")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unexpected_error_handler)


__all__ = (
    "ERROR_STATUS_CODES",
    "ApiError",
    "unwrap",
    "failure",
    "install_error_handlers",
)
