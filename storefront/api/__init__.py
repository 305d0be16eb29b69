"""
HTTP surface for storefront (FastAPI).

    from storefront.api import create_app
    from storefront.config import Settings

    app = create_app(Settings(jwt_secret="a-long-random-secret"))

Routes return the {"status": "success", "data": ...} envelope; failures go
through ApiError and the handlers in _errors.
"""

from storefront.api._app import create_app, build_services, SECURITY_HEADERS
from storefront.api._deps import (
    Services,
    AppServices,
    CurrentUser,
    AdminUser,
    CustomerUser,
    require_role,
)
from storefront.api._errors import ApiError, ERROR_STATUS_CODES, unwrap

__all__ = (
    # App
    "create_app",
    "build_services",
    "SECURITY_HEADERS",
    # Dependencies
    "Services",
    "AppServices",
    "CurrentUser",
    "AdminUser",
    "CustomerUser",
    "require_role",
    # Errors
    "ApiError",
    "ERROR_STATUS_CODES",
    "unwrap",
)
