"""Middleware components.

This package provides middleware for error handling and rate limiting, and
the authentication dependencies used by the route handlers.
"""

from complyflow.middleware.authentication_middleware import (
    AuthenticatedUser,
    JWTAuth,
    require_service_role,
    require_user,
)
from complyflow.middleware.authorization_middleware import (
    OrganizationContext,
    require_org_member,
)
from complyflow.middleware.error_handler_middleware import (
    ErrorHandlerMiddleware,
    register_exception_handlers,
)
from complyflow.middleware.rate_limiting_middleware import RateLimitMiddleware

__all__ = [
    "AuthenticatedUser",
    "ErrorHandlerMiddleware",
    "JWTAuth",
    "OrganizationContext",
    "RateLimitMiddleware",
    "register_exception_handlers",
    "require_org_member",
    "require_service_role",
    "require_user",
]
