"""
Shopfront Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the failure kinds a handler can hit.
How:   Each exception carries a user-facing message and an optional context
       dict. Handlers registered in `app.main.register_exception_handlers`
       turn them into JSON error responses with the right status code.
Who:   Raised by the guards in `app.guards` and by `app.auth.require_token`.

Exception Hierarchy:
    ShopfrontError (base)         → 500 Internal Server Error
    ├── NotFoundError             → 404 Not Found
    ├── ForbiddenError            → 403 Forbidden
    └── UnauthorizedError         → 401 Unauthorized

Validation failures are not part of this hierarchy: FastAPI's
RequestValidationError, pydantic's ValidationError and SQLAlchemy's
IntegrityError are mapped to 422 directly.
"""

from typing import Any, Dict, Optional


class ShopfrontError(Exception):
    """
    Base exception for all Shopfront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the
                  handler opts in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(ShopfrontError):
    """
    Raised when a requested resource does not exist.

    When:    GET /products/{id} or DELETE /favorites/{id} with an unknown id.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; `app.guards.handle_404`
    converts that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ForbiddenError(ShopfrontError):
    """
    Raised when an authenticated user acts on a resource they do not own.

    When:    PATCH/DELETE /products/{id}, DELETE /favorites/{id} by a non-owner.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"You do not own this {resource}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class UnauthorizedError(ShopfrontError):
    """
    Raised when a protected route is called without a valid bearer token.

    HTTP:    401 Unauthorized, with `WWW-Authenticate: Bearer`
    """

    def __init__(
        self,
        message: str = "A valid bearer token is required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
