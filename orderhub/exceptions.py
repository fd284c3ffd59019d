"""
OrderHub — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the three failure kinds the API
       reports: validation failures, application (expected) failures, and
       unexpected server failures.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the matching JSON error shape with the right HTTP status.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    OrderHubError (base)
    ├── ValidationError          → 400  {message, issues}
    ├── AppError                 → status_code (default 400)  {message}
    │   ├── UnauthorizedError    → 401
    │   ├── ForbiddenError       → 403
    │   ├── NotFoundError        → 404
    │   └── ConflictError        → 409
    └── DatabaseError            → 500  {message} (generic)
"""

from typing import Any, Dict, List, Optional


class OrderHubError(Exception):
    """
    Base exception for all OrderHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(OrderHubError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request

    Each issue is a dict with `field`, `message` and `code`, the same
    entries produced for request body validation failures.

    Example response:
        {
            "message": "validation error:",
            "issues": [
                {"field": "email", "message": "Invalid email", "code": "invalid_string"}
            ]
        }
    """

    def __init__(
        self,
        issues: Optional[List[Dict[str, str]]] = None,
        message: str = "validation error:",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.issues = issues or []


class AppError(OrderHubError):
    """
    A deliberate, expected failure raised by application logic.

    What:    The request was well-formed but cannot be honoured
             (bad credentials, unknown resource, duplicate email...).
    HTTP:    `status_code`, 400 unless a subclass or caller says otherwise.
    Body:    {"message": "..."} only.
    """

    status_code: int = 400

    def __init__(
        self,
        message: str = "Bad request",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        if status_code is not None:
            self.status_code = status_code


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class ForbiddenError(AppError):
    """Authenticated caller lacks the role or ownership required."""

    status_code = 403

    def __init__(self, message: str = "Unauthorized", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class NotFoundError(AppError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records; services convert None into
    this exception so the handler can answer 404.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(AppError):
    """The resource already exists (e.g. duplicate email)."""

    status_code = 409


class DatabaseError(OrderHubError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    The message returned to the client is always the generic ServerError
    message; the original error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
