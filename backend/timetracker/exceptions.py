"""
TimeTracker Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the failure modes of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       RFC 7807 problem responses with the right status code.
Who:   Raised by routes, security dependencies and middleware.

Services never raise for expected outcomes: a missing record is returned
as None and the route converts it into NotFoundError. Only unexpected
faults travel up as arbitrary exceptions.

Exception Hierarchy:
    TimeTrackerError (base)          → 500
    ├── ValidationError              → 400 Bad Request
    ├── AuthenticationError          → 401 Unauthorized
    │   └── MissingTokenError        → 401 (no bearer header at all)
    ├── AuthorizationError           → 403 Forbidden
    ├── NotFoundError                → 404 Not Found
    ├── RateLimitExceededError       → 429 Too Many Requests
    ├── ConfigurationError           → 500 (tokens requested without keys)
    └── DatabaseError                → 500
"""

from typing import Any, Dict, List, Optional


class TimeTrackerError(Exception):
    """
    Base exception for all TimeTracker application errors.

    Attributes:
        message:  Description safe to return in an API response
        context:  Extra debug info (logged, not returned to the client)
    """

    status_code = 500
    title = "Internal Server Error"
    slug = "internal-server-error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TimeTrackerError):
    """
    Raised when client input fails validation.

    `errors` holds field-level messages as {"field": ..., "message": ...}
    dicts and is returned to the client verbatim.
    """

    status_code = 400
    title = "Validation failed"
    slug = "validation-error"

    def __init__(
        self,
        message: str = "One or more fields are invalid",
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = errors or []


class AuthenticationError(TimeTrackerError):
    """Bearer token is missing, malformed, expired or signed with another key."""

    status_code = 401
    title = "Unauthorized"
    slug = "unauthorized"

    def __init__(
        self,
        message: str = "A valid bearer token is required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MissingTokenError(AuthenticationError):
    """No Authorization header, or one that is not a bearer credential."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Authorization header with a bearer token is required", context=context)


class AuthorizationError(TimeTrackerError):
    """Token is valid but lacks the role the operation needs."""

    status_code = 403
    title = "Forbidden"
    slug = "forbidden"

    def __init__(
        self,
        required_role: str = "admin",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["required_role"] = required_role
        super().__init__(
            message=f"This operation requires the '{required_role}' role",
            context=ctx,
        )
        self.required_role = required_role


class NotFoundError(TimeTrackerError):
    """
    Raised when a requested resource, or a resource it references, does not exist.

    Routes raise this when a service returns None.
    """

    status_code = 404
    title = "Not Found"
    slug = "not-found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class RateLimitExceededError(TimeTrackerError):
    """
    Raised when a bearer token is reused inside the cooldown window.

    retry_after: whole seconds until the token is admitted again
    """

    status_code = 429
    title = "Limit reached"
    slug = "limit-reached"

    def __init__(
        self,
        retry_after: int = 5,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message="Token limit reached, operation cancelled", context=ctx)
        self.retry_after = retry_after


class ConfigurationError(TimeTrackerError):
    """Required configuration (token issuer or key) is missing."""

    def __init__(
        self,
        message: str = "The server is not configured to handle tokens",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(TimeTrackerError):
    """
    Raised when the database cannot be reached at startup.

    The message returned to clients is always generic; details are logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
