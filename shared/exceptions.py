"""
Error taxonomy for the order service.

Workflow errors carry the HTTP status and error code they map to, so the API
layer needs a single handler. Client-level signals (UserNotFound,
DependencyUnavailable) are raised by the user directory client and translated
by the workflow.
"""

from typing import Optional


class OrderServiceError(Exception):
    """Base class for errors surfaced to API clients."""
    status_code: int = 500
    code: str = "internalError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "code": self.code}


class ValidationError(OrderServiceError):
    """Client input is malformed. Detected before any external call."""
    status_code = 400
    code = "invalidOrder"


class NotFoundError(OrderServiceError):
    """No order exists with the requested id."""
    status_code = 404
    code = "orderNotFound"


class ReferenceNotFoundError(NotFoundError):
    """The order references a user that does not exist."""
    code = "nonExisting"


class DependencyError(OrderServiceError):
    """The user service is unreachable or answered with an error."""
    status_code = 502
    code = "dependencyUnavailable"


class InternalError(OrderServiceError):
    """Persisting the order failed."""
    status_code = 500
    code = "internalError"


# =============================================================================
# User Directory Signals
# =============================================================================

class UserNotFound(Exception):
    """The user service answered 404 for the requested user."""

    def __init__(self, user_id: int, message: Optional[str] = None, code: Optional[str] = None):
        super().__init__(message or f"User not found: {user_id}")
        self.user_id = user_id
        self.code = code


class DependencyUnavailable(Exception):
    """Network error, timeout, or unexpected response from the user service."""
